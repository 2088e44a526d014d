"""Windows-server maintenance operations driven by the dashboard.

Every operation runs synchronously, shells out through ``process`` and
reports an ``OperationResult`` instead of raising.
"""

from __future__ import annotations

from .netbird import check_netbird_status, install_netbird
from .result import OperationResult
from .roles import backup_server_roles, restore_server_roles
from .winget import check_winget_status, install_winget

__all__ = [
    "OperationResult",
    "check_winget_status",
    "install_winget",
    "check_netbird_status",
    "install_netbird",
    "backup_server_roles",
    "restore_server_roles",
]
