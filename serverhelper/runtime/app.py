"""Runtime composition layer for serverhelper.

Binds the maintenance operations to the state machine, resolves theme and
logging, and starts the loop inside the terminal session.
"""

from __future__ import annotations

import sys
from functools import partial
from pathlib import Path

from ..actions import PACKAGE_MANAGER, VPN_CLIENT
from ..logging_setup import get_logger, setup_logging
from ..machine import DashboardOperations, ServerHelperApp
from ..operations import (
    OperationResult,
    backup_server_roles,
    check_netbird_status,
    check_winget_status,
    install_netbird,
    install_winget,
    restore_server_roles,
)
from ..terminal import TerminalController
from ..ui_theme import resolve_theme
from .loop import RuntimeLoopTiming, run_main_loop

logger = get_logger(__name__)

_CHECKS = {
    PACKAGE_MANAGER: check_winget_status,
    VPN_CLIENT: check_netbird_status,
}
_INSTALLS = {
    PACKAGE_MANAGER: install_winget,
    VPN_CLIENT: install_netbird,
}


def check_item(item: str) -> OperationResult:
    check = _CHECKS.get(item)
    if check is None:
        return OperationResult.failed(f"Unknown item: {item}")
    return check()


def install_item(item: str) -> OperationResult:
    install = _INSTALLS.get(item)
    if install is None:
        return OperationResult.failed(f"Unknown item: {item}")
    return install()


def build_operations(backup_dir: Path) -> DashboardOperations:
    """Wire the Windows maintenance operations behind the dashboard contract."""
    return DashboardOperations(
        check=check_item,
        install=install_item,
        backup_roles=partial(backup_server_roles, backup_dir),
        restore_roles=restore_server_roles,
    )


def run_dashboard(
    backup_dir: Path,
    theme_name: str | None = None,
    no_color: bool = False,
    log_level: str | None = None,
) -> None:
    """Initialize logging and app state, then run the interactive loop."""
    log_path = setup_logging(log_level)
    logger.info("Starting dashboard (backup dir %s, log %s)", backup_dir, log_path)

    app = ServerHelperApp(build_operations(backup_dir), backup_dir)
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd=stdin_fd, stdout_fd=sys.stdout.fileno())
    run_main_loop(
        app,
        terminal,
        stdin_fd,
        theme=resolve_theme(theme_name, no_color=no_color),
        timing=RuntimeLoopTiming(),
    )
    logger.info("Dashboard closed")
