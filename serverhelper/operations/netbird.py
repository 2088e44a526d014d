"""NetBird VPN client status check and install.

Installation prefers winget and falls back to the official silent installer.
"""

from __future__ import annotations

import os
import subprocess
import tempfile
import time
from pathlib import Path

from ..logging_setup import get_logger
from .process import ps_quote, run_command, run_powershell
from .result import OperationResult
from .winget import check_winget_status

CHECK_TIMEOUT_SECONDS = 30.0
VERIFY_DELAY_SECONDS = 3.0
WINGET_PACKAGE_ID = "NetBird.NetBird"
DEFAULT_PROGRAM_FILES = "C:\\Program Files"
CONNECT_HINT = "To connect, run:\n  netbird up"
INSTALLER_URL = (
    "https://github.com/netbirdio/netbird/releases/latest/download/netbird_installer_windows_amd64.exe"
)
INSTALLER_FILENAME = "netbird_installer.exe"

logger = get_logger(__name__)


def installer_script(installer_path: Path) -> str:
    """Download the silent installer to ``installer_path`` and run it."""
    target = ps_quote(installer_path)
    return (
        f"Invoke-WebRequest -Uri {ps_quote(INSTALLER_URL)} -OutFile {target}; "
        f"Start-Process -FilePath {target} -ArgumentList '/S' -Wait"
    )


def default_install_path() -> Path:
    program_files = os.environ.get("ProgramFiles", DEFAULT_PROGRAM_FILES)
    return Path(program_files) / "NetBird" / "netbird.exe"


def check_netbird_status() -> OperationResult:
    """Report whether ``netbird version`` runs or the binary is installed."""
    try:
        completed = run_command(["netbird", "version"], timeout_seconds=CHECK_TIMEOUT_SECONDS)
    except (OSError, subprocess.TimeoutExpired):
        # Not on PATH; the MSI install location may still have it.
        netbird_path = default_install_path()
        if netbird_path.exists():
            return OperationResult.ok(f"NetBird is installed at: {netbird_path}")
        return OperationResult.failed("NetBird is not installed")
    if completed.returncode != 0:
        return OperationResult.failed("NetBird is not working properly")
    return OperationResult.ok(f"NetBird is installed: {completed.stdout.strip()}")


def _install_with_winget() -> OperationResult:
    logger.info("Using winget to install NetBird...")
    try:
        completed = run_command(
            [
                "winget",
                "install",
                "--id",
                WINGET_PACKAGE_ID,
                "-e",
                "--accept-source-agreements",
                "--accept-package-agreements",
            ]
        )
    except OSError as exc:
        return OperationResult.failed(f"Failed to run winget: {exc}")

    stdout = completed.stdout or ""
    stderr = completed.stderr or ""
    if completed.returncode == 0 or "Successfully installed" in stdout:
        logger.info("NetBird installed successfully!")
        return OperationResult.ok(f"NetBird installed successfully via winget!\n\n{CONNECT_HINT}")
    if "already installed" in stdout:
        return OperationResult.ok("NetBird is already installed.")
    return OperationResult.failed(f"Installation may have failed:\n{stdout}\n{stderr}")


def _install_with_installer() -> OperationResult:
    logger.info("Winget not available, using PowerShell installer...")
    try:
        installer_path = Path(tempfile.gettempdir()) / INSTALLER_FILENAME
        completed = run_powershell(installer_script(installer_path), bypass_execution_policy=True)
    except OSError as exc:
        return OperationResult.failed(f"Failed to install NetBird: {exc}")
    if completed.returncode != 0:
        return OperationResult.failed(f"Installation failed: {completed.stderr}")

    time.sleep(VERIFY_DELAY_SECONDS)
    status = check_netbird_status()
    if status.success:
        return OperationResult.ok(f"NetBird installed successfully!\n{status.message}\n\n{CONNECT_HINT}")
    return OperationResult.ok("Installation completed. You may need to restart your terminal.")


def install_netbird() -> OperationResult:
    logger.info("Starting NetBird installation...")
    if check_winget_status().success:
        return _install_with_winget()
    return _install_with_installer()


__all__ = ["check_netbird_status", "install_netbird", "default_install_path", "installer_script"]
