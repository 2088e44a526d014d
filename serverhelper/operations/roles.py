"""Backup and restore of installed Windows Server roles and features.

Backups are ``Export-Clixml`` snapshots of ``Get-WindowsFeature`` filtered to
installed features, written next to a human-readable table.
"""

from __future__ import annotations

import time
from pathlib import Path

from ..logging_setup import get_logger
from .process import ps_quote, run_powershell
from .result import OperationResult

RESTART_WARNING = "\n\n⚠️  A system restart is required to complete the installation."

logger = get_logger(__name__)


def backup_file_paths(backup_dir: Path, timestamp: int) -> tuple[Path, Path]:
    """Return ``(clixml_path, readable_list_path)`` for one backup run."""
    return (
        backup_dir / f"ServerRoles_{timestamp}.xml",
        backup_dir / f"InstalledFeatures_{timestamp}.txt",
    )


def backup_server_roles(backup_dir: Path) -> OperationResult:
    """Export installed roles/features into ``backup_dir``."""
    logger.info("Backing up Server Roles and Features...")
    try:
        backup_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return OperationResult.failed(f"Failed to create backup directory: {exc}")

    backup_file, features_file = backup_file_paths(backup_dir, int(time.time()))

    logger.info("Exporting installed roles and features...")
    try:
        run_powershell(
            "Get-WindowsFeature | Where-Object {$_.Installed -eq $true} | "
            f"Export-Clixml -Path {ps_quote(backup_file)}"
        )
    except OSError as exc:
        return OperationResult.failed(f"Failed to export roles: {exc}")

    try:
        run_powershell(
            "Get-WindowsFeature | Where-Object {$_.Installed -eq $true} | "
            "Select-Object Name, DisplayName, FeatureType | Format-Table -AutoSize | "
            f"Out-File -FilePath {ps_quote(features_file)} -Width 200"
        )
    except OSError as exc:
        logger.warning("Could not create readable list: %s", exc)

    try:
        size = backup_file.stat().st_size
    except OSError:
        return OperationResult.failed("Failed to create backup file. Ensure you are running as Administrator.")
    if size <= 0:
        return OperationResult.failed("Backup file was created but appears empty. Ensure you have admin rights.")

    return OperationResult.ok(
        "Server Roles and Features backed up successfully!\n\n"
        f"Backup location:\n  {backup_file}\n\n"
        f"Readable list:\n  {features_file}\n\n"
        "To restore on another server, use:\n  "
        f"Import-Clixml '{backup_file}' | Where-Object {{$_.Installed}} | Install-WindowsFeature"
    )


def restart_needed(output: str) -> bool:
    return "RestartNeeded" in output and "Yes" in output


def restore_server_roles(backup_file: Path) -> OperationResult:
    """Install every feature recorded as installed in ``backup_file``."""
    logger.info("Restoring from: %s", backup_file)
    if not backup_file.exists():
        return OperationResult.failed(f"Backup file not found: {backup_file}")

    logger.info("Reading backup file...")
    try:
        preview = run_powershell(
            f"$features = Import-Clixml -Path {ps_quote(backup_file)}; "
            "$features | Where-Object {$_.Installed -eq $true} | Select-Object -ExpandProperty Name"
        )
    except OSError as exc:
        return OperationResult.failed(f"Failed to read backup file: {exc}")
    features_list = preview.stdout or ""

    logger.info("Installing server roles and features (this may take several minutes)...")
    try:
        completed = run_powershell(
            f"$features = Import-Clixml -Path {ps_quote(backup_file)}; "
            "$toInstall = $features | Where-Object {$_.Installed -eq $true} | "
            "Select-Object -ExpandProperty Name; "
            "if ($toInstall) { "
            "Install-WindowsFeature -Name $toInstall -IncludeManagementTools "
            "-ErrorAction SilentlyContinue | Out-String "
            "} else { 'No features to install' }"
        )
    except OSError as exc:
        return OperationResult.failed(f"Failed to execute restore: {exc}")

    stdout = (completed.stdout or "").strip()
    stderr = (completed.stderr or "").strip()
    if completed.returncode != 0:
        return OperationResult.failed(f"Restoration encountered errors:\n{stdout}\n{stderr}")

    restart_msg = RESTART_WARNING if restart_needed(stdout) else ""
    return OperationResult.ok(
        "Server Roles and Features restoration completed!\n\n"
        f"Features processed:\n{features_list.strip()}\n"
        f"Output:\n{stdout}{restart_msg}"
    )


__all__ = [
    "backup_file_paths",
    "backup_server_roles",
    "restart_needed",
    "restore_server_roles",
]
