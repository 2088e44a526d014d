"""Winget (Windows Package Manager) status check and offline-style install.

Windows Server does not ship the App Installer, so installation downloads the
runtime dependencies and the DesktopAppInstaller bundle and sideloads them
with ``Add-AppxPackage``.
"""

from __future__ import annotations

import subprocess
import tempfile
import time
from pathlib import Path

from ..logging_setup import get_logger
from .process import ps_quote, run_command, run_powershell
from .result import OperationResult

CHECK_TIMEOUT_SECONDS = 30.0
VERIFY_DELAY_SECONDS = 2.0
INSTALL_DIR_NAME = "winget_install"

VCLIBS_FILENAME = "Microsoft.VCLibs.x64.14.00.Desktop.appx"
VCLIBS_URL = "https://aka.ms/Microsoft.VCLibs.x64.14.00.Desktop.appx"
XAML_NUPKG_FILENAME = "microsoft.ui.xaml.2.8.6.nupkg"
XAML_NUPKG_URL = "https://www.nuget.org/api/v2/package/Microsoft.UI.Xaml/2.8.6"
XAML_APPX_RELATIVE = Path("tools") / "AppX" / "x64" / "Release" / "Microsoft.UI.Xaml.2.8.appx"
WINGET_BUNDLE_FILENAME = "Microsoft.DesktopAppInstaller.msixbundle"
WINGET_BUNDLE_URL = (
    "https://github.com/microsoft/winget-cli/releases/latest/download/"
    "Microsoft.DesktopAppInstaller_8wekyb3d8bbwe.msixbundle"
)

logger = get_logger(__name__)


def check_winget_status() -> OperationResult:
    """Report whether ``winget --version`` runs, with the version on success."""
    try:
        completed = run_command(["winget", "--version"], timeout_seconds=CHECK_TIMEOUT_SECONDS)
    except (OSError, subprocess.TimeoutExpired):
        return OperationResult.failed("Winget is not installed")
    if completed.returncode != 0:
        return OperationResult.failed("Winget is not working properly")
    return OperationResult.ok(f"Winget is installed: {completed.stdout.strip()}")


def _download(url: str, target: Path) -> subprocess.CompletedProcess[str]:
    return run_powershell(f"Invoke-WebRequest -Uri {ps_quote(url)} -OutFile {ps_quote(target)}")


def _add_appx_package(package: Path) -> subprocess.CompletedProcess[str]:
    return run_powershell(f"Add-AppxPackage -Path {ps_quote(package)}")


def install_winget() -> OperationResult:
    """Download and sideload VCLibs, UI.Xaml and the App Installer bundle."""
    logger.info("Starting Winget installation for Windows Server...")
    temp_dir = Path(tempfile.gettempdir()) / INSTALL_DIR_NAME
    try:
        temp_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return OperationResult.failed(f"Failed to create temp directory: {exc}")

    logger.info("Downloading Microsoft.VCLibs...")
    vclibs_path = temp_dir / VCLIBS_FILENAME
    try:
        _download(VCLIBS_URL, vclibs_path)
    except OSError as exc:
        return OperationResult.failed(f"Failed to download VCLibs: {exc}")

    logger.info("Downloading Microsoft.UI.Xaml...")
    xaml_nupkg_path = temp_dir / XAML_NUPKG_FILENAME
    try:
        _download(XAML_NUPKG_URL, xaml_nupkg_path)
    except OSError as exc:
        return OperationResult.failed(f"Failed to download UI.Xaml: {exc}")

    logger.info("Extracting Microsoft.UI.Xaml...")
    xaml_extract_dir = temp_dir / "xaml_extract"
    try:
        xaml_extract_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("Could not create %s: %s", xaml_extract_dir, exc)
    try:
        run_powershell(
            f"Expand-Archive -Path {ps_quote(xaml_nupkg_path)} "
            f"-DestinationPath {ps_quote(xaml_extract_dir)} -Force"
        )
    except OSError as exc:
        return OperationResult.failed(f"Failed to extract UI.Xaml: {exc}")
    xaml_appx_path = xaml_extract_dir / XAML_APPX_RELATIVE

    logger.info("Downloading Winget...")
    bundle_path = temp_dir / WINGET_BUNDLE_FILENAME
    try:
        _download(WINGET_BUNDLE_URL, bundle_path)
    except OSError as exc:
        return OperationResult.failed(f"Failed to download Winget: {exc}")

    logger.info("Installing Microsoft.VCLibs...")
    try:
        _add_appx_package(vclibs_path)
    except OSError as exc:
        logger.warning("VCLibs install issue: %s", exc)

    if xaml_appx_path.exists():
        logger.info("Installing Microsoft.UI.Xaml...")
        try:
            _add_appx_package(xaml_appx_path)
        except OSError as exc:
            logger.warning("UI.Xaml install issue: %s", exc)

    logger.info("Installing Winget...")
    try:
        completed = _add_appx_package(bundle_path)
    except OSError as exc:
        return OperationResult.failed(f"Failed to install Winget: {exc}")
    if completed.returncode != 0:
        return OperationResult.failed(f"Installation failed: {completed.stderr}")

    logger.info("Installation completed!")
    time.sleep(VERIFY_DELAY_SECONDS)
    status = check_winget_status()
    if status.success:
        return OperationResult.ok(f"Winget installed successfully!\n{status.message}")
    return OperationResult.ok("Installation completed. You may need to restart your terminal or system.")


__all__ = ["check_winget_status", "install_winget"]
