"""Tests for winget status checks and the sideload install sequence."""

from __future__ import annotations

import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from serverhelper.operations import process, winget


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class CheckWingetStatusTests(unittest.TestCase):
    def test_reports_version_when_command_succeeds(self) -> None:
        with mock.patch("serverhelper.operations.winget.run_command", return_value=_completed(stdout="v1.7.10861\n")) as run:
            result = winget.check_winget_status()

        run.assert_called_once_with(["winget", "--version"], timeout_seconds=winget.CHECK_TIMEOUT_SECONDS)
        self.assertTrue(result.success)
        self.assertEqual(result.message, "Winget is installed: v1.7.10861")

    def test_non_zero_exit_is_not_working(self) -> None:
        with mock.patch("serverhelper.operations.winget.run_command", return_value=_completed(returncode=1)):
            result = winget.check_winget_status()

        self.assertFalse(result.success)
        self.assertEqual(result.message, "Winget is not working properly")

    def test_missing_executable_is_not_installed(self) -> None:
        for error in (FileNotFoundError("winget"), subprocess.TimeoutExpired(["winget"], 30)):
            with mock.patch("serverhelper.operations.winget.run_command", side_effect=error):
                result = winget.check_winget_status()

            self.assertFalse(result.success)
            self.assertEqual(result.message, "Winget is not installed")


class InstallWingetTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        patcher = mock.patch("serverhelper.operations.winget.tempfile.gettempdir", return_value=self._tmp.name)
        patcher.start()
        self.addCleanup(patcher.stop)
        sleep_patcher = mock.patch("serverhelper.operations.winget.time.sleep")
        self.sleep = sleep_patcher.start()
        self.addCleanup(sleep_patcher.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_successful_install_reports_verified_version(self) -> None:
        with mock.patch(
            "serverhelper.operations.winget.run_powershell", return_value=_completed()
        ) as powershell, mock.patch(
            "serverhelper.operations.winget.run_command", return_value=_completed(stdout="v1.8.0")
        ):
            result = winget.install_winget()

        self.assertTrue(result.success)
        self.assertEqual(result.message, "Winget installed successfully!\nWinget is installed: v1.8.0")
        scripts = [call.args[0] for call in powershell.call_args_list]
        self.assertTrue(scripts[0].startswith("Invoke-WebRequest -Uri 'https://aka.ms/Microsoft.VCLibs"))
        self.assertTrue(any(script.startswith("Expand-Archive") for script in scripts))
        self.assertIn(winget.WINGET_BUNDLE_FILENAME, scripts[-1])
        self.assertTrue(scripts[-1].startswith("Add-AppxPackage"))
        self.assertTrue((Path(self._tmp.name) / winget.INSTALL_DIR_NAME).is_dir())
        self.sleep.assert_called_once_with(winget.VERIFY_DELAY_SECONDS)

    def test_failed_bundle_install_reports_stderr(self) -> None:
        def fake_powershell(script: str, **_kwargs):
            if script.startswith("Add-AppxPackage") and winget.WINGET_BUNDLE_FILENAME in script:
                return _completed(returncode=1, stderr="Deployment failed")
            return _completed()

        with mock.patch("serverhelper.operations.winget.run_powershell", side_effect=fake_powershell):
            result = winget.install_winget()

        self.assertFalse(result.success)
        self.assertEqual(result.message, "Installation failed: Deployment failed")

    def test_download_spawn_failure_aborts(self) -> None:
        with mock.patch(
            "serverhelper.operations.winget.run_powershell", side_effect=FileNotFoundError("powershell")
        ):
            result = winget.install_winget()

        self.assertFalse(result.success)
        self.assertTrue(result.message.startswith("Failed to download VCLibs:"))

    def test_unverified_install_still_succeeds_with_restart_hint(self) -> None:
        with mock.patch("serverhelper.operations.winget.run_powershell", return_value=_completed()), mock.patch(
            "serverhelper.operations.winget.run_command", side_effect=FileNotFoundError("winget")
        ):
            result = winget.install_winget()

        self.assertTrue(result.success)
        self.assertIn("restart your terminal or system", result.message)


class ProcessHelperTests(unittest.TestCase):
    def test_powershell_args_include_bypass_only_when_asked(self) -> None:
        with mock.patch("serverhelper.operations.process.run_command") as run:
            process.run_powershell("Get-Date")
            process.run_powershell("Get-Date", bypass_execution_policy=True)

        self.assertEqual(run.call_args_list[0].args[0], ["powershell", "-Command", "Get-Date"])
        self.assertEqual(
            run.call_args_list[1].args[0],
            ["powershell", "-ExecutionPolicy", "Bypass", "-Command", "Get-Date"],
        )

    def test_ps_quote_doubles_single_quotes(self) -> None:
        self.assertEqual(process.ps_quote("C:\\O'Brien\\a.xml"), "'C:\\O''Brien\\a.xml'")

    def test_run_command_captures_text_without_raising_on_failure(self) -> None:
        with mock.patch(
            "serverhelper.operations.process.subprocess.run", return_value=_completed(returncode=3)
        ) as run:
            completed = process.run_command(("tool", "--flag"), timeout_seconds=5)

        self.assertEqual(completed.returncode, 3)
        kwargs = run.call_args.kwargs
        self.assertEqual(run.call_args.args[0], ["tool", "--flag"])
        self.assertTrue(kwargs["text"])
        self.assertFalse(kwargs["check"])
        self.assertEqual(kwargs["timeout"], 5)


if __name__ == "__main__":
    unittest.main()
