"""State-machine tests for the dashboard: menu dispatch, busy screens, restore flow."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from serverhelper.machine import NO_FILE_SELECTED_MESSAGE, DashboardOperations, ServerHelperApp
from serverhelper.operations import OperationResult
from serverhelper.state import FileBrowser, Installing, Menu, Restoring, Result

MENU_CHECK_WINGET = 0
MENU_INSTALL_WINGET = 1
MENU_CHECK_NETBIRD = 2
MENU_INSTALL_NETBIRD = 3
MENU_BACKUP = 4
MENU_RESTORE = 5
MENU_EXIT = 6


def _operations(**overrides) -> DashboardOperations:
    calls = {
        "check": mock.Mock(return_value=OperationResult.ok("checked")),
        "install": mock.Mock(return_value=OperationResult.ok("installed")),
        "backup_roles": mock.Mock(return_value=OperationResult.ok("backed up")),
        "restore_roles": mock.Mock(return_value=OperationResult.ok("restored")),
    }
    calls.update(overrides)
    return DashboardOperations(**calls)


class _AppTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.backup_dir = Path(self._tmp.name)
        (self.backup_dir / "sub1").mkdir()
        (self.backup_dir / "ServerRoles_1.xml").write_text("<Objs/>", encoding="utf-8")
        self.operations = _operations()
        self.app = ServerHelperApp(self.operations, self.backup_dir)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def select_menu_row(self, index: int) -> None:
        self.app.menu_cursor.selected = index

    def press(self, *keys: str) -> bool:
        quit_requested = False
        for key in keys:
            quit_requested = self.app.handle_key(key)
        return quit_requested


class MenuTests(_AppTestCase):
    def test_starts_on_menu_with_first_row_selected(self) -> None:
        self.assertEqual(self.app.screen, Menu())
        self.assertEqual(self.app.menu_cursor.selected, 0)
        self.assertIsNone(self.app.selected_file)

    def test_up_from_first_row_wraps_to_last(self) -> None:
        self.press("UP")
        self.assertEqual(self.app.menu_cursor.selected, MENU_EXIT)
        self.press("j")
        self.assertEqual(self.app.menu_cursor.selected, 0)
        self.press("DOWN", "DOWN", "k")
        self.assertEqual(self.app.menu_cursor.selected, 1)

    def test_quit_key_exits_from_menu(self) -> None:
        self.assertTrue(self.press("q"))

    def test_exit_row_exits(self) -> None:
        self.select_menu_row(MENU_EXIT)
        self.assertTrue(self.press("ENTER"))

    def test_escape_and_unbound_keys_do_nothing_on_menu(self) -> None:
        self.assertFalse(self.press("ESC", "BACKSPACE", "x", "TAB"))
        self.assertEqual(self.app.screen, Menu())
        self.assertEqual(self.app.menu_cursor.selected, 0)

    def test_check_rows_call_collaborator_synchronously(self) -> None:
        self.press("ENTER")
        self.operations.check.assert_called_once_with("winget")
        self.assertEqual(self.app.screen, Result(success=True, message="checked"))

        self.press("ENTER")
        self.select_menu_row(MENU_CHECK_NETBIRD)
        self.press("ENTER")
        self.operations.check.assert_called_with("netbird")

    def test_backup_row_runs_immediately(self) -> None:
        self.select_menu_row(MENU_BACKUP)
        self.press("ENTER")

        self.operations.backup_roles.assert_called_once_with()
        self.assertEqual(self.app.screen, Result(success=True, message="backed up"))
        self.assertFalse(self.app.has_pending_work())

    def test_failed_check_shows_error_result(self) -> None:
        self.operations = _operations(check=mock.Mock(return_value=OperationResult.failed("Winget is not installed")))
        self.app = ServerHelperApp(self.operations, self.backup_dir)

        self.press("ENTER")

        self.assertEqual(self.app.screen, Result(success=False, message="Winget is not installed"))

    def test_menu_selection_survives_result_round_trip(self) -> None:
        self.select_menu_row(MENU_CHECK_NETBIRD)
        self.press("ENTER", "ESC")
        self.assertEqual(self.app.screen, Menu())
        self.assertEqual(self.app.menu_cursor.selected, MENU_CHECK_NETBIRD)


class BusyScreenTests(_AppTestCase):
    def test_install_enters_busy_screen_before_calling_collaborator(self) -> None:
        self.select_menu_row(MENU_INSTALL_WINGET)
        self.press("ENTER")

        self.assertEqual(self.app.screen, Installing("winget"))
        self.operations.install.assert_not_called()
        self.assertTrue(self.app.has_pending_work())

        self.assertTrue(self.app.run_pending_work())

        self.operations.install.assert_called_once_with("winget")
        self.assertEqual(self.app.screen, Result(success=True, message="installed"))
        self.assertFalse(self.app.has_pending_work())

    def test_install_netbird_passes_item(self) -> None:
        self.select_menu_row(MENU_INSTALL_NETBIRD)
        self.press("ENTER")
        self.app.run_pending_work()
        self.operations.install.assert_called_once_with("netbird")

    def test_busy_screens_absorb_every_key(self) -> None:
        self.select_menu_row(MENU_INSTALL_WINGET)
        self.press("ENTER")

        for key in ("q", "ESC", "ENTER", "UP", "DOWN", "BACKSPACE", "z"):
            self.assertFalse(self.app.handle_key(key))
            self.assertEqual(self.app.screen, Installing("winget"))

        self.operations.install.assert_not_called()

    def test_restoring_screen_absorbs_every_key(self) -> None:
        chosen = self.backup_dir / "ServerRoles_1.xml"
        self.app.selected_file = chosen
        self.app.set_screen(Restoring())

        for key in ("q", "ESC", "ENTER", "UP", "DOWN", "k", "j", "BACKSPACE", "z"):
            self.assertFalse(self.app.handle_key(key))
            self.assertEqual(self.app.screen, Restoring())

        self.operations.restore_roles.assert_not_called()
        self.assertEqual(self.app.selected_file, chosen)
        self.assertTrue(self.app.has_pending_work())

    def test_no_pending_work_outside_busy_screens(self) -> None:
        self.assertFalse(self.app.has_pending_work())
        self.assertFalse(self.app.run_pending_work())
        self.assertEqual(self.app.screen, Menu())

    def test_collaborator_exception_becomes_failed_result(self) -> None:
        self.operations = _operations(install=mock.Mock(side_effect=RuntimeError("boom")))
        self.app = ServerHelperApp(self.operations, self.backup_dir)
        self.select_menu_row(MENU_INSTALL_WINGET)
        self.press("ENTER")

        with self.assertLogs("serverhelper", level="ERROR"):
            self.app.run_pending_work()

        self.assertEqual(self.app.screen, Result(success=False, message="Unexpected error: boom"))

    def test_restoring_without_file_fails_without_calling_collaborator(self) -> None:
        self.app.set_screen(Restoring())

        self.app.run_pending_work()

        self.operations.restore_roles.assert_not_called()
        self.assertEqual(self.app.screen, Result(success=False, message=NO_FILE_SELECTED_MESSAGE))


class RestoreFlowTests(_AppTestCase):
    def open_browser(self) -> None:
        self.select_menu_row(MENU_RESTORE)
        self.press("ENTER")

    def test_restore_row_opens_browser_at_backup_dir(self) -> None:
        self.open_browser()

        self.assertEqual(self.app.screen, FileBrowser())
        self.assertIsNotNone(self.app.browser)
        self.assertEqual(self.app.browser.current_dir, self.backup_dir)
        self.assertEqual([e.label for e in self.app.browser.entries], ["..", "sub1", "ServerRoles_1.xml"])
        self.assertEqual(self.app.browser.cursor.selected, 0)

    def test_choosing_file_restores_it(self) -> None:
        self.open_browser()
        self.press("DOWN", "DOWN")
        self.press("ENTER")

        chosen = self.backup_dir / "ServerRoles_1.xml"
        self.assertEqual(self.app.screen, Restoring())
        self.assertEqual(self.app.selected_file, chosen)
        self.operations.restore_roles.assert_not_called()

        self.app.run_pending_work()

        self.operations.restore_roles.assert_called_once_with(chosen)
        self.assertEqual(self.app.screen, Result(success=True, message="restored"))

    def test_choosing_directory_relists_and_stays_in_browser(self) -> None:
        self.open_browser()
        self.press("DOWN", "ENTER")

        self.assertEqual(self.app.screen, FileBrowser())
        self.assertEqual(self.app.browser.current_dir, self.backup_dir / "sub1")
        self.assertEqual(self.app.browser.cursor.selected, 0)
        self.assertIsNone(self.app.selected_file)

    def test_backspace_goes_to_parent(self) -> None:
        self.open_browser()
        self.press("DOWN", "ENTER", "BACKSPACE")

        self.assertEqual(self.app.browser.current_dir, self.backup_dir)
        self.assertEqual(self.app.screen, FileBrowser())

    def test_escape_and_quit_cancel_browser(self) -> None:
        self.open_browser()
        self.assertFalse(self.press("ESC"))
        self.assertEqual(self.app.screen, Menu())

        self.open_browser()
        self.assertFalse(self.press("q"))
        self.assertEqual(self.app.screen, Menu())
        self.operations.restore_roles.assert_not_called()

    def test_reopening_browser_starts_over_at_backup_dir(self) -> None:
        self.open_browser()
        self.press("DOWN", "ENTER", "ESC")
        self.open_browser()

        self.assertEqual(self.app.browser.current_dir, self.backup_dir)
        self.assertIsNone(self.app.selected_file)

    def test_result_acknowledgement_returns_to_menu(self) -> None:
        self.open_browser()
        self.press("DOWN", "DOWN", "ENTER")
        self.app.run_pending_work()

        self.press("ENTER")

        self.assertEqual(self.app.screen, Menu())


if __name__ == "__main__":
    unittest.main()
