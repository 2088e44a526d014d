"""Tests for terminal mode control sequences.

Verifies raw-mode lifecycle safety and the alternate-screen payloads the
runtime loop relies on.
"""

from __future__ import annotations

import os
import unittest
from unittest import mock

from serverhelper import terminal as terminal_mod
from serverhelper.terminal import ENTER_SCREEN, LEAVE_SCREEN, TerminalController


@unittest.skipIf(os.name == "nt", "termios is POSIX only")
class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("serverhelper.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "serverhelper.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("serverhelper.terminal.os.write") as write_mock, mock.patch(
            "serverhelper.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, terminal_mod.termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, terminal_mod.termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("serverhelper.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()


class TerminalWithoutTermiosTests(unittest.TestCase):
    def test_console_path_enables_vt_mode_instead_of_raw_tty(self) -> None:
        with mock.patch.object(terminal_mod, "termios", None), mock.patch.object(
            terminal_mod, "enable_windows_vt_mode", return_value=True
        ) as vt_mock, mock.patch("serverhelper.terminal.os.write") as write_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            with controller.raw_mode():
                pass

        vt_mock.assert_called_once_with()
        self.assertEqual([call.args for call in write_mock.call_args_list], [(1, ENTER_SCREEN), (1, LEAVE_SCREEN)])

    def test_vt_mode_reports_failure_without_console(self) -> None:
        with mock.patch("ctypes.WinDLL", side_effect=OSError("no kernel32"), create=True):
            self.assertFalse(terminal_mod.enable_windows_vt_mode())


if __name__ == "__main__":
    unittest.main()
