"""Terminal control helpers for the dashboard session.

Owns raw-mode lifecycle and alternate-screen switching. On Windows the
console is switched to virtual-terminal processing so ANSI frames render;
key reading there goes through ``msvcrt`` and needs no raw mode.
"""

from __future__ import annotations

import contextlib
import os

if os.name == "nt":
    termios = None
    tty = None
else:
    import termios
    import tty

ENTER_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_SCREEN = b"\x1b[?25h\x1b[?1049l"
STD_OUTPUT_HANDLE = -11
ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004


def enable_windows_vt_mode() -> bool:
    """Turn on ANSI escape processing for the Windows console."""
    import ctypes

    try:
        kernel32 = ctypes.WinDLL("kernel32")
        handle = kernel32.GetStdHandle(STD_OUTPUT_HANDLE)
        mode = ctypes.c_ulong()
        if not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            return False
        return bool(kernel32.SetConsoleMode(handle, mode.value | ENABLE_VIRTUAL_TERMINAL_PROCESSING))
    except (AttributeError, OSError):
        return False


class TerminalController:
    """Manage terminal mode transitions around the dashboard loop."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state (POSIX only) and bind stdin/stdout descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd) if termios is not None else None

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        if termios is not None:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        else:
            enable_windows_vt_mode()
        os.write(self.stdout_fd, ENTER_SCREEN)

    def disable_tui_mode(self) -> None:
        """Show the cursor, restore the main screen buffer and tty state."""
        os.write(self.stdout_fd, LEAVE_SCREEN)
        if termios is not None and self._saved_tty_state is not None:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
