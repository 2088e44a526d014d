"""Main interactive event loop for the dashboard.

Each tick renders the current frame, then either runs the busy screen's
deferred blocking call or polls for one key with a bounded timeout.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass

from ..input import read_key
from ..logging_setup import get_logger
from ..machine import ServerHelperApp
from ..render import FrameSize, build_frame, write_frame
from ..terminal import TerminalController
from ..ui_theme import DEFAULT_THEME, UITheme
from ..view import project_view

logger = get_logger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    input_poll_ms: int = 100


def run_main_loop(
    app: ServerHelperApp,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme = DEFAULT_THEME,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
) -> None:
    """Run the dashboard until the user quits.

    A frame is only written when it differs from the previous one. Busy
    screens are always drawn before their blocking call starts, and no input
    is read until that call returns.
    """
    last_frame: str | None = None
    skip_next_lf = False

    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            frame = build_frame(project_view(app), FrameSize(columns=term.columns, lines=term.lines), theme)
            if frame != last_frame:
                write_frame(frame)
                last_frame = frame

            if app.has_pending_work():
                app.run_pending_work()
                continue

            try:
                key = read_key(stdin_fd, timeout_ms=timing.input_poll_ms)
            except KeyboardInterrupt:
                # Ignore SIGINT-style interrupts; quitting goes through q or Exit.
                continue
            if key == "":
                continue
            if skip_next_lf and key == "ENTER_LF":
                skip_next_lf = False
                continue

            if key == "ENTER_CR":
                key = "ENTER"
                skip_next_lf = True
            elif key == "ENTER_LF":
                key = "ENTER"
                skip_next_lf = False
            else:
                skip_next_lf = False

            if app.handle_key(key):
                logger.info("Exit requested")
                break
