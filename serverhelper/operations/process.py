"""Subprocess helpers for external maintenance commands.

Commands always run to completion with captured text output. Spawn failures
surface as ``OSError`` so callers can word them into a result message.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence

from ..logging_setup import get_logger

POWERSHELL = "powershell"

logger = get_logger(__name__)


def run_command(args: Sequence[str], timeout_seconds: float | None = None) -> subprocess.CompletedProcess[str]:
    """Run ``args`` and capture stdout/stderr as text.

    Raises ``OSError`` when the executable cannot be started and
    ``subprocess.TimeoutExpired`` when ``timeout_seconds`` elapses.
    """
    logger.debug("Running %s", list(args))
    completed = subprocess.run(
        list(args),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=False,
        timeout=timeout_seconds,
    )
    logger.debug("%s exited with %s", args[0] if args else "?", completed.returncode)
    return completed


def run_powershell(
    script: str,
    *,
    bypass_execution_policy: bool = False,
    timeout_seconds: float | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run one PowerShell ``-Command`` script."""
    args = [POWERSHELL]
    if bypass_execution_policy:
        args.extend(["-ExecutionPolicy", "Bypass"])
    args.extend(["-Command", script])
    return run_command(args, timeout_seconds=timeout_seconds)


def ps_quote(value: object) -> str:
    """Quote ``value`` as a single-quoted PowerShell string literal."""
    return "'" + str(value).replace("'", "''") + "'"


__all__ = ["POWERSHELL", "run_command", "run_powershell", "ps_quote"]
