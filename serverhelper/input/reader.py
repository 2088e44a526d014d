"""Low-level terminal input decoding.

Reads raw bytes (POSIX) or console characters (Windows) and translates them
into normalized key tokens such as ``UP``, ``ENTER_CR`` or ``q``. An empty
string means no key arrived before the timeout.
"""

from __future__ import annotations

import os
import select
import time

ESC_SEQUENCE_TIMEOUT_MS = 25
WINDOWS_POLL_SECONDS = 0.01
_PENDING_BYTES: list[bytes] = []

_WINDOWS_SCAN_CODES: dict[str, str] = {
    "H": "UP",
    "P": "DOWN",
    "K": "LEFT",
    "M": "RIGHT",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def read_key_posix(fd: int, timeout_ms: int | None = None) -> str:
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in {b"\x08", b"\x7f"}:
        return "BACKSPACE"
    if ch == b"\r":
        return "ENTER_CR"
    if ch == b"\n":
        return "ENTER_LF"
    if ch == b"\t":
        return "TAB"

    if ch != b"\x1b":
        return ch.decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"A":
        return "UP"
    if seq == b"B":
        return "DOWN"
    if seq == b"C":
        return "RIGHT"
    if seq == b"D":
        return "LEFT"
    return "ESC"


def read_key_windows(timeout_ms: int | None = None) -> str:
    import msvcrt

    deadline = None if timeout_ms is None else time.monotonic() + max(0.0, timeout_ms / 1000.0)
    while not msvcrt.kbhit():
        if deadline is not None and time.monotonic() >= deadline:
            return ""
        time.sleep(WINDOWS_POLL_SECONDS)

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        return _WINDOWS_SCAN_CODES.get(msvcrt.getwch(), "")
    if ch == "\r":
        return "ENTER_CR"
    if ch == "\n":
        return "ENTER_LF"
    if ch == "\x08":
        return "BACKSPACE"
    if ch == "\x1b":
        return "ESC"
    if ch == "\t":
        return "TAB"
    return ch


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Wait up to ``timeout_ms`` for one key and return its token."""
    if os.name == "nt":
        return read_key_windows(timeout_ms)
    return read_key_posix(fd, timeout_ms)
