"""Input-layer public API for key decoding and dispatch.

Low-level terminal decoding (``read_key``) is kept apart from the semantic
classification and per-screen dispatch used by the state machine.
"""

from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key
from .keys import (
    ACTION_BACKSPACE,
    ACTION_CANCEL,
    ACTION_CONFIRM,
    ACTION_DOWN,
    ACTION_QUIT,
    ACTION_UP,
    classify_key,
)
from .key_registry import KeyBinding, KeyRegistry

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "ACTION_UP",
    "ACTION_DOWN",
    "ACTION_CONFIRM",
    "ACTION_CANCEL",
    "ACTION_QUIT",
    "ACTION_BACKSPACE",
    "classify_key",
    "KeyBinding",
    "KeyRegistry",
]
