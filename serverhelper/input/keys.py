"""Classify decoded key tokens into the dashboard's semantic actions."""

from __future__ import annotations

ACTION_UP = "up"
ACTION_DOWN = "down"
ACTION_CONFIRM = "confirm"
ACTION_CANCEL = "cancel"
ACTION_QUIT = "quit"
ACTION_BACKSPACE = "backspace"

_KEY_ACTIONS: dict[str, str] = {
    "UP": ACTION_UP,
    "k": ACTION_UP,
    "DOWN": ACTION_DOWN,
    "j": ACTION_DOWN,
    "ENTER": ACTION_CONFIRM,
    "ESC": ACTION_CANCEL,
    "q": ACTION_QUIT,
    "BACKSPACE": ACTION_BACKSPACE,
}


def classify_key(key: str) -> str | None:
    """Return the semantic action for ``key``, or ``None`` when unbound."""
    return _KEY_ACTIONS.get(key)


__all__ = [
    "ACTION_UP",
    "ACTION_DOWN",
    "ACTION_CONFIRM",
    "ACTION_CANCEL",
    "ACTION_QUIT",
    "ACTION_BACKSPACE",
    "classify_key",
]
