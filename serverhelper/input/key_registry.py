"""Per-screen key dispatch table."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyBinding:
    """One or more semantic key actions bound to a single handler."""

    actions: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyRegistry:
    """Map semantic key actions to handlers; unbound actions are no-ops."""

    def __init__(self, *bindings: KeyBinding) -> None:
        self._handlers: dict[str, Callable[[], bool | None]] = {}
        for binding in bindings:
            self.register(binding)

    def register(self, binding: KeyBinding) -> KeyRegistry:
        """Register ``binding``, overwriting handlers for the same actions."""
        for action in binding.actions:
            self._handlers[action] = binding.handler
        return self

    def dispatch(self, action: str | None) -> bool | None:
        """Invoke the handler for ``action`` and return its result."""
        if action is None:
            return None
        handler = self._handlers.get(action)
        if handler is None:
            return None
        return handler()
