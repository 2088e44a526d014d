"""Outcome type shared by every maintenance operation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OperationResult:
    """Success flag plus the human-readable message shown on the result screen."""

    success: bool
    message: str

    @classmethod
    def ok(cls, message: str) -> OperationResult:
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, message: str) -> OperationResult:
        return cls(success=False, message=message)


__all__ = ["OperationResult"]
