"""Exceptions raised by icelock guards."""

from __future__ import annotations

from typing import Any


class IcelockError(Exception):
    """Base class for icelock failures."""


class NullInputError(IcelockError, ValueError):
    """Raised when a guard is requested for ``None``."""

    def __init__(self, message: str = "Cannot freeze null.") -> None:
        super().__init__(message)


class CyclicInputError(IcelockError, ValueError):
    """Raised when a container is reachable from itself."""

    def __init__(self, obj: Any) -> None:
        super().__init__(f"Cannot freeze cyclic {type(obj).__name__}, it contains itself.")
        self.obj = obj


class MutationWhileFrozenError(IcelockError, TypeError):
    """Raised when a guarded operation is attempted on a frozen view."""

    def __init__(self, message: str, kind: Any = None, operation: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.operation = operation


__all__ = [
    "IcelockError",
    "NullInputError",
    "CyclicInputError",
    "MutationWhileFrozenError",
]
