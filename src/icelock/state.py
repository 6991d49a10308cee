from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, List, Tuple

from .errors import MutationWhileFrozenError


class Kind(Enum):
    # values double as the noun used in rejection messages
    RECORD   = "object"
    SEQUENCE = "array"
    MAP      = "map"
    SET      = "set"


TraceHook = Callable[[str, "Kind | None", str], None]


@dataclass
class LockState:
    frozen: bool = True
    trace_hook: TraceHook | None = None

    def trace(self, event: str, kind: Kind | None, detail: str = "") -> None:
        if self.trace_hook is not None:
            self.trace_hook(event, kind, detail)

    def check(self, kind: Kind, operation: str, message: str) -> None:
        """Raise before the caller touches its container if the lock is frozen."""
        if not self.frozen:
            return
        self.trace("reject", kind, message)
        raise MutationWhileFrozenError(message, kind=kind, operation=operation)


class Icelock:
    """Handle returned by :func:`icelock.icelock`.

    Owns one :class:`LockState` and the ordered handles of every direct
    composite child found while building ``view``. ``freeze`` and
    ``unfreeze`` always walk the whole registry, even when the local state
    is already the requested one, since children may have been toggled
    on their own.

    Unpacks like the triple it stands for::

        view, freeze, unfreeze = icelock([1, [2]])
    """

    __slots__ = ("view", "kind", "label", "_state", "_children")

    def __init__(
        self,
        view: Any,
        kind: Kind | None,
        state: LockState,
        children: Tuple[Icelock, ...] = (),
        label: str = "<root>",
    ) -> None:
        self.view = view
        self.kind = kind
        self.label = label
        self._state = state
        self._children = tuple(children)

    @property
    def frozen(self) -> bool:
        return self._state.frozen

    @property
    def children(self) -> Tuple[Icelock, ...]:
        return self._children

    @property
    def registry(self) -> List[Tuple[Callable[[], None], Callable[[], None]]]:
        return [(child.freeze, child.unfreeze) for child in self._children]

    def freeze(self) -> None:
        self._state.frozen = True
        self._state.trace("freeze", self.kind, self.label)
        for child_freeze, _ in self.registry:
            child_freeze()

    def unfreeze(self) -> None:
        self._state.frozen = False
        self._state.trace("unfreeze", self.kind, self.label)
        for _, child_unfreeze in self.registry:
            child_unfreeze()

    def set_trace_hook(self, hook: TraceHook | None) -> None:
        self._state.trace_hook = hook
        for child in self._children:
            child.set_trace_hook(hook)

    def __iter__(self) -> Iterator[Any]:
        return iter((self.view, self.freeze, self.unfreeze))

    def __repr__(self) -> str:
        kind = self.kind.name if self.kind is not None else "primitive"
        state = "frozen" if self.frozen else "thawed"
        return f"<Icelock {kind} {state} children={len(self._children)}>"
