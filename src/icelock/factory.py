from __future__ import annotations

import dataclasses
import enum
import types
from collections.abc import Mapping, MutableMapping, MutableSequence, MutableSet
from dataclasses import dataclass
from typing import Any, Dict, List, Set, Tuple

from .errors import CyclicInputError, NullInputError
from .state import Icelock, Kind, LockState
from .views import IcedList, IcedMap, IcedRecord, IcedSet, IcedView


@dataclass(frozen=True)
class Options:
    # only applies to the handle being built; nested composites start frozen
    is_frozen: bool = True


DEFAULT_OPTIONS = Options()

# things with a __dict__ that are not data records
_NOT_RECORDS = (
    type,
    types.ModuleType,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    enum.Enum,
)


def kind_of(obj: Any) -> Kind | None:
    """Return the composite kind of ``obj`` or ``None`` for a primitive.

    Records are dataclass instances (slotted ones included) and other
    objects carrying a ``__dict__``. Callable objects, i.e. anything with
    ``__call__``, are treated as primitives even when they hold data in
    their ``__dict__``; so are classes, modules, functions and enum members.
    """
    match obj:
        case IcedView():
            return type(obj)._kind
        case bytearray():
            return None
        case MutableMapping():
            return Kind.MAP
        case MutableSequence():
            return Kind.SEQUENCE
        case MutableSet():
            return Kind.SET
        case _ if isinstance(obj, _NOT_RECORDS) or callable(obj):
            return None
        case _ if dataclasses.is_dataclass(obj):
            return Kind.RECORD
        case _ if hasattr(obj, "__dict__"):
            return Kind.RECORD
    return None


def _coerce_options(options: Options | Mapping[str, Any] | None) -> Options:
    match options:
        case None:
            return DEFAULT_OPTIONS
        case Options():
            return options
        case Mapping():
            return Options(**options)
    raise TypeError(f"options must be Options or a mapping, got {type(options).__name__}")


class _Builder:
    """Depth-first walk producing one handle per composite node."""

    def __init__(self) -> None:
        # ids of containers on the current recursion path
        self.path: Set[int] = set()

    def build(self, obj: Any, is_frozen: bool, label: str = "<root>") -> Icelock:
        if obj is None:
            raise NullInputError()

        state = LockState(frozen=is_frozen)
        kind = kind_of(obj)
        if kind is None:
            return Icelock(obj, None, state, label=label)

        if id(obj) in self.path:
            raise CyclicInputError(obj)
        self.path.add(id(obj))
        try:
            children: List[Icelock] = []
            view = self._shadow(obj, kind, state, children)
        finally:
            self.path.discard(id(obj))

        return Icelock(view, kind, state, tuple(children), label=label)

    def _element(self, value: Any, label: str, children: List[Icelock]) -> Any:
        if kind_of(value) is None:
            return value
        child = self.build(value, DEFAULT_OPTIONS.is_frozen, label)
        children.append(child)
        return child.view

    def _shadow(self, obj: Any, kind: Kind, state: LockState, children: List[Icelock]) -> IcedView:
        match kind:
            case Kind.MAP:
                data: Dict[Any, Any] = {}
                for key, value in obj.items():
                    data[key] = self._element(value, f"[{key!r}]", children)
                return IcedMap(data, state)

            case Kind.SEQUENCE:
                items = [
                    self._element(value, f"[{i}]", children)
                    for i, value in enumerate(obj)
                ]
                return IcedList(items, state)

            case Kind.SET:
                members = set()
                for i, value in enumerate(obj):
                    members.add(self._element(value, f"{{{i}}}", children))
                return IcedSet(members, state)

            case Kind.RECORD:
                fields, record_type = _record_fields(obj)
                data = {
                    name: self._element(value, f".{name}", children)
                    for name, value in fields
                }
                return IcedRecord(data, record_type, state)

        raise RuntimeError(f"Unhandled kind: {kind}")


def _record_fields(obj: Any) -> Tuple[List[Tuple[str, Any]], type]:
    if isinstance(obj, IcedRecord):
        fields = object.__getattribute__(obj, "_fields")
        return list(fields.items()), object.__getattribute__(obj, "_record_type")
    if hasattr(obj, "__dict__"):
        return list(vars(obj).items()), type(obj)
    # slotted dataclass; fields left unset by init=False are skipped
    return [
        (f.name, getattr(obj, f.name))
        for f in dataclasses.fields(obj)
        if hasattr(obj, f.name)
    ], type(obj)


def icelock(obj: Any, options: Options | Mapping[str, Any] | None = None) -> Icelock:
    """Build a guarded view of ``obj`` and return its handle.

    Every composite reachable from ``obj`` is copied into a fresh shadow
    container and wrapped with its own lock. ``options.is_frozen`` sets the
    starting state of the returned handle only; every nested composite
    starts frozen. ``obj`` itself is never modified.

    Raises :class:`NullInputError` for ``None`` and
    :class:`CyclicInputError` when a container contains itself.
    """
    return _Builder().build(obj, _coerce_options(options).is_frozen)
