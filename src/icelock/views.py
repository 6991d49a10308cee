from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence, Set
from typing import Any, Dict, Iterable, Iterator, List

from .state import Kind, LockState


# internal slots are read through this so record fields never shadow them
_slot = object.__getattribute__


class IcedView:
    """Common base of the four guarded views.

    Reads go straight to the backing container. Each mutating method calls
    ``_check`` first, so a frozen view raises before anything is written.
    """

    __slots__ = ("_lock",)
    _kind: Kind

    def _check(self, operation: str, message: str) -> None:
        _slot(self, "_lock").check(_slot(self, "_kind"), operation, message)


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


class IcedRecord(IcedView):
    """Attribute-style view over a record (dataclass, namespace, plain object).

    Fields are reached as attributes or items and take precedence over the
    view's own underscored internals, which are only reached through
    ``_slot``. The view offers no public methods of its own.
    """

    __slots__ = ("_fields", "_record_type")
    _kind = Kind.RECORD

    def __init__(self, fields: Dict[str, Any], record_type: type, lock: LockState) -> None:
        object.__setattr__(self, "_fields", fields)
        object.__setattr__(self, "_record_type", record_type)
        object.__setattr__(self, "_lock", lock)

    def __getattribute__(self, name: str) -> Any:
        fields = _slot(self, "_fields")
        if name in fields and not _is_dunder(name):
            return fields[name]
        return _slot(self, name)

    def __getattr__(self, name: str) -> Any:
        record_type = _slot(self, "_record_type")
        raise AttributeError(f"{record_type.__name__!r} object has no attribute {name!r}")

    def __getitem__(self, name: str) -> Any:
        return _slot(self, "_fields")[name]

    def __contains__(self, name: object) -> bool:
        return name in _slot(self, "_fields")

    def __setattr__(self, name: str, value: Any) -> None:
        IcedRecord._set(self, name, value)

    def __setitem__(self, name: str, value: Any) -> None:
        IcedRecord._set(self, name, value)

    def __delattr__(self, name: str) -> None:
        try:
            IcedRecord._delete(self, name)
        except KeyError:
            raise AttributeError(name) from None

    def __delitem__(self, name: str) -> None:
        IcedRecord._delete(self, name)

    def _set(self, key: str, value: Any) -> None:
        IcedView._check(self, "set", f"Cannot set {key}, object is frozen.")
        _slot(self, "_fields")[key] = value

    def _delete(self, key: str) -> None:
        IcedView._check(self, "delete", f"Cannot delete {key}, object is frozen.")
        del _slot(self, "_fields")[key]

    def __dir__(self) -> List[str]:
        return sorted(set(_slot(self, "_fields")) | set(dir(type(self))))

    def _blank(self) -> Any:
        record_type = _slot(self, "_record_type")
        return record_type.__new__(record_type)

    def __copy__(self) -> Any:
        clone = IcedRecord._blank(self)
        for name, value in _slot(self, "_fields").items():
            object.__setattr__(clone, name, value)
        return clone

    def __deepcopy__(self, memo: Dict[int, Any]) -> Any:
        clone = IcedRecord._blank(self)
        memo[id(self)] = clone
        for name, value in _slot(self, "_fields").items():
            # object.__setattr__ also fills slots and frozen dataclasses
            object.__setattr__(clone, name, copy.deepcopy(value, memo))
        return clone

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in _slot(self, "_fields").items())
        return f"IcedRecord[{_slot(self, '_record_type').__name__}]({fields})"


class IcedList(IcedView, Sequence):
    __slots__ = ("_items",)
    _kind = Kind.SEQUENCE

    def __init__(self, items: List[Any], lock: LockState) -> None:
        self._items = items
        self._lock = lock

    def __len__(self) -> int: return len(self._items)
    def __getitem__(self, index: Any) -> Any: return self._items[index]
    def __iter__(self) -> Iterator[Any]: return iter(self._items)
    def __reversed__(self) -> Iterator[Any]: return reversed(self._items)
    def __contains__(self, value: object) -> bool: return value in self._items

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (list, IcedList)):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __setitem__(self, index: int, value: Any) -> None:
        self._check("set", f"Cannot set {index}, array is frozen.")
        self._items[index] = value

    def __delitem__(self, index: Any) -> None:
        # removal goes through pop or splice
        raise TypeError(f"{type(self).__name__!r} object doesn't support item deletion")

    def append(self, value: Any) -> None:
        self._check("push", f"Cannot push {value}, array is frozen.")
        self._items.append(value)

    push = append

    def pop(self, index: int = -1) -> Any:
        self._check("pop", "Cannot pop, array is frozen.")
        return self._items.pop(index)

    def splice(self, start: int, delete_count: int | None = None, *items: Any) -> List[Any]:
        """Remove ``delete_count`` items at ``start``, insert ``items`` there.

        A negative ``start`` counts from the end; ``delete_count=None``
        removes everything from ``start`` on. Returns the removed items.
        """
        self._check("splice", f"Cannot splice {start}, {delete_count}, array is frozen.")
        begin, end, _ = slice(start, None).indices(len(self._items))
        if delete_count is not None:
            end = min(end, begin + max(delete_count, 0))
        removed = self._items[begin:end]
        self._items[begin:end] = items
        return removed

    def __copy__(self) -> List[Any]:
        return list(self._items)

    def __deepcopy__(self, memo: Dict[int, Any]) -> List[Any]:
        clone: List[Any] = []
        memo[id(self)] = clone
        clone.extend(copy.deepcopy(v, memo) for v in self._items)
        return clone

    def __repr__(self) -> str:
        return f"IcedList({self._items!r})"


class IcedMap(IcedView, Mapping):
    __slots__ = ("_data",)
    _kind = Kind.MAP

    def __init__(self, data: Dict[Any, Any], lock: LockState) -> None:
        self._data = data
        self._lock = lock

    def __len__(self) -> int: return len(self._data)
    def __getitem__(self, key: Any) -> Any: return self._data[key]
    def __iter__(self) -> Iterator[Any]: return iter(self._data)
    def __contains__(self, key: object) -> bool: return key in self._data

    def __setitem__(self, key: Any, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: Any) -> None:
        self._check("delete", f"Cannot delete {key}, map is frozen.")
        del self._data[key]

    def set(self, key: Any, value: Any) -> None:
        self._check("set", f"Cannot set {key}, map is frozen.")
        self._data[key] = value

    def delete(self, key: Any) -> bool:
        """Remove ``key`` if present; report whether anything was removed."""
        self._check("delete", f"Cannot delete {key}, map is frozen.")
        if key not in self._data:
            return False
        del self._data[key]
        return True

    def clear(self) -> None:
        self._check("clear", "Cannot clear map, map is frozen.")
        self._data.clear()

    def __copy__(self) -> Dict[Any, Any]:
        return dict(self._data)

    def __deepcopy__(self, memo: Dict[int, Any]) -> Dict[Any, Any]:
        clone: Dict[Any, Any] = {}
        memo[id(self)] = clone
        for key, value in self._data.items():
            clone[copy.deepcopy(key, memo)] = copy.deepcopy(value, memo)
        return clone

    def __repr__(self) -> str:
        return f"IcedMap({self._data!r})"


class IcedSet(IcedView, Set):
    __slots__ = ("_data",)
    _kind = Kind.SET

    def __init__(self, data: set, lock: LockState) -> None:
        self._data = data
        self._lock = lock

    @classmethod
    def _from_iterable(cls, it: Iterable[Any]) -> set:
        # set algebra on a view yields a plain set
        return set(it)

    def __len__(self) -> int: return len(self._data)
    def __iter__(self) -> Iterator[Any]: return iter(self._data)
    def __contains__(self, value: object) -> bool: return value in self._data

    def add(self, value: Any) -> None:
        self._check("add", f"Cannot add {value}, set is frozen.")
        self._data.add(value)

    def delete(self, value: Any) -> bool:
        self._check("delete", f"Cannot delete {value}, set is frozen.")
        if value not in self._data:
            return False
        self._data.remove(value)
        return True

    def discard(self, value: Any) -> None:
        self.delete(value)

    def remove(self, value: Any) -> None:
        if not self.delete(value):
            raise KeyError(value)

    def clear(self) -> None:
        self._check("clear", "Cannot clear set, set is frozen.")
        self._data.clear()

    def __copy__(self) -> set:
        return set(self._data)

    def __deepcopy__(self, memo: Dict[int, Any]) -> set:
        clone: set = set()
        memo[id(self)] = clone
        clone.update(copy.deepcopy(v, memo) for v in self._data)
        return clone

    def __repr__(self) -> str:
        return f"IcedSet({self._data!r})"
