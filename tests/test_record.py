import copy
from types import SimpleNamespace

import pytest

from icelock import IcedRecord, MutationWhileFrozenError


def test_record_view(lock, ns):
    view, freeze, unfreeze = lock(ns(a=1, b=2))
    assert isinstance(view, IcedRecord)
    assert callable(freeze) and callable(unfreeze)
    assert view.a == 1
    assert view["b"] == 2
    assert "a" in view


def test_set_on_frozen_record(lock, ns):
    view, _, _ = lock(ns(a=1, b=2))
    with pytest.raises(MutationWhileFrozenError, match="Cannot set c, object is frozen."):
        view.c = 3
    with pytest.raises(MutationWhileFrozenError, match="Cannot set c, object is frozen."):
        view["c"] = 3
    assert "c" not in view


def test_delete_on_frozen_record(lock, ns):
    view, _, _ = lock(ns(a=1, b=2))
    with pytest.raises(MutationWhileFrozenError, match="Cannot delete a, object is frozen."):
        del view.a
    assert view.a == 1


def test_thawed_record(lock, ns):
    view, _, unfreeze = lock(ns(a=1, b=2))
    unfreeze()
    view.c = 3
    assert view.c == 3
    del view.a
    assert not hasattr(view, "a")


def test_refreeze_record(lock, ns):
    view, freeze, unfreeze = lock(ns(a=1, b=2))
    unfreeze()
    view.c = 3
    freeze()
    with pytest.raises(MutationWhileFrozenError, match="Cannot set d, object is frozen."):
        view.d = 4


def test_nested_record(lock, ns):
    view, _, unfreeze = lock(ns(a=ns(b=1)))
    assert isinstance(view.a, IcedRecord)
    with pytest.raises(MutationWhileFrozenError, match="Cannot set b, object is frozen."):
        view.a.b = 2
    with pytest.raises(MutationWhileFrozenError, match="Cannot delete b, object is frozen."):
        del view.a.b
    unfreeze()
    view.a.b = 2
    assert view.a.b == 2
    del view.a.b
    assert not hasattr(view.a, "b")


def test_dataclass_record(lock, point):
    original = point(1, 2)
    view, _, unfreeze = lock(original)
    with pytest.raises(MutationWhileFrozenError):
        view.x = 10
    unfreeze()
    view.x = 10
    assert view.x == 10
    assert original.x == 1


def test_missing_attribute(lock, ns):
    view, _, _ = lock(ns(a=1))
    with pytest.raises(AttributeError):
        view.nope


def test_deepcopy_gives_plain_record(lock, point):
    view, freeze, _ = lock(point(1, [2, 3]))
    freeze()
    thawed = copy.deepcopy(view)
    assert type(thawed) is point
    thawed.x = 5
    thawed.y.append(4)
    assert thawed == point(5, [2, 3, 4])
    assert view.x == 1
    assert list(view.y) == [2, 3]


def test_deepcopy_delete_on_clone(lock, ns):
    view, _, _ = lock(ns(a=1, b=2))
    thawed = copy.deepcopy(view)
    del thawed.a
    assert vars(thawed) == {"b": 2}
    assert isinstance(thawed, SimpleNamespace)


def test_slotted_dataclass_inside_list(lock, slotted_point):
    original = slotted_point(1, [2])
    view, _, unfreeze = lock([original])
    assert isinstance(view[0], IcedRecord)
    with pytest.raises(MutationWhileFrozenError, match="Cannot set x, object is frozen."):
        view[0].x = 99
    with pytest.raises(MutationWhileFrozenError, match="Cannot push 3, array is frozen."):
        view[0].y.push(3)
    unfreeze()
    view[0].x = 99
    assert view[0].x == 99
    assert original == slotted_point(1, [2])


def test_deepcopy_slotted_dataclass(lock, slotted_point):
    view, _, _ = lock(slotted_point(1, [2]))
    thawed = copy.deepcopy(view)
    assert type(thawed) is slotted_point
    thawed.x = 5
    thawed.y.append(3)
    assert thawed == slotted_point(5, [2, 3])


@pytest.mark.parametrize("name", ["_lock", "_fields", "_record_type", "_kind", "_check", "_set", "_delete"])
def test_fields_named_like_internals(lock, ns, name):
    view, _, unfreeze = lock(ns(**{name: "mine"}))
    assert getattr(view, name) == "mine"
    assert view[name] == "mine"
    with pytest.raises(MutationWhileFrozenError, match=f"Cannot set {name}, object is frozen."):
        setattr(view, name, "theirs")
    unfreeze()
    setattr(view, name, "theirs")
    assert getattr(view, name) == "theirs"
    delattr(view, name)
    assert name not in view


def test_deepcopy_thawed_record(lock, ns):
    view, _, unfreeze = lock(ns(a=ns(b=1)))
    unfreeze()
    view.c = 3
    thawed = copy.deepcopy(view)
    thawed.a.b = 2
    del thawed.c
    assert vars(thawed.a) == {"b": 2}
    assert view.a.b == 1
    assert view.c == 3


def test_callable_record_is_primitive(lock):
    class Handler:
        def __init__(self):
            self.calls = 0

        def __call__(self):
            self.calls += 1

    handler = Handler()
    view, _, _ = lock([handler])
    assert view[0] is handler
    assert lock(handler).kind is None
