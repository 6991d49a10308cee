from dataclasses import dataclass
from types import SimpleNamespace

import pytest

from icelock import icelock


@dataclass
class Point:
    x: int
    y: int


@dataclass(slots=True)
class SlottedPoint:
    x: int
    y: int


@pytest.fixture
def lock():
    """
    lock(value, **options) -> Icelock
    Builds a guard over 'value'; keyword arguments become Options fields.
    """
    def _lock(value, **options):
        return icelock(value, options or None)
    return _lock


@pytest.fixture
def ns():
    return SimpleNamespace


@pytest.fixture
def point():
    return Point


class Node:
    """Plain identity-hashed object, usable as a set member or dict key."""

    def __init__(self, **fields):
        self.__dict__.update(fields)


@pytest.fixture
def node():
    return Node


@pytest.fixture
def slotted_point():
    return SlottedPoint
