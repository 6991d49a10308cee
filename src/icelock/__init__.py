from .errors import CyclicInputError, IcelockError, MutationWhileFrozenError, NullInputError
from .factory import DEFAULT_OPTIONS, Options, icelock, kind_of
from .state import Icelock, Kind, LockState
from .views import IcedList, IcedMap, IcedRecord, IcedSet, IcedView

__all__ = [
    "icelock",
    "kind_of",
    "Options",
    "DEFAULT_OPTIONS",
    "Icelock",
    "Kind",
    "LockState",
    "IcedView",
    "IcedRecord",
    "IcedList",
    "IcedMap",
    "IcedSet",
    "IcelockError",
    "NullInputError",
    "CyclicInputError",
    "MutationWhileFrozenError",
]
