from . import abc
from ._src.list import DEFAULT_LOAD_FACTOR, SortedList
from ._src.position_index import PositionIndex

__all__ = [
    "DEFAULT_LOAD_FACTOR",
    "PositionIndex",
    "SortedList",
]
