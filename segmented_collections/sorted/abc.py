from ._src.sequence import SortedSequence
from ._src.mutable_sequence import SortedMutableSequence

__all__ = ["SortedSequence", "SortedMutableSequence"]
