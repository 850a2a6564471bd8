"""
Sorted containers stored as lists of bounded sorted blocks. Values can be
looked up by value through the largest element of each block, and by
position through a lazily built summation tree over the block lengths.
Written in Python 3, this library also includes annotations/type-hints
and abstract base classes for creating custom implementations.
"""
from . import sorted
from .sorted import SortedList

__version__ = "1.0.0"

__all__ = ["SortedList", "sorted"]
