import copy
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from typing import Any, Generic, Optional, TypeVar, overload

from segmented_collections._src.comparable import SupportsRichComparison

T_co = TypeVar("T_co", bound=SupportsRichComparison, covariant=True)

Self = TypeVar("Self", bound="SortedSequence")

reprs_seen: set[int] = set()


class SortedSequence(Sequence[T_co], ABC, Generic[T_co]):
    """
    A sequence kept in sorted order, which can be queried both by value
    and by position.

    Implementations provide the bisection methods and a positional
    iterator, and get value based membership, counting, indexing and
    range queries for free.
    """

    __slots__ = ()

    def __contains__(self: Self, value: Any, /) -> bool:
        for x in self.islice(self.bisect_left(value), self.bisect_right(value)):
            if x is value or x == value:
                return True
        return False

    @abstractmethod
    def __copy__(self: Self, /) -> Self:
        raise NotImplementedError(f"__copy__ is a required method for sorted sequences")

    @overload
    def __getitem__(self: Self, index: int, /) -> T_co: ...

    @overload
    def __getitem__(self: Self, index: slice, /) -> "SortedSequence[T_co]": ...

    @abstractmethod
    def __getitem__(self, index, /):
        raise NotImplementedError(f"__getitem__ is a required method for sorted sequences")

    def __repr__(self: Self, /) -> str:
        if id(self) in reprs_seen:
            return "..."
        elif len(self) == 0:
            return f"{type(self).__name__}()"
        reprs_seen.add(id(self))
        try:
            data = ", ".join([repr(x) for x in self])
            return f"{type(self).__name__}([{data}])"
        finally:
            reprs_seen.remove(id(self))

    def between(
        self: Self,
        start: Optional[Any] = None,
        stop: Optional[Any] = None,
        /,
        *,
        include_start: bool = True,
        include_stop: bool = False,
    ) -> Iterator[T_co]:
        """
        Iterate over the values between `start` and `stop`.

        A bound of `None` leaves that side open. By default the interval
        is half-open, `start <= x < stop`.
        """
        if start is None:
            i = 0
        elif include_start:
            i = self.bisect_left(start)
        else:
            i = self.bisect_right(start)
        if stop is None:
            j = len(self)
        elif include_stop:
            j = self.bisect_right(stop)
        else:
            j = self.bisect_left(stop)
        return self.islice(i, max(i, j))

    @abstractmethod
    def bisect_left(self: Self, value: Any, /) -> int:
        raise NotImplementedError(f"bisect_left is a required method for sorted sequences")

    @abstractmethod
    def bisect_right(self: Self, value: Any, /) -> int:
        raise NotImplementedError(f"bisect_right is a required method for sorted sequences")

    def copy(self: Self, /) -> Self:
        return copy.copy(self)

    def count(self: Self, value: Any, /) -> int:
        return self.bisect_right(value) - self.bisect_left(value)

    def index(self: Self, value: Any, start: int = 0, stop: Optional[int] = None, /) -> int:
        start, stop, _ = slice(start, stop).indices(len(self))
        lo = max(self.bisect_left(value), start)
        hi = min(self.bisect_right(value), stop)
        for i, x in enumerate(self.islice(lo, max(lo, hi)), lo):
            if x is value or x == value:
                return i
        raise ValueError(f"{value!r} is not in the sorted sequence")

    @abstractmethod
    def islice(self: Self, start: Optional[int] = None, stop: Optional[int] = None, /) -> Iterator[T_co]:
        raise NotImplementedError(f"islice is a required method for sorted sequences")
