from abc import ABC, abstractmethod
from collections.abc import Iterable, MutableSequence
from typing import Any, Generic, TypeVar, overload

from segmented_collections._src.comparable import SupportsRichComparison
from .sequence import SortedSequence

T = TypeVar("T", bound=SupportsRichComparison)

Self = TypeVar("Self", bound="SortedMutableSequence")


class SortedMutableSequence(SortedSequence[T], MutableSequence[T], ABC, Generic[T]):

    __slots__ = ()

    @overload
    def __getitem__(self: Self, index: int, /) -> T: ...

    @overload
    def __getitem__(self: Self, index: slice, /) -> Self: ...

    @abstractmethod
    def __getitem__(self, index, /):
        raise NotImplementedError(f"__getitem__ is a required method for sorted mutable sequences")

    def __iadd__(self: Self, other: Iterable[T], /) -> Self:
        if not isinstance(other, Iterable):
            return NotImplemented
        self.update(other)
        return self

    @overload
    def __setitem__(self: Self, index: int, element: T, /) -> None: ...

    @overload
    def __setitem__(self: Self, index: slice, element: Iterable[T], /) -> None: ...

    def __setitem__(self, index, element, /):
        raise NotImplementedError(f"sorted mutable sequences do not support indexed assignments")

    @abstractmethod
    def add(self: Self, element: T, /) -> None:
        raise NotImplementedError(f"add is a required method for sorted mutable sequences")

    def append(self: Self, element: T, /) -> None:
        self.add(element)

    @abstractmethod
    def delete(self: Self, element: Any, /) -> None:
        raise NotImplementedError(f"delete is a required method for sorted mutable sequences")

    def discard(self: Self, element: Any, /) -> None:
        self.delete(element)

    def extend(self: Self, iterable: Iterable[T], /) -> None:
        self.update(iterable)

    def insert(self: Self, index: int, element: T, /) -> None:
        raise NotImplementedError(
            f"sorted mutable sequences do not support indexed insertion, use"
            f" {type(self).__name__}.add instead"
        )

    def remove(self: Self, element: Any, /) -> None:
        len_ = len(self)
        self.delete(element)
        if len(self) == len_:
            raise ValueError(f"{element!r} is not in the sorted sequence")

    def reverse(self: Self, /) -> None:
        raise NotImplementedError(f"sorted mutable sequences can not be reversed in place")

    @abstractmethod
    def update(self: Self, iterable: Iterable[T], /) -> None:
        raise NotImplementedError(f"update is a required method for sorted mutable sequences")
