from __future__ import annotations
import logging
import operator
from bisect import bisect_left, bisect_right
from collections.abc import Callable, Iterable, Iterator
from itertools import chain, islice
from typing import Any, Generic, Optional, SupportsIndex, TypeVar, overload

from segmented_collections._src.comparable import SupportsRichComparison
from .mutable_sequence import SortedMutableSequence
from .position_index import PositionIndex

__all__ = ["DEFAULT_LOAD_FACTOR", "SortedList"]

Self = TypeVar("Self", bound="SortedList")
T = TypeVar("T", bound=SupportsRichComparison)

logger = logging.getLogger(__name__)

DEFAULT_LOAD_FACTOR: int = 1000


class SortedList(SortedMutableSequence[T], Generic[T]):
    """
    A list which keeps its elements sorted, stored as a list of sorted
    blocks of roughly `load_factor` elements each.

    Values are found by binary searching the largest key of every block
    and then the block itself. Positions are found through a summation
    tree over the block lengths, built on the first positional query
    after the number of blocks changes.

    Duplicates are kept. Elements must be mutually comparable, or a
    `key` must be given which maps them to mutually comparable keys.

    Iterating is lazy and each call to `iter` starts over, but the list
    must not be mutated while an iteration is in progress. Iterate over
    a copy instead.

    Not thread-safe: writers must be serialized by the caller.
    """
    _blocks: list[list[T]]
    _index: Optional[PositionIndex]
    _key: Optional[Callable[[T], Any]]
    _len: int
    _load_factor: int
    _maxes: list[Any]

    __slots__ = {
        "_blocks":
            "The data is stored in sorted blocks.",
        "_index":
            "The length of each block is stored via a summation tree when"
            " needed. `None` until it is built or after the number of"
            " blocks changes.",
        "_key":
            "The key used to order the elements, or `None`.",
        "_len":
            "The total length of the list.",
        "_load_factor":
            "The target length of each block.",
        "_maxes":
            "The key of the largest element of each block.",
    }

    def __init__(
        self: Self,
        iterable: Optional[Iterable[T]] = None,
        /,
        *,
        load_factor: int = DEFAULT_LOAD_FACTOR,
        key: Optional[Callable[[T], Any]] = None,
    ) -> None:
        if isinstance(load_factor, bool) or not isinstance(load_factor, SupportsIndex):
            raise TypeError(f"load_factor must be an integer, got {load_factor!r}")
        load_factor = operator.index(load_factor)
        if load_factor < 1:
            raise ValueError(f"load_factor must be at least 1, got {load_factor!r}")
        if key is not None and not callable(key):
            raise TypeError(f"key must be callable or None, got {key!r}")
        self._blocks = []
        self._index = None
        self._key = key
        self._len = 0
        self._load_factor = load_factor
        self._maxes = []
        if iterable is not None:
            self.update(iterable)

    def __contains__(self: Self, value: Any, /) -> bool:
        return self._locate(value) is not None

    def __copy__(self: Self, /) -> Self:
        return self._from_sorted([*self])

    @overload
    def __delitem__(self: Self, index: int, /) -> None: ...

    @overload
    def __delitem__(self: Self, index: slice, /) -> None: ...

    def __delitem__(self, index, /):
        if not isinstance(index, slice):
            self.delete_at(index)
            return
        range_ = range(self._len)[index]
        if len(range_) == 0:
            return
        elif len(range_) == self._len:
            self.clear()
            return
        if range_.step < 0:
            range_ = range_[::-1]
        if len(range_) < self._len // 8:
            for i in reversed(range_):
                self.delete_at(i)
        else:
            self._reset([x for i, x in enumerate(self) if i not in range_])

    @overload
    def __getitem__(self: Self, index: int, /) -> T: ...

    @overload
    def __getitem__(self: Self, index: slice, /) -> Self: ...

    def __getitem__(self, index, /):
        if isinstance(index, slice):
            range_ = range(self._len)[index]
            if range_.step < 0:
                range_ = range_[::-1]
            return self._from_sorted(self.get_by_step(range_.start, range_.stop, range_.step))
        return self.get(index)

    def __iter__(self: Self, /) -> Iterator[T]:
        return chain.from_iterable(self._blocks)

    def __len__(self: Self, /) -> int:
        return self._len

    def __reversed__(self: Self, /) -> Iterator[T]:
        return (x for block in reversed(self._blocks) for x in reversed(block))

    @property
    def key(self: Self, /) -> Optional[Callable[[T], Any]]:
        return self._key

    @property
    def load_factor(self: Self, /) -> int:
        return self._load_factor

    def _build_index(self: Self, /) -> PositionIndex:
        if self._index is None:
            logger.debug("building position index over %d blocks", len(self._blocks))
            self._index = PositionIndex(map(len, self._blocks))
        return self._index

    def _delete(self: Self, pos: int, idx: int, /) -> None:
        """Delete `blocks[pos][idx]` and rebalance the block if needed."""
        blocks = self._blocks
        maxes = self._maxes
        block = blocks[pos]
        del block[idx]
        self._len -= 1
        if len(block) == 0:
            del blocks[pos]
            del maxes[pos]
            self._index = None
        elif len(block) >= self._load_factor // 2 or self._index is not None:
            # An undersized block is left alone while the index is built.
            maxes[pos] = self._key_of(block[-1])
            if self._index is not None:
                self._index.update(pos, -1)
        elif len(blocks) > 1:
            if pos == 0:
                pos = 1
            prev = pos - 1
            logger.debug("merging block %d into block %d", pos, prev)
            blocks[prev].extend(blocks.pop(pos))
            del maxes[pos]
            maxes[prev] = self._key_of(blocks[prev][-1])
            self._expand(prev)
        else:
            maxes[pos] = self._key_of(block[-1])

    def _expand(self: Self, pos: int, /) -> None:
        """Split `blocks[pos]` if it grew past twice the load factor."""
        blocks = self._blocks
        block = blocks[pos]
        load_factor = self._load_factor
        if len(block) > 2 * load_factor:
            logger.debug("splitting block %d of length %d", pos, len(block))
            blocks.insert(pos + 1, block[load_factor:])
            del block[load_factor:]
            self._maxes.insert(pos, self._key_of(block[-1]))
            self._index = None
        elif self._index is not None:
            self._index.update(pos, 1)

    def _from_sorted(self: Self, data: list[T], /) -> Self:
        """Create a list with the same configuration from already sorted data."""
        result = type(self)(load_factor=self._load_factor, key=self._key)
        result._reset(data)
        return result

    def _key_of(self: Self, element: T, /) -> Any:
        return element if self._key is None else self._key(element)

    def _loc(self: Self, pos: int, idx: int, /) -> int:
        """Convert a `(block, offset)` pair into a position."""
        if pos == 0:
            return idx
        return self._build_index().position(pos, idx)

    def _locate(self: Self, value: Any, /) -> Optional[tuple[int, int]]:
        """Find the `(block, offset)` pair of the leftmost element equal to `value`."""
        blocks = self._blocks
        maxes = self._maxes
        key = self._key
        k = self._key_of(value)
        pos = bisect_left(maxes, k)
        if pos == len(maxes):
            return None
        idx = bisect_left(blocks[pos], k, key=key)
        if key is None:
            x = blocks[pos][idx]
            return (pos, idx) if x is value or x == value else None
        # Elements with equal keys may differ, scan the run of equal keys.
        for pos in range(pos, len(blocks)):
            block = blocks[pos]
            for idx in range(idx, len(block)):
                x = block[idx]
                if k < key(x):
                    return None
                elif x is value or x == value:
                    return (pos, idx)
            idx = 0
        return None

    def _pos(self: Self, index: int, /) -> tuple[int, int]:
        """Convert a position into a `(block, offset)` pair."""
        blocks = self._blocks
        try:
            index = range(self._len)[index]
        except TypeError:
            raise TypeError(f"indices must be integers or slices, not {type(index).__name__}") from None
        except IndexError:
            raise IndexError("index out of range") from None
        if index < len(blocks[0]):
            return (0, index)
        elif index >= self._len - len(blocks[-1]):
            return (len(blocks) - 1, index - self._len + len(blocks[-1]))
        return self._build_index().locate(index)

    def _reset(self: Self, data: list[T], /) -> None:
        """Replace the contents with already sorted data."""
        load_factor = self._load_factor
        self._blocks = [data[i : i + load_factor] for i in range(0, len(data), load_factor)]
        self._maxes = [self._key_of(block[-1]) for block in self._blocks]
        self._index = None
        self._len = len(data)

    def _slice(self: Self, start: int, stop: int, /) -> list[T]:
        """Collect the elements in `range(start, stop)`, assuming valid bounds."""
        if start >= stop:
            return []
        blocks = self._blocks
        pos, idx = self._pos(start)
        result = blocks[pos][idx : idx + stop - start]
        while len(result) < stop - start:
            pos += 1
            result.extend(blocks[pos][: stop - start - len(result)])
        return result

    def add(self: Self, value: T, /) -> None:
        blocks = self._blocks
        maxes = self._maxes
        k = self._key_of(value)
        if not maxes:
            blocks.append([value])
            maxes.append(k)
            self._index = None
            self._len += 1
            return
        pos = bisect_left(maxes, k)
        if pos == len(maxes):
            pos -= 1
            blocks[pos].append(value)
            maxes[pos] = k
        else:
            block = blocks[pos]
            block.insert(bisect_right(block, k, key=self._key), value)
        self._len += 1
        self._expand(pos)

    def bisect_left(self: Self, value: Any, /) -> int:
        maxes = self._maxes
        if not maxes:
            return 0
        k = self._key_of(value)
        pos = bisect_left(maxes, k)
        if pos == len(maxes):
            return self._len
        return self._loc(pos, bisect_left(self._blocks[pos], k, key=self._key))

    def bisect_right(self: Self, value: Any, /) -> int:
        maxes = self._maxes
        if not maxes:
            return 0
        k = self._key_of(value)
        pos = bisect_right(maxes, k)
        if pos == len(maxes):
            return self._len
        return self._loc(pos, bisect_right(self._blocks[pos], k, key=self._key))

    def clear(self: Self, /) -> None:
        self._blocks.clear()
        self._index = None
        self._len = 0
        self._maxes.clear()

    def count(self: Self, value: Any, /) -> int:
        if self._key is None:
            return self.bisect_right(value) - self.bisect_left(value)
        return sum(
            1
            for x in self.islice(self.bisect_left(value), self.bisect_right(value))
            if x is value or x == value
        )

    def delete(self: Self, value: Any, /) -> None:
        location = self._locate(value)
        if location is not None:
            self._delete(*location)

    def delete_at(self: Self, index: int, /) -> T:
        pos, idx = self._pos(index)
        value = self._blocks[pos][idx]
        self._delete(pos, idx)
        return value

    def first(self: Self, /) -> Optional[T]:
        return self._blocks[0][0] if self._blocks else None

    def get(self: Self, index: int, /) -> T:
        pos, idx = self._pos(index)
        return self._blocks[pos][idx]

    def get_by_step(self: Self, start: Optional[int] = None, stop: Optional[int] = None, step: Optional[int] = None, /) -> list[T]:
        """
        Returns the elements at `range(len(self))[start:stop:step]`.

        Out of range bounds are clamped and a zero step raises a
        `ValueError`, as with slicing a list.
        """
        range_ = range(self._len)[start:stop:step]
        if len(range_) == 0:
            return []
        elif range_.step == 1:
            return self._slice(range_.start, range_.stop)
        elif range_.step == -1:
            result = self._slice(range_.stop + 1, range_.start + 1)
            result.reverse()
            return result
        elif len(range_) > self._len // 8:
            data = [*self]
            return [data[i] for i in range_]
        else:
            return [self.get(i) for i in range_]

    def get_range(self: Self, start: Optional[int] = None, stop: Optional[int] = None, /, *, inclusive: bool = False) -> list[T]:
        """
        Returns the elements from position `start` up to `stop`.

        Negative bounds count from the end and `None` leaves the bound
        open. The `stop` is excluded unless `inclusive` is set. Out of
        range bounds are clamped, so the result may be empty.
        """
        if inclusive and stop is not None:
            stop = operator.index(stop)
            # A stop of -1 means the last element, so the whole tail.
            stop = None if stop == -1 else stop + 1
        range_ = range(self._len)[start:stop]
        return self._slice(range_.start, range_.stop)

    def get_span(self: Self, start: int, length: int, /) -> list[T]:
        """Returns up to `length` elements starting from position `start`."""
        length = operator.index(length)
        if length < 0:
            raise ValueError(f"length must not be negative, got {length!r}")
        start = range(self._len)[start]
        return self._slice(start, min(start + length, self._len))

    def islice(self: Self, start: Optional[int] = None, stop: Optional[int] = None, /) -> Iterator[T]:
        range_ = range(self._len)[start:stop]
        if len(range_) == 0:
            return iter(())
        elif range_.start == 0:
            return islice(self, range_.stop)
        pos, idx = self._pos(range_.start)
        blocks = self._blocks
        return islice(
            chain(
                islice(blocks[pos], idx, None),
                chain.from_iterable(islice(blocks, pos + 1, None)),
            ),
            len(range_),
        )

    def last(self: Self, /) -> Optional[T]:
        return self._blocks[-1][-1] if self._blocks else None

    def max(self: Self, /) -> Optional[T]:
        return self.last()

    def min(self: Self, /) -> Optional[T]:
        return self.first()

    def pop(self: Self, index: Optional[int] = None, /) -> Optional[T]:
        """
        Remove and return the last element, or `None` if empty.

        If an `index` is given, remove and return the element at that
        position instead, raising an `IndexError` if it is out of range.
        """
        if index is not None:
            return self.delete_at(index)
        blocks = self._blocks
        if not blocks:
            return None
        block = blocks[-1]
        value = block.pop()
        self._len -= 1
        if len(block) == 0:
            del blocks[-1]
            del self._maxes[-1]
            self._index = None
        else:
            self._maxes[-1] = self._key_of(block[-1])
            if self._index is not None:
                self._index.update(len(blocks) - 1, -1)
        return value

    def shift(self: Self, /) -> Optional[T]:
        """Remove and return the first element, or `None` if empty."""
        blocks = self._blocks
        if not blocks:
            return None
        block = blocks[0]
        value = block.pop(0)
        self._len -= 1
        if len(block) == 0:
            del blocks[0]
            del self._maxes[0]
            self._index = None
        elif self._index is not None:
            self._index.update(0, -1)
        return value

    def update(self: Self, iterable: Iterable[T], /) -> None:
        if not isinstance(iterable, Iterable):
            raise TypeError(f"{type(self).__name__}.update expected an iterable, got {iterable!r}")
        values = sorted(iterable, key=self._key)
        if self._len == 0:
            self._reset(values)
        elif len(values) * 4 >= self._len:
            logger.debug("rebuilding %d elements with a batch of %d", self._len, len(values))
            data = [*self]
            data.extend(values)
            data.sort(key=self._key)
            self._reset(data)
        else:
            for value in values:
                self.add(value)
