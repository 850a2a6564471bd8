from __future__ import annotations
from collections.abc import Iterable
from typing import TypeVar

__all__ = ["PositionIndex"]

Self = TypeVar("Self", bound="PositionIndex")


class PositionIndex:
    """
    Implicit summation tree over the lengths of a list of blocks.

    The tree is stored level by level in one flat list, like a binary
    heap: the root is at 0 and the children of node `i` are at `2i + 1`
    and `2i + 2`. The leaves start at `offset` and hold the block
    lengths in order, padded with zeros up to a power of two.

    For example, the blocks

        [[1, 2, 3], [4, 5], [6, 7, 8, 9], [10, 11, 12, 13, 14]]

    give the leaves `[3, 2, 4, 5]`, their pairwise sums `[5, 9]` and
    the root `[14]`, stored as

        tree = [14, 5, 9, 3, 2, 4, 5]
        offset = 3
    """
    _offset: int
    _tree: list[int]

    __slots__ = {
        "_offset":
            "The position of the first leaf in the tree.",
        "_tree":
            "The nodes of the tree, root first.",
    }

    def __init__(self: Self, lengths: Iterable[int], /) -> None:
        row = [*lengths]
        size = 1
        while size < len(row):
            size *= 2
        row.extend([0] * (size - len(row)))
        levels = [row]
        while len(row) > 1:
            row = [row[i] + row[i + 1] for i in range(0, len(row), 2)]
            levels.append(row)
        self._tree = [x for level in reversed(levels) for x in level]
        self._offset = size - 1

    def __repr__(self: Self, /) -> str:
        return f"{type(self).__name__}({self.leaves()!r})"

    @property
    def offset(self: Self, /) -> int:
        return self._offset

    @property
    def total(self: Self, /) -> int:
        return self._tree[0]

    def leaves(self: Self, /) -> list[int]:
        return self._tree[self._offset:]

    def locate(self: Self, position: int, /) -> tuple[int, int]:
        """
        Convert a global position into a `(block, offset)` pair.

        Starting at the root, the position is compared with the left
        child. When smaller, traversal moves left. Otherwise the left
        child's total is subtracted and traversal moves right. The leaf
        reached gives the block and what remains of the position is the
        offset within it.

        Using the example tree above, position 8 moves right past the
        5 (leaving 3), then left since 3 < 4, and lands on leaf 5, so
        the result is `(5 - 3, 3) == (2, 3)`.
        """
        tree = self._tree
        if not 0 <= position < tree[0]:
            raise IndexError("index out of range")
        len_ = len(tree)
        node = 0
        child = 1
        while child < len_:
            if position < tree[child]:
                node = child
            else:
                position -= tree[child]
                node = child + 1
            child = 2 * node + 1
        return (node - self._offset, position)

    def position(self: Self, block: int, offset: int, /) -> int:
        """Convert a `(block, offset)` pair into a global position."""
        if block == 0:
            return offset
        tree = self._tree
        total = 0
        node = block + self._offset
        while node > 0:
            # Right children sit at even nodes.
            if node % 2 == 0:
                total += tree[node - 1]
            node = (node - 1) // 2
        return total + offset

    def update(self: Self, block: int, delta: int, /) -> None:
        """Add `delta` to the length of a block and all of its ancestors."""
        tree = self._tree
        node = block + self._offset
        if not self._offset <= node < len(tree):
            raise IndexError("block out of range")
        while node > 0:
            tree[node] += delta
            node = (node - 1) // 2
        tree[0] += delta
