import pytest


def _check_invariants(sl):
    key = sl.key if sl.key is not None else (lambda x: x)
    blocks = sl._blocks
    maxes = sl._maxes
    data = [x for block in blocks for x in block]
    assert all(len(block) > 0 for block in blocks)
    assert all(not key(y) < key(x) for x, y in zip(data, data[1:]))
    assert maxes == [key(block[-1]) for block in blocks]
    assert len(data) == len(sl)
    assert (len(blocks) == 0) == (len(sl) == 0)
    assert all(len(block) <= 2 * sl.load_factor for block in blocks)
    index = sl._index
    if index is not None:
        leaves = index.leaves()
        assert leaves[:len(blocks)] == [len(block) for block in blocks]
        assert not any(leaves[len(blocks):])
        tree = index._tree
        for i in range(index.offset):
            assert tree[i] == tree[2 * i + 1] + tree[2 * i + 2]
    return data


@pytest.fixture
def check():
    """Asserts the internal invariants of a SortedList and returns its contents."""
    return _check_invariants
