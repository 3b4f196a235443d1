from collections import deque

import pytest

from zumic.quicklist import QuickList


def _filled(items, size=3):
    ql = QuickList(size)
    for item in items:
        ql.push_back(item)
    return ql


def test_push_front_and_pop_front():
    ql = QuickList(3)
    ql.push_front(1)
    ql.push_front(2)
    ql.push_front(3)
    assert len(ql) == 3
    assert ql.pop_front() == 3
    assert len(ql) == 2


def test_push_back_and_pop_back():
    ql = _filled([1, 2, 3])
    assert len(ql) == 3
    assert ql.pop_back() == 3
    assert len(ql) == 2


def test_get_and_set():
    ql = _filled([10, 20, 30])
    assert ql.get(1) == 20
    ql.set(1, 25)
    assert ql.get(1) == 25


def test_get_out_of_range():
    ql = _filled([10, 20, 30])
    assert ql.get(3) is None
    assert ql.get(-1) is None


def test_set_out_of_range_raises():
    ql = _filled([10])
    with pytest.raises(IndexError):
        ql.set(5, 1)


def test_clear():
    ql = _filled([1, 2, 3])
    ql.clear()
    assert len(ql) == 0
    assert list(ql) == []


def test_validate():
    ql = _filled([1, 2, 3])
    ql.validate()
    assert ql.segment_count() == 1
    ql._segments[0].append(4)
    with pytest.raises(ValueError, match="exceeds"):
        ql.validate()


def test_validate_length_mismatch():
    ql = _filled([1, 2, 3])
    ql._segments.append(deque([9]))
    with pytest.raises(ValueError, match="Length mismatch"):
        ql.validate()


def test_auto_optimize():
    ql = _filled([1, 2, 3, 4, 5])
    before = ql.segment_count()
    ql.auto_optimize()
    assert ql.segment_count() <= before
    assert len(ql) == 5


def test_from_iterable():
    ql = QuickList.from_iterable(deque([1, 2, 3]), 3)
    assert len(ql) == 3
    assert [ql.get(0), ql.get(1), ql.get(2)] == [1, 2, 3]


def test_to_deque():
    ql = _filled([10, 20, 30])
    assert ql.to_deque() == deque([10, 20, 30])


def test_shrink_to_fit_keeps_items():
    ql = _filled([1, 2, 3])
    ql.shrink_to_fit()
    assert list(ql) == [1, 2, 3]
    ql.validate()
    assert len(ql) == 3


def test_memory_usage():
    ql = _filled([1, 2, 3])
    assert ql.memory_usage() > 0
    assert QuickList(3).memory_usage() == 0


def test_pop_on_empty_returns_none():
    ql = QuickList(3)
    assert ql.pop_front() is None
    assert ql.pop_back() is None
    assert len(ql) == 0


def test_order_preserved_across_many_segments():
    items = list(range(50))
    ql = _filled(items, size=4)
    assert list(ql) == items
    assert all(len(seg) <= 4 for seg in ql._segments)
    ql.validate()


def test_mixed_front_and_back_order():
    ql = QuickList(2)
    ql.push_back(2)
    ql.push_front(1)
    ql.push_back(3)
    ql.push_front(0)
    assert list(ql) == [0, 1, 2, 3]
    assert ql.pop_front() == 0
    assert ql.pop_back() == 3
    assert list(ql) == [1, 2]


def test_equality():
    assert _filled([1, 2, 3]) == QuickList.from_iterable([1, 2, 3], 3)
    assert not (_filled([1, 2, 3]) == _filled([1, 2, 4]))
    assert not (_filled([1, 2], size=3) == _filled([1, 2], size=4))


def test_index_rebuilt_after_push():
    ql = _filled([1, 2, 3, 4])
    assert sorted(ql._index) == [0, 1, 2, 3]
    assert set(ql._index.values()) == set(range(ql.segment_count()))


def test_negative_segment_size_rejected():
    with pytest.raises(ValueError):
        QuickList(-1)