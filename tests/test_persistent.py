"""
Tests for the persistent list and map.
"""

import pytest

from joint_scheduler.persistent import FpList, FpMap


class TestFpList:
    """Test cases for FpList."""

    def test_empty_list(self):
        """Empty list has no head and iterates to nothing."""
        empty = FpList.empty()
        assert len(empty) == 0
        assert empty.is_empty
        assert list(empty) == []
        with pytest.raises(IndexError):
            _ = empty.head

    def test_cons_shares_tail(self):
        """Consing returns a new list and leaves the original untouched."""
        base = FpList.of(2, 3)
        extended = base.cons(1)

        assert list(extended) == [1, 2, 3]
        assert list(base) == [2, 3]
        assert extended.tail is base
        assert extended.head == 1

    def test_reverse(self):
        """Reverse yields items in opposite order."""
        items = FpList.singleton("a").cons("b").cons("c")
        assert list(items) == ["c", "b", "a"]
        assert list(items.reverse()) == ["a", "b", "c"]
        assert len(items.reverse()) == 3

    def test_equality(self):
        """Lists with equal items compare equal."""
        assert FpList.of(1, 2) == FpList.empty().cons(2).cons(1)
        assert FpList.of(1, 2) != FpList.of(1)


class TestFpMap:
    """Test cases for FpMap."""

    def test_put_and_get(self):
        """Put returns a new map and the old one keeps its contents."""
        first = FpMap.singleton("a", 1)
        second = first.put("b", 2)
        third = second.put("a", 5)

        assert first.get("b") is None
        assert second["a"] == 1
        assert second["b"] == 2
        assert third["a"] == 5
        assert second["a"] == 1
        assert len(third) == 2

    def test_missing_key(self):
        """Missing keys fall back to the default or raise KeyError."""
        m = FpMap.empty()
        assert m.get("x", 0) == 0
        assert "x" not in m
        with pytest.raises(KeyError):
            _ = m["x"]

    def test_items_are_ordered(self):
        """Items iterate in key order regardless of insertion order."""
        m = FpMap.empty()
        for key in [5, 1, 9, 3, 7, 2, 8]:
            m = m.put(key, key * 10)
        assert list(m.keys()) == [1, 2, 3, 5, 7, 8, 9]
        assert dict(m.items())[7] == 70

    def test_many_insertions_stay_consistent(self):
        """Sequential inserts keep every key reachable."""
        m = FpMap.empty()
        for key in range(200):
            m = m.put(key, str(key))
        assert len(m) == 200
        assert all(m[key] == str(key) for key in range(200))
        assert list(m) == list(range(200))
