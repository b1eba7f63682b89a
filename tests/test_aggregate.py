"""Tests for min/max queries and sorted snapshots."""

import pytest

from ordered_skiplist import Comparator, SkipList, compare_values


def by_type_then_value(a, b):
    ka = (type(a).__name__, a)
    kb = (type(b).__name__, b)
    return (ka > kb) - (ka < kb)


@pytest.fixture
def mixed():
    """A list holding both int and str keys."""
    s = SkipList(by_type_then_value, seed=21)
    for k in [5, -3, 12, 'pear', 'apple', '', 'zebra']:
        s.insert(k, k)
    return s


class TestMinMax:
    """Tests for type-filtered min and max."""

    def test_typed_int_list(self):
        """An int list reads min and max from its ends."""
        s = SkipList(key_type=int, seed=1)
        for k in [40, -7, 13, 0]:
            s.insert(k, None)
        assert s.min_int() == -7
        assert s.max_int() == 40
        assert s.min_string() is None
        assert s.max_string() is None

    def test_typed_string_list(self):
        """A str list reads min and max from its ends."""
        s = SkipList(key_type=str, seed=1)
        for k in ['m', 'b', 'x']:
            s.insert(k, None)
        assert s.min_string() == 'b'
        assert s.max_string() == 'x'
        assert s.min_int() is None

    def test_empty_string_is_a_result(self):
        """The empty string is returned as the minimum, not treated as absent."""
        s = SkipList(key_type=str, seed=1)
        s.insert('', 0)
        assert s.min_string() == ''
        assert s.max_string() == ''

    def test_mixed_keys_filter_by_type(self, mixed):
        """Only keys of the requested type are considered."""
        assert mixed.min_int() == -3
        assert mixed.max_int() == 12
        assert mixed.min_string() == ''
        assert mixed.max_string() == 'zebra'

    def test_reverse_comparator_scans(self):
        """Results do not depend on the list's ordering."""
        s = SkipList(Comparator.reverse(), seed=1)
        for k in [3, 9, 1]:
            s.insert(k, None)
        assert s.min_int() == 1
        assert s.max_int() == 9

    def test_bool_keys_are_not_ints(self):
        """bool keys are excluded from int aggregates."""
        s = SkipList(by_type_then_value, seed=1)
        s.insert(True, None)
        s.insert(2, None)
        assert s.min_int() == 2
        assert s.max_int() == 2

    def test_empty_list(self):
        """An empty list has no extremes."""
        s = SkipList()
        assert s.min_int() is None
        assert s.max_int() is None
        assert s.min_string() is None
        assert s.max_string() is None


class TestCompareValues:
    """Tests for the value ordering."""

    def test_ints(self):
        """ints compare numerically."""
        assert compare_values(1, 2) == -1
        assert compare_values(10, 2) == 1
        assert compare_values(4, 4) == 0

    def test_strings(self):
        """strs compare lexicographically."""
        assert compare_values('a', 'b') == -1
        assert compare_values('b', 'a') == 1

    @pytest.mark.parametrize('a, b', [(1, 'a'), ('a', 1), (1.5, 2), (None, 1), ([], [])])
    def test_other_pairs_are_equal(self, a, b):
        """Mixed or unsupported pairs compare equal."""
        assert compare_values(a, b) == 0


class TestSortByKey:
    """Tests for key snapshots."""

    def test_ascending_and_descending(self):
        """Keys follow the comparator and reverse flips them."""
        s = SkipList(key_type=int, seed=2)
        for k in [5, 1, 3]:
            s.insert(k, None)
        assert s.sort_by_key() == [1, 3, 5]
        assert s.sort_by_key(reverse=True) == [5, 3, 1]

    def test_uses_list_comparator(self):
        """A reverse list snapshots in its own order."""
        s = SkipList(Comparator.reverse(), seed=2)
        for k in ['a', 'c', 'b']:
            s.insert(k, None)
        assert s.sort_by_key() == ['c', 'b', 'a']

    def test_key_function(self):
        """Key function lists sort by the extracted key."""
        s = SkipList(key=abs, seed=2)
        for k in [-4, 1, -2]:
            s.insert(k, None)
        assert s.sort_by_key(reverse=True) == [-4, -2, 1]

    def test_snapshot_is_independent(self):
        """The returned list does not alias the skip list."""
        s = SkipList(seed=2)
        s.insert(1, None)
        keys = s.sort_by_key()
        keys.append(99)
        assert list(s) == [1]

    def test_empty(self):
        """An empty list snapshots to []."""
        assert SkipList().sort_by_key() == []


class TestSortByValue:
    """Tests for value snapshots."""

    def test_int_values(self):
        """int values are sorted numerically."""
        s = SkipList(seed=3)
        for k, v in [('a', 30), ('b', 10), ('c', 20)]:
            s.insert(k, v)
        assert s.sort_by_value() == [10, 20, 30]
        assert s.sort_by_value(reverse=True) == [30, 20, 10]

    def test_string_values(self):
        """str values are sorted lexicographically."""
        s = SkipList(seed=3)
        for k, v in [(1, 'pear'), (2, 'apple'), (3, 'fig')]:
            s.insert(k, v)
        assert s.sort_by_value() == ['apple', 'fig', 'pear']

    def test_mixed_values_keep_key_order(self):
        """Values with no defined order keep their key order."""
        s = SkipList(key_type=int, seed=3)
        for k, v in [(1, 'x'), (2, 7), (3, None), (4, 1.5)]:
            s.insert(k, v)
        assert s.sort_by_value() == ['x', 7, None, 1.5]

    def test_empty(self):
        """An empty list snapshots to []."""
        assert SkipList().sort_by_value() == []
