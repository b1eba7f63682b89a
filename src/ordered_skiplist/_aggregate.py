"""
aggregate - Min/max queries and sorted snapshots over a skip list

The min/max helpers are type-filtered: only keys of the requested type are
considered, so a list holding other key types yields None rather than an
error. When the list's comparator already orders exactly that type, the
answer is read from the ends of the structure instead of scanning.
"""

import functools
from typing import TYPE_CHECKING, Any, Callable, List, Optional

from ordered_skiplist._comparator import ComparatorType

if TYPE_CHECKING:
    from ordered_skiplist._skiplist import SkipList


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _extreme(
    skiplist: 'SkipList',
    domain: ComparatorType,
    accept: Callable[[Any], bool],
    lowest: bool,
) -> Any:
    if skiplist.comparator.comparator_type is domain:
        node = skiplist._first_node() if lowest else skiplist._last_node()
        return None if node is None else node.key

    pick = min if lowest else max
    return pick((key for key in skiplist if accept(key)), default=None)


def min_int(skiplist: 'SkipList') -> Optional[int]:
    """Smallest int key in skiplist, or None if it has none."""
    return _extreme(skiplist, ComparatorType.INT, _is_int, lowest=True)


def max_int(skiplist: 'SkipList') -> Optional[int]:
    """Largest int key in skiplist, or None if it has none."""
    return _extreme(skiplist, ComparatorType.INT, _is_int, lowest=False)


def min_string(skiplist: 'SkipList') -> Optional[str]:
    """Lexicographically smallest str key in skiplist, or None.

    The empty string is a valid key and a valid result.
    """
    return _extreme(skiplist, ComparatorType.STRING, _is_str, lowest=True)


def max_string(skiplist: 'SkipList') -> Optional[str]:
    """Lexicographically largest str key in skiplist, or None."""
    return _extreme(skiplist, ComparatorType.STRING, _is_str, lowest=False)


def compare_values(a: Any, b: Any) -> int:
    """Three-way ordering used for sorting values.

    ints compare numerically and strs lexicographically. Any other
    pairing, including int against str, compares equal.
    """
    if _is_int(a) and _is_int(b):
        return (a > b) - (a < b)
    if _is_str(a) and _is_str(b):
        return (a > b) - (a < b)
    return 0


def sort_by_key(skiplist: 'SkipList', reverse: bool = False) -> List[Any]:
    """All keys of skiplist ordered by its comparator.

    Args:
        skiplist: Source list
        reverse: Descending order if True

    Returns:
        New list of keys (empty for an empty skiplist)
    """
    sort_cmp = functools.cmp_to_key(skiplist._cmp)
    pairs = [(node.sort_key, node.key) for node in skiplist._iter_nodes()]
    pairs.sort(key=lambda pair: sort_cmp(pair[0]), reverse=reverse)
    return [key for _, key in pairs]


def sort_by_value(skiplist: 'SkipList', reverse: bool = False) -> List[Any]:
    """All values of skiplist ordered by compare_values.

    The sort is stable, so values with no defined order keep their key
    order relative to each other.

    Args:
        skiplist: Source list
        reverse: Descending order if True

    Returns:
        New list of values (empty for an empty skiplist)
    """
    values = [node.value for node in skiplist._iter_nodes()]
    values.sort(key=functools.cmp_to_key(compare_values), reverse=reverse)
    return values
