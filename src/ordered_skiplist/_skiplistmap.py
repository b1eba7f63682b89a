"""
SkipListMap - Ordered mapping facade over SkipList

This module provides SkipListMap, a dict-like container with sorted
iteration. It wraps SkipList and adds the MutableMapping protocol plus
ordered lookups. Like SkipList it performs no locking.
"""

from collections.abc import Mapping, MutableMapping
from typing import (
    Any, Callable, Iterable, Iterator, List, Optional,
    Tuple, Type, TypeVar, Union
)

from ordered_skiplist._comparator import Comparator
from ordered_skiplist._errors import NotFoundError
from ordered_skiplist._skiplist import SkipList


K = TypeVar('K')
V = TypeVar('V')

_MISSING = object()


class SkipListMap(MutableMapping):
    """Ordered map based on a skip list.

    Provides dict-like API with keys kept in comparator order. Supports
    custom ordering via comparator, key function or key type.
    None is never a key: looking it up behaves like a missing key, while
    storing it raises NilKeyError.

    Example:
        >>> m = SkipListMap()
        >>> m['bob'] = 200
        >>> m['alice'] = 100
        >>> print(m['alice'])
        100
        >>> list(m.keys())
        ['alice', 'bob']
    """

    __slots__ = ('_skiplist',)

    def __init__(
        self,
        items: Optional[Iterable[Tuple[K, V]]] = None,
        *,
        cmp: Optional[Union[Comparator, Callable[[Any, Any], int]]] = None,
        key: Optional[Callable[[Any], Any]] = None,
        key_type: Optional[Union[Type, str]] = None,
        seed: Optional[int] = None,
        name: Optional[str] = None,
    ):
        """Initialize SkipListMap.

        Args:
            items: Initial key-value pairs
            cmp: Comparator or comparison function
            key: Key extraction function
            key_type: int or str to select a built-in comparator
            seed: Seed for level sampling
            name: Label used when reporting to a profiler
        """
        self._skiplist: SkipList = SkipList(
            cmp, key=key, key_type=key_type, seed=seed, name=name,
        )

        if items:
            for k, v in items:
                self._skiplist.insert(k, v)

    # ==========================================================================
    # MutableMapping interface
    # ==========================================================================

    def __getitem__(self, key: K) -> V:
        """Get value for key.

        Raises:
            KeyError: If key not found
        """
        if key is None:
            raise KeyError(key)
        return self._skiplist.search(key)

    def __setitem__(self, key: K, value: V) -> None:
        """Set value for key."""
        self._skiplist.insert(key, value)

    def __delitem__(self, key: K) -> None:
        """Delete key.

        Raises:
            KeyError: If key not found
        """
        if key is None:
            raise KeyError(key)
        self._skiplist.delete(key)

    def __contains__(self, key: object) -> bool:
        """Check if key exists."""
        return key in self._skiplist

    def __len__(self) -> int:
        """Get number of entries."""
        return len(self._skiplist)

    def __iter__(self) -> Iterator[K]:
        """Iterate over keys in sorted order."""
        return iter(self._skiplist)

    # ==========================================================================
    # Dict-like operations
    # ==========================================================================

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Get value for key with default."""
        if key is None:
            return default
        return self._skiplist.get(key, default)

    def pop(self, key: K, default: Any = _MISSING) -> V:
        """Remove and return value for key.

        Raises:
            KeyError: If key not found and no default given
        """
        try:
            if key is None:
                raise KeyError(key)
            return self._skiplist.delete(key)
        except KeyError:
            if default is _MISSING:
                raise
            return default

    def setdefault(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Get value, setting default if key doesn't exist."""
        try:
            return self._skiplist.search(key)
        except NotFoundError:
            self._skiplist.insert(key, default)  # type: ignore[arg-type]
            return default

    def update(self, other: Union[Mapping[K, V], Iterable[Tuple[K, V]], None] = None, **kwargs: V) -> None:
        """Update from a mapping or iterable of (key, value) pairs."""
        if other:
            pairs = other.items() if isinstance(other, Mapping) else other
            for k, v in pairs:
                self._skiplist.insert(k, v)
        for k, v in kwargs.items():
            self._skiplist.insert(k, v)  # type: ignore[arg-type]

    def clear(self) -> None:
        """Remove all entries."""
        self._skiplist.clear()

    # ==========================================================================
    # Ordered operations
    # ==========================================================================

    def first_key(self) -> K:
        """Get smallest key.

        Raises:
            KeyError: If map is empty
        """
        if not self._skiplist:
            raise KeyError("Map is empty")
        return self._skiplist.first_key()  # type: ignore[return-value]

    def last_key(self) -> K:
        """Get largest key.

        Raises:
            KeyError: If map is empty
        """
        if not self._skiplist:
            raise KeyError("Map is empty")
        return self._skiplist.last_key()  # type: ignore[return-value]

    def floor_key(self, key: K) -> Optional[K]:
        """Get greatest key less than or equal to given key."""
        return self._skiplist.floor_key(key)

    def ceiling_key(self, key: K) -> Optional[K]:
        """Get smallest key greater than or equal to given key."""
        return self._skiplist.ceiling_key(key)

    # ==========================================================================
    # Range operations
    # ==========================================================================

    def keys(self, start: Optional[K] = None, stop: Optional[K] = None) -> Iterator[K]:  # type: ignore[override]
        """Iterate over keys in [start, stop)."""
        return self._skiplist.keys(start, stop)

    def values(self, start: Optional[K] = None, stop: Optional[K] = None) -> Iterator[V]:  # type: ignore[override]
        """Iterate over values in key order for keys in [start, stop)."""
        return self._skiplist.values(start, stop)

    def items(self, start: Optional[K] = None, stop: Optional[K] = None) -> Iterator[Tuple[K, V]]:  # type: ignore[override]
        """Iterate over (key, value) pairs for keys in [start, stop)."""
        return self._skiplist.items(start, stop)

    # ==========================================================================
    # Snapshots
    # ==========================================================================

    def sorted_keys(self, reverse: bool = False) -> List[K]:
        """New list of keys in comparator order."""
        return self._skiplist.sort_by_key(reverse)

    def sorted_values(self, reverse: bool = False) -> List[V]:
        """New list of values ordered by value."""
        return self._skiplist.sort_by_value(reverse)

    # ==========================================================================
    # Properties
    # ==========================================================================

    @property
    def skiplist(self) -> SkipList:
        """Underlying SkipList."""
        return self._skiplist

    @property
    def comparator_type(self) -> str:
        """Get comparator type string."""
        return self._skiplist.comparator_type

    def __repr__(self) -> str:
        """String representation."""
        items = list(self.items())
        if len(items) > 5:
            items_str = ", ".join(f"{k!r}: {v!r}" for k, v in items[:5]) + ", ..."
        else:
            items_str = ", ".join(f"{k!r}: {v!r}" for k, v in items)
        return f"SkipListMap({{{items_str}}})"
