"""
skiplist - Single-threaded skip list over an index-addressed node arena

This module provides the ordered key-value core: randomized tower heights,
the top-down traversal shared by insert, search and delete, and ordered
navigation over the bottom level. There is no internal locking; callers
that share a list across threads must serialize access themselves.
"""

import logging
import random
import time
from typing import (
    Any, Callable, Generic, Iterator, List, Optional,
    Tuple, Type, TypeVar, Union
)

from ordered_skiplist import _aggregate
from ordered_skiplist._arena import HEAD, NIL, NodeArena, SkipListNode
from ordered_skiplist._comparator import Comparator, resolve_comparator
from ordered_skiplist._config import config, validate_max_level, validate_probability
from ordered_skiplist._cursor import SkipListCursor
from ordered_skiplist._errors import IncomparableError, NilKeyError, NotFoundError
from ordered_skiplist._profiler import get_active_profiler


logger = logging.getLogger(__name__)


K = TypeVar('K')
V = TypeVar('V')


class SkipList(Generic[K, V]):
    """Ordered map from keys to values backed by a skip list.

    Keys are ordered by a comparator fixed at construction. Inserting an
    existing key replaces its value. Expected cost of insert, search and
    delete is O(log n).

    Example:
        >>> s = SkipList(key_type=int, seed=7)
        >>> s.insert(3, "c")
        >>> s.insert(1, "a")
        >>> s.search(3)
        'c'
        >>> list(s)
        [1, 3]
    """

    __slots__ = (
        '_arena',
        '_comparator',
        '_cmp',
        '_level',
        '_length',
        '_max_level',
        '_probability',
        '_rng',
        '_name',
    )

    def __init__(
        self,
        cmp: Optional[Union[Comparator, Callable[[Any, Any], int]]] = None,
        *,
        key: Optional[Callable[[Any], Any]] = None,
        key_type: Optional[Union[Type, str]] = None,
        max_level: Optional[int] = None,
        probability: Optional[float] = None,
        seed: Optional[int] = None,
        name: Optional[str] = None,
    ):
        """Initialize skip list.

        Args:
            cmp: Comparator or comparison function
            key: Key extraction function
            key_type: int or str to select a built-in comparator
            max_level: Maximum tower height (default config.max_level)
            probability: Level promotion probability (default config.level_probability)
            seed: Seed for level sampling (default config.seed)
            name: Label used when reporting to a profiler

        Raises:
            TypeError: If more than one of cmp, key and key_type is given
            ValueError: If key_type, max_level or probability is invalid
        """
        self._comparator = resolve_comparator(cmp, key, key_type)
        self._max_level = (
            config.max_level if max_level is None else validate_max_level(max_level)
        )
        self._probability = (
            config.level_probability if probability is None
            else validate_probability(probability)
        )
        self._rng = random.Random(config.seed if seed is None else seed)
        self._name = name

        if config.enable_statistics:
            self._cmp = self._profiled_compare
        else:
            self._cmp = self._comparator.compare

        self._arena: NodeArena[K, V] = NodeArena(head_height=1)
        self._level = 1
        self._length = 0

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _profiled_compare(self, a: Any, b: Any) -> int:
        profiler = get_active_profiler()
        if profiler is None:
            return self._comparator.compare(a, b)
        start = time.perf_counter_ns()
        result = self._comparator.compare(a, b)
        profiler.record_comparison(
            time.perf_counter_ns() - start, self._name, a, b, result,
        )
        return result

    def _prepare(self, key: Any) -> Any:
        """Validate a key argument and return its sort key."""
        if key is None:
            raise NilKeyError()
        self._comparator.check(key)
        return self._comparator.extract_key(key)

    def _find(self, sort_key: Any, update: Optional[List[int]] = None) -> int:
        """Descend from the top level towards sort_key.

        At each level, advance while the next node's key is strictly less
        than sort_key. When update is given, update[i] receives the index of
        the last node visited at level i.

        Returns:
            Index of the level-0 successor of the last visited node, or NIL
        """
        nodes = self._arena.nodes
        cmp = self._cmp
        current = HEAD
        node = nodes[HEAD]

        for level in range(self._level - 1, -1, -1):
            nxt = node.forward[level]
            while nxt != NIL and cmp(nodes[nxt].sort_key, sort_key) < 0:
                current = nxt
                node = nodes[nxt]
                nxt = node.forward[level]
            if update is not None:
                update[level] = current

        return node.forward[0]

    def _matches(self, index: int, sort_key: Any) -> bool:
        return index != NIL and self._cmp(self._arena[index].sort_key, sort_key) == 0

    def _iter_nodes(self, start: int = NIL) -> Iterator[SkipListNode[K, V]]:
        """Walk the bottom level from start (default: the first node)."""
        nodes = self._arena.nodes
        index = nodes[HEAD].forward[0] if start == NIL else start
        while index != NIL:
            node = nodes[index]
            yield node
            index = node.forward[0]

    def _first_node(self) -> Optional[SkipListNode[K, V]]:
        index = self._arena.head.forward[0]
        return None if index == NIL else self._arena[index]

    def _last_node(self) -> Optional[SkipListNode[K, V]]:
        """Rightmost node, found by descending from the top level."""
        nodes = self._arena.nodes
        node = nodes[HEAD]
        for level in range(self._level - 1, -1, -1):
            while node.forward[level] != NIL:
                node = nodes[node.forward[level]]
        return None if node is nodes[HEAD] else node

    def random_level(self) -> int:
        """Sample a tower height.

        Starts at 1 and adds a level while a coin flip with the list's
        promotion probability succeeds, up to max_level.
        """
        level = 1
        while self._rng.random() < self._probability and level < self._max_level:
            level += 1
        return level

    # ------------------------------------------------------------------
    # Mutation API
    # ------------------------------------------------------------------

    def insert(self, key: K, value: V) -> None:
        """Insert key with value, or replace the value of an existing key.

        Args:
            key: Key to insert
            value: Value to associate

        Raises:
            NilKeyError: If key is None
            IncomparableError: If key cannot be ordered against the list's keys
        """
        sort_key = self._prepare(key)
        update = [HEAD] * self._level
        succ = self._find(sort_key, update)

        if self._matches(succ, sort_key):
            self._arena[succ].value = value
            return

        height = self.random_level()
        if height > self._level:
            head = self._arena.head
            if len(head.forward) < height:
                head.forward.extend([NIL] * (height - len(head.forward)))
            update.extend([HEAD] * (height - self._level))
            logger.debug("skip list %s level %d -> %d", self._name, self._level, height)
            self._level = height

        index = self._arena.allocate(key, value, height, sort_key)
        nodes = self._arena.nodes
        new_node = nodes[index]
        for level in range(height):
            pred = nodes[update[level]]
            new_node.forward[level] = pred.forward[level]
            pred.forward[level] = index

        self._length += 1

    def delete(self, key: K) -> V:
        """Remove key and return its value.

        Args:
            key: Key to delete

        Returns:
            The removed value

        Raises:
            NilKeyError: If key is None
            NotFoundError: If key is not present
            IncomparableError: If key cannot be ordered against the list's keys
        """
        sort_key = self._prepare(key)
        update = [HEAD] * self._level
        target = self._find(sort_key, update)

        if not self._matches(target, sort_key):
            raise NotFoundError(key)

        nodes = self._arena.nodes
        victim = nodes[target]
        for level in range(victim.height):
            pred = nodes[update[level]]
            if pred.forward[level] != target:
                break
            pred.forward[level] = victim.forward[level]

        head = nodes[HEAD]
        previous_level = self._level
        while self._level > 1 and head.forward[self._level - 1] == NIL:
            self._level -= 1
        if self._level != previous_level:
            logger.debug(
                "skip list %s level %d -> %d", self._name, previous_level, self._level
            )

        self._length -= 1
        value = victim.value
        self._arena.release(target)
        return value  # type: ignore[return-value]

    def clear(self) -> None:
        """Remove all entries.

        The head is re-created with max_level forward slots.
        """
        self._arena.reset(self._max_level)
        self._level = 1
        self._length = 0
        logger.debug("skip list %s cleared", self._name)

    # ------------------------------------------------------------------
    # Query API
    # ------------------------------------------------------------------

    def search(self, key: K) -> V:
        """Look up the value for key.

        Raises:
            NilKeyError: If key is None
            NotFoundError: If key is not present
            IncomparableError: If key cannot be ordered against the list's keys
        """
        sort_key = self._prepare(key)
        succ = self._find(sort_key)
        if not self._matches(succ, sort_key):
            raise NotFoundError(key)
        return self._arena[succ].value  # type: ignore[return-value]

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Look up the value for key, returning default if absent."""
        try:
            return self.search(key)
        except NotFoundError:
            return default

    def contains(self, key: K) -> bool:
        """Check if key exists."""
        sort_key = self._prepare(key)
        return self._matches(self._find(sort_key), sort_key)

    def length(self) -> int:
        """Number of entries."""
        return self._length

    def __len__(self) -> int:
        return self._length

    def __contains__(self, key: object) -> bool:
        if key is None or not self._comparator.accepts(key):
            return False
        try:
            return self.contains(key)  # type: ignore[arg-type]
        except IncomparableError:
            return False

    def __iter__(self) -> Iterator[K]:
        """Iterate over keys in order."""
        for node in self._iter_nodes():
            yield node.key  # type: ignore[misc]

    def iterator(self) -> SkipListCursor[K, V]:
        """Create a cursor positioned before the first entry."""
        return SkipListCursor(self._arena)

    def items(
        self,
        start: Optional[K] = None,
        stop: Optional[K] = None,
    ) -> Iterator[Tuple[K, V]]:
        """Iterate over key-value pairs in order.

        Args:
            start: Start key (inclusive)
            stop: Stop key (exclusive)

        Yields:
            Key-value tuples
        """
        if start is not None:
            first = self._find(self._prepare(start))
            if first == NIL:
                return
        else:
            first = NIL

        stop_key = self._prepare(stop) if stop is not None else None
        for node in self._iter_nodes(first):
            if stop_key is not None and self._cmp(node.sort_key, stop_key) >= 0:
                break
            yield node.key, node.value  # type: ignore[misc]

    def keys(
        self,
        start: Optional[K] = None,
        stop: Optional[K] = None,
    ) -> Iterator[K]:
        """Iterate over keys in order."""
        for key, _ in self.items(start, stop):
            yield key

    def values(
        self,
        start: Optional[K] = None,
        stop: Optional[K] = None,
    ) -> Iterator[V]:
        """Iterate over values in key order."""
        for _, value in self.items(start, stop):
            yield value

    def first_key(self) -> Optional[K]:
        """Get the first (smallest) key."""
        node = self._first_node()
        return None if node is None else node.key

    def last_key(self) -> Optional[K]:
        """Get the last (largest) key."""
        node = self._last_node()
        return None if node is None else node.key

    def floor_key(self, key: K) -> Optional[K]:
        """Get the greatest key less than or equal to given key."""
        sort_key = self._prepare(key)
        nodes = self._arena.nodes
        node = nodes[HEAD]

        for level in range(self._level - 1, -1, -1):
            nxt = node.forward[level]
            while nxt != NIL and self._cmp(nodes[nxt].sort_key, sort_key) <= 0:
                node = nodes[nxt]
                nxt = node.forward[level]

        return None if node is nodes[HEAD] else node.key

    def ceiling_key(self, key: K) -> Optional[K]:
        """Get the smallest key greater than or equal to given key."""
        succ = self._find(self._prepare(key))
        return None if succ == NIL else self._arena[succ].key

    # ------------------------------------------------------------------
    # Aggregates and snapshots
    # ------------------------------------------------------------------

    def min_int(self) -> Optional[int]:
        """Smallest int key, or None."""
        return _aggregate.min_int(self)

    def max_int(self) -> Optional[int]:
        """Largest int key, or None."""
        return _aggregate.max_int(self)

    def min_string(self) -> Optional[str]:
        """Smallest str key, or None."""
        return _aggregate.min_string(self)

    def max_string(self) -> Optional[str]:
        """Largest str key, or None."""
        return _aggregate.max_string(self)

    def sort_by_key(self, reverse: bool = False) -> List[K]:
        """New list of all keys, ascending (descending if reverse)."""
        return _aggregate.sort_by_key(self, reverse)

    def sort_by_value(self, reverse: bool = False) -> List[V]:
        """New list of all values, ascending (descending if reverse)."""
        return _aggregate.sort_by_value(self, reverse)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def level(self) -> int:
        """Current number of levels in use."""
        return self._level

    @property
    def max_level(self) -> int:
        return self._max_level

    @property
    def probability(self) -> float:
        return self._probability

    @property
    def comparator(self) -> Comparator:
        return self._comparator

    @property
    def comparator_type(self) -> str:
        """Get the comparator type."""
        return self._comparator.type

    @property
    def name(self) -> Optional[str]:
        return self._name

    def __repr__(self) -> str:
        return (
            f"SkipList(len={self._length}, level={self._level}, "
            f"comparator='{self.comparator_type}')"
        )
