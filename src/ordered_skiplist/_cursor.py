"""
cursor - Forward-only read cursor over a skip list's bottom level

A cursor starts at a virtual position before the first entry and moves one
entry per next() call. It is single-pass: request a new cursor from
SkipList.iterator() to iterate again. Mutating the list while a cursor is
outstanding leaves the cursor's behaviour undefined.
"""

from typing import Generic, Iterator, Optional, Tuple, TypeVar

from ordered_skiplist._arena import HEAD, NIL, NodeArena


K = TypeVar('K')
V = TypeVar('V')


class SkipListCursor(Generic[K, V]):
    """Cursor over the entries of a SkipList in ascending key order.

    Example:
        >>> cursor = s.iterator()
        >>> while cursor.next():
        ...     print(cursor.key(), cursor.value())
    """

    __slots__ = ('_arena', '_index', '_at_head')

    def __init__(self, arena: NodeArena[K, V]):
        self._arena = arena
        self._index = HEAD
        self._at_head = True

    def next(self) -> bool:
        """Advance to the next entry.

        Returns:
            True if the cursor moved, False if there is no next entry
            (the cursor then stays where it is)
        """
        nxt = self._arena[self._index].forward[0]
        if nxt == NIL:
            return False
        self._index = nxt
        self._at_head = False
        return True

    def key(self) -> Optional[K]:
        """Key of the current entry, or None before the first next()."""
        if self._at_head:
            return None
        return self._arena[self._index].key

    def value(self) -> Optional[V]:
        """Value of the current entry, or None before the first next()."""
        if self._at_head:
            return None
        return self._arena[self._index].value

    @property
    def at_head(self) -> bool:
        return self._at_head

    def __iter__(self) -> Iterator[Tuple[K, V]]:
        return self

    def __next__(self) -> Tuple[K, V]:
        if not self.next():
            raise StopIteration
        return self.key(), self.value()  # type: ignore[return-value]
