"""
arena - Index-addressed storage for skip list tower nodes

Nodes are kept in a flat list and refer to each other by index rather than
by object reference. Index 0 is always the head sentinel and NIL (-1) marks
the end of a level. Released slots are recycled through a free list.
"""

from typing import Any, Generic, List, Optional, TypeVar


K = TypeVar('K')
V = TypeVar('V')


NIL = -1
HEAD = 0

# Marks a node whose sort key is its own key
_SAME_AS_KEY = object()


class SkipListNode(Generic[K, V]):
    """Tower node: a key/value pair plus one successor index per level."""

    __slots__ = ('key', 'sort_key', 'value', 'forward')

    def __init__(
        self,
        key: Optional[K],
        value: Optional[V],
        height: int,
        sort_key: Any = _SAME_AS_KEY,
    ):
        """Initialize node.

        Args:
            key: Node key (None only for the head sentinel)
            value: Node value
            height: Number of levels the node participates in (>= 1)
            sort_key: Extracted sort key (for key function comparators);
                defaults to key. None is kept as given
        """
        self.key = key
        self.sort_key = key if sort_key is _SAME_AS_KEY else sort_key
        self.value = value
        self.forward: List[int] = [NIL] * height

    @property
    def height(self) -> int:
        return len(self.forward)

    def __repr__(self) -> str:
        return f"SkipListNode({self.key!r}: {self.value!r}, height={self.height})"


class NodeArena(Generic[K, V]):
    """Owner of every node in one skip list.

    The arena hands out stable indices. A released index is cleared and
    may be returned again by a later allocate() call.
    """

    __slots__ = ('_nodes', '_free')

    def __init__(self, head_height: int = 1):
        self._nodes: List[Optional[SkipListNode[K, V]]] = []
        self._free: List[int] = []
        self.reset(head_height)

    def reset(self, head_height: int) -> None:
        """Drop every node and create a fresh head sentinel."""
        self._nodes = [SkipListNode(None, None, head_height)]
        self._free = []

    @property
    def head(self) -> SkipListNode[K, V]:
        return self._nodes[HEAD]  # type: ignore[return-value]

    def allocate(
        self, key: K, value: V, height: int, sort_key: Any = _SAME_AS_KEY,
    ) -> int:
        """Create a node and return its index."""
        node: SkipListNode[K, V] = SkipListNode(key, value, height, sort_key)
        if self._free:
            index = self._free.pop()
            self._nodes[index] = node
        else:
            index = len(self._nodes)
            self._nodes.append(node)
        return index

    def release(self, index: int) -> None:
        """Free a fully unlinked node's slot.

        Raises:
            ValueError: If index is the head or not a live node
        """
        if index == HEAD:
            raise ValueError("Cannot release the head sentinel")
        if not 0 < index < len(self._nodes) or self._nodes[index] is None:
            raise ValueError(f"No live node at index {index}")
        self._nodes[index] = None
        self._free.append(index)

    @property
    def nodes(self) -> List[Optional[SkipListNode[K, V]]]:
        """Backing slot list, for traversal loops. Do not mutate."""
        return self._nodes

    def __getitem__(self, index: int) -> SkipListNode[K, V]:
        node = self._nodes[index] if index >= 0 else None
        if node is None:
            raise IndexError(f"No live node at index {index}")
        return node

    def __len__(self) -> int:
        """Number of live nodes, excluding the head."""
        return len(self._nodes) - len(self._free) - 1

    @property
    def capacity(self) -> int:
        """Number of slots, including the head and free slots."""
        return len(self._nodes)
