"""Tests for the node arena."""

import pytest

from ordered_skiplist import NodeArena, SkipListNode
from ordered_skiplist._arena import HEAD, NIL


class TestSkipListNode:
    """Tests for tower nodes."""

    def test_forward_sized_to_height(self):
        """A node has one NIL successor per level."""
        node = SkipListNode('k', 'v', 3)
        assert node.height == 3
        assert node.forward == [NIL, NIL, NIL]

    def test_sort_key_defaults_to_key(self):
        """sort_key falls back to key."""
        assert SkipListNode('k', 'v', 1).sort_key == 'k'
        assert SkipListNode('K', 'v', 1, sort_key='k').sort_key == 'k'


class TestNodeArena:
    """Tests for index-addressed node storage."""

    def test_new_arena_has_only_head(self):
        """A fresh arena holds just the head sentinel."""
        arena = NodeArena(head_height=4)
        assert len(arena) == 0
        assert arena.head is arena[HEAD]
        assert arena.head.height == 4
        assert arena.head.key is None

    def test_allocate_returns_stable_indices(self):
        """Allocated nodes are reachable by their index."""
        arena = NodeArena()
        a = arena.allocate('a', 1, 2)
        b = arena.allocate('b', 2, 1)
        assert a != b
        assert arena[a].key == 'a'
        assert arena[b].value == 2
        assert len(arena) == 2

    def test_release_recycles_slot(self):
        """A released slot is reused by the next allocation."""
        arena = NodeArena()
        a = arena.allocate('a', 1, 1)
        arena.allocate('b', 2, 1)
        arena.release(a)
        assert len(arena) == 1
        with pytest.raises(IndexError):
            arena[a]

        c = arena.allocate('c', 3, 1)
        assert c == a
        assert arena.capacity == 3

    def test_release_rejects_head_and_dead_slots(self):
        """Only live non-head nodes can be released."""
        arena = NodeArena()
        a = arena.allocate('a', 1, 1)
        with pytest.raises(ValueError):
            arena.release(HEAD)
        arena.release(a)
        with pytest.raises(ValueError):
            arena.release(a)
        with pytest.raises(ValueError):
            arena.release(99)

    def test_negative_index_is_not_a_node(self):
        """NIL never resolves to a node."""
        arena = NodeArena()
        arena.allocate('a', 1, 1)
        with pytest.raises(IndexError):
            arena[NIL]

    def test_reset(self):
        """reset() drops nodes and resizes the head."""
        arena = NodeArena()
        arena.allocate('a', 1, 1)
        arena.reset(32)
        assert len(arena) == 0
        assert arena.capacity == 1
        assert arena.head.height == 32

    def test_none_sort_key_is_kept(self):
        """An extracted sort key of None is not replaced by the key."""
        arena = NodeArena()
        index = arena.allocate('K', 'v', 1, sort_key=None)
        assert arena[index].sort_key is None
        assert SkipListNode('K', 'v', 1, sort_key=None).sort_key is None
