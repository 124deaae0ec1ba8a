from symtrie.node import _NodeArena, _TrieNode

import pytest


def test_push_child_keeps_symbols_sorted():
    """Children pushed in any order end up sorted by symbol."""
    node = _TrieNode()
    for index, symbol in enumerate("dbeac", start=1):
        node.push_child(symbol, index)
    assert node.symbols == ["a", "b", "c", "d", "e"]
    assert node.children == [4, 2, 5, 1, 3]


def test_find_by_key():
    """Binary search returns the child index or None."""
    node = _TrieNode()
    for index, symbol in enumerate("xmq", start=10):
        node.push_child(symbol, index)
    assert node.find_by_key("m") == 11
    assert node.find_by_key("q") == 12
    assert node.find_by_key("x") == 10
    assert node.find_by_key("a") is None
    assert node.find_by_key("z") is None
    assert _TrieNode().find_by_key("a") is None


def test_position_and_remove_child():
    """position() locates a child by symbol; remove_child() detaches it."""
    node = _TrieNode()
    for index, symbol in enumerate("abc", start=1):
        node.push_child(symbol, index)
    assert node.position("c") == 2
    node.remove_child(2)
    assert node.symbols == ["a", "c"]
    assert node.children == [1, 3]
    with pytest.raises(ValueError):
        node.position("b")


def test_clone_does_not_share_child_lists():
    node = _TrieNode(symbol="a", value=1, is_leaf=True)
    node.push_child("b", 1)
    twin = node.clone()
    twin.push_child("c", 2)
    assert node.symbols == ["b"]
    assert twin.symbols == ["b", "c"]
    assert twin.value == 1 and twin.is_leaf


def test_arena_new_links_parent_and_child():
    arena = _NodeArena()
    a = arena.new("a", arena.ROOT)
    b = arena.new("b", a)
    assert arena.root.children == [a]
    assert arena[b].parent == a
    assert arena[a].find_by_key("b") == b
    assert len(arena) == 3


def test_arena_free_subtree_recycles_slots():
    """Freed slots are handed out again before the arena grows."""
    arena = _NodeArena()
    a = arena.new("a", arena.ROOT)
    arena.new("b", a)
    arena.new("c", a)
    arena.root.remove_child(a)
    assert arena.free_subtree(a) == 3
    assert len(arena) == 1
    with pytest.raises(IndexError):
        arena[a]
    size = len(arena.nodes)
    for symbol in "xyz":
        arena.new(symbol, arena.ROOT)
    assert len(arena.nodes) == size
    assert arena.root.symbols == ["x", "y", "z"]


def test_arena_clone_is_independent():
    arena = _NodeArena()
    a = arena.new("a", arena.ROOT)
    twin = arena.clone()
    twin.new("b", a)
    twin[a].is_leaf = True
    assert arena[a].isempty()
    assert not arena[a].is_leaf
    assert len(arena) == 2
    assert len(twin) == 3


def test_arena_reset():
    arena = _NodeArena()
    arena.new("a", arena.ROOT)
    arena.reset()
    assert len(arena) == 1
    assert arena.root.isempty()
    assert arena.free == []
