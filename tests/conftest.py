"""Shared pytest fixtures for symtrie tests."""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from symtrie import Trie  # noqa: E402


@pytest.fixture
def animals():
    """The cat/car/dog trie used throughout the tests."""
    trie = Trie()
    trie.insert("cat", 1)
    trie.insert("car", 2)
    trie.insert("dog", 3)
    return trie


@pytest.fixture
def nested():
    """Keys that are prefixes of each other, inserted out of order."""
    trie = Trie()
    for key in ["abc", "b", "a", "ba", "ab", "abd"]:
        trie.insert(key, key.upper())
    return trie


def check_invariants(trie):
    """Walk the node arena and assert the structural invariants of the trie.

    Returns the number of live nodes, root included.
    """
    arena = trie._arena
    leaves = 0
    live = 0
    for index, node in arena.live():
        live += 1
        assert node.symbols == sorted(node.symbols), f"children of node {index} are not sorted"
        assert len(set(node.symbols)) == len(node.symbols), f"duplicate child symbols under node {index}"
        assert len(node.children) == len(node.symbols)
        for child, symbol in zip(node.children, node.symbols):
            assert arena[child].parent == index
            assert arena[child].symbol == symbol
        if index == arena.ROOT:
            assert node.parent is None
            assert not node.is_leaf
            continue
        if node.is_leaf:
            leaves += 1
        else:
            assert node.children, f"node {index} carries no key and has no children"
    assert leaves == len(trie)
    assert live == len(arena)
    return live
