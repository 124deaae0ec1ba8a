#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

from bisect import bisect_left
from dataclasses import dataclass, field, replace
from typing import Generic, Iterator, Optional, Self

from symtrie.util import _SymT, _VT

@dataclass
class _TrieNode(Generic[_SymT, _VT]):
    symbol: Optional[_SymT] = None
    value: Optional[_VT] = None
    is_leaf: bool = False
    parent: Optional[int] = None
    # arena indices of the children, sorted by symbol; `symbols` runs parallel
    children: list[int] = field(default_factory=list)
    symbols: list[_SymT] = field(default_factory=list)

    def isempty(self) -> bool:
        return len(self.children) == 0

    def find_by_key(self, __symbol: _SymT) -> Optional[int]:
        i = bisect_left(self.symbols, __symbol)
        if i < len(self.symbols) and self.symbols[i] == __symbol:
            return self.children[i]
        return None

    def position(self, __symbol: _SymT) -> int:
        i = bisect_left(self.symbols, __symbol)
        if i == len(self.symbols) or self.symbols[i] != __symbol:
            raise ValueError(f'no child with symbol {__symbol!r}')
        return i

    def push_child(self, __symbol: _SymT, __index: int) -> None:
        """Append a child and bubble it leftward until the symbols are sorted again.

        Fan-out is bounded by the alphabet, so the linear repositioning keeps
        insertion cheap while lookups stay logarithmic.
        """
        symbols, children = self.symbols, self.children
        symbols.append(__symbol)
        children.append(__index)
        i = len(symbols) - 1
        while i > 0 and __symbol < symbols[i - 1]:
            symbols[i], symbols[i - 1] = symbols[i - 1], symbols[i]
            children[i], children[i - 1] = children[i - 1], children[i]
            i -= 1

    def remove_child(self, __index: int) -> None:
        i = self.children.index(__index)
        del self.children[i]
        del self.symbols[i]

    def clone(self) -> Self:
        return replace(self, children=list(self.children), symbols=list(self.symbols))


class _NodeArena(Generic[_SymT, _VT]):
    """List-backed node storage; nodes refer to each other by index.

    Slot 0 always holds the root. Freed slots are recycled by `new`.
    """
    ROOT = 0

    nodes: list[Optional[_TrieNode[_SymT, _VT]]]
    free: list[int]

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.nodes = [_TrieNode()]
        self.free = []

    @property
    def root(self) -> _TrieNode[_SymT, _VT]:
        return self[self.ROOT]

    def __getitem__(self, __index: int) -> _TrieNode[_SymT, _VT]:
        node = self.nodes[__index]
        if node is None:
            raise IndexError(f'node {__index} has been freed')
        return node

    def __len__(self) -> int:
        return len(self.nodes) - len(self.free)

    def live(self) -> Iterator[tuple[int, _TrieNode[_SymT, _VT]]]:
        for i, node in enumerate(self.nodes):
            if node is not None:
                yield i, node

    def new(self, __symbol: _SymT, __parent: int) -> int:
        """Allocate a non-leaf node and hook it under `__parent`."""
        node: _TrieNode[_SymT, _VT] = _TrieNode(symbol=__symbol, parent=__parent)
        if self.free:
            index = self.free.pop()
            self.nodes[index] = node
        else:
            index = len(self.nodes)
            self.nodes.append(node)
        self[__parent].push_child(__symbol, index)
        return index

    def free_subtree(self, __index: int) -> int:
        # caller detaches the subtree from its parent first
        stack = [__index]
        count = 0
        while stack:
            i = stack.pop()
            stack.extend(self[i].children)
            self.nodes[i] = None
            self.free.append(i)
            count += 1
        return count

    def clone(self) -> Self:
        other = self.__class__()
        other.nodes = [None if node is None else node.clone() for node in self.nodes]
        other.free = list(self.free)
        return other

    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}(live={len(self)}, free={len(self.free)})'
