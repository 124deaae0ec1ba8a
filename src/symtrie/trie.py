#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

import copy
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from io import StringIO
from typing import Any, Callable, Generic, Iterator, Optional, Self

from symtrie.errors import (
    DuplicateKeyError,
    EmptyKeyError,
    EmptySubkeyError,
    IteratorOutOfRangeError,
    NoSuchPrefixError,
)
from symtrie.node import _NodeArena
from symtrie.util import _ST, _VT, logger

ROOT = _NodeArena.ROOT


def _descend_first(arena: _NodeArena, index: int) -> int:
    # non-leaf nodes below the root always have children
    node = arena[index]
    while not node.is_leaf:
        index = node.children[0]
        node = arena[index]
    return index

def _descend_last(arena: _NodeArena, index: int) -> int:
    node = arena[index]
    while not node.isempty():
        index = node.children[-1]
        node = arena[index]
    return index


class TrieIterator(Generic[_ST, _VT]):
    """Bidirectional cursor over the stored keys of a `Trie`.

    `node` is the arena index of the current entry, or ``None`` at end.
    Inserting, erasing or relocating entries, as well as `Trie.clear`,
    `Trie.swap` and `Trie.assign`, invalidate every other iterator.
    """
    node: Optional[int]

    def __init__(self, trie: 'Trie[_ST, _VT]', node: Optional[int] = None) -> None:
        self._trie = trie
        self.node = node

    @property
    def trie(self) -> 'Trie[_ST, _VT]':
        return self._trie

    @property
    def at_end(self) -> bool:
        return self.node is None

    def _index(self) -> int:
        if self.node is None:
            raise IteratorOutOfRangeError('end iterator does not reference an entry')
        return self.node

    @property
    def key(self) -> _ST:
        return self._trie._key_of(self._index())

    @property
    def value(self) -> _VT:
        return self._trie._arena[self._index()].value  # type: ignore

    @value.setter
    def value(self, __value: _VT) -> None:
        self._trie._arena[self._index()].value = __value

    @property
    def item(self) -> tuple[_ST, _VT]:
        return self.key, self.value

    def increment(self) -> Self:
        """Move to the next key in ascending order, or to end after the last one."""
        if self.node is None:
            raise IteratorOutOfRangeError('cannot advance past end')
        arena = self._trie._arena
        node = arena[self.node]
        if not node.isempty():
            self.node = _descend_first(arena, node.children[0])
            return self
        while node.parent is not None:
            parent = arena[node.parent]
            i = parent.position(node.symbol) + 1
            if i < len(parent.children):
                self.node = _descend_first(arena, parent.children[i])
                return self
            node = parent
        self.node = None
        return self

    def decrement(self) -> Self:
        """Move to the previous key in ascending order; end moves to the last key."""
        arena = self._trie._arena
        if self.node is None:
            root = arena.root
            if root.isempty():
                raise IteratorOutOfRangeError('cannot decrement before begin')
            self.node = _descend_last(arena, root.children[-1])
            return self
        node = arena[self.node]
        while node.parent is not None:
            parent_index = node.parent
            parent = arena[parent_index]
            i = parent.position(node.symbol)
            if i > 0:
                self.node = _descend_last(arena, parent.children[i - 1])
                return self
            if parent.is_leaf:
                self.node = parent_index
                return self
            node = parent
        raise IteratorOutOfRangeError('cannot decrement before begin')

    def next(self) -> Self:
        """Postfix increment: move forward and return the old position."""
        old = self.copy()
        self.increment()
        return old

    def prev(self) -> Self:
        """Postfix decrement: move backward and return the old position."""
        old = self.copy()
        self.decrement()
        return old

    def advance(self, __subkey: Sequence) -> Self:
        """Relocate the current entry to the node `__subkey` below it and follow it there."""
        self._trie.relocate(self, __subkey)
        return self

    def copy(self) -> Self:
        return self.__class__(self._trie, self.node)

    __copy__ = copy

    def __eq__(self, __other: object) -> bool:
        if not isinstance(__other, TrieIterator):
            return NotImplemented
        return self._trie is __other._trie and self.node == __other.node

    def __hash__(self) -> int:
        return hash((id(self._trie), self.node))

    def __repr__(self) -> str:
        if self.node is None:
            return f'{self.__class__.__qualname__}(end)'
        return f'{self.__class__.__qualname__}({self.key!r})'


class Trie(MutableMapping[_ST, _VT]):
    """Ordered mapping from symbol sequences to values, stored as a prefix tree.

    Keys are iterated in ascending lexicographic order of their symbols. Keys
    are rebuilt with `keytype`: ``str`` joins the symbols, any other sequence
    type is called with the list of symbols (``tuple``, ``list``, ``bytes``).
    """
    keytype: Callable[[list[Any]], _ST]

    def __init__(self, init: Optional[Mapping[_ST, _VT] | Iterable[tuple[_ST, _VT]]] = None, *, keytype: Callable[..., _ST] = str) -> None:  # type: ignore
        self.keytype = keytype
        self._arena: _NodeArena[Any, _VT] = _NodeArena()
        self._size = 0
        if init is not None:
            self.update(init)

    # container interface

    def begin(self) -> TrieIterator[_ST, _VT]:
        root = self._arena.root
        if root.isempty():
            return self.end()
        return TrieIterator(self, _descend_first(self._arena, root.children[0]))

    def end(self) -> TrieIterator[_ST, _VT]:
        return TrieIterator(self)

    def size(self) -> int:
        return self._size

    def empty(self) -> bool:
        return self._size == 0

    def insert(self, __key: _ST, __value: _VT) -> TrieIterator[_ST, _VT]:
        if len(__key) == 0:
            raise EmptyKeyError('empty key cannot be inserted')
        arena = self._arena
        index = ROOT
        matched = 0
        for symbol in __key:
            child = arena[index].find_by_key(symbol)
            if child is None:
                break
            index = child
            matched += 1
        if matched == len(__key):
            node = arena[index]
            if node.is_leaf:
                raise DuplicateKeyError(__key)
            node.value = __value
            node.is_leaf = True
            self._size += 1
            logger.debug('promoted prefix %r to a stored key', __key)
            return TrieIterator(self, index)
        for symbol in __key[matched:]:
            index = arena.new(symbol, index)
        node = arena[index]
        node.value = __value
        node.is_leaf = True
        self._size += 1
        return TrieIterator(self, index)

    def find(self, __key: _ST) -> TrieIterator[_ST, _VT]:
        index = self._walk(ROOT, __key)
        if index is None or index == ROOT or not self._arena[index].is_leaf:
            return self.end()
        return TrieIterator(self, index)

    def get_value(self, __key: _ST) -> tuple[bool, Optional[_VT]]:
        it = self.find(__key)
        if it.at_end:
            return False, None
        return True, it.value

    def erase(self, __it: TrieIterator[_ST, _VT]) -> None:
        """Remove the entry under `__it`, pruning the branch that only led to it.

        The iterator is left at end.
        """
        index = self._entry(__it)
        arena = self._arena
        node = arena[index]
        if not node.isempty():
            # other keys pass through this node
            node.is_leaf = False
            node.value = None
            self._size -= 1
            __it.node = None
            logger.debug('demoted node %d to a plain prefix', index)
            return
        while True:
            parent = arena[node.parent]  # type: ignore
            if node.parent == ROOT or parent.is_leaf or len(parent.children) > 1:
                break
            index, node = node.parent, parent  # type: ignore
        parent.remove_child(index)
        freed = arena.free_subtree(index)
        self._size -= 1
        __it.node = None
        logger.debug('pruned %d node(s) starting at node %d', freed, index)

    def find_longest_prefix(self) -> TrieIterator[_ST, _VT]:
        """Return the stored key with the most symbols, the first one on ties.

        Despite the name no prefix is matched: every key is scanned.
        """
        best = self.end()
        best_len = 0
        it = self.begin()
        while not it.at_end:
            length = self._depth(it.node)  # type: ignore
            if length > best_len:
                best, best_len = it.copy(), length
            it.increment()
        return best

    def relocate(self, __it: TrieIterator[_ST, _VT], __subkey: Sequence) -> TrieIterator[_ST, _VT]:
        """Move the entry under `__it` to the node reached by `__subkey` below it.

        The value travels with the entry and `__it` is repositioned on the new
        node. The path must already exist and must not end on a stored key.
        """
        if len(__subkey) == 0:
            raise EmptySubkeyError('cannot relocate along an empty path')
        index = self._entry(__it)
        target = self._walk(index, __subkey)
        if target is None:
            raise NoSuchPrefixError(__subkey)
        arena = self._arena
        src, dst = arena[index], arena[target]
        if dst.is_leaf:
            raise DuplicateKeyError(self._key_of(target))
        dst.value, dst.is_leaf = src.value, True
        src.value, src.is_leaf = None, False
        __it.node = target
        logger.debug('relocated entry from node %d to node %d', index, target)
        return __it

    def relocate_entry(self, __old_key: _ST, __new_suffix: Sequence) -> TrieIterator[_ST, _VT]:
        it = self.find(__old_key)
        if it.at_end:
            raise KeyError(__old_key)
        return self.relocate(it, __new_suffix)

    def clear(self) -> None:
        freed = len(self._arena) - 1
        self._arena.reset()
        self._size = 0
        logger.debug('cleared %d node(s)', freed)

    def swap(self, __other: 'Trie[_ST, _VT]') -> None:
        self._arena, __other._arena = __other._arena, self._arena
        self._size, __other._size = __other._size, self._size
        self.keytype, __other.keytype = __other.keytype, self.keytype

    def assign(self, __other: 'Trie[_ST, _VT]') -> Self:
        """Replace the contents with a copy of `__other`; `self` is untouched if copying fails."""
        if __other is not self:
            fresh = __other.copy()
            self.swap(fresh)
        return self

    def copy(self) -> Self:
        """Structurally independent copy; values are shared like `dict.copy`."""
        other = self.__class__(keytype=self.keytype)
        other._arena = self._arena.clone()
        other._size = self._size
        return other

    __copy__ = copy

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        other = self.copy()
        memo[id(self)] = other
        for _, node in other._arena.live():
            if node.is_leaf:
                node.value = copy.deepcopy(node.value, memo)
        return other

    # mapping interface

    def __getitem__(self, __key: _ST) -> _VT:
        it = self.find(__key)
        if it.at_end:
            raise KeyError(__key)
        return it.value

    def __setitem__(self, __key: _ST, __value: _VT) -> None:
        it = self.find(__key)
        if it.at_end:
            self.insert(__key, __value)
        else:
            it.value = __value

    def __delitem__(self, __key: _ST) -> None:
        it = self.find(__key)
        if it.at_end:
            raise KeyError(__key)
        self.erase(it)

    def __contains__(self, __key: object) -> bool:
        if isinstance(__key, Sequence):
            return not self.find(__key).at_end  # type: ignore
        return False

    def __iter__(self) -> Iterator[_ST]:
        it = self.begin()
        while not it.at_end:
            yield it.key
            it.increment()

    def __reversed__(self) -> Iterator[_ST]:
        first = self.begin()
        it = self.end()
        while it != first:
            it.decrement()
            yield it.key

    def __len__(self) -> int:
        return self._size

    # helpers

    def _entry(self, __it: TrieIterator[_ST, _VT]) -> int:
        if __it.trie is not self:
            raise ValueError('iterator belongs to another trie')
        if __it.node is None:
            raise IteratorOutOfRangeError('end iterator does not reference an entry')
        if not self._arena[__it.node].is_leaf:
            raise ValueError('iterator does not reference a stored key')
        return __it.node

    def _walk(self, __start: int, __key: Iterable) -> Optional[int]:
        arena = self._arena
        index: Optional[int] = __start
        for symbol in __key:
            index = arena[index].find_by_key(symbol)
            if index is None:
                return None
        return index

    def _key_of(self, __index: int) -> _ST:
        arena = self._arena
        symbols = []
        node = arena[__index]
        while node.parent is not None:
            symbols.append(node.symbol)
            node = arena[node.parent]
        symbols.reverse()
        if self.keytype is str:
            return ''.join(symbols)  # type: ignore
        return self.keytype(symbols)

    def _depth(self, __index: int) -> int:
        arena = self._arena
        depth = 0
        node = arena[__index]
        while node.parent is not None:
            depth += 1
            node = arena[node.parent]
        return depth

    def stringify(self, sio: StringIO, substringfy: Callable[[Any], str] = str, getval: Callable[[Any], str] = str) -> None:
        arena = self._arena
        stack: list[int | str] = []
        def push_children(children: list[int]) -> None:
            for n, child in enumerate(reversed(children)):
                if n:
                    stack.append(', ')
                stack.append(child)
        push_children(arena.root.children)
        while stack:
            top = stack.pop()
            if isinstance(top, str):
                sio.write(top)
                continue
            node = arena[top]
            sio.write(substringfy(node.symbol))
            if node.is_leaf:
                sio.write('(')
                sio.write(getval(node.value))
                sio.write(')')
            if not node.isempty():
                sio.write(':{')
                stack.append('}')
                push_children(node.children)

    def __repr__(self) -> str:
        sio = StringIO()
        sio.write(f'{self.__class__.__qualname__}(')
        self.stringify(sio, repr, repr)
        sio.write(')')
        return sio.getvalue()

    def __str__(self) -> str:
        sio = StringIO()
        sio.write(f'{self.__class__.__qualname__}(')
        self.stringify(sio)
        sio.write(')')
        return sio.getvalue()


def swap(lhs: Trie[_ST, _VT], rhs: Trie[_ST, _VT]) -> None:
    lhs.swap(rhs)
