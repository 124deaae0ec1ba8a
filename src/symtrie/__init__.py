#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

from symtrie.errors import (
    TrieError,
    EmptyKeyError,
    DuplicateKeyError,
    EmptySubkeyError,
    NoSuchPrefixError,
    IteratorOutOfRangeError,
)
from symtrie.trie import Trie, TrieIterator, swap
from symtrie.util import logger

__all__ = [
    'Trie',
    'TrieIterator',
    'swap',
    'logger',
    'TrieError',
    'EmptyKeyError',
    'DuplicateKeyError',
    'EmptySubkeyError',
    'NoSuchPrefixError',
    'IteratorOutOfRangeError',
]
