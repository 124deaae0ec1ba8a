#! /usr/bin/env python3
# -*- encoding:utf-8 -*-


class TrieError(Exception):
    """Base class of every error raised by symtrie."""


class EmptyKeyError(TrieError, ValueError):
    """Raised when inserting a zero-length key."""


class DuplicateKeyError(TrieError, KeyError):
    """Raised when inserting (or relocating onto) a key that is already stored."""


class EmptySubkeyError(TrieError, ValueError):
    """Raised when an entry is relocated along an empty path."""


class NoSuchPrefixError(TrieError, KeyError):
    """Raised when a relocation path does not exist below the entry."""


class IteratorOutOfRangeError(TrieError, IndexError):
    """Raised when moving an iterator past end or before begin."""
