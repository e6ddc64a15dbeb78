"""Exceptions raised by the search engine and its data structures."""

from __future__ import annotations


class InvalidSearchInput(ValueError):
    """Raised when a search is given coordinates or weights that don't fit the grid."""


class HeapInvariantError(RuntimeError):
    """Raised when the hybrid heap's array and position map disagree.

    This is a programming error; searches built on a corrupted heap would
    return wrong paths, so it is never caught inside the package.
    """


__all__ = ["InvalidSearchInput", "HeapInvariantError"]
