"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import DocumentFetcher
from .persistence import DirtyFlagSource, EntityStore
from .pointers import PointerReader, PointerReadError

__all__ = [
    "DirtyFlagSource",
    "DocumentFetcher",
    "EntityStore",
    "PointerReadError",
    "PointerReader",
]
