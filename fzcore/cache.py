"""Chunks of items and a per-chunk cache of query results."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from fzcore.constants import CHUNK_SIZE, QUERY_CACHE_MAX
from fzcore.item import Item

ItemBuilder = Callable[[Any], Optional[Item]]


@dataclass(eq=False)
class Chunk:
    """A run of at most ``CHUNK_SIZE`` items."""

    items: list[Item] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)

    def is_full(self) -> bool:
        """Whether the chunk holds ``CHUNK_SIZE`` items."""
        return len(self.items) == CHUNK_SIZE

    def push(self, trans: ItemBuilder, data: Any) -> bool:
        """Build an item from ``data`` with ``trans`` and append it.

        ``trans`` returns None to reject the data; the result tells whether
        an item was added.
        """
        if self.is_full():
            raise ValueError("chunk is full")
        item = trans(data)
        if item is None:
            return False
        self.items.append(item)
        return True


class ChunkCache:
    """Results of queries, kept per full chunk."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache: dict[Chunk, dict[str, list]] = {}

    def clear(self) -> None:
        """Forget everything."""
        with self._lock:
            self._cache = {}

    def retire(self, *args: Chunk) -> None:
        """Forget the results of the given chunks."""
        with self._lock:
            for chunk in args:
                self._cache.pop(chunk, None)

    def add(self, chunk: Chunk, key: str, results: list) -> None:
        """Remember ``results`` for ``key`` on a full chunk.

        Empty keys, partial chunks and large result lists are not cached.
        """
        if not key or not chunk.is_full() or len(results) > QUERY_CACHE_MAX:
            return
        with self._lock:
            self._cache.setdefault(chunk, {})[key] = results

    def lookup(self, chunk: Chunk, key: str) -> Optional[list]:
        """Return the results cached for exactly ``key``, or None."""
        if not key or not chunk.is_full():
            return None
        with self._lock:
            queries = self._cache.get(chunk)
            if queries is None:
                return None
            return queries.get(key)

    def search(self, chunk: Chunk, key: str) -> Optional[list]:
        """Return the results of the longest cached prefix or suffix of ``key``."""
        if not key or not chunk.is_full():
            return None
        with self._lock:
            queries = self._cache.get(chunk)
            if queries is None:
                return None
            for cut in range(1, len(key)):
                for substr in (key[: len(key) - cut], key[cut:]):
                    cached = queries.get(substr)
                    if cached is not None:
                        return cached
        return None