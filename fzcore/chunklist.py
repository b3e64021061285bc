"""A growing list of chunks from which immutable snapshots can be taken."""

from __future__ import annotations

import threading
from typing import Any, Iterable

from fzcore.cache import Chunk, ChunkCache, ItemBuilder


def count_items(chunks: Iterable[Chunk]) -> int:
    """Total number of items in ``chunks``."""
    return sum(chunk.count for chunk in chunks)


class ChunkList:
    """Items grouped in chunks, filled from incoming data."""

    def __init__(self, cache: ChunkCache, trans: ItemBuilder) -> None:
        self._chunks: list[Chunk] = []
        self._lock = threading.Lock()
        self.trans = trans
        self._cache = cache

    def push(self, data: Any) -> bool:
        """Build an item from ``data`` and append it; False if rejected."""
        with self._lock:
            if not self._chunks or self._chunks[-1].is_full():
                self._chunks.append(Chunk())
            return self._chunks[-1].push(self.trans, data)

    def clear(self) -> None:
        """Drop all items."""
        with self._lock:
            self._chunks = []

    def _keep_tail(self, tail: int) -> None:
        num_chunks = 0
        left = tail
        for chunk in reversed(self._chunks):
            if left <= 0:
                break
            num_chunks += 1
            left -= chunk.count

        min_index = len(self._chunks) - num_chunks
        self._cache.retire(*self._chunks[:min_index])
        kept = self._chunks[min_index:]

        left = tail
        for pos in reversed(range(len(kept))):
            chunk = kept[pos]
            if chunk.count > left:
                kept[pos] = Chunk(chunk.items[chunk.count - left:])
                self._cache.retire(chunk)
                break
            left -= chunk.count
        self._chunks = kept

    def snapshot(self, tail: int) -> tuple[list[Chunk], int, bool]:
        """Return the chunks as they are now, their item count and whether
        items were dropped to keep only the last ``tail`` ones (0: keep all).
        """
        with self._lock:
            changed = False
            if tail > 0 and count_items(self._chunks) > tail:
                changed = True
                self._keep_tail(tail)

            ret = list(self._chunks)
            if ret:
                # The first and the last chunk may still change; copy them
                if tail > 0 and len(ret) > 1:
                    ret[0] = Chunk(list(ret[0].items))
                ret[-1] = Chunk(list(ret[-1].items))
        return ret, count_items(ret), changed