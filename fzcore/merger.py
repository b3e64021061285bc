"""A single ordered view over several partial result lists."""

from __future__ import annotations

import heapq
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, Sequence

from fzcore.cache import Chunk
from fzcore.constants import CHUNK_SIZE, MERGER_CACHE_MAX


@dataclass
class Revision:
    """Version of the input; a major bump makes earlier results incompatible."""

    major: int = 0
    minor: int = 0

    def bump_major(self) -> None:
        self.major += 1
        self.minor = 0

    def bump_minor(self) -> None:
        self.minor += 1

    def compatible(self, other: Revision) -> bool:
        return self.major == other.major


def _item_of(result: Any) -> Any:
    return getattr(result, "item", result)


class Merger:
    """Presents locally ordered lists of results as one list.

    When ``sorted`` is set every list must already be ordered by ``key``
    (the results themselves when ``key`` is None) and the lists are merged
    lazily; otherwise they are concatenated. A merger built with ``chunks``
    passes the items of the chunks through in input order.
    """

    def __init__(
        self,
        pattern: Any,
        lists: Sequence[Sequence[Any]],
        sorted: bool = False,
        tac: bool = False,
        revision: Optional[Revision] = None,
        min_index: int = 0,
        key: Optional[Callable[[Any], Any]] = None,
        *,
        chunks: Optional[list[Chunk]] = None,
    ) -> None:
        self.pattern = pattern
        self.lists = list(lists)
        self.sorted = sorted
        self.tac = tac
        self.final = False
        self.revision = revision if revision is not None else Revision()
        self.min_index = min_index
        self._chunks = chunks
        self.pass_through = chunks is not None
        self._merged: list[Any] = []
        self._stream: Iterator[Any] = heapq.merge(*self.lists, key=key)
        if chunks is not None:
            self._count = sum(chunk.count for chunk in chunks)
        else:
            self._count = sum(len(lst) for lst in self.lists)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Any]:
        return (self.get(idx) for idx in range(self._count))

    def first(self) -> Any:
        """The result shown first."""
        if self.tac and not self.sorted:
            return self.get(self._count - 1)
        return self.get(0)

    def find_index(self, item_index: int) -> int:
        """Position of the item with ``item_index``, or -1."""
        if self.pass_through:
            index = item_index - self.min_index
            if self.tac:
                index = self._count - index - 1
            return index
        return next(
            (pos for pos, result in enumerate(self) if _item_of(result).index == item_index),
            -1,
        )

    def get(self, idx: int) -> Any:
        """The result at position ``idx``; items themselves in pass-through mode."""
        if not 0 <= idx < self._count:
            raise IndexError(f"index out of bounds ({idx}/{self._count})")

        if self._chunks is not None:
            if self.tac:
                idx = self._count - idx - 1
            first = self._chunks[0]
            if first.count < CHUNK_SIZE and idx >= first.count:
                idx -= first.count
                return self._chunks[idx // CHUNK_SIZE + 1].items[idx % CHUNK_SIZE]
            return self._chunks[idx // CHUNK_SIZE].items[idx % CHUNK_SIZE]

        if self.sorted:
            return self._merged_get(idx)

        if self.tac:
            idx = self._count - idx - 1
        for lst in self.lists:
            if idx < len(lst):
                return lst[idx]
            idx -= len(lst)
        raise IndexError(f"index out of bounds ({idx}/{self._count})")

    def cacheable(self) -> bool:
        """Whether the merger is small enough to be cached."""
        return self._count < MERGER_CACHE_MAX

    def _merged_get(self, idx: int) -> Any:
        while len(self._merged) <= idx:
            try:
                self._merged.append(next(self._stream))
            except StopIteration:
                raise IndexError(
                    f"index out of bounds ({len(self._merged)}/{self._count})"
                ) from None
        return self._merged[idx]


def empty_merger(revision: Revision) -> Merger:
    """A merger with no results."""
    return Merger(None, [], False, False, revision, 0)


def pass_merger(chunks: list[Chunk], tac: bool, revision: Revision) -> Merger:
    """A merger that yields the items of ``chunks`` in their original order."""
    min_index = chunks[0].items[0].index if chunks else 0
    return Merger(None, [], False, tac, revision, min_index, chunks=chunks)