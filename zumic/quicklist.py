"""A segmented list tuned for pushes and pops at both ends."""

from __future__ import annotations

import sys
from collections import deque
from itertools import chain
from typing import Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")


class QuickList(Generic[T]):
    """List made of bounded deque segments.

    Every segment holds at most ``max_segment_size`` items. After each push or
    pop the segments are repacked when there are too many of them or when any
    of them is less than half full.
    """

    def __init__(self, max_segment_size: int) -> None:
        if max_segment_size < 0:
            raise ValueError("max_segment_size must not be negative")
        self._max_segment_size = max_segment_size
        self._segments: list[deque[T]] = []
        self._len = 0
        self._index: dict[int, int] = {}

    @property
    def max_segment_size(self) -> int:
        """The largest number of items a single segment may hold."""
        return self._max_segment_size

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[T]:
        return chain.from_iterable(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuickList):
            return NotImplemented
        return (
            self._max_segment_size == other._max_segment_size
            and self._len == other._len
            and [list(s) for s in self._segments] == [list(s) for s in other._segments]
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"QuickList({list(self)!r}, max_segment_size={self._max_segment_size})"

    def _locate(self, index: int) -> Optional[tuple[deque[T], int]]:
        if not 0 <= index < self._len:
            return None
        offset = 0
        for segment in self._segments:
            if index < offset + len(segment):
                return segment, index - offset
            offset += len(segment)
        return None

    def get(self, index: int) -> Optional[T]:
        """Return the item at ``index``, or None if it is out of range."""
        found = self._locate(index)
        if found is None:
            return None
        segment, position = found
        return segment[position]

    def set(self, index: int, value: T) -> None:
        """Replace the item at ``index``; raise IndexError if it is out of range."""
        found = self._locate(index)
        if found is None:
            raise IndexError(f"index {index} out of range for length {self._len}")
        segment, position = found
        segment[position] = value

    def push_front(self, item: T) -> None:
        """Insert ``item`` at the start of the list."""
        if not self._segments or len(self._segments[0]) >= self._max_segment_size:
            self._segments.insert(0, deque())
        self._segments[0].appendleft(item)
        self._len += 1
        self.auto_optimize()
        self.rebuild_index()

    def push_back(self, item: T) -> None:
        """Append ``item`` at the end of the list."""
        if not self._segments or len(self._segments[-1]) >= self._max_segment_size:
            self._segments.append(deque())
        self._segments[-1].append(item)
        self._len += 1
        self.auto_optimize()
        self.rebuild_index()

    def pop_front(self) -> Optional[T]:
        """Remove and return the first item, or None if the list is empty."""
        if not self._segments or not self._segments[0]:
            return None
        item = self._segments[0].popleft()
        self._len -= 1
        if not self._segments[0]:
            del self._segments[0]
        self.auto_optimize()
        self.rebuild_index()
        return item

    def pop_back(self) -> Optional[T]:
        """Remove and return the last item, or None if the list is empty."""
        if not self._segments or not self._segments[-1]:
            return None
        item = self._segments[-1].pop()
        self._len -= 1
        if not self._segments[-1]:
            self._segments.pop()
        self.auto_optimize()
        self.rebuild_index()
        return item

    def clear(self) -> None:
        """Remove every item."""
        self._segments.clear()
        self._index.clear()
        self._len = 0

    def validate(self) -> None:
        """Check internal consistency; raise ValueError if it is broken."""
        total = 0
        for segment in self._segments:
            if len(segment) > self._max_segment_size:
                raise ValueError("Segment capacity exceeds limit")
            total += len(segment)
        if total != self._len:
            raise ValueError("Length mismatch")

    def optimize(self) -> None:
        """Repack all items into as few full segments as possible."""
        packed: list[deque[T]] = []
        current: deque[T] = deque()
        for item in chain.from_iterable(self._segments):
            if len(current) >= self._max_segment_size:
                packed.append(current)
                current = deque()
            current.append(item)
        if current:
            packed.append(current)
        self._segments = packed

    def auto_optimize(self) -> None:
        """Repack when there are many segments or some are under half full."""
        half = self._max_segment_size // 2
        if len(self._segments) > 5 or any(len(s) < half for s in self._segments):
            self.optimize()

    def shrink_to_fit(self) -> None:
        """Rebuild every segment so that it holds no spare storage."""
        self._segments = [deque(segment) for segment in self._segments]

    def memory_usage(self) -> int:
        """Estimate the bytes taken by the segment containers."""
        return sum(sys.getsizeof(segment) for segment in self._segments)

    def rebuild_index(self) -> None:
        """Recompute the map from logical index to segment number."""
        self._index = dict(
            enumerate(
                seg_number
                for seg_number, segment in enumerate(self._segments)
                for _ in segment
            )
        )

    def segment_count(self) -> int:
        """Return the number of segments currently in use."""
        return len(self._segments)

    @classmethod
    def from_iterable(cls, items: Iterable[T], max_segment_size: int) -> "QuickList[T]":
        """Build a list by appending every item of ``items`` in order."""
        result: QuickList[T] = cls(max_segment_size)
        for item in items:
            result.push_back(item)
        return result

    def to_deque(self) -> deque[T]:
        """Return all items as a single deque."""
        return deque(self)