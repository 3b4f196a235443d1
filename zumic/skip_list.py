"""An ordered map backed by a probabilistic skip list."""

from __future__ import annotations

import random
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

K = TypeVar("K")
V = TypeVar("V")

MAX_LEVEL = 16
P = 0.5


class _Node:
    __slots__ = ("key", "value", "forward", "backward")

    def __init__(self, key: Any, value: Any, level: int) -> None:
        self.key = key
        self.value = value
        self.forward: list[Optional[_Node]] = [None] * level
        self.backward: Optional[_Node] = None


def _random_level() -> int:
    level = 1
    while random.random() < P and level < MAX_LEVEL:
        level += 1
    return level


class SkipList(Generic[K, V]):
    """Ordered key/value map with expected logarithmic lookups."""

    def __init__(self) -> None:
        self._head = _Node(None, None, MAX_LEVEL)
        self._level = 1
        self._length = 0

    def _find_update(self, key: K) -> list[_Node]:
        update = [self._head] * MAX_LEVEL
        current = self._head
        for i in reversed(range(self._level)):
            nxt = current.forward[i]
            while nxt is not None and nxt.key < key:
                current = nxt
                nxt = current.forward[i]
            update[i] = current
        return update

    def _find_node(self, key: K) -> Optional[_Node]:
        candidate = self._find_update(key)[0].forward[0]
        if candidate is not None and candidate.key == key:
            return candidate
        return None

    def insert(self, key: K, value: V) -> None:
        """Insert a pair, replacing the value if the key is already present."""
        update = self._find_update(key)
        candidate = update[0].forward[0]
        if candidate is not None and candidate.key == key:
            candidate.value = value
            return

        level = _random_level()
        if level > self._level:
            self._level = level

        node = _Node(key, value, level)
        for i in range(level):
            prev = update[i]
            node.forward[i] = prev.forward[i]
            prev.forward[i] = node

        node.backward = None if update[0] is self._head else update[0]
        following = node.forward[0]
        if following is not None:
            following.backward = node
        self._length += 1

    def search(self, key: K) -> Optional[V]:
        """Return the value stored under ``key``, or None if it is absent."""
        node = self._find_node(key)
        return None if node is None else node.value

    def update(self, key: K, func: Callable[[V], V]) -> bool:
        """Replace the value under ``key`` with ``func(value)``.

        Returns True if the key was present.
        """
        node = self._find_node(key)
        if node is None:
            return False
        node.value = func(node.value)
        return True

    def remove(self, key: K) -> Optional[V]:
        """Remove ``key`` and return its value, or None if it was absent."""
        update = self._find_update(key)
        node = update[0].forward[0]
        if node is None or node.key != key:
            return None

        for i in range(self._level):
            if update[i].forward[i] is node:
                update[i].forward[i] = node.forward[i]

        following = node.forward[0]
        if following is not None:
            following.backward = node.backward

        while self._level > 1 and self._head.forward[self._level - 1] is None:
            self._level -= 1
        self._length -= 1
        return node.value

    def __len__(self) -> int:
        return self._length

    def __contains__(self, key: object) -> bool:
        return self._find_node(key) is not None  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[tuple[K, V]]:
        node = self._head.forward[0]
        while node is not None:
            yield node.key, node.value
            node = node.forward[0]

    def __reversed__(self) -> Iterator[tuple[K, V]]:
        node = self._last_node()
        while node is not None:
            yield node.key, node.value
            node = node.backward

    def range(self, start: K, end: K) -> Iterator[tuple[K, V]]:
        """Yield pairs whose keys lie in ``[start, end)`` in ascending order."""
        current = self._head
        for i in reversed(range(self._level)):
            nxt = current.forward[i]
            while nxt is not None and nxt.key < start:
                current = nxt
                nxt = current.forward[i]
        node = current.forward[0]
        while node is not None and node.key < end:
            yield node.key, node.value
            node = node.forward[0]

    def clear(self) -> None:
        """Remove every element."""
        self._head.forward = [None] * MAX_LEVEL
        self._level = 1
        self._length = 0

    def first(self) -> Optional[tuple[K, V]]:
        """Return the pair with the smallest key, or None if empty."""
        node = self._head.forward[0]
        return None if node is None else (node.key, node.value)

    def last(self) -> Optional[tuple[K, V]]:
        """Return the pair with the largest key, or None if empty."""
        node = self._last_node()
        return None if node is None else (node.key, node.value)

    def _last_node(self) -> Optional[_Node]:
        current = self._head
        for i in reversed(range(self._level)):
            nxt = current.forward[i]
            while nxt is not None:
                current = nxt
                nxt = current.forward[i]
        return None if current is self._head else current

    def to_pairs(self) -> list[tuple[K, V]]:
        """Return all pairs in key order, suitable for serialisation."""
        return list(self)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[K, V]]) -> "SkipList[K, V]":
        """Build a skip list from ``(key, value)`` pairs."""
        result: SkipList[K, V] = cls()
        for key, value in pairs:
            result.insert(key, value)
        return result

    def __repr__(self) -> str:
        return f"SkipList({self.to_pairs()!r})"