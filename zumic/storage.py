"""Key/value storage interface and its in-memory implementation."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Union

from zumic.arc_bytes import ArcBytes
from zumic.errors import KeyNotFoundError
from zumic.types import Value

KeyLike = Union[ArcBytes, str, bytes, bytearray]


def _key(key: KeyLike) -> ArcBytes:
    return key if isinstance(key, ArcBytes) else ArcBytes(key)


class Storage(ABC):
    """Interface shared by every key/value storage backend."""

    @abstractmethod
    def set(self, key: KeyLike, value: Value) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def get(self, key: KeyLike) -> Optional[Value]:
        """Return the value under ``key``, or None if it is absent."""

    @abstractmethod
    def delete(self, key: KeyLike) -> int:
        """Remove ``key``; return 1 if it existed and 0 otherwise."""

    @abstractmethod
    def mset(self, entries: Iterable[tuple[KeyLike, Value]]) -> None:
        """Store several pairs at once."""

    @abstractmethod
    def mget(self, keys: Iterable[KeyLike]) -> list[Optional[Value]]:
        """Return the values for ``keys`` in order, None where absent."""

    @abstractmethod
    def rename(self, source: KeyLike, target: KeyLike) -> None:
        """Move the value of ``source`` to ``target``.

        Raises KeyNotFoundError if ``source`` is absent.
        """

    @abstractmethod
    def renamenx(self, source: KeyLike, target: KeyLike) -> bool:
        """Rename only if ``target`` is absent; return whether it happened.

        Raises KeyNotFoundError if the rename is attempted and ``source`` is absent.
        """

    @abstractmethod
    def flushdb(self) -> None:
        """Remove every key."""


class InMemoryStore(Storage):
    """Thread-safe store holding all data in a dictionary."""

    def __init__(self) -> None:
        self._data: dict[ArcBytes, Value] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def set(self, key: KeyLike, value: Value) -> None:
        with self._lock:
            self._data[_key(key)] = value

    def get(self, key: KeyLike) -> Optional[Value]:
        with self._lock:
            return self._data.get(_key(key))

    def delete(self, key: KeyLike) -> int:
        with self._lock:
            return 0 if self._data.pop(_key(key), None) is None else 1

    def mset(self, entries: Iterable[tuple[KeyLike, Value]]) -> None:
        with self._lock:
            for key, value in entries:
                self._data[_key(key)] = value

    def mget(self, keys: Iterable[KeyLike]) -> list[Optional[Value]]:
        with self._lock:
            return [self._data.get(_key(key)) for key in keys]

    def rename(self, source: KeyLike, target: KeyLike) -> None:
        with self._lock:
            source_key = _key(source)
            if source_key not in self._data:
                raise KeyNotFoundError()
            self._data[_key(target)] = self._data.pop(source_key)

    def renamenx(self, source: KeyLike, target: KeyLike) -> bool:
        with self._lock:
            target_key = _key(target)
            if target_key in self._data:
                return False
            source_key = _key(source)
            if source_key not in self._data:
                raise KeyNotFoundError()
            self._data[target_key] = self._data.pop(source_key)
            return True

    def flushdb(self) -> None:
        with self._lock:
            self._data.clear()