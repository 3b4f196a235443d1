"""A hash that keeps small maps as a pair list and large ones as a dict."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Union

from zumic.arc_bytes import ArcBytes

THRESHOLD = 32

_KeyLike = Union[ArcBytes, str, bytes, bytearray]


def _coerce(value: _KeyLike) -> ArcBytes:
    return value if isinstance(value, ArcBytes) else ArcBytes(value)


class SmartHash:
    """Adaptive map of ArcBytes to ArcBytes.

    Up to THRESHOLD entries live in a compact list; reaching it switches to a
    dict. After removals shrink a dict below half the threshold, the switch
    back happens lazily on the next insert, get or iteration.
    """

    def __init__(self, pairs: Optional[Iterable[tuple[_KeyLike, _KeyLike]]] = None) -> None:
        self._zip: Optional[list[tuple[ArcBytes, ArcBytes]]] = []
        self._map: Optional[dict[ArcBytes, ArcBytes]] = None
        self._pending_downgrade = False
        if pairs is not None:
            self.extend(pairs)

    @property
    def is_map(self) -> bool:
        """True while the dict representation is in use."""
        return self._map is not None

    @property
    def pending_downgrade(self) -> bool:
        """True if a switch back to the list representation is scheduled."""
        return self._pending_downgrade

    def _downgrade(self) -> None:
        if self._map is not None:
            self._zip = list(self._map.items())
            self._map = None
        self._pending_downgrade = False

    def __len__(self) -> int:
        if self._map is not None:
            return len(self._map)
        return len(self._zip)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (ArcBytes, str, bytes, bytearray)):
            return False
        key = _coerce(key)
        if self._map is not None:
            return key in self._map
        return any(k == key for k, _ in self._zip)

    def __iter__(self) -> Iterator[tuple[ArcBytes, ArcBytes]]:
        if self._pending_downgrade:
            self._downgrade()
        return iter(self.entries())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SmartHash):
            return NotImplemented
        return dict(self.entries()) == dict(other.entries())

    __hash__ = None  # type: ignore[assignment]

    def insert(self, key: _KeyLike, value: _KeyLike) -> None:
        """Insert or replace a pair, switching to a dict at the threshold."""
        if self._pending_downgrade:
            self._downgrade()
        key, value = _coerce(key), _coerce(value)

        if self._map is not None:
            self._map[key] = value
            return

        for position, (existing, _) in enumerate(self._zip):
            if existing == key:
                self._zip[position] = (existing, value)
                return
        self._zip.append((key, value))
        if len(self._zip) >= THRESHOLD:
            self._map = dict(self._zip)
            self._zip = None

    def get(self, key: _KeyLike) -> Optional[ArcBytes]:
        """Return the value under ``key``, or None if absent."""
        if self._pending_downgrade:
            self._downgrade()
        key = _coerce(key)
        if self._map is not None:
            return self._map.get(key)
        return next((v for k, v in self._zip if k == key), None)

    def remove(self, key: _KeyLike) -> bool:
        """Remove ``key``; return True if it was present."""
        key = _coerce(key)
        if self._map is not None:
            removed = self._map.pop(key, None) is not None
            if removed and len(self._map) < THRESHOLD // 2:
                self._pending_downgrade = True
            return removed

        for position, (existing, _) in enumerate(self._zip):
            if existing == key:
                del self._zip[position]
                return True
        return False

    def get_all(self) -> list[tuple[str, str]]:
        """Return all pairs decoded as text, replacing invalid UTF-8."""
        return [
            (
                k.to_bytes().decode("utf-8", errors="replace"),
                v.to_bytes().decode("utf-8", errors="replace"),
            )
            for k, v in self.entries()
        ]

    def clear(self) -> None:
        """Remove every entry and return to the list representation."""
        self._zip = []
        self._map = None
        self._pending_downgrade = False

    def keys(self) -> list[ArcBytes]:
        """Return all keys, in no guaranteed order."""
        return [k for k, _ in self.entries()]

    def values(self) -> list[ArcBytes]:
        """Return all values, in no guaranteed order."""
        return [v for _, v in self.entries()]

    def entries(self) -> list[tuple[ArcBytes, ArcBytes]]:
        """Return all pairs, in no guaranteed order."""
        if self._map is not None:
            return list(self._map.items())
        return list(self._zip)

    def extend(self, pairs: Iterable[tuple[_KeyLike, _KeyLike]]) -> None:
        """Insert every pair from ``pairs``."""
        for key, value in pairs:
            self.insert(key, value)

    def __repr__(self) -> str:
        return f"SmartHash({self.entries()!r})"