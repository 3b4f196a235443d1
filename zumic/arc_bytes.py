"""An immutable, cheaply shared byte string used for keys and values."""

from __future__ import annotations

import json
from functools import total_ordering
from typing import Optional, Union

BytesLike = Union[bytes, bytearray, memoryview]

_ESCAPES = {
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
    ord('"'): '\\"',
    ord("\\"): "\\\\",
}


@total_ordering
class ArcBytes:
    """Immutable binary-safe string with byte-wise ordering and UTF-8 helpers."""

    __slots__ = ("_data",)

    def __init__(self, data: Union["ArcBytes", str, BytesLike, list[int]] = b"") -> None:
        if isinstance(data, ArcBytes):
            self._data: bytes = data._data
        elif isinstance(data, str):
            self._data = data.encode("utf-8")
        elif isinstance(data, (int, bool)):
            raise TypeError("ArcBytes cannot be built from an integer")
        else:
            self._data = bytes(data)

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return self._data

    def __getitem__(self, index: Union[int, slice]) -> Union[int, "ArcBytes"]:
        if isinstance(index, slice):
            return ArcBytes(self._data[index])
        return self._data[index]

    def __str__(self) -> str:
        text = self.as_str()
        if text is None:
            return f"<invalid utf-8: {len(self)} bytes>"
        return text

    def __repr__(self) -> str:
        parts = []
        for byte in self._data:
            if byte in _ESCAPES:
                parts.append(_ESCAPES[byte])
            elif 0x20 <= byte <= 0x7E:
                parts.append(chr(byte))
            else:
                parts.append(f"\\x{byte:02x}")
        return 'b"' + "".join(parts) + '"'

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ArcBytes):
            return self._data == other._data
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self._data == bytes(other)
        if isinstance(other, str):
            return self._data == other.encode("utf-8")
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, ArcBytes):
            return self._data < other._data
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self._data < bytes(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._data)

    def as_str(self) -> Optional[str]:
        """Return the contents decoded as UTF-8, or None if they are not valid UTF-8."""
        try:
            return self._data.decode("utf-8")
        except UnicodeDecodeError:
            return None

    def expect_utf8(self) -> str:
        """Return the contents decoded as UTF-8, raising UnicodeDecodeError otherwise."""
        return self._data.decode("utf-8")

    def to_bytes(self) -> bytes:
        """Return the stored bytes."""
        return self._data

    def startswith(self, prefix: Union["ArcBytes", BytesLike]) -> bool:
        """Return True if the data begins with ``prefix``."""
        return self._data.startswith(bytes(prefix))

    def endswith(self, suffix: Union["ArcBytes", BytesLike]) -> bool:
        """Return True if the data ends with ``suffix``."""
        return self._data.endswith(bytes(suffix))

    def slice(self, start: int = 0, stop: Optional[int] = None) -> "ArcBytes":
        """Return the bytes in ``[start, stop)``; raise IndexError for an invalid range."""
        if stop is None:
            stop = len(self._data)
        if not 0 <= start <= stop <= len(self._data):
            raise IndexError(
                f"invalid slice range {start}..{stop} for length {len(self._data)}"
            )
        return ArcBytes(self._data[start:stop])

    def to_json(self) -> str:
        """Serialise as a JSON array of byte values."""
        return json.dumps(list(self._data), separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> "ArcBytes":
        """Build from a JSON array of byte values."""
        decoded = json.loads(text)
        if not isinstance(decoded, list):
            raise ValueError("expected a JSON array of bytes")
        for item in decoded:
            if isinstance(item, bool) or not isinstance(item, int) or not 0 <= item <= 255:
                raise ValueError(f"invalid byte value: {item!r}")
        return cls(bytes(decoded))