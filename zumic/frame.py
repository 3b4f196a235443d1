"""Frames of the ZSP wire protocol and conversion of stored values into them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Union

from zumic.arc_bytes import ArcBytes
from zumic.errors import FrameConversionError
from zumic.smart_hash import SmartHash
from zumic.types import (
    FloatValue,
    HashValue,
    HyperLogLogValue,
    IntValue,
    ListValue,
    NullValue,
    SetValue,
    StreamValue,
    StrValue,
    Value,
    ZSetValue,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimpleString:
    """Single-line text."""

    value: str


@dataclass(frozen=True)
class FrameError:
    """Single-line error message."""

    message: str


@dataclass(frozen=True)
class Integer:
    """Signed integer."""

    value: int


@dataclass(frozen=True)
class FloatFrame:
    """Floating point number."""

    value: float


@dataclass(frozen=True)
class BulkString:
    """Binary-safe string; None encodes a null bulk string."""

    data: Optional[bytes]

    def __post_init__(self) -> None:
        if self.data is not None and not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))


@dataclass(frozen=True)
class Array:
    """Sequence of frames; None encodes a null array."""

    items: Optional[list["Frame"]]


@dataclass(frozen=True)
class Dictionary:
    """Map of text keys to frames; None encodes a null dictionary."""

    items: Optional[dict[str, "Frame"]]


@dataclass(frozen=True)
class ZSetFrame:
    """Sorted-set members paired with their scores."""

    entries: list[tuple[str, float]] = field(default_factory=list)


@dataclass(frozen=True)
class NullFrame:
    """Null value."""


Frame = Union[
    SimpleString,
    FrameError,
    Integer,
    FloatFrame,
    BulkString,
    Array,
    Dictionary,
    ZSetFrame,
    NullFrame,
]


def frame_from_arc_bytes(data: ArcBytes) -> BulkString:
    """Wrap the bytes in a bulk string."""
    return BulkString(bytes(data))


def convert_arc_bytes(data: ArcBytes) -> Union[SimpleString, BulkString]:
    """Return a simple string for UTF-8 data and a bulk string otherwise."""
    text = ArcBytes(data).as_str()
    if text is None:
        logger.debug("non-UTF-8 data, using a bulk string")
        return BulkString(bytes(data))
    return SimpleString(text)


def convert_quicklist(items: Iterable[ArcBytes]) -> Array:
    """Turn list items into an array of bulk strings."""
    return Array([frame_from_arc_bytes(item) for item in items])


def convert_set(members: Iterable[ArcBytes]) -> Array:
    """Turn set members into an array of simple or bulk strings."""
    return Array([convert_arc_bytes(member) for member in members])


def _decode_key(data: ArcBytes, context: str) -> str:
    try:
        return ArcBytes(data).expect_utf8()
    except UnicodeDecodeError as exc:
        raise FrameConversionError(f"{context}: {exc}") from exc


def convert_smart_hash(smart: SmartHash) -> Dictionary:
    """Turn a hash into a dictionary of bulk strings; keys must be UTF-8."""
    return Dictionary(
        {_decode_key(k, "Invalid hash key"): frame_from_arc_bytes(v) for k, v in smart}
    )


def convert_zset(scores: Mapping[ArcBytes, float]) -> ZSetFrame:
    """Turn member scores into a sorted-set frame; members must be UTF-8."""
    return ZSetFrame(
        [(_decode_key(member, "ZSet key error"), score) for member, score in scores.items()]
    )


def frame_from_value(value: Value) -> Frame:
    """Convert a stored value to a frame.

    Raises FrameConversionError for HyperLogLog and stream values.
    """
    if isinstance(value, StrValue):
        return convert_arc_bytes(value.value)
    if isinstance(value, IntValue):
        return Integer(value.value)
    if isinstance(value, FloatValue):
        return FloatFrame(value.value)
    if isinstance(value, ListValue):
        return convert_quicklist(value.items)
    if isinstance(value, SetValue):
        return convert_set(value.members)
    if isinstance(value, HashValue):
        return convert_smart_hash(value.fields)
    if isinstance(value, ZSetValue):
        return convert_zset(value.dict)
    if isinstance(value, NullValue):
        return NullFrame()
    if isinstance(value, (HyperLogLogValue, StreamValue)):
        logger.warning("unsupported data type encountered during conversion")
        raise FrameConversionError("Unsupported data type")
    raise TypeError(f"not a storable value: {value!r}")