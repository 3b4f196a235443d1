"""Command responses and their conversion into protocol frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from zumic.arc_bytes import ArcBytes
from zumic.frame import (
    Array,
    BulkString,
    Dictionary,
    FloatFrame,
    Frame,
    FrameError,
    Integer,
    NullFrame,
    SimpleString,
    ZSetFrame,
)
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

_INVALID_UTF8 = "<invalid utf8>"


@dataclass(frozen=True)
class OkResponse:
    """Successful command with nothing to return."""


@dataclass(frozen=True)
class ValueResponse:
    """A stored value."""

    value: Value


@dataclass(frozen=True)
class ErrorResponse:
    """An error message."""

    message: str


@dataclass(frozen=True)
class NotFoundResponse:
    """The requested key does not exist."""


@dataclass(frozen=True)
class IntegerResponse:
    """An integer result."""

    value: int


@dataclass(frozen=True)
class FloatResponse:
    """A floating point result."""

    value: float


@dataclass(frozen=True)
class StringResponse:
    """A text result."""

    value: str


Response = Union[
    OkResponse,
    ValueResponse,
    ErrorResponse,
    NotFoundResponse,
    IntegerResponse,
    FloatResponse,
    StringResponse,
]


def _text(data: ArcBytes) -> str:
    text = ArcBytes(data).as_str()
    return _INVALID_UTF8 if text is None else text


def value_to_frame(value: Value) -> Frame:
    """Convert a stored value to the frame sent to clients."""
    if isinstance(value, StrValue):
        return BulkString(bytes(value.value))
    if isinstance(value, IntValue):
        return Integer(value.value)
    if isinstance(value, FloatValue):
        return FloatFrame(value.value)
    if isinstance(value, NullValue):
        return NullFrame()
    if isinstance(value, ListValue):
        return Array([BulkString(bytes(item)) for item in value.items])
    if isinstance(value, HashValue):
        return Dictionary({_text(k): BulkString(bytes(v)) for k, v in value.fields})
    if isinstance(value, ZSetValue):
        return ZSetFrame([(_text(member), score) for member, score in value.dict.items()])
    if isinstance(value, SetValue):
        return Array([SimpleString(_text(member)) for member in value.members])
    if isinstance(value, HyperLogLogValue):
        return SimpleString("HLL(NotImplemented)")
    if isinstance(value, StreamValue):
        return SimpleString("SStream(NotImplemented)")
    raise TypeError(f"not a storable value: {value!r}")


def serialize_response(response: Response) -> Frame:
    """Convert a command response to a frame."""
    if isinstance(response, OkResponse):
        return SimpleString("OK")
    if isinstance(response, ValueResponse):
        return value_to_frame(response.value)
    if isinstance(response, ErrorResponse):
        return FrameError(response.message)
    if isinstance(response, NotFoundResponse):
        return NullFrame()
    if isinstance(response, IntegerResponse):
        return Integer(response.value)
    if isinstance(response, FloatResponse):
        return FloatFrame(response.value)
    if isinstance(response, StringResponse):
        return SimpleString(response.value)
    raise TypeError(f"not a response: {response!r}")