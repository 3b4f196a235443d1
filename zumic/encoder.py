"""Encoding of ZSP frames into their wire representation."""

from __future__ import annotations

import logging
import math
from decimal import Decimal

from zumic.errors import InvalidDataError
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

logger = logging.getLogger(__name__)

MAX_BULK_LENGTH = 512 * 1024 * 1024
MAX_ARRAY_DEPTH = 32

CRLF = b"\r\n"


def _format_float(value: float) -> str:
    """Format a float as plain decimal text with no exponent and no trailing zeros."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _validate_line(text: str, what: str) -> None:
    if "\r" in text or "\n" in text:
        message = f"{what} contains CR or LF characters"
        logger.error(message)
        raise InvalidDataError(message)


def _line(prefix: str, text: str) -> bytes:
    return f"{prefix}{text}\r\n".encode("utf-8")


def _encode(frame: Frame, depth: int) -> bytes:
    if depth > MAX_ARRAY_DEPTH:
        message = f"Max array depth exceed ({MAX_ARRAY_DEPTH})"
        logger.error(message)
        raise InvalidDataError(message)

    if isinstance(frame, SimpleString):
        _validate_line(frame.value, "Simple string")
        return _line("+", frame.value)
    if isinstance(frame, FrameError):
        _validate_line(frame.message, "Error message")
        return _line("-", frame.message)
    if isinstance(frame, Integer):
        return _line(":", str(frame.value))
    if isinstance(frame, FloatFrame):
        return _line(":", _format_float(frame.value))
    if isinstance(frame, BulkString):
        if frame.data is None:
            return b"$-1\r\n"
        if len(frame.data) > MAX_BULK_LENGTH:
            message = f"Bulk string too long ({len(frame.data)} > {MAX_BULK_LENGTH})"
            logger.error(message)
            raise InvalidDataError(message)
        return _line("$", str(len(frame.data))) + frame.data + CRLF
    if isinstance(frame, Array):
        if frame.items is None:
            return b"*-1\r\n"
        parts = [_line("*", str(len(frame.items)))]
        parts.extend(_encode(item, depth + 1) for item in frame.items)
        return b"".join(parts)
    if isinstance(frame, Dictionary):
        if frame.items is None:
            return b"%-1\r\n"
        parts = [_line("%", str(len(frame.items)))]
        for key, value in frame.items.items():
            parts.append(_encode(SimpleString(key), depth + 1))
            parts.append(_encode(value, depth + 1))
        return b"".join(parts)
    if isinstance(frame, ZSetFrame):
        parts = [_line("^", str(len(frame.entries)))]
        for member, score in frame.entries:
            _validate_line(member, "Simple string")
            parts.append(_line("+", member))
            parts.append(_line(":", _format_float(score)))
        return b"".join(parts)
    if isinstance(frame, NullFrame):
        return b"$-1\r\n"
    raise TypeError(f"not a frame: {frame!r}")


def encode(frame: Frame) -> bytes:
    """Return the wire bytes for ``frame``.

    Raises InvalidDataError for lines holding CR or LF, oversized bulk
    strings and nesting deeper than MAX_ARRAY_DEPTH.
    """
    logger.debug("encoding frame: %r", frame)
    return _encode(frame, 0)