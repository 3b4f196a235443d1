"""Incremental decoding of ZSP frames from a byte stream."""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass, field
from typing import BinaryIO, Optional, Union

from zumic.encoder import MAX_ARRAY_DEPTH, MAX_BULK_LENGTH
from zumic.errors import InvalidDataError, UnexpectedEofError
from zumic.frame import (
    Array,
    BulkString,
    Dictionary,
    Frame,
    FrameError,
    Integer,
    SimpleString,
)

logger = logging.getLogger(__name__)

MAX_LINE_LENGTH = 1024 * 1024

_CR = 0x0D
_LF = 0x0A
_INT_RE = re.compile(rb"[+-]?[0-9]+")
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _invalid(message: str) -> InvalidDataError:
    logger.error(message)
    return InvalidDataError(message)


def _parse_i64(line: str) -> Optional[int]:
    raw = line.encode("utf-8")
    if not _INT_RE.fullmatch(raw):
        return None
    number = int(raw)
    if not _I64_MIN <= number <= _I64_MAX:
        return None
    return number


class _Reader:
    """Thin view over a seekable binary stream that knows how much is left."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        position = stream.tell()
        self._end = stream.seek(0, io.SEEK_END)
        stream.seek(position)

    @property
    def position(self) -> int:
        return self._stream.tell()

    @property
    def remaining(self) -> int:
        return max(self._end - self._stream.tell(), 0)

    def read(self, size: int) -> bytes:
        return self._stream.read(size)

    def read_byte(self) -> Optional[int]:
        chunk = self._stream.read(1)
        return chunk[0] if chunk else None


@dataclass
class _PartialBulk:
    length: int
    data: bytearray = field(default_factory=bytearray)


@dataclass
class _PartialArray:
    items: list
    remaining: int
    depth: int


class ZSPDecoder:
    """Decodes frames one at a time, keeping state across incomplete input.

    ``decode`` returns None when more data is needed; an unfinished bulk
    string or array is resumed on the next call.
    """

    def __init__(self) -> None:
        self._state: Union[None, _PartialBulk, _PartialArray] = None

    def decode(self, stream: Union[BinaryIO, bytes, bytearray, memoryview]) -> Optional[Frame]:
        """Read the next frame from ``stream``.

        ``stream`` is a seekable binary stream such as io.BytesIO, read from
        its current position; raw bytes are also accepted. Raises ZSPError
        subclasses for malformed input.
        """
        if isinstance(stream, (bytes, bytearray, memoryview)):
            stream = io.BytesIO(bytes(stream))
        return self._decode(_Reader(stream), 0)

    def _decode(self, reader: _Reader, depth: int) -> Optional[Frame]:
        state, self._state = self._state, None

        if isinstance(state, _PartialBulk):
            return self._continue_bulk(reader, state)
        if isinstance(state, _PartialArray):
            return self._continue_array(reader, state)

        if not reader.remaining:
            logger.debug("no data left to decode")
            return None

        tag = reader.read_byte()
        if tag == ord("+"):
            line = self._read_line(reader)
            logger.debug("parsed simple string: %s", line)
            return SimpleString(line)
        if tag == ord("-"):
            line = self._read_line(reader)
            logger.debug("parsed error: %s", line)
            return FrameError(line)
        if tag == ord(":"):
            return self._parse_integer(reader)
        if tag == ord("$"):
            return self._parse_bulk(reader)
        if tag == ord("*"):
            return self._parse_array(reader, depth)
        if tag == ord("%"):
            return self._parse_dictionary(reader, depth)
        raise _invalid(f"Unknown ZSP type at byte {reader.position - 1}")

    def _parse_integer(self, reader: _Reader) -> Integer:
        number = _parse_i64(self._read_line(reader))
        if number is None:
            raise _invalid(f"Invalid integer at byte {reader.position}")
        logger.debug("parsed integer: %d", number)
        return Integer(number)

    def _read_length(self, reader: _Reader, what: str) -> int:
        length = _parse_i64(self._read_line(reader))
        if length is None:
            raise _invalid(f"Invalid {what} length at byte {reader.position}")
        return length

    def _parse_bulk(self, reader: _Reader) -> Optional[BulkString]:
        length = self._read_length(reader, "bulk")
        if length == -1:
            return BulkString(None)
        if length < 0:
            raise _invalid(f"Negative bulk length at byte {reader.position}")
        if length > MAX_BULK_LENGTH:
            raise _invalid(f"Bulk string too long ({length} > {MAX_BULK_LENGTH})")
        return self._continue_bulk(reader, _PartialBulk(length))

    def _continue_bulk(self, reader: _Reader, state: _PartialBulk) -> Optional[BulkString]:
        needed = state.length - len(state.data)
        state.data += reader.read(min(needed, reader.remaining))
        if len(state.data) < state.length:
            self._state = state
            return None
        self._expect_crlf(reader)
        logger.debug("parsed bulk string of length %d", state.length)
        return BulkString(bytes(state.data))

    def _parse_array(self, reader: _Reader, depth: int) -> Optional[Array]:
        if depth > MAX_ARRAY_DEPTH:
            raise _invalid(f"Max array depth exceeded at byte {reader.position}")
        length = self._read_length(reader, "array")
        if length == -1:
            return Array(None)
        if length < 0:
            raise _invalid(f"Negative array length at byte {reader.position}")
        return self._continue_array(reader, _PartialArray([], length, depth))

    def _continue_array(self, reader: _Reader, state: _PartialArray) -> Optional[Array]:
        while state.remaining > 0:
            frame = self._decode(reader, state.depth + 1)
            if frame is None:
                self._state = state
                return None
            state.items.append(frame)
            state.remaining -= 1
        logger.debug("parsed array with %d elements", len(state.items))
        return Array(state.items)

    def _parse_dictionary(self, reader: _Reader, depth: int) -> Optional[Dictionary]:
        length = self._read_length(reader, "dictionary")
        if length == -1:
            return Dictionary(None)
        if length < 0:
            raise _invalid(f"Negative dictionary length at byte {reader.position}")

        items: dict[str, Frame] = {}
        for _ in range(length):
            key = self._decode(reader, depth + 1)
            if key is None:
                return None
            value = self._decode(reader, depth + 1)
            if value is None:
                return None
            if not isinstance(key, SimpleString):
                raise _invalid(f"Expected SimpleString as key at byte {reader.position}")
            items[key.value] = value
        logger.debug("parsed dictionary with %d items", len(items))
        return Dictionary(items)

    def _read_line(self, reader: _Reader) -> str:
        start = reader.position
        line = bytearray()
        while reader.remaining and len(line) < MAX_LINE_LENGTH:
            byte = reader.read_byte()
            if byte == _CR:
                following = reader.read_byte()
                if following is None:
                    raise UnexpectedEofError(f"Incomplete line at byte {start}")
                if following != _LF:
                    raise _invalid(f"Expected \\n after \\r at byte {reader.position}")
                try:
                    return line.decode("utf-8")
                except UnicodeDecodeError:
                    raise _invalid(f"Invalid UTF-8 sequence at byte {start}") from None
            line.append(byte)

        if len(line) >= MAX_LINE_LENGTH:
            raise InvalidDataError(f"Line to long (max {MAX_LINE_LENGTH} bytes)")
        raise UnexpectedEofError(f"Incomplete line at byte {start}")

    def _expect_crlf(self, reader: _Reader) -> None:
        if reader.remaining < 2:
            message = f"Expected CRLF at byte {reader.position}"
            logger.error(message)
            raise UnexpectedEofError(message)
        if reader.read_byte() != _CR or reader.read_byte() != _LF:
            message = f"Invalid CRLF sequence at byte {reader.position}"
            logger.error(message)
            raise UnexpectedEofError(message)