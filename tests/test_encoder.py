import pytest

from zumic import encoder
from zumic.encoder import MAX_ARRAY_DEPTH, encode
from zumic.errors import InvalidDataError
from zumic.frame import (
    Array,
    BulkString,
    Dictionary,
    FloatFrame,
    FrameError,
    Integer,
    NullFrame,
    SimpleString,
    ZSetFrame,
)


def test_simple_string():
    assert encode(SimpleString("OK")) == b"+OK\r\n"


def test_bulk_string():
    assert encode(BulkString(b"hello")) == b"$5\r\nhello\r\n"


def test_null_bulk_string():
    assert encode(BulkString(None)) == b"$-1\r\n"


def test_nested_array():
    frame = Array([SimpleString("test"), Integer(42)])
    assert encode(frame) == b"*2\r\n+test\r\n:42\r\n"


def test_null_array():
    assert encode(Array(None)) == b"*-1\r\n"


def test_invalid_simple_string():
    with pytest.raises(InvalidDataError):
        encode(SimpleString("bad\r\nstring"))


def test_invalid_error_string():
    with pytest.raises(InvalidDataError):
        encode(FrameError("bad\nerror"))


def test_error_frame():
    assert encode(FrameError("ERR oops")) == b"-ERR oops\r\n"


def test_empty_dictionary():
    assert encode(Dictionary(None)) == b"%-1\r\n"


def test_single_item_dictionary():
    frame = Dictionary({"key1": SimpleString("value1")})
    assert encode(frame) == b"%1\r\n+key1\r\n+value1\r\n"


def test_multiple_items_dictionary():
    frame = Dictionary(
        {"key1": SimpleString("value1"), "key2": SimpleString("value2")}
    )
    assert encode(frame) == b"%2\r\n+key1\r\n+value1\r\n+key2\r\n+value2\r\n"


def test_dictionary_key_with_newline_rejected():
    with pytest.raises(InvalidDataError):
        encode(Dictionary({"bad\nkey": Integer(1)}))


def test_float_encoding():
    assert encode(FloatFrame(42.42)) == b":42.42\r\n"


def test_negative_float_encoding():
    assert encode(FloatFrame(-42.42)) == b":-42.42\r\n"


def test_whole_float_has_no_fraction():
    assert encode(FloatFrame(1.0)) == b":1\r\n"


def test_null_frame():
    assert encode(NullFrame()) == b"$-1\r\n"


def test_zset_frame():
    frame = ZSetFrame([("a", 1.5), ("b", 2.0)])
    assert encode(frame) == b"^2\r\n+a\r\n:1.5\r\n+b\r\n:2\r\n"


def test_zset_member_with_newline_rejected():
    with pytest.raises(InvalidDataError):
        encode(ZSetFrame([("x\ry", 1.0)]))


def _nest(levels):
    frame = Integer(1)
    for _ in range(levels):
        frame = Array([frame])
    return frame


def test_max_depth_allowed():
    encoded = encode(_nest(MAX_ARRAY_DEPTH))
    assert encoded.endswith(b":1\r\n")
    assert encoded.count(b"*1\r\n") == MAX_ARRAY_DEPTH


def test_depth_exceeded():
    with pytest.raises(InvalidDataError):
        encode(_nest(MAX_ARRAY_DEPTH + 1))


def test_bulk_string_too_long(monkeypatch):
    monkeypatch.setattr(encoder, "MAX_BULK_LENGTH", 3)
    with pytest.raises(InvalidDataError):
        encode(BulkString(b"abcd"))