import io

import pytest

from zumic.decoder import ZSPDecoder
from zumic.encoder import encode
from zumic.errors import InvalidDataError, UnexpectedEofError, ZSPError
from zumic.frame import (
    Array,
    BulkString,
    Dictionary,
    FrameError,
    Integer,
    SimpleString,
)


def test_simple_string():
    decoder = ZSPDecoder()
    assert decoder.decode(io.BytesIO(b"+OK\r\n")) == SimpleString("OK")


def test_bulk_string():
    decoder = ZSPDecoder()
    assert decoder.decode(io.BytesIO(b"$5\r\nhello\r\n")) == BulkString(b"hello")


def test_partial_bulk_string():
    decoder = ZSPDecoder()
    assert decoder.decode(io.BytesIO(b"$5\r\nhel")) is None
    assert decoder.decode(io.BytesIO(b"lo\r\n")) == BulkString(b"hello")


def test_empty_dictionary():
    decoder = ZSPDecoder()
    assert decoder.decode(io.BytesIO(b"%0\r\n")) == Dictionary({})


def test_single_item_dictionary():
    decoder = ZSPDecoder()
    frame = decoder.decode(io.BytesIO(b"%1\r\n+key\r\n+value\r\n"))
    assert frame == Dictionary({"key": SimpleString("value")})


def test_multiple_items_dictionary_round_trip():
    original = Dictionary(
        {"key1": SimpleString("value1"), "key2": SimpleString("value2")}
    )
    encoded = encode(original)
    decoded = ZSPDecoder().decode(io.BytesIO(encoded))
    assert decoded == original


def test_invalid_dictionary_key():
    decoder = ZSPDecoder()
    with pytest.raises(InvalidDataError):
        decoder.decode(io.BytesIO(b"%1\r\n-err\r\n+value\r\n"))


def test_incomplete_dictionary():
    decoder = ZSPDecoder()
    assert decoder.decode(io.BytesIO(b"%2\r\n+key1\r\n+value1\r\n")) is None


def test_error_and_integer_frames():
    decoder = ZSPDecoder()
    stream = io.BytesIO(b"-ERR bad\r\n:-42\r\n")
    assert decoder.decode(stream) == FrameError("ERR bad")
    assert decoder.decode(stream) == Integer(-42)
    assert decoder.decode(stream) is None


def test_null_bulk_array_and_dictionary():
    decoder = ZSPDecoder()
    stream = io.BytesIO(b"$-1\r\n*-1\r\n%-1\r\n")
    assert decoder.decode(stream) == BulkString(None)
    assert decoder.decode(stream) == Array(None)
    assert decoder.decode(stream) == Dictionary(None)


def test_nested_array_round_trip():
    original = Array(
        [SimpleString("test"), Integer(42), Array([BulkString(b"x\r\ny")])]
    )
    assert ZSPDecoder().decode(io.BytesIO(encode(original))) == original


def test_raw_bytes_accepted():
    assert ZSPDecoder().decode(b":7\r\n") == Integer(7)


def test_stream_position_advances_past_frame():
    stream = io.BytesIO(b"+a\r\n+b\r\n")
    ZSPDecoder().decode(stream)
    assert stream.tell() == 4


def test_partial_array_resumes():
    decoder = ZSPDecoder()
    assert decoder.decode(io.BytesIO(b"*2\r\n+a\r\n")) is None
    assert decoder.decode(io.BytesIO(b"+b\r\n")) == Array(
        [SimpleString("a"), SimpleString("b")]
    )


def test_unknown_type_byte():
    with pytest.raises(InvalidDataError) as info:
        ZSPDecoder().decode(io.BytesIO(b"?x\r\n"))
    assert "Unknown ZSP type at byte 0" in str(info.value)


def test_invalid_integer():
    with pytest.raises(InvalidDataError):
        ZSPDecoder().decode(io.BytesIO(b":12a\r\n"))


def test_integer_out_of_range():
    with pytest.raises(InvalidDataError):
        ZSPDecoder().decode(io.BytesIO(b":9223372036854775808\r\n"))


def test_negative_bulk_length():
    with pytest.raises(InvalidDataError):
        ZSPDecoder().decode(io.BytesIO(b"$-5\r\n"))


def test_bulk_too_long():
    with pytest.raises(InvalidDataError):
        ZSPDecoder().decode(io.BytesIO(b"$536870913\r\n"))


def test_bulk_missing_crlf():
    with pytest.raises(UnexpectedEofError):
        ZSPDecoder().decode(io.BytesIO(b"$5\r\nhello"))


def test_bulk_bad_terminator():
    with pytest.raises(UnexpectedEofError):
        ZSPDecoder().decode(io.BytesIO(b"$2\r\nhixx"))


def test_incomplete_line():
    with pytest.raises(UnexpectedEofError):
        ZSPDecoder().decode(io.BytesIO(b"+OK"))


def test_cr_without_lf():
    with pytest.raises(InvalidDataError):
        ZSPDecoder().decode(io.BytesIO(b"+OK\rX"))


def test_invalid_utf8_line():
    with pytest.raises(InvalidDataError):
        ZSPDecoder().decode(io.BytesIO(b"+\xff\xfe\r\n"))


def test_array_depth_limit():
    data = b"*1\r\n" * 40 + b":1\r\n"
    with pytest.raises(ZSPError):
        ZSPDecoder().decode(io.BytesIO(data))


def test_decoder_usable_after_error():
    decoder = ZSPDecoder()
    with pytest.raises(InvalidDataError):
        decoder.decode(io.BytesIO(b"?"))
    assert decoder.decode(io.BytesIO(b"+OK\r\n")) == SimpleString("OK")