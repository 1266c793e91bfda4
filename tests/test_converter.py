import pytest

from codecbox.converter import convert
from codecbox.errors import CodecError, UnsupportedOperationError


@pytest.mark.parametrize(
    "test_input,method,sub_mode,expected",
    [
        ("hello", "base85", "Encode", "<~BOu!rDZ~>"),
        ("<~BOu!rDZ~>", "base85", "Decode", "hello"),
        ("", "base85", "Encode", "<~~>"),
        ("hello", "ASCII85", "encode", "<~BOu!rDZ~>"),
        ("\0\0\0\0", "z85", "Encode", "00000"),
        ("00000", "Z85", "decode", "\0\0\0\0"),
        ('"hello"', "bencode", "Encode", "5:hello"),
        ("42", "bencode", "Encode", "i42e"),
        ("5:hello", "bencode", "Decode", '"hello"'),
        ("i42e", "bencode", "Decode", "42"),
    ],
)
def test_convert(test_input, method, sub_mode, expected):
    assert convert(test_input, method, {"subMode": sub_mode}) == expected


def test_encode_is_the_default_sub_mode():
    assert convert("hello", "base85") == "<~BOu!rDZ~>"
    assert convert("42", "bencode", {"subMode": None}) == "i42e"


def test_base85_variant_selects_z85():
    assert convert("\0\0\0\0", "base85", {"variant": "Z85"}) == "00000"


@pytest.mark.parametrize("test_input", ["089601", " 08 96 01 "])
def test_protobuf_decode(test_input):
    result = convert(test_input, "protobuf", {"subMode": "Decode"})

    assert "Protobuf Hex Dump" in result
    assert "Field 1" in result
    assert "Value (varint): 150" in result


def test_protobuf_decode_empty_input():
    assert "Protobuf Hex Dump" in convert("", "protobuf", {"subMode": "Decode"})


def test_protobuf_decode_rejects_invalid_hex():
    with pytest.raises(CodecError, match="valid hex"):
        convert("not-hex", "protobuf", {"subMode": "Decode"})


def test_protobuf_encode_is_not_supported():
    with pytest.raises(UnsupportedOperationError):
        convert("089601", "protobuf", {"subMode": "Encode"})


def test_unknown_method():
    with pytest.raises(UnsupportedOperationError, match="not supported"):
        convert("hello", "rot13")


def test_decode_errors_propagate():
    with pytest.raises(CodecError):
        convert("0000", "z85", {"subMode": "decode"})

    with pytest.raises(CodecError):
        convert("1.5", "bencode")


@pytest.mark.parametrize("text", ["hello", "Hello World! 123", "naïve ☃"])
def test_base85_round_trip(text):
    encoded = convert(text, "base85")
    assert convert(encoded, "base85", {"subMode": "decode"}) == text
