import os

import pytest

from codecbox import ascii85
from codecbox.errors import CodecError, LengthError, MalformedCharacterError


@pytest.mark.parametrize(
    "test_input,expected",
    [
        (b"hello", "<~BOu!rDZ~>"),
        (b"", "<~~>"),
        (b"\0\0\0\0", "<~z~>"),
        (b"\0", "<~!!~>"),
        (b"\0\0\0\0\0", "<~z!!~>"),
    ],
)
def test_encode(test_input, expected):
    assert ascii85.encode(test_input) == expected


def test_encode_never_shortens_partial_zero_group():
    assert "z" not in ascii85.encode(b"\0\0\0")


@pytest.mark.parametrize(
    "test_input,expected",
    [
        ("<~BOu!rDZ~>", b"hello"),
        ("BOu!rDZ", b"hello"),
        ("  <~BOu!rDZ~>\n", b"hello"),
        ("<~ BOu!rDZ ~>", b"hello"),
        (b"<~BOu!rDZ~>", b"hello"),
        ("<~~>", b""),
        ("<~z~>", b"\0\0\0\0"),
        ("<~z!!~>", b"\0\0\0\0\0"),
    ],
)
def test_decode(test_input, expected):
    assert ascii85.decode(test_input) == expected


@pytest.mark.parametrize("test_input", ["<~BOu!v~>", "<~BO u!~>", "<~Bz~>", "<~BOé~>"])
def test_decode_rejects_invalid_characters(test_input):
    with pytest.raises(MalformedCharacterError, match="invalid ASCII85 character"):
        ascii85.decode(test_input)


@pytest.mark.parametrize("test_input", ["<~B~>", "BOu!rD"])
def test_decode_rejects_incomplete_group(test_input):
    with pytest.raises(LengthError):
        ascii85.decode(test_input)


def test_decode_rejects_group_overflow():
    with pytest.raises(CodecError):
        ascii85.decode("<~uuuuu~>")


@pytest.mark.parametrize(
    "data",
    [b"a", b"ab", b"abc", b"abcd", b"\0\0\0\0\0\0\0", b"\xff" * 9, bytes(range(256)), os.urandom(61)],
)
def test_round_trip(data):
    assert ascii85.decode(ascii85.encode(data)) == data
