import pytest

from codecbox.varint import MAX_VARINT_LENGTH, decode_varint, encode_varint


VECTORS = [
    (0, b"\x00"),
    (1, b"\x01"),
    (127, b"\x7f"),
    (128, b"\x80\x01"),
    (150, b"\x96\x01"),
    (300, b"\xac\x02"),
]


@pytest.mark.parametrize("value,encoded", VECTORS)
def test_encode_varint(value, encoded):
    assert encode_varint(value) == encoded


@pytest.mark.parametrize("value,encoded", VECTORS)
def test_decode_varint(value, encoded):
    assert decode_varint(encoded) == (value, len(encoded))


def test_encode_varint_rejects_negative():
    with pytest.raises(ValueError):
        encode_varint(-1)


def test_decode_varint_from_offset():
    assert decode_varint(b"\x08\x96\x01", 1) == (150, 2)


def test_decode_varint_ignores_trailing_bytes():
    assert decode_varint(b"\x96\x01\xff\xff") == (150, 2)


@pytest.mark.parametrize("data", [b"", b"\x96", b"\xff\xff\xff"])
def test_decode_varint_unterminated(data):
    assert decode_varint(data) == (0, 0)


def test_decode_varint_max_length():
    data = b"\xff" * (MAX_VARINT_LENGTH - 1) + b"\x01"
    assert decode_varint(data) == (2 ** 64 - 1, MAX_VARINT_LENGTH)


def test_decode_varint_too_long():
    assert decode_varint(b"\xff" * MAX_VARINT_LENGTH + b"\x01") == (0, 0)


def test_decode_varint_truncates_to_64_bits():
    data = b"\xff" * (MAX_VARINT_LENGTH - 1) + b"\x7f"
    assert decode_varint(data) == (2 ** 64 - 1, MAX_VARINT_LENGTH)
