"""
Adobe ASCII85.

Every 4 input bytes are read as a big-endian 32 bit integer and written as
5 base-85 digits in the printable range ``!`` (33) to ``u`` (117). A full
group of zero bytes is shortened to ``z``. The encoded text is wrapped in
``<~`` and ``~>``.
"""

from typing import Union
import logging

from .errors import CodecError, LengthError, MalformedCharacterError


START = "<~"
END = "~>"

_OFFSET = 33
_MAX_DIGIT = 84
_ZERO_GROUP = ord("z")
_UINT32_MAX = 0xFFFFFFFF


def _encode_group(group: bytes) -> str:
    value = int.from_bytes(group.ljust(4, b"\0"), "big")

    digits = []
    for _ in range(5):
        value, digit = divmod(value, 85)
        digits.append(chr(digit + _OFFSET))
    digits.reverse()

    # the low order digits of a partial group only encode the padding
    return "".join(digits[: len(group) + 1])


def encode(data: bytes) -> str:
    chunks = [START]

    for i in range(0, len(data), 4):
        group = data[i : i + 4]

        if group == b"\0\0\0\0":
            chunks.append("z")
        else:
            chunks.append(_encode_group(group))

    chunks.append(END)
    return "".join(chunks)


def _strip_delimiters(data: bytes) -> bytes:
    data = data.strip()
    if data.startswith(START.encode()):
        data = data[len(START) :]
    if data.endswith(END.encode()):
        data = data[: -len(END)]
    return data.strip()


def _decode_group(group: bytes, offset: int) -> bytes:
    digits = []
    for i, c in enumerate(group):
        if not _OFFSET <= c <= _OFFSET + _MAX_DIGIT:
            raise MalformedCharacterError(
                f"invalid ASCII85 character: {chr(c)!r} at offset {offset + i}"
            )
        digits.append(c - _OFFSET)

    real_length = len(digits)
    if real_length < 2:
        raise LengthError(f"incomplete ASCII85 sequence at offset {offset}")

    digits.extend([_MAX_DIGIT] * (5 - real_length))

    value = 0
    for digit in digits:
        value = value * 85 + digit

    if value > _UINT32_MAX:
        raise CodecError(f"ASCII85 group at offset {offset} does not fit in 32 bits")

    return value.to_bytes(4, "big")[: real_length - 1]


def decode(text: Union[str, bytes]) -> bytes:
    if isinstance(text, str):
        text = text.encode()

    payload = _strip_delimiters(text)
    result = bytearray()

    i = 0
    while i < len(payload):
        if payload[i] == _ZERO_GROUP:
            result += b"\0\0\0\0"
            i += 1
            continue

        group = payload[i : i + 5]
        result += _decode_group(group, i)
        i += len(group)

    logging.debug("Decoded %d ASCII85 characters into %d bytes", len(payload), len(result))
    return bytes(result)
