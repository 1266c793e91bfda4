"""
Z85, the ZeroMQ base-85 alphabet.

Input is processed in 4 byte big-endian groups, each written as 5 characters
starting with the least significant digit. Z85 carries no length information,
so encoding silently pads the input with zero bytes to a multiple of 4.
"""

from typing import Dict, Union
import logging

from .errors import CodecError, LengthError, MalformedCharacterError


ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ.-:+=^!/*?&<>()[]{}@%$#"

_DECODE_MAP: Dict[int, int] = {ord(c): i for i, c in enumerate(ALPHABET)}

_UINT32_MAX = 0xFFFFFFFF


def encode(data: bytes) -> str:
    if len(data) % 4:
        padding = 4 - len(data) % 4
        logging.debug("Padding Z85 input with %d zero bytes", padding)
        data = data + b"\0" * padding

    result = []
    for i in range(0, len(data), 4):
        value = int.from_bytes(data[i : i + 4], "big")

        for _ in range(5):
            value, digit = divmod(value, 85)
            result.append(ALPHABET[digit])

    return "".join(result)


def decode(text: Union[str, bytes]) -> bytes:
    if isinstance(text, str):
        text = text.encode()

    if len(text) % 5:
        raise LengthError("Z85 input length must be multiple of 5")

    result = bytearray()
    for i in range(0, len(text), 5):
        value = 0

        # the last character of a group holds the most significant digit
        for j in range(4, -1, -1):
            c = text[i + j]
            try:
                value = value * 85 + _DECODE_MAP[c]
            except KeyError:
                raise MalformedCharacterError(
                    f"invalid Z85 character: {chr(c)!r} at offset {i + j}"
                ) from None

        if value > _UINT32_MAX:
            raise CodecError(f"Z85 group at offset {i} does not fit in 32 bits")

        result += value.to_bytes(4, "big")

    return bytes(result)
