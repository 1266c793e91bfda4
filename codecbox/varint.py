"""
Protocol Buffers style varints.

Each byte carries 7 bits of the value, least significant group first;
the MSB is set on every byte except the last one.
"""

from typing import Tuple


MAX_VARINT_LENGTH = 10

_UINT64_MASK = (1 << 64) - 1


def encode_varint(value: int) -> bytes:
    if value < 0:
        raise ValueError(f"Cannot encode negative value: {value}")

    result = bytearray()
    while value > 0x7F:
        result.append((value & 0x7F) | 0x80)
        value >>= 7
    result.append(value)

    return bytes(result)


def decode_varint(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Decode a varint starting at ``offset``.

    Returns ``(value, bytes_consumed)``, or ``(0, 0)`` if the buffer ends
    before the terminating byte or the varint is longer than 10 bytes.
    """
    result = 0
    shift = 0

    for i, byte in enumerate(data[offset : offset + MAX_VARINT_LENGTH]):
        result |= (byte & 0x7F) << shift
        if byte & 0x80 == 0:
            return result & _UINT64_MASK, i + 1
        shift += 7

    return 0, 0
