"""
Generic Protocol Buffers wire-format inspector.

There is no schema, so this only walks the wire format: every field is a
varint tag ``(field_number << 3) | wire_type`` followed by a value whose
layout depends on the wire type. Length-delimited values are shown as a
string when every byte is printable ASCII, which is a guess: nested
messages, packed fields and binary blobs can look printable too.
"""

from typing import Iterator, List, NamedTuple, Optional, Union
import logging

import bitstring

from .errors import InspectError, UnsupportedOperationError
from .varint import decode_varint


ROW_WIDTH = 16
MAX_PREVIEW_BYTES = 16

WIRE_TYPE_VARINT = 0
WIRE_TYPE_I64 = 1
WIRE_TYPE_LEN = 2
WIRE_TYPE_START_GROUP = 3
WIRE_TYPE_END_GROUP = 4
WIRE_TYPE_I32 = 5

WIRE_TYPE_NAMES = {
    WIRE_TYPE_VARINT: "varint",
    WIRE_TYPE_I64: "64-bit",
    WIRE_TYPE_LEN: "length-delimited",
    WIRE_TYPE_START_GROUP: "start group (deprecated)",
    WIRE_TYPE_END_GROUP: "end group (deprecated)",
    WIRE_TYPE_I32: "32-bit",
}


class Fixed(NamedTuple):
    raw: int
    as_float: float


class WireRecord(NamedTuple):
    index: int
    offset: int
    field_number: int
    wire_type: int
    value: Optional[Union[int, Fixed, bytes]]

    @property
    def wire_type_name(self) -> str:
        return WIRE_TYPE_NAMES.get(self.wire_type, "unknown")

    @property
    def is_printable(self) -> bool:
        return (
            isinstance(self.value, bytes)
            and len(self.value) > 0
            and all(32 <= b <= 126 for b in self.value)
        )


def _read_fixed(data: bytes, offset: int, size: int) -> Fixed:
    raw = data[offset : offset + size]
    if len(raw) < size:
        raise InspectError(f"Truncated {size * 8}-bit value", offset)

    bits = bitstring.Bits(bytes=raw)
    return Fixed(bits.uintle, bits.floatle)


def parse_fields(data: bytes) -> Iterator[WireRecord]:
    """
    Yield one record per field, in buffer order.

    Raises InspectError when a tag or a value runs past the end of the buffer.
    Unknown wire types are yielded with no value and skipped by a single byte.
    """
    offset = 0
    index = 0

    while offset < len(data):
        index += 1

        tag, consumed = decode_varint(data, offset)
        if consumed == 0:
            raise InspectError("Unable to parse tag", offset)

        field_offset = offset
        wire_type = tag & 0x7
        field_number = tag >> 3
        offset += consumed

        value: Optional[Union[int, Fixed, bytes]]
        if wire_type == WIRE_TYPE_VARINT:
            value, consumed = decode_varint(data, offset)
            if consumed == 0:
                raise InspectError("Truncated varint value", offset)
            offset += consumed

        elif wire_type == WIRE_TYPE_I64:
            value = _read_fixed(data, offset, 8)
            offset += 8

        elif wire_type == WIRE_TYPE_LEN:
            length, consumed = decode_varint(data, offset)
            if consumed == 0 or offset + consumed + length > len(data):
                raise InspectError("Truncated length-delimited value", offset)
            offset += consumed
            value = data[offset : offset + length]
            offset += length

        elif wire_type == WIRE_TYPE_I32:
            value = _read_fixed(data, offset, 4)
            offset += 4

        else:
            logging.debug("Unknown wire type %d at offset %d", wire_type, field_offset)
            value = None
            offset += 1

        yield WireRecord(index, field_offset, field_number, wire_type, value)


def hexdump(data: bytes) -> str:
    rows = []

    for offset in range(0, len(data), ROW_WIDTH):
        row = data[offset : offset + ROW_WIDTH]
        hex_part = "".join(f"{b:02X} " for b in row).ljust(ROW_WIDTH * 3)
        ascii_part = "".join(chr(b) if 32 <= b < 127 else "." for b in row)
        rows.append(f"{offset:04X}: {hex_part} |{ascii_part}|")

    return "\n".join(rows)


def _describe_value(record: WireRecord) -> str:
    value = record.value

    if record.wire_type == WIRE_TYPE_VARINT:
        return f"Value (varint): {value} (0x{value:X})"
    elif record.wire_type == WIRE_TYPE_I64:
        return f"Value (64-bit): {value.raw} (0x{value.raw:016X}) / float64: {value.as_float:f}"
    elif record.wire_type == WIRE_TYPE_I32:
        return f"Value (32-bit): {value.raw} (0x{value.raw:08X}) / float32: {value.as_float:f}"
    elif record.wire_type == WIRE_TYPE_LEN:
        if record.is_printable:
            return f'Value (string): "{value.decode("ascii")}"'

        preview = " ".join(f"{b:02X}" for b in value[:MAX_PREVIEW_BYTES])
        if len(value) > MAX_PREVIEW_BYTES:
            preview += " ..."
        return f"Value (bytes, len={len(value)}): {preview}".rstrip()
    else:
        return f"Unknown wire type {record.wire_type}"


def inspect(data: bytes) -> str:
    """Render a hex dump of ``data`` followed by a field by field breakdown."""
    lines: List[str] = ["Protobuf Hex Dump with Field Analysis:", "=" * 51, ""]

    if data:
        lines.append(hexdump(data))
        lines.append("")

    lines.append("Field Analysis:")
    lines.append("-" * 31)

    records = parse_fields(data)
    index = 0
    try:
        for record in records:
            index = record.index
            lines.append(f"  Field {record.index} (offset {record.offset:04X}):")
            lines.append(
                f"    Tag: {record.field_number}, Wire Type: {record.wire_type} ({record.wire_type_name})"
            )
            lines.append(f"    {_describe_value(record)}")
            lines.append("")
    except InspectError as e:
        logging.debug("Stopped field analysis: %s at offset %d", e, e.offset)
        lines.append(f"  Field {index + 1}: {e} at offset {e.offset}")

    return "\n".join(lines) + "\n"


def encode(text: str) -> str:
    raise UnsupportedOperationError(
        "protobuf encoding from text is not supported, use decode for hex dump view"
    )
