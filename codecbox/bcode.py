from typing import Any, Dict, List, Tuple, Union
import json
import logging
import re
import string

from .errors import CodecError, LengthError, TypeMismatchError, UnterminatedError


_digits_as_bytes = tuple(ord(x) for x in string.digits)

_integer_pattern = re.compile(rb"[+-]?[0-9]+")

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

BCodeType = Union[int, bytes, str, Dict[Union[str, bytes], "BCodeType"], List["BCodeType"]]


def _check_int_range(value: int) -> int:
    if not INT64_MIN <= value <= INT64_MAX:
        raise TypeMismatchError("integer does not fit in 64 bits")
    return value


def _decode_int(data: bytes, offset: int) -> Tuple[int, int]:
    data_end = data.find(b"e", offset + 1)
    if data_end == -1:
        raise UnterminatedError(f"unterminated integer at offset {offset}")

    token = data[offset + 1 : data_end]
    if not _integer_pattern.fullmatch(token):
        raise CodecError(f"invalid integer {token[:20]!r} at offset {offset}")

    try:
        value = int(token)
    except ValueError as e:
        raise CodecError(f"invalid integer at offset {offset}: {e}") from e

    return _check_int_range(value), data_end + 1


def _decode_string(data: bytes, offset: int) -> Tuple[bytes, int]:
    colon = data.find(b":", offset)
    if colon == -1:
        raise UnterminatedError(f"unterminated string length at offset {offset}")

    length_data = data[offset:colon]
    if not length_data.isdigit():
        raise LengthError(f"invalid string length {length_data[:20]!r} at offset {offset}")

    try:
        length = int(length_data)
    except ValueError as e:
        raise LengthError(f"invalid string length at offset {offset}: {e}") from e

    start = colon + 1
    end = start + length
    if end > len(data):
        raise LengthError(f"string exceeds input length at offset {offset}")

    return data[start:end], end


def _decode_list(data: bytes, offset: int) -> Tuple[List[BCodeType], int]:
    start = offset
    results = []
    offset += 1

    while True:
        if offset >= len(data):
            raise UnterminatedError(f"unterminated list at offset {start}")
        if data[offset] == ord(b"e"):
            break

        value, offset = _bdecode_impl(data, offset)
        results.append(value)

    return results, offset + 1


def _decode_dict(data: bytes, offset: int) -> Tuple[Dict[bytes, BCodeType], int]:
    start = offset
    results = {}
    offset += 1

    while True:
        if offset >= len(data):
            raise UnterminatedError(f"unterminated dictionary at offset {start}")
        if data[offset] == ord(b"e"):
            break

        key_offset = offset
        key, offset = _bdecode_impl(data, offset)
        if not isinstance(key, bytes):
            raise TypeMismatchError(f"dictionary key must be a string at offset {key_offset}")

        # keys are kept in input order, canonical ordering is not enforced
        results[key], offset = _bdecode_impl(data, offset)

    return results, offset + 1


def _bdecode_impl(data: bytes, offset: int) -> Tuple[BCodeType, int]:
    if offset >= len(data):
        raise UnterminatedError(f"unexpected end of input at offset {offset}")

    token = data[offset]
    if token == ord(b"i"):
        return _decode_int(data, offset)
    elif token in _digits_as_bytes:
        return _decode_string(data, offset)
    elif token == ord(b"l"):
        return _decode_list(data, offset)
    elif token == ord(b"d"):
        return _decode_dict(data, offset)
    else:
        raise CodecError(f"unknown bencode type: {chr(token)!r} at offset {offset}")


def _decode_top(data: bytes, offset: int) -> Tuple[BCodeType, int]:
    try:
        return _bdecode_impl(data, offset)
    except RecursionError as e:
        raise CodecError(f"bencode value nested too deeply at offset {offset}") from e


def decode_from(data: Union[bytes, str], offset: int = 0) -> Tuple[BCodeType, int]:
    """
    Decode one value starting at ``offset``.

    Returns the value and the offset right past it.
    """
    if isinstance(data, str):
        data = data.encode()
    return _decode_top(data, offset)


def bdecode(data: Union[bytes, str]) -> BCodeType:
    if isinstance(data, str):
        data = data.encode()

    value, end = _decode_top(data, 0)
    if end != len(data):
        raise LengthError(f"trailing data after bencode value at offset {end}")

    return value


def _encode_key(key: Union[str, bytes]) -> bytes:
    if isinstance(key, str):
        return key.encode()
    if isinstance(key, bytes):
        return key
    raise TypeMismatchError(f"dictionary key must be a string, not {type(key).__name__}")


def bencode(data: BCodeType) -> bytes:
    if isinstance(data, int):
        return f"i{_check_int_range(int(data))}e".encode()
    elif isinstance(data, (bytes, str)):
        if isinstance(data, str):
            data = data.encode()
        return str(len(data)).encode() + b":" + data
    elif isinstance(data, (list, tuple)):
        return b"l" + b"".join(bencode(value) for value in data) + b"e"
    elif isinstance(data, dict):
        items = {}
        for key, value in data.items():
            encoded_key = _encode_key(key)
            if encoded_key in items:
                raise TypeMismatchError(f"duplicate dictionary key {encoded_key!r}")
            items[encoded_key] = value

        encoded = b""
        for key in sorted(items):
            encoded += bencode(key) + bencode(items[key])

        return b"d" + encoded + b"e"
    else:
        raise TypeMismatchError(f"unsupported type for bencode: {type(data).__name__}")


def from_json(value: Any) -> BCodeType:
    """Convert a value produced by ``json.loads`` into bencode types."""
    if value is None:
        return b""
    elif isinstance(value, bool):
        return int(value)
    elif isinstance(value, int):
        return value
    elif isinstance(value, float):
        if not value.is_integer():
            raise TypeMismatchError("bencode does not support floating point numbers")
        return int(value)
    elif isinstance(value, str):
        return value.encode()
    elif isinstance(value, list):
        return [from_json(x) for x in value]
    elif isinstance(value, dict):
        return {key.encode(): from_json(x) for key, x in value.items()}
    else:
        raise TypeMismatchError(f"unsupported type for bencode: {type(value).__name__}")


def to_json(value: BCodeType) -> Any:
    """Convert a decoded value into types ``json.dumps`` accepts."""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    elif isinstance(value, list):
        return [to_json(x) for x in value]
    elif isinstance(value, dict):
        results = {}
        for key, x in value.items():
            text_key = to_json(key)
            # invalid UTF-8 keys can collapse onto the same replacement text
            if text_key in results:
                raise TypeMismatchError(f"dictionary key {key!r} collides with another key as text")
            results[text_key] = to_json(x)
        return results
    return value


def encode_json(text: str) -> str:
    try:
        value = json.loads(text)
    except ValueError as e:
        raise CodecError(f"input must be valid JSON for bencode encoding: {e}") from e
    except RecursionError as e:
        raise CodecError("JSON input nested too deeply") from e

    return bencode(from_json(value)).decode()


def decode_json(data: Union[bytes, str]) -> str:
    value = bdecode(data)
    logging.debug("Decoded bencode value of type %s", type(value).__name__)
    return json.dumps(to_json(value), indent=2, ensure_ascii=False)
