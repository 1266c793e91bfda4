"""
Maps a method name and an encode/decode sub-mode onto one of the codecs.

Inputs and outputs are text: raw input is encoded as UTF-8 before it reaches
a codec and decoded bytes are turned back into text with invalid sequences
replaced.
"""

from typing import Any, Dict, Optional
import logging

from . import ascii85, bcode, protobuf, z85
from .errors import CodecError, UnsupportedOperationError


ENCODE = "encode"
DECODE = "decode"


def _to_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _is_encode(config: Dict[str, Any]) -> bool:
    sub_mode = config.get("subMode") or ENCODE
    return str(sub_mode).lower() != DECODE


def _convert_base85(text: str, is_encode: bool, variant: str) -> str:
    codec = z85 if variant == "z85" else ascii85
    if is_encode:
        return codec.encode(text.encode())
    return _to_text(codec.decode(text))


def _convert_bencode(text: str, is_encode: bool) -> str:
    if is_encode:
        return bcode.encode_json(text)
    return bcode.decode_json(text)


def _convert_protobuf(text: str, is_encode: bool) -> str:
    if is_encode:
        return protobuf.encode(text)

    try:
        data = bytes.fromhex(text.strip())
    except ValueError as e:
        raise CodecError(f"input must be valid hex string: {e}") from e

    return protobuf.inspect(data)


def convert(text: str, method: str, config: Optional[Dict[str, Any]] = None) -> str:
    config = config or {}
    is_encode = _is_encode(config)
    method = method.lower()

    logging.debug("Converting %d characters with %s (encode=%s)", len(text), method, is_encode)

    if "z85" in method:
        return _convert_base85(text, is_encode, "z85")
    elif "base85" in method or "ascii85" in method:
        variant = str(config.get("variant", "ascii85")).lower()
        return _convert_base85(text, is_encode, variant)
    elif "bencode" in method:
        return _convert_bencode(text, is_encode)
    elif "protobuf" in method:
        return _convert_protobuf(text, is_encode)

    raise UnsupportedOperationError(f"encoding method {method} not supported")
