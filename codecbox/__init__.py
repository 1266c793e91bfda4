from .bcode import bdecode, bencode, decode_from
from .converter import convert
from .errors import (
    CodecError,
    InspectError,
    LengthError,
    MalformedCharacterError,
    TypeMismatchError,
    UnsupportedOperationError,
    UnterminatedError,
)
from .protobuf import inspect
from .varint import decode_varint, encode_varint
