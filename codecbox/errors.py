class CodecError(ValueError):
    pass


class MalformedCharacterError(CodecError):
    pass


class LengthError(CodecError):
    pass


class UnterminatedError(CodecError):
    pass


class TypeMismatchError(CodecError):
    pass


class UnsupportedOperationError(CodecError):
    pass


class InspectError(CodecError):
    def __init__(self, message: str, offset: int):
        super().__init__(message)
        self.offset = offset
