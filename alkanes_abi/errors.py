class AbiError(Exception):
    """Base class for every failure that aborts an extraction run."""

    stage = "extract"

    def to_dict(self) -> dict:
        return {"stage": self.stage, "message": str(self)}


class SourceReadError(AbiError):
    stage = "read"


class SourceSyntaxError(AbiError):
    stage = "parse"

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.line = line
        self.column = column


class UnresolvedTypeError(AbiError):
    """The implementing type of a responder impl has no terminal named segment."""


class LiteralRangeError(AbiError):
    """An opcode literal does not fit an unsigned 64-bit integer."""

    def __init__(self, literal: str):
        super().__init__(f"Opcode literal '{literal}' does not fit an unsigned 64-bit integer")
        self.literal = literal


class OutputWriteError(AbiError):
    stage = "write"
