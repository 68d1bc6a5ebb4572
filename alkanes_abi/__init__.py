from .errors import (
    AbiError,
    LiteralRangeError,
    OutputWriteError,
    SourceReadError,
    SourceSyntaxError,
    UnresolvedTypeError,
)
from .extractor import RustAbiExtractor, extract_abi
from .models import AbiMethod, AlkanesABI
from .run import extract_file

__all__ = [
    "AbiError",
    "AbiMethod",
    "AlkanesABI",
    "LiteralRangeError",
    "OutputWriteError",
    "RustAbiExtractor",
    "SourceReadError",
    "SourceSyntaxError",
    "UnresolvedTypeError",
    "extract_abi",
    "extract_file",
]

__version__ = "0.1.0"
