"""structid — short, human-shareable identifiers with optional check characters."""

__version__ = "0.1.0"

from .checksums import luhn_checksum_digit, luhn_validate, mod36_check_char, mod36_validate
from .config import FormatOptions, GenerateOptions, StructIdConfig, ValidateOptions, load_config
from .engine import format_id, generate_id, normalize_id, normalize_id_for_charset, validate_id
from .errors import (
    ChecksumInputError,
    FormatLengthError,
    IncompatibleAlgorithmError,
    InvalidOptionsError,
    PatternError,
    ProfileNotFoundError,
    StructIdError,
)
from .pattern import CompiledPattern, compile_pattern

__all__ = [
    "__version__",
    "generate_id",
    "validate_id",
    "format_id",
    "normalize_id",
    "normalize_id_for_charset",
    "luhn_checksum_digit",
    "luhn_validate",
    "mod36_check_char",
    "mod36_validate",
    "compile_pattern",
    "CompiledPattern",
    "GenerateOptions",
    "ValidateOptions",
    "FormatOptions",
    "StructIdConfig",
    "load_config",
    "StructIdError",
    "InvalidOptionsError",
    "IncompatibleAlgorithmError",
    "PatternError",
    "ChecksumInputError",
    "FormatLengthError",
    "ProfileNotFoundError",
]
