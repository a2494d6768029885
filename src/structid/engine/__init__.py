"""Generation, validation and formatting of structured identifiers."""

from .formatter import format_id, normalize_id, normalize_id_for_charset
from .generator import generate_id
from .validator import validate_id

__all__ = [
    "format_id",
    "generate_id",
    "normalize_id",
    "normalize_id_for_charset",
    "validate_id",
]
