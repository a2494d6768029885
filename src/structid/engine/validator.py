"""
Identifier validation.

Validation is total: every rejection returns False and nothing raises, so it
can be called on arbitrary untrusted input. The expected shape is rebuilt
from the same options that generation uses.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from ..charset import is_member_string, normalize
from ..checksums import get_algorithm, is_compatible
from ..config import ValidateOptions, coerce_options
from ..pattern import compile_pattern


def validate_id(
    text: object,
    options: ValidateOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> bool:
    """
    Check ``text`` against the shape and checksum described by the options.

    Pattern mode requires an exact match (no normalization). Fixed mode first
    strips separators and other non-members, so "1234 5678 9012 3456" and
    "1234567890123456" validate the same. Options that do not describe a
    valid shape (``groups=0``, an unknown charset) also yield False.
    """
    if not isinstance(text, str):
        return False

    try:
        opts = coerce_options(ValidateOptions, options, overrides)
    except ValidationError:
        return False
    if opts.pattern_text:
        return _validate_pattern(text, opts)
    return _validate_fixed(text, opts)


def _validate_pattern(text: str, opts: ValidateOptions) -> bool:
    compiled = compile_pattern(opts.pattern_text)
    if opts.algorithm == "none":
        return compiled.matcher(opts.charset).fullmatch(text) is not None

    # Checksum demanded but there is no slot to carry it.
    if not compiled.has_slot:
        return False
    if not is_compatible(opts.algorithm, opts.charset):
        return False
    if compiled.matcher(opts.charset).fullmatch(text) is None:
        return False

    algo = get_algorithm(opts.algorithm)
    claimed = text[compiled.checksum_index]
    body = "".join(text[i] for i in compiled.body_positions(with_checksum=True))
    return algo.check_char(body.upper()) == claimed.upper()


def _validate_fixed(text: str, opts: ValidateOptions) -> bool:
    normalized = normalize(text, opts.charset)
    if len(normalized) != opts.expected_length:
        return False

    algo = get_algorithm(opts.algorithm)
    if algo is None:
        return is_member_string(normalized, opts.charset)

    # The normalized text must also fit the algorithm's own alphabet.
    if not is_member_string(normalized, algo.charset):
        return False
    return algo.validate(normalized)
