"""
Display formatting for fixed-length identifiers.

``format_id`` splits a normalized identifier into equal groups joined by a
separator ("1234 5678 9012 3456"); the normalizers undo that by stripping
every non-member character. Neither looks at patterns or checksums.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..charset import Charset, normalize
from ..config import FormatOptions, coerce_options
from ..errors import FormatLengthError


def normalize_id(text: str) -> str:
    """Keep only the digits of ``text`` ("1234-5678" -> "12345678")."""
    return normalize(text, "numeric")


def normalize_id_for_charset(text: str, charset: Charset) -> str:
    """Upper-case (alphanumeric only) and strip characters outside ``charset``."""
    return normalize(text, charset)


def format_id(
    text: str,
    options: FormatOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> str:
    """
    Re-group ``text`` into ``groups`` chunks of ``group_size`` characters.

    Args:
        text: Identifier in any grouping; non-members are dropped first.
        options: ``FormatOptions`` (or a mapping of its fields).
        **overrides: Individual fields, e.g. ``separator="-"``.

    Returns:
        The grouped identifier.

    Raises:
        FormatLengthError: If the normalized length is not ``groups * group_size``.
    """
    opts = coerce_options(FormatOptions, options, overrides)
    normalized = normalize(text, opts.charset)
    expected = opts.groups * opts.group_size

    if len(normalized) != expected:
        raise FormatLengthError(expected, len(normalized))

    parts = [normalized[i : i + opts.group_size] for i in range(0, expected, opts.group_size)]
    return opts.separator.join(parts)
