"""
Identifier generation.

Two mutually exclusive modes:

  1) PATTERN — a non-empty ``pattern`` fixes the exact shape. Slots are filled
               left to right, literals are copied, and with a checksum active
               the last slot receives the check character computed over the
               other slots. Separator/grouping options are ignored.
  2) FIXED   — ``total_length`` (or ``groups * group_size``) characters, the
               last one being the check character when an algorithm is set,
               optionally grouped with ``separator``.

Randomness comes from an injected ``rng`` (see ``structid.rng``); each
generated character consumes exactly one call, in output order, so a seeded
source reproduces the same identifier.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..charset import RandomSource, random_char
from ..checksums import check_algorithm_charset, get_algorithm
from ..config import GenerateOptions, coerce_options
from ..errors import InvalidOptionsError, PatternError
from ..pattern import compile_pattern
from ..rng import get_rng
from .formatter import format_id

logger = logging.getLogger(__name__)


def generate_id(
    options: GenerateOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> str:
    """
    Generate a random identifier.

    Args:
        options: ``GenerateOptions`` (or a mapping of its fields).
        **overrides: Individual fields, e.g. ``algorithm="luhn"``.

    Returns:
        The identifier, grouped when a separator was requested in fixed mode.

    Raises:
        InvalidOptionsError: Total length below 2, or ``total_length`` conflicting
            with ``groups * group_size`` while a separator is set.
        IncompatibleAlgorithmError: Algorithm used with the wrong charset.
        PatternError: Checksum requested but the pattern has no ``#``.
    """
    opts = coerce_options(GenerateOptions, options, overrides)
    rng = get_rng(opts.rng, opts.use_crypto)

    if opts.pattern_text:
        return _generate_from_pattern(opts, rng)
    return _generate_fixed(opts, rng)


def _generate_from_pattern(opts: GenerateOptions, rng: RandomSource) -> str:
    compiled = compile_pattern(opts.pattern_text)
    algo = get_algorithm(opts.algorithm)

    if algo is not None:
        if not compiled.has_slot:
            raise PatternError("pattern requires at least one '#' when a checksum algorithm is used")
        check_algorithm_charset(opts.algorithm, opts.charset)

    out = [tok.char for tok in compiled.tokens]
    body_positions = compiled.body_positions(with_checksum=algo is not None)
    for i in body_positions:
        out[i] = random_char(rng, opts.charset)

    if algo is not None:
        # Literals never take part in the checksum.
        body = "".join(out[i] for i in body_positions)
        out[compiled.checksum_index] = algo.check_char(body)

    logger.debug(
        "Generated pattern identifier (length=%d, slots=%d, algorithm=%s)",
        len(compiled), len(compiled.slot_positions), opts.algorithm,
    )
    return "".join(out)


def _generate_fixed(opts: GenerateOptions, rng: RandomSource) -> str:
    total = opts.expected_length
    grouped_length = opts.groups * opts.group_size

    if total < 2:
        raise InvalidOptionsError("total length must be at least 2")
    if opts.total_length is not None and opts.separator and opts.total_length != grouped_length:
        raise InvalidOptionsError("total_length conflicts with groups/group_size when using separator")
    check_algorithm_charset(opts.algorithm, opts.charset)

    algo = get_algorithm(opts.algorithm)
    body_len = total - 1 if algo is not None else total

    if opts.charset == "numeric":
        # No leading zero for numeric bodies.
        chars = [str(1 + int(rng() * 9))]
        chars.extend(str(int(rng() * 10)) for _ in range(body_len - 1))
    else:
        chars = [random_char(rng, "alphanumeric") for _ in range(body_len)]

    full = "".join(chars)
    if algo is not None:
        full += algo.check_char(full)

    logger.debug("Generated fixed identifier (length=%d, algorithm=%s)", total, opts.algorithm)

    if opts.separator:
        return format_id(
            full,
            groups=opts.groups,
            group_size=opts.group_size,
            separator=opts.separator,
            charset=opts.charset,
        )
    return full
