"""
Check-character algorithms for structured identifiers.

Why this file exists
--------------------
A single trailing (or slotted) check character lets a typed-in code be
validated without a database lookup: most single-character typos and many
adjacent transpositions change the expected check value.

Two schemes are supported:

- **luhn**  (digits only)        -> the classic mod-10 "double and reduce".
- **mod36** (``0-9A-Z`` only)    -> sum of base36 values, padded to a multiple of 36.

Design principles
-----------------
- **Pure functions**: deterministic, no state.
- **Strict input**: the ``*_check_*`` functions raise ``ChecksumInputError`` on
  foreign characters; the ``*_validate`` functions return False instead.
- **Pluggable**: ``ALGORITHMS`` maps an algorithm name to its charset and
  callables, so the generator and validator never branch on the name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Literal

from .charset import ALPHABET_BASE36, Charset, is_member_string
from .errors import ChecksumInputError, IncompatibleAlgorithmError

Algorithm = Literal["none", "luhn", "mod36"]


# ---- Luhn (mod 10) -----------------------------------------------------------------------

def luhn_checksum_digit(body: str) -> int:
    """
    Compute the Luhn check digit that should follow ``body``.

    Digits are processed right to left; the rightmost body digit and every
    second digit after it are doubled (the check digit itself will occupy the
    undoubled rightmost position).

    Args:
        body: Digit string without its check digit. May be empty.

    Returns:
        The check digit, 0..9.

    Raises:
        ChecksumInputError: If ``body`` contains anything but ASCII digits.
    """
    total = 0
    for i, ch in enumerate(reversed(body)):
        d = ord(ch) - 48  # '0' -> 48
        if d < 0 or d > 9:
            raise ChecksumInputError(f"Non-digit {ch!r} in luhn_checksum_digit")
        if i % 2 == 0:
            d *= 2
            if d > 9:
                d -= 9  # sum of digits for doubled value (e.g., 8*2 -> 16 -> 1+6 -> 7)
        total += d

    return (10 - total % 10) % 10


def luhn_validate(full: str) -> bool:
    """
    Check a digit string whose last digit is a Luhn check digit.

    Returns False (never raises) for anything shorter than two characters or
    containing a non-digit.
    """
    if len(full) < 2 or not is_member_string(full, "numeric"):
        return False
    return luhn_checksum_digit(full[:-1]) == ord(full[-1]) - 48


# ---- Mod 36 ------------------------------------------------------------------------------

def mod36_check_char(body: str) -> str:
    """
    Compute the mod-36 check character for an upper-case ``0-9A-Z`` body.

    The check character is chosen so that the base36 values of body plus
    check character sum to a multiple of 36. An empty body yields "0".

    Raises:
        ChecksumInputError: If ``body`` contains a character outside ``0-9A-Z``
            (lower case included).
    """
    total = 0
    for ch in body:
        v = ALPHABET_BASE36.find(ch)
        if v < 0:
            raise ChecksumInputError(f"mod36_check_char: {ch!r} is not in [0-9A-Z]")
        total += v

    return ALPHABET_BASE36[(36 - total % 36) % 36]


def mod36_validate(full: str) -> bool:
    """
    Check a ``0-9A-Z`` string whose last character is a mod-36 check character.

    Returns False for inputs shorter than two characters or with characters
    outside ``0-9A-Z``.
    """
    if len(full) < 2 or not is_member_string(full, "alphanumeric"):
        return False
    return mod36_check_char(full[:-1]) == full[-1]


# ---- Registry ----------------------------------------------------------------------------

@dataclass(frozen=True)
class ChecksumAlgorithm:
    """
    A named check-character scheme.

    Attributes:
        name:      Algorithm name as used in options ("luhn", "mod36").
        charset:   The only charset this algorithm accepts.
        check_char: Body -> check character (as a one-character string).
        validate:  Full string (body + trailing check) -> bool.
    """
    name: str
    charset: Charset
    check_char: Callable[[str], str]
    validate: Callable[[str], bool]


ALGORITHMS: Dict[str, ChecksumAlgorithm] = {
    "luhn": ChecksumAlgorithm(
        name="luhn",
        charset="numeric",
        check_char=lambda body: str(luhn_checksum_digit(body)),
        validate=luhn_validate,
    ),
    "mod36": ChecksumAlgorithm(
        name="mod36",
        charset="alphanumeric",
        check_char=mod36_check_char,
        validate=mod36_validate,
    ),
}


def get_algorithm(algorithm: Algorithm) -> ChecksumAlgorithm | None:
    """Return the registered algorithm, or None for "none"."""
    if algorithm == "none":
        return None
    return ALGORITHMS[algorithm]


def is_compatible(algorithm: Algorithm, charset: Charset) -> bool:
    """True when ``algorithm`` may be used with ``charset``."""
    algo = get_algorithm(algorithm)
    return algo is None or algo.charset == charset


def check_algorithm_charset(algorithm: Algorithm, charset: Charset) -> None:
    """Raise ``IncompatibleAlgorithmError`` unless ``algorithm`` fits ``charset``."""
    algo = get_algorithm(algorithm)
    if algo is not None and algo.charset != charset:
        raise IncompatibleAlgorithmError(algo.name, algo.charset)
