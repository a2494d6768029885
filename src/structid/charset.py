"""
Character sets identifiers are drawn from.

Two alphabets are supported:

- ``numeric``      -> ``0123456789``
- ``alphanumeric`` -> ``0-9A-Z`` (36 symbols, upper case only)

Normalization and random selection both index into the same ordered alphabet,
so a uniform draw in [0, 1) yields a uniform character.
"""

from __future__ import annotations

from typing import Callable, Literal

Charset = Literal["numeric", "alphanumeric"]

ALPHABET_NUM = "0123456789"
ALPHABET_BASE36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

RandomSource = Callable[[], float]


def alphabet_for(charset: Charset) -> str:
    """Return the ordered alphabet backing ``charset``."""
    return ALPHABET_BASE36 if charset == "alphanumeric" else ALPHABET_NUM


def normalize(text: str, charset: Charset) -> str:
    """
    Map ``text`` onto ``charset``.

    Alphanumeric input is upper-cased first; every character outside the
    alphabet is dropped and the relative order of the rest is kept, so
    "ab-12_z!" becomes "AB12Z".
    """
    src = text.upper() if charset == "alphanumeric" else text
    allowed = alphabet_for(charset)
    return "".join(ch for ch in src if ch in allowed)


def is_member_string(text: str, charset: Charset) -> bool:
    """True when ``text`` is non-empty and made only of ``charset`` characters."""
    allowed = alphabet_for(charset)
    return bool(text) and all(ch in allowed for ch in text)


def random_char(rng: RandomSource, charset: Charset) -> str:
    """Draw one character of ``charset`` using a single ``rng()`` call."""
    table = alphabet_for(charset)
    return table[int(rng() * len(table))]
