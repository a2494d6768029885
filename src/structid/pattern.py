"""
Pattern compilation.

A pattern is a template such as ``PROMO-###-###``: every ``#`` is a slot that
holds one generated charset character, every other character is a literal
matched verbatim. When a checksum algorithm is active the *last* ``#`` is the
checksum slot; all other slots form the checksum body.

Compilation is a pure function of the pattern text and is memoized. The
result is immutable, so sharing cached instances between callers is safe.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import re
from typing import Dict, Tuple

from .charset import Charset

SLOT = "#"

# Regex class for one charset member. ASCII classes only, `\d` would also
# accept non-ASCII digits.
_SLOT_CLASS: Dict[str, str] = {
    "numeric": "[0-9]",
    "alphanumeric": "[0-9A-Z]",
}


@dataclass(frozen=True)
class Token:
    """One pattern position: a literal character or a slot."""
    char: str
    is_slot: bool


@dataclass(frozen=True)
class CompiledPattern:
    """
    A parsed pattern.

    Attributes:
        text:           The trimmed pattern text.
        tokens:         One token per character of ``text``.
        slot_positions: Indices of every ``#`` in ``text``, ascending.
        checksum_index: Index of the last ``#`` (-1 when there is none).
    """
    text: str
    tokens: Tuple[Token, ...]
    slot_positions: Tuple[int, ...]
    checksum_index: int

    def __len__(self) -> int:
        return len(self.text)

    @property
    def has_slot(self) -> bool:
        return self.checksum_index != -1

    def body_positions(self, with_checksum: bool) -> Tuple[int, ...]:
        """
        Slot positions filled with generated characters.

        With a checksum active the checksum slot is excluded; the remaining
        positions, in pattern order, are the checksum body.
        """
        if not with_checksum:
            return self.slot_positions
        return tuple(i for i in self.slot_positions if i != self.checksum_index)

    def matcher(self, charset: Charset) -> re.Pattern:
        """Return a regex that fully matches identifiers of this shape."""
        return _build_matcher(self.text, charset)


@lru_cache(maxsize=256)
def compile_pattern(raw: str) -> CompiledPattern:
    """
    Parse ``raw`` into tokens after trimming surrounding whitespace.

    The checksum index is derived from the pattern text alone, so generation
    and validation of the same pattern always agree on it.
    """
    text = raw.strip()
    tokens = tuple(Token(char=ch, is_slot=(ch == SLOT)) for ch in text)
    slots = tuple(i for i, tok in enumerate(tokens) if tok.is_slot)
    return CompiledPattern(
        text=text,
        tokens=tokens,
        slot_positions=slots,
        checksum_index=slots[-1] if slots else -1,
    )


@lru_cache(maxsize=256)
def _build_matcher(text: str, charset: Charset) -> re.Pattern:
    klass = _SLOT_CLASS[charset]
    # Literals go through re.escape so "(", "+", "[" etc. stay literal.
    body = "".join(klass if ch == SLOT else re.escape(ch) for ch in text)
    return re.compile(body)
