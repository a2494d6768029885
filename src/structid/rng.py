"""
Random sources.

Every source is a zero-argument callable returning a float in [0, 1). The
generator consumes exactly one call per generated character, so a seeded
source makes generation reproducible.
"""

from __future__ import annotations

import random
import secrets
from typing import Optional

from .charset import RandomSource

_TWO_32 = 0x1_0000_0000


def crypto_random() -> float:
    """Uniform float in [0, 1) backed by the OS CSPRNG (32 bits of entropy)."""
    return secrets.randbits(32) / _TWO_32


def seeded_rng(seed: int) -> RandomSource:
    """Reproducible source for tests and ``--seed``; not for production codes."""
    return random.Random(seed).random


def get_rng(rng: Optional[RandomSource] = None, use_crypto: bool = False) -> RandomSource:
    """
    Pick the random source for a generation call.

    An explicit ``rng`` always wins; otherwise ``use_crypto`` selects the
    ``secrets``-backed source and the default is ``random.random``.
    """
    if rng is not None:
        return rng
    if use_crypto:
        return crypto_random
    return random.random
