from typing import Callable, Iterable, Optional

import pytest


def lcg(seed: int) -> Callable[[], float]:
    """32-bit linear congruential generator normalized to [0, 1)."""
    state = seed & 0xFFFFFFFF

    def rng() -> float:
        nonlocal state
        state = (1664525 * state + 1013904223) & 0xFFFFFFFF
        return state / 0x100000000

    return rng


class ScriptedRng:
    """Returns queued values (then ``default``) and counts calls."""

    def __init__(self, values: Optional[Iterable[float]] = None, default: float = 0.0) -> None:
        self._values = list(values or [])
        self.default = default
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        if self._values:
            return self._values.pop(0)
        return self.default


@pytest.fixture
def seeded():
    """Factory for seeded random sources: ``seeded(42)()`` -> float."""
    return lcg


@pytest.fixture
def scripted():
    """Factory for ``ScriptedRng`` instances."""
    return ScriptedRng
