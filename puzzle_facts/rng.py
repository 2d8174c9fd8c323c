"""Seeded 32-bit random stream used for edge shapes.

The stream is mulberry32: a tiny mixing function over one 32-bit word. Using it
instead of :mod:`random` keeps the sequence stable across Python versions and
lets every geometry build own its generator instead of sharing global state.
"""

from typing import Tuple

MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_DIVISOR = 4294967296.0


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiplication."""
    return (a * b) & MASK32


def mulberry32_step(state: int) -> Tuple[int, float]:
    """Advance the state once.

    Args:
        state: Current 32-bit state.

    Returns:
        Tuple of (next state, value in [0, 1)).
    """
    state = (state + _INCREMENT) & MASK32
    t = _imul(state ^ (state >> 15), state | 1)
    t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
    value = ((t ^ (t >> 14)) & MASK32) / _DIVISOR
    return state, value


class SeededRandom:
    """Explicit random stream for one geometry build."""

    def __init__(self, seed: int):
        self.seed = seed & MASK32
        self.state = self.seed

    def random(self) -> float:
        """Next value in [0, 1)."""
        self.state, value = mulberry32_step(self.state)
        return value

    def uniform(self, low: float, high: float) -> float:
        """Next value scaled into [low, high)."""
        return self.random() * (high - low) + low

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed}, state={self.state})"
