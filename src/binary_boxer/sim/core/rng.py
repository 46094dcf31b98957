"""Seeded random number generator for deterministic combat resolution.

A 32-bit counter-based generator (Mulberry32 mixing): each call advances
the state by a fixed odd increment and runs it through an xor-shift /
multiply avalanche.  Two instances built from the same seed return the
same values call-for-call on every host, which is what lets a fight be
replayed, resumed, or auto-resolved with identical results.
"""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

T = TypeVar("T")

_MASK = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296


def _imul(a: int, b: int) -> int:
    """32-bit integer multiply, low 32 bits only."""
    return (a * b) & _MASK


class SeededRNG:
    """Deterministic RNG with uniform floats, inclusive integer ranges and
    probability draws.

    Parameters
    ----------
    seed:
        Integer seed.  Only the low 32 bits are significant, so negative or
        oversized seeds wrap the same way on every platform.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._state = seed & _MASK

    # -- public properties ---------------------------------------------------

    @property
    def seed(self) -> int:
        """Return the seed this RNG was initialised with."""
        return self._seed

    # -- core random methods -------------------------------------------------

    def next(self) -> float:
        """Return a float in the half-open interval ``[0.0, 1.0)``."""
        self._state = (self._state + _INCREMENT) & _MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK
        return ((t ^ (t >> 14)) & _MASK) / _TWO_POW_32

    def range(self, low: int, high: int) -> int:
        """Return a random integer *N* such that ``low <= N <= high``."""
        return math.floor(self.next() * (high - low + 1)) + low

    def chance(self, probability: float) -> bool:
        """Return ``True`` with the given probability.

        ``chance(0)`` is always ``False`` and ``chance(1)`` always ``True``
        because :meth:`next` never returns 1.0.
        """
        return self.next() < probability

    def choice(self, seq: Sequence[T]) -> T:
        """Return a random element from a non-empty sequence."""
        return seq[self.range(0, len(seq) - 1)]

    # -- dunder helpers ------------------------------------------------------

    def __repr__(self) -> str:
        return f"SeededRNG(seed={self._seed})"


def seeded_range(seed: int, low: int, high: int) -> int:
    """One-shot inclusive range draw: the first :meth:`SeededRNG.range`
    value for *seed*."""
    return SeededRNG(seed).range(low, high)
