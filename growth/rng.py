"""
Seeded pseudo-random float source.

Every value is kept to 32 bits, so a seed reproduces the same sequence
regardless of platform. Seed + parameters fully determine a run.
"""

import time
from typing import Callable

import numpy as np

Rng = Callable[[], float]

_MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    """Low 32 bits of a 32-bit integer product."""
    return (a * b) & _MASK32


class SeededRng:
    """Mulberry32 generator. Calling it returns the next float in [0, 1)."""

    __slots__ = ('_state',)

    def __init__(self, seed: int):
        self._state = int(seed) & _MASK32

    def __call__(self) -> float:
        self._state = (self._state + _INCREMENT) & _MASK32
        r = self._state
        r = _imul(r ^ (r >> 15), r | 1)
        r ^= (r + _imul(r ^ (r >> 7), r | 61)) & _MASK32
        return ((r ^ (r >> 14)) & _MASK32) / _TWO_POW_32

    def __repr__(self) -> str:
        return f"SeededRng(state={self._state:#010x})"


def create_seeded_rng(seed: int) -> Rng:
    return SeededRng(seed)


def default_rng() -> Rng:
    """Non-deterministic source used when callers don't supply a seeded one."""
    return np.random.default_rng().random


def create_seed() -> int:
    """Fresh seed in [0, 1e9) for hosts that randomize a region."""
    raw = int(time.time() * 1000) ^ int(np.random.default_rng().integers(0, 10 ** 9))
    return abs(raw) % 1_000_000_000
