"""Seeded pseudo-random sources feeding prime and exponent draws.

The engine only ever asks for uniform doubles in [0, 1), so anything with a `random()` method will do, the
standard `random.Random` included. `WellRandom` provides the WELL512a generator the classic toy RSA setups use.

Typical usage example:

    seed(1700000000)
    p = draw(get_default_source(), 32768, 65536)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import time
from typing import Protocol

_MASK32: int = 0xFFFFFFFF
_FACT: float = 2.32830643653869628906e-10  # 2**-32
_DEFAULT_SOURCE: "RandomSource | None" = None


class RandomSource(Protocol):
    """Anything producing independent uniform draws in [0, 1)."""

    def random(self) -> float:
        ...


class WellRandom:
    """WELL512a generator by Panneton, L'Ecuyer and Matsumoto.

    Holds 16 words of state and yields doubles in [0, 1) with 32 bits of resolution. The single 32-bit seed is
    expanded into the full state with Knuth's multiplicative recurrence, as an all-zero state would stay zero
    forever.

    Attributes:
        state: The 16 state words.
        index: Current position within the circular state.
    """

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = time_seed()
        self.state: list[int] = [0] * 16
        self.index: int = 0
        self.seed(seed)

    def seed(self, value: int) -> None:
        """Re-initialize the state from a 32-bit seed."""
        s = value & _MASK32
        for i in range(16):
            self.state[i] = s
            s = (1812433253 * (s ^ (s >> 30)) + i + 1) & _MASK32
        self.index = 0

    def next_word(self) -> int:
        """Advance the generator and return the next raw 32-bit output."""
        st = self.state
        i = self.index
        a = st[i]
        c = st[(i + 13) & 15]
        b = (a ^ (a << 16) ^ c ^ (c << 15)) & _MASK32
        c = st[(i + 9) & 15]
        c ^= c >> 11
        a = st[i] = b ^ c
        d = a ^ ((a << 5) & 0xDA442D24)
        i = (i + 15) & 15
        a = st[i]
        st[i] = (a ^ b ^ d ^ (a << 2) ^ (b << 18) ^ (c << 28)) & _MASK32
        self.index = i
        return st[i]

    def random(self) -> float:
        return self.next_word() * _FACT


def time_seed() -> int:
    """A 32-bit seed derived from the wall clock."""
    return int(time.time()) & _MASK32


def get_default_source() -> RandomSource:
    """Get the process-wide random source, creating a time-seeded one on first use."""
    global _DEFAULT_SOURCE
    if _DEFAULT_SOURCE is None:
        _DEFAULT_SOURCE = WellRandom(time_seed())
    return _DEFAULT_SOURCE


def seed(value: int | None = None, source: RandomSource | None = None) -> RandomSource:
    """Replace the process-wide random source.

    Args:
        value: Seed for a fresh `WellRandom`. Defaults to a time-derived seed. Ignored if `source` is given.
        source: A ready-made source to install instead.

    Returns:
        The newly installed source.
    """
    global _DEFAULT_SOURCE
    if source is None:
        source = WellRandom(time_seed() if value is None else value)
    _DEFAULT_SOURCE = source
    return source


def draw(rng: RandomSource, low: int, high: int) -> int:
    """Draw an integer uniformly from [low, high)."""
    if high <= low:
        raise ValueError("high must be greater than low")
    return int(rng.random() * (high - low) + low)
