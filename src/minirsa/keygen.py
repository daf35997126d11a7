"""Core Key Generation Utility, covering primality testing and the toy RSA key protocol.

Primes are drawn so that the modulus `n = p * q` always fits in a single 32-bit word: `p` comes from the 16-bit
range [32768, 65536) and `q` from a window chosen against `p` such that `2**31 < n < 2**32`. All retry loops are
unbounded, they terminate with overwhelming probability.

Typical usage example:

    keys = generate_keys()
    is_prime(65537)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
from typing import NamedTuple

from minirsa import rng as rngmod
from minirsa.modular import gcd
from minirsa.modular import mod_inv
from minirsa.modular import mod_mul
from minirsa.modular import mod_pow
from minirsa.modular import WORD_MASK

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS: int = 20
P_LOW: int = 32768
P_HIGH: int = 65536
_Q_WINDOW: tuple[int, int] = (2**31, 2**32)


class KeyPair(NamedTuple):
    """An immutable toy RSA key pair.

    Attributes:
        p: Private Prime 1.
        q: Private Prime 2.
        n: The modulus, `p * q`.
        e: The public exponent.
        d: The private exponent.
    """
    p: int
    q: int
    n: int
    e: int
    d: int

    @property
    def phi(self) -> int:
        """Euler's totient of the modulus."""
        return (self.p - 1) * (self.q - 1)

    def verify(self, rounds: int = DEFAULT_ROUNDS, rng: rngmod.RandomSource | None = None) -> None:
        """Checks every key pair invariant.

        Args:
            rounds: Miller-Rabin rounds used when re-testing the primes.
            rng: Random source for the re-tests. Defaults to a private source seeded from the modulus, so the
                process-wide source is left untouched.

        Raises:
            ValueError: If any invariant does not hold.
        """
        if rng is None:
            rng = rngmod.WellRandom(self.n)
        if self.p == self.q:
            raise ValueError("Primes must differ.")
        if not (is_prime(self.p, rounds, rng) and is_prime(self.q, rounds, rng)):
            raise ValueError("Both p and q must be prime.")
        if self.n != self.p * self.q or self.n > WORD_MASK:
            raise ValueError("Modulus must be p * q and fit in a word.")
        phi = self.phi
        if not 0 < self.d < phi or not 1 < self.e < phi:
            raise ValueError("Exponents must be in range (0, phi).")
        if gcd(phi, self.e) != 1 or mod_mul(self.e, self.d, phi) != 1:
            raise ValueError("Exponents are not inverses modulo phi.")


def _decompose(w: int) -> tuple[int, int]:
    """Split `w - 1` into `d * 2**s` with `d` odd."""
    d, s = w - 1, 0
    while d & 1 == 0:
        d >>= 1
        s += 1
    return d, s


def is_prime(candidate: int, rounds: int = DEFAULT_ROUNDS, rng: rngmod.RandomSource | None = None) -> bool:
    """Perform Miller-Rabin primality test.

    Bases are drawn from [1, candidate-2] through the random source, and every modular product goes through the
    word-bounded arithmetic.

    Args:
        candidate: The number to test. Must fit in a word.
        rounds: Number of Miller-Rabin rounds to perform. Defaults to 20.
        rng: Random source for the bases. Defaults to the process-wide source.

    Returns:
        True if `candidate` is probably prime, False otherwise.

    Raises:
        ValueError: If `rounds` < 1 or `candidate` does not fit in a word.
    """
    if rounds < 1:
        raise ValueError("rounds must be >= 1")
    if not 0 <= candidate <= WORD_MASK:
        raise ValueError("candidate must fit in a word")
    if candidate == 2:
        return True
    if candidate < 2 or candidate & 1 == 0:
        return False
    if rng is None:
        rng = rngmod.get_default_source()
    w1 = candidate - 1
    d, s = _decompose(candidate)
    for _ in range(rounds):
        a = int(rng.random() * (candidate - 2) + 1)
        y = mod_pow(a, d, candidate)
        if y == 1 or y == w1:
            continue
        for _ in range(s - 1):
            y = mod_mul(y, y, candidate)
            if y == w1:
                break
        else:
            return False
    return True


def _draw_prime(low: int, high: int, rng: rngmod.RandomSource, rounds: int, exclude: int | None = None) -> int:
    while True:
        candidate = rngmod.draw(rng, low, high)
        logger.debug("random-number %d selected", candidate)
        if candidate != exclude and is_prime(candidate, rounds, rng):
            logger.debug("%d may be prime", candidate)
            return candidate
        logger.debug("%d rejected", candidate)


def generate_primes(rng: rngmod.RandomSource | None = None, rounds: int = DEFAULT_ROUNDS) -> tuple[int, int]:
    """Generates a pair of distinct primes whose product fills a 32-bit word.

    Args:
        rng: Random source. Defaults to the process-wide source.
        rounds: Miller-Rabin rounds per candidate. Defaults to 20.

    Returns:
        The primes `(p, q)` with `2**31 < p * q < 2**32`.
    """
    if rng is None:
        rng = rngmod.get_default_source()
    p = _draw_prime(P_LOW, P_HIGH, rng, rounds)
    q = _draw_prime(_Q_WINDOW[0] // p + 1, _Q_WINDOW[1] // p, rng, rounds, exclude=p)
    return p, q


def generate_keys(rng: rngmod.RandomSource | None = None, rounds: int = DEFAULT_ROUNDS) -> KeyPair:
    """Generates a toy RSA key pair.

    After the primes are fixed, public exponents are drawn from [2, phi) until one is coprime to phi and has an
    inverse that verifies.

    Args:
        rng: Random source. Defaults to the process-wide source.
        rounds: Miller-Rabin rounds per prime candidate. Defaults to 20.

    Returns:
        A KeyPair satisfying all of its invariants.
    """
    if rng is None:
        rng = rngmod.get_default_source()
    p, q = generate_primes(rng, rounds)
    n = p * q
    phi = (p - 1) * (q - 1)
    logger.debug("selected primes p, q = %d, %d; n = %d", p, q, n)
    while True:
        e = rngmod.draw(rng, 2, phi)
        if gcd(phi, e) != 1:
            logger.debug("e = %d shares a factor with phi", e)
            continue
        d = mod_inv(e, phi)
        if 0 < d < phi and mod_mul(e, d, phi) == 1:
            break
        logger.debug("e = %d has no usable inverse", e)
    logger.info("key pair generated: n = %d, e = %d, d = %d, phi = %d", n, e, d, phi)
    return KeyPair(p, q, n, e, d)
