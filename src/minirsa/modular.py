"""Word-bounded modular arithmetic, the primitive layer of the toy RSA.

Every routine here keeps its intermediates inside a single 32-bit machine word. Python itself never overflows,
so wraparound is emulated by masking with `WORD_MASK`, which lets the additions reproduce exactly what a
register-width implementation computes.

Typical usage example:

    c = mod_pow(65, 17, 3233)
    d = mod_inv(17, 3120)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

logger = logging.getLogger(__name__)

WORD_BITS: int = 32
WORD_MASK: int = (1 << WORD_BITS) - 1


def _check_mod(mod: int) -> None:
    if not 2 <= mod <= WORD_MASK:
        raise ValueError(f"Modulus must be in range [2, {WORD_MASK}]")


def _add(a: int, b: int, mod: int) -> int:
    wrapped = (a + b) & WORD_MASK
    if wrapped < a:
        return a - (mod - b)
    if wrapped >= mod:
        return wrapped - mod
    return wrapped


def _mul(x: int, y: int, mod: int) -> int:
    result = 0
    while y > 0:
        if y & 1:
            result = _add(result, x, mod)
        x = _add(x, x, mod)
        y >>= 1
    return result


def _pow(base: int, exp: int, mod: int) -> int:
    result = 1
    while exp > 0:
        if exp & 1:
            result = _mul(result, base, mod)
        base = _mul(base, base, mod)
        exp >>= 1
    return result


def mod_add(a: int, b: int, op: str, mod: int) -> int:
    """Adds or subtracts two residues without leaving the word width.

    Args:
        a: The first residue. Must be in range [0, mod-1].
        b: The second residue. Must be in range [0, mod-1].
        op: Either "+" or "-".
        mod: The modulus. Must be in range [2, 2**32 - 1].

    Returns:
        `(a op b) mod mod`.

    Raises:
        ValueError: If an operand is out of range or `op` is unknown.
    """
    _check_mod(mod)
    if not (0 <= a < mod and 0 <= b < mod):
        raise ValueError("Operands must be in range [0, mod-1]")
    if op == "-":
        if a >= b:
            return a - b
        return mod - (b - a)
    if op == "+":
        return _add(a, b, mod)
    raise ValueError(f"Unknown operator {op!r}, expected '+' or '-'")


def mod_mul(x: int, y: int, mod: int) -> int:
    """Multiplies two numbers modulo `mod` through double-and-add.

    Consumes `y` a bit at a time, least-significant first, doubling `x` on every step. Takes O(log y) modular
    additions and never forms the full product.

    Args:
        x: The multiplicand. Must be in range [0, mod-1].
        y: The multiplier. Must be non-negative.
        mod: The modulus. Must be in range [2, 2**32 - 1].

    Returns:
        `x * y mod mod`.

    Raises:
        ValueError: If an operand is out of range.
    """
    _check_mod(mod)
    if not 0 <= x < mod:
        raise ValueError("Multiplicand must be in range [0, mod-1]")
    if y < 0:
        raise ValueError("Multiplier must be non-negative")
    return _mul(x, y, mod)


def mod_pow(base: int, exp: int, mod: int) -> int:
    """Raises `base` to `exp` modulo `mod` by square-and-multiply.

    Args:
        base: The base. Must be in range [0, mod-1].
        exp: The exponent. Must be non-negative.
        mod: The modulus. Must be in range [2, 2**32 - 1].

    Returns:
        `base ** exp mod mod`. Always 1 for a zero exponent.

    Raises:
        ValueError: If an operand is out of range.
    """
    _check_mod(mod)
    if not 0 <= base < mod:
        raise ValueError("Base must be in range [0, mod-1]")
    if exp < 0:
        raise ValueError("Exponent must be non-negative")
    return _pow(base, exp, mod)


def gcd(a: int, b: int) -> int:
    """Plain Euclidean greatest common divisor, traced at DEBUG level."""
    while b != 0:
        logger.debug("GCD(%d, %d)", a, b)
        a, b = b, a % b
    logger.debug("GCD(%d, %d)", a, b)
    return a


def eea(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*s0 + b*t0 = r0 = gcd(a, b).

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        Greatest common divisor of two integers.
        As well as the Bezout coefficients.
    """
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q, r = divmod(r0, r1)
        r0, r1 = r1, r
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def mod_inv(a: int, m: int) -> int:
    """Computes the multiplicative inverse of `a` modulo `m`.

    Args:
        a: The number to invert. Must be non-negative.
        m: The modulus. Must be at least 2.

    Returns:
        The inverse in range [1, m-1], or 0 if `a` and `m` are not coprime. Zero is never a valid inverse, so
        callers treat it as "no inverse exists".

    Raises:
        ValueError: If `m` < 2 or `a` is negative.
    """
    if m < 2:
        raise ValueError("Modulus must be at least 2")
    if a < 0:
        raise ValueError("a must be non-negative")
    g, s, _ = eea(a, m)
    if g != 1:
        return 0
    return s % m
