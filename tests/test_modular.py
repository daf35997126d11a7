# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import random

import pytest

from minirsa import modular
from minirsa.modular import WORD_MASK

sample = random.Random(20161117)
WORD_MODS = [2, 3, 97, 3233, 65521, 2**31 - 1, 2**31 + 11, 4294967291, WORD_MASK]


def residues(mod: int, count: int = 8) -> list[int]:
    """Edge residues plus a few random ones."""
    picks = {0, 1 % mod, mod - 1, mod // 2}
    picks.update(sample.randrange(mod) for _ in range(count))
    return sorted(picks)


@pytest.mark.parametrize("mod", WORD_MODS)
def test_add_sub_roundtrip(mod):
    for a in residues(mod):
        for b in residues(mod):
            total = modular.mod_add(a, b, "+", mod)
            assert total == (a + b) % mod
            assert modular.mod_add(total, b, "-", mod) == a


def test_add_wraparound_word():
    mod = WORD_MASK
    a, b = mod - 1, mod - 2
    assert a + b > WORD_MASK
    assert modular.mod_add(a, b, "+", mod) == mod - 3


def test_sub_borrow():
    assert modular.mod_add(3, 10, "-", 17) == 10
    assert modular.mod_add(0, 4294967290, "-", 4294967291) == 1


@pytest.mark.parametrize("a,b,op,mod", [(5, 1, "+", 5), (1, 5, "-", 5), (-1, 1, "+", 5), (1, 1, "*", 5),
                                        (0, 0, "+", 1), (0, 0, "+", 2**32)])
def test_add_validates(a, b, op, mod):
    with pytest.raises(ValueError):
        modular.mod_add(a, b, op, mod)


@pytest.mark.parametrize("mod", WORD_MODS)
def test_mul_matches_reference(mod):
    for x in residues(mod):
        for y in [0, 1, 2, mod - 1, mod, WORD_MASK, sample.randrange(2**40)]:
            res = modular.mod_mul(x, y, mod)
            assert res < mod
            assert res == (x * y) % mod


@pytest.mark.parametrize("x,y,mod", [(10, 1, 10), (1, -1, 10), (1, 1, 1)])
def test_mul_validates(x, y, mod):
    with pytest.raises(ValueError):
        modular.mod_mul(x, y, mod)


@pytest.mark.parametrize("mod", WORD_MODS)
def test_pow_matches_reference(mod):
    for base in residues(mod, 4):
        for exp in [1, 2, 3, 65537, sample.randrange(2**32)]:
            res = modular.mod_pow(base, exp, mod)
            assert res < mod
            assert res == pow(base, exp, mod)


@pytest.mark.parametrize("mod", WORD_MODS[1:])
def test_pow_zero_exponent(mod):
    for base in residues(mod, 4):
        assert modular.mod_pow(base, 0, mod) == 1


def test_pow_textbook_vector():
    assert modular.mod_pow(65, 17, 3233) == 2790
    assert modular.mod_pow(2790, 2753, 3233) == 65


@pytest.mark.parametrize("base,exp,mod", [(3233, 17, 3233), (65, -1, 3233), (2, 2, 0)])
def test_pow_validates(base, exp, mod):
    with pytest.raises(ValueError):
        modular.mod_pow(base, exp, mod)


@pytest.mark.parametrize("a,b", [(3120, 17), (48, 18), (17, 0), (0, 17), (4294967290, 65535), (2**31, 2**16)])
def test_gcd(a, b):
    assert modular.gcd(a, b) == math.gcd(a, b)


def test_gcd_traces(caplog):
    caplog.set_level(logging.DEBUG, logger="minirsa.modular")
    modular.gcd(48, 18)
    traces = [r.getMessage() for r in caplog.records if r.name == "minirsa.modular"]
    assert traces == ["GCD(48, 18)", "GCD(18, 12)", "GCD(12, 6)", "GCD(6, 0)"]


@pytest.mark.parametrize("a,b", [(240, 46), (46, 240), (3120, 17), (17, 3120), (7, 7), (1, 0)])
def test_eea_bezout(a, b):
    g, s, t = modular.eea(a, b)
    assert g == math.gcd(a, b)
    assert a * s + b * t == g


def test_inv_textbook():
    assert modular.mod_inv(17, 3120) == 2753


@pytest.mark.parametrize("m", [3120, 65521, 999983, 2**31 - 2])
def test_inv_coprime(m):
    checked = 0
    while checked < 20:
        a = sample.randrange(2, m)
        if math.gcd(a, m) != 1:
            continue
        inv = modular.mod_inv(a, m)
        assert 0 < inv < m
        assert modular.mod_mul(a, inv, m) == 1
        checked += 1


@pytest.mark.parametrize("a,m", [(6, 3120), (10, 100), (0, 7), (65521 * 3, 65521 * 5)])
def test_inv_sentinel(a, m):
    assert modular.mod_inv(a, m) == 0


@pytest.mark.parametrize("a,m", [(1, 1), (1, 0), (-3, 7)])
def test_inv_validates(a, m):
    with pytest.raises(ValueError):
        modular.mod_inv(a, m)
