"""Toy RSA over a single 32-bit machine word, in an Academic Sense.

Provides word-bounded modular arithmetic, a Miller-Rabin primality test, an extended-Euclidean inverse, the
key generation protocol built on them and a 4-byte block cipher over binary streams. Not secure, not padded,
strictly for study.

Typical usage example:

    keys = generate_keys()
    c = mod_pow(65, keys.e, keys.n)
    with open("plain", "rb") as src, open("cipher", "wb") as dst:
        encrypt(src, size, dst, keys)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from minirsa.cipher import decrypt
from minirsa.cipher import encrypt
from minirsa.cipher import MessageTooLargeError
from minirsa.cipher import transform
from minirsa.keygen import generate_keys
from minirsa.keygen import is_prime
from minirsa.keygen import KeyPair
from minirsa.modular import mod_add
from minirsa.modular import mod_inv
from minirsa.modular import mod_mul
from minirsa.modular import mod_pow

__version__ = "0.0.1"
__all__ = [
    "KeyPair",
    "MessageTooLargeError",
    "generate_keys",
    "is_prime",
    "mod_add",
    "mod_mul",
    "mod_pow",
    "mod_inv",
    "transform",
    "encrypt",
    "decrypt",
]
