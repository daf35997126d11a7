"""Fixed-size block cipher applying the toy RSA primitive to a byte stream.

Streams are cut into 4-byte big-endian blocks; each block is raised to the key exponent modulo `n` and written
back as exactly 4 bytes. A short final block is zero-padded before encryption, so its original length is not
recoverable from the ciphertext alone.

Typical usage example:

    keys = generate_keys()
    with open("plain", "rb") as src, open("cipher", "wb") as dst:
        written = encrypt(src, size, dst, keys)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
from typing import BinaryIO

from minirsa.keygen import KeyPair
from minirsa.modular import mod_pow

logger = logging.getLogger(__name__)

BLOCK_SIZE: int = 4


class MessageTooLargeError(ValueError):
    """A block's value is not below the modulus, so it cannot be transformed."""

    def __init__(self, block: int, mod: int) -> None:
        super().__init__(f"M is larger than n: block {block} >= modulus {mod}")
        self.block = block
        self.mod = mod


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to an integer in accordance to preset procedures.

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int = BLOCK_SIZE) -> bytes:
    """Converts an integer to a string, using a fixed-length byte representation.

    Args:
        msg: The integer to unmarshal.
        fixedlen: The target length of the byte string. Defaults to one block.

    Returns:
        The representative bytes. (AKA Octet String)
    """
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)


def _read_block(src: BinaryIO, size: int) -> bytes:
    """Read up to `size` bytes, retrying short reads until the stream is exhausted."""
    chunk = b""
    while len(chunk) < size:
        part = src.read(size - len(chunk))
        if not part:
            break
        chunk += part
    return chunk


def transform(src: BinaryIO, length: int, dst: BinaryIO, key: int, mod: int) -> int:
    """Runs the RSA primitive over `length` bytes of `src`, block by block.

    Serves both directions: pass the public exponent to encrypt and the private exponent to decrypt. Decryption
    must be handed the ciphertext byte count, which is always a multiple of the block size.

    Args:
        src: Readable binary stream positioned at the payload.
        length: Number of bytes to consume from `src`.
        dst: Writable binary stream for the output blocks.
        key: The exponent to apply.
        mod: The modulus.

    Returns:
        The number of bytes written to `dst`.

    Raises:
        MessageTooLargeError: If a block value is not below `mod`. Blocks before it remain written.
    """
    logger.info("transform start, input length %d", length)
    written = 0
    remaining = length
    while remaining > 0:
        chunk = _read_block(src, min(BLOCK_SIZE, remaining))
        if not chunk:
            logger.warning("input ended with %d of %d bytes unread", remaining, length)
            break
        ptx = bytes_to_integer(chunk.ljust(BLOCK_SIZE, b"\x00"))
        if ptx >= mod:
            raise MessageTooLargeError(ptx, mod)
        ctx = mod_pow(ptx, key, mod)
        logger.debug("len: %d, buf: %r, ptx: %d, ctx: %d", remaining, chunk, ptx, ctx)
        written += dst.write(integer_to_bytes(ctx))
        if len(chunk) < BLOCK_SIZE:
            if len(chunk) < min(BLOCK_SIZE, remaining):
                logger.warning("input ended with %d of %d bytes unread", remaining - len(chunk), length)
            break
        remaining -= BLOCK_SIZE
    logger.info("transform done, %d bytes written", written)
    return written


def encrypt(src: BinaryIO, length: int, dst: BinaryIO, keys: KeyPair) -> int:
    """Encrypts `length` bytes of `src` into `dst` with the public exponent."""
    return transform(src, length, dst, keys.e, keys.n)


def decrypt(src: BinaryIO, length: int, dst: BinaryIO, keys: KeyPair) -> int:
    """Decrypts `length` bytes of `src` into `dst` with the private exponent."""
    return transform(src, length, dst, keys.d, keys.n)
