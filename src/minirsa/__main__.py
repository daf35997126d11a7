"""The Command Line Interface for the toy RSA round trip.

Generates a fresh key pair, encrypts the data file into the encrypt file and decrypts that back into the decrypt
file, reporting the sizes along the way.

Typical usage example:

    minirsa data.txt data.enc data.dec
    OR
    python -m minirsa data.txt data.enc data.dec --seed 1234 --keep-length
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import os
import pathlib
import sys

import minirsa
from minirsa import cipher
from minirsa import keygen
from minirsa import rng

corep = argparse.ArgumentParser(prog="minirsa", description="Toy 32-bit RSA encrypt/decrypt round trip.")
corep.add_argument("--version", "-V", action="version", version=f"%(prog)s {minirsa.__version__}")
corep.add_argument("data_file", type=pathlib.Path, help="Plaintext source file.")
corep.add_argument("encrypt_file", type=pathlib.Path, help="Ciphertext destination file.")
corep.add_argument("decrypt_file", type=pathlib.Path, help="Decrypted output destination file.")
corep.add_argument("--seed", type=int, help="Seed for the random source. Defaults to the current time.")
corep.add_argument("--rounds",
                   type=int,
                   default=keygen.DEFAULT_ROUNDS,
                   help="Miller-Rabin rounds per prime candidate.")
corep.add_argument("--keep-length",
                   action="store_true",
                   help="Truncate the decrypted file to the original length, dropping block padding.")
corep.add_argument("--quiet", "-q", action="store_true", help="Only print errors.")
corep.add_argument("--verbose", "-v", action="count", default=0, help="Increase log verbosity (repeatable).")


def fail(message: str) -> None:
    """Report a fatal error and exit non-zero."""
    print(message, file=sys.stderr)
    sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    """Core CLI: key generation, encryption and decryption in one run."""
    args = corep.parse_args(argv)
    level = (logging.WARNING, logging.INFO, logging.DEBUG)[min(args.verbose, 2)]
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    if args.rounds < 1:
        corep.error("--rounds must be >= 1")

    def pspr(text: str):
        """Print only if not in quiet mode."""
        if not args.quiet:
            print(text)

    source = rng.seed(args.seed)
    try:
        with open(args.data_file, "rb") as data_fp, open(args.encrypt_file, "wb") as enc_fp:
            fsize = os.fstat(data_fp.fileno()).st_size
            pspr(f"data file size : {fsize}")
            keys = keygen.generate_keys(source, args.rounds)
            pspr(f"p, q = {keys.p}, {keys.q}")
            pspr(f"n = {keys.n}, e = {keys.e}, d = {keys.d}")
            esize = cipher.encrypt(data_fp, fsize, enc_fp, keys)
        pspr(f"encrypted file size : {esize}")
        with open(args.encrypt_file, "rb") as enc_fp, open(args.decrypt_file, "wb") as dec_fp:
            dsize = cipher.decrypt(enc_fp, esize, dec_fp, keys)
            if args.keep_length:
                dec_fp.truncate(fsize)
                dsize = fsize
        pspr(f"decrypted file size : {dsize}")
    except cipher.MessageTooLargeError as exc:
        fail(str(exc))
    except OSError as exc:
        fail(f"file open fail: {exc}")


if __name__ == "__main__":
    main()
