"""
Random passphrase generation.

Each character is one CSPRNG byte reduced modulo the alphabet size. 256 is
not a multiple of 70, so the first 46 characters ("A" through "t") are
slightly more likely (4/256 versus 3/256). This is a known property of the
format's generator and is kept for compatibility.
"""

from secdrop.utils.helper import random_bytes

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789!@#$%^&*"
DEFAULT_LENGTH = 24


def generate_passphrase(length: int = DEFAULT_LENGTH) -> str:
    if length < 0:
        raise ValueError("length must be non-negative")
    return "".join(ALPHABET[b % len(ALPHABET)] for b in random_bytes(length))
