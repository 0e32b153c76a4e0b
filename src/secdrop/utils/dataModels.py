import base64

from dataclasses import dataclass
from enum import IntEnum

PAYLOAD_PREFIX = "SECDROP-P:"

FORMAT_VERSION = 0x02

PBKDF2_ITERATIONS = 100000
KEY_LEN = 32  # AES-256
SALT_LEN = 16
NONCE_LEN = 12  # GCM recommended
TAG_LEN = 16

# version + algo + salt + nonce + tag, ciphertext may be empty
ENVELOPE_MIN_SIZE = 1 + 1 + SALT_LEN + NONCE_LEN + TAG_LEN

# Bound into every encryption; fixed for the lifetime of FORMAT_VERSION 0x02
AAD_CONTEXT = b"api-key-secure-send-v1"


class AlgoVersion(IntEnum):
    """Key derivation method id stored in the second envelope byte.

    ARGON2ID is reserved. New methods get a new member here and a branch
    in crypto.hash.derive_key.
    """
    PBKDF2_SHA256 = 0x01
    ARGON2ID = 0x02


@dataclass(frozen=True)
class DerivationParameters:
    salt: bytes
    iterations: int = PBKDF2_ITERATIONS
    hash_algorithm: str = "SHA-256"


@dataclass(frozen=True)
class CipherParameters:
    nonce: bytes


@dataclass(frozen=True)
class Envelope:
    format_version: int
    algo_version: int
    salt: bytes
    nonce: bytes
    ciphertext: bytes
    tag: bytes

    def to_bytes(self) -> bytes:
        return (
            bytes([self.format_version, self.algo_version])
            + self.salt
            + self.nonce
            + self.ciphertext
            + self.tag
        )

    @staticmethod
    def from_bytes(b: bytes) -> "Envelope":
        salt_end = 2 + SALT_LEN
        nonce_end = salt_end + NONCE_LEN
        return Envelope(
            format_version=b[0],
            algo_version=b[1],
            salt=b[2:salt_end],
            nonce=b[salt_end:nonce_end],
            ciphertext=b[nonce_end:-TAG_LEN],
            tag=b[-TAG_LEN:],
        )


@dataclass(frozen=True)
class EnvelopeFields:
    """Structural view of a payload. Carries no key material and no ciphertext."""
    format_version: int
    algo_version: int
    salt: bytes
    nonce: bytes
    ciphertext_length: int

    def to_dict(self) -> dict:
        return {
            "format_version": self.format_version,
            "algo_version": self.algo_version,
            "salt": base64.b64encode(self.salt).decode(),
            "nonce": base64.b64encode(self.nonce).decode(),
            "ciphertext_length": self.ciphertext_length,
        }
