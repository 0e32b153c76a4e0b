import logging

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from secdrop.utils.dataModels import AlgoVersion, KEY_LEN, PBKDF2_ITERATIONS, SALT_LEN
from secdrop.utils.errors import CipherFailure, UnsupportedVersion

logger = logging.getLogger(__name__)


def pbkdf2_sha256(passphrase: str, salt: bytes, iterations: int = PBKDF2_ITERATIONS) -> bytes:
    """key = PBKDF2-HMAC-SHA256(utf8(passphrase), salt, iterations) -> 32 bytes"""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LEN,
        salt=salt,
        iterations=iterations,
        backend=default_backend(),
    )
    return kdf.derive(passphrase.encode("utf-8"))


def derive_key(passphrase: str, salt: bytes, algo: int = AlgoVersion.PBKDF2_SHA256) -> bytes:
    """Derive the AES-256 key for an envelope.

    The passphrase is used as raw UTF-8 with no normalization. The salt must
    be the 16 bytes stored in the envelope.
    """
    if len(salt) != SALT_LEN:
        raise CipherFailure(f"salt must be {SALT_LEN} bytes, got {len(salt)}")

    if algo == AlgoVersion.PBKDF2_SHA256:
        logger.debug("deriving key with PBKDF2-SHA256 (%d iterations)", PBKDF2_ITERATIONS)
        try:
            return pbkdf2_sha256(passphrase, salt)
        except (TypeError, ValueError) as e:
            raise CipherFailure(f"PBKDF2 failed: {e}") from e
    if algo == AlgoVersion.ARGON2ID:
        raise NotImplementedError("Argon2id key derivation (algo 0x02) is reserved")
    raise UnsupportedVersion("algo version", int(algo))
