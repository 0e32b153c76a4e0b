from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from typing import Tuple

from secdrop.utils.dataModels import KEY_LEN, NONCE_LEN, TAG_LEN
from secdrop.utils.errors import AuthenticationFailure, CipherFailure


def _check_params(key: bytes, nonce: bytes) -> None:
    if len(key) != KEY_LEN:
        raise CipherFailure(f"AES-256 key must be {KEY_LEN} bytes, got {len(key)}")
    if len(nonce) != NONCE_LEN:
        raise CipherFailure(f"GCM nonce must be {NONCE_LEN} bytes, got {len(nonce)}")


def aead_seal(key: bytes, nonce: bytes, plaintext: bytes, aad: bytes) -> Tuple[bytes, bytes]:
    """AES-256-GCM encrypt. Returns (ciphertext, tag) with the tag split off the end."""
    _check_params(key, nonce)
    try:
        out = AESGCM(key).encrypt(nonce, plaintext, aad)
    except (TypeError, ValueError, OverflowError) as e:
        raise CipherFailure(f"AES-GCM encryption failed: {e}") from e
    return out[:-TAG_LEN], out[-TAG_LEN:]


def aead_open(key: bytes, nonce: bytes, ciphertext: bytes, tag: bytes, aad: bytes) -> bytes:
    _check_params(key, nonce)
    if len(tag) != TAG_LEN:
        raise AuthenticationFailure("authentication tag has the wrong length")
    try:
        return AESGCM(key).decrypt(nonce, ciphertext + tag, aad)
    except InvalidTag:
        raise AuthenticationFailure("wrong passphrase or tampered payload") from None
