"""Passphrase-based AES-256-GCM encryption of API keys into SECDROP-P payloads."""

from secdrop.crypto.passphrase import generate_passphrase
from secdrop.utils.core import (
    decrypt_secure_drop,
    encrypt_secure_drop,
    encrypt_secure_drop_async,
    parse_secure_drop_payload,
)
from secdrop.utils.dataModels import AAD_CONTEXT, FORMAT_VERSION, AlgoVersion, EnvelopeFields
from secdrop.utils.errors import (
    AuthenticationFailure,
    CipherFailure,
    EntropyUnavailable,
    MalformedPayload,
    SecDropError,
    UnsupportedVersion,
)

__version__ = "0.2.0"

__all__ = [
    "encrypt_secure_drop", "encrypt_secure_drop_async", "decrypt_secure_drop",
    "parse_secure_drop_payload", "generate_passphrase",
    "AAD_CONTEXT", "FORMAT_VERSION", "AlgoVersion", "EnvelopeFields",
    "SecDropError", "EntropyUnavailable", "CipherFailure", "MalformedPayload",
    "UnsupportedVersion", "AuthenticationFailure",
]
