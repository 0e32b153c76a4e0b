"""Exceptions raised by the encrypt and decrypt paths.

The structural parser never raises; it returns None for malformed input.
"""


class SecDropError(Exception):
    """Base class for every failure the codec reports."""


class EntropyUnavailable(SecDropError):
    """The host could not supply secure random bytes."""


class CipherFailure(SecDropError):
    """PBKDF2 or AES-GCM rejected its inputs or failed internally."""


class MalformedPayload(SecDropError, ValueError):
    """Missing prefix, bad base64, or a decoded envelope that is too short."""


class UnsupportedVersion(SecDropError):
    """The envelope carries a format or algorithm id this build cannot open."""

    def __init__(self, field: str, value: int):
        super().__init__(f"Unsupported {field}: 0x{value:02x}")
        self.field = field
        self.value = value


class AuthenticationFailure(SecDropError):
    """Wrong passphrase, or the payload was altered after encryption."""
