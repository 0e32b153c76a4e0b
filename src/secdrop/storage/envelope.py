import base64
import binascii
import logging
import re

from typing import Optional

from secdrop.utils.dataModels import (
    ENVELOPE_MIN_SIZE, NONCE_LEN, PAYLOAD_PREFIX, SALT_LEN, TAG_LEN,
    CipherParameters, DerivationParameters, Envelope, EnvelopeFields,
)
from secdrop.utils.errors import CipherFailure, MalformedPayload

logger = logging.getLogger(__name__)

# ASCII whitespace as skipped by browser atob()
_B64_WHITESPACE = re.compile(r"[\t\n\f\r ]")


def encode(format_version: int, algo_version: int, derivation: DerivationParameters,
           cipher: CipherParameters, ciphertext: bytes, tag: bytes) -> str:
    if len(derivation.salt) != SALT_LEN:
        raise CipherFailure(f"salt must be {SALT_LEN} bytes")
    if len(cipher.nonce) != NONCE_LEN:
        raise CipherFailure(f"nonce must be {NONCE_LEN} bytes")
    if len(tag) != TAG_LEN:
        raise CipherFailure(f"tag must be {TAG_LEN} bytes")

    env = Envelope(
        format_version=format_version,
        algo_version=algo_version,
        salt=derivation.salt,
        nonce=cipher.nonce,
        ciphertext=ciphertext,
        tag=tag,
    )
    return PAYLOAD_PREFIX + base64.b64encode(env.to_bytes()).decode("ascii")


def _unwrap(payload: str, lenient: bool = False) -> bytes:
    if not isinstance(payload, str) or not payload.startswith(PAYLOAD_PREFIX):
        raise MalformedPayload(f"payload does not start with {PAYLOAD_PREFIX}")
    body = payload[len(PAYLOAD_PREFIX):]
    if lenient:
        body = _B64_WHITESPACE.sub("", body)
        body += "=" * (-len(body) % 4)
    try:
        data = base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedPayload(f"invalid base64: {e}") from None
    if len(data) < ENVELOPE_MIN_SIZE:
        raise MalformedPayload(f"envelope is {len(data)} bytes, minimum is {ENVELOPE_MIN_SIZE}")
    return data


def decode(payload: str) -> Envelope:
    """Strict decode used by the decrypt path. Raises MalformedPayload."""
    try:
        data = _unwrap(payload)
    except MalformedPayload as e:
        logger.warning("rejected payload: %s", e)
        raise
    return Envelope.from_bytes(data)


def parse(payload: str) -> Optional[EnvelopeFields]:
    """Structural inspection only. Returns None for anything malformed.

    Accepts what atob() accepts: embedded ASCII whitespace and missing "="
    padding. Version bytes are reported as found; no compatibility check
    is made.
    """
    try:
        data = _unwrap(payload, lenient=True)
    except MalformedPayload as e:
        logger.debug("parse: %s", e)
        return None

    salt_end = 2 + SALT_LEN
    return EnvelopeFields(
        format_version=data[0],
        algo_version=data[1],
        salt=data[2:salt_end],
        nonce=data[salt_end:salt_end + NONCE_LEN],
        ciphertext_length=len(data) - ENVELOPE_MIN_SIZE,
    )
