import argparse
import asyncio
import getpass
import json
import logging
import sys

from typing import Optional

from secdrop.crypto.aead import aead_open, aead_seal
from secdrop.crypto.hash import derive_key
from secdrop.crypto.passphrase import generate_passphrase
from secdrop.storage.envelope import decode, encode, parse
from secdrop.utils.config import Config, load_config
from secdrop.utils.dataModels import (
    AAD_CONTEXT, FORMAT_VERSION, NONCE_LEN, SALT_LEN,
    AlgoVersion, CipherParameters, DerivationParameters, EnvelopeFields,
)
from secdrop.utils.errors import CipherFailure, SecDropError, UnsupportedVersion
from secdrop.utils.helper import random_bytes

logger = logging.getLogger(__name__)


def _require_str(name: str, value) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be str, not {type(value).__name__}")


def encrypt_secure_drop(secret: str, passphrase: str) -> str:
    """Encrypt secret under passphrase and return a SECDROP-P: payload.

    A fresh salt and nonce are drawn for every call, so the derived key and
    the (key, nonce) pair are never reused. Any failure propagates; there is
    no partial output.
    """
    _require_str("secret", secret)
    _require_str("passphrase", passphrase)
    if not passphrase:
        raise ValueError("passphrase must not be empty")

    derivation = DerivationParameters(salt=random_bytes(SALT_LEN))
    cipher = CipherParameters(nonce=random_bytes(NONCE_LEN))

    key = derive_key(passphrase, derivation.salt, AlgoVersion.PBKDF2_SHA256)
    try:
        plaintext = secret.encode("utf-8")
    except UnicodeEncodeError as e:
        raise CipherFailure(f"secret is not valid UTF-8 text: {e}") from e
    ciphertext, tag = aead_seal(key, cipher.nonce, plaintext, AAD_CONTEXT)

    logger.debug("sealed %d byte secret", len(plaintext))
    return encode(FORMAT_VERSION, AlgoVersion.PBKDF2_SHA256, derivation, cipher, ciphertext, tag)


async def encrypt_secure_drop_async(secret: str, passphrase: str) -> str:
    """Same as encrypt_secure_drop, with PBKDF2 run off the event loop."""
    return await asyncio.to_thread(encrypt_secure_drop, secret, passphrase)


def parse_secure_drop_payload(payload: str) -> Optional[EnvelopeFields]:
    return parse(payload)


def decrypt_secure_drop(payload: str, passphrase: str) -> str:
    """Open a payload produced by encrypt_secure_drop.

    Only format 0x02 with PBKDF2 (algo 0x01) is accepted. Other format
    versions raise UnsupportedVersion; the reserved Argon2id id raises
    NotImplementedError from the key derivation step.
    """
    _require_str("passphrase", passphrase)
    env = decode(payload)

    if env.format_version != FORMAT_VERSION:
        raise UnsupportedVersion("format version", env.format_version)
    try:
        algo = AlgoVersion(env.algo_version)
    except ValueError:
        raise UnsupportedVersion("algo version", env.algo_version) from None

    key = derive_key(passphrase, env.salt, algo)
    plaintext = aead_open(key, env.nonce, env.ciphertext, env.tag, AAD_CONTEXT)
    return plaintext.decode("utf-8")


def load_config_or_exit() -> Config:
    try:
        return load_config()
    except ValueError as e:
        print(f"[!] Configuration error: {e}", file=sys.stderr)
        sys.exit(1)


def _passphrase_length(args: argparse.Namespace) -> int:
    if args.length is not None:
        return args.length
    return load_config_or_exit().PASSPHRASE_LENGTH


def _read_secret(args: argparse.Namespace) -> str:
    if args.secret is not None:
        return args.secret
    if sys.stdin.isatty():
        return getpass.getpass("Secret: ")
    return sys.stdin.read().rstrip("\r\n")


def cmd_encrypt(args: argparse.Namespace) -> None:
    secret = _read_secret(args)
    if not secret.strip():
        print("[!] Nothing to encrypt.", file=sys.stderr)
        sys.exit(1)

    passphrase = args.passphrase
    if args.generate:
        passphrase = generate_passphrase(_passphrase_length(args))
    elif not passphrase:
        passphrase = getpass.getpass("Passphrase: ")

    try:
        payload = encrypt_secure_drop(secret, passphrase)
    except (SecDropError, ValueError) as e:
        print(f"[!] Encryption failed: {e}", file=sys.stderr)
        sys.exit(1)

    print(payload)
    if args.generate:
        print(f"[+] Passphrase: {passphrase}", file=sys.stderr)


def cmd_decrypt(args: argparse.Namespace) -> None:
    passphrase = args.passphrase or getpass.getpass("Passphrase: ")
    try:
        secret = decrypt_secure_drop(args.payload, passphrase)
    except (SecDropError, NotImplementedError, UnicodeDecodeError) as e:
        print(f"[!] Decryption failed: {e}", file=sys.stderr)
        sys.exit(1)
    print(secret)


def cmd_inspect(args: argparse.Namespace) -> None:
    fields = parse_secure_drop_payload(args.payload)
    if fields is None:
        print("[!] Not a valid SECDROP-P payload", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(fields.to_dict()))
        return
    print(f"format version\t0x{fields.format_version:02x}")
    print(f"algo version\t0x{fields.algo_version:02x}")
    print(f"salt\t{fields.salt.hex()}")
    print(f"nonce\t{fields.nonce.hex()}")
    print(f"ciphertext\t{fields.ciphertext_length} bytes")


def cmd_passphrase(args: argparse.Namespace) -> None:
    print(generate_passphrase(_passphrase_length(args)))
