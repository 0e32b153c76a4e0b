#!/usr/bin/env python3
"""
SecDrop: passphrase-encrypted API key hand-off.

Payload format (text):
    SECDROP-P:<standard base64 of the envelope>

Envelope (binary, no length prefixes):
    format    : 1 byte   -> 0x02
    algo      : 1 byte   -> 0x01 PBKDF2-SHA256 (100k), 0x02 Argon2id (reserved)
    salt      : 16 bytes
    nonce     : 12 bytes
    ciphertext: len(secret) bytes
    tag       : 16 bytes (AES-256-GCM, AAD "api-key-secure-send-v1")

Commands:
  encrypt              Encrypt a secret (from --secret, prompt, or stdin)
  decrypt <payload>    Decrypt a payload with its passphrase
  inspect <payload>    Show version ids, salt, nonce and ciphertext size
  passphrase           Generate a random passphrase
"""
from __future__ import annotations

from secdrop.ui.cli import build_parser
from secdrop.utils.core import load_config_or_exit
from secdrop.utils.helper import configure_logging


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level or load_config_or_exit().LOG_LEVEL)
    args.func(args)


if __name__ == "__main__":
    main()
