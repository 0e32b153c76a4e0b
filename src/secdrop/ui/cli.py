import argparse

from secdrop.utils.core import cmd_decrypt, cmd_encrypt, cmd_inspect, cmd_passphrase


def non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="secdrop", description="Passphrase-encrypt an API key into a SECDROP-P payload")
    p.add_argument("--log-level", help="Logging level (default: $SECDROP_LOG_LEVEL or WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_enc = sub.add_parser("encrypt", help="Encrypt a secret")
    p_enc.add_argument("--secret", help="Secret to encrypt (default: prompt or stdin)")
    p_enc.add_argument("--passphrase", help="Passphrase (default: prompt)")
    p_enc.add_argument("--generate", action="store_true", help="Generate a random passphrase and print it to stderr")
    p_enc.add_argument("--length", type=non_negative_int, help="Generated passphrase length")
    p_enc.set_defaults(func=cmd_encrypt)

    p_dec = sub.add_parser("decrypt", help="Decrypt a SECDROP-P payload")
    p_dec.add_argument("payload", help="SECDROP-P:... payload")
    p_dec.add_argument("--passphrase", help="Passphrase (default: prompt)")
    p_dec.set_defaults(func=cmd_decrypt)

    p_ins = sub.add_parser("inspect", help="Show the structure of a payload without decrypting")
    p_ins.add_argument("payload", help="SECDROP-P:... payload")
    p_ins.add_argument("--json", action="store_true", help="Print fields as JSON")
    p_ins.set_defaults(func=cmd_inspect)

    p_pw = sub.add_parser("passphrase", help="Generate a random passphrase")
    p_pw.add_argument("--length", type=non_negative_int, help="Passphrase length")
    p_pw.set_defaults(func=cmd_passphrase)

    return p
