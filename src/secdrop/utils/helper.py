import logging
import os
import sys

from secdrop.utils.errors import EntropyUnavailable

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def random_bytes(n: int) -> bytes:
    """n bytes from the OS CSPRNG. Never falls back to a non-secure source."""
    try:
        return os.urandom(n)
    except (NotImplementedError, OSError) as e:
        raise EntropyUnavailable(f"secure randomness unavailable: {e}") from e


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
