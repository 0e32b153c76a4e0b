"""
Runtime configuration for SecDrop.

Only presentation-side settings live here. Wire constants (iterations,
field sizes, AAD, version ids) are fixed by the format and are not
configurable.
"""

import os
from dataclasses import dataclass, field


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class Config:
    """Application configuration."""

    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("SECDROP_LOG_LEVEL", "WARNING").upper())
    PASSPHRASE_LENGTH: int = field(default_factory=lambda: _env_int("SECDROP_PASSPHRASE_LENGTH", 24))

    def __post_init__(self):
        if self.PASSPHRASE_LENGTH < 1:
            raise ValueError("SECDROP_PASSPHRASE_LENGTH must be at least 1")


def load_config() -> Config:
    """Read the environment now; tests call this after monkeypatching."""
    return Config()
