"""
Shared pytest fixtures for the SecDrop test suite.

  - fast_kdf -> PBKDF2 with a single iteration, for tests that encrypt
                hundreds of payloads or only look at structure
"""

import pytest


@pytest.fixture
def fast_kdf(monkeypatch):
    import secdrop.utils.core as core_mod
    from secdrop.crypto.hash import derive_key, pbkdf2_sha256
    from secdrop.utils.dataModels import AlgoVersion

    def quick_derive(passphrase, salt, algo=AlgoVersion.PBKDF2_SHA256):
        if algo != AlgoVersion.PBKDF2_SHA256:
            return derive_key(passphrase, salt, algo)
        return pbkdf2_sha256(passphrase, salt, iterations=1)

    monkeypatch.setattr(core_mod, "derive_key", quick_derive)
    return quick_derive
