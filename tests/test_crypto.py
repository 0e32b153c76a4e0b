"""Tests for key derivation and the AES-256-GCM seal/open unit."""

import hashlib

import pytest

from secdrop.crypto.aead import aead_open, aead_seal
from secdrop.crypto.hash import derive_key, pbkdf2_sha256
from secdrop.utils.dataModels import AAD_CONTEXT, AlgoVersion
from secdrop.utils.errors import AuthenticationFailure, CipherFailure, UnsupportedVersion

KEY = bytes(range(32))
NONCE = b"\x01" * 12
SALT = b"\x5a" * 16


# ── Key derivation ──────────────────────────────────────────────────


class TestDeriveKey:

    def test_matches_reference_pbkdf2(self):
        expected = hashlib.pbkdf2_hmac("sha256", "correct horse".encode("utf-8"), SALT, 100000, 32)
        assert derive_key("correct horse", SALT) == expected

    def test_key_length(self):
        assert len(pbkdf2_sha256("pw", SALT, iterations=1)) == 32

    def test_no_unicode_normalization(self):
        composed = "\u00e9"
        decomposed = "e\u0301"
        assert pbkdf2_sha256(composed, SALT, 1) != pbkdf2_sha256(decomposed, SALT, 1)

    def test_salt_changes_key(self):
        assert pbkdf2_sha256("pw", SALT, 1) != pbkdf2_sha256("pw", b"\x00" * 16, 1)

    @pytest.mark.parametrize("salt", [b"", b"\x00" * 15, b"\x00" * 17])
    def test_salt_must_be_16_bytes(self, salt):
        with pytest.raises(CipherFailure):
            derive_key("pw", salt)

    def test_argon2id_reserved(self):
        with pytest.raises(NotImplementedError):
            derive_key("pw", SALT, AlgoVersion.ARGON2ID)

    def test_unknown_algo(self):
        with pytest.raises(UnsupportedVersion):
            derive_key("pw", SALT, 0x03)


# ── Seal / open ─────────────────────────────────────────────────────


class TestSeal:

    def test_ciphertext_same_length_as_plaintext(self):
        ct, tag = aead_seal(KEY, NONCE, b"sk-test-12345", AAD_CONTEXT)
        assert len(ct) == 13
        assert len(tag) == 16

    def test_empty_plaintext(self):
        ct, tag = aead_seal(KEY, NONCE, b"", AAD_CONTEXT)
        assert ct == b""
        assert len(tag) == 16

    def test_round_trip(self):
        ct, tag = aead_seal(KEY, NONCE, b"hello", AAD_CONTEXT)
        assert aead_open(KEY, NONCE, ct, tag, AAD_CONTEXT) == b"hello"

    def test_interop_with_concatenated_form(self):
        from cryptography.hazmat.primitives.ciphers.aead import AESGCM

        ct, tag = aead_seal(KEY, NONCE, b"hello", AAD_CONTEXT)
        assert AESGCM(KEY).encrypt(NONCE, b"hello", AAD_CONTEXT) == ct + tag

    @pytest.mark.parametrize("key", [b"", b"\x00" * 16, b"\x00" * 31])
    def test_bad_key_length(self, key):
        with pytest.raises(CipherFailure):
            aead_seal(key, NONCE, b"x", AAD_CONTEXT)

    def test_bad_nonce_length(self):
        with pytest.raises(CipherFailure):
            aead_seal(KEY, b"\x00" * 16, b"x", AAD_CONTEXT)


class TestOpen:

    def test_wrong_aad_fails(self):
        ct, tag = aead_seal(KEY, NONCE, b"hello", AAD_CONTEXT)
        with pytest.raises(AuthenticationFailure):
            aead_open(KEY, NONCE, ct, tag, b"some-other-app")

    def test_wrong_key_fails(self):
        ct, tag = aead_seal(KEY, NONCE, b"hello", AAD_CONTEXT)
        with pytest.raises(AuthenticationFailure):
            aead_open(b"\xff" * 32, NONCE, ct, tag, AAD_CONTEXT)

    def test_every_bit_flip_detected(self):
        ct, tag = aead_seal(KEY, NONCE, b"sk-live", AAD_CONTEXT)
        blob = ct + tag
        for i in range(len(blob) * 8):
            tampered = bytearray(blob)
            tampered[i // 8] ^= 1 << (i % 8)
            with pytest.raises(AuthenticationFailure):
                aead_open(KEY, NONCE, bytes(tampered[:len(ct)]), bytes(tampered[len(ct):]), AAD_CONTEXT)

    def test_short_tag(self):
        ct, tag = aead_seal(KEY, NONCE, b"hello", AAD_CONTEXT)
        with pytest.raises(AuthenticationFailure):
            aead_open(KEY, NONCE, ct, tag[:8], AAD_CONTEXT)
