# tests/test_crypto.py
"""Tests for field-level encryption."""

import base64
import hashlib

import pytest

from corpusvault.crypto import NONCE_BYTES, TAG_BYTES, FieldCipher, derive_key
from corpusvault.exceptions import CorruptSnapshotError


class TestDeriveKey:
    def test_sha256_of_secret(self):
        assert derive_key("s3cret") == hashlib.sha256(b"s3cret").digest()

    def test_accepts_bytes(self):
        assert derive_key(b"s3cret") == derive_key("s3cret")

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            derive_key("")


class TestFieldCipher:
    def test_round_trip(self, cipher):
        blob = cipher.encrypt("The heart pumps blood.")
        assert cipher.decrypt(blob) == "The heart pumps blood."

    def test_round_trip_unicode_and_empty(self, cipher):
        for text in ["", "naïve café ☕", "line1\nline2"]:
            assert cipher.decrypt(cipher.encrypt(text)) == text

    def test_blob_layout(self, cipher):
        blob = cipher.encrypt("hello")

        assert blob.v == 1
        assert len(base64.b64decode(blob.iv)) == NONCE_BYTES
        assert len(base64.b64decode(blob.tag)) == TAG_BYTES
        assert len(base64.b64decode(blob.ct)) == len(b"hello")

    def test_fresh_nonce_every_time(self, cipher):
        first = cipher.encrypt("same text")
        second = cipher.encrypt("same text")

        assert first.iv != second.iv
        assert first.ct != second.ct

    def test_wrong_key_fails(self, cipher):
        blob = cipher.encrypt("secret content")
        other = FieldCipher.from_secret("another-secret")

        with pytest.raises(CorruptSnapshotError):
            other.decrypt(blob)

    def test_tampered_ciphertext_fails(self, cipher):
        blob = cipher.encrypt("secret content")
        raw = bytearray(base64.b64decode(blob.ct))
        raw[0] ^= 0x01
        tampered = blob.model_copy(update={"ct": base64.b64encode(bytes(raw)).decode()})

        with pytest.raises(CorruptSnapshotError):
            cipher.decrypt(tampered)

    def test_tampered_tag_fails(self, cipher):
        blob = cipher.encrypt("secret content")
        tampered = blob.model_copy(update={"tag": base64.b64encode(b"\x00" * 16).decode()})

        with pytest.raises(CorruptSnapshotError):
            cipher.decrypt(tampered)

    def test_malformed_base64_fails(self, cipher):
        blob = cipher.encrypt("secret content")
        broken = blob.model_copy(update={"iv": "not base64!!"})

        with pytest.raises(CorruptSnapshotError):
            cipher.decrypt(broken)

    def test_unknown_version_fails(self, cipher):
        blob = cipher.encrypt("secret content").model_copy(update={"v": 2})

        with pytest.raises(CorruptSnapshotError, match="version"):
            cipher.decrypt(blob)

    def test_key_length_checked(self):
        with pytest.raises(ValueError, match="32 bytes"):
            FieldCipher(b"short")
