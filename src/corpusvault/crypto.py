# src/corpusvault/crypto.py
"""Field-level authenticated encryption using AES-256-GCM."""

import base64
import hashlib
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from corpusvault.exceptions import CorruptSnapshotError
from corpusvault.models import EncryptedBlob

BLOB_VERSION = 1
NONCE_BYTES = 12
TAG_BYTES = 16


def derive_key(secret: str | bytes) -> bytes:
    """Derive a 32-byte AES key from a process-wide secret (SHA-256)."""
    if isinstance(secret, str):
        secret = secret.encode("utf-8")
    if not secret:
        raise ValueError("Encryption secret must not be empty")
    return hashlib.sha256(secret).digest()


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class FieldCipher:
    """Encrypt and decrypt individual text fields.

    Every call to encrypt() uses a fresh random nonce, so the same plaintext
    never produces the same blob twice.

    Example:
        cipher = FieldCipher.from_secret(os.environ["CORPUSVAULT_SECRET"])
        blob = cipher.encrypt("chunk text")
        assert cipher.decrypt(blob) == "chunk text"
    """

    def __init__(self, key: bytes) -> None:
        """Initialize with a 32-byte key."""
        if len(key) != 32:
            raise ValueError(f"AES-256 key must be 32 bytes, got {len(key)}")
        self._aead = AESGCM(key)

    @classmethod
    def from_secret(cls, secret: str | bytes) -> "FieldCipher":
        return cls(derive_key(secret))

    def encrypt(self, plaintext: str) -> EncryptedBlob:
        nonce = os.urandom(NONCE_BYTES)
        # AESGCM appends the authentication tag to the ciphertext
        sealed = self._aead.encrypt(nonce, plaintext.encode("utf-8"), None)
        return EncryptedBlob(
            v=BLOB_VERSION,
            iv=_b64(nonce),
            ct=_b64(sealed[:-TAG_BYTES]),
            tag=_b64(sealed[-TAG_BYTES:]),
        )

    def decrypt(self, blob: EncryptedBlob) -> str:
        """Decrypt a blob produced by encrypt().

        Raises:
            CorruptSnapshotError: If the blob is malformed, has an unknown
                version, or fails authentication (wrong key or tampering)
        """
        if blob.v != BLOB_VERSION:
            raise CorruptSnapshotError(f"Unsupported encrypted blob version: {blob.v}")
        try:
            nonce = base64.b64decode(blob.iv, validate=True)
            sealed = base64.b64decode(blob.ct, validate=True) + base64.b64decode(
                blob.tag, validate=True
            )
            plaintext = self._aead.decrypt(nonce, sealed, None)
            return plaintext.decode("utf-8")
        except (InvalidTag, ValueError) as e:
            raise CorruptSnapshotError(f"Failed to decrypt field: {e!r}") from e
