"""
protection/cipher.py
--------------------
AES-256-GCM encryption-at-rest for short PII strings (identity numbers,
mobile numbers).

Envelope format (all lowercase hex)::

    <iv: 16 bytes>:<ciphertext>:<tag: 16 bytes>

A fresh random IV is drawn for every call, so encrypting the same value twice
gives two different envelopes. Equality lookups therefore use
:meth:`PIICipher.lookup_hash`, a keyed HMAC stored next to the envelope, and
never a re-encrypt-and-compare.

Key handling
------------
The 32-byte AES key is the configured secret padded on the right with
``"0"`` (or truncated) to 32 characters. This is *not* a KDF; it is kept so
that records written by the existing deployment stay decryptable.
"""

from __future__ import annotations

import logging
import os
import secrets
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from rosterguard.core.config import GuardConfig
from rosterguard.core.hashing import keyed_digest
from rosterguard.core.result_schema import ProtectedValue
from rosterguard.protection.masking import mask

logger = logging.getLogger(__name__)

KEY_LENGTH = 32
IV_LENGTH = 16
TAG_LENGTH = 16
SEPARATOR = ":"

_LOOKUP_KEY_INFO = b"rosterguard-lookup-hash-v1"


class CipherError(ValueError):
    """Base class for encryption-at-rest failures."""


class EncryptionError(CipherError):
    """Raised when a value cannot be encrypted (e.g. unusable key material)."""

    def __init__(self, message: str = "Failed to encrypt data") -> None:
        super().__init__(message)


class DecryptionError(CipherError):
    """
    Raised when an envelope is malformed or fails authentication.

    No partial plaintext is ever returned. Outside of tampering, the usual
    cause is a changed ``ENCRYPTION_KEY`` between write and read.
    """

    def __init__(self, message: str = "Failed to decrypt data") -> None:
        super().__init__(message)


def derive_key(secret: str, pad_char: str = "0") -> bytes:
    """
    Expand or truncate *secret* to exactly 32 bytes.

    Raises:
        EncryptionError: If the padded secret does not encode to 32 bytes
                         (multi-byte characters in the first 32).
    """
    key = secret.ljust(KEY_LENGTH, pad_char)[:KEY_LENGTH].encode("utf-8")
    if len(key) != KEY_LENGTH:
        raise EncryptionError("Encryption key material is malformed")
    return key


def generate_key() -> str:
    """Return a random 32-character hex secret suitable for ``ENCRYPTION_KEY``."""
    return secrets.token_hex(KEY_LENGTH)[:KEY_LENGTH]


class PIICipher:
    """
    Authenticated encryption of sensitive strings under one process-wide key.

    Build one instance at startup and pass it to whatever needs it::

        cipher = PIICipher.from_config(GuardConfig.from_env())
        blob = cipher.encrypt("234123412346")
        cipher.decrypt(blob)        # '234123412346'

    The instance holds only read-only key material and is safe to share
    between threads.

    Args:
        secret:   The configured secret the AES key is derived from.
        pad_char: Filler used when the secret is shorter than 32 characters.
    """

    def __init__(self, secret: str, pad_char: str = "0") -> None:
        self._key: bytes = derive_key(secret, pad_char)
        self._lookup_key: bytes = HKDF(
            algorithm=hashes.SHA256(),
            length=KEY_LENGTH,
            salt=None,
            info=_LOOKUP_KEY_INFO,
        ).derive(self._key)

    @classmethod
    def from_config(cls, config: GuardConfig) -> "PIICipher":
        return cls(config.encryption_key, pad_char=config.key_pad_char)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def encrypt(self, plaintext: Optional[str]) -> str:
        """
        Encrypt *plaintext* into an ``iv:ciphertext:tag`` envelope.

        An empty value yields ``""``: "no value" is stored as "no ciphertext",
        not as an encryption of the empty string.

        Raises:
            EncryptionError: On any internal cipher failure.
        """
        if not plaintext:
            return ""

        iv = os.urandom(IV_LENGTH)
        try:
            sealed = AESGCM(self._key).encrypt(iv, plaintext.encode("utf-8"), None)
        except (ValueError, TypeError, OverflowError) as exc:
            logger.error("Encryption failed: %s", type(exc).__name__)
            raise EncryptionError() from exc

        ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]
        return SEPARATOR.join((iv.hex(), ciphertext.hex(), tag.hex()))

    def decrypt(self, blob: Optional[str]) -> str:
        """
        Recover the plaintext from an envelope produced by :meth:`encrypt`.

        An empty envelope yields ``""``.

        Raises:
            DecryptionError: If the envelope is malformed, the tag does not
                             verify, or the key differs from the writer's.
        """
        if not blob:
            return ""

        parts = blob.split(SEPARATOR)
        if len(parts) != 3:
            logger.warning("Decryption failed: envelope does not have three parts.")
            raise DecryptionError()

        try:
            iv, ciphertext, tag = (bytes.fromhex(part) for part in parts)
        except ValueError as exc:
            logger.warning("Decryption failed: envelope is not valid hex.")
            raise DecryptionError() from exc

        if len(iv) != IV_LENGTH or len(tag) != TAG_LENGTH:
            logger.warning("Decryption failed: unexpected IV or tag length.")
            raise DecryptionError()

        try:
            plaintext = AESGCM(self._key).decrypt(iv, ciphertext + tag, None)
            return plaintext.decode("utf-8")
        except InvalidTag as exc:
            logger.warning(
                "Decryption failed: authentication tag mismatch "
                "(tampered record or changed ENCRYPTION_KEY)."
            )
            raise DecryptionError() from exc
        except UnicodeDecodeError as exc:
            logger.warning("Decryption failed: plaintext is not valid UTF-8.")
            raise DecryptionError() from exc

    def lookup_hash(self, plaintext: Optional[str]) -> str:
        """
        Deterministic keyed digest of *plaintext* for exact-match lookups.

        Store it next to the envelope; to test for a duplicate, compute the
        candidate's lookup hash and compare. Returns ``""`` for no value.

        Raises:
            EncryptionError: If *plaintext* cannot be encoded as UTF-8.
        """
        if not plaintext:
            return ""
        try:
            return keyed_digest(self._lookup_key, plaintext)
        except UnicodeEncodeError as exc:
            logger.error("Lookup hash failed: %s", type(exc).__name__)
            raise EncryptionError() from exc

    def protect(
        self,
        plaintext: Optional[str],
        visible_count: int = 4,
        mask_char: str = "*",
    ) -> ProtectedValue:
        """Build the encrypted, masked and lookup forms of one field value."""
        return ProtectedValue(
            encrypted=self.encrypt(plaintext),
            masked=mask(plaintext, visible_count, mask_char),
            lookup_hash=self.lookup_hash(plaintext),
        )

    def __repr__(self) -> str:
        return "PIICipher(key=<redacted>)"
