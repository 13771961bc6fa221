"""protection sub-package — encryption-at-rest, masking, and hashing of PII."""

from rosterguard.core.hashing import hash_value
from rosterguard.protection.cipher import (
    PIICipher,
    CipherError,
    EncryptionError,
    DecryptionError,
    derive_key,
    generate_key,
)
from rosterguard.protection.masking import mask

__all__ = [
    "PIICipher",
    "CipherError",
    "EncryptionError",
    "DecryptionError",
    "derive_key",
    "generate_key",
    "mask",
    "hash_value",
]
