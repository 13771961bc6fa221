"""
rosterguard — identity number validation and PII encryption-at-rest for
team registration rosters.
"""

__version__ = "0.1.0"
__author__ = "rosterguard"

from rosterguard.core.config import GuardConfig, DEFAULT_CONFIG
from rosterguard.core.hashing import hash_value
from rosterguard.core.result_schema import ValidationResult
from rosterguard.identity.validator import validate_identity_number
from rosterguard.protection.cipher import PIICipher, EncryptionError, DecryptionError
from rosterguard.protection.masking import mask

__all__ = [
    "GuardConfig",
    "DEFAULT_CONFIG",
    "ValidationResult",
    "validate_identity_number",
    "PIICipher",
    "EncryptionError",
    "DecryptionError",
    "mask",
    "hash_value",
    "__version__",
]
