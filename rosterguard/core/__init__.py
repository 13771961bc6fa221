"""core sub-package — configuration, hashing, and result objects."""

from rosterguard.core.config import GuardConfig, DEFAULT_CONFIG, ConfigError
from rosterguard.core.hashing import hash_value, keyed_digest
from rosterguard.core.result_schema import (
    ValidationResult,
    MemberIssue,
    RosterScreeningResult,
    ProtectedValue,
)

__all__ = [
    "GuardConfig",
    "DEFAULT_CONFIG",
    "ConfigError",
    "hash_value",
    "keyed_digest",
    "ValidationResult",
    "MemberIssue",
    "RosterScreeningResult",
    "ProtectedValue",
]
