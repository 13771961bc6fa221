"""
core/result_schema.py
---------------------
Structured, typed result objects returned by the rosterguard checks.

Classes
-------
* :class:`ValidationResult`      — verdict for a single identity number.
* :class:`MemberIssue`           — one problem found with one roster member.
* :class:`RosterScreeningResult` — every issue found in a submitted roster.
* :class:`ProtectedValue`        — encrypted, masked and lookup forms of a field.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


# ---------------------------------------------------------------------------
# ValidationResult
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one identity number.

    A failed validation is an ordinary, expected result and never an
    exception. ``reason`` is user-presentable and is returned verbatim by the
    HTTP layer, so it must never contain the candidate value.

    Attributes:
        valid:  ``True`` only if every structural check and the checksum pass.
        reason: Human-readable explanation of the verdict.
    """

    valid: bool
    reason: str

    def __bool__(self) -> bool:
        return self.valid

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "reason": self.reason}


# ---------------------------------------------------------------------------
# Roster screening
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MemberIssue:
    """
    A single problem with a roster member.

    Attributes:
        member:  1-based position of the member in the submitted roster.
        kind:    ``"invalid"``, ``"duplicate"`` or ``"registered"``.
        message: User-presentable message.
    """

    member: int
    kind: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"member": self.member, "kind": self.kind, "message": self.message}


@dataclass
class RosterScreeningResult:
    """
    Full result of screening a roster before registration.

    Attributes:
        members_count: Number of members in the roster.
        issues:        Every issue found, ordered by member position.
    """

    members_count: int
    issues: List[MemberIssue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.issues

    @property
    def messages(self) -> List[str]:
        return [issue.message for issue in self.issues]

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialise to a plain dictionary.

        Returns:
            Dict representation of this screening result.
        """
        return {
            "passed": self.passed,
            "members_count": self.members_count,
            "issues": [issue.to_dict() for issue in self.issues],
        }


# ---------------------------------------------------------------------------
# ProtectedValue
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProtectedValue:
    """
    Storage form of one sensitive field, handed to the persistence layer.

    Attributes:
        encrypted:   AES-GCM envelope ``iv:ciphertext:tag`` (``""`` for no value).
        masked:      Display form showing only the trailing characters.
        lookup_hash: Keyed HMAC used for exact-match duplicate lookups
                     (``""`` for no value).
    """

    encrypted: str
    masked: str
    lookup_hash: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "encrypted": self.encrypted,
            "masked": self.masked,
            "lookup_hash": self.lookup_hash,
        }
