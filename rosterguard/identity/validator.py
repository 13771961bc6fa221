"""
identity/validator.py
---------------------
Structural and checksum validation of 12-digit identity (Aadhaar) numbers.

Validation never raises for bad input: every rejection is reported as a
:class:`~rosterguard.core.result_schema.ValidationResult` carrying a reason
that the registration handler shows to the user verbatim. The candidate
value is never logged.
"""

from __future__ import annotations

import re
from typing import Any, FrozenSet

from rosterguard.core.result_schema import ValidationResult
from rosterguard.identity.verhoeff import verhoeff_validate

IDENTITY_NUMBER_LENGTH = 12

_DIGITS_RE = re.compile(r"[0-9]+")
_WHITESPACE_RE = re.compile(r"\s+")

# Placeholder / sequential numbers commonly typed into forms.
DENY_LIST: FrozenSet[str] = frozenset({
    "123456789012",
    "012345678901",
    "098765432109",
    "111111111111",
    "000000000000",
})

# Digits UIDAI never issues in the leading position.
_FORBIDDEN_LEADING = frozenset("01")

REASON_REQUIRED = "Identity number is required"
REASON_LENGTH = "Identity number must be exactly 12 digits"
REASON_NOT_DIGITS = "Identity number must contain only digits"
REASON_ALL_SAME = "Invalid identity number pattern (all same digits)"
REASON_DENY_LIST = "Invalid identity number pattern (sequential or test number)"
REASON_LEADING_DIGIT = "Invalid identity number format (cannot start with 0 or 1)"
REASON_CHECKSUM = "Invalid identity number checksum (Verhoeff algorithm failed)"
REASON_VALID = "Valid identity number"


def normalize_identity_number(raw: Any) -> str:
    """Return *raw* as a string with all whitespace removed (``None`` → ``""``)."""
    if raw is None:
        return ""
    return _WHITESPACE_RE.sub("", str(raw))


def validate_identity_number(raw: Any) -> ValidationResult:
    """
    Validate a candidate identity number.

    Checks run in a fixed order and the first failure wins:

    1. required
    2. exactly 12 characters
    3. digits only
    4. not all the same digit
    5. not on :data:`DENY_LIST`
    6. does not start with ``0`` or ``1``
    7. Verhoeff checksum

    Args:
        raw: Untrusted user input. Whitespace anywhere is ignored, so
             ``"2341 2341 2346"`` is accepted.

    Returns:
        A :class:`ValidationResult`; ``valid`` is ``True`` only if every
        check passes.
    """
    number = normalize_identity_number(raw)

    if not number:
        return ValidationResult(False, REASON_REQUIRED)
    if len(number) != IDENTITY_NUMBER_LENGTH:
        return ValidationResult(False, REASON_LENGTH)
    if not _DIGITS_RE.fullmatch(number):
        return ValidationResult(False, REASON_NOT_DIGITS)
    if len(set(number)) == 1:
        return ValidationResult(False, REASON_ALL_SAME)
    if number in DENY_LIST:
        return ValidationResult(False, REASON_DENY_LIST)
    if number[0] in _FORBIDDEN_LEADING:
        return ValidationResult(False, REASON_LEADING_DIGIT)
    if not verhoeff_validate(number):
        return ValidationResult(False, REASON_CHECKSUM)

    return ValidationResult(True, REASON_VALID)


def format_identity_number(raw: Any) -> str:
    """
    Group a 12-digit identity number for display as ``XXXX XXXX XXXX``.

    Values of any other length are returned normalised but ungrouped.
    """
    number = normalize_identity_number(raw)
    if len(number) != IDENTITY_NUMBER_LENGTH:
        return number
    return " ".join(number[i:i + 4] for i in range(0, IDENTITY_NUMBER_LENGTH, 4))
