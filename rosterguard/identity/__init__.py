"""identity sub-package — identity number validation and the Verhoeff checksum."""

from rosterguard.identity.validator import (
    validate_identity_number,
    normalize_identity_number,
    format_identity_number,
    DENY_LIST,
)
from rosterguard.identity.verhoeff import verhoeff_validate, verhoeff_generate

__all__ = [
    "validate_identity_number",
    "normalize_identity_number",
    "format_identity_number",
    "DENY_LIST",
    "verhoeff_validate",
    "verhoeff_generate",
]
