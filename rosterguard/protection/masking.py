"""
protection/masking.py
---------------------
Display masking for sensitive strings. No key material is involved, so this
is safe to call from unprivileged code paths.
"""

from __future__ import annotations

import re
from typing import Optional

_WHITESPACE_RE = re.compile(r"\s+")


def mask(plaintext: Optional[str], visible_count: int = 4, mask_char: str = "*") -> str:
    """
    Hide all but the last *visible_count* characters of *plaintext*.

    Whitespace is removed first, so ``"2341 2341 2346"`` and
    ``"234123412346"`` mask identically. A value shorter than
    *visible_count* is masked entirely.

    Examples::

        mask("123456789012")   # '********9012'
        mask("abc")            # '***'

    Raises:
        ValueError: If *visible_count* is negative.
    """
    if visible_count < 0:
        raise ValueError("visible_count must not be negative.")
    if not plaintext:
        return ""

    value = _WHITESPACE_RE.sub("", plaintext)
    if len(value) < visible_count:
        return mask_char * len(value)

    hidden = len(value) - visible_count
    return mask_char * hidden + value[hidden:]
