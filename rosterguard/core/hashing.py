"""
core/hashing.py
---------------
One-way digest utilities for sensitive string values.

* :func:`hash_value`   — unkeyed SHA-256, for irreversible comparison.
* :func:`keyed_digest` — HMAC-SHA256 under a secret key, used for the
  deterministic lookup hash stored next to an encrypted field.
"""

import hashlib
import hmac


def hash_value(value: str) -> str:
    """
    Compute a SHA-256 digest of an arbitrary string value.

    Args:
        value: String to hash.

    Returns:
        A 64-character hexadecimal SHA-256 digest string.
    """
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def keyed_digest(key: bytes, value: str) -> str:
    """
    Compute an HMAC-SHA256 digest of *value* under *key*.

    Unlike :func:`hash_value`, the digest cannot be brute-forced from the
    small 12-digit identity number space without the key.

    Args:
        key:   Secret HMAC key.
        value: String to digest.

    Returns:
        A 64-character hexadecimal digest string.
    """
    return hmac.new(key, value.encode("utf-8"), hashlib.sha256).hexdigest()
