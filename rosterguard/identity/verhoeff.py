"""
identity/verhoeff.py
--------------------
Verhoeff checksum over decimal digit strings.

The scheme detects every single-digit error and every adjacent transposition.
UIDAI uses it for the last digit of the 12-digit Aadhaar number.
"""

from typing import Tuple

# Multiplication table of the dihedral group D5.
D: Tuple[Tuple[int, ...], ...] = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    (1, 2, 3, 4, 0, 6, 7, 8, 9, 5),
    (2, 3, 4, 0, 1, 7, 8, 9, 5, 6),
    (3, 4, 0, 1, 2, 8, 9, 5, 6, 7),
    (4, 0, 1, 2, 3, 9, 5, 6, 7, 8),
    (5, 9, 8, 7, 6, 0, 4, 3, 2, 1),
    (6, 5, 9, 8, 7, 1, 0, 4, 3, 2),
    (7, 6, 5, 9, 8, 2, 1, 0, 4, 3),
    (8, 7, 6, 5, 9, 3, 2, 1, 0, 4),
    (9, 8, 7, 6, 5, 4, 3, 2, 1, 0),
)

# Position-dependent permutation table.
P: Tuple[Tuple[int, ...], ...] = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    (1, 5, 7, 6, 2, 8, 3, 0, 9, 4),
    (5, 8, 0, 3, 7, 9, 6, 1, 4, 2),
    (8, 9, 1, 6, 0, 4, 3, 5, 2, 7),
    (9, 4, 5, 3, 1, 2, 6, 8, 7, 0),
    (4, 2, 8, 6, 5, 7, 3, 9, 0, 1),
    (2, 7, 9, 3, 8, 0, 6, 4, 1, 5),
    (7, 0, 4, 6, 9, 1, 3, 2, 5, 8),
)

# Inverse of each element under D.
INV: Tuple[int, ...] = (0, 4, 3, 2, 1, 5, 6, 7, 8, 9)


def _reversed_digits(number: str):
    if not number or not number.isascii() or not number.isdigit():
        raise ValueError("Verhoeff input must be a non-empty string of ASCII digits.")
    return (int(ch) for ch in reversed(number))


def verhoeff_validate(number: str) -> bool:
    """
    Return ``True`` if *number* (check digit last) satisfies the checksum.

    Raises:
        ValueError: If *number* is empty or contains anything but digits.
    """
    c = 0
    for i, v in enumerate(_reversed_digits(number)):
        c = D[c][P[i % 8][v]]
    return c == 0


def verhoeff_generate(body: str) -> str:
    """
    Compute the check digit to append to *body*.

    The digit is ``INV[c]``, not the ``(10 - c) % 10`` of the previous
    registration backend, whose digits mostly failed :func:`verhoeff_validate`.

    Args:
        body: Digits without the check digit (11 digits for an Aadhaar body).

    Returns:
        The check digit as a one-character string.

    Raises:
        ValueError: If *body* is empty or contains anything but digits.
    """
    c = 0
    for i, v in enumerate(_reversed_digits(body)):
        c = D[c][P[(i + 1) % 8][v]]
    return str(INV[c])
