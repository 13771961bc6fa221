"""
ingestion/normalizer.py
-----------------------
Column-name and value normalisation for raw roster DataFrames.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

import pandas as pd


class RosterSchemaError(ValueError):
    """Raised when a roster's columns cannot be screened as submitted."""

    def __init__(
        self,
        missing: Optional[List[str]] = None,
        duplicated: Optional[List[str]] = None,
    ) -> None:
        self.missing = missing or []
        self.duplicated = duplicated or []
        problems = []
        if self.missing:
            problems.append(f"missing required column(s): {', '.join(self.missing)}")
        if self.duplicated:
            problems.append(
                f"more than one column normalises to: {', '.join(self.duplicated)}"
            )
        super().__init__(f"Roster is {'; '.join(problems)}")


def normalize_column_names(df: pd.DataFrame) -> pd.DataFrame:
    """
    Standardize DataFrame column names:

    * Strip leading/trailing whitespace.
    * Convert to lowercase.
    * Replace spaces and special characters with underscores.
    * Collapse consecutive underscores.

    ``"ID Number"`` and ``"id-number"`` both become ``"id_number"``.

    Args:
        df: Input DataFrame.

    Returns:
        New DataFrame with normalized column names (data unchanged).
    """
    rename_map = {}
    for position, col in enumerate(df.columns):
        new_col = str(col).strip()
        new_col = new_col.lower()
        new_col = re.sub(r"[\s\-/\\\.]+", "_", new_col)
        new_col = re.sub(r"[^a-z0-9_]", "", new_col)
        new_col = re.sub(r"_+", "_", new_col).strip("_")
        rename_map[col] = new_col or f"col_{position}"

    return df.rename(columns=rename_map)


def normalize_roster(df: pd.DataFrame, sensitive_columns: Iterable[str]) -> pd.DataFrame:
    """
    Normalise a roster before screening.

    Column names are normalised, and every sensitive column present is
    converted to strings with all whitespace removed (``NaN`` → ``""``), so
    the same number typed as ``"2341 2341 2346"`` or ``"234123412346"``
    validates, hashes, and encrypts identically.

    Args:
        df:                Raw roster, one row per member.
        sensitive_columns: Normalised names of identity/mobile columns.

    Returns:
        A new DataFrame; the input is not modified.

    Raises:
        RosterSchemaError: If two headers (e.g. ``"ID Number"`` and
                           ``"id-number"``) normalise to the same sensitive
                           column name.
    """
    sensitive_columns = list(sensitive_columns)
    out = normalize_column_names(df.copy())

    repeated = set(out.columns[out.columns.duplicated()])
    clashes = [col for col in sensitive_columns if col in repeated]
    if clashes:
        raise RosterSchemaError(duplicated=clashes)

    for col in sensitive_columns:
        if col in out.columns:
            out[col] = (
                out[col]
                .fillna("")
                .astype(str)
                .str.replace(r"\s+", "", regex=True)
            )
    return out
