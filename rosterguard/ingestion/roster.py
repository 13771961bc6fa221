"""
ingestion/roster.py
-------------------
Pre-registration screening and protection of a team roster.

Screening applies, per member, the checks the registration handler needs
before anything is stored:

1. the identity number passes :func:`validate_identity_number`;
2. no two members of the roster share an identity number;
3. the identity number is not already registered.

The third check compares keyed lookup hashes, never ciphertexts: the AES-GCM
envelope is randomized, so re-encrypting a candidate would almost never
match the stored record. Fetching the stored hashes is the persistence
layer's job; they are passed in here.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set

import pandas as pd

from rosterguard.core.config import GuardConfig, DEFAULT_CONFIG
from rosterguard.core.result_schema import MemberIssue, RosterScreeningResult
from rosterguard.identity.validator import validate_identity_number
from rosterguard.ingestion.normalizer import RosterSchemaError, normalize_roster
from rosterguard.protection.cipher import PIICipher

logger = logging.getLogger(__name__)


class RosterScreener:
    """
    Screens and protects roster DataFrames.

    Args:
        cipher: The process-wide :class:`~rosterguard.protection.cipher.PIICipher`.
        config: A :class:`~rosterguard.core.config.GuardConfig`; uses
                :data:`~rosterguard.core.config.DEFAULT_CONFIG` if omitted.
    """

    def __init__(self, cipher: PIICipher, config: Optional[GuardConfig] = None) -> None:
        self.cipher = cipher
        self.config = config or DEFAULT_CONFIG

    @property
    def sensitive_columns(self) -> List[str]:
        return [self.config.id_column, self.config.mobile_column]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def screen(
        self,
        roster: pd.DataFrame,
        existing_lookup_hashes: Optional[Iterable[str]] = None,
    ) -> RosterScreeningResult:
        """
        Check every member of *roster* and collect all issues.

        Args:
            roster:                 One row per member, in submission order.
            existing_lookup_hashes: Lookup hashes of identity numbers already
                                    registered.

        Returns:
            A :class:`RosterScreeningResult`; ``passed`` is ``True`` only if no
            member has an issue.

        Raises:
            RosterSchemaError: If the identity number column is missing or
                               a sensitive column appears more than once.
        """
        df = self._prepare(roster)
        registered: Set[str] = set(existing_lookup_hashes or ())
        seen: Set[str] = set()
        issues: List[MemberIssue] = []

        for member, number in enumerate(df[self.config.id_column], start=1):
            verdict = validate_identity_number(number)
            if not verdict.valid:
                issues.append(MemberIssue(member, "invalid", f"Member {member}: {verdict.reason}"))
                continue

            if number in seen:
                issues.append(MemberIssue(
                    member, "duplicate", f"Duplicate identity number at member {member}",
                ))
                continue
            seen.add(number)

            if registered and self.cipher.lookup_hash(number) in registered:
                issues.append(MemberIssue(
                    member, "registered", f"Identity number of member {member} already registered",
                ))

        result = RosterScreeningResult(members_count=len(df), issues=issues)
        logger.debug(
            "Screened roster of %d member(s): %d issue(s).",
            result.members_count, len(result.issues),
        )
        return result

    def protect(self, roster: pd.DataFrame) -> pd.DataFrame:
        """
        Replace sensitive columns with their storage forms.

        Each sensitive column ``<col>`` present in the roster is replaced by
        ``<col>_encrypted``, ``<col>_masked`` and ``<col>_lookup``; the
        plaintext column is dropped. Other columns pass through unchanged.

        Raises:
            RosterSchemaError: If the identity number column is missing or
                               a sensitive column appears more than once.
        """
        df = self._prepare(roster)
        visible = self.config.visible_count
        mask_char = self.config.mask_char

        for col in self.sensitive_columns:
            if col not in df.columns:
                continue
            protected = [self.cipher.protect(v, visible, mask_char) for v in df[col]]
            position = df.columns.get_loc(col)
            df = df.drop(columns=[col])
            df.insert(position, f"{col}_lookup", [p.lookup_hash for p in protected])
            df.insert(position, f"{col}_masked", [p.masked for p in protected])
            df.insert(position, f"{col}_encrypted", [p.encrypted for p in protected])

        return df

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _prepare(self, roster: pd.DataFrame) -> pd.DataFrame:
        if not isinstance(roster, pd.DataFrame):
            raise TypeError(
                f"Expected a pandas DataFrame, got {type(roster).__name__!r}."
            )
        df = normalize_roster(roster, self.sensitive_columns)
        if self.config.id_column not in df.columns:
            raise RosterSchemaError(missing=[self.config.id_column])
        return df.reset_index(drop=True)
