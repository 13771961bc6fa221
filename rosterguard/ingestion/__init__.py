"""ingestion sub-package — roster normalisation, screening, and protection."""

from rosterguard.ingestion.normalizer import (
    RosterSchemaError,
    normalize_column_names,
    normalize_roster,
)
from rosterguard.ingestion.roster import RosterScreener

__all__ = [
    "normalize_column_names",
    "normalize_roster",
    "RosterScreener",
    "RosterSchemaError",
]
