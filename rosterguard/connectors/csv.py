"""
connectors/csv.py
-----------------
CSV roster connector — reads a local roster file into a pandas DataFrame.

Every column is read as a string: identity and mobile numbers must keep
their exact digits (no float coercion, no dropped leading zeros) and empty
cells become ``""`` rather than ``NaN``.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import pandas as pd

from rosterguard.connectors.base import BaseConnector

logger = logging.getLogger(__name__)


class CSVRosterConnector(BaseConnector):
    """
    Loads a roster CSV from the local filesystem.

    Args:
        filepath:    Absolute or relative path to the CSV file.
        encoding:    File encoding (default: ``'utf-8-sig'`` handles BOM).
        delimiter:   Column delimiter (default: ``','``).
        sample_size: Optional maximum number of members to read.

    Example::

        connector = CSVRosterConnector("team.csv")
        connector.connect()
        roster = connector.fetch()
    """

    def __init__(
        self,
        filepath: str,
        encoding: str = "utf-8-sig",
        delimiter: str = ",",
        sample_size: Optional[int] = None,
    ) -> None:
        self.filepath = filepath
        self.encoding = encoding
        self.delimiter = delimiter
        self.sample_size = sample_size
        self._connected: bool = False

    # ------------------------------------------------------------------
    # BaseConnector interface
    # ------------------------------------------------------------------

    def connect(self) -> None:
        """
        Validate that the CSV file exists and is readable.

        Raises:
            FileNotFoundError: If the file does not exist at the given path.
            PermissionError:   If the process lacks read permission.
            ValueError:        If the path points to a directory.
        """
        if not os.path.exists(self.filepath):
            raise FileNotFoundError(f"CSV file not found: {self.filepath!r}")
        if os.path.isdir(self.filepath):
            raise ValueError(
                f"Expected a file path, got a directory: {self.filepath!r}"
            )
        if not os.access(self.filepath, os.R_OK):
            raise PermissionError(f"No read permission for file: {self.filepath!r}")
        self._connected = True

    def fetch(self) -> pd.DataFrame:
        """
        Read the roster file.

        Falls back to latin-1 when the file is not valid in the configured
        encoding.

        Raises:
            RuntimeError: If :meth:`connect` was not called first.
            pandas.errors.ParserError: If the file cannot be parsed as CSV.
        """
        if not self._connected:
            raise RuntimeError("Call connect() before fetch().")

        try:
            return self._read(self.encoding)
        except UnicodeDecodeError:
            logger.warning(
                "%s decode failed for %r; retrying with latin-1.",
                self.encoding, self.filepath,
            )
            return self._read("latin-1")

    def _read(self, encoding: str) -> pd.DataFrame:
        return pd.read_csv(
            self.filepath,
            encoding=encoding,
            sep=self.delimiter,
            nrows=self.sample_size,
            dtype=str,
            keep_default_na=False,
        )

    def __repr__(self) -> str:
        return f"CSVRosterConnector(filepath={self.filepath!r}, connected={self._connected})"
