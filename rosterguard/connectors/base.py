"""
connectors/base.py
------------------
Abstract base class that every roster source connector must implement.
"""

from abc import ABC, abstractmethod

import pandas as pd


class BaseConnector(ABC):
    """
    Abstract interface for all rosterguard roster sources.

    Subclasses must implement :meth:`connect` and :meth:`fetch`.  The
    recommended usage pattern is::

        connector = SomeConnector(...)
        connector.connect()
        roster = connector.fetch()
    """

    @abstractmethod
    def connect(self) -> None:
        """
        Validate that the roster source is reachable.

        Should raise a meaningful exception (e.g. ``FileNotFoundError``) if
        it is not.
        """

    @abstractmethod
    def fetch(self) -> pd.DataFrame:
        """
        Retrieve the roster as a DataFrame, one row per member.

        Raises:
            RuntimeError: If :meth:`connect` has not been called first.
        """

    def connect_and_fetch(self) -> pd.DataFrame:
        """Convenience method: connect then immediately fetch."""
        self.connect()
        return self.fetch()
