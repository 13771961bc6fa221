"""connectors sub-package — roster sources."""

from rosterguard.connectors.base import BaseConnector
from rosterguard.connectors.csv import CSVRosterConnector

__all__ = ["BaseConnector", "CSVRosterConnector"]
