"""
Monitoring API error taxonomy.

Failures originate only in base data loading and lookups; the simulator
itself is total over well-formed snapshots.
"""

from typing import Iterable, List


class MonitoringError(Exception):
    """Base class for errors surfaced by the monitoring backend."""
    pass


class NotFoundError(MonitoringError):
    """Raised when a KPI name or base station id is unknown.

    Always carries the valid keys so the client can recover.
    """

    def __init__(self, resource: str, key: str, available: Iterable[str], available_key: str):
        self.resource = resource
        self.key = key
        self.available: List[str] = list(available)
        self.available_key = available_key
        super().__init__(f"{resource} '{key}' not found")

    @property
    def error(self) -> str:
        return f"{self.resource} not found"


class BadFixtureError(MonitoringError):
    """Raised when the base data fixture is missing, unreadable or malformed."""
    pass
