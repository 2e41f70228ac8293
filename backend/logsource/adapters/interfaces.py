"""Adapter interface contracts."""

from abc import ABC, abstractmethod
from typing import Any

from logsource.domain.models import LogQueryOptions, Logs


class LogsProvider(ABC):
    """Query a log backend through one normalized contract."""

    @abstractmethod
    def query(self, options: LogQueryOptions, *, timeout: float | None = None) -> tuple[list[Logs], int]:
        """Run a log query and return the normalized batches with the hit count."""
        raise NotImplementedError

    @abstractmethod
    def check(self) -> bool:
        """Probe backend reachability."""
        raise NotImplementedError

    @abstractmethod
    def get_external_labels(self) -> dict[str, Any]:
        """Static labels configured for the data source."""
        raise NotImplementedError

    def close(self) -> None:
        """Release the backend client."""

    def __enter__(self) -> "LogsProvider":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
