"""Error taxonomy for log data-source adapters."""

from typing import Any


class LogSourceError(Exception):
    """Base class for every error raised by a logs provider."""


class QueryValidationError(LogSourceError, ValueError):
    """Raised when a query model cannot be translated into a backend query."""


class EmptyQueryError(QueryValidationError):
    def __init__(self) -> None:
        super().__init__("raw query payload is empty")


class _UndefinedValueError(QueryValidationError):
    label = "value"

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"undefined {self.label}, type: {value!r}")


class UndefinedQueryTypeError(_UndefinedValueError):
    label = "QueryType"


class UndefinedWildcardModeError(_UndefinedValueError):
    label = "QueryWildcard"


class UndefinedFilterConditionError(_UndefinedValueError):
    label = "QueryFilterCondition"


class InvalidTimeRangeError(QueryValidationError):
    def __init__(self, start_at: str, end_at: str) -> None:
        self.start_at = start_at
        self.end_at = end_at
        super().__init__(f"start_at {start_at} is later than end_at {end_at}")


class TransportError(LogSourceError):
    """Raised when the backend cannot be reached (DNS, connect, timeout, TLS)."""


class BackendUnhealthyError(LogSourceError):
    """Raised by the health probe when the backend answers with a non-200 status."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"health check status code is not 200, got: {status_code}")


class BackendQueryError(LogSourceError):
    """Raised when the backend rejects a search request."""

    def __init__(self, status_code: int, reason: str) -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"search failed with status {status_code}: {reason}")


class MalformedResultError(LogSourceError, ValueError):
    """Raised when a backend response cannot be decoded into documents."""


class ProviderConfigurationError(LogSourceError, ValueError):
    """Raised when a data source cannot be turned into a provider."""


class UnsupportedProviderError(ProviderConfigurationError):
    """Raised when no provider is known for a data-source kind."""
