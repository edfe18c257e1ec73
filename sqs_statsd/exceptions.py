"""Exceptions for the SQS to StatsD relay."""

from __future__ import annotations

__all__ = [
    "CatalogError",
    "CloudWatchError",
    "ConfigurationError",
    "RelayError",
    "StartupError",
]


class RelayError(Exception):
    """Base class for relay exceptions."""


class ConfigurationError(RelayError):
    """Options are missing or invalid. Raised before any client is built."""


class StartupError(RelayError):
    """A collaborator could not be set up; the process cannot continue."""


class CatalogError(StartupError):
    """Listing the available metric series failed.

    There is no partial catalog and no retry: the relay never starts ticking.
    """


class CloudWatchError(RelayError):
    """A CloudWatch API call failed.

    Attributes
    ----------
    operation
        Name of the API operation, e.g. ``GetMetricStatistics``.
    code
        AWS error code when the service answered, ``None`` for transport
        failures.
    """

    def __init__(
        self, message: str, *, operation: str, code: str | None = None
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.code = code
