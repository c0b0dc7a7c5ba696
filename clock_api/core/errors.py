"""Application-level exception types.

Domain errors carry a stable machine-readable code so the global exception
handlers can render them consistently.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    code: str
    message: str
    hint: str
    parameter: str
    actual_value: Any
    backend: str
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ConfigurationAppError(AppError):
    """Raised when the service is called with an invalid configuration.

    Used for non-positive rate limit parameters: these are programming or
    deployment mistakes, not client faults.
    """


class RateLimitBackendError(AppError):
    """Raised by counter stores when the backing service misbehaves.

    The rate limiter catches this (and any other store failure) and admits
    the request.
    """
