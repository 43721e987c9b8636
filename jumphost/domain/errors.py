"""
Domain Errors

Architectural Intent:
- Typed failures for every stage of the update pipeline
- Domain services raise these; only the CLI decides how the process exits
- Provider-side failures are translated by adapters so no SDK exception
  type leaks into the domain

Design Decisions:
- DuplicatePermissionError subclasses CloudApiError so that callers which do
  not care about idempotency still see a provider failure
- DeadlineExceededError is a NetworkError: from the caller's point of view an
  expired deadline is an unreachable dependency
"""

from typing import Optional


class JumphostError(Exception):
    """Base class for all jumphost errors."""


class ConfigurationError(JumphostError):
    """Required input is missing or configuration is inconsistent."""


class ValidationError(JumphostError):
    """User input is malformed or contradictory."""


class LookupFailedError(JumphostError):
    """A discovery query did not yield exactly the resource we need."""


class NotFoundError(LookupFailedError):
    """No subnet or security group matched the query."""


class AmbiguousMatchError(LookupFailedError):
    """More than one resource matched where exactly one was expected."""


class NetworkError(JumphostError):
    """The IP-echo endpoint was unreachable or returned garbage."""


class DeadlineExceededError(NetworkError):
    """The pipeline did not finish within its deadline."""


class CloudApiError(JumphostError):
    """A cloud provider call failed.

    Attributes:
        code: Provider error code (e.g. "UnauthorizedOperation"), if known
        operation: Provider operation name (e.g. "DescribeSubnets")
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        operation: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.operation = operation


class DuplicatePermissionError(CloudApiError):
    """The ingress rule already exists on the security group."""
