"""
Tagged results returned by a ResourceLookup.

A lookup never signals "not found" or "cannot connect" by raising. It
returns a LookupResult that either carries the resource or one of three
failure classes, so each field check can map the outcome to a message
without inspecting exception types.

Failure classes:
    COMMUNICATION: transport/I/O failure talking to Azure (transient)
    NOT_FOUND:     the resource is absent or the caller may not see it
    MALFORMED:     Azure rejected the arguments; for marketplace images this
                   is also how insufficient permission surfaces, the two
                   causes cannot be told apart
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class LookupFailureClass(Enum):
    """Classification of a failed resource lookup."""
    COMMUNICATION = "communication"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class LookupResult:
    """
    Outcome of a single ResourceLookup call.

    Exactly one of `resource` (on success) or `failure` (on failure) is
    meaningful. Use the constructors instead of building instances directly.

    Attributes:
        resource: The resource returned by Azure, None on failure
        failure: Failure classification, None on success
        reason: Human-readable failure detail for logs
    """
    resource: Any = None
    failure: Optional[LookupFailureClass] = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def found(cls, resource: Any) -> 'LookupResult':
        return cls(resource=resource)

    @classmethod
    def communication_error(cls, reason: str = "") -> 'LookupResult':
        return cls(failure=LookupFailureClass.COMMUNICATION, reason=reason)

    @classmethod
    def not_found(cls, reason: str = "") -> 'LookupResult':
        return cls(failure=LookupFailureClass.NOT_FOUND, reason=reason)

    @classmethod
    def malformed_argument(cls, reason: str = "") -> 'LookupResult':
        return cls(failure=LookupFailureClass.MALFORMED, reason=reason)
