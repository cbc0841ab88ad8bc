"""
Request Outcomes.

Every ShortenerClient operation returns exactly one of:

    Success(value)      - the service accepted the request
    Rejected(reason)    - the service answered but declined the request
    Unreachable(error)  - the exchange could not be completed at all

Callers match on the result exhaustively. A rejection means "skip this item",
an unreachable service means "stop the batch".
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class RejectionReason(StrEnum):
    """Reasons the service gives for declining a request."""

    # Answered with 414. The service uses it for links too short to shorten.
    TOO_SHORT = "too_short"
    STRID_NOT_UNIQUE = "strid_not_unique"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Success(Generic[T]):
    """The service accepted the request."""

    value: T


@dataclass(frozen=True)
class Rejected:
    """The service answered but declined the request."""

    reason: RejectionReason


@dataclass(frozen=True)
class Unreachable:
    """The exchange with the service could not be completed."""

    error: str


Outcome = Success[T] | Rejected | Unreachable
