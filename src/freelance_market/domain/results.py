"""Result type returned by the payment and deposit operations.

A domain operation either succeeds with ``Ok(value)`` or is rejected with
``Failure(kind, detail)``. Rejections are ordinary values: they are never
retried and never raised inside the domain layer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Why a payment or deposit was rejected."""

    INVALID_PARTY = "invalid_party"
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    DEPOSIT_LIMIT_EXCEEDED = "deposit_limit_exceeded"
    JOB_NOT_FOUND = "job_not_found"

    @property
    def summary(self) -> str:
        """Fixed user-facing summary for this kind."""
        return ERROR_SUMMARIES[self]


ERROR_SUMMARIES = {
    ErrorKind.INVALID_PARTY: "The profiles involved are not valid for this operation",
    ErrorKind.INVALID_AMOUNT: "The amount is not valid for this operation",
    ErrorKind.INSUFFICIENT_FUNDS: "Your balance is not enough for paying this job",
    ErrorKind.DEPOSIT_LIMIT_EXCEEDED: "It is not possible to deposit this amount on this profile balance",
    ErrorKind.JOB_NOT_FOUND: "It is not possible to pay for this job",
}


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the operation's value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Rejected outcome: a kind plus an optional occurrence-specific detail."""

    kind: ErrorKind
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def summary(self) -> str:
        return self.kind.summary

    def to_dict(self) -> dict:
        """Render as the ``{error, message}`` pair used in HTTP responses."""
        return {"error": self.summary, "message": self.detail}


Result = Union[Ok[T], Failure]


def ok(value: Any = None) -> Ok:
    return Ok(value)


def fail(kind: ErrorKind, detail: Optional[str] = None) -> Failure:
    return Failure(kind=kind, detail=detail)
