"""
Pure validation rules for money movement between profiles.

These functions inspect already-loaded values and decide whether a transfer
or a deposit may proceed. They never touch the database; executing an
accepted operation is the ledger's job.
"""

from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from numbers import Number
from typing import Optional, Protocol

from ..core.enums import ProfileType
from .results import ErrorKind, Result, fail, ok

# A client may deposit at most this share of what they still owe
DEPOSIT_LIMIT_RATIO = Decimal("0.25")

CENT = Decimal("0.01")


class PartyLike(Protocol):
    """Anything with the profile attributes the rules read."""

    id: int
    type: ProfileType
    balance: Decimal


@dataclass(frozen=True)
class TransferDecision:
    """Accepted transfer: who pays whom, and how much."""

    client_id: int
    contractor_id: int
    amount: Decimal


@dataclass(frozen=True)
class DepositDecision:
    """Accepted deposit and the limit it was checked against."""

    profile_id: int
    amount: Decimal
    limit: Decimal


def parse_amount(amount) -> Result[Decimal]:
    """
    Normalize a caller-supplied amount to a positive two-place Decimal.

    Booleans, non-numbers, NaN, infinities, zero, negatives and values with
    sub-cent precision are rejected with INVALID_AMOUNT.
    """
    if isinstance(amount, bool) or not isinstance(amount, (Number, str)):
        return fail(ErrorKind.INVALID_AMOUNT, "The amount must be a number")

    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
    except (InvalidOperation, ValueError):
        return fail(ErrorKind.INVALID_AMOUNT, "The amount must be a number")

    if not value.is_finite():
        return fail(ErrorKind.INVALID_AMOUNT, "The amount must be a finite number")
    if value <= 0:
        return fail(ErrorKind.INVALID_AMOUNT, "The amount must be greater than zero")
    try:
        cents = value.quantize(CENT)
    except InvalidOperation:
        return fail(ErrorKind.INVALID_AMOUNT, "The amount is too large")
    if value != cents:
        return fail(ErrorKind.INVALID_AMOUNT, "The amount can not have more than two decimal places")

    return ok(cents)


def to_decimal(value) -> Decimal:
    """Money as Decimal; floats go through str so 0.1 stays 0.1."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _has_type(profile: Optional[PartyLike], expected: ProfileType) -> bool:
    return profile is not None and getattr(profile, "type", None) == expected


def evaluate_transfer(
    client: Optional[PartyLike],
    contractor: Optional[PartyLike],
    amount,
) -> Result[TransferDecision]:
    """
    Decide whether ``client`` may pay ``amount`` to ``contractor``.

    Checks, first failure wins:
    1. client is a client profile -> else INVALID_PARTY
    2. contractor is a contractor profile -> else INVALID_PARTY
    3. amount is a positive finite number -> else INVALID_AMOUNT
    4. client balance covers the amount -> else INSUFFICIENT_FUNDS
    5. the two profiles differ -> else INVALID_PARTY
    """
    if not _has_type(client, ProfileType.CLIENT):
        return fail(ErrorKind.INVALID_PARTY, "The paying profile must be a client")
    if not _has_type(contractor, ProfileType.CONTRACTOR):
        return fail(ErrorKind.INVALID_PARTY, "The receiving profile must be a contractor")

    parsed = parse_amount(amount)
    if not parsed.ok:
        return parsed
    value = parsed.value

    balance = to_decimal(client.balance)
    if balance < value:
        return fail(
            ErrorKind.INSUFFICIENT_FUNDS,
            f"Balance {balance:.2f} does not cover {value:.2f}",
        )
    if client.id == contractor.id:
        return fail(ErrorKind.INVALID_PARTY, "A profile can not pay itself")

    return ok(TransferDecision(client_id=client.id, contractor_id=contractor.id, amount=value))


def deposit_limit(total_unpaid) -> Decimal:
    """Largest amount a client owing ``total_unpaid`` may deposit."""
    return (to_decimal(total_unpaid) * DEPOSIT_LIMIT_RATIO).quantize(CENT, rounding=ROUND_DOWN)


def evaluate_deposit(
    profile: Optional[PartyLike],
    amount,
    total_unpaid,
) -> Result[DepositDecision]:
    """
    Decide whether ``amount`` may be deposited on ``profile``.

    ``total_unpaid`` is the sum of the profile's unpaid job prices on
    in-progress contracts; the deposit may not exceed a quarter of it.
    """
    if not _has_type(profile, ProfileType.CLIENT):
        return fail(ErrorKind.INVALID_PARTY, "The client profile is not valid for this operation")

    parsed = parse_amount(amount)
    if not parsed.ok:
        return parsed
    value = parsed.value

    limit = deposit_limit(total_unpaid)
    if value > limit:
        return fail(
            ErrorKind.DEPOSIT_LIMIT_EXCEEDED,
            f"A client can not deposit more than 25% of the sum of the unpaid jobs price "
            f"(limit {limit:.2f})",
        )

    return ok(DepositDecision(profile_id=profile.id, amount=value, limit=limit))
