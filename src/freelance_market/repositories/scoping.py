"""Profile-scoped filters for contracts and jobs.

Every query a caller makes goes through these helpers so that a profile only
ever sees contracts it is a party to.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import and_, false, func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from ..core.enums import ContractStatus, ProfileType
from ..db.models import Contract, Job, Profile


def contract_owner_filter(profile: Optional[Profile]) -> ColumnElement:
    """
    Filter selecting contracts the profile is a party to.

    Clients match on ``client_id``, contractors on ``contractor_id``. Any other
    profile (or none) gets a filter that matches nothing, so callers receive
    zero rows instead of an error.
    """
    profile_type = getattr(profile, "type", None)
    if profile_type == ProfileType.CLIENT:
        return Contract.client_id == profile.id
    if profile_type == ProfileType.CONTRACTOR:
        return Contract.contractor_id == profile.id
    return false()


def active_contract_filter(profile: Optional[Profile]) -> ColumnElement:
    """Owner filter restricted to in-progress contracts."""
    return and_(
        contract_owner_filter(profile), Contract.status == ContractStatus.IN_PROGRESS
    )


def unpaid_jobs_statement(profile: Optional[Profile]):
    """SELECT of the profile's unpaid jobs on in-progress contracts."""
    return (
        select(Job)
        .join(Job.contract)
        .where(active_contract_filter(profile), Job.paid.is_(False))
        .order_by(Job.id)
    )


def total_unpaid(session: Session, profile: Optional[Profile]) -> Decimal:
    """Sum of the profile's unpaid job prices on in-progress contracts, 0 if none."""
    total = session.execute(
        select(func.coalesce(func.sum(Job.price), 0))
        .select_from(Job)
        .join(Job.contract)
        .where(active_contract_filter(profile), Job.paid.is_(False))
    ).scalar()
    # SQLite sums NUMERIC columns as floats
    return Decimal(str(total or 0)).quantize(Decimal("0.01"))
