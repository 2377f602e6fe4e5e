"""SQLAlchemy concrete implementations of repository interfaces."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Dict, Any

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from .interfaces import (
    ProfileRepository,
    ContractRepository,
    JobRepository,
    ReportRepository,
)
from .scoping import contract_owner_filter, total_unpaid, unpaid_jobs_statement
from ..core.enums import ContractStatus
from ..db.models import Profile, Contract, Job

CENT = Decimal("0.01")


def _money(value) -> Decimal:
    return Decimal(str(value or 0)).quantize(CENT)


def _payment_window(statement, start: Optional[datetime], end: Optional[datetime]):
    """Restrict a paid-jobs statement to ``start <= payment_date < end``."""
    if start is not None:
        statement = statement.where(Job.payment_date >= start)
    if end is not None:
        statement = statement.where(Job.payment_date < end)
    return statement


class BaseSQLAlchemyRepository:
    """Base SQLAlchemy repository implementation."""

    def __init__(self, session: Session):
        self._session = session

    async def save(self, entity) -> None:
        """Save an entity to the repository."""
        self._session.add(entity)

    async def commit(self) -> None:
        """Commit the current transaction."""
        self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        self._session.rollback()


class SQLAlchemyProfileRepository(BaseSQLAlchemyRepository, ProfileRepository):
    """SQLAlchemy implementation of ProfileRepository."""

    async def get_by_id(self, profile_id: int) -> Optional[Profile]:
        """Get a profile by ID."""
        return self._session.get(Profile, profile_id)

    async def list_all(self) -> List[Profile]:
        """Get all profiles."""
        return list(self._session.scalars(select(Profile).order_by(Profile.id)))


class SQLAlchemyContractRepository(BaseSQLAlchemyRepository, ContractRepository):
    """SQLAlchemy implementation of ContractRepository."""

    async def get_by_id_for_profile(
        self, profile: Profile, contract_id: int
    ) -> Optional[Contract]:
        """Get a contract by ID, only if the profile is a party to it."""
        return self._session.scalars(
            select(Contract).where(
                Contract.id == contract_id, contract_owner_filter(profile)
            )
        ).first()

    async def list_for_profile(self, profile: Profile) -> List[Contract]:
        """Get all contracts the profile is a party to."""
        return list(
            self._session.scalars(
                select(Contract)
                .where(contract_owner_filter(profile))
                .order_by(Contract.id)
            )
        )

    async def list_non_terminated_for_profile(self, profile: Profile) -> List[Contract]:
        """Get the profile's contracts that are not terminated."""
        return list(
            self._session.scalars(
                select(Contract)
                .where(
                    contract_owner_filter(profile),
                    Contract.status != ContractStatus.TERMINATED,
                )
                .order_by(Contract.id)
            )
        )


class SQLAlchemyJobRepository(BaseSQLAlchemyRepository, JobRepository):
    """SQLAlchemy implementation of JobRepository."""

    async def get_by_id(self, job_id: int) -> Optional[Job]:
        """Get a job by ID."""
        return self._session.get(Job, job_id)

    async def list_unpaid_for_profile(self, profile: Profile) -> List[Job]:
        """Get the profile's unpaid jobs on in-progress contracts."""
        return list(self._session.scalars(unpaid_jobs_statement(profile)))

    async def total_unpaid_for_profile(self, profile: Profile) -> Decimal:
        """Sum of the profile's unpaid job prices on in-progress contracts."""
        return total_unpaid(self._session, profile)


class SQLAlchemyReportRepository(ReportRepository):
    """SQLAlchemy implementation of ReportRepository."""

    def __init__(self, session: Session):
        self._session = session

    async def best_profession(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Optional[str]:
        """Contractor profession that earned the most in ``[start, end)``."""
        earned = func.sum(Job.price)
        statement = (
            select(Profile.profession, earned.label("earned"))
            .select_from(Job)
            .join(Contract, Job.contract_id == Contract.id)
            .join(Profile, Contract.contractor_id == Profile.id)
            .where(Job.paid.is_(True))
            .group_by(Profile.profession)
            .order_by(desc(earned), Profile.profession)
            .limit(1)
        )
        row = self._session.execute(_payment_window(statement, start, end)).first()
        return row.profession if row else None

    async def best_clients(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = 2,
    ) -> List[Dict[str, Any]]:
        """Clients who paid the most in ``[start, end)``, best first."""
        paid = func.sum(Job.price)
        statement = (
            select(Profile, paid.label("paid"))
            .select_from(Job)
            .join(Contract, Job.contract_id == Contract.id)
            .join(Profile, Contract.client_id == Profile.id)
            .where(Job.paid.is_(True))
            .group_by(Profile.id)
            .order_by(desc(paid), Profile.id)
            .limit(limit)
        )
        rows = self._session.execute(_payment_window(statement, start, end)).all()
        return [
            {
                "id": client.id,
                "full_name": client.full_name,
                "paid": _money(paid_total),
            }
            for client, paid_total in rows
        ]
