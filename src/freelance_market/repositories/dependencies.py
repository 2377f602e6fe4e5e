"""Dependency injection for repository layer."""

from fastapi import Depends
from sqlalchemy.orm import Session

from ..db.database import get_db
from .sqlalchemy_impl import (
    SQLAlchemyProfileRepository,
    SQLAlchemyContractRepository,
    SQLAlchemyJobRepository,
    SQLAlchemyReportRepository,
)


def get_profile_repository(db: Session = Depends(get_db)) -> SQLAlchemyProfileRepository:
    """Get Profile repository instance."""
    return SQLAlchemyProfileRepository(db)


def get_contract_repository(db: Session = Depends(get_db)) -> SQLAlchemyContractRepository:
    """Get Contract repository instance."""
    return SQLAlchemyContractRepository(db)


def get_job_repository(db: Session = Depends(get_db)) -> SQLAlchemyJobRepository:
    """Get Job repository instance."""
    return SQLAlchemyJobRepository(db)


def get_report_repository(db: Session = Depends(get_db)) -> SQLAlchemyReportRepository:
    """Get Report repository instance."""
    return SQLAlchemyReportRepository(db)
