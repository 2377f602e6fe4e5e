"""Sample marketplace data for local development and tests."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import delete
from sqlalchemy.orm import Session

from ..core.enums import ContractStatus, ProfileType
from ..utils.logging_config import get_logger
from .models import Contract, Job, Profile

logger = get_logger('database')

# (id, first_name, last_name, profession, balance, type)
PROFILES = [
    (1, "Harry", "Potter", "Wizard", "1150", ProfileType.CLIENT),
    (2, "Mr", "Robot", "Hacker", "231.11", ProfileType.CLIENT),
    (3, "John", "Snow", "Knows nothing", "451.3", ProfileType.CLIENT),
    (4, "Ash", "Kethcum", "Pokemon master", "1.3", ProfileType.CLIENT),
    (5, "John", "Lenon", "Musician", "64", ProfileType.CONTRACTOR),
    (6, "Linus", "Torvalds", "Programmer", "1214", ProfileType.CONTRACTOR),
    (7, "Alan", "Turing", "Programmer", "22", ProfileType.CONTRACTOR),
    (8, "Aragorn", "II Elessar Telcontarvalds", "Fighter", "314", ProfileType.CONTRACTOR),
]

# (id, status, client_id, contractor_id)
CONTRACTS = [
    (1, ContractStatus.TERMINATED, 1, 5),
    (2, ContractStatus.IN_PROGRESS, 1, 6),
    (3, ContractStatus.IN_PROGRESS, 2, 6),
    (4, ContractStatus.IN_PROGRESS, 2, 7),
    (5, ContractStatus.NEW, 3, 8),
    (6, ContractStatus.IN_PROGRESS, 3, 7),
    (7, ContractStatus.IN_PROGRESS, 4, 7),
    (8, ContractStatus.IN_PROGRESS, 4, 6),
    (9, ContractStatus.IN_PROGRESS, 4, 8),
]


def _paid_at(day: int, hour: int = 19) -> datetime:
    return datetime(2020, 8, day, hour, 11, 26, 737000, tzinfo=timezone.utc)


# (id, price, contract_id, payment_date or None when unpaid)
JOBS = [
    (1, "200", 1, None),
    (2, "201", 2, None),
    (3, "202", 3, None),
    (4, "200", 4, None),
    (5, "200", 7, None),
    (6, "2020", 7, _paid_at(15)),
    (7, "200", 2, _paid_at(15)),
    (8, "200", 3, _paid_at(16)),
    (9, "200", 1, _paid_at(17)),
    (10, "200", 5, _paid_at(17)),
    (11, "21", 1, _paid_at(10)),
    (12, "21", 2, _paid_at(15)),
    (13, "121", 3, _paid_at(17)),
    (14, "121", 3, _paid_at(14, hour=23)),
]


def seed_database(session: Session, reset: bool = True) -> None:
    """
    Load the sample profiles, contracts and jobs.

    With ``reset`` the three tables are emptied first, so the call can be
    repeated to get back to a known state.
    """
    if reset:
        session.execute(delete(Job))
        session.execute(delete(Contract))
        session.execute(delete(Profile))

    session.add_all(
        Profile(
            id=profile_id,
            first_name=first_name,
            last_name=last_name,
            profession=profession,
            balance=Decimal(balance),
            type=profile_type,
        )
        for profile_id, first_name, last_name, profession, balance, profile_type in PROFILES
    )
    session.flush()

    session.add_all(
        Contract(
            id=contract_id,
            terms="bla bla bla",
            status=contract_status,
            client_id=client_id,
            contractor_id=contractor_id,
        )
        for contract_id, contract_status, client_id, contractor_id in CONTRACTS
    )
    session.flush()

    session.add_all(
        Job(
            id=job_id,
            description="work",
            price=Decimal(price),
            paid=payment_date is not None,
            payment_date=payment_date,
            contract_id=contract_id,
        )
        for job_id, price, contract_id, payment_date in JOBS
    )
    session.commit()

    logger.info(
        f"Seeded {len(PROFILES)} profiles, {len(CONTRACTS)} contracts and {len(JOBS)} jobs"
    )
