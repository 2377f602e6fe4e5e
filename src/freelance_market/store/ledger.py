"""Ledger: executes accepted transfers, deposits and job payments.

The rules in ``domain.rules`` decide whether an operation may happen; the
ledger applies it against the database in a single transaction. Every write
is a guarded ``UPDATE ... WHERE`` so that two concurrent requests can not both
spend the same balance or pay the same job, whatever the isolation level.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.enums import ContractStatus, ProfileType
from ..db.models import Contract, Job, Profile
from ..domain.results import ErrorKind, Failure, Result, fail, ok
from ..domain.rules import TransferDecision, evaluate_deposit, evaluate_transfer
from ..repositories.scoping import total_unpaid
from ..utils.logging_config import get_logger, log_exception

logger = get_logger('ledger')


class LedgerStoreError(Exception):
    """The database failed while applying a ledger operation."""

    pass


@dataclass(frozen=True)
class TransferReceipt:
    """Both parties after a committed transfer."""

    client: Profile
    contractor: Profile
    amount: Decimal


class Ledger:
    """Money movement between profiles, one committed transaction per call."""

    def __init__(self, db_session: Session):
        self.db = db_session

    def transfer(self, client: Optional[Profile], contractor: Optional[Profile], amount) -> Result[TransferReceipt]:
        """
        Move ``amount`` from a client's balance to a contractor's balance.

        Returns ``Ok(TransferReceipt)`` once both balances are committed, or a
        ``Failure`` with nothing written.
        """
        decision = evaluate_transfer(client, contractor, amount)
        if not decision.ok:
            self._log_rejection("transfer", decision, client=_id(client), contractor=_id(contractor))
            return decision

        try:
            applied = self._apply_transfer(decision.value)
            if not applied.ok:
                self.db.rollback()
                self._log_rejection("transfer", applied, client=client.id, contractor=contractor.id)
                return applied
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail_store("transfer", e, client=client.id, contractor=contractor.id)

        receipt = TransferReceipt(
            client=self.db.get(Profile, decision.value.client_id),
            contractor=self.db.get(Profile, decision.value.contractor_id),
            amount=decision.value.amount,
        )
        logger.info(
            f"Transferred {receipt.amount} from profile {receipt.client.id} "
            f"to profile {receipt.contractor.id}"
        )
        return ok(receipt)

    def deposit(self, profile: Optional[Profile], amount) -> Result[Profile]:
        """
        Add ``amount`` to a client's balance.

        The amount may not exceed 25% of what the client still owes on unpaid
        jobs of in-progress contracts.
        """
        try:
            owed = total_unpaid(self.db, profile)
        except SQLAlchemyError as e:
            self._fail_store("deposit", e, profile=_id(profile))

        decision = evaluate_deposit(profile, amount, owed)
        if not decision.ok:
            self._log_rejection("deposit", decision, profile=_id(profile), owed=owed)
            return decision

        try:
            credited = self.db.execute(
                update(Profile)
                .where(Profile.id == decision.value.profile_id, Profile.type == ProfileType.CLIENT)
                .values(balance=_cents(Profile.balance + decision.value.amount))
                .execution_options(synchronize_session=False)
            )
            if credited.rowcount != 1:
                self.db.rollback()
                rejected = fail(ErrorKind.INVALID_PARTY, "The client profile is not valid for this operation")
                self._log_rejection("deposit", rejected, profile=decision.value.profile_id)
                return rejected
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail_store("deposit", e, profile=decision.value.profile_id)

        logger.info(
            f"Deposited {decision.value.amount} on profile {decision.value.profile_id} "
            f"(limit {decision.value.limit})"
        )
        return ok(self.db.get(Profile, decision.value.profile_id))

    def pay_for_job(self, profile: Optional[Profile], job_id: int) -> Result[Job]:
        """
        Pay an unpaid job on one of the caller's in-progress contracts.

        A job that does not exist, is already paid, belongs to someone else or
        sits on a contract that is not in progress is reported identically as
        JOB_NOT_FOUND. Balances, the paid flag and the payment date are
        committed together or not at all.
        """
        try:
            job = self._find_payable_job(profile, job_id)
            if job is None:
                self.db.rollback()
                rejected = fail(ErrorKind.JOB_NOT_FOUND, "There is no job to be paid")
                self._log_rejection("pay_for_job", rejected, profile=_id(profile), job=job_id)
                return rejected

            client = self.db.get(Profile, job.contract.client_id, with_for_update=True)
            contractor = self.db.get(Profile, job.contract.contractor_id, with_for_update=True)

            decision = evaluate_transfer(client, contractor, job.price)
            if not decision.ok:
                self.db.rollback()
                self._log_rejection("pay_for_job", decision, profile=profile.id, job=job_id)
                return decision

            applied = self._apply_transfer(decision.value)
            if not applied.ok:
                self.db.rollback()
                self._log_rejection("pay_for_job", applied, profile=profile.id, job=job_id)
                return applied

            marked = self.db.execute(
                update(Job)
                .where(Job.id == job_id, Job.paid.is_(False))
                .values(paid=True, payment_date=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            if marked.rowcount != 1:
                # Another request paid it between our read and our write
                self.db.rollback()
                rejected = fail(ErrorKind.JOB_NOT_FOUND, "There is no job to be paid")
                self._log_rejection("pay_for_job", rejected, profile=profile.id, job=job_id)
                return rejected

            self.db.commit()
        except SQLAlchemyError as e:
            self._fail_store("pay_for_job", e, profile=_id(profile), job=job_id)

        paid_job = self.db.get(Job, job_id)
        logger.info(f"Profile {profile.id} paid job {job_id} ({paid_job.price})")
        return ok(paid_job)

    def _find_payable_job(self, profile: Optional[Profile], job_id: int) -> Optional[Job]:
        if profile is None:
            return None
        return self.db.scalars(
            select(Job)
            .join(Job.contract)
            .where(
                Job.id == job_id,
                Job.paid.is_(False),
                Contract.client_id == profile.id,
                Contract.status == ContractStatus.IN_PROGRESS,
            )
            .with_for_update()
        ).first()

    def _apply_transfer(self, decision: TransferDecision) -> Result[TransferDecision]:
        """Debit then credit inside the current transaction; caller commits."""
        debited = self.db.execute(
            update(Profile)
            .where(
                Profile.id == decision.client_id,
                _cents(Profile.balance) >= decision.amount,
            )
            .values(balance=_cents(Profile.balance - decision.amount))
            .execution_options(synchronize_session=False)
        )
        if debited.rowcount != 1:
            return fail(
                ErrorKind.INSUFFICIENT_FUNDS,
                "The balance changed before the payment could be applied",
            )

        credited = self.db.execute(
            update(Profile)
            .where(Profile.id == decision.contractor_id)
            .values(balance=_cents(Profile.balance + decision.amount))
            .execution_options(synchronize_session=False)
        )
        if credited.rowcount != 1:
            return fail(ErrorKind.INVALID_PARTY, "The receiving profile does not exist")

        # Loaded instances still hold the old balances
        self.db.expire_all()
        return ok(decision)

    def _log_rejection(self, operation: str, failure: Failure, **context) -> None:
        details = ", ".join(f"{k}={v}" for k, v in context.items())
        logger.info(f"{operation} rejected: {failure.kind.value} ({failure.detail}) {details}")

    def _fail_store(self, operation: str, exc: SQLAlchemyError, **context) -> None:
        self.db.rollback()
        log_exception('ledger', exc, {"operation": operation, **context})
        raise LedgerStoreError(f"Failed to apply {operation}: {exc}") from exc


def _id(profile: Optional[Profile]):
    return getattr(profile, "id", None)


def _cents(expression):
    # SQLite does balance arithmetic in REAL
    return func.round(expression, 2)
