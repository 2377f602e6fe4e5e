"""SQLAlchemy models for the Freelance Market backend."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from ..core.enums import ContractStatus, ProfileType
from .database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


# Fixed-point money column: 12 digits, 2 after the point
Money = Numeric(12, 2, asdecimal=True)


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )


class Profile(TimestampMixin, Base):
    """A marketplace participant, either a client or a contractor."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    profession = Column(String(255), nullable=False)
    balance = Column(Money, nullable=False, default=Decimal("0.00"))
    type = Column(
        Enum(ProfileType, name="profile_type", values_callable=_enum_values),
        nullable=False,
    )

    # Relationships
    client_contracts = relationship(
        "Contract", back_populates="client", foreign_keys="Contract.client_id"
    )
    contractor_contracts = relationship(
        "Contract", back_populates="contractor", foreign_keys="Contract.contractor_id"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, name='{self.full_name}', type={self.type})>"


class Contract(TimestampMixin, Base):
    """An agreement between one client and one contractor."""

    __tablename__ = "contracts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    terms = Column(Text, nullable=False)
    status = Column(
        Enum(ContractStatus, name="contract_status", values_callable=_enum_values),
        nullable=False,
        default=ContractStatus.NEW,
    )
    client_id = Column(Integer, ForeignKey("profiles.id"), nullable=False)
    contractor_id = Column(Integer, ForeignKey("profiles.id"), nullable=False)

    # Relationships
    client = relationship(
        "Profile", back_populates="client_contracts", foreign_keys=[client_id]
    )
    contractor = relationship(
        "Profile", back_populates="contractor_contracts", foreign_keys=[contractor_id]
    )
    jobs = relationship("Job", back_populates="contract", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_contract_client_status", "client_id", "status"),
        Index("ix_contract_contractor_status", "contractor_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Contract(id={self.id}, status={self.status})>"


class Job(TimestampMixin, Base):
    """A unit of work under a contract, paid at most once."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(Text, nullable=False)
    price = Column(Money, nullable=False)
    paid = Column(Boolean, nullable=False, default=False)
    payment_date = Column(DateTime(timezone=True), nullable=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=False)

    # Relationships
    contract = relationship("Contract", back_populates="jobs")

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_job_price_positive"),
        Index("ix_job_contract_paid", "contract_id", "paid"),
    )

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, price={self.price}, paid={self.paid})>"
