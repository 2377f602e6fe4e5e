"""Pydantic models for API request/response validation."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer  # type: ignore

from ..core.enums import ContractStatus, ProfileType

# Money leaves the API as a JSON number, not as a quoted Decimal
Money = Annotated[
    Decimal, PlainSerializer(lambda value: float(value), return_type=float, when_used="json")
]


# Base response models
class BaseResponse(BaseModel):
    """Base response model with common fields."""

    model_config = ConfigDict(from_attributes=True)


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details for HTTP APIs, with the error/message pair."""

    type: str = Field(description="A URI reference that identifies the problem type")
    title: str = Field(
        description="A short, human-readable summary of the problem type"
    )
    status: int = Field(description="The HTTP status code")
    detail: Optional[str] = Field(
        None, description="A human-readable explanation specific to this occurrence"
    )
    instance: Optional[str] = Field(
        None, description="A URI reference that identifies the specific occurrence"
    )
    error: str = Field(description="Fixed summary of the error kind")
    message: Optional[str] = Field(None, description="Detail for this occurrence")


# Profile-related schemas
class ProfileResponse(BaseResponse):
    """Schema for profile response."""

    id: int
    first_name: str
    last_name: str
    profession: str
    balance: Money
    type: ProfileType
    created_at: datetime
    updated_at: datetime


class DepositRequest(BaseModel):
    """Schema for a deposit on a client balance."""

    # Checked by the ledger, so a bad amount is InvalidAmount rather than a 422
    amount: Any = Field(None, description="Amount to deposit, at most two decimal places")


# Contract-related schemas
class ContractResponse(BaseResponse):
    """Schema for contract response."""

    id: int
    terms: str
    status: ContractStatus
    client_id: int
    contractor_id: int
    created_at: datetime
    updated_at: datetime


# Job-related schemas
class JobResponse(BaseResponse):
    """Schema for job response."""

    id: int
    description: str
    price: Money
    paid: bool
    payment_date: Optional[datetime] = None
    contract_id: int
    created_at: datetime
    updated_at: datetime


# Admin report schemas
class BestProfessionResponse(BaseModel):
    """Profession that earned the most in the requested range."""

    profession: str


class BestClientResponse(BaseModel):
    """A client and how much they paid in the requested range."""

    id: int
    full_name: str
    paid: Money
