"""Balance endpoints."""

from fastapi import APIRouter, Depends

from ..repositories.dependencies import get_profile_repository
from ..repositories.interfaces import ProfileRepository
from ..store.dependencies import get_ledger
from ..store.ledger import Ledger
from .middleware import ProblemDetailsException
from .schemas import DepositRequest, ProfileResponse, ProblemDetails

router = APIRouter(prefix="/balances", tags=["balances"])


@router.post(
    "/deposit/{user_id}",
    response_model=ProfileResponse,
    responses={
        200: {"description": "Deposit applied"},
        400: {"model": ProblemDetails, "description": "Deposit not possible"},
    },
)
async def deposit(
    user_id: int,
    payload: DepositRequest,
    profile_repo: ProfileRepository = Depends(get_profile_repository),
    ledger: Ledger = Depends(get_ledger),
) -> ProfileResponse:
    """
    Deposit money on a client's balance.

    Rejected with 400 when the profile is unknown or not a client, the amount
    is not a positive number, or the amount exceeds 25% of what the client
    still owes on unpaid jobs of in-progress contracts.
    """
    profile = await profile_repo.get_by_id(user_id)

    result = ledger.deposit(profile, payload.amount)
    if not result.ok:
        raise ProblemDetailsException.from_failure(result)

    return ProfileResponse.model_validate(result.value)
