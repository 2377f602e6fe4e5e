"""Contract endpoints, scoped to the calling profile."""

from typing import List

from fastapi import APIRouter, Depends, status

from ..auth.dependencies import get_current_profile
from ..db.models import Profile
from ..repositories.dependencies import get_contract_repository
from ..repositories.interfaces import ContractRepository
from .middleware import ProblemDetailsException
from .schemas import ContractResponse, ProblemDetails

router = APIRouter(prefix="/contracts", tags=["contracts"])


@router.get(
    "/{contract_id}",
    response_model=ContractResponse,
    responses={
        200: {"description": "Contract retrieved successfully"},
        401: {"model": ProblemDetails, "description": "Unknown calling profile"},
        404: {"model": ProblemDetails, "description": "Contract not found"},
    },
)
async def get_contract(
    contract_id: int,
    profile: Profile = Depends(get_current_profile),
    contract_repo: ContractRepository = Depends(get_contract_repository),
) -> ContractResponse:
    """
    Get a contract by id.

    Only returned when the calling profile is the contract's client or
    contractor; otherwise the contract is reported as not found.
    """
    contract = await contract_repo.get_by_id_for_profile(profile, contract_id)
    if not contract:
        raise ProblemDetailsException(
            status_code=status.HTTP_404_NOT_FOUND,
            title="Contract Not Found",
            detail=f"Contract {contract_id} does not exist for this profile",
        )

    return ContractResponse.model_validate(contract)


@router.get(
    "",
    response_model=List[ContractResponse],
    responses={401: {"model": ProblemDetails, "description": "Unknown calling profile"}},
)
async def list_contracts(
    profile: Profile = Depends(get_current_profile),
    contract_repo: ContractRepository = Depends(get_contract_repository),
) -> List[ContractResponse]:
    """List the calling profile's contracts that are not terminated."""
    contracts = await contract_repo.list_non_terminated_for_profile(profile)
    return [ContractResponse.model_validate(contract) for contract in contracts]
