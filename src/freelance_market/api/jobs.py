"""Job endpoints: unpaid listing and payment."""

from typing import List

from fastapi import APIRouter, Depends

from ..auth.dependencies import get_current_profile
from ..db.models import Profile
from ..repositories.dependencies import get_job_repository
from ..repositories.interfaces import JobRepository
from ..store.dependencies import get_ledger
from ..store.ledger import Ledger
from .middleware import ProblemDetailsException
from .schemas import JobResponse, ProblemDetails

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get(
    "/unpaid",
    response_model=List[JobResponse],
    responses={401: {"model": ProblemDetails, "description": "Unknown calling profile"}},
)
async def list_unpaid_jobs(
    profile: Profile = Depends(get_current_profile),
    job_repo: JobRepository = Depends(get_job_repository),
) -> List[JobResponse]:
    """
    List the calling profile's unpaid jobs.

    Only jobs on in-progress contracts are considered.
    """
    jobs = await job_repo.list_unpaid_for_profile(profile)
    return [JobResponse.model_validate(job) for job in jobs]


@router.post(
    "/{job_id}/pay",
    response_model=JobResponse,
    responses={
        200: {"description": "Job paid"},
        400: {"model": ProblemDetails, "description": "Payment not possible"},
        401: {"model": ProblemDetails, "description": "Unknown calling profile"},
        404: {"model": ProblemDetails, "description": "No payable job with this id"},
    },
)
def pay_for_job(
    job_id: int,
    profile: Profile = Depends(get_current_profile),
    ledger: Ledger = Depends(get_ledger),
) -> JobResponse:
    """
    Pay for an unpaid job from the calling client's balance.

    The job price moves from the client to the contractor and the job is
    marked paid in the same transaction. A job that does not exist, is
    already paid or is not the caller's is reported as 404.
    """
    result = ledger.pay_for_job(profile, job_id)
    if not result.ok:
        raise ProblemDetailsException.from_failure(result)

    return JobResponse.model_validate(result.value)
