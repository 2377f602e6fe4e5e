"""Admin report endpoints over paid jobs."""

from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..config import get_config
from ..repositories.dependencies import get_report_repository
from ..repositories.interfaces import ReportRepository
from ..utils.logging_config import get_logger
from .middleware import ProblemDetailsException
from .schemas import BestClientResponse, BestProfessionResponse, ProblemDetails

logger = get_logger('api')
router = APIRouter(prefix="/admin", tags=["admin"])


def parse_range_bound(name: str, value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 date or datetime; naive values are taken as UTC."""
    if value is None or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        raise ProblemDetailsException(
            status_code=status.HTTP_400_BAD_REQUEST,
            title="Invalid Date Range",
            detail=f"'{name}' must be an ISO-8601 date or datetime",
        )
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@router.get(
    "/best-profession",
    response_model=BestProfessionResponse,
    responses={
        200: {"description": "Best paid profession in the range"},
        400: {"model": ProblemDetails, "description": "Invalid date range"},
        404: {"model": ProblemDetails, "description": "No paid jobs in the range"},
    },
)
async def best_profession(
    start: Optional[str] = Query(None, description="Inclusive start of the payment date range"),
    end: Optional[str] = Query(None, description="Exclusive end of the payment date range"),
    report_repo: ReportRepository = Depends(get_report_repository),
) -> BestProfessionResponse:
    """
    Get the profession that earned the most for the given range.

    Earnings are the paid job prices of contractors, filtered by payment
    date. Both bounds are optional.
    """
    profession = await report_repo.best_profession(
        parse_range_bound("start", start), parse_range_bound("end", end)
    )
    if profession is None:
        raise ProblemDetailsException(
            status_code=status.HTTP_404_NOT_FOUND,
            title="No Data",
            detail="There are no paid jobs in the given range",
        )

    return BestProfessionResponse(profession=profession)


@router.get(
    "/best-clients",
    response_model=List[BestClientResponse],
    responses={
        200: {"description": "Clients ordered by total paid, best first"},
        400: {"model": ProblemDetails, "description": "Invalid date range"},
    },
)
async def best_clients(
    start: Optional[str] = Query(None, description="Inclusive start of the payment date range"),
    end: Optional[str] = Query(None, description="Exclusive end of the payment date range"),
    limit: Optional[int] = Query(None, description="Maximum number of clients, defaults to 2"),
    report_repo: ReportRepository = Depends(get_report_repository),
) -> List[BestClientResponse]:
    """
    Get the clients that paid the most for jobs in the given range.

    A missing, zero or negative limit falls back to the configured default.
    """
    default_limit = get_config().market.best_clients_default_limit
    if limit is None or limit <= 0:
        limit = default_limit

    rows = await report_repo.best_clients(
        parse_range_bound("start", start), parse_range_bound("end", end), limit
    )
    logger.debug(f"best-clients returned {len(rows)} rows (limit {limit})")
    return [BestClientResponse(**row) for row in rows]
