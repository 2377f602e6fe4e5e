"""Caller identification dependencies for FastAPI."""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from ..config import get_config
from ..db.database import get_db
from ..db.models import Profile
from ..utils.logging_config import get_logger

logger = get_logger('auth')


def get_current_profile(
    request: Request,
    db: Session = Depends(get_db),
) -> Profile:
    """
    Resolve the calling profile from the ``profile_id`` request header.

    Missing, malformed or unknown ids are rejected with 401 so route
    handlers always receive a loaded Profile, never a raw id.
    """
    header = get_config().market.profile_header
    raw_id = request.headers.get(header)

    if raw_id is None or not raw_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {header} header",
        )

    try:
        profile_id = int(raw_id)
    except ValueError:
        logger.info(f"Rejected malformed {header} header: {raw_id!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid {header} header",
        )

    profile = db.get(Profile, profile_id)
    if profile is None:
        logger.info(f"Rejected unknown profile {profile_id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown profile",
        )

    return profile
