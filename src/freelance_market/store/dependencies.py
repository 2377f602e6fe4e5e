"""Dependency injection for the ledger."""

from fastapi import Depends
from sqlalchemy.orm import Session

from ..db.database import get_db
from .ledger import Ledger


def get_ledger(db: Session = Depends(get_db)) -> Ledger:
    """Ledger bound to the request's session."""
    return Ledger(db)
