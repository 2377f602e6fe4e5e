"""Abstract repository interfaces for data access layer."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Dict, Any

from ..db.models import Profile, Contract, Job


class BaseRepository(ABC):
    """Base repository interface with common operations."""

    @abstractmethod
    async def save(self, entity) -> None:
        """Save an entity to the repository."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commit the current transaction."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the current transaction."""
        pass


class ProfileRepository(BaseRepository):
    """Repository interface for Profile entities."""

    @abstractmethod
    async def get_by_id(self, profile_id: int) -> Optional[Profile]:
        """Get a profile by ID."""
        pass

    @abstractmethod
    async def list_all(self) -> List[Profile]:
        """Get all profiles."""
        pass


class ContractRepository(BaseRepository):
    """Repository interface for Contract entities, always scoped to a profile."""

    @abstractmethod
    async def get_by_id_for_profile(
        self, profile: Profile, contract_id: int
    ) -> Optional[Contract]:
        """Get a contract by ID, only if the profile is a party to it."""
        pass

    @abstractmethod
    async def list_for_profile(self, profile: Profile) -> List[Contract]:
        """Get all contracts the profile is a party to."""
        pass

    @abstractmethod
    async def list_non_terminated_for_profile(self, profile: Profile) -> List[Contract]:
        """Get the profile's contracts that are not terminated."""
        pass


class JobRepository(BaseRepository):
    """Repository interface for Job entities."""

    @abstractmethod
    async def get_by_id(self, job_id: int) -> Optional[Job]:
        """Get a job by ID."""
        pass

    @abstractmethod
    async def list_unpaid_for_profile(self, profile: Profile) -> List[Job]:
        """Get the profile's unpaid jobs on in-progress contracts."""
        pass

    @abstractmethod
    async def total_unpaid_for_profile(self, profile: Profile) -> Decimal:
        """Sum of the profile's unpaid job prices on in-progress contracts."""
        pass


class ReportRepository(ABC):
    """Read-only aggregate queries over paid jobs."""

    @abstractmethod
    async def best_profession(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Optional[str]:
        """Contractor profession that earned the most in ``[start, end)``."""
        pass

    @abstractmethod
    async def best_clients(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = 2,
    ) -> List[Dict[str, Any]]:
        """Clients who paid the most in ``[start, end)``, best first."""
        pass
