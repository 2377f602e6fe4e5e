"""Enums for the Freelance Market backend."""

from enum import Enum


class ProfileType(str, Enum):
    """Role of a profile; money flows from clients to contractors."""

    CLIENT = "client"
    CONTRACTOR = "contractor"


class ContractStatus(str, Enum):
    """Status of a contract."""

    NEW = "new"
    IN_PROGRESS = "in_progress"
    TERMINATED = "terminated"
