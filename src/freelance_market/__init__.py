"""Freelance Market backend: contracts, jobs and profile balances over HTTP."""

__version__ = "1.0.0"
