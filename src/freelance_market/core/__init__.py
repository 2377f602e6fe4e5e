"""Shared enums and constants."""
