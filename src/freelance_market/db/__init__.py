"""Persistence: engine, session factory and ORM models."""
