"""Transactional operations over the persistence layer."""
