"""Caller identification."""
