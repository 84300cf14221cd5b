"""Shared field accessors."""
