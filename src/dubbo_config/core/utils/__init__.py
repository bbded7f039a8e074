"""Utility modules (logging)."""
