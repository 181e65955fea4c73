"""Utility modules."""

from .sanitize import sanitize_input, sanitize_url

__all__ = ["sanitize_input", "sanitize_url"]
