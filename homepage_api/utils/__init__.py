"""Shared utility functions."""

from .validation import normalize_symbol, validate_closes

__all__ = ["normalize_symbol", "validate_closes"]
