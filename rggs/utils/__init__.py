"""Shared utilities for RGGS."""

from .rng_manager import RNGManager
from .validation import ExpressionError, ValidationError

__all__ = [
    "RNGManager",
    "ValidationError",
    "ExpressionError",
]
