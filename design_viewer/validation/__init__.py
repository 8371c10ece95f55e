"""Validation module - structural diagnostics for resolved screens."""

from .lib import ValidationIssue, is_valid, validate_screen_detail

__all__ = ["ValidationIssue", "validate_screen_detail", "is_valid"]
