"""Validation utilities for observation records."""

from .coordinates import ValidRange, screen_coordinates, validate
from .issues import ValidationIssue, ValidationSeverity

__all__ = [
    "ValidRange",
    "ValidationIssue",
    "ValidationSeverity",
    "screen_coordinates",
    "validate",
]
