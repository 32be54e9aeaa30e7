"""
Validation of generated levels.

Public API:
    - ValidationResult, ValidationIssue, Severity: Core result types
    - ValidationError: Exception raised by assert_valid_level on FAIL issues
    - validate_level(): Run every level check
    - assert_valid_level(): Validate and raise on failure
"""

from .core import (
    Severity,
    ValidationIssue,
    ValidationResult,
    ValidationError,
)
from .rules import ValidationRule, ALL_RULES
from .level_checks import (
    check_overlaps,
    check_bounds,
    check_context_pairs,
    check_unpaired_contexts,
    check_open_contexts,
    validate_level,
    assert_valid_level,
)

__all__ = [
    # Core types
    'Severity',
    'ValidationIssue',
    'ValidationResult',
    'ValidationError',
    'ValidationRule',
    'ALL_RULES',
    # Checks
    'check_overlaps',
    'check_bounds',
    'check_context_pairs',
    'check_unpaired_contexts',
    'check_open_contexts',
    'validate_level',
    'assert_valid_level',
]
