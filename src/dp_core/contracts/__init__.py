"""
Contract Validation Module

Проверки численных параметров приватности (epsilon, delta, sensitivity,
границы), возвращающие структурированный ValidationStatus.
"""

from .validators import (
    validate_is_finite,
    validate_is_finite_and_non_negative,
    validate_is_finite_and_positive,
    validate_is_greater_than,
    validate_is_greater_than_or_equal_to,
    validate_is_in_exclusive_interval,
    validate_is_in_inclusive_interval,
    validate_is_in_interval,
    validate_is_lesser_than,
    validate_is_lesser_than_or_equal_to,
    validate_is_non_negative,
    validate_is_positive,
    validate_is_set,
)

__all__ = [
    # Presence and finiteness
    "validate_is_set",
    "validate_is_finite",
    # Sign
    "validate_is_positive",
    "validate_is_non_negative",
    "validate_is_finite_and_positive",
    "validate_is_finite_and_non_negative",
    # Comparisons
    "validate_is_lesser_than",
    "validate_is_lesser_than_or_equal_to",
    "validate_is_greater_than",
    "validate_is_greater_than_or_equal_to",
    # Intervals
    "validate_is_in_interval",
    "validate_is_in_inclusive_interval",
    "validate_is_in_exclusive_interval",
]
