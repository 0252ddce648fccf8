"""
Domain value objects: числовые домены, результаты операций, defaults приватности.
"""

from dp_core.domain.numeric_types import (
    DEFAULT_FLOATING_DTYPE,
    DEFAULT_INTEGRAL_DTYPE,
    format_number,
    highest,
    infer_dtype,
    is_integral,
    lowest,
    resolve_dtype,
)
from dp_core.domain.privacy import DEFAULT_EPSILON, default_epsilon
from dp_core.domain.results import (
    ArithmeticResult,
    InvalidArgumentError,
    Requirement,
    StatusCode,
    ValidationStatus,
)

__all__ = [
    # Numeric types
    "DEFAULT_FLOATING_DTYPE",
    "DEFAULT_INTEGRAL_DTYPE",
    "format_number",
    "highest",
    "infer_dtype",
    "is_integral",
    "lowest",
    "resolve_dtype",
    # Privacy defaults
    "DEFAULT_EPSILON",
    "default_epsilon",
    # Results
    "ArithmeticResult",
    "InvalidArgumentError",
    "Requirement",
    "StatusCode",
    "ValidationStatus",
]
