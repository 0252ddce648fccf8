"""
Core math modules для dp_core

Численные примитивы, на которых держатся гарантии приватности механизмов шума.
"""

# Safe Arithmetic
from dp_core.math.safe_arithmetic import (
    clamp,
    safe_add,
    safe_cast_from_double,
    safe_square,
    safe_subtract,
)

# Quantization
from dp_core.math.quantization import (
    grid_index,
    is_power_of_two,
    next_power_of_two,
    round_to_nearest_multiple,
)

# Inverse Distribution
from dp_core.math.inverse_distribution import (
    INVERSE_ERF_TOLERANCE,
    NEWTON_REFINEMENT_STEPS,
    QNORM_TOLERANCE,
    inverse_error_function,
    qnorm,
)

# Descriptive Statistics
from dp_core.math.descriptive_stats import (
    mean,
    order_statistic,
    standard_dev,
    variance,
    vector_filter,
    vector_to_string,
)

__all__ = [
    # Safe Arithmetic
    "clamp",
    "safe_add",
    "safe_cast_from_double",
    "safe_square",
    "safe_subtract",
    # Quantization
    "grid_index",
    "is_power_of_two",
    "next_power_of_two",
    "round_to_nearest_multiple",
    # Inverse Distribution: Constants
    "INVERSE_ERF_TOLERANCE",
    "NEWTON_REFINEMENT_STEPS",
    "QNORM_TOLERANCE",
    # Inverse Distribution: Functions
    "inverse_error_function",
    "qnorm",
    # Descriptive Statistics
    "mean",
    "order_statistic",
    "standard_dev",
    "variance",
    "vector_filter",
    "vector_to_string",
]
