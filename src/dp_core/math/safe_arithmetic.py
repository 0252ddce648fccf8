"""
Safe Arithmetic — overflow-checked арифметика

Модуль обеспечивает арифметику без молчаливого переполнения для калибровки
механизмов приватности и bound-арифметики агрегаций:
- Сложение / вычитание / возведение в квадрат с флагом успеха
- Насыщение (saturation) до границы домена при переполнении
- Безопасное приведение double → integer / более узкий float
- Clamp значения в границы

Integer-операции вычисляются точно (Python int) и затем сравниваются с
границами домена, поэтому wraparound невозможен. Floating-операции следуют
IEEE-754: переполнение в infinity не является ошибкой.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. ok=False ⇔ точный результат не представим в домене
2. При ok=False value = highest (переполнение вверх) или lowest (вниз)
3. NaN → integer — единственная ошибка safe_cast_from_double
4. Все операции детерминированы и не имеют состояния
"""

import logging
import math
import operator
from typing import Callable

import numpy as np

from dp_core.domain.numeric_types import (
    DEFAULT_INTEGRAL_DTYPE,
    as_integral_operand,
    highest,
    is_integral,
    lowest,
    resolve_dtype,
)
from dp_core.domain.results import ArithmeticResult

logger = logging.getLogger(__name__)


# =============================================================================
# ВНУТРЕННИЕ ПОМОЩНИКИ
# =============================================================================


def _saturate(exact: int, dtype: np.dtype) -> ArithmeticResult:
    """Точный integer результат → ArithmeticResult с насыщением."""
    upper = highest(dtype)
    if exact > upper:
        logger.debug("%s overflow: %d saturated to %d", dtype, exact, upper)
        return ArithmeticResult(upper, False)

    lower = lowest(dtype)
    if exact < lower:
        logger.debug("%s underflow: %d saturated to %d", dtype, exact, lower)
        return ArithmeticResult(lower, False)

    return ArithmeticResult(exact, True)


def _floating(op: Callable, a: float, b: float, dtype: np.dtype) -> float:
    """Бинарная операция в floating домене по правилам IEEE-754."""
    # overflow → inf и inf - inf → nan допустимы, предупреждения numpy не нужны
    with np.errstate(over="ignore", invalid="ignore"):
        return float(op(dtype.type(a), dtype.type(b)))


# =============================================================================
# СЛОЖЕНИЕ И ВЫЧИТАНИЕ
# =============================================================================


def safe_add(a: int | float, b: int | float, dtype: object = None) -> ArithmeticResult:
    """
    Сложение с проверкой переполнения.

    Args:
        a: Первое слагаемое
        b: Второе слагаемое
        dtype: Домен (np.int64, np.uint32, np.float64, ...).
            None — вывод из операндов (int → int64, float → float64)

    Returns:
        ArithmeticResult(value, ok):
        - integer: ok=False если сумма вне домена, value насыщен
        - floating: ok всегда True (IEEE-754)

    Raises:
        TypeError: Если операнд не integral для integer-домена
        ValueError: Если операнд не представим в домене

    Examples:
        >>> safe_add(10, 20)
        ArithmeticResult(value=30, ok=True)
        >>> safe_add(2**63 - 1, 1)
        ArithmeticResult(value=9223372036854775807, ok=False)
    """
    domain = resolve_dtype(dtype, a, b)

    if is_integral(domain):
        exact = as_integral_operand(a, domain) + as_integral_operand(b, domain)
        return _saturate(exact, domain)

    return ArithmeticResult(_floating(operator.add, a, b, domain), True)


def safe_subtract(a: int | float, b: int | float, dtype: object = None) -> ArithmeticResult:
    """
    Вычитание с проверкой переполнения.

    Семантика как у safe_add: для integer-домена насыщение в сторону
    переполнения, для floating — IEEE-754 без ошибок.

    Examples:
        >>> safe_subtract(10, 20)
        ArithmeticResult(value=-10, ok=True)
        >>> safe_subtract(-1, -2**63)
        ArithmeticResult(value=9223372036854775807, ok=True)
        >>> safe_subtract(0, 1, dtype="uint64")
        ArithmeticResult(value=0, ok=False)
    """
    domain = resolve_dtype(dtype, a, b)

    if is_integral(domain):
        exact = as_integral_operand(a, domain) - as_integral_operand(b, domain)
        return _saturate(exact, domain)

    return ArithmeticResult(_floating(operator.sub, a, b, domain), True)


# =============================================================================
# КВАДРАТ
# =============================================================================


def safe_square(a: int | float, dtype: object = None) -> ArithmeticResult:
    """
    Возведение в квадрат с проверкой переполнения.

    Для signed integer |lowest| > highest, поэтому квадрат lowest всегда
    переполняется.

    Для floating: конечное значение, квадрат которого уходит в infinity,
    считается переполнением (value = highest, ok=False). Infinity и NaN
    на входе распространяются с ok=True.

    Examples:
        >>> safe_square(-9)
        ArithmeticResult(value=81, ok=True)
        >>> safe_square(-2**63).ok
        False
        >>> safe_square(0, dtype="uint64")
        ArithmeticResult(value=0, ok=True)
    """
    domain = resolve_dtype(dtype, a)

    if is_integral(domain):
        exact = as_integral_operand(a, domain)
        return _saturate(exact * exact, domain)

    square = _floating(operator.mul, a, a, domain)
    if math.isinf(square) and math.isfinite(a):
        upper = highest(domain)
        logger.debug("%s overflow squaring %r, saturated to %r", domain, a, upper)
        return ArithmeticResult(upper, False)

    return ArithmeticResult(square, True)


# =============================================================================
# ПРИВЕДЕНИЕ DOUBLE
# =============================================================================


def safe_cast_from_double(
    x: float,
    dtype: object = DEFAULT_INTEGRAL_DTYPE,
    fallback: int | float = 0,
) -> ArithmeticResult:
    """
    Приведение double к integer или более узкому floating домену.

    Integer-домен:
    - NaN → ArithmeticResult(fallback, False); fallback играет роль
      "неизменённого" выходного значения
    - Значения вне домена (включая ±inf) насыщаются до highest/lowest, ok=True
    - Иначе усечение к нулю, ok=True

    Floating-домен:
    - Всегда ok=True; NaN остаётся NaN, переполнение даёт ±inf

    Args:
        x: Исходное double значение
        dtype: Целевой домен (default: int64)
        fallback: Значение, возвращаемое при NaN → integer

    Examples:
        >>> safe_cast_from_double(20.0)
        ArithmeticResult(value=20, ok=True)
        >>> safe_cast_from_double(1.0e200)
        ArithmeticResult(value=9223372036854775807, ok=True)
        >>> safe_cast_from_double(float("nan"), fallback=345)
        ArithmeticResult(value=345, ok=False)
    """
    target = resolve_dtype(dtype)
    x = float(x)

    if is_integral(target):
        if math.isnan(x):
            logger.debug("Cannot cast NaN to %s", target)
            return ArithmeticResult(fallback, False)

        # Сравнение float с Python int в Python точное
        upper = highest(target)
        if x >= upper:
            return ArithmeticResult(upper, True)

        lower = lowest(target)
        if x <= lower:
            return ArithmeticResult(lower, True)

        return ArithmeticResult(int(x), True)

    with np.errstate(over="ignore"):
        narrowed = target.type(x)
    return ArithmeticResult(float(narrowed), True)


# =============================================================================
# CLAMP
# =============================================================================


def clamp(lower: int | float, upper: int | float, value: int | float) -> int | float:
    """
    Ограничение значения в диапазоне [lower, upper].

    Raises:
        ValueError: Если lower > upper

    Examples:
        >>> clamp(1, 3, 2)
        2
        >>> clamp(1.0, 3.0, 4.0)
        3.0
        >>> clamp(1.0, 3.0, -2.0)
        1.0
    """
    if lower > upper:
        raise ValueError(f"lower must not exceed upper, got [{lower}, {upper}]")

    return max(lower, min(upper, value))
