"""
Quantization — точное квантование на сетку степеней двойки

Модуль реализует "snapping" защиту от атак на представление float в
механизмах шума: зашумлённое значение округляется на сетку с шагом,
равным степени двойки, после чего младшие биты не несут информации.

- next_power_of_two: наименьшая степень двойки ≥ x (включая 2^-k)
- round_to_nearest_multiple: округление к ближайшему кратному шага
- grid_index: номер узла сетки как int64 (через safe_cast_from_double)

Округление построено на math.fmod, который вычисляется точно, поэтому
для шага-степени двойки результат не содержит остаточной ошибки.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Для granularity = 2^k результат bit-exact
2. Половина шага округляется к +inf (5 → 6, -5 → -4 для шага 2)
3. Степени двойки — неподвижные точки next_power_of_two
4. Повторное округление не меняет результат
"""

import logging
import math

from dp_core.domain.results import ArithmeticResult
from dp_core.math.safe_arithmetic import safe_cast_from_double

logger = logging.getLogger(__name__)

# =============================================================================
# СТЕПЕНИ ДВОЙКИ
# =============================================================================

# Наибольшая экспонента e, для которой 2^e конечно в double
_MAX_FINITE_EXPONENT = 1023


def is_power_of_two(x: float) -> bool:
    """
    Проверка, является ли x точной степенью двойки (включая 2^-k и субнормальные).

    Examples:
        >>> is_power_of_two(0.125)
        True
        >>> is_power_of_two(3.0)
        False
    """
    if not math.isfinite(x) or x <= 0:
        return False
    mantissa, _ = math.frexp(x)
    return mantissa == 0.5


def next_power_of_two(x: float) -> float:
    """
    Наименьшая степень двойки, не меньшая x.

    Использует frexp (x = m * 2^e, m ∈ [0.5, 1)) вместо log2, поэтому
    точные степени двойки возвращаются без изменений, а для сколь угодно
    малых x результат — степень двойки, а не ноль.

    Args:
        x: Положительное значение

    Returns:
        2^k ≥ x; inf если такой конечной степени нет

    Raises:
        ValueError: Если x не положительное или NaN

    Examples:
        >>> next_power_of_two(5.0)
        8.0
        >>> next_power_of_two(0.2)
        0.25
        >>> next_power_of_two(1.0)
        1.0
    """
    if not x > 0:
        raise ValueError(f"x must be positive, got {x}")
    if math.isinf(x):
        return x

    mantissa, exponent = math.frexp(x)
    if mantissa == 0.5:
        return x
    if exponent > _MAX_FINITE_EXPONENT:
        return math.inf
    return math.ldexp(1.0, exponent)


# =============================================================================
# ОКРУГЛЕНИЕ К КРАТНОМУ
# =============================================================================


def round_to_nearest_multiple(x: float, granularity: float) -> float:
    """
    Округление x к ближайшему кратному granularity.

    Ничья (ровно половина шага) округляется к +inf — "round half up",
    не banker's rounding и не от нуля.

    Для granularity = 2^k результат точен: fmod вычисляется без ошибки,
    а x - remainder и сдвиг на шаг дают кратное 2^k, представимое в double.
    Для произвольного шага допускается обычная floating ошибка.

    Args:
        x: Округляемое значение
        granularity: Шаг сетки (> 0, конечный)

    Returns:
        Ближайшее кратное granularity; ±inf и NaN возвращаются как есть

    Raises:
        ValueError: Если granularity не конечное положительное число

    Examples:
        >>> round_to_nearest_multiple(5.1, 2.0)
        6.0
        >>> round_to_nearest_multiple(5.0, 2.0)
        6.0
        >>> round_to_nearest_multiple(-5.0, 2.0)
        -4.0
        >>> round_to_nearest_multiple(0.1, 1.0 / (1 << 10))
        0.099609375
    """
    if not (math.isfinite(granularity) and granularity > 0):
        raise ValueError(f"granularity must be finite and positive, got {granularity}")
    if not math.isfinite(x):
        return x

    remainder = math.fmod(x, granularity)
    half = granularity / 2

    if abs(remainder) == half:
        return x + half
    if abs(remainder) > half:
        return x - remainder + math.copysign(granularity, remainder)
    return x - remainder


def grid_index(x: float, granularity: float) -> ArithmeticResult:
    """
    Номер узла сетки, ближайшего к x: round_to_nearest_multiple(x, g) / g.

    Результат приводится к int64 через safe_cast_from_double: индексы вне
    int64 насыщаются, NaN даёт ok=False. Точность индекса гарантирована
    только для шага-степени двойки; иной шаг отмечается в DEBUG-логе.

    Examples:
        >>> grid_index(5.0, 2.0)
        ArithmeticResult(value=3, ok=True)
        >>> grid_index(-0.3, 0.25)
        ArithmeticResult(value=-1, ok=True)
    """
    snapped = round_to_nearest_multiple(x, granularity)
    if not is_power_of_two(granularity):
        logger.debug("Granularity %r is not a power of two, grid index may be inexact", granularity)
    return safe_cast_from_double(snapped / granularity)
