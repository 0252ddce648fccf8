"""
Descriptive Statistics — выборочные моменты и порядковые статистики

Используется тестовыми и калибровочными harness'ами для проверки, что
эмпирическое распределение выхода механизма совпадает с теоретическим.
Не находится на production-пути механизмов.

- mean / variance / standard_dev: population-моменты (знаменатель n)
- order_statistic: значение на дробном ранге q отсортированной выборки
- vector_filter / vector_to_string: утилиты для векторов
"""

import math
from collections.abc import Sequence

import numpy as np

from dp_core.domain.numeric_types import format_number


def _require_non_empty(values: Sequence[float]) -> None:
    if len(values) == 0:
        raise ValueError("values must not be empty")


def _as_samples(values: Sequence[float]) -> np.ndarray:
    _require_non_empty(values)
    return np.asarray(values, dtype=np.float64)


def _sample_mean(samples: np.ndarray) -> float:
    with np.errstate(over="ignore", invalid="ignore"):
        center = samples.mean()
        if np.isinf(center) and np.isfinite(samples).all():
            # сумма конечных значений переполнилась
            center = (samples / samples.size).sum()
    return float(center)


def mean(values: Sequence[float]) -> float:
    """
    Среднее арифметическое по правилам IEEE-754.

    Переполнение промежуточной суммы конечных значений не приводит к inf,
    inf и -inf в одной выборке дают NaN.

    Raises:
        ValueError: Если выборка пустая

    Examples:
        >>> mean([1, 5, 7, 9, 13])
        7.0
        >>> mean([1e308, 1e308])
        1e+308
    """
    return _sample_mean(_as_samples(values))


def variance(values: Sequence[float]) -> float:
    """
    Population variance: sum((v - mean)^2) / n.

    Квадраты отклонений за пределами double дают inf, а не OverflowError.

    Examples:
        >>> variance([1, 5, 7, 9, 13])
        16.0
    """
    samples = _as_samples(values)
    center = _sample_mean(samples)
    with np.errstate(over="ignore", invalid="ignore"):
        deviations = samples - center
        return float(np.mean(deviations * deviations))


def standard_dev(values: Sequence[float]) -> float:
    """Population standard deviation: sqrt(variance)."""
    return math.sqrt(variance(values))


def order_statistic(q: float, values: Sequence[float]) -> float:
    """
    Значение на дробном ранге q ∈ [0, 1] отсортированной выборки.

    Ранг элемента i (от 0) соответствует q = (i + 0.5) / n; между рангами
    значение интерполируется линейно. q ≤ 0 даёт минимум, q ≥ 1 — максимум.

    Args:
        q: Дробный ранг
        values: Выборка (не сортируется на месте)

    Raises:
        ValueError: Если выборка пустая или q — NaN

    Examples:
        >>> order_statistic(0.6, [1, 5, 7, 9, 13])
        8.0
        >>> order_statistic(0.0, [13, 1, 9])
        1
    """
    _require_non_empty(values)
    if math.isnan(q):
        raise ValueError("q must not be NaN")

    ordered = sorted(values)
    if q <= 0:
        return ordered[0]
    if q >= 1:
        return ordered[-1]

    rank = q * len(ordered) - 0.5
    rank = min(max(rank, 0.0), len(ordered) - 1.0)
    lower = math.floor(rank)
    fraction = rank - lower
    if fraction == 0:
        return ordered[lower]
    return ordered[lower] + fraction * (ordered[lower + 1] - ordered[lower])


def vector_filter(values: Sequence[float], mask: Sequence[bool]) -> list[float]:
    """
    Подпоследовательность values, для которой mask истинна (порядок сохраняется).

    Raises:
        ValueError: Если длины values и mask различаются

    Examples:
        >>> vector_filter([1, 2, 2, 3], [False, True, True, False])
        [2, 2]
    """
    if len(values) != len(mask):
        raise ValueError(
            f"values and mask must have equal length, got {len(values)} and {len(mask)}"
        )
    return [value for value, selected in zip(values, mask) if selected]


def vector_to_string(values: Sequence[float]) -> str:
    """
    Представление вектора для диагностики и логов.

    Examples:
        >>> vector_to_string([1.0, 2.0, 2.5, 3.0])
        '[1, 2, 2.5, 3]'
    """
    return "[" + ", ".join(format_number(value) for value in values) + "]"
