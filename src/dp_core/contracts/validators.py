"""
Parameter Validators — проверка численных параметров приватности

Каждый публичный конструктор механизма обязан пропустить epsilon, delta,
sensitivity и границы через эти проверки до использования. Проверки —
чистые функции, возвращающие ValidationStatus; исключение возникает только
при явном вызове status.raise_for_error().

Сообщения встраивают имя параметра и нарушенную границу:
    "Epsilon must be finite and positive, but is 0."
    "Delta must be in the interval [0,1), but is 1."

Известная и принятая неточность: границы сравниваются в том float
представлении, в котором они хранятся. Значение, отстоящее от границы
меньше чем на ulp, может не пройти проверку, которая математически должна
пройти (и наоборот). Сравнение остаётся буквальным, без epsilon-допусков.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Валидация бинарна: OK или INVALID_ARGUMENT
2. Строгие сравнения не проходят при равенстве, нестрогие проходят
   (включая равные бесконечности и равные lowest)
3. validate_is_finite не проверяет NaN — сочетать с validate_is_set
"""

import logging
import math

from dp_core.domain.results import Requirement, ValidationStatus

logger = logging.getLogger(__name__)


def _fail(requirement: Requirement, name: str, **details: object) -> ValidationStatus:
    status = ValidationStatus.invalid(requirement, name, **details)
    logger.debug("Validation failed: %s must satisfy %s", name, requirement.value)
    return status


# =============================================================================
# НАЛИЧИЕ И КОНЕЧНОСТЬ
# =============================================================================


def validate_is_set(value: float | None, name: str) -> ValidationStatus:
    """
    Значение задано и не NaN.

    Args:
        value: Проверяемое значение (None — не задано)
        name: Имя параметра для сообщения

    Examples:
        >>> validate_is_set(None, "Epsilon").message
        'Epsilon must be set.'
        >>> validate_is_set(float("inf"), "Epsilon").ok
        True
    """
    if value is None:
        return _fail(Requirement.SET, name)
    if math.isnan(value):
        return _fail(Requirement.VALID_NUMBER, name, value=float(value))
    return ValidationStatus.success()


def validate_is_finite(value: float | None, name: str) -> ValidationStatus:
    """
    Значение не ±inf.

    NaN этой проверкой не отклоняется; None отклоняется как незаданное.
    """
    if value is None:
        return _fail(Requirement.SET, name)
    if math.isinf(value):
        return _fail(Requirement.FINITE, name, value=float(value))
    return ValidationStatus.success()


# =============================================================================
# ЗНАК
# =============================================================================


def validate_is_positive(value: float | None, name: str) -> ValidationStatus:
    """Значение > 0; +inf допустимо, -inf и lowest — нет."""
    status = validate_is_set(value, name)
    if not status.ok:
        return status
    if not value > 0:
        return _fail(Requirement.POSITIVE, name, value=float(value))
    return ValidationStatus.success()


def validate_is_non_negative(value: float | None, name: str) -> ValidationStatus:
    """Значение ≥ 0; +inf допустимо."""
    status = validate_is_set(value, name)
    if not status.ok:
        return status
    if not value >= 0:
        return _fail(Requirement.NON_NEGATIVE, name, value=float(value))
    return ValidationStatus.success()


def validate_is_finite_and_positive(value: float | None, name: str) -> ValidationStatus:
    """
    Значение конечно и > 0.

    Examples:
        >>> validate_is_finite_and_positive(0.0, "Epsilon").message
        'Epsilon must be finite and positive, but is 0.'
    """
    status = validate_is_set(value, name)
    if not status.ok:
        return status
    if math.isinf(value) or not value > 0:
        return _fail(Requirement.FINITE_AND_POSITIVE, name, value=float(value))
    return ValidationStatus.success()


def validate_is_finite_and_non_negative(value: float | None, name: str) -> ValidationStatus:
    """Значение конечно и ≥ 0."""
    status = validate_is_set(value, name)
    if not status.ok:
        return status
    if math.isinf(value) or not value >= 0:
        return _fail(Requirement.FINITE_AND_NON_NEGATIVE, name, value=float(value))
    return ValidationStatus.success()


# =============================================================================
# СРАВНЕНИЯ С ГРАНИЦЕЙ
# =============================================================================


def validate_is_lesser_than(
    value: float | None, upper_bound: float, name: str
) -> ValidationStatus:
    """value < upper_bound (равенство не проходит)."""
    status = validate_is_set(value, name)
    if not status.ok:
        return status
    if not value < upper_bound:
        return _fail(
            Requirement.LESSER_THAN, name, value=float(value), bound=float(upper_bound)
        )
    return ValidationStatus.success()


def validate_is_lesser_than_or_equal_to(
    value: float | None, upper_bound: float, name: str
) -> ValidationStatus:
    """value ≤ upper_bound."""
    status = validate_is_set(value, name)
    if not status.ok:
        return status
    if not value <= upper_bound:
        return _fail(
            Requirement.LESSER_THAN_OR_EQUAL_TO,
            name,
            value=float(value),
            bound=float(upper_bound),
        )
    return ValidationStatus.success()


def validate_is_greater_than(
    value: float | None, lower_bound: float, name: str
) -> ValidationStatus:
    """value > lower_bound (равенство не проходит)."""
    status = validate_is_set(value, name)
    if not status.ok:
        return status
    if not value > lower_bound:
        return _fail(
            Requirement.GREATER_THAN, name, value=float(value), bound=float(lower_bound)
        )
    return ValidationStatus.success()


def validate_is_greater_than_or_equal_to(
    value: float | None, lower_bound: float, name: str
) -> ValidationStatus:
    """value ≥ lower_bound."""
    status = validate_is_set(value, name)
    if not status.ok:
        return status
    if not value >= lower_bound:
        return _fail(
            Requirement.GREATER_THAN_OR_EQUAL_TO,
            name,
            value=float(value),
            bound=float(lower_bound),
        )
    return ValidationStatus.success()


# =============================================================================
# ИНТЕРВАЛЫ
# =============================================================================


def validate_is_in_interval(
    value: float | None,
    lower_bound: float,
    upper_bound: float,
    include_lower: bool,
    include_upper: bool,
    name: str,
) -> ValidationStatus:
    """
    Принадлежность интервалу с независимо открытыми/закрытыми концами.

    Значение проходит, если lower < value < upper, либо совпадает с
    включённой границей. Поэтому вырожденный интервал [a,a) / (a,a]
    содержит a, а (a,a) — пуст.

    Args:
        value: Проверяемое значение
        lower_bound: Нижняя граница
        upper_bound: Верхняя граница
        include_lower: Нижняя граница включена
        include_upper: Верхняя граница включена
        name: Имя параметра для сообщения

    Examples:
        >>> validate_is_in_interval(-1.0, 0.0, 1.0, True, False, "Delta").message
        'Delta must be in the interval [0,1), but is -1.'
        >>> validate_is_in_interval(0.0, 0.0, 0.0, False, False, "Delta").message
        'Delta must be in the exclusive interval (0,0), but is 0.'
    """
    status = validate_is_set(value, name)
    if not status.ok:
        return status

    inside = (
        lower_bound < value < upper_bound
        or (include_lower and value == lower_bound)
        or (include_upper and value == upper_bound)
    )
    if not inside:
        return _fail(
            Requirement.IN_INTERVAL,
            name,
            value=float(value),
            lower_bound=float(lower_bound),
            upper_bound=float(upper_bound),
            include_lower=include_lower,
            include_upper=include_upper,
        )
    return ValidationStatus.success()


def validate_is_in_inclusive_interval(
    value: float | None, lower_bound: float, upper_bound: float, name: str
) -> ValidationStatus:
    """value ∈ [lower_bound, upper_bound]."""
    return validate_is_in_interval(value, lower_bound, upper_bound, True, True, name)


def validate_is_in_exclusive_interval(
    value: float | None, lower_bound: float, upper_bound: float, name: str
) -> ValidationStatus:
    """value ∈ (lower_bound, upper_bound)."""
    return validate_is_in_interval(value, lower_bound, upper_bound, False, False, name)
