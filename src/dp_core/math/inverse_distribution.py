"""
Inverse Distribution — обратная функция ошибок и квантиль нормального распределения

Используется при калибровке Gaussian-механизма: по целевому уровню
доверия / delta вычисляется множитель sigma. Замкнутой формы нет, поэтому:

1. Начальное приближение erf^-1 — double-полиномы Giles, три ветви по
   w = -ln(1 - y^2): w < 6.25, w < 16 и дальний хвост до w ≈ 37
2. Фиксированное число шагов Ньютона; в хвостах невязка считается через
   erfc(|x|) - (1 - |y|), иначе плоский erf съедает поправку
3. qnorm(p) = mu + sigma * sqrt(2) * erf^-1(2p - 1)

Точность — инженерный компромисс, а не цель для ужесточения:
- |erf(erf^-1(y)) - y| ≤ INVERSE_ERF_TOLERANCE
- |qnorm(p) - Φ^-1(p)| ≤ QNORM_TOLERANCE, в том числе в хвосте до p ≈ 1e-15

Для p < ~5.6e-17 значение 2p - 1 округляется до -1 в double, поэтому
qnorm возвращает -inf (симметрично +inf для p > 1 - 1.1e-16).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. erf^-1(-1) = -inf, erf^-1(1) = +inf, erf^-1(0) = 0 точно
2. qnorm выражается только через inverse_error_function
3. p ∉ (0, 1) → InvalidArgumentError
4. qnorm монотонно не убывает по p
5. Число итераций фиксировано: результат детерминирован
"""

import math
from typing import Final

from dp_core.contracts.validators import (
    validate_is_finite_and_positive,
    validate_is_in_exclusive_interval,
    validate_is_in_inclusive_interval,
)

# =============================================================================
# ПАРАМЕТРЫ ТОЧНОСТИ
# =============================================================================

# Допуск |erf(inverse_error_function(y)) - y|
INVERSE_ERF_TOLERANCE: Final[float] = 1e-3

# Допуск |qnorm(p) - Φ^-1(p)|
QNORM_TOLERANCE: Final[float] = 4.5e-4

# Шаги Ньютона после полиномиального приближения
NEWTON_REFINEMENT_STEPS: Final[int] = 2

# Границы ветвей полиномов Giles по w = -ln(1 - y^2)
_CENTRAL_BRANCH_LIMIT: Final[float] = 6.25
_TAIL_BRANCH_LIMIT: Final[float] = 16.0

# w < 6.25, аргумент w - 3.125; от старшего коэффициента к младшему
_CENTRAL_COEFFICIENTS: Final[tuple[float, ...]] = (
    -3.6444120640178196996e-21,
    -1.685059138182016589e-19,
    1.2858480715256400167e-18,
    1.115787767802518096e-17,
    -1.333171662854620906e-16,
    2.0972767875968561637e-17,
    6.6376381343583238325e-15,
    -4.0545662729752068639e-14,
    -8.1519341976054721522e-14,
    2.6335093153082322977e-12,
    -1.2975133253453532498e-11,
    -5.4154120542946279317e-11,
    1.051212273321532285e-09,
    -4.1126339803469836976e-09,
    -2.9070369957882005086e-08,
    4.2347877827932403518e-07,
    -1.3654692000834678645e-06,
    -1.3882523362786468719e-05,
    0.0001867342080340571352,
    -0.00074070253416626697512,
    -0.0060336708714301490533,
    0.24015818242558961693,
    1.6536545626831027356,
)

# 6.25 ≤ w < 16, аргумент sqrt(w) - 3.25
_TAIL_COEFFICIENTS: Final[tuple[float, ...]] = (
    2.2137376921775787049e-09,
    9.0756561938885390979e-08,
    -2.7517406297064545428e-07,
    1.8239629214389227755e-08,
    1.5027403968909827627e-06,
    -4.013867526981545969e-06,
    2.9234449089955446044e-06,
    1.2475304481671778723e-05,
    -4.7318229009055733981e-05,
    6.8284851459573175448e-05,
    2.4031110387097893999e-05,
    -0.0003550375203628474796,
    0.00095328937973738049703,
    -0.0016882755560235047313,
    0.0024914420961078508066,
    -0.0037512085075692412107,
    0.005370914553590063617,
    1.0052589676941592334,
    3.0838856104922207635,
)

# w ≥ 16, аргумент sqrt(w) - 5
_FAR_TAIL_COEFFICIENTS: Final[tuple[float, ...]] = (
    -2.7109920616438573243e-11,
    -2.5556418169965252055e-10,
    1.5076572693500548083e-09,
    -3.7894654401267369937e-09,
    7.6157012080783393804e-09,
    -1.4960026627149240478e-08,
    2.9147953450901080826e-08,
    -6.7711997758452339498e-08,
    2.2900482228026654717e-07,
    -9.9298272942317002539e-07,
    4.5260625972231537039e-06,
    -1.9681778105531670567e-05,
    7.5995277030017761139e-05,
    -0.00021503011930044477347,
    -0.00013871931833623122026,
    1.0103004648645343977,
    4.8499064014085844221,
)

# d/dx erf(x) = 2/sqrt(pi) * exp(-x^2)
_TWO_OVER_SQRT_PI: Final[float] = 2.0 / math.sqrt(math.pi)


def _horner(coefficients: tuple[float, ...], w: float) -> float:
    result = 0.0
    for coefficient in coefficients:
        result = result * w + coefficient
    return result


def _initial_estimate(w: float) -> float:
    """Полином Giles для |erf^-1(y)| / |y| по w = -ln(1 - y^2)."""
    if w < _CENTRAL_BRANCH_LIMIT:
        return _horner(_CENTRAL_COEFFICIENTS, w - 3.125)
    if w < _TAIL_BRANCH_LIMIT:
        return _horner(_TAIL_COEFFICIENTS, math.sqrt(w) - 3.25)
    return _horner(_FAR_TAIL_COEFFICIENTS, math.sqrt(w) - 5.0)


# =============================================================================
# INVERSE ERROR FUNCTION
# =============================================================================


def inverse_error_function(y: float) -> float:
    """
    Обратная функция ошибок erf^-1(y) для y ∈ [-1, 1].

    Args:
        y: Значение erf

    Returns:
        x такое, что erf(x) ≈ y (в пределах INVERSE_ERF_TOLERANCE);
        ±inf на границах, 0 в нуле

    Raises:
        InvalidArgumentError: Если y вне [-1, 1] или NaN

    Examples:
        >>> inverse_error_function(0.0)
        0.0
        >>> inverse_error_function(1.0)
        inf
        >>> round(inverse_error_function(0.5), 3)
        0.477
    """
    validate_is_in_inclusive_interval(y, -1.0, 1.0, "Error function value").raise_for_error()

    if y == 0:
        return 0.0
    if abs(y) == 1:
        return math.copysign(math.inf, y)

    w = -math.log((1.0 - y) * (1.0 + y))
    magnitude = abs(y)
    x = _initial_estimate(w) * magnitude

    for _ in range(NEWTON_REFINEMENT_STEPS):
        if w < _CENTRAL_BRANCH_LIMIT:
            residual = math.erf(x) - magnitude
        else:
            # erf(x) - |y| = (1 - |y|) - erfc(x); 1 - |y| точно
            residual = (1.0 - magnitude) - math.erfc(x)
        x -= residual / (_TWO_OVER_SQRT_PI * math.exp(-x * x))
    return math.copysign(x, y)


# =============================================================================
# QNORM
# =============================================================================


def qnorm(p: float, mu: float = 0.0, sigma: float = 1.0) -> float:
    """
    Квантиль нормального распределения N(mu, sigma^2).

    Φ^-1(p) = sqrt(2) * erf^-1(2p - 1), поэтому точность qnorm согласована
    с inverse_error_function.

    Args:
        p: Вероятность, строго в (0, 1)
        mu: Среднее
        sigma: Стандартное отклонение (конечное, > 0)

    Returns:
        z такое, что P(X ≤ z) ≈ p (в пределах QNORM_TOLERANCE для N(0, 1));
        -inf для p < ~5.6e-17, где 2p - 1 неотличимо от -1

    Raises:
        InvalidArgumentError: Если p ∉ (0, 1) или sigma не конечное положительное

    Examples:
        >>> qnorm(0.5)
        0.0
        >>> round(qnorm(0.95), 3)
        1.645
    """
    validate_is_in_exclusive_interval(p, 0.0, 1.0, "Probability").raise_for_error()
    validate_is_finite_and_positive(sigma, "Standard deviation").raise_for_error()

    return mu + sigma * math.sqrt(2.0) * inverse_error_function(2.0 * p - 1.0)
