"""
Тесты для модуля Quantization

Для шага-степени двойки используется точное сравнение float: округление
обязано быть bit-exact.

Проверяет:
1. next_power_of_two для положительных и отрицательных экспонент
2. Округление к кратному с правилом "half up"
3. Точность и идемпотентность для шага 2^k
4. grid_index и насыщение индекса
"""

import logging
import math
import sys

import pytest

from dp_core.math.quantization import (
    grid_index,
    is_power_of_two,
    next_power_of_two,
    round_to_nearest_multiple,
)

INT64_MAX = 2**63 - 1
SMALLEST_SUBNORMAL = 5e-324


# =============================================================================
# ТЕСТЫ NEXT POWER OF TWO
# =============================================================================


class TestNextPowerOfTwo:
    """Тесты next_power_of_two"""

    @pytest.mark.parametrize("x,expected", [(3.0, 4.0), (5.0, 8.0), (7.9, 8.0)])
    def test_positive_powers(self, x: float, expected: float) -> None:
        """Округление вверх до 2^k, k > 0"""
        assert next_power_of_two(x) == expected

    @pytest.mark.parametrize("x", [2.0, 8.0, 1.0, 0.5, 0.125, 2.0**-30])
    def test_exact_powers_are_fixed_points(self, x: float) -> None:
        """Точные степени двойки не меняются"""
        assert next_power_of_two(x) == x

    @pytest.mark.parametrize("x,expected", [(0.4, 0.5), (0.2, 0.25), (0.126, 0.25)])
    def test_negative_powers(self, x: float, expected: float) -> None:
        """Округление вверх до 2^-k"""
        assert next_power_of_two(x) == expected

    def test_tiny_values_map_to_a_power(self) -> None:
        """Субнормальные значения дают степень двойки, а не ноль"""
        assert next_power_of_two(SMALLEST_SUBNORMAL) == SMALLEST_SUBNORMAL

        result = next_power_of_two(3 * SMALLEST_SUBNORMAL)
        assert result == 4 * SMALLEST_SUBNORMAL
        assert is_power_of_two(result)

    def test_beyond_largest_power_is_infinity(self) -> None:
        """Выше 2^1023 конечной степени нет"""
        assert next_power_of_two(sys.float_info.max) == math.inf
        assert next_power_of_two(math.inf) == math.inf

    @pytest.mark.parametrize("x", [0.0, -1.0, -0.5, math.nan])
    def test_non_positive_raises(self, x: float) -> None:
        """x ≤ 0 и NaN отклоняются"""
        with pytest.raises(ValueError, match="x must be positive"):
            next_power_of_two(x)


class TestIsPowerOfTwo:
    """Тесты is_power_of_two"""

    @pytest.mark.parametrize("x", [1.0, 2.0, 0.25, 2.0**-1074, 2.0**1023])
    def test_powers(self, x: float) -> None:
        assert is_power_of_two(x)

    @pytest.mark.parametrize("x", [0.0, -2.0, 3.0, 0.1, math.inf, math.nan])
    def test_non_powers(self, x: float) -> None:
        assert not is_power_of_two(x)


# =============================================================================
# ТЕСТЫ ОКРУГЛЕНИЯ
# =============================================================================


class TestRoundToNearestMultiple:
    """Тесты round_to_nearest_multiple"""

    def test_positive_no_ties(self) -> None:
        """Положительные без ничьих"""
        assert round_to_nearest_multiple(4.9, 2.0) == 4.0
        assert round_to_nearest_multiple(5.1, 2.0) == 6.0

    def test_negative_no_ties(self) -> None:
        """Отрицательные без ничьих"""
        assert round_to_nearest_multiple(-4.9, 2.0) == -4.0
        assert round_to_nearest_multiple(-5.1, 2.0) == -6.0

    def test_positive_tie_rounds_up(self) -> None:
        """Ничья округляется к +inf"""
        assert round_to_nearest_multiple(5.0, 2.0) == 6.0
        assert round_to_nearest_multiple(0.375, 0.25) == 0.5

    def test_negative_tie_rounds_up(self) -> None:
        """Отрицательная ничья тоже к +inf, а не от нуля"""
        assert round_to_nearest_multiple(-5.0, 2.0) == -4.0
        assert round_to_nearest_multiple(-0.375, 0.25) == -0.25

    def test_negative_power_of_two_granularity(self) -> None:
        """Шаг 2^-k даёт точный результат"""
        assert round_to_nearest_multiple(0.2078795763, 0.25) == 0.25
        assert round_to_nearest_multiple(0.1, 1.0 / (1 << 10)) == 0.099609375
        assert round_to_nearest_multiple(0.3, 1.0 / (1 << 30)) == 322122547.0 / (1 << 30)

    @pytest.mark.parametrize("x", [6.0, -6.0, 0.0, 1024.0])
    def test_exact_multiple_is_unchanged(self, x: float) -> None:
        """Кратное шагу не меняется"""
        assert round_to_nearest_multiple(x, 2.0) == x

    @pytest.mark.parametrize("granularity", [2.0, 1.0, 0.25, 2.0**-10, 2.0**-30])
    @pytest.mark.parametrize("x", [0.1, -0.7, 3.14159, -123.456, 1e6 + 0.3, 7.5e-5])
    def test_power_of_two_result_is_exact_and_idempotent(
        self, x: float, granularity: float
    ) -> None:
        """Результат — точное кратное 2^k, повторное округление bit-exact"""
        rounded = round_to_nearest_multiple(x, granularity)

        assert (rounded / granularity).is_integer()
        assert round_to_nearest_multiple(rounded, granularity) == rounded
        assert abs(rounded - x) <= granularity / 2

    def test_arbitrary_granularity_is_approximate(self) -> None:
        """Шаг не степень двойки: допускается обычная floating ошибка"""
        assert round_to_nearest_multiple(7.0, 3.0) == 6.0
        assert round_to_nearest_multiple(0.36, 0.1) == pytest.approx(0.4)

    def test_non_finite_value_returned_as_is(self) -> None:
        """±inf и NaN не округляются"""
        assert round_to_nearest_multiple(math.inf, 2.0) == math.inf
        assert round_to_nearest_multiple(-math.inf, 2.0) == -math.inf
        assert math.isnan(round_to_nearest_multiple(math.nan, 2.0))

    @pytest.mark.parametrize("granularity", [0.0, -1.0, math.inf, math.nan])
    def test_invalid_granularity_raises(self, granularity: float) -> None:
        """Шаг должен быть конечным и положительным"""
        with pytest.raises(ValueError, match="granularity must be finite and positive"):
            round_to_nearest_multiple(1.0, granularity)


# =============================================================================
# ТЕСТЫ GRID INDEX
# =============================================================================


class TestGridIndex:
    """Тесты grid_index"""

    def test_index_of_snapped_value(self) -> None:
        """Номер узла сетки после округления"""
        assert grid_index(5.0, 2.0) == (3, True)
        assert grid_index(-5.0, 2.0) == (-2, True)
        assert grid_index(0.1, 1.0 / (1 << 10)) == (102, True)

    def test_huge_index_saturates(self) -> None:
        """Индекс вне int64 насыщается"""
        assert grid_index(1e300, 2.0**-20) == (INT64_MAX, True)

    def test_nan_fails(self) -> None:
        """NaN не имеет индекса"""
        value, ok = grid_index(math.nan, 2.0)
        assert not ok

    def test_non_power_of_two_granularity_is_logged(self, caplog) -> None:
        """Шаг не степень двойки → DEBUG-запись, степень двойки → тишина"""
        with caplog.at_level(logging.DEBUG, logger="dp_core.math.quantization"):
            grid_index(0.75, 0.25)
            assert "not a power of two" not in caplog.text

            grid_index(0.7, 0.1)
        assert "not a power of two" in caplog.text
