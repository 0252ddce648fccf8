"""
Numeric Types — числовые домены фиксированной ширины

Python int не переполняется, а float всегда double, поэтому домен операции
(int64, uint32, float32, ...) задаётся явно через numpy dtype. Модуль
отвечает за:
- Разрешение домена (явный dtype или вывод из операндов)
- Границы домена (lowest / highest)
- Единообразное текстовое представление чисел для диагностики

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Поддерживаются только signed/unsigned integer и floating домены
2. Границы integer-доменов возвращаются как точные Python int
3. Форматирование чисел детерминировано (6 значащих цифр для float)
"""

import operator
from typing import Final

import numpy as np

# =============================================================================
# ДОМЕНЫ ПО УМОЛЧАНИЮ
# =============================================================================

# Домен для Python int операндов
DEFAULT_INTEGRAL_DTYPE: Final[np.dtype] = np.dtype(np.int64)

# Домен для Python float операндов
DEFAULT_FLOATING_DTYPE: Final[np.dtype] = np.dtype(np.float64)

# numpy dtype.kind: i (signed integer), u (unsigned integer), f (floating)
_SUPPORTED_KINDS: Final[str] = "iuf"


# =============================================================================
# РАЗРЕШЕНИЕ ДОМЕНА
# =============================================================================


def infer_dtype(*values: object) -> np.dtype:
    """
    Вывод числового домена из операндов.

    numpy-скаляры несут свой dtype; Python int → int64, Python float → float64.
    Смешанные операнды приводятся по правилам numpy.result_type.

    Raises:
        TypeError: Если операнд не числовой (или bool)
    """
    dtypes = []
    for value in values:
        if isinstance(value, (bool, np.bool_)):
            raise TypeError("bool is not a numeric domain")
        if isinstance(value, np.generic):
            dtypes.append(value.dtype)
        elif isinstance(value, int):
            dtypes.append(DEFAULT_INTEGRAL_DTYPE)
        elif isinstance(value, float):
            dtypes.append(DEFAULT_FLOATING_DTYPE)
        else:
            raise TypeError(f"Cannot infer numeric domain from {type(value).__name__}")

    if not dtypes:
        raise TypeError("Cannot infer numeric domain without operands")

    return np.result_type(*dtypes)


def resolve_dtype(dtype: object = None, *values: object) -> np.dtype:
    """
    Разрешение домена: явный dtype имеет приоритет над выводом из операндов.

    Args:
        dtype: Любое значение, принимаемое np.dtype (np.int64, "float32", ...),
            или None для вывода из values
        values: Операнды для вывода домена

    Returns:
        np.dtype поддерживаемого вида

    Raises:
        TypeError: Если домен не integer/floating
    """
    resolved = infer_dtype(*values) if dtype is None else np.dtype(dtype)
    if resolved.kind not in _SUPPORTED_KINDS:
        raise TypeError(f"Unsupported numeric domain: {resolved}")
    return resolved


def is_integral(dtype: np.dtype) -> bool:
    """True для signed/unsigned integer доменов."""
    return dtype.kind in "iu"


def is_signed(dtype: np.dtype) -> bool:
    """True для signed integer и floating доменов."""
    return dtype.kind in "if"


# =============================================================================
# ГРАНИЦЫ ДОМЕНА
# =============================================================================


def lowest(dtype: np.dtype) -> int | float:
    """
    Наименьшее представимое значение домена.

    Для floating это -max (не наименьшее положительное normal число).
    """
    if is_integral(dtype):
        return int(np.iinfo(dtype).min)
    return float(np.finfo(dtype).min)


def highest(dtype: np.dtype) -> int | float:
    """Наибольшее конечное представимое значение домена."""
    if is_integral(dtype):
        return int(np.iinfo(dtype).max)
    return float(np.finfo(dtype).max)


def as_integral_operand(value: object, dtype: np.dtype) -> int:
    """
    Приведение операнда integer-домена к точному Python int.

    Raises:
        TypeError: Если значение не integral (например, float)
        ValueError: Если значение не представимо в домене
    """
    exact = operator.index(value)
    if not lowest(dtype) <= exact <= highest(dtype):
        raise ValueError(f"{exact} is not representable as {dtype}")
    return exact


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


def format_number(value: int | float) -> str:
    """
    Текстовое представление числа для сообщений и диагностики.

    Integer — все цифры, float — 6 значащих цифр без хвостовых нулей.

    Examples:
        >>> format_number(-1.0)
        '-1'
        >>> format_number(0.25)
        '0.25'
        >>> format_number(float("inf"))
        'inf'
        >>> format_number(1.7976931348623157e308)
        '1.79769e+308'
    """
    if isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_)):
        return str(int(value))
    return f"{float(value):g}"
