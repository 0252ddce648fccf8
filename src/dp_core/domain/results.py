"""
Results — value objects результатов числовых операций и валидации

Две непересекающиеся таксономии ошибок:
- ArithmeticResult: флаг ok + насыщенное значение (никогда не исключение)
- ValidationStatus: OK или INVALID_ARGUMENT со структурированным описанием

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. При ok=False ArithmeticResult.value равен границе домена (max или lowest)
2. ValidationStatus бинарен: частичных/warning состояний нет
3. Сообщение об ошибке — чистая функция полей статуса
"""

from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, Field

from dp_core.domain.numeric_types import format_number


# =============================================================================
# ARITHMETIC
# =============================================================================


class ArithmeticResult(NamedTuple):
    """
    Результат overflow-checked операции.

    Распаковывается как пара: ``value, ok = safe_add(a, b)``.
    """

    value: int | float
    ok: bool


# =============================================================================
# VALIDATION
# =============================================================================


class StatusCode(str, Enum):
    """Код результата валидации"""

    OK = "OK"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"


class Requirement(str, Enum):
    """Нарушенное требование к параметру"""

    SET = "set"
    VALID_NUMBER = "valid_number"
    POSITIVE = "positive"
    NON_NEGATIVE = "non_negative"
    FINITE = "finite"
    FINITE_AND_POSITIVE = "finite_and_positive"
    FINITE_AND_NON_NEGATIVE = "finite_and_non_negative"
    LESSER_THAN = "lesser_than"
    LESSER_THAN_OR_EQUAL_TO = "lesser_than_or_equal_to"
    GREATER_THAN = "greater_than"
    GREATER_THAN_OR_EQUAL_TO = "greater_than_or_equal_to"
    IN_INTERVAL = "in_interval"


# Требования без границ: "<name> must be <text>, but is <value>."
_PLAIN_REQUIREMENT_TEXT: dict[Requirement, str] = {
    Requirement.POSITIVE: "positive",
    Requirement.NON_NEGATIVE: "non-negative",
    Requirement.FINITE: "finite",
    Requirement.FINITE_AND_POSITIVE: "finite and positive",
    Requirement.FINITE_AND_NON_NEGATIVE: "finite and non-negative",
}

# Сравнения с одной границей: "<name> must be <text> <bound>, but is <value>."
_COMPARISON_TEXT: dict[Requirement, str] = {
    Requirement.LESSER_THAN: "lesser than",
    Requirement.LESSER_THAN_OR_EQUAL_TO: "lesser than or equal to",
    Requirement.GREATER_THAN: "greater than",
    Requirement.GREATER_THAN_OR_EQUAL_TO: "greater than or equal to",
}


class ValidationStatus(BaseModel):
    """
    Результат проверки параметра.

    Immutable модель. Для ошибки хранит имя параметра, нарушенное требование,
    фактическое значение и границы, из которых строится сообщение.
    """

    code: StatusCode = Field(StatusCode.OK, description="Код результата")
    requirement: Requirement | None = Field(None, description="Нарушенное требование")
    parameter_name: str | None = Field(None, description="Имя параметра от вызывающего кода")
    value: float | None = Field(None, description="Проверенное значение")
    bound: float | None = Field(None, description="Граница сравнения")
    lower_bound: float | None = Field(None, description="Нижняя граница интервала")
    upper_bound: float | None = Field(None, description="Верхняя граница интервала")
    include_lower: bool = Field(False, description="Нижняя граница включена")
    include_upper: bool = Field(False, description="Верхняя граница включена")

    model_config = {"frozen": True}

    @classmethod
    def success(cls) -> "ValidationStatus":
        return _OK_STATUS

    @classmethod
    def invalid(
        cls, requirement: Requirement, parameter_name: str, **details: object
    ) -> "ValidationStatus":
        """Статус INVALID_ARGUMENT для нарушенного требования."""
        return cls(
            code=StatusCode.INVALID_ARGUMENT,
            requirement=requirement,
            parameter_name=parameter_name,
            **details,
        )

    @property
    def ok(self) -> bool:
        return self.code == StatusCode.OK

    @property
    def message(self) -> str:
        """Человекочитаемое описание ошибки (пустая строка для OK)."""
        if self.ok:
            return ""
        return _render_message(self)

    def raise_for_error(self) -> None:
        """
        Превращение ошибки валидации в исключение.

        Raises:
            InvalidArgumentError: Если статус не OK
        """
        if not self.ok:
            raise InvalidArgumentError(self)


_OK_STATUS = ValidationStatus()


class InvalidArgumentError(ValueError):
    """
    Параметр не прошёл валидацию.

    Конструктор механизма обязан отказаться от построения, а не подставлять
    значение по умолчанию.
    """

    def __init__(self, status: ValidationStatus):
        super().__init__(status.message)
        self.status = status


# =============================================================================
# MESSAGE RENDERING
# =============================================================================


def _interval_text(status: ValidationStatus) -> str:
    left = "[" if status.include_lower else "("
    right = "]" if status.include_upper else ")"
    bounds = f"{left}{format_number(status.lower_bound)},{format_number(status.upper_bound)}{right}"

    if status.include_lower and status.include_upper:
        return f"in the inclusive interval {bounds}"
    if not status.include_lower and not status.include_upper:
        return f"in the exclusive interval {bounds}"
    return f"in the interval {bounds}"


def _render_message(status: ValidationStatus) -> str:
    name = status.parameter_name
    requirement = status.requirement

    if requirement is Requirement.SET:
        return f"{name} must be set."

    actual = format_number(status.value)

    if requirement is Requirement.VALID_NUMBER:
        return f"{name} must be a valid numeric value, but is {actual}."
    if requirement in _PLAIN_REQUIREMENT_TEXT:
        return f"{name} must be {_PLAIN_REQUIREMENT_TEXT[requirement]}, but is {actual}."
    if requirement in _COMPARISON_TEXT:
        bound = format_number(status.bound)
        return f"{name} must be {_COMPARISON_TEXT[requirement]} {bound}, but is {actual}."

    # Requirement.IN_INTERVAL
    return f"{name} must be {_interval_text(status)}, but is {actual}."
