"""
dp_core — numeric-safety foundation for differential-privacy mechanisms.

Чистые, детерминированные примитивы без состояния:
- math/       : overflow-safe арифметика, квантование, обратные распределения,
                описательная статистика
- contracts/  : валидация параметров приватности (epsilon, delta, bounds)
- domain/     : числовые домены и value objects результатов
"""

__version__ = "0.1.0"
