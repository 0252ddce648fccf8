"""
Privacy defaults — значения параметров приватности по умолчанию.
"""

import math
from typing import Final

# Бюджет приватности по умолчанию для механизмов без явного epsilon
DEFAULT_EPSILON: Final[float] = math.log(3)


def default_epsilon() -> float:
    """Epsilon по умолчанию: ln(3)."""
    return DEFAULT_EPSILON
