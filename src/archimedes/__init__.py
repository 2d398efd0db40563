"""Archimedes — приближение π удвоением сторон вписанного и описанного многоугольников.

Драйвер поверх src.core.math:
- явное состояние (count, a, b) и шаг удвоения
- таблица итераций для слоя представления
- разметка цифр приближения по эталону
"""

from .digits import (
    DEFAULT_GROUP_SIZE,
    DigitPresentation,
    group_digits,
    present_digits,
    verified_digit_count,
)
from .polygon import (
    DEFAULT_ITERATIONS,
    DEFAULT_PRECISION,
    INITIAL_SIDES,
    MAX_ITERATIONS,
    MAX_PRECISION,
    ArchimedesConfig,
    PiTable,
    PolygonRow,
    PolygonState,
    compute_pi,
    initial_state,
    iterate,
    step,
)

__all__ = [
    "DEFAULT_GROUP_SIZE",
    "DigitPresentation",
    "group_digits",
    "present_digits",
    "verified_digit_count",
    "DEFAULT_ITERATIONS",
    "DEFAULT_PRECISION",
    "INITIAL_SIDES",
    "MAX_ITERATIONS",
    "MAX_PRECISION",
    "ArchimedesConfig",
    "PiTable",
    "PolygonRow",
    "PolygonState",
    "compute_pi",
    "initial_state",
    "iterate",
    "step",
]
