"""
Rounding Policy — единственный примитив округления движка

Модуль содержит перечисление режимов округления и функцию принятия
решения об округлении частного по остатку. Все операции, чей точный
результат не помещается в целевой scale (divide, set_scale, sqrt),
используют ТОЛЬКО apply_rounding — дублирующей логики округления нет.

Решение принимается на модулях (magnitudes):
    |x| = q + r / d,  0 <= r < d

и знаке результата (negative), который влияет на FLOOR/CEIL.
"""

from enum import Enum
from typing import Final


# =============================================================================
# ENUMS
# =============================================================================


class RoundingMode(str, Enum):
    """
    Режим округления при невозможности точного представления.

    DOWN      — к нулю (truncation)
    UP        — от нуля
    FLOOR     — к -inf
    CEIL      — к +inf
    HALF_UP   — к ближайшему, tie от нуля
    HALF_EVEN — к ближайшему, tie к чётной цифре (banker's rounding)
    """

    DOWN = "DOWN"
    UP = "UP"
    FLOOR = "FLOOR"
    CEIL = "CEIL"
    HALF_UP = "HALF_UP"
    HALF_EVEN = "HALF_EVEN"


# Режим по умолчанию: усечение, как в итерационном расчёте π
DEFAULT_ROUNDING: Final[RoundingMode] = RoundingMode.DOWN


# =============================================================================
# ROUNDING DECISION
# =============================================================================


def coerce_rounding_mode(mode: RoundingMode | str) -> RoundingMode:
    """
    Приведение аргумента к RoundingMode.

    Args:
        mode: RoundingMode или его строковое имя ("HALF_EVEN")

    Returns:
        RoundingMode

    Raises:
        ValueError: Неизвестное имя режима
        TypeError: Аргумент не RoundingMode и не str
    """
    if isinstance(mode, RoundingMode):
        return mode

    if isinstance(mode, str):
        try:
            return RoundingMode(mode.upper())
        except ValueError:
            raise ValueError(f"Unknown rounding mode: {mode!r}") from None

    raise TypeError(f"rounding mode must be RoundingMode or str, got {type(mode).__name__}")


def apply_rounding(
    quotient: int,
    remainder: int,
    divisor: int,
    mode: RoundingMode,
    negative: bool = False,
) -> int:
    """
    Округление модуля частного по остатку.

    Args:
        quotient: Модуль усечённого частного q (>= 0)
        remainder: Остаток r, 0 <= r < divisor
        divisor: Делитель d (> 0), относительно которого сравнивается 2r
        mode: Режим округления
        negative: True если итоговый результат отрицательный

    Returns:
        q или q + 1 (модуль округлённого частного)

    Examples:
        >>> apply_rounding(0, 5, 10, RoundingMode.HALF_UP)
        1
        >>> apply_rounding(0, 5, 10, RoundingMode.HALF_EVEN)
        0
        >>> apply_rounding(1, 5, 10, RoundingMode.HALF_EVEN)
        2
        >>> apply_rounding(3, 1, 10, RoundingMode.FLOOR, negative=True)
        4
    """
    if quotient < 0 or remainder < 0:
        raise ValueError(
            f"quotient and remainder must be magnitudes, got q={quotient}, r={remainder}"
        )
    if divisor <= 0:
        raise ValueError(f"divisor must be positive, got {divisor}")
    if remainder >= divisor:
        raise ValueError(f"remainder {remainder} must be less than divisor {divisor}")

    # Точный результат: округлять нечего
    if remainder == 0:
        return quotient

    if mode is RoundingMode.DOWN:
        return quotient

    if mode is RoundingMode.UP:
        return quotient + 1

    if mode is RoundingMode.FLOOR:
        return quotient + 1 if negative else quotient

    if mode is RoundingMode.CEIL:
        return quotient if negative else quotient + 1

    # HALF_*: сравнение 2|r| с делителем
    twice = 2 * remainder

    if mode is RoundingMode.HALF_UP:
        return quotient + 1 if twice >= divisor else quotient

    if mode is RoundingMode.HALF_EVEN:
        if twice > divisor:
            return quotient + 1
        if twice == divisor:
            # tie → к чётной младшей цифре
            return quotient + 1 if quotient % 2 == 1 else quotient
        return quotient

    raise ValueError(f"Unsupported rounding mode: {mode!r}")
