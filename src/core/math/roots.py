"""
Square Roots — квадратный корень произвольной точности

Две реализации одного контракта sqrt(value, scale, rounding):

1. sqrt — сведение к целочисленному корню:
       I = value.unscaled * 10^(2w - value.scale),  root = isqrt(I)
   root на scale w приближает корень снизу; финальное округление до scale
   выполняется отдельным явным шагом set_scale.

2. sqrt_newton — итерация Ньютона в десятичной арифметике:
       x := (x + n / x) / 2
   с делением на scale + guard_digits. Ограничена max_iterations.

Неточный корень помечается sticky-цифрой 1 за последней цифрой root:
истинное значение лежит строго между root и root + 1, и sticky-цифра
передаёт это в set_scale (UP/CEIL видят ненулевой остаток, HALF_* никогда
не видят ложный tie). Поэтому обе реализации дают одинаковый результат
при любом rounding mode.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. value < 0 → NegativeOperand
2. value == 0 → 0 без итераций
3. Итерации Ньютона всегда ограничены (гарантия завершения)
"""

import logging
from dataclasses import dataclass
from typing import Final

from src.core.math.arithmetic import add, divide, multiply, set_scale
from src.core.math.decimal_value import (
    TWO,
    ZERO,
    DecimalValue,
    compare,
    ensure_decimal,
    validate_scale,
)
from src.core.math.errors import NegativeOperand
from src.core.math.rounding import (
    DEFAULT_ROUNDING,
    RoundingMode,
    coerce_rounding_mode,
)

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Дополнительные цифры целочисленного корня сверх целевого scale.
# Одной цифры достаточно: вместе со sticky-цифрой она однозначно
# определяет решение HALF_* округления.
SQRT_GUARD_DIGITS: Final[int] = 1

# Запас точности деления в десятичной итерации Ньютона
NEWTON_GUARD_DIGITS: Final[int] = 5

# Предел итераций десятичного Ньютона
NEWTON_MAX_ITERATIONS: Final[int] = 100


@dataclass(frozen=True)
class NewtonSqrtConfig:
    """Параметры десятичной итерации Ньютона."""

    guard_digits: int = NEWTON_GUARD_DIGITS
    max_iterations: int = NEWTON_MAX_ITERATIONS


# =============================================================================
# INTEGER SQUARE ROOT
# =============================================================================


def isqrt(n: int) -> int:
    """
    floor(sqrt(n)) для неотрицательного int методом Ньютона.

    Seed 2^ceil(bitlength/2) >= sqrt(n), поэтому итерация
    x := (x + n // x) // 2 монотонно убывает до неподвижной точки.

    Raises:
        NegativeOperand: Если n < 0
        TypeError: Если n не int

    Examples:
        >>> isqrt(0)
        0
        >>> isqrt(15)
        3
        >>> isqrt(16)
        4
        >>> isqrt(10**40)
        100000000000000000000
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"isqrt expects int, got {type(n).__name__}")
    if n < 0:
        raise NegativeOperand(f"Square root of negative integer: {n}")
    if n < 2:
        return n

    x = 1 << ((n.bit_length() + 1) // 2)
    while True:
        y = (x + n // x) // 2
        if y >= x:
            return x
        x = y


# =============================================================================
# DECIMAL SQUARE ROOT
# =============================================================================


def sqrt(
    value: DecimalValue,
    scale: int,
    rounding: RoundingMode | str = DEFAULT_ROUNDING,
) -> DecimalValue:
    """
    Квадратный корень с scale дробными цифрами.

    Args:
        value: Подкоренное значение (>= 0)
        scale: Число дробных цифр результата
        rounding: Режим округления (default: DOWN)

    Returns:
        sqrt(value), округлённый до scale

    Raises:
        NegativeOperand: Если value < 0
        InvalidScale: Если scale отрицательный или не int

    Examples:
        >>> from src.core.math.decimal_value import parse
        >>> sqrt(parse("2"), 10)
        DecimalValue('1.4142135623')
        >>> sqrt(parse("2.25"), 0, RoundingMode.HALF_EVEN)
        DecimalValue('2')
        >>> sqrt(parse("0.0001"), 3)
        DecimalValue('0.010')
    """
    ensure_decimal(value, "value")
    validate_scale(scale)
    mode = coerce_rounding_mode(rounding)

    if value.unscaled < 0:
        raise NegativeOperand(f"Square root of negative value: {value}")
    if value.unscaled == 0:
        return ZERO

    # Рабочий scale w: 2w >= value.scale, чтобы экспонента была >= 0
    working_scale = max(scale + SQRT_GUARD_DIGITS, (value.scale + 1) // 2)
    radicand = value.unscaled * 10 ** (2 * working_scale - value.scale)

    root = isqrt(radicand)
    if root * root != radicand:
        root, working_scale = root * 10 + 1, working_scale + 1

    return set_scale(DecimalValue(root, working_scale), scale, mode)


def sqrt_newton(
    value: DecimalValue,
    scale: int,
    rounding: RoundingMode | str = DEFAULT_ROUNDING,
    config: NewtonSqrtConfig | None = None,
) -> DecimalValue:
    """
    Квадратный корень десятичной итерацией Ньютона.

    Seed: 10^floor(e / 2), где e — десятичный порядок value (для value >= 1
    это 1 с floor((integer_digits - 1) / 2) нулями). После первого шага
    итерация (деление с усечением на рабочем scale) убывает монотонно;
    остановка — когда очередной шаг перестаёт уменьшать x (неподвижная
    точка floor-корня на рабочем scale) или по max_iterations.

    Args:
        value: Подкоренное значение (>= 0)
        scale: Число дробных цифр результата
        rounding: Режим округления (default: DOWN)
        config: Параметры итерации (default: NewtonSqrtConfig())

    Returns:
        sqrt(value), округлённый до scale

    Raises:
        NegativeOperand: Если value < 0
        InvalidScale: Если scale отрицательный или не int
    """
    ensure_decimal(value, "value")
    validate_scale(scale)
    mode = coerce_rounding_mode(rounding)
    config = config or NewtonSqrtConfig()
    validate_scale(config.guard_digits, "guard_digits")

    if config.max_iterations < 1:
        raise ValueError(f"max_iterations must be positive, got {config.max_iterations}")
    if value.unscaled < 0:
        raise NegativeOperand(f"Square root of negative value: {value}")
    if value.unscaled == 0:
        return ZERO

    working_scale = scale + max(config.guard_digits, 1)
    order = value.precision - value.scale - 1
    half_order = order // 2
    if half_order >= 0:
        x = DecimalValue(10**half_order)
    else:
        # Seed не мельче рабочего scale: все шаги остаются целочисленными
        x = DecimalValue(1, min(-half_order, working_scale))

    converged = False
    for iteration in range(1, config.max_iterations + 1):
        quotient = divide(value, x, working_scale, RoundingMode.DOWN)
        candidate = divide(add(x, quotient), TWO, working_scale, RoundingMode.DOWN)
        logger.debug(
            "sqrt_newton iteration=%d scale=%d candidate_digits=%d",
            iteration,
            working_scale,
            candidate.precision,
        )

        # Первый шаг поднимает seed не ниже корня; дальше только убывание
        if iteration > 1 and compare(candidate, x) >= 0:
            converged = True
            break
        x = candidate

        # Корень меньше единицы рабочего scale: floor-корень равен 0
        if candidate.is_zero():
            converged = True
            break

    if not converged:
        logger.warning(
            "sqrt_newton hit iteration cap: max_iterations=%d scale=%d",
            config.max_iterations,
            scale,
        )

    # x: floor-корень на working_scale (у нулевого x scale уже сброшен в 0)
    if compare(multiply(x, x), value) != 0:
        x = DecimalValue(x.unscaled * 10 + 1, working_scale + 1)

    return set_scale(x, scale, mode)
