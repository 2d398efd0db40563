"""
Arithmetic Operations — операции над DecimalValue

Stateless функции над одним или двумя DecimalValue:
- add / subtract: выравнивание scale, результат на общем (большем) scale
- multiply: точное произведение, scale = сумма scale операндов
- divide: точное деление или деление до target scale с округлением
- set_scale: rescale с округлением (pad нулями или усечение + rounding)
- negate / absolute

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Операнды никогда не мутируют: всегда возвращается новый DecimalValue
2. Округление выполняется ТОЛЬКО через rounding.apply_rounding
3. Деление на ноль → DivisionByZero, никогда 0 или бесконечность
4. Знак частного = XOR знаков операндов; остаток анализируется по модулю
"""

from math import gcd

from src.core.math.decimal_value import (
    ZERO,
    DecimalValue,
    align,
    ensure_decimal,
    validate_scale,
)
from src.core.math.errors import DivisionByZero, NonTerminatingDivision
from src.core.math.rounding import (
    DEFAULT_ROUNDING,
    RoundingMode,
    apply_rounding,
    coerce_rounding_mode,
)

# =============================================================================
# ADD / SUBTRACT / MULTIPLY
# =============================================================================


def add(a: DecimalValue, b: DecimalValue) -> DecimalValue:
    """
    Сложение: a + b на общем scale max(a.scale, b.scale).

    Examples:
        >>> from src.core.math.decimal_value import parse
        >>> add(parse("1.25"), parse("-3"))
        DecimalValue('-1.75')
    """
    ensure_decimal(a, "a")
    ensure_decimal(b, "b")

    a_unscaled, b_unscaled, scale = align(a, b)
    return DecimalValue(a_unscaled + b_unscaled, scale)


def subtract(a: DecimalValue, b: DecimalValue) -> DecimalValue:
    """
    Вычитание: a - b на общем scale.

    Знак результата корректен во всех комбинациях знаков;
    a == b даёт точный 0.

    Examples:
        >>> from src.core.math.decimal_value import parse
        >>> subtract(parse("0.1"), parse("0.25"))
        DecimalValue('-0.15')
        >>> subtract(parse("2.50"), parse("2.5"))
        DecimalValue('0')
    """
    ensure_decimal(a, "a")
    ensure_decimal(b, "b")

    a_unscaled, b_unscaled, scale = align(a, b)
    return DecimalValue(a_unscaled - b_unscaled, scale)


def multiply(a: DecimalValue, b: DecimalValue) -> DecimalValue:
    """
    Умножение: точное, scale результата = a.scale + b.scale.

    Examples:
        >>> from src.core.math.decimal_value import parse
        >>> multiply(parse("1.5"), parse("-0.25"))
        DecimalValue('-0.375')
    """
    ensure_decimal(a, "a")
    ensure_decimal(b, "b")

    return DecimalValue(a.unscaled * b.unscaled, a.scale + b.scale)


def negate(a: DecimalValue) -> DecimalValue:
    ensure_decimal(a, "a")
    return -a


def absolute(a: DecimalValue) -> DecimalValue:
    ensure_decimal(a, "a")
    return abs(a)


# =============================================================================
# RESCALE
# =============================================================================


def set_scale(
    value: DecimalValue,
    new_scale: int,
    rounding: RoundingMode | str = DEFAULT_ROUNDING,
) -> DecimalValue:
    """
    Rescale до new_scale дробных цифр.

    - new_scale >= value.scale: дополнение нулями (точно)
    - new_scale < value.scale: деление модуля на 10^(scale - new_scale)
      и округление по остатку

    Args:
        value: Исходное значение
        new_scale: Целевой scale (>= 0)
        rounding: Режим округления (default: DOWN)

    Returns:
        DecimalValue со scale == new_scale (кроме нуля, у которого scale 0)

    Raises:
        InvalidScale: Если new_scale отрицательный или не int

    Examples:
        >>> from src.core.math.decimal_value import parse
        >>> set_scale(parse("0.5"), 0, RoundingMode.HALF_UP)
        DecimalValue('1')
        >>> set_scale(parse("0.5"), 0, RoundingMode.HALF_EVEN)
        DecimalValue('0')
        >>> set_scale(parse("-1.25"), 1, RoundingMode.FLOOR)
        DecimalValue('-1.3')
        >>> set_scale(parse("1.5"), 3)
        DecimalValue('1.500')
    """
    ensure_decimal(value, "value")
    validate_scale(new_scale, "new_scale")
    mode = coerce_rounding_mode(rounding)

    if new_scale >= value.scale:
        return DecimalValue(value.unscaled * 10 ** (new_scale - value.scale), new_scale)

    divisor = 10 ** (value.scale - new_scale)
    negative = value.unscaled < 0
    quotient, remainder = divmod(abs(value.unscaled), divisor)
    quotient = apply_rounding(quotient, remainder, divisor, mode, negative)

    return DecimalValue(-quotient if negative else quotient, new_scale)


# =============================================================================
# DIVISION
# =============================================================================


def divide(
    dividend: DecimalValue,
    divisor: DecimalValue,
    scale: int | None = None,
    rounding: RoundingMode | str = DEFAULT_ROUNDING,
) -> DecimalValue:
    """
    Деление dividend / divisor.

    Без scale выполняется точное деление: результат возвращается в
    минимальном представлении, если частное имеет конечную десятичную
    запись, иначе поднимается NonTerminatingDivision (значение по
    умолчанию для точности не подбирается).

    Со scale:
        numerator = |dividend.unscaled| * 10^(scale + divisor.scale - dividend.scale)
        q, r = divmod(numerator, |divisor.unscaled|)
    При отрицательной экспоненте на 10^k умножается делитель, так что
    отброшенные цифры остаются в остатке и участвуют в округлении.

    Args:
        dividend: Делимое
        divisor: Делитель
        scale: Целевой scale (None → точное деление)
        rounding: Режим округления (default: DOWN), игнорируется при scale=None

    Returns:
        Частное со scale == scale (или минимальным scale при точном делении)

    Raises:
        DivisionByZero: Если divisor == 0
        NonTerminatingDivision: Если scale=None и частное бесконечно
        InvalidScale: Если scale отрицательный или не int

    Examples:
        >>> from src.core.math.decimal_value import parse
        >>> divide(parse("1"), parse("8"))
        DecimalValue('0.125')
        >>> divide(parse("2"), parse("3"), 5)
        DecimalValue('0.66666')
        >>> divide(parse("2"), parse("3"), 5, RoundingMode.HALF_UP)
        DecimalValue('0.66667')
        >>> divide(parse("-7"), parse("2"), 0, RoundingMode.HALF_EVEN)
        DecimalValue('-4')
    """
    ensure_decimal(dividend, "dividend")
    ensure_decimal(divisor, "divisor")

    if divisor.unscaled == 0:
        raise DivisionByZero(f"Division by zero: {dividend} / {divisor}")

    if scale is None:
        return _divide_exact(dividend, divisor)

    validate_scale(scale)
    mode = coerce_rounding_mode(rounding)

    exponent = scale + divisor.scale - dividend.scale
    if exponent >= 0:
        numerator = abs(dividend.unscaled) * 10**exponent
        denominator = abs(divisor.unscaled)
    else:
        numerator = abs(dividend.unscaled)
        denominator = abs(divisor.unscaled) * 10**-exponent

    negative = (dividend.unscaled < 0) != (divisor.unscaled < 0)
    quotient, remainder = divmod(numerator, denominator)
    quotient = apply_rounding(quotient, remainder, denominator, mode, negative)

    return DecimalValue(-quotient if negative else quotient, scale)


def _divide_exact(dividend: DecimalValue, divisor: DecimalValue) -> DecimalValue:
    """
    Точное деление: частное = numerator / denominator несократимой дроби.

    Конечная десятичная запись существует тогда и только тогда, когда в
    знаменателе нет простых множителей, кроме 2 и 5.
    """
    if dividend.unscaled == 0:
        return ZERO

    numerator = abs(dividend.unscaled) * 10**divisor.scale
    denominator = abs(divisor.unscaled) * 10**dividend.scale

    common = gcd(numerator, denominator)
    numerator //= common
    denominator //= common

    rest = denominator
    twos = 0
    while rest % 2 == 0:
        rest //= 2
        twos += 1
    fives = 0
    while rest % 5 == 0:
        rest //= 5
        fives += 1

    if rest != 1:
        raise NonTerminatingDivision(
            f"Non-terminating decimal expansion: {dividend} / {divisor}; "
            f"pass an explicit scale and rounding mode"
        )

    scale = max(twos, fives)
    quotient = numerator * 10**scale // denominator
    negative = (dividend.unscaled < 0) != (divisor.unscaled < 0)

    return DecimalValue(-quotient if negative else quotient, scale)
