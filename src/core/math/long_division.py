"""
Long Division — деление «столбиком», цифра за цифрой

Альтернативная стратегия контракта divide: сносится следующая цифра
делимого, делитель вычитается, пока помещается, число вычитаний —
очередная цифра частного.

Асимптотически медленнее, чем divide (одно целочисленное divmod), но
результат в режиме scale совпадает с divide(..., scale, DOWN) цифра в цифру.

Режим significant: остановка после digits значащих цифр частного
(считая от первой ненулевой), но не раньше, чем получена вся целая часть
частного — scale результата не бывает отрицательным.
"""

from src.core.math.decimal_value import (
    ZERO,
    DecimalValue,
    ensure_decimal,
    int_to_digits,
    validate_scale,
)
from src.core.math.errors import DivisionByZero


def long_divide(
    dividend: DecimalValue,
    divisor: DecimalValue,
    digits: int,
    significant: bool = False,
) -> DecimalValue:
    """
    Деление столбиком с усечением к нулю.

    Args:
        dividend: Делимое
        divisor: Делитель
        digits: Число дробных цифр (significant=False) или значащих цифр
            частного (significant=True)
        significant: Считать digits значащими цифрами

    Returns:
        Усечённое частное

    Raises:
        DivisionByZero: Если divisor == 0
        InvalidScale: Если digits отрицательный или не int

    Examples:
        >>> from src.core.math.decimal_value import parse
        >>> long_divide(parse("1"), parse("7"), 10)
        DecimalValue('0.1428571428')
        >>> long_divide(parse("1"), parse("700"), 3, significant=True)
        DecimalValue('0.00142')
        >>> long_divide(parse("-22"), parse("7"), 2)
        DecimalValue('-3.14')
    """
    ensure_decimal(dividend, "dividend")
    ensure_decimal(divisor, "divisor")
    validate_scale(digits, "digits")

    if divisor.unscaled == 0:
        raise DivisionByZero(f"Division by zero: {dividend} / {divisor}")
    if dividend.unscaled == 0:
        return ZERO

    # Точная дробь numerator / denominator в целых числах
    numerator_digits = int_to_digits(abs(dividend.unscaled) * 10**divisor.scale)
    denominator = abs(divisor.unscaled) * 10**dividend.scale

    quotient = 0
    remainder = 0
    fraction_digits = 0
    significant_digits = 0
    position = 0

    while True:
        if position < len(numerator_digits):
            digit = ord(numerator_digits[position]) - ord("0")
        else:
            # Целая часть частного получена; дальше сносятся нули
            done = significant_digits >= digits if significant else fraction_digits >= digits
            if done:
                break
            digit = 0
            fraction_digits += 1

        remainder = remainder * 10 + digit
        quotient_digit = 0
        while remainder >= denominator:
            remainder -= denominator
            quotient_digit += 1

        quotient = quotient * 10 + quotient_digit
        if significant_digits or quotient_digit:
            significant_digits += 1
        position += 1

    negative = (dividend.unscaled < 0) != (divisor.unscaled < 0)
    return DecimalValue(-quotient if negative else quotient, fraction_digits)
