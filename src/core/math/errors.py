"""
Decimal Errors — иерархия исключений десятичного движка

Все ошибки движка наследуются от DecimalArithmeticError и дополнительно
от встроенного исключения соответствующего смысла, чтобы вызывающий код
мог ловить их как стандартные ValueError / ZeroDivisionError.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ошибка всегда поднимается синхронно в точке вызова
2. Никаких sentinel-значений (NaN, Infinity, 0) вместо ошибки
3. Движок ничего не повторяет и не восстанавливает внутри себя
"""


class DecimalArithmeticError(ArithmeticError):
    """Базовая ошибка десятичного движка."""


class DecimalSyntaxError(DecimalArithmeticError, ValueError):
    """
    Некорректный десятичный литерал при парсинге.

    Грамматика: [+-]? digits? ('.' digits?)? и хотя бы одна цифра.
    """


class DivisionByZero(DecimalArithmeticError, ZeroDivisionError):
    """Делитель равен нулю. Никогда не превращается в 0 или бесконечность."""


class NonTerminatingDivision(DecimalArithmeticError):
    """
    Точное деление (без target scale) невозможно: частное не имеет
    конечной десятичной записи.

    Вызывающий код должен повторить деление с явным scale и rounding mode.
    """


class NegativeOperand(DecimalArithmeticError, ValueError):
    """Квадратный корень из отрицательного значения (комплексных нет)."""


class InvalidScale(DecimalArithmeticError, ValueError):
    """Запрошенный scale отрицательный или не целый."""
