"""
DecimalValue — неизменяемое десятичное число произвольной точности

Представление:
    value = unscaled / 10^scale

- unscaled: целое произвольной длины со знаком (Python int)
- scale: число младших цифр unscaled, считающихся дробными (>= 0)

Отрицательный scale не поддерживается: целые значения хранятся со scale 0.

Модуль содержит:
- DecimalValue (value object, frozen)
- parse / to_text (канонический текстовый формат)
- align / compare (сравнение по математическому значению)
- конверсии int <-> цифры без лимита CPython на длину int/str

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. unscaled == 0 → scale == 0
2. scale >= 0 и scale целый
3. Равенство и порядок определены на математическом значении, а не на
   представлении: 1.50 == 1.5 == parse("1.500")
4. Значения неизменяемы: операции всегда возвращают новый объект
5. Нормализация (снятие хвостовых нулей) выполняется при парсинге и по
   явному вызову normalized(), но не после каждой операции — scale
   результата операции определяется самой операцией
"""

import re
from dataclasses import dataclass
from typing import Final

from src.core.math.errors import DecimalSyntaxError, InvalidScale

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# [+-]? целая часть (может быть пустой) и необязательная дробная часть
_LITERAL_RE: Final[re.Pattern[str]] = re.compile(r"([+-]?)([0-9]*)(?:\.([0-9]*))?")

# Длина блока для int <-> str: CPython ограничивает прямую конверсию
# (sys.get_int_max_str_digits, по умолчанию 4300 цифр)
_STR_CHUNK_DIGITS: Final[int] = 1000

_STR_CHUNK_LIMIT: Final[int] = 10**_STR_CHUNK_DIGITS

_LOG10_2: Final[float] = 0.30102999566398120


# =============================================================================
# INT <-> DIGITS
# =============================================================================


def digit_count(n: int) -> int:
    """
    Количество десятичных цифр в |n| (для 0 — одна цифра).

    Examples:
        >>> digit_count(0)
        1
        >>> digit_count(-12345)
        5
        >>> digit_count(10**100)
        101
    """
    n = abs(n)
    if n < 10:
        return 1

    # Оценка через bit_length с точной коррекцией
    digits = max(1, int(n.bit_length() * _LOG10_2))
    while 10**digits <= n:
        digits += 1
    while digits > 1 and 10 ** (digits - 1) > n:
        digits -= 1
    return digits


def int_to_digits(n: int) -> str:
    """
    Десятичная запись неотрицательного int любой длины.

    Raises:
        ValueError: Если n отрицательный
    """
    if n < 0:
        raise ValueError(f"int_to_digits expects a non-negative int, got {n}")

    if n < _STR_CHUNK_LIMIT:
        return str(n)

    # Divide and conquer по степени десяти
    low_digits = digit_count(n) // 2
    high, low = divmod(n, 10**low_digits)
    return int_to_digits(high) + int_to_digits(low).zfill(low_digits)


def digits_to_int(digits: str) -> int:
    """
    Целое из строки десятичных цифр любой длины (ведущие нули допустимы).

    Raises:
        ValueError: Если строка пустая или содержит не-цифры
    """
    if not digits:
        raise ValueError("digits_to_int expects a non-empty digit string")

    if len(digits) <= _STR_CHUNK_DIGITS:
        return int(digits)

    split = len(digits) // 2
    high, low = digits[: len(digits) - split], digits[len(digits) - split :]
    return digits_to_int(high) * 10 ** len(low) + digits_to_int(low)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_scale(scale: int, name: str = "scale") -> int:
    """
    Проверка, что scale — неотрицательное целое.

    Args:
        scale: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        scale без изменений

    Raises:
        InvalidScale: Если scale не int (bool тоже отвергается) или < 0
    """
    if isinstance(scale, bool) or not isinstance(scale, int):
        raise InvalidScale(f"{name} must be a non-negative int, got {scale!r}")

    if scale < 0:
        raise InvalidScale(f"{name} must be non-negative, got {scale}")

    return scale


# =============================================================================
# VALUE OBJECT
# =============================================================================


@dataclass(frozen=True, eq=False)
class DecimalValue:
    """
    Десятичное число: unscaled / 10^scale.

    Создаётся парсингом литерала (parse), из int (from_int) или как
    результат операции. Конструктор не нормализует хвостовые нули,
    кроме нуля: DecimalValue(0, 5) хранится как (0, 0).

    Examples:
        >>> DecimalValue(12345, 2)
        DecimalValue('123.45')
        >>> DecimalValue(1500, 3) == DecimalValue(15, 1)
        True
        >>> str(DecimalValue(1500, 3))
        '1.500'
    """

    unscaled: int
    scale: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.unscaled, bool) or not isinstance(self.unscaled, int):
            raise TypeError(
                f"unscaled must be int, got {type(self.unscaled).__name__}"
            )
        validate_scale(self.scale)

        # Инвариант: у нуля нет дробных цифр
        if self.unscaled == 0 and self.scale != 0:
            object.__setattr__(self, "scale", 0)

    @classmethod
    def from_int(cls, value: int) -> "DecimalValue":
        """Подъём целого в DecimalValue со scale 0."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"from_int expects int, got {type(value).__name__}")
        return cls(value, 0)

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def sign(self) -> int:
        """-1, 0 или 1."""
        if self.unscaled > 0:
            return 1
        if self.unscaled < 0:
            return -1
        return 0

    @property
    def precision(self) -> int:
        """Количество цифр в модуле unscaled."""
        return digit_count(self.unscaled)

    @property
    def integer_digits(self) -> int:
        """Количество цифр целой части в каноническом тексте (минимум 1)."""
        return max(self.precision - self.scale, 1)

    def is_zero(self) -> bool:
        return self.unscaled == 0

    def is_negative(self) -> bool:
        return self.unscaled < 0

    def normalized(self) -> "DecimalValue":
        """
        Минимальное представление: хвостовые нули unscaled снимаются
        с уменьшением scale (до 0 для целых значений).

        Examples:
            >>> DecimalValue(1500, 3).normalized()
            DecimalValue('1.5')
            >>> DecimalValue(1000, 3).normalized()
            DecimalValue('1')
        """
        unscaled, scale = self.unscaled, self.scale
        while scale > 0 and unscaled % 10 == 0:
            unscaled //= 10
            scale -= 1

        if unscaled == self.unscaled and scale == self.scale:
            return self
        return DecimalValue(unscaled, scale)

    # -------------------------------------------------------------------------
    # Числовой протокол
    # -------------------------------------------------------------------------

    def __neg__(self) -> "DecimalValue":
        return DecimalValue(-self.unscaled, self.scale)

    def __pos__(self) -> "DecimalValue":
        return self

    def __abs__(self) -> "DecimalValue":
        if self.unscaled >= 0:
            return self
        return DecimalValue(-self.unscaled, self.scale)

    def __bool__(self) -> bool:
        return self.unscaled != 0

    def __eq__(self, other: object) -> bool:
        other_value = _coerce_operand(other)
        if other_value is None:
            return NotImplemented
        return compare(self, other_value) == 0

    def __lt__(self, other: object) -> bool:
        other_value = _coerce_operand(other)
        if other_value is None:
            return NotImplemented
        return compare(self, other_value) < 0

    def __le__(self, other: object) -> bool:
        other_value = _coerce_operand(other)
        if other_value is None:
            return NotImplemented
        return compare(self, other_value) <= 0

    def __gt__(self, other: object) -> bool:
        other_value = _coerce_operand(other)
        if other_value is None:
            return NotImplemented
        return compare(self, other_value) > 0

    def __ge__(self, other: object) -> bool:
        other_value = _coerce_operand(other)
        if other_value is None:
            return NotImplemented
        return compare(self, other_value) >= 0

    def __hash__(self) -> int:
        # Равные значения с разным scale обязаны давать одинаковый hash
        canonical = self.normalized()
        if canonical.scale == 0:
            return hash(canonical.unscaled)
        return hash((canonical.unscaled, canonical.scale))

    def __str__(self) -> str:
        return to_text(self)

    def __repr__(self) -> str:
        return f"DecimalValue('{to_text(self)}')"


ZERO: Final[DecimalValue] = DecimalValue(0)
ONE: Final[DecimalValue] = DecimalValue(1)
TWO: Final[DecimalValue] = DecimalValue(2)


def _coerce_operand(other: object) -> DecimalValue | None:
    """int поднимается до DecimalValue; остальные типы не сравниваются."""
    if isinstance(other, DecimalValue):
        return other
    if isinstance(other, int) and not isinstance(other, bool):
        return DecimalValue(other, 0)
    return None


# =============================================================================
# PARSING & FORMATTING
# =============================================================================


def parse(text: str, normalize: bool = True) -> DecimalValue:
    """
    Парсинг десятичного литерала.

    Грамматика: необязательный знак, целая часть (может быть пустой → 0),
    необязательная точка с дробной частью (может быть пустой).
    Требуется хотя бы одна цифра; пробелы, экспоненты и прочее отвергаются.

    Длина дробной части становится scale; при normalize=True хвостовые
    нули затем снимаются.

    Args:
        text: Литерал, например "-12.3400"
        normalize: Снимать хвостовые нули дробной части (default: True)

    Returns:
        DecimalValue

    Raises:
        DecimalSyntaxError: Если text не соответствует грамматике
        TypeError: Если text не str

    Examples:
        >>> parse("-12.3400")
        DecimalValue('-12.34')
        >>> parse("-12.3400", normalize=False)
        DecimalValue('-12.3400')
        >>> parse(".5")
        DecimalValue('0.5')
        >>> parse("007")
        DecimalValue('7')
    """
    if not isinstance(text, str):
        raise TypeError(f"parse expects str, got {type(text).__name__}")

    match = _LITERAL_RE.fullmatch(text)
    if match is None:
        raise DecimalSyntaxError(f"Malformed decimal literal: {text!r}")

    sign, integer_part, fractional_part = match.groups()
    fractional_part = fractional_part or ""

    digits = integer_part + fractional_part
    if not digits:
        raise DecimalSyntaxError(f"Decimal literal has no digits: {text!r}")

    magnitude = digits_to_int(digits)
    value = DecimalValue(-magnitude if sign == "-" else magnitude, len(fractional_part))

    if normalize:
        return value.normalized()
    return value


def to_text(value: DecimalValue) -> str:
    """
    Канонический текст значения.

    - scale 0: целое со знаком, без точки
    - иначе: целая и дробная части; дробная дополняется ведущими нулями
      до длины scale, хвостовые нули сохраняются как хранятся
    - ноль всегда "0"

    Examples:
        >>> to_text(DecimalValue(-5, 3))
        '-0.005'
        >>> to_text(DecimalValue(12300, 2))
        '123.00'
    """
    if not isinstance(value, DecimalValue):
        raise TypeError(f"to_text expects DecimalValue, got {type(value).__name__}")

    if value.unscaled == 0:
        return "0"

    sign = "-" if value.unscaled < 0 else ""
    digits = int_to_digits(abs(value.unscaled))

    if value.scale == 0:
        return f"{sign}{digits}"

    if len(digits) > value.scale:
        integer_part = digits[: -value.scale]
        fractional_part = digits[-value.scale :]
    else:
        integer_part = "0"
        fractional_part = digits.zfill(value.scale)

    return f"{sign}{integer_part}.{fractional_part}"


# =============================================================================
# COMPARISON
# =============================================================================


def align(a: DecimalValue, b: DecimalValue) -> tuple[int, int, int]:
    """
    Приведение двух значений к общему (большему) scale.

    Returns:
        (a_unscaled, b_unscaled, common_scale)

    Examples:
        >>> align(DecimalValue(15, 1), DecimalValue(2))
        (15, 20, 1)
    """
    if a.scale == b.scale:
        return a.unscaled, b.unscaled, a.scale

    if a.scale < b.scale:
        return a.unscaled * 10 ** (b.scale - a.scale), b.unscaled, b.scale

    return a.unscaled, b.unscaled * 10 ** (a.scale - b.scale), a.scale


def compare(a: DecimalValue, b: DecimalValue) -> int:
    """
    Трёхзначное сравнение по математическому значению.

    Returns:
        -1 если a < b, 0 если a == b, 1 если a > b

    Examples:
        >>> compare(parse("1.50"), parse("1.5"))
        0
        >>> compare(parse("-2"), parse("1.9"))
        -1
    """
    ensure_decimal(a, "a")
    ensure_decimal(b, "b")

    a_unscaled, b_unscaled, _ = align(a, b)
    if a_unscaled < b_unscaled:
        return -1
    if a_unscaled > b_unscaled:
        return 1
    return 0


def ensure_decimal(value: object, name: str) -> None:
    if not isinstance(value, DecimalValue):
        raise TypeError(f"{name} must be DecimalValue, got {type(value).__name__}")
