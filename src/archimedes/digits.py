"""Digit Presentation — разбиение цифр приближения на проверенные и остальные.

Эталонные цифры (reference) передаёт вызывающий код: загрузка файла с
эталоном относится к слою представления.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Final

from src.core.math import DecimalValue, to_text

DEFAULT_GROUP_SIZE: Final[int] = 10


@dataclass(frozen=True)
class DigitPresentation:
    """Текст приближения, разделённый по совпадению с эталоном."""

    verified: str
    unverified: str
    verified_fraction_digits: int
    grouped: str

    def to_payload(self) -> Dict[str, Any]:
        """JSON-совместимый dict (контракт digit_presentation)."""
        return asdict(self)


def _as_text(value: DecimalValue | str) -> str:
    if isinstance(value, DecimalValue):
        return to_text(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"expected DecimalValue or str, got {type(value).__name__}")


def verified_digit_count(candidate: DecimalValue | str, reference: str) -> int:
    """
    Длина общего префикса candidate и reference (в символах).

    Examples:
        >>> verified_digit_count("3.14159", "3.14160")
        5
        >>> verified_digit_count("2.7", "3.1")
        0
    """
    candidate_text = _as_text(candidate)
    reference_text = _as_text(reference)

    length = 0
    for left, right in zip(candidate_text, reference_text):
        if left != right:
            break
        length += 1
    return length


def group_digits(text: DecimalValue | str, group_size: int = DEFAULT_GROUP_SIZE) -> str:
    """
    Дробная часть разбивается пробелами на группы по group_size цифр.

    Examples:
        >>> group_digits("3.14159265358979", 5)
        '3.14159 26535 8979'
        >>> group_digits("42", 5)
        '42'
    """
    if group_size < 1:
        raise ValueError(f"group_size must be positive, got {group_size}")

    text = _as_text(text)
    integer_part, point, fractional_part = text.partition(".")
    if not point:
        return text

    groups = [
        fractional_part[i : i + group_size]
        for i in range(0, len(fractional_part), group_size)
    ]
    return f"{integer_part}.{' '.join(groups)}"


def present_digits(
    candidate: DecimalValue | str,
    reference: str,
    group_size: int = DEFAULT_GROUP_SIZE,
) -> DigitPresentation:
    """
    Разметка приближения для отображения.

    Args:
        candidate: Приближение (DecimalValue или его текст)
        reference: Эталонные цифры, например "3.14159265358979323846..."
        group_size: Размер группы дробных цифр

    Returns:
        DigitPresentation: проверенный префикс, остаток, число проверенных
        дробных цифр и сгруппированный полный текст
    """
    candidate_text = _as_text(candidate)
    prefix_length = verified_digit_count(candidate_text, reference)

    point_index = candidate_text.find(".")
    if point_index < 0 or prefix_length <= point_index:
        verified_fraction_digits = 0
    else:
        verified_fraction_digits = prefix_length - point_index - 1

    return DigitPresentation(
        verified=candidate_text[:prefix_length],
        unverified=candidate_text[prefix_length:],
        verified_fraction_digits=verified_fraction_digits,
        grouped=group_digits(candidate_text, group_size),
    )
