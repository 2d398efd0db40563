"""Polygon Iteration — приближение π удвоением сторон многоугольников.

Состояние — тройка (count, a, b):
- count: число сторон
- a: полупериметр вписанного count-угольника (оценка π снизу)
- b: полупериметр описанного count-угольника (оценка π сверху)

Seed (шестиугольник): (6, 3, 2·sqrt(3)).

Шаг удвоения:
    count := 2·count
    b := 2ab / (a + b)        (гармоническое среднее)
    a := sqrt(a·b)            (геометрическое среднее с НОВЫМ b)

Вся арифметика — через src.core.math на рабочей точности precision;
float не используется. Состояние передаётся явно в каждый шаг.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Final, Iterator, List

from pydantic import BaseModel, Field

from src.core.math import (
    TWO,
    DecimalValue,
    RoundingMode,
    add,
    divide,
    multiply,
    set_scale,
    sqrt,
    to_text,
)

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Seed: правильный шестиугольник
INITIAL_SIDES: Final[int] = 6

# Значения по умолчанию (точность как в исходном калькуляторе)
DEFAULT_PRECISION: Final[int] = 50
DEFAULT_ITERATIONS: Final[int] = 10

MAX_PRECISION: Final[int] = 100_000
MAX_ITERATIONS: Final[int] = 1_000

# Текст десятичного числа: знак, цифры, необязательная дробная часть
_DECIMAL_TEXT_PATTERN: Final[str] = r"^-?[0-9]+(\.[0-9]+)?$"


# =============================================================================
# CONFIG
# =============================================================================


class ArchimedesConfig(BaseModel):
    """
    Параметры расчёта.

    iterations — число строк таблицы (первая строка — seed).
    precision — число дробных цифр рабочей арифметики.
    rounding — округление делений и корней на каждом шаге.
    """

    iterations: int = Field(
        DEFAULT_ITERATIONS, ge=1, le=MAX_ITERATIONS, description="Число строк таблицы"
    )
    precision: int = Field(
        DEFAULT_PRECISION, ge=1, le=MAX_PRECISION, description="Дробные цифры"
    )
    rounding: RoundingMode = Field(
        RoundingMode.DOWN, description="Округление шагов итерации"
    )

    model_config = {"frozen": True}


# =============================================================================
# STATE
# =============================================================================


@dataclass(frozen=True)
class PolygonState:
    """Тройка (count, a, b) после очередного удвоения."""

    count: int
    inscribed: DecimalValue
    circumscribed: DecimalValue


def initial_state(
    precision: int,
    rounding: RoundingMode = RoundingMode.DOWN,
) -> PolygonState:
    """
    Seed шестиугольника: (6, 3, 2·sqrt(3, precision)).

    Examples:
        >>> initial_state(5).circumscribed
        DecimalValue('3.46410')
    """
    circumscribed = multiply(TWO, sqrt(DecimalValue(3), precision, rounding))
    return PolygonState(
        count=INITIAL_SIDES,
        inscribed=DecimalValue(3),
        circumscribed=circumscribed,
    )


def step(
    state: PolygonState,
    precision: int,
    rounding: RoundingMode = RoundingMode.DOWN,
) -> PolygonState:
    """
    Одно удвоение числа сторон.

    Args:
        state: Текущее состояние
        precision: Дробные цифры деления и корня
        rounding: Режим округления деления и корня

    Returns:
        Новое состояние (исходное не меняется)
    """
    a, b = state.inscribed, state.circumscribed

    circumscribed = divide(
        multiply(TWO, multiply(a, b)), add(a, b), precision, rounding
    )
    inscribed = sqrt(multiply(a, circumscribed), precision, rounding)

    return PolygonState(
        count=2 * state.count,
        inscribed=inscribed,
        circumscribed=circumscribed,
    )


def iterate(config: ArchimedesConfig) -> Iterator[PolygonState]:
    """
    Генератор config.iterations состояний: seed и далее по одному на удвоение.

    Examples:
        >>> [s.count for s in iterate(ArchimedesConfig(iterations=3, precision=5))]
        [6, 12, 24]
    """
    state = initial_state(config.precision, config.rounding)
    yield state

    for _ in range(config.iterations - 1):
        state = step(state, config.precision, config.rounding)
        yield state


# =============================================================================
# TABLE
# =============================================================================


class PolygonRow(BaseModel):
    """Строка таблицы для слоя представления (значения — текст)."""

    index: int = Field(..., ge=1, description="Номер строки (1 — seed)")
    count: int = Field(..., ge=INITIAL_SIDES, description="Число сторон")
    inscribed: str = Field(
        ..., pattern=_DECIMAL_TEXT_PATTERN, description="Полупериметр вписанного"
    )
    circumscribed: str = Field(
        ..., pattern=_DECIMAL_TEXT_PATTERN, description="Полупериметр описанного"
    )

    model_config = {"frozen": True}


class PiTable(BaseModel):
    """Результат расчёта: строки итерации и итоговое приближение π."""

    precision: int = Field(..., ge=1, description="Дробные цифры")
    iterations: int = Field(..., ge=1, description="Число строк")
    rows: List[PolygonRow] = Field(..., min_length=1)
    approximation: str = Field(
        ..., pattern=_DECIMAL_TEXT_PATTERN, description="Последнее b, усечённое до precision"
    )

    model_config = {"frozen": True}

    def to_payload(self) -> Dict[str, Any]:
        """JSON-совместимый dict (контракт pi_table)."""
        return self.model_dump(mode="json")


def compute_pi(config: ArchimedesConfig | None = None) -> PiTable:
    """
    Полный расчёт таблицы и приближения π.

    Args:
        config: Параметры (default: ArchimedesConfig())

    Returns:
        PiTable
    """
    config = config or ArchimedesConfig()
    logger.info(
        "Polygon iteration started: iterations=%d precision=%d rounding=%s",
        config.iterations,
        config.precision,
        config.rounding.value,
    )

    states = list(iterate(config))

    rows: List[PolygonRow] = []
    for index, state in enumerate(states, start=1):
        rows.append(
            PolygonRow(
                index=index,
                count=state.count,
                inscribed=to_text(state.inscribed),
                circumscribed=to_text(state.circumscribed),
            )
        )
        logger.debug("Polygon row %d: count=%d", index, state.count)

    last_state = states[-1]

    approximation = set_scale(last_state.circumscribed, config.precision, RoundingMode.DOWN)
    logger.info(
        "Polygon iteration finished: sides=%d rows=%d", last_state.count, len(rows)
    )

    return PiTable(
        precision=config.precision,
        iterations=config.iterations,
        rows=rows,
        approximation=to_text(approximation),
    )
