"""
Тесты для Polygon Iteration

Проверяет:
1. ArchimedesConfig: значения по умолчанию, границы, неизменяемость
2. Seed и шаг удвоения (известные полупериметры 12- и 24-угольника)
3. Сквозной расчёт: монотонность границ, a < π < b, сходимость
4. PiTable: модели строк, payload по контракту pi_table, логирование
"""

import logging

import pytest
from pydantic import ValidationError

from src.archimedes import (
    DEFAULT_ITERATIONS,
    DEFAULT_PRECISION,
    INITIAL_SIDES,
    MAX_PRECISION,
    ArchimedesConfig,
    PiTable,
    PolygonRow,
    PolygonState,
    compute_pi,
    initial_state,
    iterate,
    present_digits,
    step,
)
from src.core.contracts import validate_pi_table
from src.core.math import DecimalValue, RoundingMode, parse, to_text

PI_REFERENCE = "3.14159265358979323846264338327950288419716939937510582097494459"


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def short_config():
    """Три строки при 20 дробных цифрах."""
    return ArchimedesConfig(iterations=3, precision=20)


@pytest.fixture
def short_table(short_config):
    return compute_pi(short_config)


# =============================================================================
# ТЕСТЫ КОНФИГУРАЦИИ
# =============================================================================


class TestArchimedesConfig:
    """Тесты параметров расчёта"""

    def test_defaults(self) -> None:
        config = ArchimedesConfig()
        assert config.iterations == DEFAULT_ITERATIONS
        assert config.precision == DEFAULT_PRECISION
        assert config.rounding is RoundingMode.DOWN

    def test_rounding_from_name(self) -> None:
        config = ArchimedesConfig(rounding="HALF_EVEN")
        assert config.rounding is RoundingMode.HALF_EVEN

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"iterations": 0},
            {"precision": 0},
            {"precision": MAX_PRECISION + 1},
            {"rounding": "SIDEWAYS"},
        ],
    )
    def test_invalid_values_rejected(self, kwargs) -> None:
        with pytest.raises(ValidationError):
            ArchimedesConfig(**kwargs)

    def test_frozen(self) -> None:
        config = ArchimedesConfig()
        with pytest.raises(ValidationError):
            config.iterations = 5


# =============================================================================
# ТЕСТЫ ИТЕРАЦИИ
# =============================================================================


class TestPolygonStep:
    """Тесты seed и шага удвоения"""

    def test_initial_state(self) -> None:
        state = initial_state(20)
        assert state.count == INITIAL_SIDES
        assert state.inscribed == 3
        assert to_text(state.circumscribed) == "3.46410161513775458704"

    def test_step_doubles_sides(self) -> None:
        state = step(initial_state(20), 20)
        assert state.count == 12
        assert to_text(state.circumscribed).startswith("3.21539030917347")
        assert to_text(state.inscribed).startswith("3.10582854123024")

    def test_step_keeps_previous_state(self) -> None:
        seed = initial_state(20)
        step(seed, 20)
        assert seed.count == 6
        assert seed.inscribed == 3

    def test_step_uses_requested_scale(self) -> None:
        state = step(initial_state(15), 15)
        assert state.circumscribed.scale == 15
        assert state.inscribed.scale == 15

    def test_custom_state(self) -> None:
        """Шаг работает с любым переданным состоянием"""
        state = PolygonState(count=6, inscribed=DecimalValue(3), circumscribed=parse("3.4641016151"))
        assert step(state, 10).count == 12

    def test_iterate_yields_requested_rows(self, short_config) -> None:
        counts = [state.count for state in iterate(short_config)]
        assert counts == [6, 12, 24]


class TestComputePi:
    """Сквозные тесты расчёта"""

    def test_row_counts(self, short_table) -> None:
        assert [row.count for row in short_table.rows] == [6, 12, 24]
        assert [row.index for row in short_table.rows] == [1, 2, 3]

    def test_known_24_gon(self, short_table) -> None:
        last = short_table.rows[-1]
        assert last.circumscribed.startswith("3.15965994209750")
        assert last.inscribed.startswith("3.13262861328123")

    def test_bounds_monotone(self, short_table) -> None:
        """b не возрастает, a не убывает"""
        uppers = [parse(row.circumscribed) for row in short_table.rows]
        lowers = [parse(row.inscribed) for row in short_table.rows]
        assert all(later <= earlier for earlier, later in zip(uppers, uppers[1:]))
        assert all(later >= earlier for earlier, later in zip(lowers, lowers[1:]))

    def test_bounds_bracket_pi(self, short_table) -> None:
        pi = parse(PI_REFERENCE)
        for row in short_table.rows:
            assert parse(row.inscribed) < pi < parse(row.circumscribed)

    def test_approximation_is_last_upper_bound(self, short_table) -> None:
        assert short_table.approximation == short_table.rows[-1].circumscribed
        assert short_table.precision == 20
        assert short_table.iterations == 3

    def test_default_run(self) -> None:
        table = compute_pi()
        assert len(table.rows) == DEFAULT_ITERATIONS
        assert table.rows[-1].count == INITIAL_SIDES * 2 ** (DEFAULT_ITERATIONS - 1)
        assert present_digits(table.approximation, PI_REFERENCE).verified_fraction_digits >= 5

    def test_converges_with_more_iterations(self) -> None:
        table = compute_pi(ArchimedesConfig(iterations=30, precision=40))
        presentation = present_digits(table.approximation, PI_REFERENCE)
        assert presentation.verified_fraction_digits >= 15

    def test_single_row(self) -> None:
        table = compute_pi(ArchimedesConfig(iterations=1, precision=10))
        assert len(table.rows) == 1
        assert table.approximation == "3.4641016150"

    def test_half_even_rounding_run(self) -> None:
        table = compute_pi(ArchimedesConfig(iterations=5, precision=25, rounding="HALF_EVEN"))
        pi = parse(PI_REFERENCE)
        assert parse(table.rows[-1].inscribed) < pi < parse(table.rows[-1].circumscribed)

    def test_logging(self, caplog: pytest.LogCaptureFixture, short_config) -> None:
        with caplog.at_level(logging.INFO, logger="src.archimedes.polygon"):
            compute_pi(short_config)

        messages = [record.getMessage() for record in caplog.records]
        assert any("Polygon iteration started" in message for message in messages)
        assert any("Polygon iteration finished: sides=24" in message for message in messages)


# =============================================================================
# ТЕСТЫ МОДЕЛЕЙ ТАБЛИЦЫ
# =============================================================================


class TestPiTableModels:
    """Тесты pydantic моделей и payload"""

    def test_payload_matches_contract(self, short_table) -> None:
        payload = short_table.to_payload()
        validate_pi_table(payload)
        assert payload["rows"][0] == {
            "index": 1,
            "count": 6,
            "inscribed": "3",
            "circumscribed": "3.46410161513775458704",
        }

    def test_row_rejects_malformed_text(self) -> None:
        with pytest.raises(ValidationError):
            PolygonRow(index=1, count=6, inscribed="3,14", circumscribed="3.5")

    def test_row_rejects_small_count(self) -> None:
        with pytest.raises(ValidationError):
            PolygonRow(index=1, count=4, inscribed="3", circumscribed="3.5")

    def test_table_requires_rows(self) -> None:
        with pytest.raises(ValidationError):
            PiTable(precision=5, iterations=1, rows=[], approximation="3.14159")

    def test_table_roundtrip_from_payload(self, short_table) -> None:
        restored = PiTable.model_validate(short_table.to_payload())
        assert restored == short_table
