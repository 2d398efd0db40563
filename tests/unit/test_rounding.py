"""
Тесты для Rounding Policy

Проверяет:
1. Таблицу решений apply_rounding для всех режимов и знаков
2. Tie-случаи HALF_UP / HALF_EVEN
3. Приведение строковых имён режимов
4. Отказ на некорректных аргументах
"""

import pytest

from src.core.math import DEFAULT_ROUNDING, RoundingMode, apply_rounding, coerce_rounding_mode

# =============================================================================
# ТЕСТЫ apply_rounding
# =============================================================================


class TestApplyRounding:
    """Тесты решения об округлении по остатку"""

    @pytest.mark.parametrize("mode", list(RoundingMode))
    def test_exact_result_untouched(self, mode: RoundingMode) -> None:
        """Нулевой остаток → частное без изменений в любом режиме"""
        assert apply_rounding(7, 0, 10, mode) == 7
        assert apply_rounding(7, 0, 10, mode, negative=True) == 7

    def test_down_truncates(self) -> None:
        assert apply_rounding(7, 9, 10, RoundingMode.DOWN) == 7
        assert apply_rounding(7, 9, 10, RoundingMode.DOWN, negative=True) == 7

    def test_up_away_from_zero(self) -> None:
        assert apply_rounding(7, 1, 10, RoundingMode.UP) == 8
        assert apply_rounding(7, 1, 10, RoundingMode.UP, negative=True) == 8

    def test_floor_depends_on_sign(self) -> None:
        """FLOOR: модуль растёт только у отрицательных"""
        assert apply_rounding(7, 1, 10, RoundingMode.FLOOR) == 7
        assert apply_rounding(7, 1, 10, RoundingMode.FLOOR, negative=True) == 8

    def test_ceil_depends_on_sign(self) -> None:
        """CEIL: модуль растёт только у положительных"""
        assert apply_rounding(7, 1, 10, RoundingMode.CEIL) == 8
        assert apply_rounding(7, 1, 10, RoundingMode.CEIL, negative=True) == 7

    def test_half_up(self) -> None:
        assert apply_rounding(7, 4, 10, RoundingMode.HALF_UP) == 7
        assert apply_rounding(7, 5, 10, RoundingMode.HALF_UP) == 8
        assert apply_rounding(7, 5, 10, RoundingMode.HALF_UP, negative=True) == 8

    def test_half_even_ties_to_even(self) -> None:
        """Tie → к чётной младшей цифре"""
        assert apply_rounding(0, 5, 10, RoundingMode.HALF_EVEN) == 0
        assert apply_rounding(1, 5, 10, RoundingMode.HALF_EVEN) == 2
        assert apply_rounding(2, 5, 10, RoundingMode.HALF_EVEN) == 2
        assert apply_rounding(3, 5, 10, RoundingMode.HALF_EVEN, negative=True) == 4

    def test_half_even_off_tie(self) -> None:
        assert apply_rounding(2, 6, 10, RoundingMode.HALF_EVEN) == 3
        assert apply_rounding(3, 4, 10, RoundingMode.HALF_EVEN) == 3

    def test_odd_divisor_has_no_tie(self) -> None:
        """При нечётном делителе 2r == d невозможно"""
        assert apply_rounding(0, 1, 3, RoundingMode.HALF_UP) == 0
        assert apply_rounding(0, 2, 3, RoundingMode.HALF_UP) == 1
        assert apply_rounding(0, 2, 3, RoundingMode.HALF_EVEN) == 1

    def test_invalid_arguments(self) -> None:
        with pytest.raises(ValueError):
            apply_rounding(-1, 0, 10, RoundingMode.DOWN)

        with pytest.raises(ValueError):
            apply_rounding(1, -1, 10, RoundingMode.DOWN)

        with pytest.raises(ValueError):
            apply_rounding(1, 10, 10, RoundingMode.DOWN)

        with pytest.raises(ValueError):
            apply_rounding(1, 0, 0, RoundingMode.DOWN)


# =============================================================================
# ТЕСТЫ coerce_rounding_mode
# =============================================================================


class TestCoerceRoundingMode:
    """Тесты приведения режима округления"""

    def test_default_is_down(self) -> None:
        assert DEFAULT_ROUNDING is RoundingMode.DOWN

    def test_enum_passthrough(self) -> None:
        assert coerce_rounding_mode(RoundingMode.CEIL) is RoundingMode.CEIL

    def test_string_names(self) -> None:
        """Имена принимаются без учёта регистра"""
        assert coerce_rounding_mode("HALF_EVEN") is RoundingMode.HALF_EVEN
        assert coerce_rounding_mode("half_up") is RoundingMode.HALF_UP

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError, match="Unknown rounding mode"):
            coerce_rounding_mode("BANKERS")

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError):
            coerce_rounding_mode(4)
