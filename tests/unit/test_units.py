"""Tests for unit conversion and angle normalization."""

from __future__ import annotations

import math

import pytest

from easyeda_kicad.geometry import fold_angle, normalize_angle, parse_number, to_output_units


class TestParseNumber:
    def test_numeric_string(self) -> None:
        assert parse_number("12.5") == 12.5

    def test_number_passthrough(self) -> None:
        assert parse_number(7) == 7.0
        assert parse_number(-1.5) == -1.5

    def test_leading_numeric_prefix(self) -> None:
        assert parse_number("12.5mm") == 12.5

    @pytest.mark.parametrize("value", [None, "", "abc", "mm12"])
    def test_unparseable_is_nan(self, value: str | None) -> None:
        assert math.isnan(parse_number(value))


class TestToOutputUnits:
    def test_scale(self) -> None:
        assert to_output_units("100") == pytest.approx(25.4)
        assert to_output_units(-10) == pytest.approx(-2.54)

    def test_round_to_tenth(self) -> None:
        assert to_output_units("10.3", round_to_tenth=True) == 2.6
        assert to_output_units("10.3") == pytest.approx(2.6162)

    def test_missing_value_is_nan(self) -> None:
        assert math.isnan(to_output_units(None))
        assert math.isnan(to_output_units(None, round_to_tenth=True))


class TestNormalizeAngle:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, 0.0),
            ("90", 90.0),
            (180, 180.0),
            (-180, 180.0),
            (270, -90.0),
            (360, 0.0),
            (540, 180.0),
            (-190, 170.0),
            ("45.5", 45.5),
        ],
    )
    def test_folds_into_half_open_range(self, value: str | int, expected: float) -> None:
        assert normalize_angle(value) == pytest.approx(expected)

    def test_parent_angle_added(self) -> None:
        assert normalize_angle(90, 180) == pytest.approx(-90.0)
        assert normalize_angle("10", 20) == pytest.approx(30.0)

    @pytest.mark.parametrize("value", [None, "", "abc"])
    def test_absent_angle(self, value: str | None) -> None:
        assert normalize_angle(value) is None

    def test_result_always_in_range(self) -> None:
        for raw in range(-1080, 1081, 15):
            angle = fold_angle(float(raw))
            assert -180.0 < angle <= 180.0
