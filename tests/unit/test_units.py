"""
Unit tests for units shorthand expansion.
"""

import pytest

from themizer.errors import RangeError, UnknownUnitError
from themizer.units import (
    UNIT_SUFFIXES,
    expand_unit_tuple,
    expand_units,
    format_number,
    is_unit_type,
    is_units_config,
)


class TestExpandUnitTuple:
    """Tests for expand_unit_tuple."""

    def test_integer_range(self):
        assert expand_unit_tuple([0, 4, 16], "px") == {
            0: "0px",
            4: "4px",
            8: "8px",
            12: "12px",
            16: "16px",
        }

    def test_fractional_step(self):
        assert expand_unit_tuple([0, 0.25, 1], "rem") == {
            0: "0rem",
            0.25: "0.25rem",
            0.5: "0.5rem",
            0.75: "0.75rem",
            1: "1rem",
        }

    def test_no_float_drift(self):
        result = expand_unit_tuple([0, 0.1, 0.3], "em")
        assert list(result) == [0, 0.1, 0.2, 0.3]
        assert result[0.3] == "0.3em"

    def test_integral_keys_are_ints(self):
        result = expand_unit_tuple([1.0, 1.0, 2.0], "vh")
        assert all(isinstance(key, int) for key in result)
        assert result == {1: "1vh", 2: "2vh"}

    def test_stop_included_when_not_a_multiple(self):
        assert list(expand_unit_tuple([0, 3, 10], "px")) == [0, 3, 6, 9, 10]

    def test_single_value_range(self):
        assert expand_unit_tuple([8, 4, 8], "px") == {8: "8px"}

    @pytest.mark.parametrize("step", [0, -1])
    def test_non_positive_step(self, step):
        with pytest.raises(RangeError, match=f"got {step}"):
            expand_unit_tuple([0, step, 10], "px")

    def test_start_after_stop(self):
        with pytest.raises(RangeError) as exc_info:
            expand_unit_tuple([10, 1, 5], "px")
        assert "10" in str(exc_info.value)
        assert "5" in str(exc_info.value)


class TestExpandUnits:
    """Tests for expand_units."""

    def test_percentage_suffix(self):
        assert expand_units({"percentage": [0, 50, 100]}) == {
            "percentage": {0: "0%", 50: "50%", 100: "100%"}
        }

    def test_multiple_units(self):
        result = expand_units({"rem": [0, 0.5, 1], "vh": [0, 50, 100]})
        assert list(result) == ["rem", "vh"]
        assert result["vh"][50] == "50vh"

    def test_unknown_unit(self):
        with pytest.raises(UnknownUnitError, match="furlong"):
            expand_units({"furlong": [0, 1, 2]})


class TestIsUnitsConfig:
    """Tests for the units shorthand shape check."""

    @pytest.mark.parametrize(
        "value",
        [
            {"rem": [0, 0.25, 4]},
            {"px": (0, 4, 64), "percentage": [0, 25, 100]},
            {},
        ],
    )
    def test_accepts(self, value):
        assert is_units_config(value)

    @pytest.mark.parametrize(
        "value",
        [
            {24: "24px", 16: "16px"},
            {"rem": [0, 0.25]},
            {"rem": ["0", "1", "2"]},
            {"rem": [0, True, 2]},
            {"rem": [0, float("nan"), 2]},
            {"furlong": [0, 1, 2]},
            [0, 1, 2],
            "rem",
        ],
    )
    def test_rejects(self, value):
        assert not is_units_config(value)


class TestUnitSuffixes:
    def test_table(self):
        assert len(UNIT_SUFFIXES) == 10
        assert UNIT_SUFFIXES["percentage"] == "%"
        assert UNIT_SUFFIXES["vmin"] == "vmin"

    def test_is_unit_type(self):
        assert is_unit_type("rem")
        assert not is_unit_type("furlong")
        assert not is_unit_type(16)

    def test_read_only(self):
        with pytest.raises(TypeError):
            UNIT_SUFFIXES["pt"] = "pt"  # type: ignore[index]


def test_format_number():
    assert format_number(2.0) == "2"
    assert format_number(0.25) == "0.25"
    assert format_number(16) == "16"


def test_format_number_avoids_exponent_notation():
    assert format_number(1e-05) == "0.00001"
    assert format_number(-2.5e-07) == "-0.00000025"


def test_small_steps_render_positionally():
    assert expand_unit_tuple([0, 0.00001, 0.00002], "rem") == {
        0: "0rem",
        0.00001: "0.00001rem",
        0.00002: "0.00002rem",
    }
