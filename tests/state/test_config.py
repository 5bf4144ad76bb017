"""Tests for bondcurve/state/config.py: CurveParameters (de)serialization."""

from __future__ import annotations

from pathlib import Path

import pytest

from bondcurve.core.curve import CurveParameters
from bondcurve.core.errors import ZeroWeightError
from bondcurve.core.power import PowerMode
from bondcurve.state.config import (
    PARAM_NAMES,
    curve_parameters_from_dict,
    curve_parameters_to_dict,
    default_curve_parameters,
    load_curve_parameters,
)


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "curve.yaml"
    path.write_text(text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# dict round trip
# ---------------------------------------------------------------------------

class TestDict:
    @pytest.mark.parametrize(
        "params",
        [
            CurveParameters(),
            CurveParameters(slope=3, reserve_ratio=1_000_000),
            CurveParameters(reserve_ratio=500_000, power_mode=PowerMode.FRACTIONAL),
        ],
    )
    def test_round_trip(self, params):
        assert curve_parameters_from_dict(curve_parameters_to_dict(params)) == params

    def test_to_dict_is_plain(self):
        assert curve_parameters_to_dict(CurveParameters()) == {
            "slope": 1_000_000,
            "reserve_ratio": 50_000,
            "power_mode": "integer_exponent",
        }

    def test_param_names(self):
        assert PARAM_NAMES == ("slope", "reserve_ratio", "power_mode")

    def test_power_mode_optional(self):
        p = curve_parameters_from_dict({"slope": 5, "reserve_ratio": 7})
        assert p.power_mode is PowerMode.INTEGER_EXPONENT

    def test_power_mode_enum_accepted(self):
        p = curve_parameters_from_dict({"slope": 5, "reserve_ratio": 7, "power_mode": PowerMode.FRACTIONAL})
        assert p.power_mode is PowerMode.FRACTIONAL

    def test_missing_field(self):
        with pytest.raises(KeyError):
            curve_parameters_from_dict({"slope": 5})

    def test_unknown_field(self):
        with pytest.raises(ValueError, match="unknown curve parameters: fee"):
            curve_parameters_from_dict({"slope": 5, "reserve_ratio": 7, "fee": 1})

    @pytest.mark.parametrize("bad", [True, 1.5, "7"])
    def test_wrong_type(self, bad):
        with pytest.raises(TypeError):
            curve_parameters_from_dict({"slope": 5, "reserve_ratio": bad})

    def test_bad_power_mode(self):
        with pytest.raises(ValueError):
            curve_parameters_from_dict({"slope": 5, "reserve_ratio": 7, "power_mode": "cubic"})
        with pytest.raises(TypeError):
            curve_parameters_from_dict({"slope": 5, "reserve_ratio": 7, "power_mode": 1})

    def test_values_still_validated(self):
        with pytest.raises(ZeroWeightError):
            curve_parameters_from_dict({"slope": 5, "reserve_ratio": 0})


# ---------------------------------------------------------------------------
# YAML
# ---------------------------------------------------------------------------

class TestYaml:
    def test_flat_mapping(self, tmp_path):
        path = _write(tmp_path, "slope: 2000000\nreserve_ratio: 500000\n")
        assert load_curve_parameters(path) == CurveParameters(slope=2_000_000, reserve_ratio=500_000)

    def test_nested_mapping(self, tmp_path):
        path = _write(
            tmp_path,
            "curve:\n  slope: 1000000\n  reserve_ratio: 250000\n  power_mode: fractional\n",
        )
        assert load_curve_parameters(str(path)) == CurveParameters(
            reserve_ratio=250_000, power_mode=PowerMode.FRACTIONAL
        )

    def test_non_mapping(self, tmp_path):
        with pytest.raises(TypeError):
            load_curve_parameters(_write(tmp_path, "- 1\n- 2\n"))

    def test_nested_non_mapping(self, tmp_path):
        with pytest.raises(TypeError):
            load_curve_parameters(_write(tmp_path, "curve: 5\n"))

    def test_packaged_defaults(self):
        assert default_curve_parameters() == CurveParameters()
        assert default_curve_parameters() is default_curve_parameters()
