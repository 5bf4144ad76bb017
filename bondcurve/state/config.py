"""Loading and serialization of `CurveParameters`.

`load_curve_parameters()` reads a YAML file (either a flat mapping or one
nested under `curve:`). `default_curve_parameters()` returns the deployment
defaults shipped next to this module.

Round-trip property (tested):
`curve_parameters_from_dict(curve_parameters_to_dict(p)) == p`.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..core.curve import CurveParameters
from ..core.power import PowerMode

PARAM_NAMES: tuple[str, ...] = tuple(CurveParameters.__dataclass_fields__)
_REQUIRED = ("slope", "reserve_ratio")


def _default_config_path() -> Path:
    return Path(__file__).resolve().parent / "default_curve.yaml"


def curve_parameters_to_dict(params: CurveParameters) -> dict[str, int | str]:
    """Serialize to a plain dict (YAML/JSON friendly)."""
    return {
        "slope": params.slope,
        "reserve_ratio": params.reserve_ratio,
        "power_mode": params.power_mode.value,
    }


def curve_parameters_from_dict(d: Mapping[str, Any]) -> CurveParameters:
    """Deserialize a dict. Raises KeyError on missing fields."""
    unknown = sorted(set(d) - set(PARAM_NAMES))
    if unknown:
        raise ValueError(f"unknown curve parameters: {', '.join(unknown)}")

    kwargs: dict[str, Any] = {}
    for name in _REQUIRED:
        val = d[name]
        if isinstance(val, bool) or not isinstance(val, int):
            raise TypeError(f"curve parameter {name!r} must be int, got {type(val).__name__}")
        kwargs[name] = int(val)

    mode = d.get("power_mode")
    if mode is not None:
        if isinstance(mode, PowerMode):
            kwargs["power_mode"] = mode
        elif isinstance(mode, str):
            kwargs["power_mode"] = PowerMode(mode)
        else:
            raise TypeError(f"curve parameter 'power_mode' must be str, got {type(mode).__name__}")

    return CurveParameters(**kwargs)


def load_curve_parameters(path: str | Path) -> CurveParameters:
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if not isinstance(obj, Mapping):
        raise TypeError("curve config YAML must be a mapping")
    if "curve" in obj:
        obj = obj["curve"]
        if not isinstance(obj, Mapping):
            raise TypeError("curve config 'curve' section must be a mapping")
    return curve_parameters_from_dict(obj)


@lru_cache(maxsize=1)
def default_curve_parameters() -> CurveParameters:
    return load_curve_parameters(_default_config_path())
