"""Hinged box input parameters.

Defaults describe the reference box the hand-authored templates were drawn
for: 156 x 156 x 150 mm outer size in 3 mm stock.

Values are assumed to be range-checked by the caller; see
``hingeboxgen.validation`` for an advisory report.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class HingedInputs:
    width_mm: float = 156.0
    depth_mm: float = 156.0
    height_mm: float = 150.0
    thickness_mm: float = 3.0
    kerf_mm: float = 0.15

    joint_finger_width_mm: float = 15.0
    auto_joint_finger_count: bool = True
    manual_joint_finger_count: Optional[int] = None

    hinge_finger_width_mm: float = 8.0
    hinge_clearance_mm: float = 0.2
    hinge_hole_diameter_mm: float = 5.0
    hinge_hole_inset_mm: float = 8.0
    auto_finger_count: bool = True
    manual_hinge_finger_count: Optional[int] = None


_FLOAT_KEYS = {
    "width_mm",
    "depth_mm",
    "height_mm",
    "thickness_mm",
    "kerf_mm",
    "joint_finger_width_mm",
    "hinge_finger_width_mm",
    "hinge_clearance_mm",
    "hinge_hole_diameter_mm",
    "hinge_hole_inset_mm",
}
_BOOL_KEYS = {"auto_joint_finger_count", "auto_finger_count"}
_COUNT_KEYS = {"manual_joint_finger_count", "manual_hinge_finger_count"}


def _snake(key: str) -> str:
    out = []
    for ch in key:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out).replace("-", "_")


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("1", "true", "yes", "on"):
            return True
        if v in ("0", "false", "no", "off", ""):
            return False
        raise ValueError(f"not a boolean: {value!r}")
    return bool(value)


def _as_count(value: Any) -> Optional[int]:
    if value is None:
        return None
    n = float(value)
    if not math.isfinite(n):
        return None
    return int(math.floor(n))


def hinged_inputs_from_params(params: Dict[str, Any]) -> HingedInputs:
    """Build HingedInputs from a loose dict (JSON, form data, CLI).

    Accepts snake_case keys and their camelCase spellings (``widthMm``).
    Missing keys keep their defaults; unknown keys raise ValueError.
    """
    if not isinstance(params, dict):
        raise TypeError("params must be a dict")

    known = {f.name for f in fields(HingedInputs)}
    values: Dict[str, Any] = {}
    for raw_key, value in params.items():
        key = _snake(str(raw_key))
        if key not in known:
            raise ValueError(f"Unknown parameter: {raw_key}")
        if key in _FLOAT_KEYS:
            number = float(value)
            if not math.isfinite(number):
                raise ValueError(f"{raw_key} must be a finite number, got {value!r}")
            values[key] = number
        elif key in _BOOL_KEYS:
            values[key] = _as_bool(value)
        elif key in _COUNT_KEYS:
            values[key] = _as_count(value)

    # A manual count given without its flag means "use it".
    if values.get("manual_joint_finger_count") is not None and "auto_joint_finger_count" not in values:
        values["auto_joint_finger_count"] = False
    if values.get("manual_hinge_finger_count") is not None and "auto_finger_count" not in values:
        values["auto_finger_count"] = False

    return HingedInputs(**values)


def load_params_file(path: Union[str, Path]) -> Dict[str, Any]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise TypeError(f"{path}: params must be a JSON object")
    return data
