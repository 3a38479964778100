"""Advisory input validation for the hinged box.

Nothing here clamps or rewrites inputs and the generators never call it;
callers decide whether errors block export.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List

from .fingers import round_half_up
from .params import HingedInputs


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "errors": list(self.errors), "warnings": list(self.warnings)}


def calculate_min_dimension(thickness_mm: float, finger_width_mm: float) -> float:
    return max(finger_width_mm * 3, thickness_mm * 4)


def calculate_recommended_finger_width(width_mm: float, depth_mm: float, height_mm: float) -> int:
    # About 1/12 of the average dimension, kept within 5..20 mm.
    recommended = (width_mm + depth_mm + height_mm) / 3 / 12
    if not math.isfinite(recommended):
        return 20 if recommended > 0 else 5
    return max(5, min(20, round_half_up(recommended)))


def validate_shared_inputs(inputs: HingedInputs) -> ValidationResult:
    res = ValidationResult()
    err = res.errors.append
    warn = res.warnings.append

    for label, value in (
        ("Width", inputs.width_mm),
        ("Depth", inputs.depth_mm),
        ("Height", inputs.height_mm),
        ("Material thickness", inputs.thickness_mm),
        ("Kerf", inputs.kerf_mm),
    ):
        if not math.isfinite(value):
            err(f"{label} must be a finite number")

    if inputs.width_mm < 10:
        err("Width must be at least 10mm")
    if inputs.depth_mm < 10:
        err("Depth must be at least 10mm")
    if inputs.height_mm < 10:
        err("Height must be at least 10mm")

    if inputs.width_mm > 1000:
        warn("Width exceeds 1000mm - may not fit on standard laser beds")
    if inputs.depth_mm > 1000:
        warn("Depth exceeds 1000mm - may not fit on standard laser beds")
    if inputs.height_mm > 500:
        warn("Height exceeds 500mm - very tall box")

    if inputs.thickness_mm < 1:
        err("Material thickness must be at least 1mm")
    if inputs.thickness_mm > 50:
        err("Material thickness exceeds 50mm")
    if inputs.thickness_mm > 10:
        warn("Material thickness > 10mm is unusual for laser cutting")

    if inputs.kerf_mm < 0:
        err("Kerf cannot be negative")
    if inputs.kerf_mm > 2:
        warn("Kerf > 2mm is unusually large")
    if inputs.kerf_mm > inputs.thickness_mm:
        err("Kerf cannot exceed material thickness")

    if min(inputs.width_mm, inputs.depth_mm, inputs.height_mm) < inputs.thickness_mm * 3:
        warn("Smallest dimension is less than 3x material thickness - box may be fragile")

    return res


def validate_hinged_inputs(inputs: HingedInputs) -> ValidationResult:
    """Shared dimension rules plus joint, hinge and hole rules."""
    res = validate_shared_inputs(inputs)
    err = res.errors.append
    warn = res.warnings.append

    for label, value in (
        ("Joint finger width", inputs.joint_finger_width_mm),
        ("Hinge finger width", inputs.hinge_finger_width_mm),
        ("Hinge clearance", inputs.hinge_clearance_mm),
        ("Hinge hole diameter", inputs.hinge_hole_diameter_mm),
        ("Hinge hole inset", inputs.hinge_hole_inset_mm),
    ):
        if not math.isfinite(value):
            err(f"{label} must be a finite number")

    if inputs.joint_finger_width_mm < 3:
        err("Joint finger width must be at least 3mm")
    if inputs.joint_finger_width_mm > 50:
        err("Joint finger width exceeds 50mm")

    if not inputs.auto_joint_finger_count:
        c = inputs.manual_joint_finger_count
        if not c or not math.isfinite(c):
            err("Manual joint finger count is required")
        else:
            v = math.floor(c)
            if v < 3:
                err("Manual joint finger count must be at least 3")
            if v > 999:
                err("Manual joint finger count exceeds 999")

    recommended = calculate_recommended_finger_width(inputs.width_mm, inputs.depth_mm, inputs.height_mm)
    if inputs.joint_finger_width_mm < recommended * 0.5:
        warn(f"Joint finger width is small. Recommended: {recommended:.1f}mm")
    if inputs.joint_finger_width_mm > recommended * 2:
        warn(f"Joint finger width is large. Recommended: {recommended:.1f}mm")

    if inputs.hinge_finger_width_mm < 3:
        err("Hinge finger width must be at least 3mm")
    if inputs.hinge_finger_width_mm > 30:
        err("Hinge finger width exceeds 30mm")

    if inputs.hinge_clearance_mm < 0:
        err("Hinge clearance cannot be negative")
    if inputs.hinge_clearance_mm > 5:
        warn("Hinge clearance > 5mm may be too loose")
    if inputs.hinge_clearance_mm < inputs.kerf_mm:
        warn("Hinge clearance is less than kerf - hinge may bind")

    if inputs.hinge_hole_diameter_mm < 2:
        err("Hinge hole diameter must be at least 2mm")
    if inputs.hinge_hole_diameter_mm > inputs.thickness_mm * 2:
        warn("Hinge hole diameter is larger than 2x material thickness")

    if inputs.hinge_hole_inset_mm < inputs.thickness_mm:
        warn("Hinge hole inset is less than material thickness - may be too close to edge")

    min_dim = calculate_min_dimension(inputs.thickness_mm, inputs.joint_finger_width_mm)
    for label, value in (("Width", inputs.width_mm), ("Depth", inputs.depth_mm), ("Height", inputs.height_mm)):
        if value < min_dim:
            err(f"{label} too small for finger joints. Minimum: {min_dim:.1f}mm")

    return res
