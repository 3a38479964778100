import math

from hingeboxgen.params import HingedInputs
from hingeboxgen.validation import (
    calculate_min_dimension,
    calculate_recommended_finger_width,
    validate_hinged_inputs,
)


def test_reference_box_is_clean():
    res = validate_hinged_inputs(HingedInputs())
    assert res.is_valid
    assert res.errors == []
    assert res.warnings == []


def test_min_dimension_rule():
    assert calculate_min_dimension(3.0, 15.0) == 45.0
    assert calculate_min_dimension(10.0, 5.0) == 40.0


def test_recommended_finger_width_is_clamped():
    assert calculate_recommended_finger_width(156, 156, 150) == 13
    assert calculate_recommended_finger_width(20, 20, 20) == 5
    assert calculate_recommended_finger_width(900, 900, 900) == 20


def test_small_box_errors():
    res = validate_hinged_inputs(HingedInputs(width_mm=8, depth_mm=100, height_mm=100))
    assert not res.is_valid
    assert "Width must be at least 10mm" in res.errors
    assert "Width too small for finger joints. Minimum: 45.0mm" in res.errors


def test_kerf_rules():
    res = validate_hinged_inputs(HingedInputs(kerf_mm=4.0, hinge_clearance_mm=0.2))
    assert "Kerf cannot exceed material thickness" in res.errors
    assert "Kerf > 2mm is unusually large" in res.warnings
    assert "Hinge clearance is less than kerf - hinge may bind" in res.warnings


def test_manual_joint_count_required_when_auto_disabled():
    res = validate_hinged_inputs(HingedInputs(auto_joint_finger_count=False))
    assert "Manual joint finger count is required" in res.errors

    res = validate_hinged_inputs(HingedInputs(auto_joint_finger_count=False, manual_joint_finger_count=2))
    assert "Manual joint finger count must be at least 3" in res.errors

    res = validate_hinged_inputs(HingedInputs(auto_joint_finger_count=False, manual_joint_finger_count=1200))
    assert "Manual joint finger count exceeds 999" in res.errors


def test_finger_width_advice():
    res = validate_hinged_inputs(HingedInputs(joint_finger_width_mm=5.0))
    assert "Joint finger width is small. Recommended: 13.0mm" in res.warnings
    assert res.is_valid


def test_hinge_rules():
    res = validate_hinged_inputs(
        HingedInputs(
            hinge_finger_width_mm=2.0,
            hinge_clearance_mm=-0.1,
            hinge_hole_diameter_mm=7.0,
            hinge_hole_inset_mm=2.0,
        )
    )
    assert "Hinge finger width must be at least 3mm" in res.errors
    assert "Hinge clearance cannot be negative" in res.errors
    assert "Hinge hole diameter is larger than 2x material thickness" in res.warnings
    assert "Hinge hole inset is less than material thickness - may be too close to edge" in res.warnings


def test_validation_does_not_touch_inputs():
    inputs = HingedInputs(width_mm=math.inf)
    validate_hinged_inputs(inputs)
    assert inputs.width_mm == math.inf


def test_result_to_dict():
    d = validate_hinged_inputs(HingedInputs(thickness_mm=0.5)).to_dict()
    assert d["is_valid"] is False
    assert "Material thickness must be at least 1mm" in d["errors"]


def test_non_finite_values_are_errors():
    res = validate_hinged_inputs(HingedInputs(width_mm=math.nan, hinge_clearance_mm=math.inf))
    assert not res.is_valid
    assert "Width must be a finite number" in res.errors
    assert "Hinge clearance must be a finite number" in res.errors
