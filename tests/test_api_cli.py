import json

import pytest

from hingeboxgen import generate_hinged_box, generate_hinged_box_svgs
from hingeboxgen.cli import main
from hingeboxgen.geometry import PANEL_NAMES
from hingeboxgen.params import HingedInputs, hinged_inputs_from_params, load_params_file


def test_reference_scenario_end_to_end():
    res = generate_hinged_box({"width_mm": 156, "depth_mm": 156, "height_mm": 150, "thickness_mm": 3})
    assert sorted(res["svgs"]) == sorted(PANEL_NAMES)
    assert res["checks"]["passed"] is True
    assert res["errors"] == []
    assert res["warnings"] == []
    assert res["meta"]["joint_segments"] == {"width": 11, "depth": 11, "height": 11}
    assert res["meta"]["hinge_knuckles"] == 19
    # JSON-serializable for browser callers
    json.dumps(res)


def test_output_is_deterministic():
    a = generate_hinged_box({"width_mm": 123.4, "joint_finger_width_mm": 9})
    b = generate_hinged_box({"width_mm": 123.4, "joint_finger_width_mm": 9})
    assert a == b


def test_validation_errors_are_reported_not_enforced():
    res = generate_hinged_box({"joint_finger_width_mm": 1})
    assert "Joint finger width must be at least 3mm" in res["errors"]
    assert res["checks"]["passed"] is True


@pytest.mark.parametrize("mode", ["parametric", "template", "scaled"])
def test_all_modes_render(mode):
    res = generate_hinged_box({}, mode=mode)
    assert res["meta"]["mode"] == mode
    assert all(svg.startswith("<?xml") for svg in res["svgs"].values())


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        generate_hinged_box({}, mode="origami")
    with pytest.raises(ValueError):
        generate_hinged_box_svgs(HingedInputs(), "origami")


def test_params_must_be_a_dict():
    with pytest.raises(TypeError):
        generate_hinged_box(["width_mm", 100])


def test_unknown_param_rejected():
    with pytest.raises(ValueError):
        hinged_inputs_from_params({"widht_mm": 100})


def test_camel_case_params_and_manual_counts():
    inputs = hinged_inputs_from_params({"widthMm": "120", "manualJointFingerCount": 7.9, "autoFingerCount": "false"})
    assert inputs.width_mm == 120.0
    assert inputs.manual_joint_finger_count == 7
    assert inputs.auto_joint_finger_count is False
    assert inputs.auto_finger_count is False


def test_load_params_file(tmp_path):
    p = tmp_path / "box.json"
    p.write_text(json.dumps({"width_mm": 90}), encoding="utf-8")
    assert load_params_file(p) == {"width_mm": 90}

    bad = tmp_path / "list.json"
    bad.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(TypeError):
        load_params_file(bad)


def test_cli_writes_six_files_and_checks(tmp_path, capsys):
    out = tmp_path / "box"
    assert main(["--out", str(out), "--check"]) == 0
    for name in PANEL_NAMES:
        assert (out / f"{name}.svg").read_text(encoding="utf-8").startswith("<?xml")
    printed = capsys.readouterr().out
    assert printed.count("Wrote ") == 6
    assert "All checks passed" in printed


def test_cli_flags_override_params_file(tmp_path):
    params = tmp_path / "params.json"
    params.write_text(json.dumps({"width_mm": 200, "depth_mm": 120}), encoding="utf-8")
    out = tmp_path / "svgs"
    assert main(["--out", str(out), "--params", str(params), "--width", "180"]) == 0
    front = (out / "front.svg").read_text(encoding="utf-8")
    # outer width 180 plus 5 mm padding on both sides
    assert 'width="190.000mm"' in front
    bottom = (out / "bottom.svg").read_text(encoding="utf-8")
    assert 'height="130.000mm"' in bottom


def test_cli_reports_blocking_errors(tmp_path, capsys):
    assert main(["--out", str(tmp_path), "--joint_finger_w", "1"]) == 0
    printed = capsys.readouterr().out
    assert "EXPORT SHOULD BE BLOCKED (errors):" in printed


def test_cli_rejects_bad_params_file(tmp_path, capsys):
    params = tmp_path / "params.json"
    params.write_text(json.dumps({"colour": "red"}), encoding="utf-8")
    assert main(["--out", str(tmp_path / "o"), "--params", str(params)]) == 2
    assert "Unknown parameter: colour" in capsys.readouterr().err


@pytest.mark.parametrize("value", ["nan", "inf", float("-inf")])
def test_non_finite_params_rejected(value):
    with pytest.raises(ValueError, match="finite"):
        hinged_inputs_from_params({"width_mm": value})
    with pytest.raises(ValueError):
        generate_hinged_box({"thickness_mm": value})


def test_cli_rejects_non_finite_flag(tmp_path, capsys):
    out = tmp_path / "o"
    assert main(["--out", str(out), "--width", "nan"]) == 2
    assert "must be a finite number" in capsys.readouterr().err
    assert not out.exists()


def test_template_modes_leave_parametric_meta_out():
    parametric = generate_hinged_box({})["meta"]
    assert {"joint_segments", "hinge_knuckles", "panel_sizes"} <= set(parametric)
    for mode in ("template", "scaled"):
        meta = generate_hinged_box({}, mode=mode)["meta"]
        assert set(meta) == {"mode", "inputs"}
