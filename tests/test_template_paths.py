import xml.etree.ElementTree as ET

import pytest

from hingeboxgen.params import HingedInputs
from hingeboxgen.template import (
    TEMPLATE_ORIGINAL,
    TEMPLATE_SVGS,
    BBox,
    PathSyntaxError,
    generate_scaled_template_svgs,
    path_bbox,
    scale_template_path,
    svg_from_template_path,
    template_svgs,
    tokenize_path,
)


def test_tokenizer_handles_implicit_separators():
    assert list(tokenize_path("M1.5.5l3-4")) == [("M", [1.5, 0.5]), ("l", [3.0, -4.0])]


def test_tokenizer_handles_commas_exponents_and_leading_dots():
    tokens = list(tokenize_path("M 1e2,-.5 c1,2 3,4 5,6 Z"))
    assert tokens == [("M", [100.0, -0.5]), ("c", [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]), ("Z", [])]


@pytest.mark.parametrize(
    "d",
    [
        "M0 0 Q1 1 2 2",  # unsupported command
        "5 5 L1 1",  # number before any command
        "M0",  # odd coordinate count
        "M0 0 C1 1 2 2",  # incomplete cubic
        "M0 0 Z 4",  # closepath takes no numbers
        "M0 0 L",  # missing numbers
        "M0 0 L1 1 #",  # stray character
    ],
)
def test_tokenizer_rejects_malformed_paths(d):
    with pytest.raises(PathSyntaxError):
        list(tokenize_path(d))


def test_path_syntax_error_is_a_value_error():
    assert issubclass(PathSyntaxError, ValueError)


def test_bbox_of_empty_path_is_zero():
    assert path_bbox("") == BBox(0.0, 0.0, 0.0, 0.0)


def test_bbox_relative_commands_and_close():
    bb = path_bbox("m10 10l5 0l0 5z")
    assert (bb.min_x, bb.min_y, bb.max_x, bb.max_y) == pytest.approx((10, 10, 15, 15))
    assert bb.width == pytest.approx(5.0)
    assert bb.center == pytest.approx((12.5, 12.5))


def test_bbox_extra_moveto_pairs_are_linetos():
    bb = path_bbox("M10 20 30 40")
    assert (bb.min_x, bb.min_y, bb.max_x, bb.max_y) == pytest.approx((10, 20, 30, 40))


def test_bbox_includes_curve_control_points():
    bb = path_bbox("M0 0C0 -10 10 -10 10 0")
    assert bb.min_y == pytest.approx(-10.0)
    assert bb.max_x == pytest.approx(10.0)


def test_bbox_ignores_commands_before_first_moveto():
    bb = path_bbox("L100 100M0 0L1 1")
    assert (bb.max_x, bb.max_y) == pytest.approx((1.0, 1.0))


def test_bbox_h_and_v():
    bb = path_bbox("M1 1H6V-3h-2v10")
    assert (bb.min_x, bb.min_y, bb.max_x, bb.max_y) == pytest.approx((1, -3, 6, 7))


def test_scale_preserves_commands_and_scales_axes():
    assert scale_template_path("M10 20h5v-4c1,2 3,4 5,6z", 2, 0.5) == "M20 10h10v-2c2,1 6,2 10,3z"


@pytest.mark.parametrize("key", sorted(TEMPLATE_SVGS))
def test_identity_scale_reproduces_reference_paths(key):
    assert scale_template_path(TEMPLATE_SVGS[key], 1.0, 1.0) == TEMPLATE_SVGS[key]


def test_scaling_stretches_bbox():
    d = TEMPLATE_SVGS["bottom"]
    before = path_bbox(d)
    after = path_bbox(scale_template_path(d, 2.0, 1.0))
    assert after.width == pytest.approx(2 * before.width, abs=1e-2)
    assert after.height == pytest.approx(before.height, abs=1e-2)


def test_template_mapping_is_read_only():
    with pytest.raises(TypeError):
        TEMPLATE_SVGS["front"] = "M0 0"


def test_template_original_dimensions():
    assert (TEMPLATE_ORIGINAL.width_mm, TEMPLATE_ORIGINAL.depth_mm, TEMPLATE_ORIGINAL.height_mm) == (156.0, 156.0, 150.0)
    assert TEMPLATE_ORIGINAL.hinge_strip_height_mm == 30.0


def test_wrapper_translates_and_optionally_rotates():
    plain = svg_from_template_path("M10 10l20 0l0 10z")
    assert '<g transform="translate(-5.000 -5.000)">' in plain
    assert 'width="30.000mm"' in plain

    rotated = svg_from_template_path("M10 10l20 0l0 10z", rotate180=True)
    assert "rotate(180 20.000 15.000)" in rotated


def test_reference_templates_render_as_xml():
    svgs = template_svgs()
    for name, svg in svgs.items():
        root = ET.fromstring(svg.encode("utf-8"))
        assert root.tag.endswith("svg"), name
    assert "rotate(180" in svgs.back
    assert "rotate(180" not in svgs.front


def test_scaled_templates_at_reference_size_match_unscaled():
    assert generate_scaled_template_svgs(HingedInputs()) == template_svgs()


def test_scaled_templates_follow_box_width():
    wide = generate_scaled_template_svgs(HingedInputs(width_mm=312.0))
    ref = template_svgs()
    assert wide.left == ref.left
    assert wide.bottom != ref.bottom
