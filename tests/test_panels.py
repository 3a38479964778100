import math

import pytest

from hingeboxgen.fingers import get_complementary_pattern
from hingeboxgen.geometry import polygon_area
from hingeboxgen.panels import box_layout, generate_hinged_box_panels, rect_with_fingers
from hingeboxgen.params import HingedInputs


def _edges(outline):
    pts = list(outline)
    return list(zip(pts, pts[1:] + pts[:1]))


def test_all_panels_are_closed_orthogonal_clockwise_polygons():
    panels = generate_hinged_box_panels(HingedInputs())
    for name, panel in panels.items():
        assert len(panel.outline) >= 4, name
        assert panel.outline[0] != panel.outline[-1], name
        assert polygon_area(panel.outline) > 0, name
        for a, b in _edges(panel.outline):
            assert a[0] == pytest.approx(b[0], abs=1e-9) or a[1] == pytest.approx(b[1], abs=1e-9), name


def test_reference_panel_sizes():
    # W=D=156, H=150, T=3 -> baselines 150 x 150 x 144
    panels = generate_hinged_box_panels(HingedInputs())
    expected = {
        "front": (156.0, 147.0),
        "back": (156.0, 150.0),
        "left": (156.0, 147.0),
        "right": (156.0, 147.0),
        "bottom": (156.0, 156.0),
        "lid": (150.0, 153.0),
    }
    for name, panel in panels.items():
        assert panel.size() == pytest.approx(expected[name], abs=1e-6), name


def test_reference_layout_counts():
    layout = box_layout(HingedInputs())
    assert layout.base_w == pytest.approx(150.0)
    assert layout.base_h == pytest.approx(144.0)
    assert layout.wall_bottom_w.segment_count == 11
    assert layout.wall_vertical.segment_count == 11
    assert layout.hinge_count == 19


def test_mating_edges_share_widths_with_opposite_kinds():
    layout = box_layout(HingedInputs(width_mm=200, depth_mm=120, height_mm=90))
    for wall in (layout.wall_bottom_w, layout.wall_bottom_d, layout.wall_vertical):
        mate = get_complementary_pattern(wall)
        assert mate.widths == wall.widths
        assert all(a.is_tab != b.is_tab for a, b in zip(wall, mate))


def test_wall_bottom_joint_owns_the_corners():
    layout = box_layout(HingedInputs())
    p = layout.wall_bottom_w
    assert p.is_tab(0) and p.is_tab(p.segment_count - 1)
    assert p.widths == pytest.approx(list(reversed(p.widths)))


def test_wall_vertical_joint_has_slots_at_both_ends():
    p = box_layout(HingedInputs()).wall_vertical
    assert not p.is_tab(0)
    assert not p.is_tab(p.segment_count - 1)
    assert p.total_width == pytest.approx(144.0, abs=1e-3)


def test_hinge_holes_on_back_and_lid():
    panels = generate_hinged_box_panels(HingedInputs())
    for panel in (panels.back, panels.lid):
        assert len(panel.holes) == 2
        a, b = panel.holes
        assert (a.cx, a.cy, a.r) == pytest.approx((8.0, 8.0, 2.5))
        assert (b.cx, b.cy, b.r) == pytest.approx((142.0, 8.0, 2.5))
    assert panels.front.holes == ()
    assert panels.bottom.holes == ()


def test_side_pivot_holes_mirror_each_other():
    panels = generate_hinged_box_panels(HingedInputs())
    (left,) = panels.left.holes
    (right,) = panels.right.holes
    assert left.r == pytest.approx(2.25)
    assert (left.cx, left.cy) == pytest.approx((4.5, 4.0))
    assert (right.cx, right.cy) == pytest.approx((145.5, 4.0))


def test_manual_counts_flow_into_panels():
    inputs = HingedInputs(
        width_mm=80,
        depth_mm=60,
        height_mm=50,
        auto_joint_finger_count=False,
        manual_joint_finger_count=5,
        auto_finger_count=False,
        manual_hinge_finger_count=7,
    )
    layout = box_layout(inputs)
    assert layout.wall_bottom_w.segment_count == 5
    assert layout.wall_vertical.segment_count == 5
    assert layout.hinge_count == 7


def test_plain_rectangle_has_four_corners():
    outline = rect_with_fingers(40.0, 20.0, depth=3.0, patterns={})
    assert outline == [(0.0, 0.0), (40.0, 0.0), (40.0, 20.0), (0.0, 20.0)]


def test_panels_are_deterministic():
    a = generate_hinged_box_panels(HingedInputs(width_mm=101.3))
    b = generate_hinged_box_panels(HingedInputs(width_mm=101.3))
    assert a == b


def test_infinite_width_saturates_counts_instead_of_raising():
    inputs = HingedInputs(width_mm=math.inf)
    layout = box_layout(inputs)
    assert layout.wall_bottom_w.segment_count == 999
    assert layout.hinge_count == 999
    panels = generate_hinged_box_panels(inputs)
    assert len(panels.left.outline) > 4


def test_zero_joint_finger_width_floors_at_one_millimetre():
    inputs = HingedInputs(joint_finger_width_mm=0)
    layout = box_layout(inputs)
    # 150 mm baseline / 1 mm floor -> 150, forced odd
    assert layout.wall_bottom_w.segment_count == 151
    assert layout.wall_vertical.segment_count == 145
    panels = generate_hinged_box_panels(inputs)
    for name, panel in panels.items():
        assert polygon_area(panel.outline) > 0, name
