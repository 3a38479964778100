"""Outline builders for the six panels of the hinged box.

Layout (outer box W x D x H, material T):
- Tabs protrude T outward from each baseline, so baselines are the outer size
  less 2T: Wb = W - 2T, Db = D - 2T, Hb = H - 2T.
- Outlines run clockwise in SVG coordinates: top edge left to right, right
  edge down, bottom edge right to left, left edge up.
- Mating edges share one width list; one side walks it, the other walks the
  complementary pattern:
    walls' bottom edges (tabs at both ends)  <-> bottom panel edges
    front/back vertical edges (slots at ends) <-> left/right vertical edges
- Vertical joints are measured top-down on every panel; an edge walked
  bottom-up gets its segments reversed. Bottom joints are symmetric.
- The back's top edge and the lid's top edge carry interleaved hinge
  knuckles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .fingers import (
    FingerPattern,
    get_complementary_pattern,
    hinge_finger_count,
    joint_segment_count,
    pattern_from_widths,
    template_bottom_joint_widths,
    template_side_vertical_widths,
    walk_finger_pattern,
)
from .geometry import (
    BoxPanels,
    CircleHole2D,
    Panel2D,
    Point2D,
    add,
    compact_outline,
    mul,
    outward_normal_for_edge,
    pt,
)
from .hinge import generate_hinge_fingers
from .params import HingedInputs

logger = logging.getLogger(__name__)

# Side panel pivot hole: fixed 4.5 mm hole, offset from the top corner.
PIVOT_HOLE_DIAMETER_MM = 4.5
PIVOT_HOLE_OFFSET_X_MM = 2.25
PIVOT_HOLE_OFFSET_Y_MM = 1.75

_EDGE_ORDER = ("top", "right", "bottom", "left")


@dataclass(frozen=True)
class BoxLayout:
    thickness: float
    base_w: float
    base_d: float
    base_h: float
    wall_bottom_w: FingerPattern
    wall_bottom_d: FingerPattern
    wall_vertical: FingerPattern
    hinge_count: int


def box_layout(inputs: HingedInputs) -> BoxLayout:
    t = inputs.thickness_mm
    base_w = max(0.0, inputs.width_mm - 2 * t)
    base_d = max(0.0, inputs.depth_mm - 2 * t)
    base_h = max(0.0, inputs.height_mm - 2 * t)

    n_w = joint_segment_count(base_w, inputs)
    n_d = joint_segment_count(base_d, inputs)
    n_h = joint_segment_count(base_h, inputs)
    n_hinge = hinge_finger_count(base_w, inputs)
    logger.debug("joint segments: width=%d depth=%d height=%d; hinge knuckles=%d", n_w, n_d, n_h, n_hinge)

    return BoxLayout(
        thickness=t,
        base_w=base_w,
        base_d=base_d,
        base_h=base_h,
        wall_bottom_w=pattern_from_widths(template_bottom_joint_widths(base_w, n_w), start_with_male=True),
        wall_bottom_d=pattern_from_widths(template_bottom_joint_widths(base_d, n_d), start_with_male=True),
        wall_vertical=pattern_from_widths(template_side_vertical_widths(base_h, n_h), start_with_male=False),
        hinge_count=n_hinge,
    )


def _reversed(pattern: FingerPattern) -> FingerPattern:
    return FingerPattern(tuple(reversed(pattern.segments)))


def rect_with_fingers(
    w: float,
    h: float,
    *,
    depth: float,
    patterns: Dict[str, Optional[FingerPattern]],
    top_points: Optional[Sequence[Point2D]] = None,
) -> List[Point2D]:
    """Stitch four edges into one clockwise outline.

    ``patterns`` maps edge names to the pattern in reference order (left to
    right, top to bottom); missing edges are straight. ``top_points``
    replaces the top edge with a pre-walked polyline starting at (0, 0).
    """
    corners = {
        "top": (pt(0, 0), pt(1, 0), w),
        "right": (pt(w, 0), pt(0, 1), h),
        "bottom": (pt(w, h), pt(-1, 0), w),
        "left": (pt(0, h), pt(0, -1), h),
    }
    pts: List[Point2D] = []
    for name in _EDGE_ORDER:
        start, dirv, length = corners[name]
        if name == "top" and top_points is not None:
            edge = list(top_points)
        else:
            pattern = patterns.get(name)
            if pattern is None or not len(pattern):
                edge = [start, add(start, mul(dirv, length))]
            else:
                if name in ("bottom", "left"):
                    pattern = _reversed(pattern)
                edge = walk_finger_pattern(start, dirv, outward_normal_for_edge(dirv), pattern, depth)
        pts.extend(edge if not pts else edge[1:])
    return compact_outline(pts)


def _hinge_holes(inputs: HingedInputs, base_w: float) -> Tuple[CircleHole2D, ...]:
    inset = inputs.hinge_hole_inset_mm
    r = inputs.hinge_hole_diameter_mm / 2
    return (
        CircleHole2D(cx=inset, cy=inset, r=r),
        CircleHole2D(cx=base_w - inset, cy=inset, r=r),
    )


def _hinge_edge(inputs: HingedInputs, layout: BoxLayout, *, is_back: bool) -> List[Point2D]:
    dirv = pt(1, 0)
    return generate_hinge_fingers(
        pt(0, 0),
        dirv,
        outward_normal_for_edge(dirv),
        layout.base_w,
        layout.thickness,
        inputs.hinge_finger_width_mm,
        layout.hinge_count,
        inputs.hinge_clearance_mm,
        is_back,
    )


def generate_front_panel(inputs: HingedInputs) -> Panel2D:
    layout = box_layout(inputs)
    outline = rect_with_fingers(
        layout.base_w,
        layout.base_h,
        depth=layout.thickness,
        patterns={
            "right": layout.wall_vertical,
            "bottom": layout.wall_bottom_w,
            "left": layout.wall_vertical,
        },
    )
    return Panel2D(outline=tuple(outline))


def generate_back_panel(inputs: HingedInputs) -> Panel2D:
    layout = box_layout(inputs)
    outline = rect_with_fingers(
        layout.base_w,
        layout.base_h,
        depth=layout.thickness,
        patterns={
            "right": layout.wall_vertical,
            "bottom": layout.wall_bottom_w,
            "left": layout.wall_vertical,
        },
        top_points=_hinge_edge(inputs, layout, is_back=True),
    )
    return Panel2D(outline=tuple(outline), holes=_hinge_holes(inputs, layout.base_w))


def _generate_side_panel(inputs: HingedInputs, *, is_left: bool) -> Panel2D:
    layout = box_layout(inputs)
    side_vertical = get_complementary_pattern(layout.wall_vertical)
    outline = rect_with_fingers(
        layout.base_d,
        layout.base_h,
        depth=layout.thickness,
        patterns={
            "right": side_vertical,
            "bottom": layout.wall_bottom_d,
            "left": side_vertical,
        },
    )
    r = PIVOT_HOLE_DIAMETER_MM / 2
    cx = PIVOT_HOLE_OFFSET_X_MM + r if is_left else layout.base_d - PIVOT_HOLE_OFFSET_X_MM - r
    cy = PIVOT_HOLE_OFFSET_Y_MM + r
    return Panel2D(outline=tuple(outline), holes=(CircleHole2D(cx=cx, cy=cy, r=r),))


def generate_left_panel(inputs: HingedInputs) -> Panel2D:
    return _generate_side_panel(inputs, is_left=True)


def generate_right_panel(inputs: HingedInputs) -> Panel2D:
    return _generate_side_panel(inputs, is_left=False)


def generate_bottom_panel(inputs: HingedInputs) -> Panel2D:
    layout = box_layout(inputs)
    plate_w = get_complementary_pattern(layout.wall_bottom_w)
    plate_d = get_complementary_pattern(layout.wall_bottom_d)
    outline = rect_with_fingers(
        layout.base_w,
        layout.base_d,
        depth=layout.thickness,
        patterns={"top": plate_w, "right": plate_d, "bottom": plate_w, "left": plate_d},
    )
    return Panel2D(outline=tuple(outline))


def generate_lid_panel(inputs: HingedInputs) -> Panel2D:
    layout = box_layout(inputs)
    outline = rect_with_fingers(
        layout.base_w,
        layout.base_d,
        depth=layout.thickness,
        patterns={},
        top_points=_hinge_edge(inputs, layout, is_back=False),
    )
    return Panel2D(outline=tuple(outline), holes=_hinge_holes(inputs, layout.base_w))


def generate_hinged_box_panels(inputs: HingedInputs) -> BoxPanels:
    return BoxPanels(
        front=generate_front_panel(inputs),
        back=generate_back_panel(inputs),
        left=generate_left_panel(inputs),
        right=generate_right_panel(inputs),
        bottom=generate_bottom_panel(inputs),
        lid=generate_lid_panel(inputs),
    )
