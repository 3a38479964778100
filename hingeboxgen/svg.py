"""Laser-safe SVG output for panel outlines.

Every panel becomes one SVG document with a single path built only from
M/L/Z commands. Holes are drawn as 36-sided polygons (10 degrees per segment)
instead of arcs, because the cutter toolchain accepts straight segments only.
"""

from __future__ import annotations

import math
import re
from typing import List, Sequence

from .geometry import BoxPanels, BoxSvgs, CircleHole2D, Panel2D, Point2D, bbox_points, fmt

DEFAULT_PADDING_MM = 5.0
STROKE_WIDTH_MM = 0.1
CIRCLE_SEGMENTS = 36

_CURVE_COMMANDS = re.compile(r"[CcQqAaSs]")


class NonOrthogonalPathError(RuntimeError):
    """A generated path contains a curve command (C/Q/A/S)."""


def validate_orthogonal_path(d: str) -> None:
    if _CURVE_COMMANDS.search(d):
        raise NonOrthogonalPathError(
            "INVALID SVG: Path contains curve commands (C/Q/A/S). Only M/L/Z are allowed for laser cutting."
        )


def polyline_to_path(points: Sequence[Point2D], dx: float = 0.0, dy: float = 0.0, close: bool = True) -> str:
    if not points:
        return ""
    d = [f"M {fmt(points[0][0] + dx)} {fmt(points[0][1] + dy)}"]
    for x, y in points[1:]:
        d.append(f"L {fmt(x + dx)} {fmt(y + dy)}")
    if close:
        d.append("Z")
    return " ".join(d)


def circle_polygon(hole: CircleHole2D, segments: int = CIRCLE_SEGMENTS) -> List[Point2D]:
    return [
        Point2D(
            hole.cx + hole.r * math.cos(2 * math.pi * i / segments),
            hole.cy + hole.r * math.sin(2 * math.pi * i / segments),
        )
        for i in range(segments)
    ]


def svg_header(width: float, height: float) -> str:
    return (
        "<?xml version=\"1.0\" encoding=\"UTF-8\"?>\n"
        f"<svg xmlns=\"http://www.w3.org/2000/svg\" width=\"{fmt(width)}mm\" height=\"{fmt(height)}mm\" viewBox=\"0 0 {fmt(width)} {fmt(height)}\">\n"
    )


def svg_footer() -> str:
    return "</svg>\n"


def svg_path_element(d: str) -> str:
    return f'  <path d="{d}" fill="none" stroke="#000000" stroke-width="{STROKE_WIDTH_MM}"/>\n'


def panel_to_svg(panel: Panel2D, padding: float = DEFAULT_PADDING_MM) -> str:
    """Render one panel; an empty outline renders as an empty string."""
    if not panel.outline:
        return ""

    min_x, min_y, max_x, max_y = bbox_points(panel.outline)
    shift_x = -min_x + padding
    shift_y = -min_y + padding
    width = max_x - min_x + padding * 2
    height = max_y - min_y + padding * 2

    parts = [polyline_to_path(panel.outline, shift_x, shift_y)]
    for hole in panel.holes:
        parts.append(polyline_to_path(circle_polygon(hole), shift_x, shift_y))
    d = " ".join(parts)

    validate_orthogonal_path(d)
    return svg_header(width, height) + svg_path_element(d) + svg_footer()


def panels_to_svgs(panels: BoxPanels) -> BoxSvgs:
    return BoxSvgs(**{name: panel_to_svg(panel) for name, panel in panels.items()})
