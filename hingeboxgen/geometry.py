"""Plain value types and vector helpers shared by every generator.

All coordinates are millimetres in SVG space (x right, y down).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, NamedTuple, Sequence, Tuple

PANEL_NAMES: Tuple[str, ...] = ("front", "back", "left", "right", "bottom", "lid")


class Point2D(NamedTuple):
    x: float
    y: float


def pt(x: float, y: float) -> Point2D:
    return Point2D(float(x), float(y))


def add(p: Sequence[float], q: Sequence[float]) -> Point2D:
    return Point2D(p[0] + q[0], p[1] + q[1])


def mul(p: Sequence[float], s: float) -> Point2D:
    return Point2D(p[0] * s, p[1] * s)


def fmt(n: float, places: int = 3) -> str:
    """Fixed-precision number, never rendered as ``-0.000``."""
    s = f"{n:.{places}f}"
    if s.startswith("-") and float(s) == 0.0:
        s = s[1:]
    return s


def fmt_trim(n: float, places: int = 4) -> str:
    s = fmt(n, places)
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def outward_normal_for_edge(dirv: Sequence[float]) -> Point2D:
    """Outward normal for a clockwise polygon in SVG coordinates (y down).

    For direction (dx,dy), outward is (dy, -dx).
    """

    dx, dy = dirv
    return Point2D(float(dy), float(-dx))


def bbox_points(points: Sequence[Sequence[float]]) -> Tuple[float, float, float, float]:
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return (min(xs), min(ys), max(xs), max(ys))


def polygon_area(points: Sequence[Sequence[float]]) -> float:
    if len(points) < 3:
        return 0.0
    pts = list(points)
    a = 0.0
    for (x0, y0), (x1, y1) in zip(pts, pts[1:] + pts[:1]):
        a += x0 * y1 - x1 * y0
    return 0.5 * a


def compact_outline(points: Sequence[Point2D], eps: float = 1e-9) -> List[Point2D]:
    """Drop consecutive duplicates and a trailing copy of the first point."""
    compact: List[Point2D] = []
    for p in points:
        if not compact or abs(p[0] - compact[-1][0]) > eps or abs(p[1] - compact[-1][1]) > eps:
            compact.append(p)
    if len(compact) > 1 and abs(compact[0][0] - compact[-1][0]) <= eps and abs(compact[0][1] - compact[-1][1]) <= eps:
        compact.pop()
    return compact


@dataclass(frozen=True)
class CircleHole2D:
    cx: float
    cy: float
    r: float


@dataclass(frozen=True)
class Panel2D:
    outline: Tuple[Point2D, ...]
    holes: Tuple[CircleHole2D, ...] = field(default_factory=tuple)

    def bbox(self) -> Tuple[float, float, float, float]:
        if not self.outline:
            return (0.0, 0.0, 0.0, 0.0)
        return bbox_points(self.outline)

    def size(self) -> Tuple[float, float]:
        x0, y0, x1, y1 = self.bbox()
        return (x1 - x0, y1 - y0)


@dataclass(frozen=True)
class BoxPanels:
    front: Panel2D
    back: Panel2D
    left: Panel2D
    right: Panel2D
    bottom: Panel2D
    lid: Panel2D

    def items(self) -> Iterator[Tuple[str, Panel2D]]:
        for name in PANEL_NAMES:
            yield name, getattr(self, name)

    def as_dict(self) -> Dict[str, Panel2D]:
        return dict(self.items())


@dataclass(frozen=True)
class BoxSvgs:
    front: str
    back: str
    left: str
    right: str
    bottom: str
    lid: str

    def items(self) -> Iterator[Tuple[str, str]]:
        for name in PANEL_NAMES:
            yield name, getattr(self, name)

    def as_dict(self) -> Dict[str, str]:
        return dict(self.items())
