"""Hinge knuckle walker for the lid/back hinge strip.

Unlike box joints the strip is split into equal pitches. Each knuckle is
``pitch - clearance`` wide (never under 0.5 mm) and centred in its pitch, so
the lid and back strips interleave with play instead of a flush fit and the
hinge can rotate.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .fingers import count_from_ratio
from .geometry import Point2D, add, mul

MIN_KNUCKLE_WIDTH = 0.5


def generate_hinge_fingers(
    start: Sequence[float],
    direction: Sequence[float],
    normal: Sequence[float],
    length: float,
    depth: float,
    finger_width: float,
    finger_count: Optional[int],
    clearance: float,
    is_back: bool,
) -> List[Point2D]:
    """Walk one hinge edge; returns points including ``start``.

    The back strip owns the even pitches, the lid the odd ones. When
    ``finger_count`` is missing it is derived from ``finger_width``.
    """
    current = Point2D(float(start[0]), float(start[1]))
    points = [current]
    if length <= 0:
        return points

    if not finger_count or finger_count < 1:
        finger_count = count_from_ratio(length / max(1.0, finger_width))

    pitch = length / finger_count
    tab_w = max(MIN_KNUCKLE_WIDTH, pitch - clearance)
    gap_before = (pitch - tab_w) / 2

    for i in range(finger_count):
        is_knuckle = (i % 2 == 0) if is_back else (i % 2 == 1)
        if is_knuckle:
            current = add(current, mul(direction, gap_before))
            points.append(current)
            current = add(current, mul(normal, depth))
            points.append(current)
            current = add(current, mul(direction, tab_w))
            points.append(current)
            current = add(current, mul(normal, -depth))
            points.append(current)
            current = add(current, mul(direction, gap_before))
            points.append(current)
        else:
            current = add(current, mul(direction, pitch))
            points.append(current)
    return points
