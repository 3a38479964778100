"""Finger joint patterns and the straight-edge walkers that draw them.

Rules:
- Uniform pattern: tabs = round(length / finger_w), clamped to [2, 999] and
  forced odd; segments = 2 * tabs - 1. An odd segment count that starts on a
  tab also ends on one, so an outer edge never finishes mid-gap.
- Weighted patterns reproduce a hand-tuned reference box. Their ratios
  (21/15, 30/15, 3.54/4.29, 6.54/4.29) were measured from that design and are
  kept verbatim.
- Every width list is normalised so it sums to the edge length exactly.
- Mating edges share one width list; the mate walks the complementary kinds.

Walkers return points *including* ``start`` and end on the baseline endpoint
``start + direction * sum(widths)`` whatever the depth or phase.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .geometry import Point2D, add, mul
from .params import HingedInputs

MAX_SEGMENTS = 999
MIN_DENOM = 1e-6

# Reference-template calibration weights.
BOTTOM_BIG_MALE_WEIGHT = 21 / 15
BOTTOM_MALE_WEIGHT = 1.0
BOTTOM_FEMALE_WEIGHT = 30 / 15
SIDE_FIRST_FEMALE_WEIGHT = 3.54 / 4.29
SIDE_LAST_FEMALE_WEIGHT = 6.54 / 4.29
SIDE_MID_WEIGHT = 1.0


class SegmentKind(str, Enum):
    TAB = "tab"
    GAP = "gap"

    def flipped(self) -> "SegmentKind":
        return SegmentKind.GAP if self is SegmentKind.TAB else SegmentKind.TAB


_KIND_ALIASES = {"tab": SegmentKind.TAB, "finger": SegmentKind.TAB, "gap": SegmentKind.GAP, "slot": SegmentKind.GAP}


def _coerce_kind(kind: Union[SegmentKind, str]) -> SegmentKind:
    if isinstance(kind, SegmentKind):
        return kind
    try:
        return _KIND_ALIASES[str(kind).lower()]
    except KeyError:
        raise ValueError(f"Unknown segment kind: {kind!r}") from None


@dataclass(frozen=True)
class Segment:
    kind: SegmentKind
    width: float

    @property
    def is_tab(self) -> bool:
        return self.kind is SegmentKind.TAB


@dataclass(frozen=True)
class FingerPattern:
    segments: Tuple[Segment, ...] = ()

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    def is_tab(self, i: int) -> bool:
        return self.segments[i].is_tab

    @property
    def widths(self) -> List[float]:
        return [s.width for s in self.segments]

    @property
    def total_width(self) -> float:
        return math.fsum(s.width for s in self.segments)

    def complementary(self) -> "FingerPattern":
        return FingerPattern(tuple(Segment(s.kind.flipped(), s.width) for s in self.segments))


def get_complementary_pattern(pattern: FingerPattern) -> FingerPattern:
    """Invert tab/gap, keep widths. Used for mating edges."""
    return pattern.complementary()


def verify_pattern(pattern: FingerPattern, expected_length: float) -> bool:
    return abs(pattern.total_width - expected_length) < 1e-3


def pattern_from_widths(widths: Sequence[float], *, start_with_male: bool) -> FingerPattern:
    return FingerPattern(
        tuple(
            Segment(SegmentKind.TAB if _is_male(i, start_with_male) else SegmentKind.GAP, float(w))
            for i, w in enumerate(widths)
        )
    )


# ---------------------- Counts ----------------------

def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def ensure_odd(n: float) -> int:
    v = max(1, int(math.floor(n)))
    return v + 1 if v % 2 == 0 else v


def clamp_odd_count(n: float, *, lo: int = 3, hi: int = MAX_SEGMENTS) -> int:
    if math.isnan(n):
        return lo
    if math.isinf(n):
        return hi if n > 0 else lo
    return min(hi, max(lo, ensure_odd(n)))


def count_from_ratio(ratio: float) -> int:
    """Odd count for an edge/width ratio; non-finite ratios hit the clamp."""
    if not math.isfinite(ratio):
        return clamp_odd_count(ratio)
    return clamp_odd_count(round_half_up(ratio))


def _manual_count(auto: bool, manual: Optional[float]) -> Optional[int]:
    if auto or not manual or not math.isfinite(manual):
        return None
    return clamp_odd_count(manual)


def joint_segment_count(length: float, inputs: HingedInputs) -> int:
    manual = _manual_count(inputs.auto_joint_finger_count, inputs.manual_joint_finger_count)
    if manual is not None:
        return manual
    desired = max(1.0, inputs.joint_finger_width_mm)
    return count_from_ratio(max(1.0, length) / desired)


def hinge_finger_count(width: float, inputs: HingedInputs) -> int:
    manual = _manual_count(inputs.auto_finger_count, inputs.manual_hinge_finger_count)
    if manual is not None:
        return manual
    desired = max(1.0, inputs.hinge_finger_width_mm)
    return count_from_ratio(max(1.0, width) / desired)


# ---------------------- Uniform pattern ----------------------

def compute_finger_pattern(length: float, desired_finger_width: float, invert: bool = False) -> FingerPattern:
    if length <= 0:
        return FingerPattern()
    ratio = length / max(MIN_DENOM, float(desired_finger_width))
    if math.isfinite(ratio):
        tab_count = min(MAX_SEGMENTS, max(2, round_half_up(ratio)))
    else:
        tab_count = MAX_SEGMENTS
    if tab_count % 2 == 0:
        tab_count += 1

    segment_count = 2 * tab_count - 1
    widths = [length / segment_count] * segment_count
    widths[-1] += length - math.fsum(widths)
    return pattern_from_widths(widths, start_with_male=not invert)


@dataclass(frozen=True)
class FingerPatternOptions:
    length: float
    finger_width: float
    start_with: Union[SegmentKind, str] = SegmentKind.TAB
    min_segment: float = 2.0


def build_finger_pattern(opts: FingerPatternOptions) -> FingerPattern:
    """Greedy fixed-width pattern that sums exactly to ``opts.length``.

    Segments are ``finger_width`` wide and alternate from ``start_with``; a
    trailing sliver shorter than ``min_segment`` is merged into the segment
    before it and any other remainder widens the last segment.
    """
    length = float(opts.length)
    fw = float(opts.finger_width)
    kind = _coerce_kind(opts.start_with)
    if length <= 0 or fw <= 0:
        return FingerPattern()

    ratio = length / fw
    num = MAX_SEGMENTS if not math.isfinite(ratio) else min(MAX_SEGMENTS, int(math.floor(ratio)))
    if num < 2:
        return FingerPattern((Segment(kind, length),))

    kinds: List[SegmentKind] = []
    widths: List[float] = []
    remaining = length
    for i in range(num):
        if remaining - fw < opts.min_segment and i < num - 1:
            kinds.append(kind)
            widths.append(remaining)
            remaining = 0.0
            break
        kinds.append(kind)
        widths.append(fw)
        remaining -= fw
        kind = kind.flipped()

    if remaining > 0 and widths:
        widths[-1] += remaining
    return FingerPattern(tuple(Segment(k, w) for k, w in zip(kinds, widths)))


# ---------------------- Weighted patterns ----------------------

def _is_male(i: int, start_with_male: bool) -> bool:
    return (i % 2 == 0) if start_with_male else (i % 2 == 1)


def _normalise(weights: Sequence[float], length: float) -> List[float]:
    scale = length / max(math.fsum(weights), MIN_DENOM)
    return [w * scale for w in weights]


def ratio_segment_widths(
    length: float,
    segment_count: int,
    ratio_female_to_male: float,
    start_with_male: bool,
) -> List[float]:
    c = clamp_odd_count(segment_count)
    male_count = int(math.ceil(c / 2)) if start_with_male else c // 2
    female_count = c - male_count
    denom = male_count + ratio_female_to_male * female_count
    male_w = length / max(denom, MIN_DENOM)
    female_w = ratio_female_to_male * male_w
    return [male_w if _is_male(i, start_with_male) else female_w for i in range(c)]


def template_bottom_joint_widths(
    length: float,
    segment_count: int,
    big_male_at_start: Optional[bool] = None,
) -> List[float]:
    """Bottom-edge joint: starts with a male, females twice as wide.

    ``big_male_at_start`` widens the first (True) or last (False) male; None
    keeps the pattern symmetric.
    """
    c = clamp_odd_count(segment_count)
    weights: List[float] = []
    for i in range(c):
        if _is_male(i, True):
            if big_male_at_start is True and i == 0:
                weights.append(BOTTOM_BIG_MALE_WEIGHT)
            elif big_male_at_start is False and i == c - 1:
                weights.append(BOTTOM_BIG_MALE_WEIGHT)
            else:
                weights.append(BOTTOM_MALE_WEIGHT)
        else:
            weights.append(BOTTOM_FEMALE_WEIGHT)
    return _normalise(weights, length)


def template_side_vertical_widths(length: float, segment_count: int) -> List[float]:
    """Vertical corner joint: starts and ends with a female (slot)."""
    c = clamp_odd_count(segment_count)
    weights: List[float] = []
    for i in range(c):
        female = not _is_male(i, False)
        if female and i == 0:
            weights.append(SIDE_FIRST_FEMALE_WEIGHT)
        elif female and i == c - 1:
            weights.append(SIDE_LAST_FEMALE_WEIGHT)
        else:
            weights.append(SIDE_MID_WEIGHT)
    return _normalise(weights, length)


# ---------------------- Walkers ----------------------

def _walk(
    start: Sequence[float],
    direction: Sequence[float],
    normal: Sequence[float],
    segments: Iterable[Tuple[bool, float]],
    depth: float,
) -> List[Point2D]:
    current = Point2D(float(start[0]), float(start[1]))
    points = [current]
    for is_tab, w in segments:
        if is_tab:
            current = add(current, mul(normal, depth))
            points.append(current)
            current = add(current, mul(direction, w))
            points.append(current)
            current = add(current, mul(normal, -depth))
            points.append(current)
        else:
            current = add(current, mul(direction, w))
            points.append(current)
    return points


def generate_finger_joints_with_segment_widths(
    start: Sequence[float],
    direction: Sequence[float],
    normal: Sequence[float],
    widths: Sequence[float],
    depth: float,
    start_with_male: bool,
) -> List[Point2D]:
    return _walk(start, direction, normal, ((_is_male(i, start_with_male), w) for i, w in enumerate(widths)), depth)


def walk_finger_pattern(
    start: Sequence[float],
    direction: Sequence[float],
    normal: Sequence[float],
    pattern: FingerPattern,
    depth: float,
) -> List[Point2D]:
    return _walk(start, direction, normal, ((s.is_tab, s.width) for s in pattern), depth)


def generate_finger_joints_ratio(
    start: Sequence[float],
    direction: Sequence[float],
    normal: Sequence[float],
    length: float,
    depth: float,
    segment_count: int,
    ratio_female_to_male: float,
    start_with_male: bool,
) -> List[Point2D]:
    widths = ratio_segment_widths(length, segment_count, ratio_female_to_male, start_with_male)
    return generate_finger_joints_with_segment_widths(start, direction, normal, widths, depth, start_with_male)


def generate_template_bottom_joint_pattern(
    start: Sequence[float],
    direction: Sequence[float],
    normal: Sequence[float],
    length: float,
    depth: float,
    segment_count: int,
    big_male_at_start: Optional[bool] = None,
) -> List[Point2D]:
    widths = template_bottom_joint_widths(length, segment_count, big_male_at_start)
    return generate_finger_joints_with_segment_widths(start, direction, normal, widths, depth, True)


def generate_template_side_vertical_pattern(
    start: Sequence[float],
    direction: Sequence[float],
    normal: Sequence[float],
    length: float,
    depth: float,
    segment_count: int,
) -> List[Point2D]:
    widths = template_side_vertical_widths(length, segment_count)
    return generate_finger_joints_with_segment_widths(start, direction, normal, widths, depth, False)
