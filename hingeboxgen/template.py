"""Reference-template rendering mode.

The six reference panels were drawn by hand for one box size
(``TEMPLATE_ORIGINAL``). This mode keeps their exact look and rescales the
stored path data per axis to other box sizes instead of regenerating joints.

Paths are read by an explicit tokenizer (M L H V C Z, absolute or relative)
rather than regular expressions, so exponents, signs and comma/space
separators all parse the same way.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, List, Mapping, Sequence, Tuple

from .geometry import BoxSvgs, fmt, fmt_trim
from .params import HingedInputs
from .svg import DEFAULT_PADDING_MM, svg_footer, svg_header, svg_path_element


@dataclass(frozen=True)
class TemplateDimensions:
    width_mm: float
    depth_mm: float
    height_mm: float
    hinge_strip_height_mm: float


TEMPLATE_ORIGINAL = TemplateDimensions(width_mm=156.0, depth_mm=156.0, height_mm=150.0, hinge_strip_height_mm=30.0)

# Keys are the names the paths were authored under, which differ from the
# panel they end up on (see _PANEL_TEMPLATES).
TEMPLATE_SVGS: Mapping[str, str] = MappingProxyType(
    {
        "right": "M164 54.7429l0 3.5357m0 4.2857l3 0m0 0l0 -4.2857m15 -19.1786l30 0m-30 0l0 -3m-15 22.1786l-3 0m0 -3.5357l3 0m-3 7.8214l0 3.5357m0 0l156 0m0 0l0 -3.5357m0 0l-3 0m0 0l0 -4.2857m0 0l3 0m0 0l0 -3.5357m0 0l-3 0m0 0l0 -4.2858m0 0l3 0m0 0l0 -3.5357m0 0l-3 0m0 0l0 -4.2857m0 0l3 0m0 0l0 -6.5357m0 0l-18 0m0 3l0 -3m-30 3l30 0m-30 0l0 -3m0 0l-15 0m0 3l0 -3m-30 3l30 0m-30 0l0 -3m0 0l-15 0m0 3l0 -3m-30 0l-18 0m0 0l0 6.5357m3 0l-3 0m3 4.2857l0 -4.2857m-3 4.2857l3 0m-3 0l0 3.5357m3 0l-3 0m3 4.2858l0 -4.2858",
        "bottom": "M320 88.9l0 30m-3 -30l3 0m-3 0l0 -15m0 0l-15 0m0 0l0 -3m0 0l-30 0m0 0l0 3m0 0l-15 0m0 0l0 -3m0 0l-30 0m0 0l0 3m0 0l-15 0m0 0l0 -3m0 0l-30 0m0 0l0 3m0 0l-15 0m0 0l0 15m0 0l-3 0m0 0l0 30m0 0l3 0m0 0l0 15m-3 0l3 0m-3 30l0 -30m3 30l-3 0m3 0l0 15m-3 0l3 0m-3 30l0 -30m3 30l-3 0m3 0l0 15m0 0l15 0m0 3l0 -3m30 3l-30 0m30 -3l0 3m0 -3l15 0m0 3l0 -3m30 3l-30 0m30 -3l0 3m0 -3l15 0m0 3l0 -3m30 3l-30 0m30 -3l0 3m0 -3l15 0m0 0l0 -15m0 0l3 0m0 0l0 -30m0 0l-3 0m0 0l0 -15m0 0l3 0m0 0l0 -30m0 0l-3 0m0 0l0 -15m3 0l-3 0",
        "lid": "M320 6.6357l0 -3.5357m-18 30l18 0m-48 -3l30 0m0 0l0 3m18 -30l-54 0m0 0c-1.0609,0 -2.0783,0.4214 -2.8284,1.1716 -0.7502,0.7501 -1.1716,1.7675 -1.1716,2.8284m10 26l0 -3m-10 -23l0 1.5m0 0l-40 0m0 0l0 -1.5m0 0c0,-1.0609 -0.4214,-2.0783 -1.1716,-2.8284 -0.7501,-0.7502 -1.7675,-1.1716 -2.8284,-1.1716m0 0l-54 0m0 0l0 3.5357m0 0l3 0m0 0l0 4.2857m0 0l-3 0m0 0l0 3.5357m0 0l3 0m0 0l0 4.2858m0 0l-3 0m0 0l0 3.5357m0 0l3 0m0 0l0 4.2857m0 0l-3 0m0 0l0 6.5357m0 0l18 0m0 0l0 -3m0 0l30 0m0 0l0 3m0 0l15 0m0 0l0 -3m0 0l30 0m0 0l0 3m0 0l15 0m48 0l0 -6.5357m0 0l-3 0m0 0l0 -4.2857m0 0l3 0m0 0l0 -3.5357m0 0l-3 0m0 0l0 -4.2858m0 0l3 0m0 0l0 -3.5357m0 0l-3 0m0 0l0 -4.2857m0 0l3 0",
        "front": "M63.5 216.9l0 2m0 0c0,2.1217 0.8429,4.1566 2.3431,5.6569 1.5003,1.5002 3.5352,2.3431 5.6569,2.3431m0 0l23 0m0 0c4.4183,0 8,-3.5817 8,-8m0 0l0 -2m0 0l54.5 0m0 0l0 -142.8382m0 0l4 0m0 0l0 -3.3236m0 0l-4 0m0 0l0 -1.6382m0 0l-148 0m0 0l0 1.6382m0 0l-4 0m0 0l0 3.3236m0 0l4 0m0 0l0 142.8382m0 0l54.5 0",
        "back": "M158 18.7429l0 3.5357m-15 7.8214l0 3m15 -14.3571l3 0m0 0l0 -4.2858m0 0l-3 0m0 -3.5357l0 3.5357m3 -3.5357l-3 0m3 0l0 -4.2857m0 0l-3 0m0 -3.5357l0 3.5357m0 -3.5357l-150 0m0 3.5357l0 -3.5357m-3 3.5357l3 0m-3 0l0 4.2857m3 0l-3 0m3 3.5357l0 -3.5357m0 3.5357l-3 0m0 0l0 4.2858m3 0l-3 0m3 3.5357l0 -3.5357m0 3.5357l-3 0m0 0l0 4.2857m3 0l-3 0m3 6.5357l0 -6.5357m0 6.5357l15 0m0 -3l0 3m30 -3l-30 0m30 0l0 3m0 0l15 0m0 -3l0 3m30 -3l-30 0m30 0l0 3m0 0l15 0m0 -3l0 3m30 -3l-30 0m30 3l15 0m0 -6.5357l0 6.5357m0 -6.5357l3 0m0 0l0 -4.2857m-3 0l3 0m-146.25 -15.1786c0,-1.2426 -1.0074,-2.25 -2.25,-2.25 -1.2426,0 -2.25,1.0074 -2.25,2.25 0,1.2426 1.0074,2.25 2.25,2.25 1.2426,0 2.25,-1.0073 2.25,-2.25z",
        "left": "M5 51.7429l0 -4.2858m3 4.2858l-3 0m3 0l0 3.5357m0 0l-3 0m0 4.2857l0 -4.2857m3 4.2857l-3 0m3 0l0 6.5357m15 0l-15 0m15 -3l0 3m0 -3l30 0m0 0l0 3m15 0l-15 0m15 -3l0 3m0 -3l30 0m0 0l0 3m15 0l-15 0m15 -3l0 3m0 -3l30 0m0 0l0 3m15 0l-15 0m15 0l0 -6.5357m0 0l3 0m0 -4.2857l0 4.2857m-3 -4.2857l3 0m-3 0l0 -3.5357m0 0l3 0m0 -4.2858l0 4.2858m-3 -4.2858l3 0m-3 0l0 -3.5357m0 0l3 0m0 -4.2857l0 4.2857m0 -4.2857l-3 0m0 0l0 -3.5357m-150 0l150 0m-150 0l0 3.5357m-3 0l3 0m-3 4.2857l0 -4.2857m0 4.2857l3 0m0 0l0 3.5357m-3 0l3 0m147.75 -7.3571c0,-1.2426 -1.0074,-2.25 -2.25,-2.25 -1.2426,0 -2.25,1.0074 -2.25,2.25 0,1.2426 1.0074,2.25 2.25,2.25 1.2426,0 2.25,-1.0073 2.25,-2.25z",
    }
)

# panel -> (template key, scaled along x by, scaled along y by, rotate 180)
_PANEL_TEMPLATES: Mapping[str, Tuple[str, str, str, bool]] = MappingProxyType(
    {
        "front": ("lid", "width", "height", False),
        "back": ("right", "width", "unit", True),
        "left": ("left", "depth", "unit", False),
        "right": ("back", "depth", "unit", False),
        "bottom": ("bottom", "width", "depth", False),
        "lid": ("front", "width", "depth", False),
    }
)

_COMMANDS = frozenset("MmLlHhVvCcZz")
_ARITY = {"M": 2, "L": 2, "H": 1, "V": 1, "C": 6, "Z": 0}


class PathSyntaxError(ValueError):
    pass


@dataclass(frozen=True)
class BBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Tuple[float, float]:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)


def _read_number(d: str, i: int) -> Tuple[float, int]:
    n = len(d)
    j = i
    if j < n and d[j] in "+-":
        j += 1
    int_start = j
    while j < n and d[j].isdigit():
        j += 1
    has_int = j > int_start
    has_frac = False
    if j < n and d[j] == ".":
        k = j + 1
        while k < n and d[k].isdigit():
            k += 1
        has_frac = k > j + 1
        if has_int or has_frac:
            j = k
    if not (has_int or has_frac):
        raise PathSyntaxError(f"Malformed number at offset {i}: {d[i:i + 12]!r}")
    if j < n and d[j] in "eE":
        k = j + 1
        if k < n and d[k] in "+-":
            k += 1
        exp_start = k
        while k < n and d[k].isdigit():
            k += 1
        if k > exp_start:
            j = k
    return float(d[i:j]), j


def _checked(cmd: str, args: List[float]) -> Tuple[str, List[float]]:
    arity = _ARITY[cmd.upper()]
    if arity == 0:
        if args:
            raise PathSyntaxError(f"'{cmd}' takes no arguments, got {len(args)}")
    elif not args or len(args) % arity:
        raise PathSyntaxError(f"'{cmd}' needs a multiple of {arity} numbers, got {len(args)}")
    return cmd, args


def tokenize_path(d: str) -> Iterator[Tuple[str, List[float]]]:
    """Yield ``(command, numbers)`` for each command in a path string."""
    cmd = None
    args: List[float] = []
    i = 0
    n = len(d)
    while i < n:
        ch = d[i]
        if ch in _COMMANDS:
            if cmd is not None:
                yield _checked(cmd, args)
            cmd, args = ch, []
            i += 1
        elif ch.isspace() or ch == ",":
            i += 1
        elif ch in "+-." or ch.isdigit():
            if cmd is None:
                raise PathSyntaxError("Path data must start with a command")
            value, i = _read_number(d, i)
            args.append(value)
        else:
            raise PathSyntaxError(f"Unsupported path character {ch!r} at offset {i}")
    if cmd is not None:
        yield _checked(cmd, args)


def _groups(args: Sequence[float], size: int) -> Iterator[Sequence[float]]:
    for i in range(0, len(args), size):
        yield args[i:i + size]


def path_bbox(d: str) -> BBox:
    """Bounding box over every coordinate a path references.

    Cubic control points count too, so the box is conservative for curves.
    Commands before the first moveto are ignored.
    """
    min_x = min_y = float("inf")
    max_x = max_y = float("-inf")

    def update(px: float, py: float) -> None:
        nonlocal min_x, min_y, max_x, max_y
        min_x = min(min_x, px)
        min_y = min(min_y, py)
        max_x = max(max_x, px)
        max_y = max(max_y, py)

    x = y = 0.0
    start_x = start_y = 0.0
    started = False

    for cmd, args in tokenize_path(d):
        rel = cmd.islower()
        c = cmd.upper()

        if c == "M":
            # Pairs after the first are implicit linetos.
            for k, (ax, ay) in enumerate(_groups(args, 2)):
                x, y = (x + ax, y + ay) if rel else (ax, ay)
                if k == 0:
                    start_x, start_y = x, y
                update(x, y)
            started = True
            continue

        if not started:
            continue

        if c == "L":
            for ax, ay in _groups(args, 2):
                x, y = (x + ax, y + ay) if rel else (ax, ay)
                update(x, y)
        elif c == "H":
            for ax in args:
                x = x + ax if rel else ax
                update(x, y)
        elif c == "V":
            for ay in args:
                y = y + ay if rel else ay
                update(x, y)
        elif c == "C":
            for x1, y1, x2, y2, x3, y3 in _groups(args, 6):
                ox, oy = (x, y) if rel else (0.0, 0.0)
                update(ox + x1, oy + y1)
                update(ox + x2, oy + y2)
                x, y = ox + x3, oy + y3
                update(x, y)
        elif c == "Z":
            x, y = start_x, start_y
            update(x, y)

    if min_x == float("inf"):
        return BBox(0.0, 0.0, 0.0, 0.0)
    return BBox(min_x, min_y, max_x, max_y)


def scale_template_path(d: str, scale_x: float, scale_y: float) -> str:
    """Scale every coordinate of ``d``; command letters and case are kept.

    At 1.0/1.0 the output matches the input number for number.
    """
    out: List[str] = []
    for cmd, args in tokenize_path(d):
        c = cmd.upper()
        if c == "Z":
            out.append(cmd)
        elif c == "H":
            out.append(cmd + " ".join(fmt_trim(v * scale_x) for v in args))
        elif c == "V":
            out.append(cmd + " ".join(fmt_trim(v * scale_y) for v in args))
        elif c == "C":
            out.append(cmd + " ".join(f"{fmt_trim(px * scale_x)},{fmt_trim(py * scale_y)}" for px, py in _groups(args, 2)))
        else:
            out.append(cmd + " ".join(f"{fmt_trim(px * scale_x)} {fmt_trim(py * scale_y)}" for px, py in _groups(args, 2)))
    return "".join(out)


def svg_from_template_path(d: str, *, rotate180: bool = False, padding: float = DEFAULT_PADDING_MM) -> str:
    bb = path_bbox(d)
    shift_x = -bb.min_x + padding
    shift_y = -bb.min_y + padding
    width = bb.width + padding * 2
    height = bb.height + padding * 2

    transform = f"translate({fmt(shift_x)} {fmt(shift_y)})"
    if rotate180:
        cx, cy = bb.center
        transform += f" rotate(180 {fmt(cx)} {fmt(cy)})"

    return (
        svg_header(width, height)
        + f'  <g transform="{transform}">\n'
        + "  " + svg_path_element(d)
        + "  </g>\n"
        + svg_footer()
    )


def _scale_for(axis: str, inputs: HingedInputs) -> float:
    if axis == "width":
        return inputs.width_mm / TEMPLATE_ORIGINAL.width_mm
    if axis == "depth":
        return inputs.depth_mm / TEMPLATE_ORIGINAL.depth_mm
    if axis == "height":
        return inputs.height_mm / TEMPLATE_ORIGINAL.height_mm
    return 1.0


def generate_scaled_template_svgs(inputs: HingedInputs) -> BoxSvgs:
    """Reference panels stretched to ``inputs``; strip heights stay fixed."""
    svgs = {}
    for panel, (key, x_axis, y_axis, rotate) in _PANEL_TEMPLATES.items():
        d = scale_template_path(TEMPLATE_SVGS[key], _scale_for(x_axis, inputs), _scale_for(y_axis, inputs))
        svgs[panel] = svg_from_template_path(d, rotate180=rotate)
    return BoxSvgs(**svgs)


def template_svgs() -> BoxSvgs:
    return BoxSvgs(
        **{
            panel: svg_from_template_path(TEMPLATE_SVGS[key], rotate180=rotate)
            for panel, (key, _, _, rotate) in _PANEL_TEMPLATES.items()
        }
    )
