"""Command line: write the six panel SVGs of a hinged box into a folder."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .box import MODES, generate_hinged_box_svgs
from .checks import check_hinged_box_svgs, format_check_results
from .panels import generate_hinged_box_panels
from .params import hinged_inputs_from_params, load_params_file
from .validation import validate_hinged_inputs

logger = logging.getLogger(__name__)

# flag -> HingedInputs field
_VALUE_FLAGS = {
    "width": "width_mm",
    "depth": "depth_mm",
    "height": "height_mm",
    "thickness": "thickness_mm",
    "kerf": "kerf_mm",
    "joint_finger_w": "joint_finger_width_mm",
    "joint_fingers": "manual_joint_finger_count",
    "hinge_finger_w": "hinge_finger_width_mm",
    "hinge_fingers": "manual_hinge_finger_count",
    "hinge_clearance": "hinge_clearance_mm",
    "hole_d": "hinge_hole_diameter_mm",
    "hole_inset": "hinge_hole_inset_mm",
}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="hingeboxgen", description="Hinged finger-joint box SVG generator")
    ap.add_argument("--out", required=True, help="Output folder for front.svg ... lid.svg")
    ap.add_argument("--params", help="JSON file with HingedInputs fields")
    ap.add_argument("--mode", choices=MODES, default="parametric")
    ap.add_argument("--check", action="store_true", help="Run regression checks; exit 1 if any fail")
    ap.add_argument("-v", "--verbose", action="store_true")

    # Box
    ap.add_argument("--width", type=float)
    ap.add_argument("--depth", type=float)
    ap.add_argument("--height", type=float)
    ap.add_argument("--thickness", type=float)
    ap.add_argument("--kerf", type=float)

    # Joints
    ap.add_argument("--joint_finger_w", type=float)
    ap.add_argument("--joint_fingers", type=int, help="Manual joint segment count (disables auto)")

    # Hinge
    ap.add_argument("--hinge_finger_w", type=float)
    ap.add_argument("--hinge_fingers", type=int, help="Manual hinge knuckle count (disables auto)")
    ap.add_argument("--hinge_clearance", type=float)
    ap.add_argument("--hole_d", type=float)
    ap.add_argument("--hole_inset", type=float)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    params = load_params_file(args.params) if args.params else {}
    for flag, key in _VALUE_FLAGS.items():
        value = getattr(args, flag)
        if value is not None:
            params[key] = value
    if args.joint_fingers is not None:
        params["auto_joint_finger_count"] = False
    if args.hinge_fingers is not None:
        params["auto_finger_count"] = False

    try:
        inputs = hinged_inputs_from_params(params)
    except (TypeError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    logger.debug("resolved inputs: %s", inputs)

    report = validate_hinged_inputs(inputs)
    if report.errors:
        print("EXPORT SHOULD BE BLOCKED (errors):")
        for msg in report.errors:
            print("-", msg)
    if report.warnings:
        print("Warnings:")
        for msg in report.warnings:
            print("-", msg)

    svgs = generate_hinged_box_svgs(inputs, args.mode)

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    for name, svg in svgs.items():
        path = out_dir / f"{name}.svg"
        path.write_text(svg, encoding="utf-8")
        print(f"Wrote {path}")

    if args.check:
        result = check_hinged_box_svgs(svgs, generate_hinged_box_panels(inputs))
        print(format_check_results(result))
        if not result.passed:
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
