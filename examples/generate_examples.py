#!/usr/bin/env python3

import os
import sys

# Allow running this script directly (sys.path[0] is examples/).
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hingeboxgen import HingedInputs, generate_hinged_box_svgs


def generate(out_dir: str):
    examples = [
        ("reference_box", HingedInputs(), "parametric"),
        (
            "jewellery_box",
            HingedInputs(
                width_mm=120,
                depth_mm=80,
                height_mm=60,
                thickness_mm=3,
                kerf_mm=0.15,
                joint_finger_width_mm=8,
                hinge_finger_width_mm=6,
            ),
            "parametric",
        ),
        ("reference_template", HingedInputs(), "template"),
        ("wide_scaled_template", HingedInputs(width_mm=240, depth_mm=156, height_mm=150), "scaled"),
    ]

    for folder, inputs, mode in examples:
        target = os.path.join(out_dir, folder)
        os.makedirs(target, exist_ok=True)
        svgs = generate_hinged_box_svgs(inputs, mode)
        for name, svg in svgs.items():
            with open(os.path.join(target, f"{name}.svg"), "w", encoding="utf-8") as f:
                f.write(svg)


if __name__ == "__main__":
    generate(os.path.join(os.path.dirname(os.path.abspath(__file__)), "out"))
