"""Public API: inputs in, six SVG documents out."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .checks import check_hinged_box_svgs
from .geometry import BoxSvgs
from .panels import box_layout, generate_hinged_box_panels
from .params import HingedInputs, hinged_inputs_from_params
from .svg import panels_to_svgs
from .template import generate_scaled_template_svgs, template_svgs
from .validation import validate_hinged_inputs

logger = logging.getLogger(__name__)

MODES = ("parametric", "template", "scaled")


def generate_hinged_box_svgs(inputs: HingedInputs, mode: str = "parametric") -> BoxSvgs:
    """Render all six panels.

    ``parametric`` builds outlines from the inputs, ``template`` returns the
    reference drawings untouched and ``scaled`` stretches them to the inputs.
    """
    if mode == "parametric":
        return panels_to_svgs(generate_hinged_box_panels(inputs))
    if mode == "template":
        return template_svgs()
    if mode == "scaled":
        return generate_scaled_template_svgs(inputs)
    raise ValueError(f"Unknown mode: {mode!r} (expected one of {', '.join(MODES)})")


def generate_hinged_box(params: Optional[Dict[str, Any]] = None, mode: str = "parametric") -> dict:
    """Dict-in, dict-out entry point for JSON and Pyodide callers.

    Returns a JSON-serializable dict:
      {"svgs": {panel: svg}, "warnings": [...], "errors": [...],
       "checks": {"passed": bool, "checks": [...]}, "meta": dict}

    Validation findings are reported, never enforced; an unknown parameter
    or mode raises. Joint counts and panel sizes describe parametric
    geometry, so ``meta`` carries them only in ``parametric`` mode. The
    hole-symmetry check always reads the parametric panels.
    """
    if params is None:
        params = {}
    mode = str(mode or "").strip() or "parametric"
    if mode not in MODES:
        raise ValueError(f"Unknown mode: {mode!r} (expected one of {', '.join(MODES)})")

    inputs = hinged_inputs_from_params(params)
    report = validate_hinged_inputs(inputs)

    panels = generate_hinged_box_panels(inputs)
    svgs = panels_to_svgs(panels) if mode == "parametric" else generate_hinged_box_svgs(inputs, mode)
    checks = check_hinged_box_svgs(svgs, panels)

    logger.info("generated hinged box %sx%sx%s mm (%s)", inputs.width_mm, inputs.depth_mm, inputs.height_mm, mode)

    meta: Dict[str, Any] = {"mode": mode, "inputs": dict(inputs.__dict__)}
    if mode == "parametric":
        layout = box_layout(inputs)
        meta["joint_segments"] = {
            "width": layout.wall_bottom_w.segment_count,
            "depth": layout.wall_bottom_d.segment_count,
            "height": layout.wall_vertical.segment_count,
        }
        meta["hinge_knuckles"] = layout.hinge_count
        meta["panel_sizes"] = {name: list(panel.size()) for name, panel in panels.items()}

    return {
        "svgs": svgs.as_dict(),
        "warnings": list(report.warnings),
        "errors": list(report.errors),
        "checks": checks.to_dict(),
        "meta": meta,
    }
