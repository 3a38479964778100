"""Regression checks run over a generated set of hinged-box SVGs.

These are the last gate before export: every panel present, no NaN leaked
into a coordinate, well-formed SVG, and nothing a laser driver would
rasterise or fill.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import List, Optional

from .geometry import PANEL_NAMES, BoxPanels, BoxSvgs

logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

_PATH_TAG = re.compile(r"<path[^>]*>")
_FORBIDDEN_ELEMENTS = ("<linearGradient", "<radialGradient", "<filter")


@dataclass
class RegressionCheck:
    name: str
    passed: bool
    message: str = ""


@dataclass
class RegressionCheckResult:
    passed: bool
    checks: List[RegressionCheck] = field(default_factory=list)

    def failures(self) -> List[RegressionCheck]:
        return [c for c in self.checks if not c.passed]

    def to_dict(self) -> dict:
        return {"passed": self.passed, "checks": [c.__dict__.copy() for c in self.checks]}


def contains_nan(svg: Optional[str]) -> bool:
    if not svg:
        return False
    return "NaN" in svg or "nan" in svg


def is_valid_svg(svg: Optional[str]) -> bool:
    if not svg:
        return False
    if not (
        "<?xml" in svg
        and "<svg" in svg
        and "</svg>" in svg
        and f'xmlns="{SVG_NAMESPACE}"' in svg
    ):
        return False
    try:
        root = ET.fromstring(svg.encode("utf-8"))
    except ET.ParseError:
        return False
    return root.tag == f"{{{SVG_NAMESPACE}}}svg"


def is_laser_safe(svg: Optional[str]) -> bool:
    """Every path unfilled; no gradients or filters."""
    if not svg:
        return False
    for tag in _PATH_TAG.findall(svg):
        if 'fill="none"' not in tag:
            return False
    return not any(el in svg for el in _FORBIDDEN_ELEMENTS)


def _collapse(
    checks: List[RegressionCheck],
    names: List[str],
    bad,
    *,
    per_panel: str,
    per_panel_message: str,
    summary: str,
    summary_message: str,
) -> None:
    failed = [n for n in names if bad(n)]
    for n in failed:
        checks.append(RegressionCheck(per_panel.format(n), False, per_panel_message.format(n)))
    if not failed:
        checks.append(RegressionCheck(summary, True, summary_message))


def check_hinged_box_svgs(svgs: BoxSvgs, panels: BoxPanels) -> RegressionCheckResult:
    docs = svgs.as_dict()
    names = list(docs)
    checks: List[RegressionCheck] = []

    expected = len(PANEL_NAMES)
    checks.append(
        RegressionCheck(
            "Panel count",
            len(names) == expected,
            f"All {expected} panels present" if len(names) == expected else f"Expected {expected} panels, got {len(names)}",
        )
    )

    _collapse(
        checks,
        names,
        lambda n: contains_nan(docs[n]),
        per_panel="No NaN in {}",
        per_panel_message="Panel {} contains NaN values",
        summary="No NaN values",
        summary_message="All panels free of NaN",
    )
    _collapse(
        checks,
        names,
        lambda n: not is_valid_svg(docs[n]),
        per_panel="Valid SVG: {}",
        per_panel_message="Panel {} has invalid SVG structure",
        summary="Valid SVG structure",
        summary_message="All panels have valid SVG",
    )
    _collapse(
        checks,
        names,
        lambda n: not is_laser_safe(docs[n]),
        per_panel="Laser-safe: {}",
        per_panel_message="Panel {} is not laser-safe",
        summary="Laser-safe SVG",
        summary_message="All panels are laser-safe",
    )

    left = len(panels.left.holes)
    right = len(panels.right.holes)
    checks.append(
        RegressionCheck(
            "Hinge complementary",
            left == right,
            f"Left and right panels have {left} matching holes"
            if left == right
            else f"Hole count mismatch: left={left}, right={right}",
        )
    )

    result = RegressionCheckResult(passed=all(c.passed for c in checks), checks=checks)
    for c in result.failures():
        logger.warning("regression check failed: %s: %s", c.name, c.message)
    return result


def format_check_results(result: RegressionCheckResult) -> str:
    lines = ["All checks passed" if result.passed else "Some checks failed", ""]
    for c in result.checks:
        mark = "ok  " if c.passed else "FAIL"
        lines.append(f"[{mark}] {c.name}: {c.message or ('OK' if c.passed else 'FAIL')}")
    return "\n".join(lines)
