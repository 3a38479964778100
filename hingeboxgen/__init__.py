"""Hinged finger-joint box generator: panel outlines and laser-safe SVG."""

from .box import generate_hinged_box, generate_hinged_box_svgs
from .checks import RegressionCheckResult, check_hinged_box_svgs, format_check_results
from .fingers import (
    FingerPattern,
    FingerPatternOptions,
    Segment,
    SegmentKind,
    build_finger_pattern,
    compute_finger_pattern,
    get_complementary_pattern,
    verify_pattern,
)
from .geometry import BoxPanels, BoxSvgs, CircleHole2D, Panel2D, Point2D
from .panels import generate_hinged_box_panels
from .params import HingedInputs, hinged_inputs_from_params, load_params_file
from .svg import NonOrthogonalPathError, panel_to_svg, panels_to_svgs
from .template import PathSyntaxError, path_bbox, scale_template_path
from .validation import ValidationResult, validate_hinged_inputs

__version__ = "0.1.0"
