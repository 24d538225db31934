"""
Contrast Checks

Color parsing, luminance and contrast math, background resolution,
gradient sampling and text-shadow decoding used by the evaluator.
"""

from .background import parse_background, resolve_background
from .color import parse_color
from .contrast import (
    contrast_ratio,
    flatten_colors,
    get_contrast,
    is_bold_weight,
    is_sufficient_contrast,
    relative_luminance,
)
from .gradient import evaluate_gradient, get_color_in_gradient, parse_gradient
from .shadow import has_halo_shadow

__all__ = [
    "contrast_ratio",
    "evaluate_gradient",
    "flatten_colors",
    "get_color_in_gradient",
    "get_contrast",
    "has_halo_shadow",
    "is_bold_weight",
    "is_sufficient_contrast",
    "parse_background",
    "parse_color",
    "parse_gradient",
    "relative_luminance",
    "resolve_background",
]
