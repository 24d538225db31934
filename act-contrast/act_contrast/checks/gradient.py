"""
Linear Gradient Evaluation

Parses `linear-gradient(...)` backgrounds into ordered color stops and
samples the contrast of the text against them.

Only left-to-right gradients are computed. For any other direction the
end of the text that sits over each stop is unknown, so those gradients
are left for manual review.
"""

import logging
import re
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict

from ..models import Color, GradientDirection, GradientSpec
from .color import parse_color
from .contrast import (
    get_contrast,
    is_bold_weight,
    is_sufficient_contrast,
    parse_font_size,
    required_ratio,
)


logger = logging.getLogger(__name__)

DIRECTIONS: dict[str, GradientDirection] = {
    "90deg": "to right",
    "to right": "to right",
    "-90deg": "to left",
    "to left": "to left",
}

FONT_ALIASES = {
    "serif": "times new roman",
    "sans-serif": "arial",
}

_STOP = re.compile(r"rgba?\s*\([^)]*\)", re.IGNORECASE)

TextExtentEstimator = Callable[[str, int, bool, bool, str], int]


class GradientCheck(BaseModel):
    """
    Outcome of sampling a gradient.

    Attributes:
        computed: False when the gradient cannot be evaluated automatically
        passed: Whether every sample met the threshold (None if not computed)
        lowest_ratio: Lowest contrast ratio among the samples
        required_ratio: Threshold each sample had to exceed
        samples: Number of contrast samples taken
    """

    model_config = ConfigDict(frozen=True)

    computed: bool
    passed: Optional[bool] = None
    lowest_ratio: Optional[float] = None
    required_ratio: Optional[float] = None
    samples: int = 0


def _function_arguments(text: str, name: str) -> Optional[str]:
    """Return the argument text of `name(...)`, honoring nested parentheses."""
    start = text.lower().find(name + "(")
    if start == -1:
        return None
    i = start + len(name) + 1
    depth = 1
    for j in range(i, len(text)):
        if text[j] == "(":
            depth += 1
        elif text[j] == ")":
            depth -= 1
            if depth == 0:
                return text[i:j]
    return text[i:]


def _split_top_level(arguments: str) -> list[str]:
    parts, depth, current = [], 0, []
    for ch in arguments:
        if ch == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        current.append(ch)
    parts.append("".join(current).strip())
    return parts


def parse_gradient(text: str, opacity: float = 1.0) -> Optional[GradientSpec]:
    """
    Parse a linear-gradient declaration.

    Args:
        text: Declaration starting at the gradient function
        opacity: Element opacity, alpha for stops written as rgb()

    Returns:
        GradientSpec, or None when `text` is not a linear-gradient
        (radial, conic and repeating gradients are not parsed)

    Example:
        spec = parse_gradient("linear-gradient(90deg, rgb(0, 0, 0), rgb(255, 255, 255))")
        spec.direction  # "to right"
        len(spec.stops)  # 2
    """
    stripped = text.strip()
    if not stripped.lower().startswith("linear-gradient("):
        return None

    arguments = _function_arguments(stripped, "linear-gradient")
    parts = _split_top_level(arguments or "")

    first = parts[0] if parts else ""
    if _STOP.match(first):
        # No direction given: CSS default is top to bottom
        raw_direction = "to bottom"
        stop_parts = parts
    else:
        raw_direction = first
        stop_parts = parts[1:]

    stops = []
    for part in stop_parts:
        for match in _STOP.finditer(part):
            color = parse_color(match.group(0), opacity)
            if color is not None:
                stops.append(color)

    direction = DIRECTIONS.get(raw_direction.lower(), "other")
    return GradientSpec(direction=direction, raw_direction=raw_direction, stops=tuple(stops))


def get_color_in_gradient(from_color: Color, to_color: Color, ratio: float) -> Color:
    """
    Linearly interpolate between two stops, channel by channel.

    Example:
        get_color_in_gradient(BLACK, WHITE, 0.5)  # rgba(127.5, 127.5, 127.5, 1)
    """
    return Color(
        red=from_color.red + (to_color.red - from_color.red) * ratio,
        green=from_color.green + (to_color.green - from_color.green) * ratio,
        blue=from_color.blue + (to_color.blue - from_color.blue) * ratio,
        alpha=1,
    )


def normalize_font_family(family: str) -> str:
    """First family of a font-family list, unquoted and lower-case."""
    first = (family or "").split(",")[0]
    name = re.sub(r"['\"]+", "", first).strip().lower()
    return FONT_ALIASES.get(name, name)


def _parse_px(value: str) -> Optional[float]:
    match = re.match(r"^\s*(\d+(?:\.\d+)?)px\s*$", value or "")
    return float(match.group(1)) if match else None


def evaluate_gradient(
    spec: Optional[GradientSpec],
    fg: Color,
    style,
    text: str,
    estimate_width: TextExtentEstimator,
) -> GradientCheck:
    """
    Check text contrast against a gradient background.

    For left-to-right gradients the text is compared with the first stop
    and with the color under its last character, interpolated between the
    last two stops at the estimated rendered text width. When the width
    cannot be estimated, every stop is checked instead. All samples must pass.

    Args:
        spec: Parsed gradient (None for non-linear gradients)
        fg: Text color
        style: StyleSnapshot of the element holding the text
        text: Trimmed element text
        estimate_width: Text Extent Estimator, returns -1 on failure

    Returns:
        GradientCheck; computed is False for gradients left to manual review
    """
    if spec is None or spec.direction != "to right" or not spec.stops:
        logger.debug("Gradient not evaluated: %s", spec.raw_direction if spec else "not linear")
        return GradientCheck(computed=False)

    font_size = parse_font_size(style.font_size)
    bold = is_bold_weight(style.font_weight)
    required = required_ratio(font_size, bold)

    text_width = estimate_width(
        normalize_font_family(style.font_family),
        int(font_size),
        bold,
        "italic" in style.font_style.lower(),
        text,
    )
    element_width = _parse_px(style.width)

    if text_width >= 0 and element_width:
        last_char_ratio = min(max(text_width / element_width, 0.0), 1.0)
        start, end = spec.stops[-2:] if len(spec.stops) > 1 else (spec.stops[0], spec.stops[0])
        last_char_bg = get_color_in_gradient(start, end, last_char_ratio)
        samples = [spec.stops[0], last_char_bg]
        logger.debug(
            "Gradient sampled at 0 and %.3f (text %dpx over %.0fpx)",
            last_char_ratio, text_width, element_width,
        )
    else:
        samples = list(spec.stops)
        logger.debug("Text width unknown; checking all %d stops", len(samples))

    ratios = [get_contrast(bg, fg) for bg in samples]
    passed = all(is_sufficient_contrast(r, font_size, bold) for r in ratios)

    return GradientCheck(
        computed=True,
        passed=passed,
        lowest_ratio=min(ratios),
        required_ratio=required,
        samples=len(ratios),
    )
