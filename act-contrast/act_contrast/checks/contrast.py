"""
WCAG Contrast Ratio Calculator

Relative luminance, contrast ratio, alpha compositing and the
size/weight dependent thresholds of the enhanced contrast criterion
(7:1 for small text, 4.5:1 for large text).
"""

import re

from ..models import Color


SMALL_TEXT_RATIO = 7.0
LARGE_TEXT_RATIO = 4.5

# 14pt bold and 18pt regular, in CSS pixels
BOLD_LARGE_TEXT_PX = 18.6667
LARGE_TEXT_PX = 24.0

BOLD_WEIGHTS = ("bold", "bolder", "700", "800", "900")

_FONT_SIZE = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")


def relative_luminance(red: float, green: float, blue: float) -> float:
    """
    Calculate WCAG relative luminance from 0-255 channels.

    Each channel is scaled to 0-1, linearized (linear below 0.03928,
    power curve above) and weighted 0.2126/0.7152/0.0722.

    Example:
        relative_luminance(255, 255, 255)  # 1.0
        relative_luminance(0, 0, 0)        # 0.0
    """
    def linearize(channel: float) -> float:
        c = channel / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    return 0.2126 * linearize(red) + 0.7152 * linearize(green) + 0.0722 * linearize(blue)


def contrast_ratio(color1: Color, color2: Color) -> float:
    """
    Calculate WCAG contrast ratio between two opaque colors.

    Formula: (L1 + 0.05) / (L2 + 0.05) where L1 is the lighter luminance,
    so the result does not depend on argument order.

    Returns:
        Contrast ratio (1-21, where 21 is black on white)
    """
    l1 = relative_luminance(color1.red, color1.green, color1.blue)
    l2 = relative_luminance(color2.red, color2.green, color2.blue)
    return (max(l1, l2) + 0.05) / (min(l1, l2) + 0.05)


def flatten_colors(fg: Color, bg: Color) -> Color:
    """
    Composite a translucent foreground over a background ("over" blending).

    Args:
        fg: Foreground color, alpha < 1
        bg: Fully resolved background color

    Returns:
        The blended color
    """
    a = fg.alpha
    return Color(
        red=(1 - a) * bg.red + a * fg.red,
        green=(1 - a) * bg.green + a * fg.green,
        blue=(1 - a) * bg.blue + a * fg.blue,
        alpha=a + bg.alpha * (1 - a),
    )


def get_contrast(bg: Color, fg: Color) -> float:
    """Contrast of text color `fg` over `bg`, compositing a translucent fg first."""
    if fg.alpha < 1:
        fg = flatten_colors(fg, bg)
    return contrast_ratio(bg, fg)


def is_bold_weight(weight: str) -> bool:
    """True iff the computed font-weight counts as bold."""
    return bool(weight) and str(weight).strip().lower() in BOLD_WEIGHTS


def parse_font_size(value) -> float:
    """
    Read the pixel value of a computed font-size ("16px" -> 16.0).

    Unparseable sizes read as 0, which classifies the text as small.
    """
    if isinstance(value, (int, float)):
        return float(value)
    match = _FONT_SIZE.match(value or "")
    return float(match.group(1)) if match else 0.0


def is_small_text(font_size_px: float, bold: bool) -> bool:
    return (bold and font_size_px < BOLD_LARGE_TEXT_PX) or (not bold and font_size_px < LARGE_TEXT_PX)


def required_ratio(font_size_px: float, bold: bool) -> float:
    return SMALL_TEXT_RATIO if is_small_text(font_size_px, bold) else LARGE_TEXT_RATIO


def is_sufficient_contrast(ratio: float, font_size_px: float, bold: bool) -> bool:
    """
    Check a contrast ratio against the threshold for the text size.

    The comparison is strict: a ratio equal to the threshold fails.

    Example:
        is_sufficient_contrast(4.5, 24, False)      # False
        is_sufficient_contrast(4.50001, 24, False)  # True
    """
    return ratio > required_ratio(font_size_px, bold)
