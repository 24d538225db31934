"""
CSS Color Value Parser

Parses the color values browsers report as computed styles:
`transparent`, `rgb(r, g, b)` and `rgba(r, g, b, a)`. The computed
`background` shorthand starts with its color, so only the leading color
function is read and whatever follows it is ignored.
"""

import math
import re
from typing import Optional

from ..models import TRANSPARENT, Color


_FUNCTION = re.compile(r"^\s*(rgba?)\s*\(([^)]*)\)", re.IGNORECASE)
_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


def parse_color(text: Optional[str], opacity: float = 1.0) -> Optional[Color]:
    """
    Parse a CSS color string into a Color.

    Args:
        text: Color value as reported by computed style
        opacity: Element opacity, used as alpha when the value carries none

    Returns:
        Color, or None when the syntax is not supported. None means
        "not resolved yet" to callers, never an error.

    Example:
        parse_color("rgba(10, 20, 30, 0.5)")  # Color(10, 20, 30, 0.5)
        parse_color("rgb(0, 0, 0)", 0.8)      # Color(0, 0, 0, 0.8)
    """
    if text is None:
        return None

    value = text.strip()
    if value.lower() == "transparent":
        return TRANSPARENT

    match = _FUNCTION.match(value)
    if not match:
        return None

    args = _split_arguments(match.group(2))
    if args is None or len(args) not in (3, 4):
        return None

    try:
        red, green, blue = (_channel(a) for a in args[:3])
    except ValueError:
        return None

    if len(args) == 4:
        try:
            alpha = _round_alpha(_alpha(args[3]))
        except ValueError:
            return None
    elif match.group(1).lower() == "rgba":
        # rgba() always spells out its alpha
        return None
    else:
        alpha = opacity

    return Color(red=red, green=green, blue=blue, alpha=alpha)


def _split_arguments(inner: str) -> Optional[list[str]]:
    """Split `r, g, b[, a]` or the space form `r g b [/ a]`."""
    if "," in inner:
        parts = [p.strip() for p in inner.split(",")]
    else:
        color_part, _, alpha_part = inner.partition("/")
        parts = color_part.split()
        if alpha_part.strip():
            parts.append(alpha_part.strip())
    if any(not p for p in parts):
        return None
    return parts


def _channel(token: str) -> float:
    if not _NUMBER.match(token):
        raise ValueError(f"Invalid color channel: {token!r}")
    return float(token)


def _alpha(token: str) -> float:
    if token.endswith("%"):
        return _channel(token[:-1]) / 100
    return _channel(token)


def _round_alpha(alpha: float) -> float:
    """Round half up to 2 decimal places"""
    return math.floor(alpha * 100 + 0.5) / 100
