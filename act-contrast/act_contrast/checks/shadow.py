"""
Text Shadow Decoding

A blurred shadow centered on the glyphs (no offset) can outline text
well enough to provide contrast on its own. Whether it does cannot be
computed, so such text is flagged for manual review.
"""

import re
from typing import NamedTuple, Optional


MAX_HALO_BLUR_PX = 15.0

_COLOR_FUNCTION = re.compile(r"[a-z-]+\([^)]*\)", re.IGNORECASE)
_LENGTH = re.compile(r"^([+-]?\d+(?:\.\d+)?)(px)?$")


class TextShadow(NamedTuple):
    offset_x: float
    offset_y: float
    blur: float


def parse_text_shadow(value: str) -> list[TextShadow]:
    """
    Decode a computed text-shadow into its shadows.

    Colors are ignored. Shadows whose lengths cannot be read are skipped.

    Example:
        parse_text_shadow("rgb(0, 0, 0) 0px 0px 5px")  # [TextShadow(0.0, 0.0, 5.0)]
    """
    value = (value or "").strip()
    if not value or value == "none":
        return []

    shadows = []
    for part in _split_shadows(value):
        shadow = _parse_one(_COLOR_FUNCTION.sub(" ", part))
        if shadow is not None:
            shadows.append(shadow)
    return shadows


def _split_shadows(value: str) -> list[str]:
    parts, depth, start = [], 0, 0
    for i, ch in enumerate(value):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append(value[start:i])
            start = i + 1
    parts.append(value[start:])
    return parts


def _parse_one(part: str) -> Optional[TextShadow]:
    lengths = []
    for token in part.split():
        match = _LENGTH.match(token)
        if match:
            lengths.append(float(match.group(1)))
    if len(lengths) < 2:
        return None
    blur = lengths[2] if len(lengths) > 2 else 0.0
    return TextShadow(offset_x=lengths[0], offset_y=lengths[1], blur=blur)


def has_halo_shadow(value: str) -> bool:
    """True when a shadow sits directly behind the text with 0 < blur <= 15px."""
    return any(
        s.offset_x == 0 and s.offset_y == 0 and 0 < s.blur <= MAX_HALO_BLUR_PX
        for s in parse_text_shadow(value)
    )
