"""
Effective Background Resolution

Works out what a piece of text is actually drawn on. Each element's
computed background is parsed into one of four cases (solid color,
gradient, image, unresolved); unresolved and fully transparent
backgrounds send the search to the parent element until something
paints, or the root is passed and the page default applies.
"""

import logging
import re

from ..models import (
    WHITE,
    Background,
    Color,
    Gradient,
    Image,
    SolidColor,
    StyleSnapshot,
    Unresolved,
)
from .color import parse_color
from .gradient import parse_gradient


logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".svg")

_GRADIENT = re.compile(r"[\w-]*gradient\(.*", re.IGNORECASE | re.DOTALL)


def is_image(value: str) -> bool:
    """True when a background value references an image file."""
    lowered = value.lower()
    return any(ext in lowered for ext in IMAGE_EXTENSIONS)


def background_value(style: StyleSnapshot) -> str:
    """
    Pick the declaration that describes the element's background.

    `background-image` wins when set; otherwise the `background` shorthand,
    falling back to `background-color` when the shorthand is empty.
    """
    image = style.background_image.strip()
    if image and image != "none":
        return image
    return style.background.strip() or style.background_color.strip()


def parse_background(style: StyleSnapshot) -> Background:
    """
    Classify one element's own background.

    Returns:
        Image for image references, Gradient for any *-gradient(),
        SolidColor for a visible color, Unresolved for transparent or
        unparseable values.
    """
    value = background_value(style)

    if is_image(style.background_image) or is_image(value):
        return Image(value=value)

    match = _GRADIENT.search(value)
    if match:
        raw = match.group(0)
        return Gradient(raw=raw, spec=parse_gradient(raw, style.opacity))

    color = parse_color(value, style.opacity)
    if color is None or color.is_transparent:
        return Unresolved(value=value)
    return SolidColor(color=color)


def resolve_background(page, element, default: Color = WHITE) -> Background:
    """
    Resolve the effective background of an element.

    Walks from the element up through its ancestors and returns the first
    image, gradient or non-transparent color found. The walk is bounded by
    the depth of the tree.

    Args:
        page: PageServices providing styles and parents
        element: Element whose text is being checked
        default: Color assumed behind the root (white page background)

    Returns:
        Image, Gradient or SolidColor; never Unresolved

    Example:
        bg = resolve_background(page, element)
        if isinstance(bg, SolidColor):
            ratio = get_contrast(bg.color, fg)
    """
    current = element
    depth = 0
    while current is not None:
        background = parse_background(page.style_snapshot(current))
        if not isinstance(background, Unresolved):
            logger.debug(
                "Background of %s resolved to %s at depth %d",
                page.pointer(element), background.kind, depth,
            )
            return background
        current = page.parent(current)
        depth += 1

    logger.debug("No background found for %s; assuming %s", page.pointer(element), default)
    return SolidColor(color=default)
