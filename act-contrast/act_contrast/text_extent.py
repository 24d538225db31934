"""
Text Extent Estimation

Estimates how many pixels a string occupies when rendered in a given
font, using Pillow's TrueType support. Fonts are located by family name
through a table of the common web-safe font files; anything that cannot
be loaded yields the failure sentinel -1.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from PIL import ImageFont


logger = logging.getLogger(__name__)

FAILED = -1

# family -> (regular, bold, italic, bold italic) font files
FONT_FILES = {
    "arial": ("arial.ttf", "arialbd.ttf", "ariali.ttf", "arialbi.ttf"),
    "times new roman": ("times.ttf", "timesbd.ttf", "timesi.ttf", "timesbi.ttf"),
    "courier new": ("cour.ttf", "courbd.ttf", "couri.ttf", "courbi.ttf"),
    "verdana": ("verdana.ttf", "verdanab.ttf", "verdanai.ttf", "verdanaz.ttf"),
    "georgia": ("georgia.ttf", "georgiab.ttf", "georgiai.ttf", "georgiaz.ttf"),
    "tahoma": ("tahoma.ttf", "tahomabd.ttf", "tahoma.ttf", "tahomabd.ttf"),
    "trebuchet ms": ("trebuc.ttf", "trebucbd.ttf", "trebucit.ttf", "trebucbi.ttf"),
    "dejavu sans": (
        "DejaVuSans.ttf",
        "DejaVuSans-Bold.ttf",
        "DejaVuSans-Oblique.ttf",
        "DejaVuSans-BoldOblique.ttf",
    ),
    "liberation sans": (
        "LiberationSans-Regular.ttf",
        "LiberationSans-Bold.ttf",
        "LiberationSans-Italic.ttf",
        "LiberationSans-BoldItalic.ttf",
    ),
}


class PillowTextExtentEstimator:
    """
    Text Extent Estimator backed by Pillow.

    Callable as `estimator(font, size_px, bold, italic, text) -> int`.

    Example:
        estimate = PillowTextExtentEstimator(font_dirs=["/usr/share/fonts/truetype/msttcorefonts"])
        width = estimate("arial", 16, False, False, "Hello")
        if width == -1:
            ...  # font not available
    """

    def __init__(self, font_dirs: Optional[Sequence[str]] = None):
        self.font_dirs = [Path(d) for d in (font_dirs or [])]
        self._fonts: dict[tuple, Optional[ImageFont.FreeTypeFont]] = {}

    def __call__(self, font: str, size_px: int, bold: bool, italic: bool, text: str) -> int:
        if size_px <= 0:
            return FAILED
        loaded = self._load(font, size_px, bold, italic)
        if loaded is None:
            return FAILED
        return int(round(loaded.getlength(text)))

    def _load(self, family: str, size_px: int, bold: bool, italic: bool) -> Optional[ImageFont.FreeTypeFont]:
        key = (family, size_px, bold, italic)
        if key not in self._fonts:
            self._fonts[key] = self._open(family, size_px, bold, italic)
        return self._fonts[key]

    def _open(self, family: str, size_px: int, bold: bool, italic: bool) -> Optional[ImageFont.FreeTypeFont]:
        files = FONT_FILES.get(family)
        if files is None:
            logger.debug("No font file known for family %r", family)
            return None

        filename = files[(1 if bold else 0) + (2 if italic else 0)]
        candidates = [str(d / filename) for d in self.font_dirs] + [filename]
        for candidate in candidates:
            try:
                return ImageFont.truetype(candidate, size_px)
            except OSError:
                continue

        logger.debug("Font file %s for %r not found", filename, family)
        return None
