"""
ACT Contrast - Text Contrast Evaluation

Evaluates whether text has sufficient contrast against its background
(WCAG enhanced contrast, ACT rule QW-ACT-R76) on a captured page:

- Effective background resolution through transparent ancestors
- Alpha compositing of translucent text colors
- Linear-gradient sampling with text width estimation
- Size and weight dependent thresholds (7:1 small text, 4.5:1 large)
"""

__version__ = "0.1.0"

from .evaluator import ContrastEvaluator
from .models import Color, Evaluation, RuleReport
from .page import PageServices, SnapshotPage, load_snapshot

__all__ = [
    "Color",
    "ContrastEvaluator",
    "Evaluation",
    "PageServices",
    "RuleReport",
    "SnapshotPage",
    "load_snapshot",
]
