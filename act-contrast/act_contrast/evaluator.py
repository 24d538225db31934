"""
Text Contrast Evaluator

Orchestrates the "text has sufficient contrast" rule over a page:
precondition guards, text-shadow screening, background resolution,
gradient sampling and the contrast threshold check. Every candidate
element ends in exactly one Evaluation, appended in DOM order.
"""

import logging
from typing import Callable, Optional

from .checks.background import parse_background, resolve_background
from .checks.color import parse_color
from .checks.contrast import (
    get_contrast,
    is_bold_weight,
    is_sufficient_contrast,
    parse_font_size,
    required_ratio,
)
from .checks.gradient import TextExtentEstimator, evaluate_gradient
from .checks.shadow import has_halo_shadow
from .language import is_human_language
from .models import WHITE, Config, Evaluation, Gradient, Image, RuleReport, Verdict
from .page import PageServices
from .text_extent import PillowTextExtentEstimator


logger = logging.getLogger(__name__)

NOT_HUMAN_LANGUAGE = "Element doesn't have human language text."

# result code -> (verdict, description)
RESULTS: dict[str, tuple[Verdict, str]] = {
    "RC1": ("inapplicable", "Element is not visible."),
    "RC2": ("inapplicable", "Element doesn't have text."),
    "RC3": ("inapplicable", "Element is not an HTML element."),
    "RC4": ("inapplicable", "Element has a semantic role that inherits from widget."),
    "RC5": ("inapplicable", "This text is part of a label of a disabled widget."),
    "RC6": ("inapplicable", "Element has a semantic role of group and is disabled."),
    "RC7": ("inapplicable", "Colors are equal."),
    "RC8": ("passed", "Element has gradient with contrast ratio higher than minimum."),
    "RC9": ("passed", "Element has contrast ratio higher than minimum."),
    "RC10": ("failed", "Element has gradient with contrast ratio lower than minimum."),
    "RC11": ("failed", "Element has contrast ratio lower than minimum."),
    "RC12": ("warning", "Element has an image on background."),
    "RC13": ("warning", "Element has a gradient that can't be verified."),
    "RC14": ("warning", "Element has text-shadow that needs manual verification."),
    "RC15": ("warning", "Element text color can't be parsed and needs manual verification."),
    "RC16": ("warning", "Element could not be evaluated and needs manual verification."),
}


def _is_disabled_group(page: PageServices, element) -> bool:
    if page.role(element) != "group":
        return False
    return page.attribute(element, "disabled") is not None or page.attribute(element, "aria-disabled") is not None


# Applicability guards, checked in order; the first that holds decides.
PRECONDITIONS: tuple[tuple[str, Callable[[PageServices, object], bool]], ...] = (
    ("RC1", lambda page, el: not page.is_visible(el)),
    ("RC2", lambda page, el: not page.has_text_content(el) and page.trimmed_text(el) == ""),
    ("RC3", lambda page, el: not page.is_html_element(el)),
    ("RC4", lambda page, el: page.is_widget_role(el)),
    ("RC5", lambda page, el: page.is_disabled_widget_label(el)),
    ("RC6", _is_disabled_group),
)


class ContrastEvaluator:
    """
    Evaluates text contrast for every element of a page.

    Collaborators for language detection and text measurement are
    injectable; the defaults are the Unicode heuristic and the Pillow
    estimator.

    Example:
        config = load_config()
        evaluator = ContrastEvaluator(config)
        report = evaluator.evaluate(load_snapshot(Path("page.json")))
        print(report.summary())
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        estimate_width: Optional[TextExtentEstimator] = None,
        human_language: Optional[Callable[[str], bool]] = None,
    ):
        """
        Initialize the evaluator.

        Args:
            config: Evaluator configuration (defaults apply when omitted)
            estimate_width: Text Extent Estimator returning -1 on failure
            human_language: Predicate telling natural-language text apart
        """
        self.config = config or Config()
        self.estimate_width = estimate_width or PillowTextExtentEstimator(self.config.font_dirs)
        self.human_language = human_language or is_human_language
        default = parse_color(self.config.default_background)
        if default is None or default.alpha == 0:
            default = WHITE
        self.default_background = default

    def evaluate(self, page: PageServices) -> RuleReport:
        """
        Evaluate every candidate element of the page, in DOM order.

        An element whose evaluation raises is recorded as a warning and
        the rest of the page is still evaluated.
        """
        report = RuleReport()
        skipped = set(self.config.skipped_tags)

        for element in page.elements():
            if page.tag_name(element) in skipped:
                continue
            try:
                evaluation = self.evaluate_element(page, element)
            except Exception:
                logger.exception("Evaluation of %s failed", page.pointer(element))
                evaluation = self._result("RC16", page.pointer(element))
            report.add(evaluation)

        logger.info(report.summary())
        return report

    def evaluate_element(self, page: PageServices, element) -> Evaluation:
        """Evaluate a single element."""
        pointer = page.pointer(element)

        for code, applies in PRECONDITIONS:
            if applies(page, element):
                logger.debug("%s inapplicable (%s)", pointer, code)
                return self._result(code, pointer)

        style = page.style_snapshot(element)

        if has_halo_shadow(style.text_shadow):
            return self._result("RC14", pointer)

        background = resolve_background(page, element, self.default_background)
        if isinstance(background, Image):
            return self._result("RC12", pointer)

        fg = parse_color(style.color, style.opacity)
        if fg is None:
            logger.debug("%s has unparseable color %r", pointer, style.color)
            return self._result("RC15", pointer)

        text = page.trimmed_text(element)

        if isinstance(background, Gradient):
            own_gradient = isinstance(parse_background(style), Gradient)
            if own_gradient and not self.human_language(text):
                return self._result("RC9", pointer, description=NOT_HUMAN_LANGUAGE)
            check = evaluate_gradient(background.spec, fg, style, text, self.estimate_width)
            if not check.computed:
                return self._result("RC13", pointer)
            return self._result(
                "RC8" if check.passed else "RC10",
                pointer,
                contrast_ratio=check.lowest_ratio,
                required_ratio=check.required_ratio,
            )

        bg = background.color
        if bg == fg:
            return self._result("RC7", pointer)

        if not self.human_language(text):
            return self._result("RC9", pointer, description=NOT_HUMAN_LANGUAGE)

        font_size = parse_font_size(style.font_size)
        bold = is_bold_weight(style.font_weight)
        ratio = get_contrast(bg, fg)
        required = required_ratio(font_size, bold)
        logger.debug("%s contrast %.2f (required > %.1f)", pointer, ratio, required)

        return self._result(
            "RC9" if is_sufficient_contrast(ratio, font_size, bold) else "RC11",
            pointer,
            contrast_ratio=ratio,
            required_ratio=required,
        )

    def _result(
        self,
        code: str,
        pointer: str,
        description: Optional[str] = None,
        **measurements,
    ) -> Evaluation:
        verdict, default_description = RESULTS[code]
        return Evaluation(
            verdict=verdict,
            result_code=code,
            description=description or default_description,
            element=pointer,
            **measurements,
        )
