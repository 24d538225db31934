"""Shared builders for page snapshots used across the test suite."""

import pytest

from act_contrast.evaluator import ContrastEvaluator
from act_contrast.page import PageSnapshot, SnapshotPage


def node(tag: str, parent=None, text: str = "", styles=None, **fields) -> dict:
    """One snapshot node as it appears in a snapshot file."""
    return {"tag": tag, "parent": parent, "text": text, "styles": styles or {}, **fields}


def make_page(*nodes: dict) -> SnapshotPage:
    return SnapshotPage(PageSnapshot.model_validate({"url": "https://example.test/", "nodes": list(nodes)}))


def text_page(fg: str, bg: str = "rgb(255, 255, 255)", text: str = "Hello world", **styles) -> SnapshotPage:
    """html > body > p, with the background on body and the text on p."""
    p_styles = {"color": fg, "font-size": "16px", "font-weight": "400"}
    p_styles.update({k.replace("_", "-"): v for k, v in styles.items()})
    return make_page(
        node("html"),
        node("body", parent=0, styles={"background-color": bg}),
        node("p", parent=1, text=text, styles=p_styles),
    )


@pytest.fixture
def evaluator() -> ContrastEvaluator:
    """Evaluator whose text width estimation always fails."""
    return ContrastEvaluator(estimate_width=lambda font, size, bold, italic, text: -1)
