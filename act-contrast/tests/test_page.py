"""Tests for act_contrast.page — snapshot loading and page services."""

import json

import pytest
from conftest import make_page, node

from act_contrast.page import SnapshotError, load_snapshot


def _write(tmp_path, payload):
    path = tmp_path / "page.json"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return path


class TestLoadSnapshot:
    def test_valid(self, tmp_path):
        path = _write(tmp_path, {"url": "https://example.test/", "nodes": [node("html"), node("body", parent=0)]})
        page = load_snapshot(path)
        assert page.url == "https://example.test/"
        assert list(page.elements()) == [0, 1]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotError, match="Cannot read"):
            load_snapshot(tmp_path / "missing.json")

    def test_not_json(self, tmp_path):
        with pytest.raises(SnapshotError, match="not valid JSON"):
            load_snapshot(_write(tmp_path, "{nodes: ["))

    def test_parent_must_precede_child(self, tmp_path):
        path = _write(tmp_path, {"nodes": [node("p", parent=1), node("div")]})
        with pytest.raises(SnapshotError, match="parents must precede"):
            load_snapshot(path)

    def test_self_parent_rejected(self, tmp_path):
        with pytest.raises(SnapshotError):
            load_snapshot(_write(tmp_path, {"nodes": [node("div", parent=0)]}))

    def test_unknown_label_rejected(self, tmp_path):
        with pytest.raises(SnapshotError, match="label"):
            load_snapshot(_write(tmp_path, {"nodes": [node("button", labels=[7])]}))

    def test_snapshot_error_is_value_error(self):
        assert issubclass(SnapshotError, ValueError)


class TestSnapshotPage:
    def test_pointer_path(self):
        page = make_page(node("html"), node("body", parent=0), node("p", parent=1))
        assert page.pointer(2) == "html > body > p"

    def test_pointer_distinguishes_siblings(self):
        page = make_page(
            node("html"),
            node("body", parent=0),
            node("p", parent=1),
            node("div", parent=1),
            node("p", parent=1),
            node("span", parent=4),
        )
        assert page.pointer(2) == "html > body > p:nth-child(1)"
        assert page.pointer(4) == "html > body > p:nth-child(3)"
        assert page.pointer(5) == "html > body > p:nth-child(3) > span"
        assert len({page.pointer(e) for e in page.elements()}) == 6

    def test_explicit_pointer(self):
        page = make_page(node("p", pointer="#intro"))
        assert page.pointer(0) == "#intro"

    def test_text_content(self):
        page = make_page(node("p", text="  hi  "), node("div"), node("span", has_text_node=True))
        assert page.trimmed_text(0) == "hi"
        assert page.has_text_content(0)
        assert not page.has_text_content(1)
        assert page.has_text_content(2)

    def test_style_and_snapshot(self):
        page = make_page(node("p", styles={"color": "rgb(1, 2, 3)", "opacity": "0.5", "font-size": "20px"}))
        assert page.style(0, "color") == "rgb(1, 2, 3)"
        assert page.style(0, "text-shadow") == ""
        snapshot = page.style_snapshot(0)
        assert snapshot.color == "rgb(1, 2, 3)"
        assert snapshot.opacity == 0.5
        assert snapshot.font_size == "20px"
        assert snapshot.text_shadow == "none"

    def test_widget_roles(self):
        page = make_page(node("a", role="link"), node("p", role="paragraph"), node("div"))
        assert page.is_widget_role(0)
        assert not page.is_widget_role(1)
        assert not page.is_widget_role(2)

    def test_namespace(self):
        page = make_page(node("svg", namespace="svg"), node("p"))
        assert not page.is_html_element(0)
        assert page.is_html_element(1)

    def test_disabled_widget_labels(self):
        page = make_page(
            node("label", text="Name"),
            node("input", role="textbox", attributes={"disabled": ""}, labels=[0]),
            node("label", text="Email"),
            node("input", role="textbox", labels=[2]),
            node("span", text="Save"),
            node("div", role="button", attributes={"aria-disabled": "true"}, labels=[4]),
        )
        assert page.is_disabled_widget_label(0)
        assert not page.is_disabled_widget_label(2)
        assert page.is_disabled_widget_label(4)

    def test_attribute(self):
        page = make_page(node("fieldset", attributes={"disabled": ""}))
        assert page.attribute(0, "disabled") == ""
        assert page.attribute(0, "aria-disabled") is None
