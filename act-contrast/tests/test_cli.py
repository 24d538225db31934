"""Tests for act_contrast.cli — command-line entry point."""

import json

import pytest
from click.testing import CliRunner
from conftest import node

from act_contrast.cli import main


def _snapshot(tmp_path, fg: str):
    path = tmp_path / "page.json"
    nodes = [
        node("html"),
        node("body", parent=0, styles={"background-color": "rgb(255, 255, 255)"}),
        node("h1", parent=1, text="Heading", pointer="h1", styles={"color": fg, "font-size": "32px"}),
        node("div", parent=1, pointer="div.empty"),
    ]
    path.write_text(json.dumps({"url": "https://example.test/", "nodes": nodes}), encoding="utf-8")
    return path


@pytest.fixture
def runner(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("CONTRAST_LOG_LEVEL", raising=False)
    return CliRunner()


class TestCli:
    def test_json_output(self, runner, tmp_path):
        result = runner.invoke(main, [str(_snapshot(tmp_path, "rgb(0, 0, 0)")), "--output", "json"])
        assert result.exit_code == 0
        report = json.loads(result.stdout)
        assert report["rule_id"] == "QW-ACT-R76"
        assert [e["result_code"] for e in report["evaluations"]] == ["RC9", "RC2"]

    def test_only_filter(self, runner, tmp_path):
        args = [str(_snapshot(tmp_path, "rgb(0, 0, 0)")), "--output", "json", "--only", "inapplicable"]
        report = json.loads(runner.invoke(main, args).stdout)
        assert [e["element"] for e in report["evaluations"]] == ["div.empty"]

    def test_failure_exit_code(self, runner, tmp_path):
        result = runner.invoke(main, [str(_snapshot(tmp_path, "rgb(200, 200, 200)")), "--output", "json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["evaluations"][0]["verdict"] == "failed"

    def test_rich_output(self, runner, tmp_path):
        result = runner.invoke(main, [str(_snapshot(tmp_path, "rgb(0, 0, 0)"))])
        assert result.exit_code == 0
        assert "QW-ACT-R76" in result.stdout
        assert "1 passed" in result.stdout

    def test_invalid_snapshot(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[not json", encoding="utf-8")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == 2

    def test_missing_snapshot(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "missing.json")])
        assert result.exit_code == 2
