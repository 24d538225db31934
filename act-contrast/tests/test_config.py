"""Tests for act_contrast.config — .env and environment loading."""

import os

import pytest
from pydantic import ValidationError

from act_contrast.config import load_config

SETTINGS = ("CONTRAST_DEFAULT_BACKGROUND", "CONTRAST_FONT_DIRS", "CONTRAST_SKIPPED_TAGS", "CONTRAST_LOG_LEVEL")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """No .env in cwd or home, no CONTRAST_* variables before or after."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in SETTINGS:
        monkeypatch.delenv(name, raising=False)
    yield
    for name in SETTINGS:
        os.environ.pop(name, None)


class TestLoadConfig:
    def test_defaults(self):
        config = load_config()
        assert config.default_background == "rgb(255, 255, 255)"
        assert config.font_dirs == []
        assert "script" in config.skipped_tags
        assert config.log_level == "WARNING"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("CONTRAST_DEFAULT_BACKGROUND", "rgb(0, 0, 0)")
        monkeypatch.setenv("CONTRAST_FONT_DIRS", os.pathsep.join(["/fonts/a", "/fonts/b"]))
        monkeypatch.setenv("CONTRAST_SKIPPED_TAGS", "SCRIPT, style ,")
        monkeypatch.setenv("CONTRAST_LOG_LEVEL", "debug")
        config = load_config()
        assert config.default_background == "rgb(0, 0, 0)"
        assert config.font_dirs == ["/fonts/a", "/fonts/b"]
        assert config.skipped_tags == ["script", "style"]
        assert config.log_level == "DEBUG"

    def test_explicit_env_file(self, tmp_path):
        env_file = tmp_path / "contrast.env"
        env_file.write_text("CONTRAST_LOG_LEVEL=info\n", encoding="utf-8")
        assert load_config(env_file).log_level == "INFO"

    def test_cwd_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("CONTRAST_SKIPPED_TAGS=\n", encoding="utf-8")
        assert load_config().skipped_tags == []

    def test_environment_wins_over_env_file(self, monkeypatch, tmp_path):
        (tmp_path / ".env").write_text("CONTRAST_LOG_LEVEL=ERROR\n", encoding="utf-8")
        monkeypatch.setenv("CONTRAST_LOG_LEVEL", "INFO")
        assert load_config().log_level == "INFO"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("CONTRAST_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            load_config()
