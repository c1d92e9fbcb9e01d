"""
Unit tests for configuration loading.
"""

from pathlib import Path

import pytest

from themizer.config import load_themes
from themizer.errors import ConfigError
from themizer.theme import Theme


class TestLoadThemes:
    """Tests for load_themes."""

    def test_collects_theme(self, config_file: Path, expected_css: str):
        themes = load_themes(config_file)

        assert [name for name, _ in themes] == ["theme"]
        assert isinstance(themes[0][1], Theme)
        assert themes[0][1].css == expected_css

    def test_collects_themes_in_definition_order(self, tmp_path: Path):
        path = tmp_path / "tokens.py"
        path.write_text(
            "from themizer import themize\n"
            "light = themize({'prefix': 'light', 'tokens': {'gap': '4px'}})\n"
            "dark = themize({'prefix': 'dark', 'tokens': {'gap': '8px'}})\n"
            "other = 42\n"
        )
        assert [name for name, _ in load_themes(path)] == ["light", "dark"]

    def test_reloads_on_each_call(self, tmp_path: Path):
        path = tmp_path / "tokens.py"
        path.write_text("from themizer import themize\na = themize({'prefix': 'a'})\n")
        load_themes(path)

        path.write_text("from themizer import themize\nb = themize({'prefix': 'b'})\n")
        assert [name for name, _ in load_themes(path)] == ["b"]

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_themes(tmp_path / "missing.py")

    def test_module_error(self, tmp_path: Path):
        path = tmp_path / "broken.py"
        path.write_text("raise RuntimeError('boom')\n")

        with pytest.raises(ConfigError, match="RuntimeError: boom"):
            load_themes(path)

    def test_invalid_theme_options(self, tmp_path: Path):
        path = tmp_path / "invalid.py"
        path.write_text("from themizer import themize\ntheme = themize({'prefix': 'bad prefix'})\n")

        with pytest.raises(ConfigError, match="ValidationError"):
            load_themes(path)

    def test_no_theme(self, tmp_path: Path):
        path = tmp_path / "empty.py"
        path.write_text("value = 1\n")

        with pytest.raises(ConfigError, match="at least one theme"):
            load_themes(path)
