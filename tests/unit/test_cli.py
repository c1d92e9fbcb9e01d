"""Tests for CLI commands."""

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from themizer import __version__
from themizer.cli import OutputFormat, app, render_themes, write_output
from themizer.theme import themize


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


class TestVersion:
    def test_version(self, cli_runner):
        result = cli_runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"themizer {__version__}" in result.output


class TestThemeCommand:
    """Tests for the theme command."""

    def test_writes_css(self, cli_runner, config_file: Path, expected_css: str, tmp_path: Path):
        out_dir = tmp_path / "static"
        result = cli_runner.invoke(
            app, ["theme", "--config", str(config_file), "--out-dir", str(out_dir)]
        )

        assert result.exit_code == 0
        assert "theme.css written to" in " ".join(result.output.split())
        assert (out_dir / "theme.css").read_text() == expected_css

    def test_second_run_is_up_to_date(self, cli_runner, config_file: Path, tmp_path: Path):
        out_dir = tmp_path / "static"
        args = ["theme", "-c", str(config_file), "-o", str(out_dir)]
        cli_runner.invoke(app, args)
        mtime = (out_dir / "theme.css").stat().st_mtime_ns

        result = cli_runner.invoke(app, args)

        assert result.exit_code == 0
        assert "is up to date" in " ".join(result.output.split())
        assert (out_dir / "theme.css").stat().st_mtime_ns == mtime

    def test_writes_json(self, cli_runner, config_file: Path, tmp_path: Path):
        out_dir = tmp_path / "build"
        result = cli_runner.invoke(
            app,
            ["theme", "--config", str(config_file), "--out-dir", str(out_dir), "--format", "json"],
        )

        assert result.exit_code == 0
        data = json.loads((out_dir / "theme.json").read_text())
        assert data[":root"] == {"--a0": "24px", "--a1": "16px", "--a2": "var(--a1, 16px)"}
        assert data["@media (min-width: 1024px)"] == {":root": {"--a2": "var(--a0, 24px)"}}
        assert data["@property --a0"]["syntax"] == '"<length>"'

    def test_missing_config(self, cli_runner, tmp_path: Path):
        result = cli_runner.invoke(
            app,
            ["theme", "--config", str(tmp_path / "missing.py"), "--out-dir", str(tmp_path)],
        )

        assert result.exit_code == 1
        assert not (tmp_path / "theme.css").exists()

    def test_broken_config(self, cli_runner, tmp_path: Path):
        config = tmp_path / "broken.py"
        config.write_text("raise RuntimeError('boom')\n")

        result = cli_runner.invoke(
            app, ["theme", "--config", str(config), "--out-dir", str(tmp_path / "out")]
        )

        assert result.exit_code == 1
        assert not (tmp_path / "out").exists()

    def test_rejects_deep_traversal(self, cli_runner, config_file: Path):
        result = cli_runner.invoke(
            app, ["theme", "--config", str(config_file), "--out-dir", "../../../../tmp"]
        )
        assert result.exit_code == 1

    def test_out_dir_is_required(self, cli_runner, config_file: Path):
        result = cli_runner.invoke(app, ["theme", "--config", str(config_file)])
        assert result.exit_code != 0


class TestWriteOutput:
    """Tests for write_output."""

    def test_creates_parent_directories(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "theme.css"

        assert write_output(target, ":root{}") is True
        assert target.read_text() == ":root{}"

    def test_skips_unchanged_content(self, tmp_path: Path):
        target = tmp_path / "theme.css"
        write_output(target, ":root{}")

        assert write_output(target, ":root{}") is False
        assert write_output(target, ":root{--a0:1px;}") is True
        assert list(tmp_path.iterdir()) == [target]


class TestRenderThemes:
    """Tests for render_themes."""

    @pytest.fixture
    def colliding_themes(self):
        return [
            themize({"prefix": "a", "tokens": {"x": "1px"}}),
            themize({"prefix": "b", "tokens": {"y": "#000"}}),
        ]

    @pytest.mark.parametrize("output_format", [OutputFormat.CSS, OutputFormat.JSON])
    def test_collisions_are_logged(self, caplog, colliding_themes, output_format):
        with caplog.at_level(logging.WARNING, logger="themizer.theme"):
            render_themes(colliding_themes, output_format)

        assert "--a0" in caplog.text
        assert "--a-tokens-x" in caplog.text
        assert "--b-tokens-y" in caplog.text

    def test_json_without_collisions_keeps_every_theme(self, caplog):
        themes = [
            themize({"prefix": "a", "tokens": {"x": "1px"}, "minify_prefix": "a"}),
            themize({"prefix": "b", "tokens": {"y": "#000"}, "minify_prefix": "b"}),
        ]
        with caplog.at_level(logging.WARNING, logger="themizer.theme"):
            data = json.loads(render_themes(themes, OutputFormat.JSON))

        assert data[":root"] == {"--a0": "1px", "--b0": "#000"}
        assert caplog.records == []
