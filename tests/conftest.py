"""Shared pytest fixtures for themizer tests."""

from pathlib import Path

import pytest

CONFIG_SOURCE = '''
from themizer import themize

theme = themize(
    {
        "prefix": "ds",
        "medias": {"desktop": "(min-width: 1024px)"},
        "tokens": {"units": {24: "24px", 16: "16px"}},
    },
    lambda tokens: {
        "sizing": {"md": [{"desktop": tokens["units"][24]}, tokens["units"][16]]},
    },
)
'''


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a configuration module defining one theme."""
    path = tmp_path / "themizer_config.py"
    path.write_text(CONFIG_SOURCE)
    return path


@pytest.fixture
def expected_css() -> str:
    """CSS compiled from the configuration in ``config_file``."""
    return (
        '@property --a0{syntax:"<length>";inherits:false;initial-value:24px;}'
        '@property --a1{syntax:"<length>";inherits:false;initial-value:16px;}'
        ":root{--a0:24px;--a1:16px;--a2:var(--a1, 16px);}"
        "@media (min-width: 1024px){:root{--a2:var(--a0, 24px);}}"
    )
