"""
Project configuration loading.

A project configuration is a Python module that builds its themes at module
level::

    # themizer_config.py
    from themizer import themize

    theme = themize({"prefix": "theme", "tokens": {...}}, lambda tokens: {...})

Every module-level :class:`~themizer.theme.Theme` is collected, in definition
order.
"""

from __future__ import annotations

import importlib.util
import logging
import sys
from pathlib import Path

from .errors import ConfigError
from .theme import Theme

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "themizer_config.py"

_MODULE_NAME = "_themizer_user_config"


def load_themes(config_path: Path) -> list[tuple[str, Theme]]:
    """
    Execute a configuration module and collect its themes.

    Args:
        config_path: Path to the configuration module.

    Returns:
        ``(attribute name, theme)`` pairs in definition order.

    Raises:
        ConfigError: If the file is missing, fails to execute, or defines no theme.
    """
    path = config_path.resolve()
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    spec = importlib.util.spec_from_file_location(_MODULE_NAME, path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"Cannot load config file: {path}")

    module = importlib.util.module_from_spec(spec)
    # Fresh module each call so edits are picked up
    sys.modules.pop(_MODULE_NAME, None)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise ConfigError(f"Failed to execute config file: {type(e).__name__}: {e}") from e

    themes = [(name, value) for name, value in vars(module).items() if isinstance(value, Theme)]
    if not themes:
        raise ConfigError(
            f"Config file {path} must define at least one theme, e.g. theme = themize(...)"
        )

    logger.info("Loaded %d theme(s) from %s", len(themes), path)
    return themes
