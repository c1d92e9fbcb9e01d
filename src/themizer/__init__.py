"""
themizer - design tokens compiled to CSS custom properties.

Compiles nested token trees (colors, units, aliases) into minified custom
properties, media-scoped overrides and ``@property`` registrations, and hands
back ``var()`` references to use in place of literal values.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .atomizer import Atomized, AtomizerOptions, TokenKind, atomize, classify_token, get_var
from .css_generator import get_css, get_css_from_jss, get_jss
from .errors import (
    ConfigError,
    FormatError,
    InvalidTokenError,
    MissingDefaultError,
    RangeError,
    ThemizerError,
    UnknownMediaError,
    UnknownUnitError,
)
from .naming import NameAllocator, minify_variable_name
from .oklch import format_oklch, oklch_to_rgb, parse_oklch, rgb_to_oklch
from .references import resolve_atom, unwrap_atom
from .shades import expand_color
from .syntax import PropertyMetadata, create_property_metadata, infer_syntax
from .theme import (
    Theme,
    ThemizerOptions,
    add_at_media,
    combine_themes,
    themize,
    warn_collisions,
)
from .units import expand_units
from .validators import is_valid_css_identifier, validate_prefix, validate_tokens


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    # In editable mode, read directly from pyproject.toml for live updates
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    # Fall back to installed metadata
    try:
        return _metadata_version("themizer")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    # Compiler
    "atomize",
    "Atomized",
    "AtomizerOptions",
    "TokenKind",
    "classify_token",
    "get_var",
    "get_css",
    "get_jss",
    "get_css_from_jss",
    "NameAllocator",
    "minify_variable_name",
    # Themes
    "themize",
    "Theme",
    "ThemizerOptions",
    "add_at_media",
    "combine_themes",
    "warn_collisions",
    # Expansion and inference
    "expand_color",
    "expand_units",
    "parse_oklch",
    "format_oklch",
    "oklch_to_rgb",
    "rgb_to_oklch",
    "infer_syntax",
    "create_property_metadata",
    "PropertyMetadata",
    # References and validation
    "resolve_atom",
    "unwrap_atom",
    "is_valid_css_identifier",
    "validate_prefix",
    "validate_tokens",
    # Errors
    "ThemizerError",
    "FormatError",
    "RangeError",
    "UnknownUnitError",
    "MissingDefaultError",
    "UnknownMediaError",
    "InvalidTokenError",
    "ConfigError",
]
