"""
Theme builder.

A theme compiles two token trees into one stylesheet:

1. ``tokens`` - raw design values, prefixed ``<prefix>-tokens``
2. ``aliases`` - semantic names built from token references, prefixed
   ``<prefix>-aliases``; these may be responsive

Both trees draw minified names from one allocator so their properties never
collide inside the theme.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .atomizer import Atomized, AtomizerOptions, FlattenVars, atomize
from .css_generator import get_css, get_jss
from .naming import NameAllocator
from .syntax import PropertyMetadata
from .validators import validate_prefix, validate_tokens

logger = logging.getLogger(__name__)

AliasesFactory = Callable[[dict[Any, Any]], Mapping[Any, Any]]


class ThemizerOptions(BaseModel):
    """Configuration for one theme."""

    model_config = ConfigDict(frozen=True)

    prefix: str = Field(description="Theme prefix, e.g. 'ds' -> --ds-tokens-..., --ds-aliases-...")
    medias: dict[str, str] = Field(
        default_factory=dict,
        description="Media name -> raw media condition",
    )
    tokens: dict[Any, Any] = Field(default_factory=dict, description="Design token tree")
    overrides: list[str] = Field(
        default_factory=list,
        description="Alias paths excluded from @property registration",
    )
    minify: bool = Field(default=True, description="Emit minified property names")
    minify_prefix: str = Field(
        default="",
        description="Prefix for minified names; give each concatenated theme its own",
    )

    @field_validator("prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        return validate_prefix(value)

    @field_validator("minify_prefix")
    @classmethod
    def _check_minify_prefix(cls, value: str) -> str:
        if value:
            validate_prefix(value)
        return value

    @field_validator("tokens")
    @classmethod
    def _check_tokens(cls, value: dict[Any, Any]) -> dict[Any, Any]:
        validate_tokens(value)
        return value


@dataclass
class Theme:
    """A compiled theme."""

    prefix: str
    tokens: dict[Any, Any]
    aliases: dict[Any, Any]
    medias: dict[str, str]
    vars: FlattenVars
    metadata: dict[str, PropertyMetadata]
    variable_map: dict[str, str] | None = None
    css: str = field(init=False)
    jss: dict[str, Any] = field(init=False)

    def __post_init__(self) -> None:
        self.css = get_css(self.vars, self.metadata)
        self.jss = get_jss(self.vars, self.metadata)


def add_at_media(medias: Mapping[str, str]) -> dict[str, str]:
    """Prefix each media condition with ``@media``.

    Example:
        add_at_media({"dark": "(prefers-color-scheme: dark)"})
        # {"dark": "@media (prefers-color-scheme: dark)"}
    """
    return {name: f"@media {condition}" for name, condition in medias.items()}


def merge_vars(*records: FlattenVars) -> FlattenVars:
    """Merge flat variable records, merging media partitions by key."""
    merged: FlattenVars = {}
    for record in records:
        for key, value in record.items():
            existing = merged.get(key)
            if isinstance(value, dict) and isinstance(existing, dict):
                merged[key] = {**existing, **value}
            elif isinstance(value, dict):
                merged[key] = dict(value)
            else:
                merged[key] = value
    return merged


def themize(
    options: ThemizerOptions | Mapping[str, Any],
    aliases: AliasesFactory | None = None,
) -> Theme:
    """
    Compile a theme from tokens and an aliases factory.

    Args:
        options: Theme options, or a dict validated into them.
        aliases: Called with the tokens reference tree; returns the alias tree.

    Returns:
        Compiled Theme.

    Example:
        theme = themize(
            {
                "prefix": "ds",
                "medias": {"dark": "(prefers-color-scheme: dark)"},
                "tokens": {"colors": {"amber": {"light": "#fbbf24", "dark": "#d97706"}}},
            },
            lambda tokens: {
                "main": [{"dark": tokens["colors"]["amber"]["light"]},
                         tokens["colors"]["amber"]["dark"]],
            },
        )
    """
    if not isinstance(options, ThemizerOptions):
        options = ThemizerOptions.model_validate(options)

    allocator = NameAllocator(prefix=options.minify_prefix)

    tokenized = atomize(
        options.tokens,
        AtomizerOptions(
            prefix=f"{options.prefix}-tokens",
            medias=options.medias,
            minify=options.minify,
            minify_prefix=options.minify_prefix,
        ),
        allocator=allocator,
    )

    alias_tree = aliases(tokenized.ref) if aliases is not None else {}
    aliased: Atomized = atomize(
        alias_tree,
        AtomizerOptions(
            prefix=f"{options.prefix}-aliases",
            medias=options.medias,
            overrides=options.overrides,
            minify=options.minify,
            minify_prefix=options.minify_prefix,
        ),
        allocator=allocator,
    )

    logger.debug("Compiled theme %r with %d named properties", options.prefix, len(allocator))

    return Theme(
        prefix=options.prefix,
        tokens=tokenized.ref,
        aliases=aliased.ref,
        medias=add_at_media(options.medias),
        vars=merge_vars(tokenized.vars, aliased.vars),
        metadata={**tokenized.metadata, **aliased.metadata},
        variable_map=aliased.variable_map,
    )


def find_collisions(themes: Iterable[Theme]) -> dict[str, list[str]]:
    """Find minified names that different themes give to different properties.

    Returns:
        Minified name -> the distinct original properties it stands for.
    """
    seen: dict[str, list[str]] = {}
    for theme in themes:
        for minified, original in (theme.variable_map or {}).items():
            originals = seen.setdefault(minified, [])
            if original not in originals:
                originals.append(original)
    return {name: originals for name, originals in seen.items() if len(originals) > 1}


def warn_collisions(themes: Iterable[Theme]) -> dict[str, list[str]]:
    """Log a warning for every minified name two themes assign to different properties.

    Returns:
        The collisions found, as :func:`find_collisions` reports them.
    """
    collisions = find_collisions(themes)
    for name, originals in collisions.items():
        logger.warning(
            "Minified property %s is shared by %s; set a distinct minify_prefix per theme",
            name,
            ", ".join(originals),
        )
    return collisions


def combine_themes(themes: Iterable[Theme]) -> str:
    """Concatenate the CSS of several themes.

    Collisions are logged by :func:`warn_collisions`; give each theme its own
    ``minify_prefix`` to avoid them.
    """
    themes = list(themes)
    warn_collisions(themes)
    return "".join(theme.css for theme in themes)
