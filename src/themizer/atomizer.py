"""
Design token atomizer.

Walks a nested token tree and compiles it into CSS custom properties,
media-scoped overrides, ``@property`` metadata and a reference tree whose
leaves are ``var()`` expressions::

    atomized = atomize(
        {"spacing": {"md": [{"desktop": "24px"}, "16px"]}},
        {"medias": {"desktop": "(min-width: 1024px)"}},
    )
    atomized.vars
    # {"--a0": "16px", "@media (min-width: 1024px)": {"--a0": "24px"}}
    atomized.ref
    # {"spacing": {"md": "var(--a0, 16px)"}}

Token shapes (decided by :func:`classify_token`):
- atom: non-empty string or finite number
- tree: nested mapping
- responsive: ``[{media: atom, ...}, default?]``
- units: ``{unit_type: [start, step, stop]}`` under a ``units`` key
- palette: an oklch string directly under a ``palette`` mapping
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import InvalidTokenError, UnknownMediaError
from .naming import NameAllocator
from .shades import expand_color, should_expand_color
from .syntax import PropertyMetadata, create_property_metadata
from .units import expand_units, format_number, is_units_config
from .validators import validate_prefix

logger = logging.getLogger(__name__)

Atom: TypeAlias = str | int | float
Vars: TypeAlias = dict[str, Atom]
FlattenVars: TypeAlias = dict[str, "Atom | Vars"]

# Joins prefix and path segments into a property name
PATH_UNIFIER = "-"
UNITS_KEY = "units"


class TokenKind(StrEnum):
    """Shape of one value in a token tree."""

    ATOM = "atom"
    TREE = "tree"
    RESPONSIVE = "responsive"
    UNITS = "units"
    PALETTE = "palette"


class AtomizerOptions(BaseModel):
    """Options for one :func:`atomize` call."""

    model_config = ConfigDict(frozen=True)

    prefix: str = Field(default="", description="Prepended to every original property path")
    medias: dict[str, str] = Field(
        default_factory=dict,
        description="Media name -> raw media condition (no @media prefix)",
    )
    overrides: list[str] = Field(
        default_factory=list,
        description="Dotted token paths excluded from @property registration",
    )
    minify: bool = Field(default=True, description="Replace property paths with short names")
    minify_prefix: str = Field(default="", description="Prefix for minified names")

    @field_validator("prefix", "minify_prefix")
    @classmethod
    def _check_identifier(cls, value: str) -> str:
        if value:
            validate_prefix(value)
        return value


@dataclass
class Atomized:
    """Result of :func:`atomize`."""

    vars: FlattenVars
    ref: dict[Any, Any]
    metadata: dict[str, PropertyMetadata]
    variable_map: dict[str, str] | None = None


@dataclass
class _CompileContext:
    """Accumulators for one top-level compilation."""

    options: AtomizerOptions
    allocator: NameAllocator
    overrides: frozenset[str]
    vars: Vars = field(default_factory=dict)
    responsive: dict[str, Vars] = field(default_factory=dict)
    metadata: dict[str, PropertyMetadata] = field(default_factory=dict)


def is_atom(value: Any) -> bool:
    """Check whether a value is an atom: a non-empty string or a finite number."""
    if isinstance(value, str):
        return bool(value)
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def format_atom(value: Atom) -> str:
    """Render an atom as CSS text."""
    if isinstance(value, str):
        return value
    return format_number(value)


def get_var(variable: str, default: Any = None) -> str:
    """Build a ``var()`` expression with an optional fallback.

    Examples:
        get_var("--a0")                     # "var(--a0)"
        get_var("--a0", "#000")             # "var(--a0, #000)"
        get_var("--a1", get_var("--a0"))    # "var(--a1, var(--a0))"
    """
    if is_atom(default):
        return f"var({variable}, {format_atom(default)})"
    return f"var({variable})"


def _is_responsive(value: Any) -> bool:
    if isinstance(value, str) or not isinstance(value, Sequence):
        return False
    if not 1 <= len(value) <= 2 or not isinstance(value[0], Mapping):
        return False
    if len(value) == 2 and value[1] is not None and not is_atom(value[1]):
        return False
    return all(is_atom(atom) for atom in value[0].values())


def classify_token(key: Any, value: Any, path: Sequence[str]) -> TokenKind:
    """Classify one token value.

    Args:
        key: Key holding ``value``.
        value: Token value.
        path: Path segments of the mapping holding ``key``.

    Returns:
        The token kind.

    Raises:
        InvalidTokenError: If the value matches no token shape.
    """
    if should_expand_color(value, path):
        return TokenKind.PALETTE
    if key == UNITS_KEY and is_units_config(value):
        return TokenKind.UNITS
    if is_atom(value):
        return TokenKind.ATOM
    if _is_responsive(value):
        return TokenKind.RESPONSIVE
    if isinstance(value, Mapping):
        return TokenKind.TREE

    dotted = ".".join([*path, _segment(key)])
    raise InvalidTokenError(
        f"Expected a non-empty string, number, nested tokens or [medias, default?], "
        f"got {value!r}",
        path=dotted,
    )


def _segment(key: Any) -> str:
    if isinstance(key, int | float) and not isinstance(key, bool):
        return format_number(key)
    return str(key)


def _escape(segment: str) -> str:
    # Fractional unit keys such as 0.25 need escaping in readable names
    return segment.replace(".", "\\.")


def _property_name(path: Sequence[str], ctx: _CompileContext) -> str:
    parts = [_escape(segment) for segment in path]
    if ctx.options.prefix:
        parts.insert(0, ctx.options.prefix)
    original = f"--{PATH_UNIFIER.join(parts)}"

    if ctx.options.minify:
        return ctx.allocator.allocate(original)
    return original


def _register(variable: str, path: Sequence[str], value: Atom, ctx: _CompileContext) -> None:
    if PATH_UNIFIER.join(path) in ctx.overrides:
        return
    metadata = create_property_metadata(value)
    if metadata is not None:
        ctx.metadata[variable] = metadata


def _media_query(media: Any, path: Sequence[str], ctx: _CompileContext) -> str:
    condition = ctx.options.medias.get(media)
    if condition is None:
        raise UnknownMediaError(
            f"Unknown media {media!r}; declared medias: {sorted(ctx.options.medias)}",
            path=".".join(path),
        )
    return f"@media {condition}"


def _walk(tokens: Mapping[Any, Any], path: list[str], ctx: _CompileContext) -> dict[Any, Any]:
    ref: dict[Any, Any] = {}

    for key, value in tokens.items():
        kind = classify_token(key, value, path)
        token_path = [*path, _segment(key)]

        if kind is TokenKind.PALETTE:
            # Shades are leaves; they are not expanded again
            ref[key] = _walk(expand_color(value), token_path, ctx)

        elif kind is TokenKind.UNITS:
            ref[key] = _walk(expand_units(value), token_path, ctx)

        elif kind is TokenKind.ATOM:
            variable = _property_name(token_path, ctx)
            ctx.vars[variable] = value
            _register(variable, token_path, value, ctx)
            ref[key] = get_var(variable, value)

        elif kind is TokenKind.RESPONSIVE:
            medias = value[0]
            default = value[1] if len(value) == 2 else None
            variable = _property_name(token_path, ctx)

            for media, atom in medias.items():
                query = _media_query(media, token_path, ctx)
                ctx.responsive.setdefault(query, {})[variable] = atom

            if is_atom(default):
                ctx.vars[variable] = default
                _register(variable, token_path, default, ctx)

            ref[key] = get_var(variable, default)

        else:
            ref[key] = _walk(value, token_path, ctx)

    return ref


def atomize(
    tokens: Mapping[Any, Any],
    options: AtomizerOptions | Mapping[str, Any] | None = None,
    *,
    allocator: NameAllocator | None = None,
) -> Atomized:
    """Compile a token tree into custom properties and references.

    Args:
        tokens: Nested token tree.
        options: :class:`AtomizerOptions`, or a dict validated into one.
        allocator: Name allocator to draw minified names from. A fresh one
            is created when omitted; pass a shared one when several trees
            are emitted into the same stylesheet.

    Returns:
        Atomized result. ``variable_map`` is set only when at least one
        minified name was allocated.

    Raises:
        InvalidTokenError: A value matches no token shape.
        UnknownMediaError: A responsive token names an undeclared media.
        FormatError: A palette shorthand is not a parseable oklch color.
        RangeError: A units shorthand has an unusable range.
    """
    if options is None:
        options = AtomizerOptions()
    elif not isinstance(options, AtomizerOptions):
        options = AtomizerOptions.model_validate(options)

    if allocator is None:
        allocator = NameAllocator(prefix=options.minify_prefix)

    overrides = frozenset(override.replace(".", PATH_UNIFIER) for override in options.overrides)
    ctx = _CompileContext(options=options, allocator=allocator, overrides=overrides)

    ref = _walk(tokens, [], ctx)

    flatten: FlattenVars = dict(ctx.vars)
    flatten.update(ctx.responsive)

    logger.debug(
        "Atomized %d properties (%d media partitions, %d registered)",
        len(ctx.vars),
        len(ctx.responsive),
        len(ctx.metadata),
    )

    return Atomized(
        vars=flatten,
        ref=ref,
        metadata=ctx.metadata,
        variable_map=allocator.variable_map() if options.minify and len(allocator) else None,
    )
