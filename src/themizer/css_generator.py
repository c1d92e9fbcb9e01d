"""
CSS generator for atomized tokens.

Renders the flat variable record produced by the atomizer as CSS text or as
an equivalent structured (JSS) object:

    @property --a0{syntax:"<length>";inherits:false;initial-value:16px;}
    :root{--a0:16px;}
    @media (min-width: 1024px){:root{--a0:24px;}}

(one string, no whitespace between rules)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .atomizer import FlattenVars, format_atom, is_atom
from .syntax import PropertyMetadata

ROOT_SELECTOR = ":root"
PROPERTY_AT_RULE = "@property"


def _declarations(vars: Mapping[str, Any]) -> str:
    return "".join(f"{name}:{format_atom(value)};" for name, value in vars.items())


def _property_rule(name: str, metadata: PropertyMetadata) -> str:
    inherits = "true" if metadata.inherits else "false"
    return (
        f'{PROPERTY_AT_RULE} {name}{{syntax:"{metadata.syntax}";'
        f"inherits:{inherits};initial-value:{format_atom(metadata.initial_value)};}}"
    )


def get_css(vars: FlattenVars, metadata: Mapping[str, PropertyMetadata] | None = None) -> str:
    """
    Generate CSS text from a flat variable record.

    Args:
        vars: ``--name -> atom`` entries plus ``@media <condition> -> {--name: atom}``
            partitions.
        metadata: Optional ``@property`` metadata, emitted before ``:root``.

    Returns:
        ``@property`` rules, one ``:root{}`` block and one ``@media`` block per
        partition in encounter order. No trailing newline.
    """
    properties = "".join(_property_rule(name, meta) for name, meta in (metadata or {}).items())

    root: dict[str, Any] = {}
    media_css = ""
    for key, value in vars.items():
        if is_atom(value):
            root[key] = value
        else:
            media_css += f"{key}{{{get_css(value)}}}"

    return f"{properties}{ROOT_SELECTOR}{{{_declarations(root)}}}{media_css}"


def get_jss(
    vars: FlattenVars, metadata: Mapping[str, PropertyMetadata] | None = None
) -> dict[str, Any]:
    """
    Convert a flat variable record into a structured style object.

    ``@property <name>`` and ``@media <condition>`` keys are siblings of
    ``:root``; each media key holds a nested ``{":root": {...}}``.
    """
    jss: dict[str, Any] = {}

    for name, meta in (metadata or {}).items():
        jss[f"{PROPERTY_AT_RULE} {name}"] = meta.to_jss()

    root: dict[str, Any] = jss.setdefault(ROOT_SELECTOR, {})
    for key, value in vars.items():
        if is_atom(value):
            root[key] = value
        else:
            jss.setdefault(key, {}).setdefault(ROOT_SELECTOR, {}).update(value)

    return jss


def get_css_from_jss(jss: Mapping[str, Any]) -> str:
    """
    Render a structured style object from :func:`get_jss` back to CSS text.

    Produces the same text :func:`get_css` gives for the record the object
    was built from.
    """
    properties = ""
    root: Mapping[str, Any] = {}
    media_css = ""

    for key, value in jss.items():
        if key.startswith(f"{PROPERTY_AT_RULE} "):
            meta = PropertyMetadata(
                syntax=value["syntax"].strip('"'),
                initial_value=value["initialValue"],
                inherits=value["inherits"],
            )
            properties += _property_rule(key.removeprefix(f"{PROPERTY_AT_RULE} "), meta)
        elif key == ROOT_SELECTOR:
            root = value
        else:
            media_css += f"{key}{{{ROOT_SELECTOR}{{{_declarations(value.get(ROOT_SELECTOR, {}))}}}}}"

    return f"{properties}{ROOT_SELECTOR}{{{_declarations(root)}}}{media_css}"
