"""
Helpers for reference expressions produced by the atomizer.

References look like ``var(--a0, #000)`` and may nest:
``var(--a1, var(--a0, #000))``.
"""

from __future__ import annotations

import re

from .errors import MissingDefaultError

# var(--name[, fallback]) with up to two levels of nested parentheses in the fallback
ATOM_PATTERN = re.compile(
    r"var\((--[\w-]+)(?:,\s*((?:[^()]+|\((?:[^()]+|\([^()]*\))*\))+))?\)"
)

_NESTED_VAR = re.compile(r"^var\(--")
_PROPERTY_NAME = re.compile(r"--[\w-]+")
_NUMBER = re.compile(r"^-?(\d+\.?\d*|\d*\.\d+)$")


def _coerce(text: str) -> str | int | float:
    if not _NUMBER.match(text):
        return text
    number = float(text)
    return int(number) if number.is_integer() and "." not in text else number


def resolve_atom(atom: str) -> str | int | float:
    """Resolve a reference expression to its innermost fallback value.

    Examples:
        resolve_atom("var(--a0, #000)")               # "#000"
        resolve_atom("var(--a0, 16)")                 # 16
        resolve_atom("var(--a1, var(--a0, 8px))")     # "8px"

    Raises:
        MissingDefaultError: If the expression carries no fallback.
    """
    extracted = ""

    for match in ATOM_PATTERN.finditer(atom):
        default = match.group(2)
        if not default:
            continue
        if _NESTED_VAR.match(default):
            return resolve_atom(default)
        extracted = default.strip()

    if not extracted:
        raise MissingDefaultError(
            f"Expected wrapped custom property '{atom}' to have a default value."
        )

    return _coerce(extracted)


def unwrap_atom(wrapped: str) -> str | None:
    """Extract the custom property name from a reference expression.

    Examples:
        unwrap_atom("var(--a0)")      # "--a0"
        unwrap_atom("--a0")           # "--a0"
        unwrap_atom("invalid")        # None
    """
    match = _PROPERTY_NAME.search(wrapped)
    return match.group(0) if match else None
