"""
Unit sequence expansion.

Expands a ``{unit_type: [start, step, stop]}`` shorthand into dense mappings
of numeric keys to CSS length/percentage strings::

    expand_units({"rem": [0, 0.25, 1]})
    # {"rem": {0: "0rem", 0.25: "0.25rem", 0.5: "0.5rem", 0.75: "0.75rem", 1: "1rem"}}
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from .errors import RangeError, UnknownUnitError

# Unit type -> CSS suffix
UNIT_SUFFIXES: Mapping[str, str] = MappingProxyType(
    {
        "rem": "rem",
        "em": "em",
        "px": "px",
        "percentage": "%",
        "vh": "vh",
        "vw": "vw",
        "vmin": "vmin",
        "vmax": "vmax",
        "ch": "ch",
        "ex": "ex",
    }
)

# Keys are rounded to this many decimals to absorb binary float drift
_PRECISION = 10
_STEP_TOLERANCE = 1e-9


def format_number(value: float) -> str:
    """Render a number the way CSS authors write it.

    Integral floats drop the fraction (``2.0`` -> ``2``) and exponent
    notation is never used (``1e-05`` -> ``0.00001``).
    """
    if not isinstance(value, float):
        return str(value)
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def _as_key(value: float) -> int | float:
    key = round(value, _PRECISION)
    if float(key).is_integer():
        return int(key)
    return key


def is_unit_type(value: Any) -> bool:
    """Check whether a key names a unit in :data:`UNIT_SUFFIXES`."""
    return isinstance(value, str) and value in UNIT_SUFFIXES


def _is_finite_number(value: Any) -> bool:
    return (
        isinstance(value, int | float)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def is_units_config(value: Any) -> bool:
    """Check whether a value is a units shorthand.

    A units shorthand is a mapping whose keys are all unit types and whose
    values are ``[start, step, stop]`` triples of finite numbers.
    """
    if not isinstance(value, Mapping):
        return False

    for key, triple in value.items():
        if not is_unit_type(key):
            return False
        if isinstance(triple, str | bytes) or not isinstance(triple, Sequence):
            return False
        if len(triple) != 3 or not all(_is_finite_number(item) for item in triple):
            return False

    return True


def expand_unit_tuple(triple: Sequence[float], suffix: str) -> dict[int | float, str]:
    """Expand one ``[start, step, stop]`` triple into a suffixed sequence.

    Values are computed as ``start + i * step`` over an integer step count,
    never by repeated addition. ``stop`` is always included, even when the
    range is not an exact multiple of ``step``.

    Args:
        triple: ``(start, step, stop)``.
        suffix: CSS suffix appended to every value.

    Returns:
        Dict mapping numeric keys to ``"<key><suffix>"`` strings.

    Raises:
        RangeError: If ``step <= 0`` or ``start > stop``.
    """
    start, step, stop = triple

    if step <= 0:
        raise RangeError(f"Step must be positive, got {format_number(step)}")

    if start > stop:
        raise RangeError(
            f"From ({format_number(start)}) must be less than or equal to "
            f"To ({format_number(stop)})"
        )

    count = math.floor((stop - start) / step + _STEP_TOLERANCE)

    result: dict[int | float, str] = {}
    for i in range(count + 1):
        key = _as_key(start + i * step)
        result[key] = f"{format_number(key)}{suffix}"

    last = _as_key(stop)
    if last not in result:
        result[last] = f"{format_number(last)}{suffix}"

    return result


def expand_units(config: Mapping[str, Sequence[float]]) -> dict[str, dict[int | float, str]]:
    """Expand a units configuration into value sequences per unit type.

    Args:
        config: Mapping of unit type to ``[start, step, stop]``.

    Returns:
        Mapping of unit type to its expanded sequence.

    Raises:
        UnknownUnitError: If a key is not in :data:`UNIT_SUFFIXES`.
    """
    result: dict[str, dict[int | float, str]] = {}

    for unit_type, triple in config.items():
        suffix = UNIT_SUFFIXES.get(unit_type)
        if suffix is None:
            raise UnknownUnitError(f"Unknown unit type: {unit_type}")
        result[unit_type] = expand_unit_tuple(triple, suffix)

    return result
