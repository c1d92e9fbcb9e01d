"""
Shade scale generation.

Expands one base OKLCH color into a fixed 7-step scale by direct OKLCH
manipulation. Used for palette shorthands, e.g. ``palette.amber`` set to
``oklch(76.9% 0.188 70.08)`` yields ``palette.amber.lightest`` through
``palette.amber.darkest``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from .oklch import OKLCH_PATTERN, format_oklch, parse_oklch

logger = logging.getLogger(__name__)

PALETTE_SEGMENT = "palette"

SHADE_NAMES: tuple[str, ...] = (
    "lightest",
    "lighter",
    "light",
    "base",
    "dark",
    "darker",
    "darkest",
)

# Lightness: extremes pinned, light/dark relative to the base
_LIGHTEST_L = 98.92
_LIGHTER_L = 96.2
_LIGHT_L_OFFSET = 5.9
_DARK_L_OFFSET = -10.3
_DARKER_L = 35.0
_DARKEST_L = 14.92

# Chroma: pinned at the extremes, scaled in between
_LIGHTEST_C = 0.0102
_DARKEST_C = 0.0268
_LIGHTER_C_FACTOR = 0.314
_LIGHT_C_FACTOR = 1.005
_DARK_C_FACTOR = 0.952
_DARKER_C_FACTOR = 0.41

# Hue shifts: warm at both extremes, cool for the mid-darks
_LIGHTEST_H_SHIFT = 11.72
_LIGHTER_H_SHIFT = 25.537
_LIGHT_H_SHIFT = 14.349
_DARK_H_SHIFT = -11.762
_DARKER_H_SHIFT = -24.445
_DARKEST_H_SHIFT = 15.69


def _shift_hue(hue: float, shift: float) -> float:
    return (hue + shift) % 360


def expand_color(base_color: str) -> dict[str, str]:
    """Expand a single oklch color into 7 shades.

    Args:
        base_color: OKLCH color string (e.g. ``oklch(76.9% 0.188 70.08)``).

    Returns:
        Dict keyed by :data:`SHADE_NAMES`, ordered lightest to darkest.
        ``base`` is the input string, not reformatted.

    Raises:
        FormatError: If ``base_color`` is not a parseable oklch string.
    """
    base = parse_oklch(base_color)

    if not _DARKER_L < base.l < _LIGHTER_L:
        logger.warning(
            "Base color %s has lightness %.2f outside (%s, %s); shades will not be monotonic",
            base_color,
            base.l,
            _DARKER_L,
            _LIGHTER_L,
        )

    light_l = base.l + _LIGHT_L_OFFSET
    dark_l = base.l + _DARK_L_OFFSET

    # Offsets that reach a pinned neighbour fall back to the midpoint
    if light_l >= _LIGHTER_L:
        light_l = (base.l + _LIGHTER_L) / 2
    if dark_l <= _DARKER_L:
        dark_l = (base.l + _DARKER_L) / 2

    return {
        "lightest": format_oklch(_LIGHTEST_L, _LIGHTEST_C, _shift_hue(base.h, _LIGHTEST_H_SHIFT)),
        "lighter": format_oklch(
            _LIGHTER_L, base.c * _LIGHTER_C_FACTOR, _shift_hue(base.h, _LIGHTER_H_SHIFT)
        ),
        "light": format_oklch(light_l, base.c * _LIGHT_C_FACTOR, _shift_hue(base.h, _LIGHT_H_SHIFT)),
        "base": base_color,
        "dark": format_oklch(dark_l, base.c * _DARK_C_FACTOR, _shift_hue(base.h, _DARK_H_SHIFT)),
        "darker": format_oklch(
            _DARKER_L, base.c * _DARKER_C_FACTOR, _shift_hue(base.h, _DARKER_H_SHIFT)
        ),
        "darkest": format_oklch(_DARKEST_L, _DARKEST_C, _shift_hue(base.h, _DARKEST_H_SHIFT)),
    }


def should_expand_color(value: Any, path: Sequence[str]) -> bool:
    """Check whether a value is a palette shorthand.

    Args:
        value: Token value.
        path: Path segments of the mapping holding ``value``.

    Returns:
        True if the holding mapping is a ``palette`` and the value is an
        oklch string.
    """
    if not path or path[-1] != PALETTE_SEGMENT:
        return False
    return isinstance(value, str) and bool(OKLCH_PATTERN.match(value))
