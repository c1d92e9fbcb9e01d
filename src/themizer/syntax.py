"""
@property syntax inference.

Classifies literal CSS values so each custom property can be registered
through the CSS Properties and Values API::

    @property --a0{syntax:"<length>";inherits:false;initial-value:16px;}
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from .oklch import OKLAB_PATTERN
from .units import format_number

# Length units recognised for the <length> syntax
LENGTH_UNITS: tuple[str, ...] = (
    "px",
    "em",
    "rem",
    "vh",
    "vw",
    "vmin",
    "vmax",
    "ch",
    "ex",
    "cm",
    "mm",
    "in",
    "pt",
    "pc",
    "q",
    "cap",
    "ic",
    "lh",
    "rlh",
    "vi",
    "vb",
    "svw",
    "svh",
    "lvw",
    "lvh",
    "dvw",
    "dvh",
)

_NUMBER = r"-?(\d+\.?\d*|\d*\.\d+)"

_LENGTH_PATTERN = re.compile(rf"^{_NUMBER}\s*({'|'.join(LENGTH_UNITS)})$", re.IGNORECASE)
_PERCENTAGE_PATTERN = re.compile(rf"^{_NUMBER}\s*%$")
_TIME_PATTERN = re.compile(rf"^{_NUMBER}\s*(ms|s)$", re.IGNORECASE)
_ANGLE_PATTERN = re.compile(rf"^{_NUMBER}\s*(deg|grad|rad|turn)$", re.IGNORECASE)
_INTEGER_PATTERN = re.compile(r"^-?\d+$")
_NUMBER_PATTERN = re.compile(rf"^{_NUMBER}$")

_COLOR_FUNCTION_PATTERNS: tuple[re.Pattern[str], ...] = (
    OKLAB_PATTERN,
    re.compile(r"^l(ab|ch)\s*\([^)]+\)"),
    re.compile(r"^rgba?\s*\([^)]+\)"),
    re.compile(r"^hsla?\s*\([^)]+\)"),
    re.compile(r"^hwb\s*\([^)]+\)"),
    re.compile(r"^color\s*\([^)]+\)"),
    re.compile(r"^color-mix\s*\([^)]+\)"),
    re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$"),
)

# Functions whose result depends on the element they are used on
_DEPENDENT_FUNCTIONS: tuple[str, ...] = ("var(", "env(", "attr(")

NAMED_COLORS: frozenset[str] = frozenset(
    {
        # Special keywords
        "transparent",
        "currentcolor",
        # CSS Level 1 & 2
        "black",
        "white",
        "red",
        "green",
        "blue",
        "yellow",
        "cyan",
        "magenta",
        "maroon",
        "purple",
        "fuchsia",
        "lime",
        "olive",
        "navy",
        "teal",
        "aqua",
        "silver",
        "gray",
        "grey",
        # CSS Level 3 & 4
        "aliceblue",
        "antiquewhite",
        "aquamarine",
        "azure",
        "beige",
        "bisque",
        "blanchedalmond",
        "blueviolet",
        "brown",
        "burlywood",
        "cadetblue",
        "chartreuse",
        "chocolate",
        "coral",
        "cornflowerblue",
        "cornsilk",
        "crimson",
        "darkblue",
        "darkcyan",
        "darkgoldenrod",
        "darkgray",
        "darkgrey",
        "darkgreen",
        "darkkhaki",
        "darkmagenta",
        "darkolivegreen",
        "darkorange",
        "darkorchid",
        "darkred",
        "darksalmon",
        "darkseagreen",
        "darkslateblue",
        "darkslategray",
        "darkslategrey",
        "darkturquoise",
        "darkviolet",
        "deeppink",
        "deepskyblue",
        "dimgray",
        "dimgrey",
        "dodgerblue",
        "firebrick",
        "floralwhite",
        "forestgreen",
        "gainsboro",
        "ghostwhite",
        "gold",
        "goldenrod",
        "greenyellow",
        "honeydew",
        "hotpink",
        "indianred",
        "indigo",
        "ivory",
        "khaki",
        "lavender",
        "lavenderblush",
        "lawngreen",
        "lemonchiffon",
        "lightblue",
        "lightcoral",
        "lightcyan",
        "lightgoldenrodyellow",
        "lightgray",
        "lightgrey",
        "lightgreen",
        "lightpink",
        "lightsalmon",
        "lightseagreen",
        "lightskyblue",
        "lightslategray",
        "lightslategrey",
        "lightsteelblue",
        "lightyellow",
        "limegreen",
        "linen",
        "mediumaquamarine",
        "mediumblue",
        "mediumorchid",
        "mediumpurple",
        "mediumseagreen",
        "mediumslateblue",
        "mediumspringgreen",
        "mediumturquoise",
        "mediumvioletred",
        "midnightblue",
        "mintcream",
        "mistyrose",
        "moccasin",
        "navajowhite",
        "oldlace",
        "olivedrab",
        "orange",
        "orangered",
        "orchid",
        "palegoldenrod",
        "palegreen",
        "paleturquoise",
        "palevioletred",
        "papayawhip",
        "peachpuff",
        "peru",
        "pink",
        "plum",
        "powderblue",
        "rebeccapurple",
        "rosybrown",
        "royalblue",
        "saddlebrown",
        "salmon",
        "sandybrown",
        "seagreen",
        "seashell",
        "sienna",
        "skyblue",
        "slateblue",
        "slategray",
        "slategrey",
        "snow",
        "springgreen",
        "steelblue",
        "tan",
        "thistle",
        "tomato",
        "turquoise",
        "violet",
        "wheat",
        "whitesmoke",
        "yellowgreen",
    }
)


@dataclass(frozen=True)
class PropertyMetadata:
    """Registration data for one ``@property`` rule."""

    syntax: str
    initial_value: str | int | float
    inherits: bool = False

    def to_jss(self) -> dict[str, Any]:
        """Structured-object form used under ``@property <name>`` keys."""
        return {
            "syntax": f'"{self.syntax}"',
            "inherits": self.inherits,
            "initialValue": self.initial_value,
        }


def _as_text(value: Any) -> str:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return format_number(value)
    return str(value).strip()


def is_color(value: str) -> bool:
    """Check whether a value is a CSS color."""
    if any(pattern.match(value) for pattern in _COLOR_FUNCTION_PATTERNS):
        return True
    return value.lower() in NAMED_COLORS


def infer_syntax(value: str | int | float) -> str:
    """Infer the ``@property`` syntax descriptor for a value.

    Checks run in priority order: color, length, percentage, time, angle,
    integer, number. Anything else uses the universal syntax ``*``.
    """
    text = _as_text(value)

    if not text:
        return "*"
    if is_color(text):
        return "<color>"
    if _LENGTH_PATTERN.match(text):
        return "<length>"
    if _PERCENTAGE_PATTERN.match(text):
        return "<percentage>"
    if _TIME_PATTERN.match(text):
        return "<time>"
    if _ANGLE_PATTERN.match(text):
        return "<angle>"
    if _INTEGER_PATTERN.match(text):
        return "<integer>"
    if _NUMBER_PATTERN.match(text):
        return "<number>"
    return "*"


def is_computationally_independent(value: str | int | float) -> bool:
    """Check whether a value may serve as an ``@property`` initial value.

    Values that reference ``var()``, ``env()`` or ``attr()`` anywhere,
    nested or not, resolve differently per element and are rejected.
    """
    text = _as_text(value)
    return not any(function in text for function in _DEPENDENT_FUNCTIONS)


def create_property_metadata(value: str | int | float) -> PropertyMetadata | None:
    """Create ``@property`` metadata for a value, or None if it is not registrable."""
    if not is_computationally_independent(value):
        return None
    return PropertyMetadata(syntax=infer_syntax(value), initial_value=value)
