"""
Pure-Python OKLCH color conversion.

Parses and formats CSS ``oklch()`` strings and converts between OKLCH and
sRGB through the OKLab matrices. No external color libraries required.
"""

from __future__ import annotations

import math
import re
from typing import NamedTuple

from .errors import FormatError

OKLCH_PATTERN = re.compile(r"^oklch\s*\([^)]+\)$")
OKLAB_PATTERN = re.compile(r"^okl(ch|ab)\s*\([^)]+\)$")

_OKLCH_COMPONENTS = re.compile(
    r"oklch\s*\(\s*(-?[\d.]+)(%?)\s+(-?[\d.]+)\s+(-?[\d.]+)\s*\)"
)


class OklchColor(NamedTuple):
    """OKLCH color with lightness as a percentage (0-100)."""

    l: float  # noqa: E741
    c: float
    h: float


class RgbColor(NamedTuple):
    """sRGB color with 0-255 channels."""

    r: int
    g: int
    b: int


def parse_oklch(color: str) -> OklchColor:
    """Parse an ``oklch()`` color string.

    Args:
        color: CSS text such as ``oklch(76.9% 0.188 70.08)`` or
            ``oklch(0.769 0.188 70.08)``.

    Returns:
        OklchColor with lightness scaled to 0-100.

    Raises:
        FormatError: If the three components cannot be read.
    """
    match = _OKLCH_COMPONENTS.search(color)
    if not match:
        raise FormatError(f"Invalid oklch color format: {color}")

    try:
        lightness = float(match.group(1))
        chroma = float(match.group(3))
        hue = float(match.group(4))
    except ValueError as e:
        raise FormatError(f"Invalid oklch color format: {color}") from e

    if not match.group(2) and lightness <= 1:
        lightness *= 100

    return OklchColor(lightness, chroma, hue)


def _strip_zeros(text: str) -> str:
    return text.rstrip("0").rstrip(".")


def format_oklch(l: float, c: float, h: float) -> str:  # noqa: E741
    """Format OKLCH components as a canonical CSS string.

    Args:
        l: Lightness (0-100).
        c: Chroma.
        h: Hue in degrees.

    Returns:
        CSS ``oklch(<l>% <c> <h>)`` string.
    """
    if l % 1 == 0:
        l_fmt = str(int(l))
    else:
        l_fmt = _strip_zeros(f"{l:.2f}")
        if "." not in l_fmt:
            l_fmt = f"{l:.1f}"

    if c == 0:
        c_fmt = "0"
    elif c < 0.1:
        # Small chroma keeps more precision
        c_fmt = _strip_zeros(f"{c:.4f}")
        parts = c_fmt.split(".")
        if len(parts) > 1 and len(parts[1]) < 2:
            c_fmt = f"{c:.{max(2, 4 - len(parts[0]))}f}"
    else:
        c_fmt = _strip_zeros(f"{c:.3f}")
        parts = c_fmt.split(".")
        if len(parts) > 1 and len(parts[1]) == 1:
            c_fmt += "0"

    if abs(h - round(h)) < 0.001:
        h_fmt = str(int(round(h)))
    else:
        h_fmt = re.sub(r"\.?0+$", "", f"{h:.3f}")

    return f"oklch({l_fmt}% {c_fmt} {h_fmt})"


def _to_srgb(value: float) -> float:
    if value <= 0.0031308:
        return 12.92 * value
    return 1.055 * value ** (1 / 2.4) - 0.055


def _to_linear(channel: float) -> float:
    v = channel / 255
    if v <= 0.04045:
        return v / 12.92
    return ((v + 0.055) / 1.055) ** 2.4


def _to_channel(value: float) -> int:
    # Half-up rounding, then clamp
    return max(0, min(255, math.floor(value * 255 + 0.5)))


def oklch_to_rgb(l: float, c: float, h: float) -> RgbColor:  # noqa: E741
    """Convert OKLCH (lightness 0-100) to sRGB (0-255)."""
    lightness = l / 100
    h_rad = math.radians(h)
    a = c * math.cos(h_rad)
    b = c * math.sin(h_rad)

    l_ = lightness + 0.3963377774 * a + 0.2158037573 * b
    m_ = lightness - 0.1055613458 * a - 0.0638541728 * b
    s_ = lightness - 0.0894841775 * a - 1.291485548 * b

    l3 = l_**3
    m3 = m_**3
    s3 = s_**3

    lr = 4.0767416621 * l3 - 3.3077115913 * m3 + 0.2309699292 * s3
    lg = -1.2684380046 * l3 + 2.6097574011 * m3 - 0.3413193965 * s3
    lb = -0.0041960863 * l3 - 0.7034186147 * m3 + 1.707614701 * s3

    return RgbColor(
        _to_channel(_to_srgb(lr)),
        _to_channel(_to_srgb(lg)),
        _to_channel(_to_srgb(lb)),
    )


def rgb_to_oklch(r: float, g: float, b: float) -> OklchColor:
    """Convert sRGB (0-255) to OKLCH with lightness as a percentage."""
    lr = _to_linear(r)
    lg = _to_linear(g)
    lb = _to_linear(b)

    l_ = math.cbrt(0.4122214708 * lr + 0.5363325363 * lg + 0.0514459929 * lb)
    m_ = math.cbrt(0.2119034982 * lr + 0.6806995451 * lg + 0.1073969566 * lb)
    s_ = math.cbrt(0.0883024619 * lr + 0.2817188376 * lg + 0.6299787005 * lb)

    lightness = 0.2104542553 * l_ + 0.793617785 * m_ - 0.0040720468 * s_
    a = 1.9779984951 * l_ - 2.428592205 * m_ + 0.4505937099 * s_
    b_ = 0.0259040371 * l_ + 0.7827717662 * m_ - 0.808675766 * s_

    chroma = math.hypot(a, b_)
    hue = math.degrees(math.atan2(b_, a)) % 360
    if hue >= 360:
        hue = 0.0

    return OklchColor(lightness * 100, chroma, hue)
