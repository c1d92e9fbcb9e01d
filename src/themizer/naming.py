"""
Minified custom-property names.

Names follow ``a0..a9, b0..z9, A0..Z9, aa0..`` so that every original
property path gets a short, deterministic, collision-free replacement.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field

_ALPHABET = string.ascii_lowercase + string.ascii_uppercase
_BASE = len(_ALPHABET)


def index_to_letters(index: int) -> str:
    """Convert an index to a bijective base-52 letter sequence.

    ``0 -> a``, ``25 -> z``, ``26 -> A``, ``51 -> Z``, ``52 -> aa``.
    """
    if index < 0:
        raise ValueError(f"Index must be non-negative, got {index}")

    letters = ""
    num = index
    while num >= 0:
        letters = _ALPHABET[num % _BASE] + letters
        num = num // _BASE - 1
    return letters


def minify_variable_name(counter: int, prefix: str = "") -> str:
    """Generate the minified name for a counter.

    Without a prefix: ``a0, a1, ..., a9, b0, ..., z9, A0, ...``.
    With a prefix the first ten names are ``<prefix>0..<prefix>9`` and the
    letter sequence starts after them: ``<prefix>a0, <prefix>a1, ...``.

    Examples:
        minify_variable_name(0)        # "a0"
        minify_variable_name(10)       # "b0"
        minify_variable_name(260)      # "A0"
        minify_variable_name(10, "t")  # "ta0"
    """
    digit = counter % 10
    index = counter // 10

    if not prefix:
        return f"{index_to_letters(index)}{digit}"
    if index == 0:
        return f"{prefix}{digit}"
    return f"{prefix}{index_to_letters(index - 1)}{digit}"


def get_minified_variable(
    original: str,
    forward: dict[str, str],
    reverse: dict[str, str],
    prefix: str = "",
) -> str:
    """Look up or allocate the minified property for an original property.

    Args:
        original: Original custom property, e.g. ``--ds-tokens-colors-amber``.
        forward: Original -> minified map, updated in place.
        reverse: Minified -> original map, updated in place.
        prefix: Optional name prefix passed to :func:`minify_variable_name`.

    Returns:
        The minified custom property, e.g. ``--a0``. Repeated calls with the
        same ``original`` return the same name.
    """
    existing = forward.get(original)
    if existing is not None:
        return existing

    minified = f"--{minify_variable_name(len(forward), prefix)}"
    forward[original] = minified
    reverse[minified] = original
    return minified


@dataclass
class NameAllocator:
    """Owns the name maps of one compilation.

    Create one per compilation (or share one between compilations whose CSS
    is emitted together) so naming sequences never interfere.
    """

    prefix: str = ""
    forward: dict[str, str] = field(default_factory=dict)
    reverse: dict[str, str] = field(default_factory=dict)

    def allocate(self, original: str) -> str:
        return get_minified_variable(original, self.forward, self.reverse, self.prefix)

    def __len__(self) -> int:
        return len(self.forward)

    def variable_map(self) -> dict[str, str]:
        """Snapshot of the minified -> original map."""
        return dict(self.reverse)
