"""
Validation helpers for prefixes, token keys and output paths.

These run before compilation; the compiler itself does not re-validate
identifier shape.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

# Browser limit for custom property names
MAX_CSS_IDENTIFIER_LENGTH = 255

# Letters, digits, hyphens and underscores; leading digits allowed for numeric keys
CSS_IDENTIFIER_PATTERN = re.compile(r"^[\w-]+$")

# Parent traversals beyond this depth are treated as a mistake
_MAX_PARENT_TRAVERSAL = 3


def is_valid_css_identifier(identifier: str | int) -> bool:
    """Check whether a token key or prefix is a valid CSS identifier.

    Integers are accepted as their decimal text, so ``{16: "16px"}`` is fine.
    """
    if isinstance(identifier, bool):
        return False
    text = str(identifier) if isinstance(identifier, int) else identifier
    if not text or not isinstance(text, str):
        return False
    if len(text) > MAX_CSS_IDENTIFIER_LENGTH:
        return False
    return bool(CSS_IDENTIFIER_PATTERN.match(text))


def validate_prefix(prefix: str) -> str:
    """Validate a custom property prefix.

    Returns:
        The prefix unchanged.

    Raises:
        ValueError: If the prefix is empty or not a CSS identifier.
    """
    if not prefix:
        raise ValueError("Prefix cannot be empty")

    if not is_valid_css_identifier(prefix):
        raise ValueError(
            f'Invalid CSS identifier for prefix: "{prefix}". '
            "Can only contain letters, digits, hyphens, and underscores."
        )
    return prefix


def is_plain_object(value: Any) -> bool:
    """Check whether a value is a mapping (not a list, scalar or None)."""
    return isinstance(value, Mapping)


def validate_plain_object(value: Any) -> Mapping[Any, Any]:
    """Return ``value`` if it is a mapping, else raise ValueError."""
    if not is_plain_object(value):
        raise ValueError("Value must be a plain object (not null, array, or primitive)")
    return value


def validate_tokens(tokens: Mapping[Any, Any], path: str = "") -> None:
    """Recursively check that every token key is a CSS identifier.

    Raises:
        ValueError: Naming the dotted path of the first invalid key.
    """
    for key, value in tokens.items():
        current_path = f"{path}.{key}" if path else str(key)

        if not is_valid_css_identifier(key):
            raise ValueError(f'Invalid token key at "{current_path}": must be a valid CSS identifier')

        if is_plain_object(value):
            validate_tokens(value, current_path)
        elif isinstance(value, list | tuple):
            # Responsive tuples carry a media map
            for index, item in enumerate(value):
                if is_plain_object(item):
                    validate_tokens(item, f"{current_path}[{index}]")


def validate_file_path(file_path: str) -> str:
    """Guard a user-supplied output path against accidental mistakes.

    Returns:
        The path unchanged.

    Raises:
        ValueError: If the path is empty, contains NUL bytes, or climbs more
            than three parent directories.
    """
    if not file_path or not isinstance(file_path, str):
        raise ValueError("File path must be a non-empty string")

    if "\0" in file_path:
        raise ValueError("File path cannot contain null bytes")

    if ".." in file_path:
        depth = 0
        min_depth = 0
        for segment in file_path.replace("\\", "/").split("/"):
            if segment == "..":
                depth -= 1
                min_depth = min(min_depth, depth)
            elif segment and segment != ".":
                depth += 1

        if min_depth < -_MAX_PARENT_TRAVERSAL:
            raise ValueError(
                "File path cannot traverse more than 3 parent directories "
                "(possible directory traversal)"
            )
    return file_path
