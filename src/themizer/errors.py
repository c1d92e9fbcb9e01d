"""
Error types for themizer token compilation.
"""


class ThemizerError(Exception):
    """Base exception for all themizer errors."""

    def __init__(self, message: str, path: str | None = None):
        self.message = message
        self.path = path
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the token path if available."""
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class FormatError(ThemizerError, ValueError):
    """
    Raised when a color string cannot be parsed.

    Examples:
    - Missing one of the three OKLCH components
    - Non-numeric component text
    """

    pass


class RangeError(ThemizerError, ValueError):
    """
    Raised when a unit range descriptor is unusable.

    Examples:
    - Step of zero or below
    - Start greater than stop
    """

    pass


class UnknownUnitError(ThemizerError, ValueError):
    """Raised when a units shorthand names a unit outside the suffix table."""

    pass


class MissingDefaultError(ThemizerError, ValueError):
    """Raised when a reference expression is resolved but carries no fallback."""

    pass


class UnknownMediaError(ThemizerError, KeyError):
    """Raised when a responsive token names a media absent from the registry."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self._format_message()


class InvalidTokenError(ThemizerError, ValueError):
    """
    Raised when a token value matches none of the token shapes.

    Examples:
    - Empty string or None leaf
    - Boolean leaf
    - List that is neither a responsive tuple nor inside a units shorthand
    """

    pass


class ConfigError(ThemizerError):
    """
    Raised when a project configuration cannot be loaded.

    Examples:
    - Config file missing
    - Config module raising on import
    - Config module defining no theme
    """

    pass
