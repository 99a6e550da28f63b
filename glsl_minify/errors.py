"""
Exceptions raised by the GLSL minifier.

Every error the minifier raises derives from MinifierError so that callers can
catch the whole family at once.
"""


class MinifierError(Exception):
    """Base class for errors raised while minifying shader source."""


class InclusionError(MinifierError):
    """Raised when an @include directive cannot be expanded.

    This covers missing or unreadable files, malformed filename literals and
    circular includes. An inclusion error aborts the whole run.

    Examples:
        >>> raise InclusionError("common.glsl", "inline")
        InclusionError: Failed to include "common.glsl" from inline
    """

    def __init__(
        self, filename: str, requested_by: str | None = None, reason: str = ""
    ):
        """Initialize the exception.

        Args:
            filename: File name as written in the @include directive
            requested_by: Path of the including file, or None for inline source
            reason: Optional description of the underlying failure
        """
        self.filename = filename
        self.requested_by = requested_by or "inline"
        self.reason = reason

        message = f'Failed to include "{filename}" from {self.requested_by}'
        if reason:
            message += f": {reason}"
        super().__init__(message)


class DirectiveSyntaxError(MinifierError):
    """Raised in strict mode for a directive that does not have the expected shape."""

    def __init__(self, directive: str, line: str):
        """Initialize the exception.

        Args:
            directive: The directive keyword, e.g. '@define'
            line: The offending source line
        """
        self.directive = directive
        self.line = line
        super().__init__(f"Malformed {directive} directive: {line.strip()!r}")
