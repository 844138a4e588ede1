"""Engine error types for binding resolution and template expansion.

Missing data never raises: absent paths, unknown functions and malformed
descriptors resolve to UNDEFINED. The errors here cover the two cases the
engine refuses to tolerate: runaway nesting, and unbalanced placeholders when
a host has opted into strict templates.
"""

from __future__ import annotations

from bindery.exceptions import BinderyError


class BindingError(BinderyError):
    """Base exception for all binding and template errors.

    Attributes:
        message: Human-readable error message.
        expression: The expression or template that failed (if known).
    """

    def __init__(
        self,
        message: str,
        expression: str | None = None,
    ) -> None:
        """Initialize the BindingError.

        Args:
            message: Human-readable error message.
            expression: The expression or template that caused the error.
        """
        self.expression = expression
        super().__init__(message)


class RecursionLimitExceeded(BindingError):
    """Raised when nested calls, expressions or templates exceed max_depth.

    Attributes:
        message: Human-readable error message.
        expression: The expression being entered when the limit tripped.
        depth: The depth that would have been reached.
        limit: The configured maximum depth.
    """

    def __init__(
        self,
        depth: int,
        limit: int,
        expression: str | None = None,
    ) -> None:
        """Initialize the RecursionLimitExceeded error.

        Args:
            depth: The depth that would have been reached.
            limit: The configured maximum depth.
            expression: The expression being entered, if any.
        """
        self.depth = depth
        self.limit = limit
        message = f"Resolution nesting depth {depth} exceeds limit of {limit}"
        if expression:
            message = f"{message} while evaluating: {expression}"
        super().__init__(message, expression=expression)


class TemplateSyntaxError(BindingError):
    """Raised for an unbalanced ``${`` placeholder in strict template mode.

    Attributes:
        message: Human-readable error message.
        expression: The template that failed to parse.
        position: Index of the ``$`` that opened the unterminated placeholder.
    """

    def __init__(
        self,
        message: str,
        expression: str,
        position: int = 0,
    ) -> None:
        """Initialize the TemplateSyntaxError.

        Args:
            message: Human-readable error message.
            expression: The template that failed to parse.
            position: Character position where the error occurred.
        """
        self.position = position
        if position > 0 and expression:
            error_line = f"{expression}\n{' ' * position}^"
            full_message = f"{message} at position {position}:\n{error_line}"
        else:
            full_message = f"{message}: {expression}"
        super().__init__(full_message, expression=expression)
