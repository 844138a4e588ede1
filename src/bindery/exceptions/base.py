from __future__ import annotations


class BinderyError(Exception):
    """Base exception class for all Bindery-specific errors.

    This is the root of the Bindery exception hierarchy. All custom exceptions
    in Bindery inherit from this class, so hosts can catch every engine error
    at their boundary while letting system exceptions propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            text = resolve_dynamic_string(descriptor, data_model)
        except BinderyError as e:
            logger.error("binding_failed", error=e.message)
            text = ""
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the BinderyError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
