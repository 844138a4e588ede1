from __future__ import annotations

from typing import Any

from bindery.exceptions.base import BinderyError


class ConfigError(BinderyError):
    """Exception for configuration loading, parsing, and validation errors.

    Raised when configuration cannot be loaded, parsed, or validated. This
    includes YAML parsing failures, Pydantic validation errors, and invalid
    environment variable values.

    Attributes:
        message: Human-readable error message describing the configuration issue.
        field: Optional field name that caused the error (e.g., "engine.max_depth").
        value: Optional value that failed validation (for debugging).

    Examples:
        ```python
        # YAML parsing failure
        raise ConfigError("Failed to parse bindery.yaml: invalid YAML at line 3")

        # Pydantic validation failure
        raise ConfigError(
            "Invalid configuration value",
            field="engine.max_depth",
            value=0,
        )
        ```
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize the ConfigError.

        Args:
            message: Human-readable error message.
            field: Optional field name that caused the error.
            value: Optional value that failed validation.
        """
        self.field = field
        self.value = value
        super().__init__(message)
