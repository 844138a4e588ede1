"""Bindery exception hierarchy.

All exceptions can be imported from this package:
    from bindery.exceptions import BinderyError, ConfigError

Engine-specific errors (recursion guard, strict template syntax) live in
bindery.bindings.errors and also derive from BinderyError.
"""

from __future__ import annotations

# Base exception
from bindery.exceptions.base import BinderyError

# Configuration exceptions
from bindery.exceptions.config import ConfigError

__all__ = [
    # Base
    "BinderyError",
    # Config
    "ConfigError",
]
