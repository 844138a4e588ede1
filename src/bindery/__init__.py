"""Bindery - dynamic value resolution and template expressions for declarative UIs.

Bindery resolves the data bindings and function calls that UI descriptors
carry in place of literals, and expands ``${...}`` templates via formatString.
"""

from __future__ import annotations

from bindery.bindings import (
    UNDEFINED,
    DynamicResolver,
    format_string,
    resolve_dynamic_string,
    resolve_dynamic_value,
    resolve_path,
)
from bindery.config import BinderyConfig, EngineSettings, load_config
from bindery.events import ActionEvent, build_action_event
from bindery.exceptions import BinderyError

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "UNDEFINED",
    "ActionEvent",
    "BinderyConfig",
    "BinderyError",
    "DynamicResolver",
    "EngineSettings",
    "build_action_event",
    "format_string",
    "load_config",
    "resolve_dynamic_string",
    "resolve_dynamic_value",
    "resolve_path",
]
