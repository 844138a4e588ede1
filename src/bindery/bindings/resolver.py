"""Dynamic value resolution.

This module turns DynamicValue descriptors into concrete values:
- Data bindings: ``{"path": "/user/name"}`` -> ``data_model["user"]["name"]``
- Function calls: ``{"call": "add", "args": [1, {"path": "/score"}]}`` -> ``3``
- Literals: anything else, returned unchanged

Plain strings are never template-expanded; expansion only happens through an
explicit ``formatString`` call.

Example:
    ```python
    resolver = DynamicResolver(data_model={"user": {"name": "Ada"}, "score": 7})

    resolver.resolve({"path": "/user/name"})  # "Ada"
    resolver.resolve_string(
        {"call": "formatString", "args": ["Hello ${/user/name}"]}
    )  # "Hello Ada"
    resolver.resolve_string("hello ${x}")  # "hello ${x}"
    ```
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from bindery.bindings.context import ResolveContext
from bindery.bindings.paths import resolve_path
from bindery.bindings.registry import HostFunction
from bindery.bindings.template import format_string
from bindery.bindings.values import (
    UNDEFINED,
    DataBinding,
    FunctionCall,
    classify,
    stringify_value,
)
from bindery.config import BinderyConfig, EngineSettings

__all__ = [
    "DynamicResolver",
    "resolve_value",
    "resolve_dynamic_value",
    "resolve_dynamic_string",
]


def _evaluate_call(call: FunctionCall, context: ResolveContext) -> Any:
    inner = context.descend(call.call)
    function = inner.lookup(call.call)
    if function is None:
        return UNDEFINED
    args = [resolve_value(arg, inner) for arg in call.args]
    return function(args, inner)


def resolve_value(value: Any, context: ResolveContext) -> Any:
    """Resolve a DynamicValue within an existing context.

    Host functions that receive unresolved descriptors can use this to
    resolve them with the same data model, scope and registry.
    """
    dynamic = classify(value)
    if isinstance(dynamic, DataBinding):
        return resolve_path(context.data_model, dynamic.path, context.scope)
    if isinstance(dynamic, FunctionCall):
        return _evaluate_call(dynamic, context)
    return dynamic.value


def resolve_dynamic_value(
    value: Any,
    data_model: Mapping[str, Any],
    scope: Mapping[str, Any] | None = None,
    functions: Mapping[str, HostFunction] | None = None,
    *,
    settings: EngineSettings | None = None,
) -> Any:
    """Resolve a DynamicValue to its runtime value.

    Args:
        value: Literal, ``{"path": ...}`` binding, or ``{"call": ...}`` call.
        data_model: Root of absolute paths.
        scope: Root of relative paths for this call.
        functions: Functions layered over the built-ins for this call.
        settings: Engine limits; defaults to EngineSettings().

    Returns:
        The resolved value. Missing paths and unknown functions yield UNDEFINED.

    Raises:
        RecursionLimitExceeded: If nesting exceeds settings.max_depth.
    """
    context = ResolveContext(
        data_model=data_model,
        scope=scope,
        functions=functions,
        settings=settings or EngineSettings(),
    )
    return resolve_value(value, context)


def resolve_dynamic_string(
    value: Any,
    data_model: Mapping[str, Any],
    scope: Mapping[str, Any] | None = None,
    functions: Mapping[str, HostFunction] | None = None,
    *,
    settings: EngineSettings | None = None,
) -> str:
    """Resolve a DynamicValue and render it for display.

    ``None`` and UNDEFINED render as ``""``; see stringify_value for the rest.
    """
    return stringify_value(
        resolve_dynamic_value(value, data_model, scope, functions, settings=settings)
    )


class DynamicResolver:
    """Resolves many values against one data model snapshot.

    Attributes:
        data_model: Root of absolute paths (read only).
        scope: Root of relative paths, if any.
        functions: Caller functions layered over the built-ins.
        settings: Engine limits.

    Example:
        ```python
        resolver = DynamicResolver(data_model=model, functions={"upper": upper})

        # Render each item of a repeated template with its own scope
        for item in model["items"]:
            row = resolver.with_scope(item)
            row.resolve_string({"path": "title"})
        ```
    """

    def __init__(
        self,
        data_model: Mapping[str, Any],
        scope: Mapping[str, Any] | None = None,
        functions: Mapping[str, HostFunction] | None = None,
        settings: EngineSettings | None = None,
    ) -> None:
        """Initialize the DynamicResolver.

        Args:
            data_model: Root of absolute paths.
            scope: Root of relative paths.
            functions: Functions layered over the built-ins.
            settings: Engine limits; defaults to EngineSettings().
        """
        self.data_model = data_model
        self.scope = scope
        self.functions = dict(functions) if functions else None
        self.settings = settings or EngineSettings()

    @classmethod
    def from_config(
        cls,
        config: BinderyConfig,
        data_model: Mapping[str, Any],
        scope: Mapping[str, Any] | None = None,
        functions: Mapping[str, HostFunction] | None = None,
    ) -> DynamicResolver:
        """Build a resolver using the engine settings of a loaded config."""
        return cls(data_model, scope, functions, settings=config.engine)

    def _context(self) -> ResolveContext:
        return ResolveContext(
            data_model=self.data_model,
            scope=self.scope,
            functions=self.functions,
            settings=self.settings,
        )

    def with_scope(self, scope: Mapping[str, Any] | None) -> DynamicResolver:
        """Return a resolver sharing everything but the scope."""
        return DynamicResolver(self.data_model, scope, self.functions, self.settings)

    def resolve(self, value: Any) -> Any:
        """Resolve a DynamicValue to its runtime value."""
        return resolve_value(value, self._context())

    def resolve_string(self, value: Any) -> str:
        """Resolve a DynamicValue and render it for display."""
        return stringify_value(self.resolve(value))

    def resolve_path(self, path: str) -> Any:
        """Resolve a slash-delimited path."""
        return resolve_path(self.data_model, path, self.scope)

    def format_string(self, template: str) -> str:
        """Expand ``${...}`` placeholders in template."""
        return format_string(template, self._context())

    def resolve_mapping(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Resolve every value of a mapping, keeping its keys and order."""
        context = self._context()
        return {key: resolve_value(value, context) for key, value in values.items()}
