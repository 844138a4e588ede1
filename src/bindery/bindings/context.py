"""Per-resolution context.

A ResolveContext is created once per public resolution call and never
mutated. Descending into a nested call, expression or template derives a new
context one level deeper, which is how the recursion guard is enforced
without any shared state.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from bindery.bindings.errors import RecursionLimitExceeded
from bindery.bindings.registry import FunctionRegistry, HostFunction
from bindery.config import EngineSettings
from bindery.logging import get_logger

__all__ = ["ResolveContext"]

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ResolveContext:
    """Everything one resolution reads from.

    Attributes:
        data_model: Root of absolute paths (read only).
        scope: Root of relative paths for this call, if any.
        functions: Caller-supplied functions layered over the built-ins.
        settings: Engine limits.
        depth: Current nesting depth; 0 at the public entry point.
    """

    data_model: Mapping[str, Any]
    scope: Mapping[str, Any] | None = None
    functions: Mapping[str, HostFunction] | None = None
    settings: EngineSettings = field(default_factory=EngineSettings)
    depth: int = 0

    @property
    def registry(self) -> FunctionRegistry:
        """Effective registry: built-ins overlaid with ``functions``."""
        return FunctionRegistry(self.functions)

    def lookup(self, name: str) -> HostFunction | None:
        """Find ``name`` in the effective registry, or None if unregistered."""
        function = self.registry.get(name)
        if function is None:
            logger.debug("unknown_function", name=name)
        return function

    def descend(self, expression: str | None = None) -> ResolveContext:
        """Return a context one level deeper.

        Args:
            expression: What is being entered, for the error message.

        Raises:
            RecursionLimitExceeded: If the new depth exceeds settings.max_depth.
        """
        depth = self.depth + 1
        limit = self.settings.max_depth
        if depth > limit:
            logger.warning(
                "recursion_limit_exceeded",
                depth=depth,
                limit=limit,
                expression=expression,
            )
            raise RecursionLimitExceeded(depth, limit, expression=expression)
        return replace(self, depth=depth)
