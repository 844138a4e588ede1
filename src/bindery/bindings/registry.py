"""Function registry overlay.

The effective registry for a resolution is the built-in functions with the
caller's functions layered on top. It is rebuilt for every call from two
immutable snapshots, so nothing a host registers for one resolution can leak
into another.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from bindery.bindings.builtins import BUILTIN_FUNCTIONS

if TYPE_CHECKING:
    from bindery.bindings.context import ResolveContext

__all__ = ["HostFunction", "FunctionRegistry"]

#: Signature of every registry entry: (resolved_args, context) -> value
HostFunction = Callable[[list[Any], "ResolveContext"], Any]


class FunctionRegistry(Mapping[str, HostFunction]):
    """Read-only overlay of caller functions over a base set.

    Lookups try the overrides first, so a caller entry silently shadows a
    built-in of the same name. Names are case-sensitive.

    Example:
        ```python
        registry = FunctionRegistry({"add": lambda args, ctx: 999})
        registry["add"]([1, 2], ctx)  # 999
        "concat" in registry  # True, built-ins stay available
        ```
    """

    __slots__ = ("_base", "_overrides")

    def __init__(
        self,
        overrides: Mapping[str, HostFunction] | None = None,
        base: Mapping[str, HostFunction] | None = None,
    ) -> None:
        """Initialize the overlay.

        Args:
            overrides: Caller-supplied functions; win over base entries.
            base: Functions underneath the overrides. Defaults to the built-ins.
        """
        self._base = BUILTIN_FUNCTIONS if base is None else MappingProxyType(dict(base))
        self._overrides = MappingProxyType(dict(overrides or {}))

    def __getitem__(self, name: str) -> HostFunction:
        if name in self._overrides:
            return self._overrides[name]
        return self._base[name]

    def __contains__(self, name: object) -> bool:
        return name in self._overrides or name in self._base

    def __iter__(self) -> Iterator[str]:
        yield from self._overrides
        for name in self._base:
            if name not in self._overrides:
                yield name

    def __len__(self) -> int:
        return len(self._overrides) + sum(
            1 for name in self._base if name not in self._overrides
        )

    def __repr__(self) -> str:
        return f"FunctionRegistry({sorted(self)!r})"

    def is_overridden(self, name: str) -> bool:
        """Return True when a caller function shadows the base entry ``name``."""
        return name in self._overrides and name in self._base
