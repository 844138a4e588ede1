"""Built-in registry functions.

Every function receives its already-resolved arguments and the active
ResolveContext:

- ``now()``: current UTC instant as ISO-8601 with millisecond precision
- ``concat(...)``: stringify every argument and join them
- ``add(...)``: numeric sum, non-numeric arguments count as 0
- ``formatString(template)``: expand ``${...}`` placeholders in the first argument
"""

from __future__ import annotations

from datetime import UTC, datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from bindery.bindings.template import format_string
from bindery.bindings.values import UNDEFINED, stringify_value, to_number

if TYPE_CHECKING:
    from bindery.bindings.context import ResolveContext

__all__ = [
    "BUILTIN_FUNCTIONS",
    "iso_timestamp",
    "now",
    "concat",
    "add",
    "format_string_function",
]


def iso_timestamp(moment: datetime | None = None) -> str:
    """Format a moment as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.

    Naive datetimes are taken to be UTC already.

    Examples:
        >>> iso_timestamp(datetime(2026, 1, 25, 12, 0, tzinfo=UTC))
        '2026-01-25T12:00:00.000Z'
    """
    if moment is None:
        moment = datetime.now(UTC)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    else:
        moment = moment.astimezone(UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now(args: list[Any], context: ResolveContext) -> str:
    return iso_timestamp()


def concat(args: list[Any], context: ResolveContext) -> str:
    return "".join(stringify_value(arg) for arg in args)


def add(args: list[Any], context: ResolveContext) -> int | float:
    total: int | float = 0
    for arg in args:
        total += to_number(arg)
    return total


def format_string_function(args: list[Any], context: ResolveContext) -> str:
    """Expand the first argument as a template against the active context."""
    template = args[0] if args else UNDEFINED
    return format_string(stringify_value(template), context)


BUILTIN_FUNCTIONS = MappingProxyType(
    {
        "now": now,
        "concat": concat,
        "add": add,
        "formatString": format_string_function,
    }
)
