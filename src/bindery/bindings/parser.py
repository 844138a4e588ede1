"""Expression parsing and evaluation for ``${...}`` placeholder bodies.

Expression syntax:
- ``${/user/name}`` - absolute path into the data model
- ``${name}`` - relative path into the scope (or data model without a scope)
- ``${add(1, /score)}`` - call of a registry function
- ``${concat("a", ${/b})}`` - arguments may nest further placeholders

Arguments are resolved one at a time, trying in order: nested ``${...}``,
path or identifier lookup (used only when it finds something), quoted string,
``true``/``false``/``null``, empty, number, and finally the raw text itself.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from bindery.bindings.paths import resolve_path
from bindery.bindings.scanner import split_args
from bindery.bindings.values import UNDEFINED, parse_number

if TYPE_CHECKING:
    from bindery.bindings.context import ResolveContext

__all__ = [
    "ExpressionKind",
    "Expression",
    "parse_expression",
    "evaluate_expression",
    "resolve_expression",
    "resolve_argument",
    "unquote",
]


class ExpressionKind(str, Enum):
    """Kind of placeholder expression."""

    EMPTY = "empty"  # ${}
    ABSOLUTE_PATH = "absolute_path"  # ${/user/name}
    RELATIVE_PATH = "relative_path"  # ${name}
    CALL = "call"  # ${add(1, 2)}


@dataclass(frozen=True, slots=True)
class Expression:
    """Parsed placeholder body.

    Attributes:
        raw: Trimmed expression text.
        kind: What the expression refers to.
        path: Path for ABSOLUTE_PATH and RELATIVE_PATH expressions.
        name: Function name for CALL expressions.
        args: Raw, unresolved argument strings for CALL expressions.
    """

    raw: str
    kind: ExpressionKind
    path: str | None = None
    name: str | None = None
    args: tuple[str, ...] = ()


_CALL_PATTERN = re.compile(r"([A-Za-z_]\w*)\((.*)\)", re.ASCII | re.DOTALL)
_IDENTIFIER_START = re.compile(r"[A-Za-z_]")
_KEYWORDS: dict[str, Any] = {"true": True, "false": False, "null": None}


def parse_expression(expression: str) -> Expression:
    """Parse a placeholder body without evaluating it.

    Args:
        expression: Body text between ``${`` and ``}``.

    Returns:
        The parsed Expression. Parsing never fails: anything that is neither
        empty, absolute, nor call-shaped is a relative path.
    """
    trimmed = expression.strip()
    if trimmed.startswith("/"):
        return Expression(raw=trimmed, kind=ExpressionKind.ABSOLUTE_PATH, path=trimmed)
    if not trimmed:
        return Expression(raw=trimmed, kind=ExpressionKind.EMPTY)
    match = _CALL_PATTERN.fullmatch(trimmed)
    if match:
        return Expression(
            raw=trimmed,
            kind=ExpressionKind.CALL,
            name=match.group(1),
            args=tuple(split_args(match.group(2))),
        )
    return Expression(raw=trimmed, kind=ExpressionKind.RELATIVE_PATH, path=trimmed)


def evaluate_expression(expr: Expression, context: ResolveContext) -> Any:
    """Evaluate a parsed expression.

    Raises:
        RecursionLimitExceeded: If nesting exceeds the configured depth.
    """
    inner = context.descend(expr.raw)

    if expr.kind is ExpressionKind.EMPTY:
        return ""
    if expr.kind is not ExpressionKind.CALL:
        return resolve_path(inner.data_model, expr.path or "", inner.scope)

    args = [resolve_argument(arg, inner) for arg in expr.args]
    function = inner.lookup(expr.name or "")
    if function is None:
        return UNDEFINED
    return function(args, inner)


def resolve_expression(expression: str, context: ResolveContext) -> Any:
    """Parse and evaluate a placeholder body.

    Examples:
        ``resolve_expression("/user/name", ctx)`` -> ``"Ada"``
        ``resolve_expression("add(${/score}, 1)", ctx)`` -> ``8``
    """
    return evaluate_expression(parse_expression(expression), context)


def unquote(value: str) -> str:
    """Strip matching quotes and unescape the quote character and backslashes.

    Example:
        The argument text `'it\\'s'` unquotes to `it's`.
    """
    quote = value[0]
    body = value[1:-1]
    return body.replace("\\" + quote, quote).replace("\\\\", "\\")


def resolve_argument(raw: str, context: ResolveContext) -> Any:
    """Resolve one raw argument of a call expression.

    Args:
        raw: Argument text as produced by split_args.
        context: Active resolution context.

    Returns:
        The resolved value; UNDEFINED only for an empty argument or a nested
        expression that resolved to nothing.
    """
    trimmed = raw.strip()

    if trimmed.startswith("${") and trimmed.endswith("}"):
        return resolve_expression(trimmed[2:-1], context)

    if trimmed.startswith("/") or _IDENTIFIER_START.match(trimmed):
        resolved = resolve_expression(trimmed, context)
        if resolved is not UNDEFINED:
            return resolved

    if trimmed[:1] in ("'", '"') and trimmed.endswith(trimmed[0]):
        return unquote(trimmed)

    if trimmed in _KEYWORDS:
        return _KEYWORDS[trimmed]

    if not trimmed:
        return UNDEFINED

    number = parse_number(trimmed)
    if number is not None:
        return number

    return trimmed
