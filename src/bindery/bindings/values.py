"""DynamicValue classification and value coercion.

A DynamicValue is whatever a host puts in a component property: a plain JSON
literal, a ``{"path": ...}`` data binding, or a ``{"call": ...}`` function
call. ``classify`` is the single place where that shape detection happens;
everything downstream works with the tagged variants.

This module also owns the conversions the engine shares with the built-in
functions: ``stringify_value`` for display output and ``to_number`` /
``parse_number`` for best-effort numeric coercion. Both follow JSON-centric
rendering (``true`` rather than ``True``, ``8`` rather than ``8.0``) so that
values render the same way regardless of which host produced the model.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

__all__ = [
    "UNDEFINED",
    "Undefined",
    "LiteralValue",
    "DataBinding",
    "FunctionCall",
    "DynamicValue",
    "classify",
    "is_data_binding",
    "is_function_call",
    "stringify_value",
    "to_number",
    "parse_number",
]


class Undefined(Enum):
    """Marker type for "no value", distinct from JSON null (``None``)."""

    UNDEFINED = "undefined"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Final = Undefined.UNDEFINED


@dataclass(frozen=True, slots=True)
class LiteralValue:
    """A value passed through unchanged.

    Attributes:
        value: The original value.
    """

    value: Any


@dataclass(frozen=True, slots=True)
class DataBinding:
    """Reference into the data model or scope.

    Attributes:
        path: Slash-delimited path; absolute when it starts with ``/``.
    """

    path: str


@dataclass(frozen=True, slots=True)
class FunctionCall:
    """Invocation of a registry function.

    Attributes:
        call: Function name (case-sensitive).
        args: Unresolved arguments, each itself a DynamicValue.
        return_type: Advisory ``returnType`` metadata; never enforced.
    """

    call: str
    args: tuple[Any, ...] = ()
    return_type: str | None = None


DynamicValue = LiteralValue | DataBinding | FunctionCall


def is_data_binding(value: Any) -> bool:
    """Return True when value is a mapping whose sole key is a string ``path``."""
    return (
        isinstance(value, Mapping)
        and len(value) == 1
        and isinstance(value.get("path"), str)
    )


def is_function_call(value: Any) -> bool:
    """Return True when value is a mapping with a string ``call`` key."""
    return isinstance(value, Mapping) and isinstance(value.get("call"), str)


def classify(value: Any) -> DynamicValue:
    """Classify a host value into its DynamicValue variant.

    ``call`` takes priority: a mapping carrying both ``call`` and ``path`` is
    a function call. A ``path`` mapping with any extra key is a literal.

    Args:
        value: Any JSON-like value.

    Returns:
        FunctionCall, DataBinding, or LiteralValue.

    Examples:
        >>> classify({"path": "/a"})
        DataBinding(path='/a')
        >>> classify({"call": "now"})
        FunctionCall(call='now', args=(), return_type=None)
        >>> classify({"path": "/a", "extra": 1})
        LiteralValue(value={'path': '/a', 'extra': 1})
    """
    if is_function_call(value):
        raw_args = value.get("args")
        if isinstance(raw_args, Sequence) and not isinstance(raw_args, str):
            args = tuple(raw_args)
        else:
            args = ()
        return_type = value.get("returnType")
        return FunctionCall(
            call=value["call"],
            args=args,
            return_type=return_type if isinstance(return_type, str) else None,
        )
    if is_data_binding(value):
        return DataBinding(path=value["path"])
    return LiteralValue(value=value)


# JavaScript Number() grammar, minus surrounding whitespace
_DECIMAL_PATTERN = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII
)
_RADIX_PATTERN = re.compile(r"0(?:([xX])[0-9a-fA-F]+|([oO])[0-7]+|([bB])[01]+)")
_INFINITY_PATTERN = re.compile(r"([+-]?)Infinity")
_EXPONENT_PATTERN = re.compile(r"e([+-])0*(\d)")


def parse_number(text: str) -> int | float | None:
    """Parse a numeric literal, returning None when text is not a number.

    Accepts decimal integers and floats (with optional exponent), ``0x``,
    ``0o`` and ``0b`` radix literals, and ``Infinity``. Integral syntax yields
    an ``int``; anything with a fraction or exponent yields a ``float``.

    Examples:
        >>> parse_number("42")
        42
        >>> parse_number("1.5e3")
        1500.0
        >>> parse_number("0x10")
        16
        >>> parse_number("abc") is None
        True
    """
    text = text.strip()
    if _DECIMAL_PATTERN.fullmatch(text):
        if any(marker in text for marker in ".eE"):
            return float(text)
        return int(text)
    if _RADIX_PATTERN.fullmatch(text):
        return int(text, 0)
    match = _INFINITY_PATTERN.fullmatch(text)
    if match:
        return -math.inf if match.group(1) == "-" else math.inf
    return None


def to_number(value: Any) -> int | float:
    """Coerce a value to a number, mapping anything non-numeric to 0.

    Numbers pass through untouched, booleans count as 0/1, numeric strings
    are parsed (an empty or blank string is 0), and everything else is 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        if not value.strip():
            return 0
        parsed = parse_number(value)
        if parsed is None or (isinstance(parsed, float) and math.isnan(parsed)):
            return 0
        return parsed
    return 0


def _format_number(value: int | float) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    text = repr(value)
    if value.is_integer() and abs(value) < 1e21:
        if "e" not in text:
            return str(int(value))
        # Shortest round-trip digits, zero-padded: 2.0**60 -> 1152921504606847000
        mantissa, exponent = text.split("e")
        sign = "-" if mantissa.startswith("-") else ""
        digits = mantissa.lstrip("-").replace(".", "")
        return sign + digits.ljust(int(exponent) + 1, "0")
    return _EXPONENT_PATTERN.sub(r"e\1\2", text)


def _to_json_value(value: Any) -> Any:
    """Normalize a value so json.dumps renders it the way JSON.stringify does.

    Non-finite floats become null, integral floats lose their ``.0``,
    UNDEFINED is dropped from objects and becomes null inside arrays.
    """
    if value is UNDEFINED:
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer() and abs(value) < 1e21:
            return int(_format_number(value))
        return value
    if isinstance(value, Mapping):
        return {
            key if isinstance(key, str) else stringify_value(key): _to_json_value(item)
            for key, item in value.items()
            if item is not UNDEFINED
        }
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_json_value(item) for item in value]
    return value


def stringify_value(value: Any) -> str:
    """Render a resolved value for display.

    Rules:
    - ``None`` and UNDEFINED render as the empty string
    - strings pass through
    - booleans render as ``true`` / ``false``
    - numbers render without a trailing ``.0`` (``NaN``, ``Infinity`` spelled out)
    - everything else renders as compact JSON, with nested numbers following
      the same rules and non-finite ones rendered as ``null``

    Examples:
        >>> stringify_value(None)
        ''
        >>> stringify_value(True)
        'true'
        >>> stringify_value(8.0)
        '8'
        >>> stringify_value({"a": [1, 2.0]})
        '{"a":[1,2]}'
    """
    if value is None or value is UNDEFINED:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _format_number(value)
    return json.dumps(
        _to_json_value(value),
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
