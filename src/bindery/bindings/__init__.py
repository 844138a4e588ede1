"""Dynamic value resolution and template expressions for Bindery.

This package resolves the declarative values that UI descriptors carry
instead of plain literals, and expands the ``${...}`` template language used
by the ``formatString`` function.

DynamicValue Shapes
-------------------
- Literal: any JSON value that is not one of the shapes below
- Data binding: ``{"path": "/user/name"}`` (``path`` must be the only key)
- Function call: ``{"call": "add", "args": [1, {"path": "/score"}]}``

Template Syntax
---------------
- Absolute path: ``${/user/name}``
- Relative path: ``${name}`` (scope first, data model without a scope)
- Function call: ``${add(${/score}, 1)}``
- String literals: ``${concat("a, b", 'c')}``
- Escaped placeholder: ``\\${not evaluated}``

Module Structure
----------------
- values.py: DynamicValue variants, classification, stringify and coercion
- paths.py: Slash-delimited path resolution
- registry.py: Built-in plus caller function overlay
- builtins.py: now, concat, add, formatString
- scanner.py: Brace matcher and argument splitter state machines
- parser.py: Placeholder expression parsing and evaluation
- template.py: formatString template expansion
- context.py: Per-resolution context and recursion guard
- resolver.py: Public resolution entry points
- errors.py: Engine error types

Resolution is synchronous and keeps no state between calls, so it is safe to
run concurrently as long as callers do not mutate the data model mid-call.
"""

from __future__ import annotations

from bindery.bindings.builtins import BUILTIN_FUNCTIONS, iso_timestamp
from bindery.bindings.context import ResolveContext
from bindery.bindings.errors import (
    BindingError,
    RecursionLimitExceeded,
    TemplateSyntaxError,
)
from bindery.bindings.parser import (
    Expression,
    ExpressionKind,
    parse_expression,
    resolve_argument,
    resolve_expression,
)
from bindery.bindings.paths import resolve_path
from bindery.bindings.registry import FunctionRegistry, HostFunction
from bindery.bindings.resolver import (
    DynamicResolver,
    resolve_dynamic_string,
    resolve_dynamic_value,
    resolve_value,
)
from bindery.bindings.scanner import (
    BraceMatch,
    ScanState,
    match_braces,
    split_args,
)
from bindery.bindings.template import format_string
from bindery.bindings.values import (
    UNDEFINED,
    DataBinding,
    DynamicValue,
    FunctionCall,
    LiteralValue,
    Undefined,
    classify,
    is_data_binding,
    is_function_call,
    stringify_value,
)

__all__: list[str] = [
    # Errors
    "BindingError",
    "RecursionLimitExceeded",
    "TemplateSyntaxError",
    # Values
    "UNDEFINED",
    "Undefined",
    "DynamicValue",
    "LiteralValue",
    "DataBinding",
    "FunctionCall",
    "classify",
    "is_data_binding",
    "is_function_call",
    "stringify_value",
    # Paths
    "resolve_path",
    # Registry
    "BUILTIN_FUNCTIONS",
    "FunctionRegistry",
    "HostFunction",
    "iso_timestamp",
    # Parsing
    "BraceMatch",
    "ScanState",
    "match_braces",
    "split_args",
    "Expression",
    "ExpressionKind",
    "parse_expression",
    "resolve_expression",
    "resolve_argument",
    "format_string",
    # Resolution
    "ResolveContext",
    "DynamicResolver",
    "resolve_value",
    "resolve_dynamic_value",
    "resolve_dynamic_string",
]
