"""Template expansion for ``formatString``.

A template is literal text with ``${...}`` placeholders. Expansion is a single
left-to-right pass: ``\\${`` emits a literal ``${``, an unescaped ``${`` has
its body extracted by the brace matcher and evaluated, and every other
character is copied as is.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bindery.bindings.errors import TemplateSyntaxError
from bindery.bindings.parser import resolve_expression
from bindery.bindings.scanner import match_braces
from bindery.bindings.values import stringify_value
from bindery.logging import get_logger

if TYPE_CHECKING:
    from bindery.bindings.context import ResolveContext

__all__ = ["format_string"]

logger = get_logger(__name__)

_ESCAPED_OPEN = "\\${"
_OPEN = "${"


def format_string(template: str, context: ResolveContext) -> str:
    """Expand every placeholder in ``template``.

    An unterminated placeholder consumes the rest of the template as its
    expression body. With ``strict_templates`` enabled it raises instead.

    Args:
        template: Text containing zero or more placeholders.
        context: Active resolution context.

    Returns:
        The expanded text.

    Raises:
        TemplateSyntaxError: On an unterminated placeholder in strict mode.
        RecursionLimitExceeded: If nesting exceeds the configured depth.

    Examples:
        With data model ``{"user": {"name": "Ada"}, "score": 7}``:

        ``format_string("Hello ${/user/name}, score ${add(${/score}, 1)}", ctx)``
        -> ``"Hello Ada, score 8"``

        ``format_string("\\${x}", ctx)`` -> ``"${x}"``
    """
    output: list[str] = []
    index = 0
    length = len(template)

    while index < length:
        if template.startswith(_ESCAPED_OPEN, index):
            output.append(_OPEN)
            index += len(_ESCAPED_OPEN)
            continue

        if template.startswith(_OPEN, index):
            match = match_braces(template, index + len(_OPEN))
            if not match.closed:
                if context.settings.strict_templates:
                    raise TemplateSyntaxError(
                        "Unterminated placeholder",
                        expression=template,
                        position=index,
                    )
                logger.debug("unterminated_placeholder", position=index)
            value = resolve_expression(match.body, context)
            output.append(stringify_value(value))
            index = match.end
            continue

        output.append(template[index])
        index += 1

    return "".join(output)
