"""Character scanners for placeholder bodies and argument lists.

Both scanners share one quote state machine:

    SCANNING --'--> IN_SINGLE_QUOTE --'--> SCANNING
    SCANNING --"--> IN_DOUBLE_QUOTE --"--> SCANNING

Inside a quote a backslash consumes the following character, and structural
characters (``${``, ``}``, ``(``, ``)``, ``,``) are plain text. Scanning is
strictly left to right with no backtracking.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "ScanState",
    "BraceMatch",
    "quote_transition",
    "match_braces",
    "split_args",
]


class ScanState(str, Enum):
    """State of the quote-tracking scanner."""

    SCANNING = "scanning"
    IN_SINGLE_QUOTE = "in_single_quote"
    IN_DOUBLE_QUOTE = "in_double_quote"


_OPENING_QUOTES: dict[str, ScanState] = {
    "'": ScanState.IN_SINGLE_QUOTE,
    '"': ScanState.IN_DOUBLE_QUOTE,
}
_CLOSING_QUOTES: dict[ScanState, str] = {
    ScanState.IN_SINGLE_QUOTE: "'",
    ScanState.IN_DOUBLE_QUOTE: '"',
}


def quote_transition(state: ScanState, char: str) -> ScanState:
    """Return the quote state after reading ``char`` in ``state``.

    Escapes are not handled here; callers skip the escaped character before
    asking for a transition.

    Examples:
        >>> quote_transition(ScanState.SCANNING, "'")
        <ScanState.IN_SINGLE_QUOTE: 'in_single_quote'>
        >>> quote_transition(ScanState.IN_SINGLE_QUOTE, '"')
        <ScanState.IN_SINGLE_QUOTE: 'in_single_quote'>
        >>> quote_transition(ScanState.IN_DOUBLE_QUOTE, '"')
        <ScanState.SCANNING: 'scanning'>
    """
    if state is ScanState.SCANNING:
        return _OPENING_QUOTES.get(char, ScanState.SCANNING)
    if char == _CLOSING_QUOTES[state]:
        return ScanState.SCANNING
    return state


@dataclass(frozen=True, slots=True)
class BraceMatch:
    """Result of scanning one placeholder body.

    Attributes:
        body: Text between ``${`` and its matching ``}`` (exclusive).
        end: Index just past the matching ``}``, or ``len(source)`` when the
            placeholder was never closed.
        closed: False when the scan hit the end of the source first.
    """

    body: str
    end: int
    closed: bool = True


def match_braces(source: str, start: int) -> BraceMatch:
    """Find the body of a placeholder whose ``${`` ends just before ``start``.

    Nested ``${`` raise the depth and ``}`` lowers it; depth 0 ends the body.
    Quoted text is skipped. An unterminated placeholder swallows the rest of
    the source rather than failing.

    Args:
        source: The full template.
        start: Index of the first character after ``${``.

    Returns:
        BraceMatch describing the body and where scanning resumes.

    Examples:
        >>> match_braces("${add(${/a}, 1)} tail", 2)
        BraceMatch(body='add(${/a}, 1)', end=16, closed=True)
        >>> match_braces("${concat('}', /a)}", 2)
        BraceMatch(body="concat('}', /a)", end=18, closed=True)
        >>> match_braces("${/a", 2)
        BraceMatch(body='/a', end=4, closed=False)
    """
    state = ScanState.SCANNING
    depth = 1
    index = start
    length = len(source)

    while index < length:
        char = source[index]

        if state is not ScanState.SCANNING:
            if char == "\\":
                index += 2
                continue
            state = quote_transition(state, char)
            index += 1
            continue

        if char in _OPENING_QUOTES:
            state = quote_transition(state, char)
            index += 1
            continue

        if char == "$" and source[index + 1 : index + 2] == "{":
            depth += 1
            index += 2
            continue

        if char == "}":
            depth -= 1
            if depth == 0:
                return BraceMatch(body=source[start:index], end=index + 1)

        index += 1

    return BraceMatch(body=source[start:], end=length, closed=False)


def split_args(raw: str) -> list[str]:
    """Split a raw argument list at top-level commas.

    Commas inside quotes or nested parentheses do not split. Escaped
    characters inside quotes are copied verbatim. Each argument is trimmed;
    a blank list yields no arguments and a trailing empty argument is dropped.

    Examples:
        >>> split_args('"a,b", foo(1,2)')
        ['"a,b"', 'foo(1,2)']
        >>> split_args("")
        []
        >>> split_args(" 1 , (2, 3), ")
        ['1', '(2, 3)']
    """
    args: list[str] = []
    current: list[str] = []
    state = ScanState.SCANNING
    depth = 0
    index = 0
    length = len(raw)

    while index < length:
        char = raw[index]

        if state is not ScanState.SCANNING:
            current.append(char)
            if char == "\\":
                current.append(raw[index + 1 : index + 2])
                index += 2
                continue
            state = quote_transition(state, char)
            index += 1
            continue

        if char in _OPENING_QUOTES:
            state = quote_transition(state, char)
            current.append(char)
        elif char == "(":
            depth += 1
            current.append(char)
        elif char == ")":
            depth = max(0, depth - 1)
            current.append(char)
        elif char == "," and depth == 0:
            args.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        index += 1

    tail = "".join(current).strip()
    if tail:
        args.append(tail)
    return args
