"""Unit tests for the placeholder and argument scanners.

Each state transition of the quote machine is tested on its own before the
brace matcher and argument splitter are exercised end to end.
"""

from __future__ import annotations

import pytest

from bindery.bindings.scanner import (
    BraceMatch,
    ScanState,
    match_braces,
    quote_transition,
    split_args,
)


class TestQuoteTransition:
    """Test the shared quote state machine."""

    def test_single_quote_enters(self) -> None:
        assert quote_transition(ScanState.SCANNING, "'") is ScanState.IN_SINGLE_QUOTE

    def test_double_quote_enters(self) -> None:
        assert quote_transition(ScanState.SCANNING, '"') is ScanState.IN_DOUBLE_QUOTE

    def test_plain_character_keeps_scanning(self) -> None:
        assert quote_transition(ScanState.SCANNING, "a") is ScanState.SCANNING

    def test_matching_quote_exits(self) -> None:
        assert quote_transition(ScanState.IN_SINGLE_QUOTE, "'") is ScanState.SCANNING
        assert quote_transition(ScanState.IN_DOUBLE_QUOTE, '"') is ScanState.SCANNING

    def test_other_quote_does_not_exit(self) -> None:
        assert (
            quote_transition(ScanState.IN_SINGLE_QUOTE, '"')
            is ScanState.IN_SINGLE_QUOTE
        )
        assert (
            quote_transition(ScanState.IN_DOUBLE_QUOTE, "'")
            is ScanState.IN_DOUBLE_QUOTE
        )

    @pytest.mark.parametrize("char", ["}", "$", "{", "(", ")", ","])
    def test_structural_characters_inside_quotes(self, char: str) -> None:
        assert quote_transition(ScanState.IN_DOUBLE_QUOTE, char) is (
            ScanState.IN_DOUBLE_QUOTE
        )


class TestMatchBraces:
    """Test placeholder body extraction."""

    def test_simple_body(self) -> None:
        assert match_braces("${/a} rest", 2) == BraceMatch(body="/a", end=5)

    def test_nested_placeholder_raises_depth(self) -> None:
        source = "${add(${/score}, 1)}!"
        match = match_braces(source, 2)
        assert match.body == "add(${/score}, 1)"
        assert source[match.end :] == "!"

    def test_doubly_nested(self) -> None:
        source = "${a(${b(${/c})})}"
        match = match_braces(source, 2)
        assert match.body == "a(${b(${/c})})"
        assert match.end == len(source)

    def test_closing_brace_in_single_quotes_ignored(self) -> None:
        match = match_braces("${concat('}', /a)}", 2)
        assert match.body == "concat('}', /a)"
        assert match.closed

    def test_placeholder_open_in_quotes_ignored(self) -> None:
        match = match_braces('${concat("${", /a)} tail', 2)
        assert match.body == 'concat("${", /a)'

    def test_escape_inside_quotes_consumes_next(self) -> None:
        """An escaped quote does not end the quoted text."""
        match = match_braces(r"${concat('it\'s }', /a)}", 2)
        assert match.body == r"concat('it\'s }', /a)"

    def test_backslash_outside_quotes_is_plain(self) -> None:
        match = match_braces(r"${a\}b", 2)
        assert match.body == "a\\"
        assert match.end == 5

    def test_start_offset_inside_template(self) -> None:
        source = "Hi ${/name}."
        match = match_braces(source, 5)
        assert match.body == "/name"
        assert source[match.end :] == "."

    def test_unterminated_swallows_rest(self) -> None:
        match = match_braces("${/a and more", 2)
        assert match == BraceMatch(body="/a and more", end=13, closed=False)

    def test_unterminated_nested(self) -> None:
        match = match_braces("${a(${/b}", 2)
        assert not match.closed
        assert match.body == "a(${/b}"

    def test_unterminated_quote(self) -> None:
        match = match_braces("${concat('abc}", 2)
        assert not match.closed
        assert match.body == "concat('abc}"

    def test_empty_body(self) -> None:
        assert match_braces("${}", 2) == BraceMatch(body="", end=3)


class TestSplitArgs:
    """Test top-level argument splitting."""

    def test_quotes_and_nested_parens_do_not_split(self) -> None:
        assert split_args('"a,b", foo(1,2)') == ['"a,b"', "foo(1,2)"]

    def test_empty_list(self) -> None:
        assert split_args("") == []
        assert split_args("   ") == []

    def test_arguments_are_trimmed(self) -> None:
        assert split_args("  1 ,  /a  ,x ") == ["1", "/a", "x"]

    def test_single_quotes(self) -> None:
        assert split_args("'a, b', 'c'") == ["'a, b'", "'c'"]

    def test_escaped_quote_copied_verbatim(self) -> None:
        assert split_args(r"'it\'s, ok', 2") == [r"'it\'s, ok'", "2"]

    def test_nested_placeholder_call(self) -> None:
        assert split_args("${add(1, 2)}, 3") == ["${add(1, 2)}", "3"]

    def test_deep_nesting(self) -> None:
        assert split_args("a(b(1, 2), c(3)), d") == ["a(b(1, 2), c(3))", "d"]

    def test_unbalanced_closing_paren_clamps_depth(self) -> None:
        assert split_args("a), b") == ["a)", "b"]

    def test_trailing_empty_argument_dropped(self) -> None:
        assert split_args("1,") == ["1"]

    def test_interior_empty_arguments_kept(self) -> None:
        assert split_args("1,,2") == ["1", "", "2"]
        assert split_args(",1") == ["", "1"]

    def test_backslash_at_end_of_quote(self) -> None:
        assert split_args("'abc\\") == ["'abc\\"]
