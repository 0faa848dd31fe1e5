"""Tests for the parameter string scanner."""

from chatcmd.core.commands.scanner import (
    ParamToken,
    iter_param_tokens,
    next_param_value,
    scan_param_value,
)


class TestNextParamValue:
    """Tests for next_param_value."""

    def test_empty_string_returns_none(self):
        """Empty params have no token."""
        assert next_param_value("") is None

    def test_whitespace_only_returns_none(self):
        """Whitespace-only params have no token."""
        assert next_param_value("   ") is None

    def test_bare_word(self):
        """Bare words end at the next whitespace."""
        assert next_param_value("value1 value2") == "value1"

    def test_first_double_quoted_param(self):
        """Double-quoted values keep their quotes."""
        print("\n INPUT: '\"value1\" \"value2\"'")
        result = next_param_value('"value1" "value2"')
        print(f" OUTPUT: {result}")
        assert result == '"value1"'

    def test_double_quoted_with_spaces(self):
        assert next_param_value('"a b" "c d"') == '"a b"'

    def test_double_quoted_with_escaped_single_quotes(self):
        params = r'''"value \'1\'" "value \'2\'"'''
        assert next_param_value(params) == r'''"value \'1\'"'''

    def test_double_quoted_with_escaped_double_quotes(self):
        """Escaped double quotes do not close a double-quoted value."""
        params = r'"value \"1\"" "value \"2\""'
        print(f"\n INPUT: {params!r}")
        result = next_param_value(params)
        print(f" OUTPUT: {result!r}")
        assert result == r'"value \"1\""'

    def test_double_quoted_with_newline(self):
        assert next_param_value('"value\n1" "value\n2"') == '"value\n1"'

    def test_first_single_quoted_param(self):
        assert next_param_value("'value1' 'value2'") == "'value1'"

    def test_single_quoted_with_escaped_single_quotes(self):
        """Escaped single quotes do not close a single-quoted value."""
        params = r"""'value \'1\'' 'value \'2\''"""
        assert next_param_value(params) == r"""'value \'1\''"""

    def test_single_quoted_with_escaped_double_quotes(self):
        params = r"""'value \"1\"' 'value \"2\"'"""
        assert next_param_value(params) == r"""'value \"1\"'"""

    def test_single_quoted_with_newline(self):
        assert next_param_value("'value\n1' 'value\n2'") == "'value\n1'"

    def test_first_brace_literal(self):
        assert next_param_value("{value: 'one'} {value: 'two'}") == "{value: 'one'}"

    def test_nested_brace_literal(self):
        """Nested braces are balanced before the literal ends."""
        params = "{v:'1',n:{k:'v'}} {v:'2'}"
        print(f"\n INPUT: {params!r}")
        result = next_param_value(params)
        print(f" OUTPUT: {result!r}")
        assert result == "{v:'1',n:{k:'v'}}"

    def test_complex_brace_literal(self):
        params = "{value: 'one', nested: {key: 'value'}, following: 'value'} {value: 'two'}"
        assert next_param_value(params) == "{value: 'one', nested: {key: 'value'}, following: 'value'}"

    def test_brace_literal_ignores_quotes(self):
        """Quotes inside braces do not affect the brace depth."""
        assert next_param_value('{a: "}"} tail') == '{a: "}'

    def test_leading_whitespace_skipped(self):
        assert next_param_value("  \n value") == "value"

    def test_unterminated_quote_reads_as_word(self):
        """An unclosed quote does not swallow the rest of the line."""
        assert next_param_value('"abc def') == '"abc'

    def test_unbalanced_brace_reads_as_word(self):
        assert next_param_value("{a {b} c") == "{a"


class TestScanParamValue:
    """Tests for scan_param_value and iter_param_tokens."""

    def test_returns_offsets(self):
        """Tokens report absolute offsets into the scanned string."""
        token = scan_param_value("  foo bar")
        assert token == ParamToken(raw="foo", start=2, end=5)

    def test_scan_from_position(self):
        token = scan_param_value("foo bar", 3)
        assert token == ParamToken(raw="bar", start=4, end=7)

    def test_scan_past_end_returns_none(self):
        assert scan_param_value("foo", 3) is None

    def test_is_literal(self):
        assert scan_param_value('"a"').is_literal
        assert scan_param_value("'a'").is_literal
        assert scan_param_value("{a}").is_literal
        assert not scan_param_value("--a").is_literal

    def test_iter_tokens(self):
        """Iterating yields every token with delimiters intact."""
        params = 'a "b c" {d: {e}}\n\'f g\''
        print(f"\n INPUT: {params!r}")
        raws = [token.raw for token in iter_param_tokens(params)]
        print(f" OUTPUT: {raws}")
        assert raws == ["a", '"b c"', "{d: {e}}", "'f g'"]

    def test_adjacent_quoted_tokens(self):
        """A closing quote ends the token even without whitespace after it."""
        raws = [token.raw for token in iter_param_tokens('"a b"c')]
        assert raws == ['"a b"', "c"]

    def test_iter_empty(self):
        assert list(iter_param_tokens("   ")) == []
