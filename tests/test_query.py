"""Test suite for query construction."""

import re

import pytest

from docsearch.search.errors import InvalidQueryError
from docsearch.search.query import build_query, same_query


class TestBuildQuery:
    """Test compiling user input into patterns."""

    def test_literal_mode_escapes_special_characters(self):
        """Literal mode treats regex syntax as plain text."""
        query = build_query("a.b(c)*", use_regex=False)
        assert query.findall("a.b(c)* axb(c)") == ["a.b(c)*"]

    def test_literal_mode_matches_every_occurrence(self):
        """Literal mode finds exactly the literal occurrences."""
        query = build_query("[x]", use_regex=False)
        assert [m.start() for m in query.finditer("[x] x [x]")] == [0, 6]

    def test_case_insensitive_by_default(self):
        """Matching ignores case unless asked not to."""
        query = build_query("Foo")
        assert query.findall("foo FOO Foo") == ["foo", "FOO", "Foo"]

    def test_case_sensitive_flag(self):
        """Case-sensitive queries only match the exact case."""
        query = build_query("Foo", case_sensitive=True)
        assert query.findall("foo FOO Foo") == ["Foo"]

    def test_regex_mode_compiles_pattern(self):
        """Regex mode uses the input as a pattern."""
        query = build_query(r"f\w+", use_regex=True)
        assert query.findall("foo bar fizz") == ["foo", "fizz"]

    def test_regex_mode_anchors_at_line_boundaries(self):
        """``^`` matches at the start of every line."""
        query = build_query("^x", use_regex=True)
        assert len(query.findall("x1\nx2\ny3")) == 2

    def test_invalid_regex_raises(self):
        """Malformed patterns are reported with the offending input."""
        with pytest.raises(InvalidQueryError) as exc_info:
            build_query("(", use_regex=True)
        assert exc_info.value.input_text == "("
        assert exc_info.value.reason
        assert isinstance(exc_info.value.__cause__, re.error)

    def test_invalid_regex_is_fine_in_literal_mode(self):
        """The same input is valid when taken literally."""
        assert build_query("(", use_regex=False).findall("f(x)") == ["("]


class TestSameQuery:
    """Test query equality."""

    def test_same_source_and_flags(self):
        """Identical input compiles to equal queries."""
        assert same_query(build_query("foo"), build_query("foo"))

    def test_flags_matter(self):
        """Case sensitivity distinguishes otherwise equal queries."""
        assert not same_query(build_query("foo"), build_query("foo", case_sensitive=True))

    def test_none(self):
        """``None`` only equals ``None``."""
        assert same_query(None, None)
        assert not same_query(build_query("foo"), None)
