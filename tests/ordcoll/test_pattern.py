"""Tests for the pattern capability behind Collection.match."""

import re

import pytest

from ordcoll.pattern import compile_pattern, find_all


def test_delimited_pattern():
    assert list(find_all("/[0-9]+/", "a12 b3")) == ["12", "3"]
    assert list(find_all("#[a-z]+#", "ab1cd")) == ["ab", "cd"]


def test_delimited_flags():
    assert list(find_all("/abc/i", "ABC abc")) == ["ABC", "abc"]
    assert compile_pattern("/^x/m").flags & re.MULTILINE
    assert compile_pattern("/./s").flags & re.DOTALL
    with pytest.raises(ValueError):
        compile_pattern("/abc/U")


def test_plain_and_compiled_patterns():
    assert list(find_all(r"\d+", "a1b22")) == ["1", "22"]
    compiled = re.compile(r"[a-z]")
    assert compile_pattern(compiled) is compiled
    assert list(find_all(compiled, "a1b")) == ["a", "b"]
    # A leading delimiter without a closing one is a plain expression
    assert list(find_all("/a", "x/a/a")) == ["/a", "/a"]


def test_capture_groups_ignored():
    """Only the full match is reported."""
    assert list(find_all(r"/(\w)(\d)/", "a1 b2")) == ["a1", "b2"]


def test_no_match():
    assert list(find_all("/z+/", "abc")) == []


def test_bracket_delimiters():
    """Bracket delimiters close on their matching bracket."""
    assert list(find_all("{[0-9]+}", "a12 b3")) == ["12", "3"]
    assert list(find_all("([a-z]+)i", "AB1cd")) == ["AB", "cd"]
    assert list(find_all("[x+]", "xx y x")) == ["xx", "x"]
    assert list(find_all("<(a|b)c>", "ac bc cc")) == ["ac", "bc"]
    # Nested brackets stay in the body
    assert list(find_all("((ab)+)", "ababx ab")) == ["abab", "ab"]


def test_any_symbol_delimiter():
    assert list(find_all("|[0-9]+|", "a12 b3")) == ["12", "3"]
    assert list(find_all("+a+", "aa")) == ["a", "a"]
    assert compile_pattern("|abc|i").flags & re.IGNORECASE


def test_escaped_delimiter_in_body():
    assert list(find_all(r"/a\/b/", "a/b ab")) == ["a/b"]


def test_undelimited_lookalikes_are_plain():
    """Patterns that only start with a symbol are plain expressions."""
    # Closing bracket followed by a non-letter
    assert list(find_all("[0-9]+", "a12 b3")) == ["12", "3"]
    assert list(find_all("(a)|(b)", "abc")) == ["a", "b"]
    assert list(find_all(".b", "ab cb")) == ["ab", "cb"]
    # Letters after the closing delimiter are flags
    with pytest.raises(ValueError):
        compile_pattern("/a/b")
    assert compile_pattern("/a/s").pattern == "a"
