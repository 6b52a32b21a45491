# File: tests/test_javascript.py
"""Tests for the best-effort JavaScript lexer."""
from __future__ import annotations

import pytest

from site_spider.parser.javascript import (
    REGEX_PRECEDING_CHARS,
    JavaScriptLexer,
    scan_comments,
    scan_strings,
)


def strings(source: str) -> list[str]:
    return list(scan_strings(source))


def comments(source: str) -> list[str]:
    return list(scan_comments(source))


# --------------------------------------------------------------------------- #
#                               String literals                               #
# --------------------------------------------------------------------------- #


def test_double_and_single_quoted_strings():
    source = "var x = \"hello\"; // comment\n var y = 'it\\'s ok';"
    assert strings(source) == ["hello", "it's ok"]
    assert comments(source) == [" comment"]


def test_inline_regex_is_skipped():
    assert strings('a.replace(/a\\/b/g, "x")') == ["x"]


def test_regex_with_quote_in_character_class():
    source = "var r = /[/\"]+/g; var s = 'ok';"
    assert strings(source) == ["ok"]


@pytest.mark.parametrize("char", list(REGEX_PRECEDING_CHARS))
def test_regex_allowed_after_punctuation(char):
    # without the regex rule the quote inside /"q/ would open a string
    source = f'{char} /"q/i, "b"'
    assert strings(source) == ["b"]


def test_slash_after_operand_is_division():
    source = 'var a = b / 2, s = "x / y";'
    assert strings(source) == ["x / y"]


def test_division_then_string_with_slash():
    source = 'total = count / size; label = "a/b";'
    assert strings(source) == ["a/b"]


def test_template_literal_is_skipped():
    assert "bar" in strings('`foo ${1+1}` "bar"')


def test_template_literal_with_quotes_and_escaped_backtick():
    assert strings("`it's ${x}` + 'y'") == ["y"]
    assert strings('`a\\`b` + "c"') == ["c"]


def test_nested_template_literal_closes_early():
    # documented limitation: the inner back-tick ends the outer literal
    source = '`foo ${`bar ${1+1}`}` "baz"'
    assert "baz" in strings(source)


def test_empty_strings_are_emitted():
    assert strings("f('', \"\")") == ["", ""]


def test_escapes_are_resolved():
    source = r'var s = "\x41B\u{43}\n\t"; var e = "\uD83D\uDE00";'
    assert strings(source) == ["ABC\n\t", "\U0001F600"]


def test_string_spanning_line_continuation():
    source = 'var s = "first \\\nsecond";'
    assert strings(source) == ["first second"]


def test_strings_keep_source_order():
    source = "call('a', {k: \"b\"}, ['c', `t`, \"d\"])"
    assert strings(source) == ["a", "b", "c", "d"]


# --------------------------------------------------------------------------- #
#                              Malformed input                                #
# --------------------------------------------------------------------------- #


def test_unterminated_string_consumes_rest():
    assert strings("var a = \"ok\"; var b = 'broken; var c = \"lost\";") == ["ok"]


def test_unterminated_template_consumes_rest():
    assert strings('"a" `never closed "b"') == ["a"]


def test_unterminated_regex_consumes_rest():
    assert strings('"a"; x = /never closed "b"') == ["a"]


@pytest.mark.parametrize(
    "source",
    ["", "\\", "'", '"\\', "/", "`", "(/", "[/[", "=/\\", "/*", "//", "`\\", "{ / ", "\udcff'"],
)
def test_garbage_never_raises(source):
    list(scan_strings(source))
    list(scan_comments(source))


# --------------------------------------------------------------------------- #
#                                  Comments                                   #
# --------------------------------------------------------------------------- #


def test_line_and_block_comments_in_order():
    source = "/* block */ x = 1; // line\ny = 2; /*\n * doc\n */"
    assert comments(source) == [" block ", " line", "\n * doc\n "]


def test_crlf_line_comments():
    assert comments("// one\r\n// two") == [" one", " two"]


def test_comment_like_text_inside_string_is_reported():
    assert comments('var u = "http://example.com/";') == ['example.com/";']


def test_unterminated_block_comment_is_not_a_comment():
    assert comments("/* never") == []
    assert comments("/* a // b") == [" b"]


def test_regex_literal_is_not_a_comment():
    assert comments('s.replace(/a\\/b/g, "x")') == []


# --------------------------------------------------------------------------- #
#                                 Determinism                                 #
# --------------------------------------------------------------------------- #


def test_lexer_is_restartable():
    lexer = JavaScriptLexer("f('a'); /* c */ g(\"b\")")
    assert list(lexer.strings()) == list(lexer.strings()) == ["a", "b"]
    assert list(lexer.comments()) == list(lexer.comments()) == [" c "]
