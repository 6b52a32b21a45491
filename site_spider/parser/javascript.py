"""Best-effort JavaScript lexing.

This is **not** a JavaScript parser. :class:`JavaScriptLexer` walks a source
string once, front to back, and recognises just enough syntax to pull out
quoted string literals without being fooled by regex literals or template
literals. Comments are found by a separate pattern pass over the raw source.

Known limitations
-----------------
* A ``/`` starts a regex literal only when the closest non-blank character
  before it is one of ``{ [ ( ; : , =``. Anything else is treated as the
  division operator. This is a heuristic; JavaScript cannot be lexed
  correctly without grammar context.
* Nested template literals inside ``${...}`` close the outer literal early::

      `foo ${`bar ${1+1}`}`

* The comment pass does not know about strings, so ``"http://example.com"``
  reports ``example.com"`` as a line comment.

Malformed input never raises: an unterminated string or template literal,
or a regex literal that is opened but never closed, swallows the rest of the
source and produces nothing for that span.
"""
from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Final, Optional

from site_spider.parser.js_encoding import unquote

__all__ = (
    "JAVASCRIPT_STRING",
    "JAVASCRIPT_INLINE_REGEX",
    "JAVASCRIPT_TEMPLATE_LITERAL",
    "JAVASCRIPT_COMMENT",
    "REGEX_PRECEDING_CHARS",
    "JavaScriptLexer",
    "scan_strings",
    "scan_comments",
)

#: punctuation that may directly precede a regex literal
REGEX_PRECEDING_CHARS: Final[str] = "{[(;:,="

JAVASCRIPT_STRING: Final = re.compile(
    r""" "(?:\\.|[^"\\])*" | '(?:\\.|[^'\\])*' """,
    re.VERBOSE | re.DOTALL,
)

JAVASCRIPT_INLINE_REGEX: Final = re.compile(
    r"""
    [{\[(;:,=]\s*               # preceding punctuation, rules out division
    /
    (?:
        \[(?:\\.|[^\]\\])*\]    # [...] character class
      | \\.                     # escaped character
      | [^/\\\[]                # everything else
    )+
    /[dgimsuvy]*                # flags
    """,
    re.VERBOSE | re.DOTALL,
)

_REGEX_OPENER: Final = re.compile(r"[{\[(;:,=]\s*/(?![/*])")

JAVASCRIPT_TEMPLATE_LITERAL: Final = re.compile(r"`(?:\\.|[^`\\])*`", re.DOTALL)

JAVASCRIPT_COMMENT: Final = re.compile(
    r"//(?P<line>[^\r\n\u2028\u2029]*)|/\*(?P<block>.*?)\*/",
    re.DOTALL,
)

# characters that can begin a string, regex or template literal
_CANDIDATE: Final = re.compile(r"""["'`{\[(;:,=]""")


class JavaScriptLexer:
    """Single-pass string and comment extraction over one source text."""

    __slots__ = ("source",)

    def __init__(self, source: str) -> None:
        self.source = source

    def strings(self) -> Iterator[str]:
        """Yield the unquoted, unescaped value of every string literal."""
        source = self.source
        end = len(source)
        pos = 0
        while pos < end:
            candidate = _CANDIDATE.search(source, pos)
            if candidate is None:
                return
            pos = candidate.start()

            if source[pos] in "\"'":
                literal = JAVASCRIPT_STRING.match(source, pos)
                if literal is None:
                    return
                pos = literal.end()
                yield unquote(literal.group())
                continue

            skipped = self._skip_regex(pos)
            if skipped is None:
                skipped = self._skip_template(pos)
            pos = skipped if skipped is not None else pos + 1

    def comments(self) -> Iterator[str]:
        """Yield the body of every ``//`` and ``/* */`` comment."""
        for match in JAVASCRIPT_COMMENT.finditer(self.source):
            block = match["block"]
            yield block if block is not None else match["line"]

    def _skip_regex(self, pos: int) -> Optional[int]:
        if self.source[pos] not in REGEX_PRECEDING_CHARS:
            return None
        regex = JAVASCRIPT_INLINE_REGEX.match(self.source, pos)
        if regex is not None:
            return regex.end()
        if _REGEX_OPENER.match(self.source, pos):
            return len(self.source)
        return None

    def _skip_template(self, pos: int) -> Optional[int]:
        if self.source[pos] != "`":
            return None
        template = JAVASCRIPT_TEMPLATE_LITERAL.match(self.source, pos)
        return template.end() if template is not None else len(self.source)


def scan_strings(source: str) -> Iterator[str]:
    return JavaScriptLexer(source).strings()


def scan_comments(source: str) -> Iterator[str]:
    return JavaScriptLexer(source).comments()
