"""JavaScript string literal decoding.

:func:`unquote` turns a quoted literal as it appears in source
(``'it\\'s'``) into the string value it denotes (``it's``).
"""
from __future__ import annotations

import re
from typing import Final

__all__ = ("unescape", "unquote")

_ESCAPE: Final = re.compile(
    r"""
    \\
    (?:
        u\{(?P<codepoint>[0-9A-Fa-f]+)\}
      | u(?P<unicode>[0-9A-Fa-f]{4})
      | x(?P<hex>[0-9A-Fa-f]{2})
      | (?P<octal>[0-3][0-7]{0,2}|[4-7][0-7]?)
      | (?P<newline>\r\n|[\n\r\u2028\u2029])
      | (?P<char>.)
    )
    """,
    re.VERBOSE | re.DOTALL,
)

_SINGLE: Final[dict[str, str]] = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

_SURROGATE: Final = re.compile(r"[\ud800-\udfff]")


def _replace(match: re.Match[str]) -> str:
    if match["codepoint"] is not None:
        value = int(match["codepoint"], 16)
        return chr(value) if value <= 0x10FFFF else match.group(0)[1:]
    if match["unicode"] is not None:
        return chr(int(match["unicode"], 16))
    if match["hex"] is not None:
        return chr(int(match["hex"], 16))
    if match["octal"] is not None:
        return chr(int(match["octal"], 8))
    if match["newline"] is not None:
        return ""
    char = match["char"]
    return _SINGLE.get(char, char)


def _join_surrogates(text: str) -> str:
    # \uD83D\uDE00 pairs become one code point, lone surrogates survive
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


def unescape(text: str) -> str:
    """Resolve JavaScript backslash escapes in *text*.

    Unknown escapes stand for the escaped character itself, so malformed
    sequences such as ``\\x`` or ``\\u12`` degrade to ``x`` / ``u12``.
    """
    if "\\" not in text:
        decoded = text
    else:
        decoded = _ESCAPE.sub(_replace, text)
    if _SURROGATE.search(decoded):
        decoded = _join_surrogates(decoded)
    return decoded


def unquote(literal: str) -> str:
    """Strip the surrounding quote marks of *literal* and unescape it."""
    if len(literal) >= 2 and literal[0] in "\"'`" and literal[-1] == literal[0]:
        literal = literal[1:-1]
    return unescape(literal)
