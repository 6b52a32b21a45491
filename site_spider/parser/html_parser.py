"""HTML parsing utilities for SiteSpider.

Thin helpers over :mod:`bs4` used by the extraction streams:

* :func:`parse_html` — build a DOM from already-decoded markup, or ``None``.
* :func:`iter_comments` — every comment node, in document order.
* :func:`iter_scripts` — inline ``<script>`` bodies filtered by MIME type.
"""
from __future__ import annotations

from collections.abc import Collection, Iterator, Sequence
from typing import Optional

from bs4 import BeautifulSoup, Comment
from bs4.element import Tag

__all__: Sequence[str] = ("parse_html", "iter_comments", "iter_scripts", "script_type")

_PARSER = "html.parser"


def parse_html(markup: str) -> Optional[BeautifulSoup]:
    """Parse *markup*; returns ``None`` when the parser rejects it."""
    try:
        return BeautifulSoup(markup, _PARSER)
    except (AssertionError, ValueError):
        return None


def iter_comments(doc: BeautifulSoup) -> Iterator[str]:
    """Yield the raw text of every ``<!-- ... -->`` node."""
    for node in doc.find_all(string=lambda t: isinstance(t, Comment)):
        yield str(node)


def script_type(tag: Tag) -> Optional[str]:
    """MIME type from the ``type`` attribute, parameters stripped."""
    value = tag.get("type")
    if not isinstance(value, str):
        return None
    return value.split(";", 1)[0].strip().lower()


def iter_scripts(
    doc: BeautifulSoup, types: Collection[str], *, include_untyped: bool = False
) -> Iterator[str]:
    """Yield the text of inline ``<script>`` elements whose type is in *types*."""
    for tag in doc.find_all("script"):
        if not isinstance(tag, Tag):
            continue
        mime = script_type(tag)
        if mime is None:
            if not include_untyped:
                continue
        elif mime not in types:
            continue
        text = tag.string
        yield str(text) if text is not None else ""
