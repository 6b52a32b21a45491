# site_spider/crawler/models.py
"""
Data models for pages delivered by the crawl engine.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union
from urllib.parse import SplitResult, urlsplit

from bs4 import BeautifulSoup

from site_spider.config import JAVASCRIPT_TYPES
from site_spider.parser.html_parser import parse_html

__all__ = ("Page", "HTML_TYPES", "ICON_TYPES", "ICON_RELS")

HTML_TYPES = frozenset({"text/html", "application/xhtml+xml"})
ICON_TYPES = frozenset({"image/x-icon", "image/vnd.microsoft.icon"})
ICON_RELS = frozenset({"icon", "favicon"})

_UNPARSED: Any = object()


@dataclass(slots=True)
class Page:
    """One fetched resource: URL, declared content type and raw body.

    ``link_rel`` is the ``rel`` attribute of the ``<link>`` element the crawl
    engine followed to reach this page, if any.
    """

    url: str
    body: Union[bytes, str] = b""
    content_type: Optional[str] = None
    link_rel: Optional[str] = None
    _doc: Any = field(default=_UNPARSED, init=False, repr=False, compare=False)

    @property
    def uri(self) -> SplitResult:
        return urlsplit(self.url)

    @property
    def scheme(self) -> str:
        return self.uri.scheme.lower()

    @property
    def host(self) -> Optional[str]:
        return self.uri.hostname

    @property
    def path(self) -> str:
        return self.uri.path or "/"

    @property
    def mime_type(self) -> str:
        if not self.content_type:
            return ""
        return self.content_type.split(";", 1)[0].strip().lower()

    @property
    def charset(self) -> Optional[str]:
        """``charset`` parameter of the content type, lowercased."""
        if not self.content_type:
            return None
        for param in self.content_type.split(";")[1:]:
            key, sep, value = param.partition("=")
            if sep and key.strip().lower() == "charset":
                return value.strip().strip("\"'").lower() or None
        return None

    @property
    def text(self) -> str:
        """Body decoded with the declared charset, UTF-8 when absent or unknown.

        Bytes invalid in that encoding survive as surrogate escapes.
        """
        if isinstance(self.body, str):
            return self.body
        try:
            return self.body.decode(self.charset or "utf-8", errors="surrogateescape")
        except LookupError:
            return self.body.decode("utf-8", errors="surrogateescape")

    @property
    def is_html(self) -> bool:
        return self.mime_type in HTML_TYPES

    @property
    def is_javascript(self) -> bool:
        return self.mime_type in JAVASCRIPT_TYPES

    @property
    def is_icon(self) -> bool:
        if self.mime_type in ICON_TYPES:
            return True
        if not self.link_rel:
            return False
        return any(token in ICON_RELS for token in self.link_rel.lower().split())

    @property
    def doc(self) -> Optional[BeautifulSoup]:
        """Parsed DOM, or ``None`` for non-HTML pages and unparseable bodies."""
        if self._doc is _UNPARSED:
            self._doc = parse_html(self.text) if self.is_html else None
        return self._doc
