# site_spider/crawler/hooks.py
"""
Callback interface between a crawl engine and the extraction streams.

The crawl engine (or any other page source) hands pages over one at a time;
every registered hook runs to completion before the next page is delivered.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

from site_spider.crawler.models import Page

__all__ = ("PageEvents", "PageHook")

PageHook = Callable[[Page], None]
_PagePredicate = Callable[[Page], bool]
_HookT = TypeVar("_HookT", bound=PageHook)


class PageEvents:
    """Ordered registry of per-page hooks."""

    def __init__(self) -> None:
        self._hooks: List[Tuple[Optional[_PagePredicate], PageHook]] = []
        self.pages_visited: int = 0
        self.logger = logging.getLogger("SiteSpider")

    def every_page(self, callback: _HookT) -> _HookT:
        """Call *callback* with every delivered page."""
        return self._add_hook(None, callback)

    def every_html_page(self, callback: _HookT) -> _HookT:
        """Call *callback* with every HTML page."""
        return self._add_hook(lambda page: page.is_html, callback)

    def every_javascript_page(self, callback: _HookT) -> _HookT:
        """Call *callback* with every standalone script resource."""
        return self._add_hook(lambda page: page.is_javascript, callback)

    every_js_page = every_javascript_page

    def visit_page(self, page: Page) -> None:
        """Deliver *page* to the hooks in registration order.

        A hook that raises stops delivery of this page and the error
        propagates to the caller unchanged.
        """
        self.logger.debug("Visiting %s (%s)", page.url, page.mime_type or "no content type")
        for predicate, hook in self._hooks:
            if predicate is None or predicate(page):
                hook(page)
        self.pages_visited += 1

    def run(self, pages: Iterable[Page]) -> int:
        """Visit every page of *pages*; returns the number delivered."""
        start = time.monotonic()
        count = 0
        self.logger.info("Старт обработки страниц (%d обработчиков)", len(self._hooks))
        for page in pages:
            self.visit_page(page)
            count += 1
        duration = time.monotonic() - start
        self.logger.info(
            "Завершено: %d страниц за %.2f с (%.2f стр/с)",
            count,
            duration,
            count / duration if duration else 0,
        )
        return count

    def _add_hook(self, predicate: Optional[_PagePredicate], callback: _HookT) -> _HookT:
        self._hooks.append((predicate, callback))
        self.logger.debug(
            "Registered hook %s", getattr(callback, "__qualname__", repr(callback))
        )
        return callback
