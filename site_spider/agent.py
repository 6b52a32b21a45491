# File: site_spider/agent.py
"""Extraction streams built on top of the crawl engine's page hooks.

Every ``every_*`` method registers a sink and returns it unchanged, so it
can also be used as a decorator::

    agent = Agent()

    @agent.every_host
    def on_host(host):
        print("Spidering", host)

    agent.run(pages)
"""
from __future__ import annotations

from typing import Callable, List, Optional, Set, TypeVar

from site_spider.cert import Cert
from site_spider.config import AgentConfig, ProxyConfig
from site_spider.crawler.hooks import PageEvents
from site_spider.crawler.models import Page
from site_spider.crawler.sessions import SessionRegistry
from site_spider.parser.html_parser import iter_comments, iter_scripts
from site_spider.parser.javascript import scan_comments, scan_strings

__all__ = ["Agent"]

#: schemes whose pages carry a TLS peer certificate
ENCRYPTED_SCHEMES = frozenset({"https"})

_T = TypeVar("_T")
_Sink = Callable[[_T], None]
_SinkT = TypeVar("_SinkT", bound=Callable[..., None])


class Agent(PageEvents):
    """Deduplicating and lexical extraction streams over a page stream."""

    def __init__(
        self,
        config: Optional[AgentConfig] = None,
        *,
        sessions: Optional[SessionRegistry] = None,
    ) -> None:
        super().__init__()
        self.config = config if config is not None else AgentConfig()
        self.sessions = sessions if sessions is not None else SessionRegistry()

        #: unique host names seen so far; ``None`` until :meth:`every_host`
        self.visited_hosts: Optional[Set[str]] = None
        #: unique certificates in first-seen order; ``None`` until :meth:`every_cert`
        self.collected_certs: Optional[List[Cert]] = None

        self._host_sinks: List[_Sink[str]] = []
        self._cert_sinks: List[_Sink[Cert]] = []
        self._seen_serials: Set[int] = set()

    # ------------------------------------------------------------------ #
    # Settings handed to the crawl engine                                #
    # ------------------------------------------------------------------ #

    @property
    def proxy(self) -> Optional[ProxyConfig]:
        return self.config.proxy

    @property
    def user_agent(self) -> Optional[str]:
        return self.config.resolved_user_agent

    @property
    def referer(self) -> Optional[str]:
        return self.config.referer

    # ------------------------------------------------------------------ #
    # Dedup emitters                                                     #
    # ------------------------------------------------------------------ #

    def every_host(self, callback: _SinkT) -> _SinkT:
        """Pass every newly seen host name to *callback*.

        All host sinks share :attr:`visited_hosts`; a sink registered later
        only hears about hosts discovered after its registration.
        """
        if self.visited_hosts is None:
            self.visited_hosts = set()
            self.every_page(self._discover_host)
        self._host_sinks.append(callback)
        return callback

    def every_cert(self, callback: _SinkT) -> _SinkT:
        """Pass every unique TLS peer certificate to *callback*.

        Certificates are told apart by serial number only, so two
        certificates from different issuers sharing a serial count as one.
        """
        if self.collected_certs is None:
            self.collected_certs = []
            self.every_page(self._discover_cert)
        self._cert_sinks.append(callback)
        return callback

    def _discover_host(self, page: Page) -> None:
        assert self.visited_hosts is not None
        host = page.host
        if host is None or host in self.visited_hosts:
            return
        self.visited_hosts.add(host)
        self.logger.debug("New host: %s", host)
        for sink in self._host_sinks:
            sink(host)

    def _discover_cert(self, page: Page) -> None:
        assert self.collected_certs is not None
        if page.scheme not in ENCRYPTED_SCHEMES:
            return
        cert = self.sessions.peer_cert(page.url)
        if cert is None or cert.serial in self._seen_serials:
            return
        self._seen_serials.add(cert.serial)
        self.collected_certs.append(cert)
        self.logger.debug("New certificate %x for %s (CN=%s)", cert.serial, page.host, cert.common_name)
        for sink in self._cert_sinks:
            sink(cert)

    # ------------------------------------------------------------------ #
    # Classifiers and extractors                                         #
    # ------------------------------------------------------------------ #

    def every_favicon(self, callback: _SinkT) -> _SinkT:
        """Pass every icon page (by content type or ``rel`` link) to *callback*."""

        def _favicon(page: Page) -> None:
            if page.is_icon:
                callback(page)

        self.every_page(_favicon)
        return callback

    def every_html_comment(self, callback: _SinkT) -> _SinkT:
        """Pass every non-empty HTML comment, whitespace stripped."""

        def _html_comments(page: Page) -> None:
            doc = page.doc
            if doc is None:
                return
            for comment in iter_comments(doc):
                text = comment.strip()
                if text:
                    callback(text)

        self.every_html_page(_html_comments)
        return callback

    def every_javascript(self, callback: _SinkT) -> _SinkT:
        """Pass every piece of JavaScript source to *callback*.

        Sources are inline ``<script>`` bodies of HTML pages (empty ones are
        skipped) and the full bodies of script resources. No order is
        promised between the two kinds.
        """

        def _inline_scripts(page: Page) -> None:
            doc = page.doc
            if doc is None:
                return
            for source in iter_scripts(
                doc,
                self.config.script_types,
                include_untyped=self.config.include_untyped_scripts,
            ):
                if source:
                    callback(source)

        def _script_resource(page: Page) -> None:
            callback(page.text)

        self.every_html_page(_inline_scripts)
        self.every_javascript_page(_script_resource)
        return callback

    every_js = every_javascript

    def every_javascript_string(self, callback: _SinkT) -> _SinkT:
        """Pass the value of every JavaScript string literal to *callback*."""

        def _strings(source: str) -> None:
            for string in scan_strings(source):
                callback(string)

        self.every_javascript(_strings)
        return callback

    every_js_string = every_javascript_string

    def every_javascript_comment(self, callback: _SinkT) -> _SinkT:
        """Pass the body of every JavaScript comment to *callback*."""

        def _comments(source: str) -> None:
            for comment in scan_comments(source):
                callback(comment)

        self.every_javascript(_comments)
        return callback

    every_js_comment = every_javascript_comment

    def every_comment(self, callback: _SinkT) -> _SinkT:
        """HTML comments of a page first, then its JavaScript comments."""
        self.every_html_comment(callback)
        self.every_javascript_comment(callback)
        return callback
