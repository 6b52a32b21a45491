# File: site_spider/aggregator.py
"""site_spider.aggregator: Сбор событий потоков извлечения в отчёт."""

from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from site_spider.agent import Agent
from site_spider.cert import Cert
from site_spider.crawler.models import Page

__all__ = ["STREAMS", "ExtractionReport", "collect"]

_SURROGATES = re.compile(r"[\ud800-\udfff]")

STREAMS: Sequence[str] = (
    "hosts",
    "certs",
    "favicons",
    "html_comments",
    "javascript",
    "javascript_strings",
    "javascript_comments",
)


@dataclass(slots=True)
class ExtractionReport:
    """Результаты извлечения: хосты, сертификаты, иконки, комментарии, строки JS."""

    hosts: List[str] = field(default_factory=list)
    certs: List[Dict[str, Any]] = field(default_factory=list)
    favicons: List[str] = field(default_factory=list)
    html_comments: List[str] = field(default_factory=list)
    javascript_count: int = 0
    javascript_strings: List[str] = field(default_factory=list)
    javascript_comments: List[str] = field(default_factory=list)
    pages: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(
            self.to_dict(),
            ensure_ascii=False,
            indent=2 if pretty else None,
        )


def _clean(text: str) -> str:
    """Заменяет непарные суррогаты (битые байты UTF-8) для сериализации."""
    if not _SURROGATES.search(text):
        return text
    return text.encode("utf-8", "surrogatepass").decode("utf-8", "replace")


def collect(agent: Agent, streams: Optional[Iterable[str]] = None) -> ExtractionReport:
    """Подключает выбранные потоки к агенту и возвращает заполняемый отчёт.

    Отчёт пополняется по мере того, как агент получает страницы.
    """
    selected = list(STREAMS if streams is None else streams)
    unknown = [name for name in selected if name not in STREAMS]
    if unknown:
        raise ValueError(f"Неизвестные потоки: {', '.join(unknown)}")

    report = ExtractionReport()

    @agent.every_page
    def _count(page: Page) -> None:
        report.pages += 1

    if "hosts" in selected:
        agent.every_host(report.hosts.append)
    if "certs" in selected:

        @agent.every_cert
        def _cert(cert: Cert) -> None:
            report.certs.append(cert.to_dict())

    if "favicons" in selected:

        @agent.every_favicon
        def _favicon(page: Page) -> None:
            report.favicons.append(page.url)

    if "html_comments" in selected:

        @agent.every_html_comment
        def _html_comment(comment: str) -> None:
            report.html_comments.append(_clean(comment))

    if "javascript" in selected:

        @agent.every_javascript
        def _javascript(source: str) -> None:
            report.javascript_count += 1

    if "javascript_strings" in selected:

        @agent.every_javascript_string
        def _js_string(value: str) -> None:
            report.javascript_strings.append(_clean(value))

    if "javascript_comments" in selected:

        @agent.every_javascript_comment
        def _js_comment(comment: str) -> None:
            report.javascript_comments.append(_clean(comment))

    return report
