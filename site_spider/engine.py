# File: site_spider/engine.py
"""site_spider.engine: Фасад для запуска извлечения и сбора отчёта."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Union

from site_spider.agent import Agent
from site_spider.aggregator import ExtractionReport, collect
from site_spider.config import AgentConfig, load_config
from site_spider.crawler.dump import iter_pages
from site_spider.crawler.models import Page
from site_spider.logger import logger

__all__ = ["Engine"]


class Engine:
    """Фасад для CLI и тестов: загрузка конфига, прогон страниц и сбор отчёта."""

    @staticmethod
    def load_config(path: Union[str, Path, None]) -> AgentConfig:
        """Загружает конфиг из YAML/JSON или из переменных окружения."""
        return load_config(path)

    def __init__(self, config: Optional[AgentConfig] = None) -> None:
        """Инициализирует Engine с заданной конфигурацией."""
        self.config = config if config is not None else AgentConfig()

    def new_agent(self) -> Agent:
        """Новый агент со свежим состоянием дедупликации."""
        return Agent(self.config)

    def extract(
        self, pages: Iterable[Page], streams: Optional[Iterable[str]] = None
    ) -> ExtractionReport:
        """Прогоняет страницы через выбранные потоки и возвращает отчёт."""
        agent = self.new_agent()
        report = collect(agent, streams)
        agent.run(pages)
        return report

    def extract_dump(
        self, path: Union[str, Path], streams: Optional[Iterable[str]] = None
    ) -> ExtractionReport:
        """Читает JSONL-дамп краулера и возвращает отчёт."""
        logger.info("Extracting from dump %s", path)
        agent = self.new_agent()
        report = collect(agent, streams)
        try:
            agent.run(iter_pages(path, agent.sessions))
        except Exception as exc:
            logger.error("Extraction failed: %s", exc)
            raise
        return report
