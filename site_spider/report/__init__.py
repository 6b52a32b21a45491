# File: site_spider/report/__init__.py
"""site_spider.report: Генерация отчётов (JSON и HTML) для CLI и тестов."""

from site_spider.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from site_spider.report.json_report import render_json

__all__ = ["render_json", "render_html", "DEFAULT_TEMPLATE_DIR"]
