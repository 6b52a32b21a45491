# File: site_spider/report/html_report.py
"""site_spider.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_spider.aggregator import ExtractionReport

#: каталог со встроенным шаблоном report.html.j2
DEFAULT_TEMPLATE_DIR = Path(__file__).with_name("templates")


def render_html(
    report: ExtractionReport,
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        report: объект ExtractionReport.
        template_dir: директория с Jinja2-шаблонами (None — встроенный шаблон).
        output_path: путь к итоговому HTML-файлу.

    Returns:
        Path до сохранённого HTML-файла.

    Пример:
    ```python
    from site_spider.report.html_report import render_html
    html_path = render_html(
        report,
        template_dir=None,
        output_path='reports/report.html'
    )
    ```
    """
    template_dir = Path(template_dir) if template_dir is not None else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template("report.html.j2")

    context: dict[str, Any] = report.to_dict()

    html_content = template.render(**context)
    output_path.write_text(html_content, encoding="utf-8")

    return output_path
