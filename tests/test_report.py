# File: tests/test_report.py
"""Тесты для генерации отчётов (render_json, render_html) и сборщика потоков."""
import json

import pytest

from site_spider.agent import Agent
from site_spider.aggregator import STREAMS, ExtractionReport, collect
from site_spider.crawler.models import Page
from site_spider.report import DEFAULT_TEMPLATE_DIR, render_html, render_json


@pytest.fixture()
def report() -> ExtractionReport:
    return ExtractionReport(
        hosts=["example.com"],
        certs=[
            {
                "serial": "1f",
                "subject": {"CN": "example.com"},
                "issuer": {"CN": "Test CA"},
                "subject_alt_names": ["example.com", "www.example.com"],
                "not_before": "2026-01-01T00:00:00+00:00",
                "not_after": "2027-01-01T00:00:00+00:00",
                "fingerprint": "ab" * 32,
            }
        ],
        favicons=["http://example.com/favicon.ico"],
        html_comments=["<b>debug</b>"],
        javascript_count=2,
        javascript_strings=["hello"],
        javascript_comments=[" remove before release"],
        pages=3,
    )


def test_render_json(tmp_path, report):
    out = render_json(report, tmp_path / "nested" / "report.json")
    assert out.exists()
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data == report.to_dict()
    assert data["certs"][0]["issuer"] == {"CN": "Test CA"}


def test_render_json_compact(tmp_path, report):
    out = render_json(report, tmp_path / "report.json", pretty=False)
    assert "\n" not in out.read_text(encoding="utf-8").strip()


def test_render_html_default_template(tmp_path, report):
    assert (DEFAULT_TEMPLATE_DIR / "report.html.j2").is_file()
    out = render_html(report, None, tmp_path / "report.html")
    html = out.read_text(encoding="utf-8")

    assert "example.com" in html
    assert "Test CA" in html
    assert "http://example.com/favicon.ico" in html
    assert "&lt;b&gt;debug&lt;/b&gt;" in html
    assert "<b>debug</b>" not in html


def test_render_html_custom_template(tmp_path, report):
    tpl_dir = tmp_path / "templates"
    tpl_dir.mkdir()
    (tpl_dir / "report.html.j2").write_text("{{ hosts | join(',') }}|{{ pages }}", encoding="utf-8")

    out = render_html(report, tpl_dir, tmp_path / "out.html")
    assert out.read_text(encoding="utf-8") == "example.com|3"


def test_collect_all_streams(html_page, js_page):
    agent = Agent()
    report = collect(agent)
    agent.run(
        [
            html_page(
                "http://example.com/",
                '<!-- note --><script type="text/javascript">f("a") // c\n</script>',
            ),
            js_page("http://example.com/app.js", "g('b')"),
            Page("http://example.com/favicon.ico", b"\x00", "image/x-icon"),
        ]
    )

    assert report.pages == 3
    assert report.hosts == ["example.com"]
    assert report.certs == []
    assert report.favicons == ["http://example.com/favicon.ico"]
    assert report.html_comments == ["note"]
    assert report.javascript_count == 2
    assert report.javascript_strings == ["a", "b"]
    assert report.javascript_comments == [" c"]


def test_collect_selected_streams(js_page):
    agent = Agent()
    report = collect(agent, ["javascript_strings"])
    agent.visit_page(js_page("http://example.com/app.js", "f('x') // c"))

    assert report.javascript_strings == ["x"]
    assert report.hosts == []
    assert report.javascript_comments == []
    assert report.pages == 1


def test_collect_rejects_unknown_stream():
    with pytest.raises(ValueError):
        collect(Agent(), ["hosts", "cookies"])


def test_report_json_replaces_broken_bytes():
    agent = Agent()
    report = collect(agent, ["javascript_strings"])
    agent.visit_page(Page("http://example.com/a.js", b"f('ok\xff')", "text/javascript"))

    data = json.loads(report.json())
    assert data["javascript_strings"][0].startswith("ok\ufffd")


def test_streams_match_report_fields():
    fields = set(ExtractionReport().to_dict())
    for name in STREAMS:
        assert name in fields or name == "javascript"
