# File: tests/test_engine.py
import pytest

from site_spider.config import AgentConfig
from site_spider.crawler.dump import PageDumpError
from site_spider.crawler.models import Page
from site_spider.engine import Engine


def test_engine_defaults_to_empty_config():
    engine = Engine()
    assert engine.config == AgentConfig()
    assert engine.new_agent() is not engine.new_agent()


def test_extract_pages():
    engine = Engine()
    report = engine.extract(
        [
            Page("http://a.example.com/"),
            Page("http://b.example.com/"),
            Page("http://a.example.com/x"),
        ],
        streams=["hosts"],
    )
    assert report.hosts == ["a.example.com", "b.example.com"]
    assert report.pages == 3


def test_each_extract_starts_fresh():
    engine = Engine()
    pages = [Page("http://a.example.com/")]
    assert engine.extract(pages).hosts == ["a.example.com"]
    assert engine.extract(pages).hosts == ["a.example.com"]


def test_extract_unknown_stream():
    with pytest.raises(ValueError):
        Engine().extract([], streams=["nope"])


def test_extract_dump(write_dump, pem):
    path = write_dump(
        [
            {"url": "https://example.com/", "content_type": "text/html",
             "body": "<!-- hi --><p>x</p>", "peer_cert": pem(77)},
            {"url": "https://example.com/other", "content_type": "text/html",
             "body": "", "peer_cert": pem(77)},
        ]
    )
    report = Engine().extract_dump(path)

    assert report.pages == 2
    assert report.html_comments == ["hi"]
    assert [c["serial"] for c in report.certs] == ["4d"]
    assert report.certs[0]["subject"] == {"CN": "example.com"}


def test_extract_dump_errors_propagate(tmp_path):
    path = tmp_path / "pages.jsonl"
    path.write_text("{oops\n", encoding="utf-8")
    with pytest.raises(PageDumpError):
        Engine().extract_dump(path)
