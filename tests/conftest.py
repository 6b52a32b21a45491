# File: tests/conftest.py
from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from site_spider.agent import Agent
from site_spider.crawler.models import Page


@pytest.fixture(scope="session")
def signing_key() -> ec.EllipticCurvePrivateKey:
    """One EC key for every test certificate (fast to generate)."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture()
def make_cert(signing_key) -> Callable[..., x509.Certificate]:
    """
    Factory for self-signed certificates with a chosen serial number.
    """

    def _make(
        serial: int,
        common_name: str = "example.com",
        alt_names: Sequence[str] = ("example.com",),
    ) -> x509.Certificate:
        name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
        now = datetime.now(timezone.utc)
        builder = (
            x509.CertificateBuilder()
            .subject_name(name)
            .issuer_name(name)
            .public_key(signing_key.public_key())
            .serial_number(serial)
            .not_valid_before(now - timedelta(days=1))
            .not_valid_after(now + timedelta(days=30))
        )
        if alt_names:
            builder = builder.add_extension(
                x509.SubjectAlternativeName([x509.DNSName(n) for n in alt_names]),
                critical=False,
            )
        return builder.sign(signing_key, hashes.SHA256())

    return _make


@pytest.fixture()
def pem(make_cert) -> Callable[..., str]:
    """PEM text of a freshly made certificate."""

    def _pem(serial: int, common_name: str = "example.com") -> str:
        cert = make_cert(serial, common_name, (common_name,))
        return cert.public_bytes(serialization.Encoding.PEM).decode("ascii")

    return _pem


@pytest.fixture()
def agent() -> Agent:
    return Agent()


@pytest.fixture()
def html_page() -> Callable[..., Page]:
    """Factory for HTML pages."""

    def _page(url: str, html: str) -> Page:
        return Page(url=url, body=html.encode("utf-8"), content_type="text/html; charset=utf-8")

    return _page


@pytest.fixture()
def js_page() -> Callable[..., Page]:
    """Factory for standalone script resources."""

    def _page(url: str, source: str) -> Page:
        return Page(url=url, body=source.encode("utf-8"), content_type="text/javascript")

    return _page


@pytest.fixture()
def write_dump(tmp_path) -> Callable[[Iterable[dict], Optional[str]], Path]:
    """
    Write page records as JSON Lines and return the file path.
    """

    def _write(records: Iterable[dict], name: Optional[str] = None) -> Path:
        path = tmp_path / (name or "pages.jsonl")
        lines: List[str] = [json.dumps(r, ensure_ascii=False) for r in records]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
