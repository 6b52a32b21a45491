# site_spider/crawler/sessions.py
"""
Registry of peer certificates for the connections a crawl engine opened.
"""
from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple
from urllib.parse import urlsplit

from site_spider.cert import Cert, CertData

_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443}

_Origin = Tuple[str, str, int]


def _origin(url: str) -> _Origin:
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    port = parts.port or _DEFAULT_PORTS.get(scheme, 0)
    return scheme, host, port


class SessionRegistry:
    """Peer certificates keyed by URL origin (scheme, host, port)."""

    def __init__(self) -> None:
        self._certs: Dict[_Origin, Cert] = {}

    def register(self, url: str, cert: CertData) -> Cert:
        """Record the peer certificate of the connection used for *url*."""
        loaded = Cert.load(cert)
        self._certs[_origin(url)] = loaded
        return loaded

    def peer_cert(self, url: str) -> Optional[Cert]:
        """Certificate for *url*'s connection, or ``None`` if unknown/closed."""
        return self._certs.get(_origin(url))

    def close(self, url: str) -> None:
        self._certs.pop(_origin(url), None)

    def clear(self) -> None:
        self._certs.clear()

    def __contains__(self, url: object) -> bool:
        return isinstance(url, str) and _origin(url) in self._certs

    def __len__(self) -> int:
        return len(self._certs)

    def __iter__(self) -> Iterator[Cert]:
        return iter(self._certs.values())
