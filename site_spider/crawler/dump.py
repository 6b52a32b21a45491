# site_spider/crawler/dump.py
"""
Page source backed by a JSON Lines dump written by an external crawler.

One JSON object per line::

    {"url": "https://example.com/", "content_type": "text/html",
     "body": "<html>...</html>", "encoding": "text",
     "link_rel": null, "peer_cert": "-----BEGIN CERTIFICATE-----..."}

``encoding`` is ``"text"`` (default) or ``"base64"`` for binary bodies.
"""
from __future__ import annotations

import base64
import binascii
import errno
import json
import os
from pathlib import Path
from typing import Iterator, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from site_spider.crawler.models import Page
from site_spider.crawler.sessions import SessionRegistry

__all__ = ("PageRecord", "PageDumpError", "iter_pages")


class PageDumpError(ValueError):
    """Malformed line in a page dump."""

    def __init__(self, path: Path, lineno: int, reason: str) -> None:
        super().__init__(f"{path}:{lineno}: {reason}")
        self.path = path
        self.lineno = lineno


class PageRecord(BaseModel):
    """One fetched page as recorded by the crawler."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    url: str = Field(..., min_length=1)
    content_type: Optional[str] = None
    body: str = ""
    encoding: Literal["text", "base64"] = "text"
    link_rel: Optional[str] = None
    peer_cert: Optional[str] = Field(None, description="PEM certificate of the connection.")

    def to_page(self) -> Page:
        if self.encoding == "base64":
            body: Union[bytes, str] = base64.b64decode(self.body, validate=True)
        else:
            body = self.body
        return Page(
            url=self.url,
            body=body,
            content_type=self.content_type,
            link_rel=self.link_rel,
        )


def iter_pages(
    path: Union[str, Path], sessions: Optional[SessionRegistry] = None
) -> Iterator[Page]:
    """Yield pages from *path* lazily, in file order.

    A ``peer_cert`` is registered in *sessions* before its page is yielded.
    """
    path_obj = Path(path).expanduser()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    with path_obj.open("rb") as fh:
        for lineno, raw in enumerate(fh, start=1):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise PageDumpError(path_obj, lineno, f"invalid UTF-8: {exc}") from exc
            if not line.strip():
                continue
            try:
                record = PageRecord.model_validate(json.loads(line))
                page = record.to_page()
            except json.JSONDecodeError as exc:
                raise PageDumpError(path_obj, lineno, f"invalid JSON: {exc}") from exc
            except ValidationError as exc:
                raise PageDumpError(path_obj, lineno, f"invalid record: {exc}") from exc
            except binascii.Error as exc:
                raise PageDumpError(path_obj, lineno, f"invalid base64 body: {exc}") from exc

            if record.peer_cert and sessions is not None:
                try:
                    sessions.register(record.url, record.peer_cert)
                except ValueError as exc:
                    raise PageDumpError(path_obj, lineno, f"invalid certificate: {exc}") from exc
            yield page
