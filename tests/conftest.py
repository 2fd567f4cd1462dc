"""Fixtures: fake fetcher serving canned pages and images."""

from io import BytesIO

import pytest
from PIL import Image

from urldebug.errors import ErrorKind
from urldebug.fetcher import FetchResult


def make_image(fmt: str = "PNG", size=(40, 30)) -> bytes:
    buf = BytesIO()
    Image.new("RGB", size, (200, 10, 10)).save(buf, format=fmt)
    return buf.getvalue()


class FakeFetcher:
    """Stands in for Fetcher: bytes -> 200, int -> that HTTP status, missing -> transport error."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.closed = False

    def close(self):
        self.closed = True

    def get(self, url):
        self.calls.append(url)
        body = self.routes.get(url)
        if body is None:
            return FetchResult(False, 0, None, None, url, error="Name or service not known",
                               error_kind=ErrorKind.TRANSPORT)
        if isinstance(body, int):
            return FetchResult(False, body, "text/html", None, url, error=f"http_{body}",
                               error_kind=ErrorKind.HTTP_STATUS)
        if isinstance(body, str):
            body = body.encode("utf-8")
        return FetchResult(True, 200, "text/html", body, url, bytes_read=len(body))


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()
