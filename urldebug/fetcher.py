# urldebug/fetcher.py
from __future__ import annotations
import time
import warnings
import requests
import urllib3
from dataclasses import dataclass

from .config import USER_AGENT
from .errors import ErrorKind, ScrapeError

@dataclass
class FetchResult:
    ok: bool
    status: int
    mime: str | None
    data: bytes | None
    url: str
    error: str | None = None
    error_kind: ErrorKind | None = None
    bytes_read: int = 0

    def to_error(self) -> ScrapeError | None:
        """The ScrapeError describing this failure, or None for a successful fetch."""
        if self.ok:
            return None
        if self.error_kind is ErrorKind.HTTP_STATUS:
            return ScrapeError.http_status(self.url, self.status)
        return ScrapeError.transport(self.url, self.error or "fetch_failed")

class Fetcher:
    def __init__(
        self,
        user_agent: str = USER_AGENT,
        connect_timeout: float = 10,
        total_timeout: float = 45,
        max_redirects: int = 5,
        max_bytes: int = 10_000_000,
        verify_tls: bool = False,
        rps: float | None = None,
    ):
        self._min_interval = 1.0 / max(0.1, rps) if rps else 0.0
        self._last = 0.0
        self.connect_timeout = connect_timeout
        self.total_timeout = total_timeout
        self.max_bytes = max_bytes
        self.verify_tls = verify_tls
        self.sess = requests.Session()
        self.sess.max_redirects = max_redirects
        self.sess.headers.update({
            "User-Agent": user_agent,
            "Accept": "*/*",
            "Connection": "close",
        })

    @classmethod
    def from_options(cls, options, rps: float | None = None) -> "Fetcher":
        return cls(
            user_agent=options.user_agent,
            connect_timeout=options.connect_timeout,
            total_timeout=options.total_timeout,
            max_redirects=options.max_redirects,
            max_bytes=options.max_bytes,
            verify_tls=options.verify_tls,
            rps=rps,
        )

    def close(self):
        self.sess.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def _throttle(self):
        if not self._min_interval:
            return
        now = time.time()
        delta = now - self._last
        if delta < self._min_interval:
            time.sleep(self._min_interval - delta)
        self._last = time.time()

    def get(self, url: str) -> FetchResult:
        """Stream a URL with a byte cap and a total deadline. Never raises for network failures."""
        self._throttle()
        deadline = time.monotonic() + self.total_timeout
        try:
            with warnings.catch_warnings():
                if not self.verify_tls:
                    # only for this request; the process-wide filter is left alone
                    warnings.simplefilter("ignore", urllib3.exceptions.InsecureRequestWarning)
                resp = self.sess.get(
                    url,
                    stream=True,
                    allow_redirects=True,
                    verify=self.verify_tls,
                    timeout=(self.connect_timeout, self.total_timeout),
                )
            with resp as r:
                mime = r.headers.get("Content-Type")
                mime = mime.split(";")[0].strip() if mime else None
                status = r.status_code
                if status != 200:
                    return FetchResult(False, status, mime, None, url, error=f"http_{status}",
                                       error_kind=ErrorKind.HTTP_STATUS)
                chunks = []
                total = 0
                for chunk in r.iter_content(chunk_size=8192):
                    if not chunk:
                        continue
                    total += len(chunk)
                    if total > self.max_bytes:
                        return FetchResult(False, status, mime, None, url, error="too_large",
                                           error_kind=ErrorKind.TRANSPORT, bytes_read=total)
                    if time.monotonic() > deadline:
                        return FetchResult(False, status, mime, None, url,
                                           error=f"timed out after {self.total_timeout} seconds",
                                           error_kind=ErrorKind.TRANSPORT, bytes_read=total)
                    chunks.append(chunk)
                return FetchResult(True, status, mime, b"".join(chunks), url, bytes_read=total)
        except requests.RequestException as e:
            return FetchResult(False, 0, None, None, url, error=str(e) or type(e).__name__,
                               error_kind=ErrorKind.TRANSPORT)
