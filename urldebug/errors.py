# urldebug/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    DIRECTORY_CREATE = "directory_create"
    DECODE = "decode"
    MEASUREMENT = "measurement"


@dataclass(frozen=True)
class ScrapeError:
    """A non-fatal problem recorded while scraping. Never raised."""
    kind: ErrorKind
    message: str
    url: str = ""

    def __str__(self) -> str:
        return self.message

    @classmethod
    def http_status(cls, url: str, status: int) -> "ScrapeError":
        return cls(ErrorKind.HTTP_STATUS, f"{url} returned HTTP response: {status}", url)

    @classmethod
    def transport(cls, url: str, reason: str) -> "ScrapeError":
        return cls(ErrorKind.TRANSPORT, f"Scraping {url} failed: {reason}", url)
