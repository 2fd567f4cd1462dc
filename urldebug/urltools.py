# urldebug/urltools.py
from __future__ import annotations
import re
from dataclasses import dataclass
from urllib.parse import urlparse

# Everything outside this set is dropped from a target URL before use.
_URL_UNSAFE_RE = re.compile(r"[^A-Za-z0-9$\-_.+!*'(),{}|\\^~\[\]`<>#%\";/?:@&=]")


def sanitize_url(url: str) -> str:
    """Strip characters that cannot appear in a URL (whitespace, control chars, non-ASCII)."""
    return _URL_UNSAFE_RE.sub("", url or "")


@dataclass(frozen=True)
class BaseURL:
    """Scheme, host and directory path of the scraped document."""
    scheme: str
    host: str
    path: str = ""

    @classmethod
    def parse(cls, url: str) -> "BaseURL":
        p = urlparse(url)
        host = p.netloc
        # path is the document's directory: "/dir/page.html" -> "/dir/"
        path = p.path[: p.path.rfind("/") + 1] if p.path else ""
        return cls(p.scheme, host, path)

    @property
    def authority(self) -> str:
        return f"{self.scheme}://{self.host}"


def absolute_image_url(src: str, base: BaseURL) -> str:
    """
    Build an absolute URL from an <img> src attribute:
    - "//cdn/x.png" is scheme-relative and gets the document's scheme
    - "http..." is already absolute
    - "/x.png" is relative to the host root
    - anything else is relative to the document's directory
    """
    if src.startswith("//"):
        return f"{base.scheme}:{src}"
    if src.startswith("http"):
        return src
    url = base.authority
    root_relative = src.startswith("/")
    if not root_relative:
        url += base.path
        if not url.endswith("/"):
            url += "/"
    return url + src
