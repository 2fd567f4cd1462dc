# urldebug/scraper.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .config import ScraperOptions
from .errors import ScrapeError
from .fetcher import Fetcher
from .images import ImageRecord, collect_images
from .inspector import ImageInspector
from .logger import RunLogger
from .og_parser import extract_meta, page_title, parse_document
from .urltools import BaseURL, sanitize_url


class State(str, Enum):
    INIT = "init"
    FETCHED = "fetched"
    PARSED = "parsed"
    EXTRACTED = "extracted"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ScrapeResult:
    """
    Meta properties plus, unless scraping OpenGraph tags only, the page's
    images and title. images/title are None when they were not collected.
    """
    properties: Dict[str, str] = field(default_factory=dict)
    images: Optional[List[ImageRecord]] = None
    title: Optional[str] = None

    def get(self, key: str) -> Optional[str]:
        return self.properties.get(key)

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.properties)
        if self.images is not None:
            out["images"] = [img.to_dict() for img in self.images]
        if self.title is not None:
            out["title"] = self.title
        return out


class URLDebugger:
    """Scrape one URL for OpenGraph/meta properties, title and images."""

    def __init__(
        self,
        url: str,
        options: ScraperOptions | None = None,
        fetcher: Fetcher | None = None,
        runlog: RunLogger | None = None,
    ):
        self.url = sanitize_url(url)
        self._url_error: Optional[ScrapeError] = None
        try:
            self.base_url: Optional[BaseURL] = BaseURL.parse(self.url)
        except ValueError as e:
            # e.g. "Invalid IPv6 URL" for an unbalanced bracket
            self.base_url = None
            self._url_error = ScrapeError.transport(self.url, str(e))
        self.options = options or ScraperOptions()
        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher or Fetcher.from_options(self.options)
        self.runlog = runlog or RunLogger()
        self.state = State.INIT
        self._result = ScrapeResult()
        self._errors: List[ScrapeError] = []

    # settable before scrape(); stored on the options object
    @property
    def save_tmp_image(self) -> bool:
        return self.options.save_tmp_image

    @save_tmp_image.setter
    def save_tmp_image(self, value: bool):
        self.options.save_tmp_image = bool(value)

    @property
    def tmp_image_dir(self) -> str:
        return self.options.tmp_image_dir

    @tmp_image_dir.setter
    def tmp_image_dir(self, value: str):
        self.options.tmp_image_dir = value

    @property
    def scrape_og_only(self) -> bool:
        return self.options.scrape_og_only

    @scrape_og_only.setter
    def scrape_og_only(self, value: bool):
        self.options.scrape_og_only = bool(value)

    @property
    def deep_image_inspection(self) -> bool:
        return self.options.deep_image_inspection

    @deep_image_inspection.setter
    def deep_image_inspection(self, value: bool):
        self.options.deep_image_inspection = bool(value)

    @property
    def result(self) -> ScrapeResult:
        return self._result

    @property
    def properties(self) -> Dict[str, Any]:
        return self._result.as_dict()

    @property
    def errors(self) -> List[str]:
        return [str(e) for e in self._errors]

    @property
    def error_records(self) -> List[ScrapeError]:
        return list(self._errors)

    def close(self):
        """Close the fetcher if this scraper created it."""
        if self._owns_fetcher:
            self.fetcher.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def _record(self, err: ScrapeError):
        self._errors.append(err)
        self.runlog.count("ERRORS")

    def _fail(self, err: ScrapeError, **kv):
        self._record(err)
        self.state = State.FAILED
        self.runlog.count("PAGE_FAILED")
        self.runlog.log("WARN", "SKIP_PAGE", url=self.url, **kv)

    def scrape(self) -> None:
        """Fetch, parse and extract. Failures end up in self.errors; nothing is raised."""
        self.options.validate()
        self._result = ScrapeResult()
        self._errors = []
        self.state = State.INIT

        self.runlog.count("PAGE_ORIG")
        if self._url_error is not None:
            self._fail(self._url_error, status=0, reason="invalid_url")
            return
        fr = self.fetcher.get(self.url)
        if not fr.ok:
            self._fail(fr.to_error(), status=fr.status, reason=fr.error or "")
            return
        self.state = State.FETCHED
        self.runlog.count("PAGE_OK")
        self.runlog.log("INFO", "FETCH_PAGE", url=self.url, status=fr.status, mime=fr.mime or "",
                        bytes=fr.bytes_read)

        doc = parse_document(fr.data or b"")
        self.state = State.PARSED

        opts = self.options
        result = ScrapeResult(properties=extract_meta(doc.find_all("meta"), og_only=opts.scrape_og_only))
        self.runlog.log("INFO", "META_DONE", url=self.url, keys=len(result.properties))

        if not opts.scrape_og_only:
            inspector = None
            if opts.deep_image_inspection:
                inspector = ImageInspector(self.fetcher, opts.save_tmp_image, opts.tmp_image_dir)
            images, errors = collect_images(
                doc.find_all("img"),
                self.base_url,
                inspector=inspector,
                min_width=opts.min_width,
                min_height=opts.min_height,
                runlog=self.runlog,
            )
            for err in errors:
                self._record(err)
            result.images = images
            result.title = result.properties["title"] if "title" in result.properties else page_title(doc)
        self.state = State.EXTRACTED

        self._result = result
        self.state = State.DONE
