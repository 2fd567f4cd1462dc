# urldebug/batch.py
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Sequence

from .config import ScraperOptions
from .fetcher import Fetcher
from .logger import RunLogger
from .scraper import State, URLDebugger


@dataclass
class BatchEntry:
    url: str
    properties: Dict[str, Any] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    fetched: bool = True


class ScraperQueue:
    """
    Scrape several URLs one after another. Every URL gets its own
    URLDebugger so no result or error leaks from one page to the next; only
    the options, fetcher and logger are shared.
    """

    def __init__(
        self,
        urls: Sequence[str],
        options: ScraperOptions | None = None,
        fetcher: Fetcher | None = None,
        runlog: RunLogger | None = None,
    ):
        self.urls = list(urls)
        self.options = options or ScraperOptions()
        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher or Fetcher.from_options(self.options)
        self.runlog = runlog or RunLogger()
        self.entries: List[BatchEntry] = []

    def close(self):
        if self._owns_fetcher:
            self.fetcher.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def scrape_all(self, on_entry: Optional[Callable[[int, BatchEntry], None]] = None) -> List[BatchEntry]:
        self.entries = []
        for i, url in enumerate(self.urls):
            scraper = URLDebugger(url, options=replace(self.options), fetcher=self.fetcher, runlog=self.runlog)
            scraper.scrape()
            entry = BatchEntry(url=scraper.url, properties=scraper.properties, errors=scraper.errors,
                               fetched=scraper.state is not State.FAILED)
            self.entries.append(entry)
            if on_entry is not None:
                on_entry(i, entry)
        return self.entries
