# urldebug/__init__.py
from .batch import BatchEntry, ScraperQueue
from .config import ScraperOptions
from .errors import ErrorKind, ScrapeError
from .fetcher import Fetcher, FetchResult
from .images import ImageRecord
from .scraper import ScrapeResult, State, URLDebugger

__all__ = [
    "BatchEntry", "ScraperQueue", "ScraperOptions", "ErrorKind", "ScrapeError",
    "Fetcher", "FetchResult", "ImageRecord", "ScrapeResult", "State", "URLDebugger",
]
