# urldebug/images.py
from __future__ import annotations
import re
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional, Tuple

from bs4 import Tag

from .config import IMAGE_MINIMUM_HEIGHT, IMAGE_MINIMUM_WIDTH
from .errors import ScrapeError
from .inspector import UNKNOWN, ImageInspector
from .logger import RunLogger
from .og_parser import attr
from .urltools import BaseURL, absolute_image_url

_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


@dataclass
class ImageRecord:
    url: str
    description: Optional[str] = None
    width: int | str = UNKNOWN
    height: int | str = UNKNOWN
    reported_type: Optional[str] = None
    actual_type: Optional[str] = None
    mime_type: Optional[str] = None

    def too_small(self, min_width: int, min_height: int) -> bool:
        """Only measured dimensions can disqualify an image."""
        if isinstance(self.width, int) and self.width < min_width:
            return True
        if isinstance(self.height, int) and self.height < min_height:
            return True
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


def dimension(value: Optional[str]) -> int | str:
    """width/height attribute -> int (truncated); missing or non-numeric ("100%", "auto") -> "unknown"."""
    if not value or not _NUMERIC_RE.match(value):
        return UNKNOWN
    try:
        return int(float(value))
    except OverflowError:
        return UNKNOWN


def collect_images(
    imgs: Iterable[Tag],
    base: BaseURL,
    inspector: Optional[ImageInspector] = None,
    min_width: int = IMAGE_MINIMUM_WIDTH,
    min_height: int = IMAGE_MINIMUM_HEIGHT,
    runlog: Optional[RunLogger] = None,
) -> Tuple[List[ImageRecord], List[ScrapeError]]:
    """
    Build one ImageRecord per <img> in document order. With an inspector,
    dimensions and types come from the downloaded bytes; otherwise from the
    tag's width/height attributes. Images measured below the minimum size
    are dropped.
    """
    runlog = runlog or RunLogger()
    records: List[ImageRecord] = []
    errors: List[ScrapeError] = []

    for img in imgs:
        src = (attr(img, "src") or "").strip()
        # inline data has no URL to report or fetch
        if not src or src.lower().startswith("data:"):
            continue
        runlog.count("IMG_ORIG")
        rec = ImageRecord(url=absolute_image_url(src, base))
        alt = attr(img, "alt")
        if alt:
            rec.description = alt

        if inspector is not None:
            info = inspector.inspect(rec.url)
            rec.reported_type = info.reported_type
            rec.actual_type = info.actual_type
            rec.mime_type = info.mime_type
            rec.width = info.width
            rec.height = info.height
            if info.error is not None:
                errors.append(info.error)
                runlog.count("IMG_FAILED")
                runlog.log("WARN", "IMAGE_FAILED", url=rec.url, kind=info.error.kind.value)
            else:
                runlog.count("IMG_INSPECTED")
                runlog.log("INFO", "IMAGE_INSPECTED", url=rec.url, width=rec.width,
                           height=rec.height, mime=rec.mime_type)
        else:
            rec.width = dimension(attr(img, "width"))
            rec.height = dimension(attr(img, "height"))

        if rec.too_small(min_width, min_height):
            runlog.count("IMG_FILTERED")
            runlog.log("INFO", "IMAGE_FILTERED", url=rec.url, width=rec.width, height=rec.height)
            continue
        runlog.count("IMG_KEPT")
        records.append(rec)

    return records, errors
