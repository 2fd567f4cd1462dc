# urldebug/inspector.py
from __future__ import annotations
import os
import re
import tempfile
from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Tuple
from urllib.parse import urlparse

from PIL import Image, UnidentifiedImageError

from .errors import ErrorKind, ScrapeError
from .fetcher import Fetcher

UNKNOWN = "unknown"

# File extensions we trust as a hint of the image type.
FILE_EXT_IMAGE = "png|gif|bmp|jpg|jpeg"
_REPORTED_TYPE_RE = re.compile(r"(.*)\.(" + FILE_EXT_IMAGE + r")(\?.*)?", re.IGNORECASE)

# Pillow format (lowercased) -> MIME
MIME_TYPES = {
    "gif": "image/gif",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "bmp": "image/bmp",
    "tiff": "image/tiff",
    "webp": "image/webp",
    "ico": "image/vnd.microsoft.icon",
    "psd": "image/psd",
    "jpeg2000": "image/jp2",
    "xbm": "image/xbm",
}
DEFAULT_MIME = "application/octet-stream"


@dataclass
class Inspection:
    reported_type: str = ""
    actual_type: str = ""
    mime_type: str = ""
    width: int | str = UNKNOWN
    height: int | str = UNKNOWN
    error: Optional[ScrapeError] = None


def reported_type(url: str) -> str:
    """Extension-derived type ("jpg", "png", ...) or "" when the URL carries none."""
    m = _REPORTED_TYPE_RE.search(url)
    return m.group(2).lower() if m else ""


def mime_for(actual_type: str) -> str:
    return MIME_TYPES.get(actual_type, DEFAULT_MIME)


def _measure(img) -> Tuple[int, int, str]:
    width, height = img.size
    return int(width), int(height), (img.format or "").lower()


class ImageInspector:
    """Download an image and measure its real size and encoded type."""

    def __init__(self, fetcher: Fetcher, save_tmp_image: bool = False, tmp_image_dir: str = "./tmp"):
        self.fetcher = fetcher
        self.save_tmp_image = save_tmp_image
        self.tmp_image_dir = tmp_image_dir

    def inspect(self, url: str) -> Inspection:
        """Never raises: failures come back on Inspection.error with whatever was learned."""
        out = Inspection(reported_type=reported_type(url))
        fr = self.fetcher.get(url)
        if not fr.ok:
            out.error = fr.to_error()
            return out

        if self.save_tmp_image:
            measured = self._measure_on_disk(url, fr.data or b"", out)
        else:
            measured = self._measure_in_memory(url, fr.data or b"", out)
        if measured is None:
            return out

        out.width, out.height, out.actual_type = measured
        out.mime_type = mime_for(out.actual_type)
        return out

    def _measure_in_memory(self, url: str, data: bytes, out: Inspection):
        try:
            with Image.open(BytesIO(data)) as img:
                return _measure(img)
        except UnidentifiedImageError:
            out.error = ScrapeError(ErrorKind.DECODE, f"{url} is not a readable image", url)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            out.error = ScrapeError(ErrorKind.MEASUREMENT, f"Unable to measure {url}: {e}", url)
        return None

    def _measure_on_disk(self, url: str, data: bytes, out: Inspection):
        # unique name per image so concurrent inspections never collide
        try:
            _, ext = os.path.splitext(urlparse(url).path)
        except ValueError:
            ext = ""
        try:
            os.makedirs(self.tmp_image_dir, exist_ok=True)
            fd, path = tempfile.mkstemp(suffix=ext[:10], prefix="img_", dir=self.tmp_image_dir)
        except OSError:
            out.error = ScrapeError(
                ErrorKind.DIRECTORY_CREATE,
                f"Unable to save temp images to {self.tmp_image_dir}.",
                url,
            )
            return None

        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            with Image.open(path) as img:
                return _measure(img)
        except UnidentifiedImageError:
            out.error = ScrapeError(ErrorKind.DECODE, f"{url} is not a readable image", url)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            out.error = ScrapeError(ErrorKind.MEASUREMENT, f"Unable to measure {url}: {e}", url)
        finally:
            try:
                os.unlink(path)
            except FileNotFoundError:
                pass
        return None
