# urldebug/logger.py
from __future__ import annotations
from datetime import datetime
import sys

class RunLogger:
    """
    key=value event log. Writes to `path` when given and mirrors to stderr
    when asked; with neither it only keeps counters.
    """
    def __init__(self, path: str | None = None, mirror_stdout: bool = False, stream=None):
        self.path = path
        self._fh = open(path, "w", encoding="utf-8", errors="replace") if path else None
        self._mirror = mirror_stdout
        self._stream = stream
        self._counters = {
            "PAGE_ORIG": 0, "PAGE_OK": 0, "PAGE_FAILED": 0,
            "IMG_ORIG": 0, "IMG_KEPT": 0, "IMG_FILTERED": 0,
            "IMG_INSPECTED": 0, "IMG_FAILED": 0,
            "ERRORS": 0,
        }

    def _write(self, line: str):
        if self._fh:
            self._fh.write(line)
        if self._mirror:
            (self._stream or sys.stderr).write(line)

    def log(self, level: str, phase: str, url: str = "", **kv):
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        parts = [f"[{ts}] {level} {phase}"]
        if url:
            parts.append(f"url={url}")
        for k, v in kv.items():
            parts.append(f"{k}={v}")
        self._write(" ".join(parts) + "\n")

    def count(self, key: str, inc: int = 1):
        if key in self._counters:
            self._counters[key] += inc

    @property
    def counters(self) -> dict:
        return dict(self._counters)

    def summary(self):
        s = " ".join(f"{k}={v}" for k, v in self._counters.items())
        self._write(f"[SUMMARY] {s}\n")

    def close(self):
        try:
            self.summary()
        finally:
            if self._fh:
                self._fh.close()
                self._fh = None
