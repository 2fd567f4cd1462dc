# urldebug/progress.py
from __future__ import annotations
import sys
from dataclasses import dataclass

@dataclass
class Counters:
    urls_total: int = 0
    url_idx: int = 0
    pages_ok: int = 0
    pages_failed: int = 0
    images: int = 0
    errors: int = 0

class Progress:
    """
    Minimal single-line progress. Call .update() once per scraped URL.
    Prints: [url 2/5] ok: 1 | failed: 1 | images: 14 | errors: 3
    """
    def __init__(self, enabled: bool = True, stream = None):
        self.enabled = enabled
        self.stream = stream or sys.stderr
        self.c = Counters()

    def set_total(self, n: int):
        self.c.urls_total = max(0, n)

    def update(self, entry):
        """Fold one BatchEntry into the counters and redraw."""
        self.c.url_idx += 1
        if entry.fetched:
            self.c.pages_ok += 1
        else:
            self.c.pages_failed += 1
        self.c.images += len(entry.properties.get("images") or [])
        self.c.errors += len(entry.errors)
        self.render()

    def render(self):
        if not self.enabled:
            return
        msg = (
            f"[url {self.c.url_idx}/{self.c.urls_total}] "
            f"ok: {self.c.pages_ok} "
            f"| failed: {self.c.pages_failed} "
            f"| images: {self.c.images} "
            f"| errors: {self.c.errors}"
        )
        # single-line live update
        self.stream.write("\r" + msg + " " * 8)
        self.stream.flush()

    def done(self):
        if not self.enabled:
            return
        # finish with a newline so shell prompt is clean
        self.stream.write("\n")
        self.stream.flush()
