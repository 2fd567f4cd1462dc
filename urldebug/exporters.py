# urldebug/exporters.py
from __future__ import annotations
import csv, json
from typing import Iterable, TextIO

from .batch import BatchEntry

IMAGE_COLS = ["page_url", "url", "description", "width", "height", "reported_type", "actual_type", "mime_type"]

def entry_record(e: BatchEntry) -> dict:
    return {
        "record_type": "page",
        "url": e.url,
        "properties": e.properties,
        "errors": e.errors,
    }

def write_results_jsonl(path: str, entries: Iterable[BatchEntry]):
    with open(path, "w", encoding="utf-8", errors="replace") as fh:
        for e in entries:
            fh.write(json.dumps(entry_record(e), ensure_ascii=False) + "\n")

def dump_results_json(fh: TextIO, entries: Iterable[BatchEntry]):
    json.dump([entry_record(e) for e in entries], fh, ensure_ascii=False, indent=2)
    fh.write("\n")

def write_images_csv(path: str, entries: Iterable[BatchEntry]):
    with open(path, "w", newline="", encoding="utf-8", errors="replace") as fh:
        w = csv.DictWriter(fh, fieldnames=IMAGE_COLS)
        w.writeheader()
        for e in entries:
            for img in e.properties.get("images") or []:
                row = {k: img.get(k, "") for k in IMAGE_COLS}
                row["page_url"] = e.url
                w.writerow(row)
