# urldebug/cli.py
from __future__ import annotations

import argparse
import sys

from .batch import ScraperQueue
from .config import IMAGE_MINIMUM_HEIGHT, IMAGE_MINIMUM_WIDTH, USER_AGENT, ScraperOptions
from .exporters import dump_results_json, write_images_csv, write_results_jsonl
from .fetcher import Fetcher
from .logger import RunLogger
from .progress import Progress


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser("urldebug", description="Scrape OpenGraph/meta properties and images from URLs.")
    p.add_argument("urls", nargs="+", metavar="URL")
    p.add_argument("--og-only", action="store_true", help="Report og:* meta tags only")
    p.add_argument("--deep-images", action="store_true", help="Download every image to measure it")
    p.add_argument("--save-tmp-image", action="store_true", help="Measure downloaded images from a temp file")
    p.add_argument("--tmp-dir", default="./tmp")
    p.add_argument("--min-width", type=int, default=IMAGE_MINIMUM_WIDTH)
    p.add_argument("--min-height", type=int, default=IMAGE_MINIMUM_HEIGHT)
    p.add_argument("--timeout", type=float, default=45, help="Total seconds per request")
    p.add_argument("--connect-timeout", type=float, default=10)
    p.add_argument("--max-redirects", type=int, default=5)
    p.add_argument("--user-agent", default=USER_AGENT)
    p.add_argument("--verify-tls", action="store_true")
    p.add_argument("--rps", type=float, default=None, help="Max requests per second (default: unthrottled)")

    p.add_argument("--json", default="", help="Write JSONL results here instead of JSON on stdout")
    p.add_argument("--images-csv", default="")
    p.add_argument("--log-file", default=None)
    p.add_argument("--mirror-log", action="store_true")
    p.add_argument("--no-progress", action="store_true")
    return p


def options_from_args(args) -> ScraperOptions:
    return ScraperOptions(
        save_tmp_image=args.save_tmp_image,
        tmp_image_dir=args.tmp_dir,
        scrape_og_only=args.og_only,
        deep_image_inspection=args.deep_images,
        min_width=args.min_width,
        min_height=args.min_height,
        user_agent=args.user_agent,
        connect_timeout=args.connect_timeout,
        total_timeout=args.timeout,
        max_redirects=args.max_redirects,
        verify_tls=args.verify_tls,
    )


def main(argv=None):
    p = build_parser()
    args = p.parse_args(argv)
    try:
        options = options_from_args(args)
    except ValueError as e:
        p.error(str(e))

    progress = Progress(enabled=not args.no_progress)
    progress.set_total(len(args.urls))
    runlog = RunLogger(args.log_file, mirror_stdout=args.mirror_log)

    fetcher = Fetcher.from_options(options, rps=args.rps)
    try:
        queue = ScraperQueue(args.urls, options=options, fetcher=fetcher, runlog=runlog)
        entries = queue.scrape_all(on_entry=lambda i, entry: progress.update(entry))
    finally:
        fetcher.close()
        progress.done()
        runlog.close()

    if args.json:
        write_results_jsonl(args.json, entries)
    else:
        dump_results_json(sys.stdout, entries)
    if args.images_csv:
        write_images_csv(args.images_csv, entries)

    return 0 if all(e.fetched for e in entries) else 1


if __name__ == "__main__":
    sys.exit(main())
