# urldebug/og_parser.py
from __future__ import annotations
from typing import Dict, Iterable, Optional

from bs4 import BeautifulSoup, Tag, UnicodeDammit

# Prefix of the property attribute on every OpenGraph meta tag.
OG_PREFIX = "og:"


def parse_document(data: bytes) -> BeautifulSoup:
    """Decode page bytes (UTF-8 preferred, else sniffed) and build the DOM."""
    dammit = UnicodeDammit(data, ["utf-8"], is_html=True)
    markup = dammit.unicode_markup
    if markup is None:
        markup = data.decode("utf-8", errors="replace")
    return BeautifulSoup(markup, "html.parser")


def attr(tag: Tag, name: str) -> Optional[str]:
    """Attribute value as a string, or None when the tag does not carry it."""
    value = tag.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return value


def is_og_tag(meta: Tag) -> bool:
    return (attr(meta, "property") or "").startswith(OG_PREFIX)


def og_tag_name(meta: Tag) -> str:
    """og:video:url -> video_url"""
    prop = attr(meta, "property") or ""
    return prop[len(OG_PREFIX):].replace(":", "_").lower()


def meta_tag_name(meta: Tag) -> str:
    """name wins over property; twitter:card -> twitter_card"""
    name = attr(meta, "name") or attr(meta, "property") or ""
    return name.lower().replace(":", "_")


def extract_meta(metas: Iterable[Tag], og_only: bool = False) -> Dict[str, str]:
    """
    Map normalized meta names to their content. The first tag to produce a
    name wins; tags whose name normalizes to "" are skipped. With og_only,
    non-OpenGraph tags are ignored entirely.
    """
    out: Dict[str, str] = {}
    for meta in metas:
        if is_og_tag(meta):
            key = og_tag_name(meta)
        elif og_only:
            continue
        else:
            key = meta_tag_name(meta)
        if not key or key in out:
            continue
        out[key] = attr(meta, "content") or ""
    return out


def page_title(doc: BeautifulSoup) -> str:
    node = doc.find("title")
    if node is None:
        return ""
    return node.get_text().strip()
