"""Image collection from <img> tags."""

from conftest import FakeFetcher, make_image
from urldebug.errors import ErrorKind
from urldebug.images import ImageRecord, collect_images, dimension
from urldebug.inspector import UNKNOWN, ImageInspector
from urldebug.logger import RunLogger
from urldebug.og_parser import parse_document
from urldebug.urltools import BaseURL

BASE = BaseURL.parse("https://site.com/dir/page.html")


def _imgs(html):
    return parse_document(html.encode("utf-8")).find_all("img")


def test_dimension_parsing():
    assert dimension("120") == 120
    assert dimension(" 3 ") == 3
    assert dimension("7.5") == 7
    assert dimension(None) == UNKNOWN
    assert dimension("") == UNKNOWN
    assert dimension("100%") == UNKNOWN
    assert dimension("-3") == -3
    assert dimension(".5") == 0
    assert dimension("+12") == 12
    assert dimension("1e2") == 100
    assert dimension("1e999") == UNKNOWN
    assert dimension("nan") == UNKNOWN
    assert dimension("0x1A") == UNKNOWN


def test_attributes_used_without_inspection():
    records, errors = collect_images(_imgs('<img src="a.png" alt="An A" width="20" height="10">'), BASE)
    assert errors == []
    assert records == [ImageRecord(url="https://site.com/dir/a.png", description="An A", width=20, height=10)]


def test_missing_dimensions_are_unknown_and_kept():
    records, _ = collect_images(_imgs('<img src="/b.gif">'), BASE)
    assert len(records) == 1
    assert records[0].url == "https://site.com/b.gif"
    assert records[0].width == UNKNOWN and records[0].height == UNKNOWN
    assert records[0].description is None


def test_small_images_filtered():
    html = """
    <img src="narrow.png" width="3" height="100">
    <img src="short.png" width="100" height="4">
    <img src="ok.png" width="5" height="5">
    <img src="half.png" width="2">
    <img src="negative.png" width="-3" height="100">
    <img src="fraction.png" width=".5" height="100">
    """
    records, _ = collect_images(_imgs(html), BASE)
    assert [r.url for r in records] == ["https://site.com/dir/ok.png"]


def test_custom_minimums():
    html = '<img src="a.png" width="50" height="50"><img src="b.png" width="200" height="150">'
    records, _ = collect_images(_imgs(html), BASE, min_width=100, min_height=100)
    assert [r.url for r in records] == ["https://site.com/dir/b.png"]


def test_document_order_kept():
    html = '<img src="//cdn.com/1.png"><img src="2.png"><img src="http://x.com/3.png">'
    records, _ = collect_images(_imgs(html), BASE)
    assert [r.url for r in records] == [
        "https://cdn.com/1.png",
        "https://site.com/dir/2.png",
        "http://x.com/3.png",
    ]


def test_src_less_and_inline_images_skipped():
    html = '<img alt="nothing"><img src=""><img src="data:image/png;base64,AAAA"><img src="c.png">'
    records, _ = collect_images(_imgs(html), BASE)
    assert [r.url for r in records] == ["https://site.com/dir/c.png"]


def test_deep_inspection_measures_and_filters():
    routes = {
        "https://site.com/dir/big.png": make_image("PNG", (80, 60)),
        "https://site.com/dir/pixel.gif": make_image("GIF", (1, 1)),
    }
    html = '<img src="big.png" width="1" height="1"><img src="pixel.gif" width="500" height="500">'
    inspector = ImageInspector(FakeFetcher(routes))
    records, errors = collect_images(_imgs(html), BASE, inspector=inspector)
    assert errors == []
    assert len(records) == 1
    rec = records[0]
    assert (rec.width, rec.height) == (80, 60)
    assert rec.reported_type == "png"
    assert rec.actual_type == "png"
    assert rec.mime_type == "image/png"


def test_failed_inspection_keeps_image_and_reports_error():
    routes = {"https://site.com/dir/ok.jpg": make_image("JPEG", (30, 30))}
    html = '<img src="missing.png" alt="gone"><img src="ok.jpg">'
    fetcher = FakeFetcher(routes)
    records, errors = collect_images(_imgs(html), BASE, inspector=ImageInspector(fetcher))
    assert [r.url for r in records] == ["https://site.com/dir/missing.png", "https://site.com/dir/ok.jpg"]
    assert records[0].width == UNKNOWN and records[0].description == "gone"
    assert records[1].width == 30
    assert len(errors) == 1
    assert errors[0].kind is ErrorKind.TRANSPORT
    assert fetcher.calls == ["https://site.com/dir/missing.png", "https://site.com/dir/ok.jpg"]


def test_counters():
    runlog = RunLogger()
    collect_images(_imgs('<img src="a.png" width="1"><img src="b.png">'), BASE, runlog=runlog)
    c = runlog.counters
    assert (c["IMG_ORIG"], c["IMG_KEPT"], c["IMG_FILTERED"]) == (2, 1, 1)


def test_to_dict_drops_unset_fields():
    rec = ImageRecord(url="http://x/a.png")
    assert rec.to_dict() == {"url": "http://x/a.png", "width": UNKNOWN, "height": UNKNOWN}
