"""
Tests for the raster export path: render tree helpers, the WeasyPrint/PyMuPDF
rasterizer and the RasterExporter pipeline.
"""

import base64
from unittest.mock import MagicMock

import fitz
import pytest
from PIL import Image
from reportlab.lib.pagesizes import A4

from core.export import (
    GENERIC_FAILURE,
    AnchorBox,
    ExportError,
    IconSubstitution,
    RasterExporter,
    Rasterizer,
    Snapshot,
    StyleFixup,
    clone,
    export_document,
    inline_styles,
    parse_html,
    render_svg,
)
from core.export.pipeline import is_external_link, safe_filename
from core.export.rasterizer import hex_color
from core.export.render_tree import inherited_color, parse_style, svg_document

ICON_SVG = (
    '<svg width="16" height="16" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">'
    '<circle cx="12" cy="12" r="8"></circle><line x1="4" y1="4" x2="20" y2="20"></line></svg>'
)

LAB_HTML = (
    '<html><head><title>x</title></head>'
    '<body style="margin: 0">'
    '<div style="color: lab(50 20 -30); background-color: oklab(0.9 0 0); padding: 8px">'
    '<p style="border-bottom: 1px solid lab(80 0 0)">Hello world</p>'
    f'<span style="color: #333333">{ICON_SVG}<a href="https://example.com">Example</a></span>'
    '</div></body></html>'
)


class StubRasterizer:
    """Returns a fixed snapshot and records the HTML it was given."""

    def __init__(self, size=(1588, 400), anchors=None):
        self.size = size
        self.anchors = anchors or []
        self.html = None

    def rasterize(self, html):
        self.html = html
        return Snapshot(
            image=Image.new("RGB", self.size, "white"),
            width=self.size[0] / 2,
            height=self.size[1] / 2,
            anchors=list(self.anchors),
        )


@pytest.fixture
def exporter():
    return RasterExporter(scale=1)


# ==================== Render Tree ====================


class TestRenderTree:

    def test_parse_style(self):
        assert parse_style("color: red; margin-top:4px;;bad") == {"color": "red", "margin-top": "4px"}
        assert parse_style(None) == {}

    def test_clone_is_independent(self):
        tree = parse_html('<div style="color: red"><p style="color: blue">x</p></div>')
        copy = clone(tree)
        copy.find("p")["style"] = "color: green"
        assert tree.find("p")["style"] == "color: blue"

    def test_inherited_color(self):
        tree = parse_html('<div style="color: #123456"><p><span>x</span></p></div>')
        assert inherited_color(tree.find("span")) == "#123456"
        assert inherited_color(parse_html("<p>x</p>").find("p")) is None

    def test_svg_document_restores_case_and_color(self):
        svg = parse_html(ICON_SVG).find("svg")
        markup = svg_document(svg, "#ff0000")
        assert 'viewBox="0 0 24 24"' in markup
        assert 'xmlns="http://www.w3.org/2000/svg"' in markup
        assert "currentColor" not in markup
        assert 'stroke="#ff0000"' in markup
        # the inline element is untouched
        assert svg.get("stroke") == "currentColor"


# ==================== Rasterizer ====================


class TestHexColor:

    @pytest.mark.parametrize("value, expected", [
        ("#ff0000", "#ff0000"),
        ("rgb(10, 20, 30)", "#0a141e"),
        ("rgba(10, 20, 30, 0.5)", "#0a141e"),
        ("white", "#ffffff"),
        (None, "#000000"),
        ("not-a-color", "#000000"),
    ])
    def test_values(self, value, expected):
        assert hex_color(value) == expected


class TestRenderSvg:

    def test_bitmap_size_and_ink(self):
        svg = parse_html(ICON_SVG).find("svg")
        image = render_svg(svg_document(svg, "#ff0000"), 16, 16, scale=2)
        assert isinstance(image, Image.Image)
        assert image.mode == "RGBA"
        assert image.size == (32, 32)
        assert image.getbbox() is not None


class TestRasterizer:

    def test_capture_is_viewport_wide_and_cropped(self):
        html = '<body style="margin: 0"><div style="height: 100px; background-color: #ff0000"></div></body>'
        snapshot = Rasterizer(scale=2).rasterize(html)
        assert snapshot.image.size[0] == 794 * 2
        assert snapshot.height == pytest.approx(100, abs=1)
        assert snapshot.image.getpixel((10, 10)) == (255, 0, 0)

    def test_links_read_back_in_css_pixels(self):
        html = (
            '<body style="margin: 0"><div style="padding-top: 100px">'
            '<a href="https://example.com" style="display: block; width: 100px; height: 20px">x</a>'
            '</div></body>'
        )
        snapshot = Rasterizer(scale=1).rasterize(html)
        assert [a.href for a in snapshot.anchors] == ["https://example.com"]
        anchor = snapshot.anchors[0]
        assert anchor.y == pytest.approx(100, abs=1)
        assert anchor.width == pytest.approx(100, abs=1)
        assert anchor.height == pytest.approx(20, abs=1)


# ==================== Pipeline Steps ====================


class TestStyleFixup:

    def test_converts_and_restores(self):
        tree = parse_html(LAB_HTML)
        before = inline_styles(tree)
        fixup = StyleFixup(tree)
        assert fixup.apply() == 3
        assert all("lab(" not in (style or "") for style in inline_styles(tree))
        fixup.restore()
        assert inline_styles(tree) == before

    def test_inherited_color_pinned(self):
        tree = parse_html('<div style="color: lab(50 0 0)"><p>x</p></div>')
        StyleFixup(tree).apply()
        pinned = parse_style(tree.find("p")["style"])["color"]
        assert pinned.startswith("rgb(")
        assert pinned == parse_style(tree.find("div")["style"])["color"]

    def test_restore_removes_added_styles(self):
        tree = parse_html('<div style="color: #111111"><p>x</p></div>')
        fixup = StyleFixup(tree)
        fixup.apply()
        assert tree.find("p").has_attr("style")
        fixup.restore()
        assert not tree.find("p").has_attr("style")

    def test_gradient_backgrounds_dropped(self):
        tree = parse_html('<div style="background-image: linear-gradient(lab(50 0 0), white)">x</div>')
        StyleFixup(tree).apply()
        assert parse_style(tree.find("div")["style"])["background-image"] == "none"


class TestIconSubstitution:

    def test_swaps_and_restores(self):
        tree = parse_html(LAB_HTML)
        icons = IconSubstitution(tree, scale=1)
        assert icons.apply() == 1
        assert tree.find_all("svg") == []
        img = tree.find("img")
        assert img["src"].startswith("data:image/png;base64,")
        assert (img["width"], img["height"]) == ("16", "16")
        icons.restore()
        assert len(tree.find_all("svg")) == 1
        assert tree.find_all("img") == []


# ==================== Exporter ====================


class TestRasterExporter:

    def test_html_handed_to_rasterizer_is_normalized(self):
        stub = StubRasterizer()
        RasterExporter(scale=2, rasterizer=stub).export_html(LAB_HTML)
        assert "lab(" not in stub.html
        assert "<svg" not in stub.html
        assert "data:image/png;base64," in stub.html

    def test_caller_tree_unchanged(self):
        tree = parse_html(LAB_HTML)
        before = inline_styles(tree)
        RasterExporter(scale=2, rasterizer=StubRasterizer()).export(tree)
        assert inline_styles(tree) == before
        assert len(tree.find_all("svg")) == 1

    def test_failure_is_generic_and_leaves_tree_unchanged(self, exporter):
        tree = parse_html(LAB_HTML)
        before = inline_styles(tree)
        exporter.rasterizer = MagicMock()
        exporter.rasterizer.rasterize.side_effect = RuntimeError("canvas exploded")

        with pytest.raises(ExportError) as exc:
            exporter.export(tree)

        assert exc.value.message == GENERIC_FAILURE
        assert "canvas" not in str(exc.value)
        assert inline_styles(tree) == before

    def test_link_projected_onto_page(self):
        anchor = AnchorBox(href="https://example.com", x=0, y=100, width=100, height=20)
        exporter = RasterExporter(scale=2, rasterizer=StubRasterizer(anchors=[anchor]))
        result = exporter.export_html("<p>x</p>")
        factor = A4[0] / 794
        assert len(result.links) == 1
        link = result.links[0]
        assert link.url == "https://example.com"
        assert link.x == pytest.approx(0, abs=0.01)
        assert link.y == pytest.approx(100 * factor, rel=1e-3)
        assert link.width == pytest.approx(100 * factor, rel=1e-3)
        assert link.height == pytest.approx(20 * factor, rel=1e-3)

    def test_narrow_bitmap_is_centered(self):
        # Tall capture: height limits the ratio, so the image is centered horizontally
        exporter = RasterExporter(scale=1, rasterizer=StubRasterizer(size=(400, 2000)))
        result = exporter.export_html("<p>x</p>")
        assert result.ratio == pytest.approx(A4[1] / 2000)

    def test_internal_links_skipped(self):
        anchors = [
            AnchorBox(href="#top", x=0, y=0, width=10, height=10),
            AnchorBox(href="mailto:a@b.co", x=0, y=20, width=10, height=10),
        ]
        exporter = RasterExporter(scale=2, rasterizer=StubRasterizer(anchors=anchors))
        result = exporter.export_html("<p>x</p>")
        assert [link.url for link in result.links] == ["mailto:a@b.co"]

    def test_export_produces_one_page_pdf(self, exporter):
        result = exporter.export(parse_html(LAB_HTML), title="Jane Doe")
        assert result.pdf_bytes.startswith(b"%PDF")
        assert result.filename == "Jane Doe.pdf"
        assert result.ratio <= 1
        with fitz.open(stream=result.pdf_bytes, filetype="pdf") as doc:
            assert len(doc) == 1
            uris = [link["uri"] for link in doc[0].get_links()]
        assert uris == ["https://example.com"]

    def test_base64_transfer_encoding(self, exporter):
        result = exporter.export_html("<p>x</p>")
        assert base64.b64decode(result.pdf_base64) == result.pdf_bytes

    @pytest.mark.parametrize("layout", ["classic", "modern", "compact"])
    def test_export_document(self, full_document, exporter, layout):
        result = export_document(full_document, layout, exporter=exporter)
        assert result.pdf_bytes.startswith(b"%PDF")
        assert "https://github.com/janedoe" in {link.url for link in result.links}
        assert result.image_size[0] == 794


class TestHelpers:

    @pytest.mark.parametrize("href, expected", [
        ("https://example.com", True),
        ("http://example.com", True),
        ("mailto:jane@example.com", True),
        ("tel:+15550100", True),
        ("#section", False),
        ("/relative", False),
        ("", False),
    ])
    def test_is_external_link(self, href, expected):
        assert is_external_link(href) is expected

    def test_safe_filename(self):
        assert safe_filename('a/b:c*"') == "abc.pdf"
        assert safe_filename("") == "resume.pdf"
