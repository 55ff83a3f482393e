"""
Rasterizer
Lays the export HTML out with WeasyPrint on one tall page the width of the
preview viewport, then captures that page into a Pillow bitmap with PyMuPDF.

Link rectangles are read back from the intermediate PDF so the pipeline can
re-project them onto the final page.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import fitz  # PyMuPDF
from PIL import Image, ImageColor

logger = logging.getLogger(__name__)

# Preview width of the resume in CSS pixels (A4 at 96 dpi)
VIEWPORT_WIDTH = 794

# Tallest capture; PDF pages stop at 14400pt
MAX_CAPTURE_HEIGHT = 19200

PT_PER_PX = 0.75

_RGB_RE = re.compile(r"^\s*rgba?\(\s*([\d.]+)[\s,]+([\d.]+)[\s,]+([\d.]+)", re.IGNORECASE)


@dataclass
class AnchorBox:
    """A hyperlink area in CSS pixels from the top-left of the capture."""
    href: str
    x: float
    y: float
    width: float
    height: float


@dataclass
class Snapshot:
    image: Image.Image
    width: float
    height: float
    anchors: List[AnchorBox] = field(default_factory=list)


def hex_color(value: Optional[str], default: str = "#000000") -> str:
    """CSS color -> #rrggbb for SVG paint; alpha is dropped."""
    value = (value or "").strip()
    match = _RGB_RE.match(value)
    if match:
        channels = [max(0, min(255, int(round(float(c))))) for c in match.groups()]
        return "#{:02x}{:02x}{:02x}".format(*channels)
    try:
        rgb = ImageColor.getrgb(value)
    except ValueError:
        logger.debug(f"Unparseable icon color {value!r}, using {default}")
        return default
    return "#{:02x}{:02x}{:02x}".format(*rgb[:3])


def render_svg(markup: str, width: float, height: float, scale: float = 2.0) -> Image.Image:
    """
    Paint a standalone SVG document to an RGBA bitmap of
    (width * scale) x (height * scale) pixels.
    """
    size = (max(1, int(round(width * scale))), max(1, int(round(height * scale))))
    doc = fitz.open(stream=markup.encode("utf-8"), filetype="svg")
    try:
        page = doc[0]
        matrix = fitz.Matrix(size[0] / page.rect.width, size[1] / page.rect.height)
        pix = page.get_pixmap(matrix=matrix, alpha=True)
    finally:
        doc.close()
    image = Image.frombytes("RGBA", (pix.width, pix.height), pix.samples)
    if image.size != size:
        image = image.resize(size, Image.Resampling.LANCZOS)
    return image


def content_bottom(page: "fitz.Page") -> float:
    """Lowest painted point on the page, ignoring full-page backdrops."""
    bottom = 0.0
    for _, bbox in page.get_bboxlog():
        rect = fitz.Rect(bbox)
        if rect.is_empty:
            continue
        if rect.y0 <= 0 and rect.y1 >= page.rect.height:
            continue
        bottom = max(bottom, rect.y1)
    return min(max(bottom, 1.0), page.rect.height)


class Rasterizer:
    """
    Usage:
        snapshot = Rasterizer(scale=2).rasterize(html)
        snapshot.image, snapshot.anchors
    """

    def __init__(
        self,
        scale: float = 2.0,
        background: str = "#ffffff",
        viewport_width: float = VIEWPORT_WIDTH,
        max_height: float = MAX_CAPTURE_HEIGHT,
        base_url: Optional[str] = None,
    ):
        self.scale = scale
        self.background = background
        self.viewport_width = viewport_width
        self.max_height = max_height
        self.base_url = base_url

    def render_pdf(self, html: str) -> bytes:
        """Lay the HTML out on a single viewport-wide page."""
        try:
            from weasyprint import CSS, HTML
        except ImportError:
            raise RuntimeError("WeasyPrint not found. Please install: pip install weasyprint")

        page_css = CSS(string=(
            f"@page {{ size: {self.viewport_width}px {self.max_height}px; margin: 0 }}"
        ))
        return HTML(string=html, base_url=self.base_url).write_pdf(stylesheets=[page_css])

    def rasterize(self, html: str) -> Snapshot:
        pdf_bytes = self.render_pdf(html)
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
        try:
            if len(doc) > 1:
                logger.warning(f"Export content taller than {self.max_height}px; only the first page is captured")
            page = doc[0]
            clip = fitz.Rect(0, 0, page.rect.width, content_bottom(page))
            zoom = self.scale / PT_PER_PX
            pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), clip=clip, alpha=True)
            anchors = self._anchors(page, clip)
        finally:
            doc.close()

        capture = Image.frombytes("RGBA", (pix.width, pix.height), pix.samples)
        image = Image.new("RGB", capture.size, self._backdrop())
        image.paste(capture, (0, 0), capture)

        logger.debug(f"Rasterized {image.size[0]}x{image.size[1]} with {len(anchors)} links")
        return Snapshot(
            image=image,
            width=clip.width / PT_PER_PX,
            height=clip.height / PT_PER_PX,
            anchors=anchors,
        )

    @staticmethod
    def _anchors(page: "fitz.Page", clip: "fitz.Rect") -> List[AnchorBox]:
        anchors: List[AnchorBox] = []
        for link in page.get_links():
            if link.get("kind") != fitz.LINK_URI or not link.get("uri"):
                continue
            rect = fitz.Rect(link["from"]) & clip
            if rect.is_empty:
                continue
            anchors.append(AnchorBox(
                href=link["uri"],
                x=rect.x0 / PT_PER_PX,
                y=rect.y0 / PT_PER_PX,
                width=rect.width / PT_PER_PX,
                height=rect.height / PT_PER_PX,
            ))
        return anchors

    def _backdrop(self) -> Tuple[int, int, int]:
        return ImageColor.getrgb(hex_color(self.background, "#ffffff"))
