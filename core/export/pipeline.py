"""
Raster Export Pipeline
======================

Turns a rendered resume (a parsed HTML tree) into a one-page A4 PDF holding
a single bitmap plus clickable link areas:

1. StyleFixup        - resolved colors written back as rgb() overrides
2. IconSubstitution  - inline <svg> icons swapped for same-size <img> bitmaps
3. Rasterize         - WeasyPrint layout, PyMuPDF capture at the oversampling factor
4. Restore           - substitutions and overrides reverted
5. Place             - bitmap scaled to fit A4, centered, top aligned
6. Links             - anchor boxes re-projected onto the page
7. Output            - PDF bytes / base64 for upload

Every export works on its own deep copy of the tree, so the caller's tree is
never mutated and concurrent exports cannot interfere. Any failure surfaces
as ExportError with a generic message; nothing partial is returned.
"""

import base64
import io
import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag
from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from config.settings import settings
from core.color import contains_perceptual_color, convert_lab_colors_to_rgb

from .rasterizer import VIEWPORT_WIDTH, AnchorBox, Rasterizer, hex_color, render_svg
from .render_tree import clone, inherited_color, parse_html, parse_style, serialize_style, svg_document

logger = logging.getLogger(__name__)

COLOR_PROPERTIES = (
    "color",
    "background-color",
    "border-color",
    "border-top-color",
    "border-right-color",
    "border-bottom-color",
    "border-left-color",
    "outline-color",
)

# Shorthands that may carry a color
COLOR_SHORTHANDS = (
    "background",
    "border",
    "border-top",
    "border-right",
    "border-bottom",
    "border-left",
    "outline",
)

EXTERNAL_SCHEMES = ("http", "https", "mailto", "tel")

GENERIC_FAILURE = "Failed to export PDF. Please try again."


class ExportError(Exception):
    """Raster export failed; the message is safe to show to users."""

    def __init__(self, message: str = GENERIC_FAILURE):
        super().__init__(message)
        self.message = message


# ============================================================================
# Step 1: Color Fix-up
# ============================================================================

class StyleFixup:
    """
    Writes every element's resolved color properties back as explicit inline
    overrides, converted from lab()/oklab() to rgb(). Inherited text color is
    pinned on each element; background images that use those functions are
    set to none.
    """

    def __init__(self, root: BeautifulSoup):
        self.root = root
        self._saved: List[Tuple[Tag, Optional[str]]] = []

    def apply(self) -> int:
        """Returns the number of declarations that changed."""
        changed = 0
        # Document order: parents are fixed before their children read `color`
        for node in self.root.find_all(True):
            original = node.get("style")
            declared = parse_style(original)
            resolved = dict(declared)
            for prop, value in declared.items():
                if prop == "background-image" and contains_perceptual_color(value):
                    resolved[prop] = "none"
                elif prop in COLOR_PROPERTIES or prop in COLOR_SHORTHANDS:
                    resolved[prop] = convert_lab_colors_to_rgb(value)
                if resolved[prop] != value:
                    changed += 1
            if "color" not in resolved:
                color = inherited_color(node.parent)
                if color:
                    resolved["color"] = color
            if resolved != declared:
                self._saved.append((node, original))
                node["style"] = serialize_style(resolved)
        logger.debug(f"Color fix-up: {changed} declarations converted")
        return changed

    def restore(self):
        for node, original in reversed(self._saved):
            if original is None:
                del node["style"]
            else:
                node["style"] = original
        self._saved = []


# ============================================================================
# Step 2: Icon Substitution
# ============================================================================

def png_data_uri(image: Image.Image) -> str:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


class IconSubstitution:
    """Swaps each inline <svg> for an <img> of the same size holding its bitmap."""

    def __init__(self, root: BeautifulSoup, scale: float = 2.0):
        self.root = root
        self.scale = scale
        self._swapped: List[Tuple[Tag, Tag]] = []

    def apply(self) -> int:
        for svg in self.root.find_all("svg"):
            style = parse_style(svg.get("style"))
            width, height = self._size(svg, style)
            color = hex_color(style.get("color") or inherited_color(svg.parent))
            bitmap = render_svg(svg_document(svg, color), width, height, self.scale)
            placeholder = self.root.new_tag("img", attrs={
                "src": png_data_uri(bitmap),
                "width": _px(width),
                "height": _px(height),
                "alt": "",
                "style": serialize_style({**style, "width": f"{_px(width)}px", "height": f"{_px(height)}px"}),
            })
            svg.replace_with(placeholder)
            self._swapped.append((svg, placeholder))
        logger.debug(f"Replaced {len(self._swapped)} inline icons")
        return len(self._swapped)

    @staticmethod
    def _size(svg: Tag, style) -> Tuple[float, float]:
        def number(value: Optional[str]) -> Optional[float]:
            try:
                return float(str(value).replace("px", ""))
            except (TypeError, ValueError):
                return None

        width = number(style.get("width")) or number(svg.get("width")) or 16.0
        height = number(style.get("height")) or number(svg.get("height")) or width
        return width, height

    def restore(self):
        for svg, placeholder in reversed(self._swapped):
            placeholder.replace_with(svg)
        self._swapped = []


def _px(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


# ============================================================================
# Result
# ============================================================================

@dataclass
class LinkRect:
    """A clickable area on the page, in points from the top-left corner."""
    url: str
    x: float
    y: float
    width: float
    height: float


@dataclass
class ExportResult:
    pdf_bytes: bytes
    filename: str
    image_size: Tuple[int, int]
    ratio: float
    links: List[LinkRect] = field(default_factory=list)

    @property
    def pdf_base64(self) -> str:
        """Transfer encoding used by the share/upload path."""
        return base64.b64encode(self.pdf_bytes).decode("ascii")


def is_external_link(href: str) -> bool:
    return urlparse(href or "").scheme.lower() in EXTERNAL_SCHEMES


def safe_filename(title: str) -> str:
    cleaned = "".join(c for c in (title or "") if c not in '\\/:*?"<>|').strip()
    return f"{cleaned or 'resume'}.pdf"


# ============================================================================
# Exporter
# ============================================================================

class RasterExporter:
    """
    Usage:
        exporter = RasterExporter()
        result = exporter.export(parse_html(html), title="Jane Doe")
        result.pdf_bytes, result.filename
    """

    def __init__(
        self,
        scale: Optional[float] = None,
        background: Optional[str] = None,
        viewport_width: float = VIEWPORT_WIDTH,
        rasterizer: Optional[Rasterizer] = None,
    ):
        self.scale = scale if scale is not None else settings.export_scale
        self.background = background or settings.export_background
        self.viewport_width = viewport_width
        self.rasterizer = rasterizer or Rasterizer(self.scale, self.background, viewport_width)

    def export(self, tree: BeautifulSoup, title: str = "resume") -> ExportResult:
        """
        Export a parsed resume to a one-page PDF.

        Raises:
            ExportError: on any failure, with a generic message
        """
        start = time.time()
        try:
            result = self._export(tree, title)
        except Exception as e:
            logger.error(f"Raster export failed: {e}", exc_info=True)
            raise ExportError() from e
        logger.info(
            f"Raster export '{result.filename}': {result.image_size[0]}x{result.image_size[1]}px, "
            f"{len(result.links)} links, {len(result.pdf_bytes)} bytes in {time.time() - start:.2f}s"
        )
        return result

    def export_html(self, html: str, title: str = "resume") -> ExportResult:
        try:
            tree = parse_html(html)
        except Exception as e:
            logger.error(f"Could not parse export HTML: {e}", exc_info=True)
            raise ExportError() from e
        return self.export(tree, title)

    def _export(self, tree: BeautifulSoup, title: str) -> ExportResult:
        work = clone(tree)
        fixup = StyleFixup(work)
        icons = IconSubstitution(work, self.scale)
        try:
            fixup.apply()
            icons.apply()
            snapshot = self.rasterizer.rasterize(str(work))
        finally:
            icons.restore()
            fixup.restore()
        return self._compose(snapshot.image, snapshot.anchors, title)

    def _compose(self, bitmap: Image.Image, anchors: List[AnchorBox], title: str) -> ExportResult:
        page_w, page_h = A4
        image_w, image_h = bitmap.size
        ratio = min(page_w / image_w, page_h / image_h)
        draw_w, draw_h = image_w * ratio, image_h * ratio
        offset_x = (page_w - draw_w) / 2

        buffer = io.BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=A4)
        pdf.setTitle(title)
        pdf.drawImage(ImageReader(bitmap), offset_x, page_h - draw_h, width=draw_w, height=draw_h)

        links: List[LinkRect] = []
        factor = self.scale * ratio
        for anchor in anchors:
            if not is_external_link(anchor.href):
                continue
            link = LinkRect(
                url=anchor.href,
                x=offset_x + anchor.x * factor,
                y=anchor.y * factor,
                width=anchor.width * factor,
                height=anchor.height * factor,
            )
            pdf.linkURL(
                link.url,
                (link.x, page_h - link.y - link.height, link.x + link.width, page_h - link.y),
                relative=0,
                thickness=0,
            )
            links.append(link)

        pdf.showPage()
        pdf.save()
        return ExportResult(
            pdf_bytes=buffer.getvalue(),
            filename=safe_filename(title),
            image_size=(image_w, image_h),
            ratio=ratio,
            links=links,
        )
