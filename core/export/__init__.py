"""
Raster export: resume HTML -> WeasyPrint layout -> bitmap -> one-page PDF.

Usage:
    from core.export import export_document

    result = export_document(document, layout="modern")
    result.pdf_bytes, result.filename, result.pdf_base64
"""

from typing import Optional, Union

from core.layouts import render_html
from core.resume.schemas import Document, LayoutType

from .pipeline import (
    GENERIC_FAILURE,
    ExportError,
    ExportResult,
    IconSubstitution,
    LinkRect,
    RasterExporter,
    StyleFixup,
)
from .rasterizer import AnchorBox, Rasterizer, Snapshot, render_svg
from .render_tree import clone, inline_styles, parse_html


def export_document(
    document: Document,
    layout: Optional[Union[str, LayoutType]] = None,
    title: Optional[str] = None,
    exporter: Optional[RasterExporter] = None,
) -> ExportResult:
    """Render a document's HTML layout and export it through the raster path."""
    exporter = exporter or RasterExporter()
    return exporter.export_html(render_html(document, layout), title or document.contact.full_name)


__all__ = [
    "GENERIC_FAILURE",
    "AnchorBox",
    "ExportError",
    "ExportResult",
    "IconSubstitution",
    "LinkRect",
    "RasterExporter",
    "Rasterizer",
    "Snapshot",
    "StyleFixup",
    "clone",
    "export_document",
    "inline_styles",
    "parse_html",
    "render_svg",
]
