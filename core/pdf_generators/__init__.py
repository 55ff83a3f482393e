"""
Direct-Draw PDF Generators

One generator per resume layout, each drawing positioned text, lines and
rectangles onto a PDFBuilder page:

1. classic - centered header, underlined headings
2. modern - blue left border, badge headings
3. professional - gray header band, two-column competencies
4. minimal - light type, small gray headings
5. executive - heavy rule, boxed summary
6. compact - small type, 1:2 sidebar

Usage:
    from core.pdf_generators import generate_pdf

    pdf = generate_pdf(document)          # uses document.layout
    pdf = generate_pdf(document, "modern")
    data = pdf.to_bytes()
"""

import logging
from typing import Dict, List, Optional, Type, Union

from core.resume.schemas import DEFAULT_LAYOUT, Document, LayoutType, coerce_layout

from .base_generator import BaseGenerator, PdfStyle
from .builder import PDFBuilder, PDFConfig
from .classic import ClassicGenerator
from .compact import CompactGenerator
from .executive import ExecutiveGenerator
from .fonts import FontManager, get_font_manager
from .minimal import MinimalGenerator
from .modern import ModernGenerator
from .professional import ProfessionalGenerator

logger = logging.getLogger(__name__)

# Generator Registry
GENERATORS: Dict[LayoutType, Type[BaseGenerator]] = {
    LayoutType.CLASSIC: ClassicGenerator,
    LayoutType.MODERN: ModernGenerator,
    LayoutType.PROFESSIONAL: ProfessionalGenerator,
    LayoutType.MINIMAL: MinimalGenerator,
    LayoutType.EXECUTIVE: ExecutiveGenerator,
    LayoutType.COMPACT: CompactGenerator,
}


def get_generator(layout: Union[str, LayoutType, None] = DEFAULT_LAYOUT) -> Type[BaseGenerator]:
    """Generator class for a layout; unknown names fall back to classic."""
    return GENERATORS[coerce_layout(layout)]


def generate_pdf(
    document: Document,
    layout: Union[str, LayoutType, None] = None,
    font_manager: Optional[FontManager] = None,
) -> PDFBuilder:
    """
    Draw a document with the generator for `layout`.

    Args:
        document: Resume content
        layout: Layout name; defaults to the document's own layout

    Returns:
        The finished PDFBuilder (call to_bytes() or save())
    """
    generator_cls = get_generator(layout if layout is not None else document.layout)
    logger.info(f"Generating {generator_cls.style.name} PDF for {document.contact.full_name}")
    return generator_cls(document, font_manager=font_manager).generate()


def list_generators() -> List[str]:
    return [layout.value for layout in GENERATORS]


__all__ = [
    "BaseGenerator",
    "PdfStyle",
    "PDFBuilder",
    "PDFConfig",
    "FontManager",
    "get_font_manager",
    "GENERATORS",
    "get_generator",
    "generate_pdf",
    "list_generators",
]
