"""
HTML Resume Layouts

Six presentations of the same resume document, all rendered from one
Jinja2 template driven by a per-layout LayoutStyle:

1. Classic - centered header, underlined uppercase headings
2. Modern - blue accent border, badge headings
3. Professional - gray header band, competencies grid
4. Minimal - light type, understated headings
5. Executive - heavy rule, three-column contact, boxed summary
6. Compact - small type, skills sidebar

Usage:
    from core.layouts import render_html, list_layouts

    html = render_html(document)               # document.layout
    html = render_html(document, "executive")
"""

import logging
from typing import Dict, List, Optional, Type, Union

from core.resume.schemas import DEFAULT_LAYOUT, Document, LayoutType, coerce_layout

from .base_layout import BaseLayout, LayoutStyle
from .classic import ClassicLayout
from .compact import CompactLayout
from .executive import ExecutiveLayout
from .icons import icon
from .minimal import MinimalLayout
from .modern import ModernLayout
from .professional import ProfessionalLayout

logger = logging.getLogger(__name__)

# Layout Registry
LAYOUTS: Dict[LayoutType, Type[BaseLayout]] = {
    LayoutType.CLASSIC: ClassicLayout,
    LayoutType.MODERN: ModernLayout,
    LayoutType.PROFESSIONAL: ProfessionalLayout,
    LayoutType.MINIMAL: MinimalLayout,
    LayoutType.EXECUTIVE: ExecutiveLayout,
    LayoutType.COMPACT: CompactLayout,
}


def get_layout(name: Union[str, LayoutType, None] = DEFAULT_LAYOUT) -> BaseLayout:
    """
    Get a layout instance by name.

    Args:
        name: Layout name (e.g., "classic", "modern"); unknown names give classic

    Returns:
        Layout instance
    """
    return LAYOUTS[coerce_layout(name)]()


def list_layouts() -> List[Dict]:
    """All layouts with display metadata, in registry order."""
    return [layout_cls().to_dict() for layout_cls in LAYOUTS.values()]


def render_html(document: Document, layout: Optional[Union[str, LayoutType]] = None) -> str:
    """Render a document with `layout`, defaulting to the document's own."""
    chosen = get_layout(layout if layout is not None else document.layout)
    return chosen.render(document)


__all__ = [
    "BaseLayout",
    "LayoutStyle",
    "LAYOUTS",
    "get_layout",
    "list_layouts",
    "render_html",
    "icon",
]
