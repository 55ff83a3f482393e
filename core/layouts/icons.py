"""
Inline SVG contact icons (24x24 viewBox, stroked with currentColor).

The export pipeline rasterizes each icon with PyMuPDF before layout.
"""

from typing import Dict, Optional

from markupsafe import Markup, escape

ICONS: Dict[str, str] = {
    "mail": (
        '<rect x="2" y="4" width="20" height="16" rx="2"></rect>'
        '<polyline points="22,6 12,13 2,6"></polyline>'
    ),
    "phone": (
        '<rect x="6" y="2" width="12" height="20" rx="2"></rect>'
        '<line x1="11" y1="18" x2="13" y2="18"></line>'
    ),
    "map-pin": (
        '<polygon points="12,22 5,13 5,8 8,4 12,2 16,4 19,8 19,13"></polygon>'
        '<circle cx="12" cy="9" r="3"></circle>'
    ),
    "linkedin": (
        '<rect x="2" y="9" width="4" height="12"></rect>'
        '<circle cx="4" cy="4" r="2"></circle>'
        '<polyline points="10,21 10,9"></polyline>'
        '<polyline points="10,14 13,10 17,9 21,11 22,14 22,21"></polyline>'
    ),
    "github": (
        '<circle cx="12" cy="12" r="10"></circle>'
        '<polyline points="9,22 9,18 8,15 6,12 8,8 12,7 16,8 18,12 16,15 15,18 15,22"></polyline>'
    ),
    "globe": (
        '<circle cx="12" cy="12" r="10"></circle>'
        '<line x1="2" y1="12" x2="22" y2="12"></line>'
        '<ellipse cx="12" cy="12" rx="4" ry="10"></ellipse>'
    ),
}

LINK_ICONS = {"LinkedIn": "linkedin", "GitHub": "github", "Portfolio": "globe"}


def icon(name: str, size: int = 16, color: Optional[str] = None) -> Markup:
    """<svg> markup for a named icon; unknown names render nothing."""
    body = ICONS.get(name)
    if body is None:
        return Markup("")
    style = f"width: {size}px; height: {size}px; flex-shrink: 0"
    if color:
        style += f"; color: {escape(color)}"
    return Markup(
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
        f'viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
        f'stroke-linecap="round" stroke-linejoin="round" data-icon="{name}" '
        f'style="{style}">{body}</svg>'
    )
