"""
Render Tree
===========

The raster export path works on a BeautifulSoup tree of the layout HTML.
Layouts put every visual choice in inline `style` attributes, so reading,
overriding and restoring styles only needs these helpers.
"""

import copy
from typing import Dict, List, Optional

from bs4 import BeautifulSoup, Tag

SVG_NS = "http://www.w3.org/2000/svg"

# html.parser lowercases attribute names; SVG renderers need the camelCase ones back
SVG_ATTRIBUTE_CASE = {
    "viewbox": "viewBox",
    "preserveaspectratio": "preserveAspectRatio",
}


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML document or fragment."""
    return BeautifulSoup(html, "html.parser")


def clone(tree: BeautifulSoup) -> BeautifulSoup:
    """Deep copy of a parsed document."""
    return copy.copy(tree)


def parse_style(value: Optional[str]) -> Dict[str, str]:
    """'color: red; margin-top: 4px' -> {'color': 'red', 'margin-top': '4px'}"""
    declarations: Dict[str, str] = {}
    if not value:
        return declarations
    for part in value.split(";"):
        if ":" not in part:
            continue
        name, _, val = part.partition(":")
        name = name.strip().lower()
        val = val.strip()
        if name and val:
            declarations[name] = val
    return declarations


def serialize_style(style: Dict[str, str]) -> str:
    return "; ".join(f"{name}: {value}" for name, value in style.items())


def inline_styles(tree: BeautifulSoup) -> List[Optional[str]]:
    """Snapshot of every element's `style` attribute, in document order."""
    return [node.get("style") for node in tree.find_all(True)]


def inherited_color(node: Optional[Tag]) -> Optional[str]:
    """The `color` in effect at `node`: its own or the nearest ancestor's."""
    while isinstance(node, Tag):
        color = parse_style(node.get("style")).get("color")
        if color:
            return color
        node = node.parent
    return None


def svg_document(svg: Tag, color: str) -> str:
    """Standalone SVG markup for an inline icon, with currentColor resolved."""
    node = copy.copy(svg)
    for lower, proper in SVG_ATTRIBUTE_CASE.items():
        if lower in node.attrs:
            node.attrs[proper] = node.attrs.pop(lower)
    node.attrs.pop("style", None)
    node["xmlns"] = SVG_NS
    return str(node).replace("currentColor", color)
