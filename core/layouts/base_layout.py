"""
Base Layout - style descriptor and renderer shared by the six HTML layouts

Every layout renders the same Jinja2 template (templates/resume.html.j2).
What differs between layouts is a LayoutStyle: inline CSS for each role in
the page (header, name, section heading, entry title, ...), the header
arrangement, the heading decoration and the column arrangement.

Inline styles only: the export pipeline reads and overrides styles on the
elements themselves, so nothing may come from a stylesheet.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.resume.schemas import Document
from core.resume.sections import (
    CERTIFICATIONS,
    EDUCATION,
    EXPERIENCE,
    PROJECTS,
    SKILLS,
    SUMMARY,
    present_sections,
)

from .icons import LINK_ICONS, icon

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "resume.html.j2"


# Tailwind palette. Blues are written the way Tailwind v4 emits them,
# as lab(), which the export pipeline normalises before rasterising.
GRAY_900 = "#111827"
GRAY_800 = "#1f2937"
GRAY_700 = "#374151"
GRAY_600 = "#4b5563"
GRAY_500 = "#6b7280"
GRAY_400 = "#9ca3af"
GRAY_200 = "#e5e7eb"
GRAY_100 = "#f3f4f6"
GRAY_50 = "#f9fafb"
BLUE_700 = "lab(36.9089 35.0961 -85.6872)"
BLUE_600 = "lab(44.0605 29.0279 -86.0352)"
BLACK = "#000000"
WHITE = "#ffffff"

DEFAULT_HEADINGS = {
    SUMMARY: "Professional Summary",
    SKILLS: "Technical Skills",
    EXPERIENCE: "Professional Experience",
    PROJECTS: "Projects",
    EDUCATION: "Education",
    CERTIFICATIONS: "Certifications",
}

DEFAULT_LINK_LABELS = {
    "LinkedIn": "LinkedIn",
    "GitHub": "GitHub",
    "Portfolio": "Portfolio",
}

MAIN_SECTIONS = (SUMMARY, SKILLS, EXPERIENCE, PROJECTS)
FOOTER_SECTIONS = (EDUCATION, CERTIFICATIONS)

# Tailwind text-* sizes: font-size / line-height
TEXT_XS = "font-size: 12px; line-height: 16px"
TEXT_SM = "font-size: 14px; line-height: 20px"
TEXT_BASE = "font-size: 16px; line-height: 24px"
TEXT_LG = "font-size: 18px; line-height: 28px"
TEXT_XL = "font-size: 20px; line-height: 28px"
TEXT_2XL = "font-size: 24px; line-height: 32px"
TEXT_3XL = "font-size: 30px; line-height: 36px"
TEXT_4XL = "font-size: 36px; line-height: 40px"
TEXT_5XL = "font-size: 48px; line-height: 1"


def css(*parts: str) -> str:
    """Join style fragments, dropping empties."""
    return "; ".join(p.strip().rstrip(";") for p in parts if p and p.strip())


def rule(side: str, width: int, color: str) -> str:
    """Longhand border declarations for one edge."""
    return css(
        f"border-{side}-width: {width}px",
        f"border-{side}-style: solid",
        f"border-{side}-color: {color}",
    )


@dataclass(frozen=True)
class LayoutStyle:
    """Inline CSS and arrangement choices for one layout."""

    # Page
    page: str = css(
        f"background-color: {WHITE}", "padding: 48px", "max-width: 794px",
        "margin-left: auto", "margin-right: auto", f"color: {GRAY_900}",
    )

    # Header: name and title above the contact block, or beside it
    header_split: bool = False
    header: str = ""
    header_main: str = ""
    name: str = css(TEXT_2XL, "font-weight: 700", "margin-bottom: 4px")
    title: str = css(TEXT_BASE, f"color: {GRAY_700}", "margin-bottom: 12px")
    contact: str = css(
        "display: flex", "flex-wrap: wrap", "column-gap: 12px", "row-gap: 4px",
        TEXT_SM, f"color: {GRAY_600}",
    )
    contact_item: str = css("display: flex", "align-items: center", "column-gap: 4px")
    contact_icons: bool = True
    icon_color: str = ""
    contact_separator: str = ""
    icon_size: int = 12
    links: str = css(
        "display: flex", "flex-wrap: wrap", "column-gap: 12px", "margin-top: 8px",
        TEXT_XS, f"color: {BLUE_700}",
    )
    link: str = css("display: flex", "align-items: center", "column-gap: 4px", f"color: {BLUE_700}")
    link_icons: bool = True
    # Social links share the contact block instead of their own row
    links_inline: bool = False
    link_labels: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_LINK_LABELS))

    # Section headings: rule | badge | plain
    heading_kind: str = "rule"
    heading: str = css(
        TEXT_BASE, "font-weight: 700", "text-transform: uppercase", "margin-bottom: 8px",
        "padding-bottom: 4px", rule("bottom", 1, GRAY_400),
    )
    badge: str = ""
    headings: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADINGS))
    section: str = "margin-bottom: 20px"

    # Body
    paragraph: str = css(TEXT_SM, "line-height: 1.625", f"color: {GRAY_700}")
    # Summary paragraph; falls back to `paragraph`
    summary: str = ""
    skills_kind: str = "inline"  # inline | stacked
    skills: str = css(TEXT_SM)
    skill_row: str = "margin-bottom: 4px"
    skill_label: str = css("font-weight: 600", f"color: {GRAY_900}")
    skill_values: str = css(f"color: {GRAY_700}")

    # Entries
    entry: str = "margin-bottom: 12px"
    entry_head: str = css(
        "display: flex", "justify-content: space-between", "align-items: flex-start",
        "margin-bottom: 4px",
    )
    entry_title: str = css(TEXT_SM, "font-weight: 700", f"color: {GRAY_900}")
    entry_company: str = css(TEXT_SM, "font-style: italic", f"color: {GRAY_700}")
    company_separator: str = ", "
    entry_date: str = css(TEXT_XS, f"color: {GRAY_600}", "white-space: nowrap", "margin-left: 8px")
    bullets: str = css(
        "list-style-type: disc", "padding-left: 20px", TEXT_SM, f"color: {GRAY_700}",
    )
    bullet_item: str = "margin-bottom: 2px"
    tech: str = css(TEXT_XS, f"color: {GRAY_600}", "font-style: italic", "margin-top: 4px")
    tech_label: str = "Technologies:"
    project_role: str = css(TEXT_XS, f"color: {GRAY_600}", "font-style: italic", "margin-bottom: 4px")
    project_link: str = css(TEXT_XS, f"color: {BLUE_700}", "margin-left: 8px")
    credential_title: str = css(TEXT_SM, "font-weight: 700", f"color: {GRAY_900}")
    credential_issuer: str = css(TEXT_SM, f"color: {GRAY_700}")
    credential_date: str = css(TEXT_SM, f"color: {GRAY_600}", "white-space: nowrap", "margin-left: 8px")
    credential_entry: str = "margin-bottom: 8px"

    # Columns: single | footer | sidebar
    columns: str = "single"
    section_order: Tuple[str, ...] = MAIN_SECTIONS + FOOTER_SECTIONS
    sidebar: Tuple[str, ...] = (SKILLS, EDUCATION, CERTIFICATIONS)
    column_gap: int = 24


_environment = None


def get_environment() -> Environment:
    """Shared Jinja2 environment with the icon helper."""
    global _environment
    if _environment is None:
        _environment = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(["html", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        _environment.globals["icon"] = icon
    return _environment


class BaseLayout(ABC):
    """
    One of the six HTML resume layouts.

    Subclasses describe themselves and return a LayoutStyle; rendering is
    shared.
    """

    name: str = ""

    @property
    @abstractmethod
    def display_name(self) -> str:
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @property
    @abstractmethod
    def style(self) -> LayoutStyle:
        pass

    @property
    def best_for(self) -> List[str]:
        return []

    def sections(self, document: Document) -> Dict[str, List[str]]:
        """Present section keys grouped by column."""
        style = self.style
        if style.columns == "sidebar":
            return {
                "main": present_sections(
                    document, [k for k in style.section_order if k not in style.sidebar]
                ),
                "sidebar": present_sections(document, style.sidebar),
                "footer": [],
            }
        if style.columns == "footer":
            return {
                "main": present_sections(
                    document, [k for k in style.section_order if k not in FOOTER_SECTIONS]
                ),
                "sidebar": [],
                "footer": present_sections(document, FOOTER_SECTIONS),
            }
        return {"main": present_sections(document, style.section_order), "sidebar": [], "footer": []}

    def contact_items(self, document: Document) -> List[Dict[str, str]]:
        """Email, phone and location lines that are filled in."""
        contact = document.contact
        fields = [("mail", contact.email), ("phone", contact.phone), ("map-pin", contact.location)]
        return [{"icon": name, "text": value} for name, value in fields if value]

    def social_links(self, document: Document) -> List[Dict[str, str]]:
        labels = self.style.link_labels
        return [
            {"icon": LINK_ICONS[link["label"]], "label": labels.get(link["label"], link["label"]),
             "url": link["url"]}
            for link in document.contact.social_links()
        ]

    def render(self, document: Document) -> str:
        """Document -> standalone HTML page."""
        template = get_environment().get_template(TEMPLATE_NAME)
        html = template.render(
            layout=self,
            style=self.style,
            document=document,
            contact=document.contact,
            contact_items=self.contact_items(document),
            social_links=self.social_links(document),
            sections=self.sections(document),
            skill_groups=document.skill_groups(),
        )
        logger.debug(f"Rendered {self.name} layout ({len(html)} chars)")
        return html

    def to_dict(self) -> Dict:
        return {
            "id": self.name,
            "name": self.display_name,
            "description": self.description,
            "best_for": self.best_for,
            "columns": self.style.columns,
        }
