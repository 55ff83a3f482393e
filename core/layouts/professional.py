"""
Professional Layout
Gray header band with a two-column contact grid; competencies in two columns.
"""

from typing import List

from .base_layout import (
    BLUE_700,
    DEFAULT_HEADINGS,
    GRAY_100,
    GRAY_700,
    GRAY_900,
    TEXT_3XL,
    TEXT_BASE,
    TEXT_LG,
    TEXT_SM,
    BaseLayout,
    LayoutStyle,
    css,
    rule,
)
from core.resume.sections import SKILLS


class ProfessionalLayout(BaseLayout):
    """
    Professional - Banded header

    Features:
    - Full-bleed gray header band
    - Contact details and profile links in a 2-column grid
    - Heavy rules under uppercase headings
    """

    name = "professional"

    @property
    def display_name(self) -> str:
        return "Professional"

    @property
    def description(self) -> str:
        return "Polished layout with a shaded header band and core competencies grid"

    @property
    def best_for(self) -> List[str]:
        return ["Consulting", "Management", "Sales"]

    @property
    def style(self) -> LayoutStyle:
        return LayoutStyle(
            header=css(f"background-color: {GRAY_100}", "margin-left: -48px", "margin-right: -48px",
                       "margin-top: -48px", "padding-left: 48px", "padding-right: 48px",
                       "padding-top: 32px", "padding-bottom: 24px", "margin-bottom: 24px"),
            name=css(TEXT_3XL, "font-weight: 700", "margin-bottom: 8px", f"color: {GRAY_900}"),
            title=css(TEXT_LG, f"color: {GRAY_700}", "margin-bottom: 12px"),
            contact=css("display: grid", "grid-template-columns: repeat(2, minmax(0, 1fr))",
                        "gap: 8px", TEXT_SM, f"color: {GRAY_700}"),
            contact_item=css("display: flex", "align-items: center", "column-gap: 8px"),
            icon_size=16,
            icon_color="#4b5563",
            links_inline=True,
            link=f"color: {BLUE_700}",
            heading=css(TEXT_BASE, "font-weight: 700", "text-transform: uppercase",
                        "margin-bottom: 8px", "padding-bottom: 4px", rule("bottom", 2, GRAY_900)),
            headings={**DEFAULT_HEADINGS, SKILLS: "Core Competencies"},
            section="margin-bottom: 24px",
            paragraph=css(TEXT_BASE, "line-height: 1.625", f"color: {GRAY_700}"),
            skills=css("display: grid", "grid-template-columns: repeat(2, minmax(0, 1fr))",
                       "column-gap: 16px", "row-gap: 4px", TEXT_BASE),
            skill_row="",
            entry="margin-bottom: 16px",
            entry_title=css(TEXT_BASE, "font-weight: 700", f"color: {GRAY_900}"),
            entry_company=css(TEXT_SM, "font-weight: 600", f"color: {GRAY_700}"),
            company_separator=" | ",
            entry_date=css(TEXT_SM, "color: #4b5563", "white-space: nowrap", "margin-left: 8px"),
            bullets=css("list-style-type: disc", "padding-left: 20px", TEXT_SM, f"color: {GRAY_700}"),
            tech_label="Technologies:",
        )
