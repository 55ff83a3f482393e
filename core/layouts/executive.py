"""
Executive Layout
Oversized name over a heavy black rule, three-column contact block and a
boxed summary.
"""

from typing import List

from .base_layout import (
    BLACK,
    BLUE_700,
    DEFAULT_HEADINGS,
    FOOTER_SECTIONS,
    GRAY_50,
    GRAY_600,
    GRAY_700,
    GRAY_900,
    TEXT_4XL,
    TEXT_BASE,
    TEXT_LG,
    TEXT_SM,
    TEXT_XL,
    BaseLayout,
    LayoutStyle,
    css,
    rule,
)
from core.resume.sections import EXPERIENCE, PROJECTS, SKILLS, SUMMARY


class ExecutiveLayout(BaseLayout):
    """
    Executive - Senior leadership resume

    Features:
    - 36px name with a 4px black rule
    - Contact details and profile links across three columns
    - Summary in a shaded box, education and certifications side by side
    """

    name = "executive"

    @property
    def display_name(self) -> str:
        return "Executive"

    @property
    def description(self) -> str:
        return "Bold leadership layout with a heavy rule and three-column contact block"

    @property
    def best_for(self) -> List[str]:
        return ["Executives", "Directors", "Senior leadership"]

    @property
    def style(self) -> LayoutStyle:
        return LayoutStyle(
            header="margin-bottom: 24px",
            name=css(TEXT_4XL, "font-weight: 700", "margin-bottom: 4px", "padding-bottom: 8px",
                     f"color: {GRAY_900}", rule("bottom", 4, BLACK)),
            title=css(TEXT_XL, "font-weight: 600", f"color: {GRAY_700}", "margin-top: 12px",
                      "margin-bottom: 16px"),
            contact=css("display: grid", "grid-template-columns: repeat(3, minmax(0, 1fr))",
                        "column-gap: 24px", "row-gap: 4px", TEXT_SM, f"color: {GRAY_700}"),
            contact_item=css("display: flex", "align-items: center", "column-gap: 8px"),
            icon_size=16,
            icon_color=GRAY_600,
            links_inline=True,
            link=f"color: {BLUE_700}",
            link_labels={"LinkedIn": "LinkedIn Profile", "GitHub": "GitHub Profile",
                         "Portfolio": "Portfolio"},
            heading=css(TEXT_SM, "font-weight: 700", "text-transform: uppercase",
                        "margin-bottom: 12px", "padding-bottom: 8px", rule("bottom", 2, BLACK)),
            headings={**DEFAULT_HEADINGS, SUMMARY: "Executive Summary", SKILLS: "Core Competencies"},
            section="margin-bottom: 24px",
            summary=css(TEXT_BASE, "line-height: 1.625", f"color: {GRAY_700}",
                        f"background-color: {GRAY_50}", "padding: 16px", rule("left", 4, GRAY_900)),
            paragraph=css(TEXT_SM, "line-height: 1.625", f"color: {GRAY_700}"),
            skills=css("display: grid", "grid-template-columns: repeat(2, minmax(0, 1fr))",
                       "column-gap: 24px", "row-gap: 8px", TEXT_SM),
            skill_row="",
            entry="margin-bottom: 20px",
            entry_title=css(TEXT_LG, "font-weight: 700", f"color: {GRAY_900}"),
            entry_company=css(TEXT_BASE, "font-weight: 600", f"color: {GRAY_700}"),
            company_separator=" | ",
            entry_date=css(TEXT_SM, "font-weight: 600", f"color: {GRAY_600}", "white-space: nowrap",
                           "margin-left: 8px"),
            bullets=css("list-style-type: none", TEXT_SM, f"color: {GRAY_700}"),
            bullet_item="margin-bottom: 4px",
            tech=css(TEXT_SM, f"color: {GRAY_600}", "margin-top: 8px"),
            tech_label="Key Technologies:",
            columns="footer",
            section_order=(SUMMARY, EXPERIENCE, PROJECTS, SKILLS) + FOOTER_SECTIONS,
        )
