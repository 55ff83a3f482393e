"""
Compact Layout
Small type with a 1:2 sidebar to fit a full career on one page.
"""

from typing import List

from .base_layout import (
    BLUE_700,
    DEFAULT_HEADINGS,
    GRAY_400,
    GRAY_600,
    GRAY_700,
    GRAY_800,
    GRAY_900,
    TEXT_2XL,
    TEXT_BASE,
    TEXT_SM,
    TEXT_XS,
    WHITE,
    BaseLayout,
    LayoutStyle,
    css,
    rule,
)
from core.resume.sections import CERTIFICATIONS, EDUCATION, EXPERIENCE, SKILLS, SUMMARY


class CompactLayout(BaseLayout):
    """
    Compact - Dense two-column resume

    Features:
    - Name and title beside a right-aligned contact stack
    - Skills, education and certifications in a narrow left column
    - Summary, experience and projects in the wide right column
    """

    name = "compact"

    @property
    def display_name(self) -> str:
        return "Compact"

    @property
    def description(self) -> str:
        return "Space-efficient layout with a skills sidebar"

    @property
    def best_for(self) -> List[str]:
        return ["Experienced candidates", "Engineering", "One-page resumes"]

    @property
    def style(self) -> LayoutStyle:
        return LayoutStyle(
            page=css(f"background-color: {WHITE}", "padding: 32px", "max-width: 794px",
                     "margin-left: auto", "margin-right: auto", f"color: {GRAY_900}", TEXT_SM),
            header_split=True,
            header=css("padding-bottom: 12px", "margin-bottom: 16px", rule("bottom", 1, GRAY_800)),
            name=css(TEXT_2XL, "font-weight: 700", "margin-bottom: 4px", f"color: {GRAY_900}"),
            title=css(TEXT_BASE, "font-weight: 500", f"color: {GRAY_700}"),
            contact=css("text-align: right", TEXT_XS, f"color: {GRAY_600}"),
            contact_item=css("display: flex", "align-items: center", "justify-content: flex-end",
                             "column-gap: 4px", "margin-bottom: 2px"),
            links=css("display: flex", "flex-wrap: wrap", "column-gap: 12px", "margin-top: 8px",
                      TEXT_XS, f"color: {BLUE_700}"),
            heading=css(TEXT_SM, "font-weight: 700", "text-transform: uppercase",
                        "margin-bottom: 4px", rule("bottom", 1, GRAY_400)),
            headings={**DEFAULT_HEADINGS, SUMMARY: "Summary", SKILLS: "Skills", EXPERIENCE: "Experience"},
            section="margin-bottom: 16px",
            paragraph=css(TEXT_XS, "line-height: 1.625", f"color: {GRAY_700}"),
            skills_kind="stacked",
            skills=css(TEXT_XS),
            entry="margin-bottom: 12px",
            entry_title=css(TEXT_SM, "font-weight: 700", f"color: {GRAY_900}"),
            entry_company=css(TEXT_XS, f"color: {GRAY_700}"),
            company_separator=" • ",
            bullets=css("list-style-type: disc", "padding-left: 16px", TEXT_XS, f"color: {GRAY_700}"),
            tech=css(TEXT_XS, f"color: {GRAY_600}", "margin-top: 4px"),
            tech_label="Tech:",
            credential_title=css(TEXT_XS, "font-weight: 600", f"color: {GRAY_900}"),
            credential_issuer=css(TEXT_XS, f"color: {GRAY_700}"),
            credential_date=css(TEXT_XS, f"color: {GRAY_600}", "white-space: nowrap", "margin-left: 8px"),
            columns="sidebar",
            sidebar=(SKILLS, EDUCATION, CERTIFICATIONS),
            column_gap=16,
        )
