"""
Minimal Layout
Light display type, small letter-spaced headings and no decoration.
"""

from typing import List

from .base_layout import (
    FOOTER_SECTIONS,
    GRAY_200,
    GRAY_500,
    GRAY_600,
    GRAY_700,
    GRAY_900,
    TEXT_5XL,
    TEXT_BASE,
    TEXT_SM,
    TEXT_XL,
    TEXT_XS,
    BaseLayout,
    LayoutStyle,
    css,
    rule,
)
from core.resume.sections import CERTIFICATIONS, EDUCATION, EXPERIENCE, PROJECTS, SKILLS, SUMMARY


class MinimalLayout(BaseLayout):
    """
    Minimal - Typography first

    Features:
    - 48px light name
    - Contact line without icons under a hairline
    - Education and certifications side by side at the end
    """

    name = "minimal"

    @property
    def display_name(self) -> str:
        return "Minimal"

    @property
    def description(self) -> str:
        return "Whitespace-driven layout with understated headings"

    @property
    def best_for(self) -> List[str]:
        return ["Design", "Writing", "Research"]

    @property
    def style(self) -> LayoutStyle:
        return LayoutStyle(
            header="margin-bottom: 32px",
            name=css(TEXT_5XL, "font-weight: 300", "margin-bottom: 4px", f"color: {GRAY_900}"),
            title=css(TEXT_XL, f"color: {GRAY_600}", "margin-bottom: 16px"),
            contact=css("display: flex", "flex-wrap: wrap", "column-gap: 12px", "row-gap: 4px",
                        TEXT_SM, f"color: {GRAY_600}", rule("top", 1, GRAY_200), "padding-top: 12px"),
            contact_item="",
            contact_icons=False,
            contact_separator="•",
            links_inline=True,
            link_icons=False,
            link=f"color: {GRAY_900}",
            heading_kind="plain",
            heading=css(TEXT_XS, "font-weight: 700", f"color: {GRAY_500}", "text-transform: uppercase",
                        "margin-bottom: 12px"),
            headings={
                SUMMARY: "About",
                EXPERIENCE: "Experience",
                PROJECTS: "Projects",
                SKILLS: "Skills",
                EDUCATION: "Education",
                CERTIFICATIONS: "Certifications",
            },
            section="margin-bottom: 32px",
            paragraph=css(TEXT_BASE, "line-height: 1.625", f"color: {GRAY_700}"),
            entry="margin-bottom: 24px",
            entry_title=css("font-size: 18px", "line-height: 28px", "font-weight: 500",
                            f"color: {GRAY_900}"),
            entry_company=css(TEXT_BASE, f"color: {GRAY_600}"),
            company_separator=" · ",
            entry_date=css(TEXT_SM, f"color: {GRAY_500}", "white-space: nowrap", "margin-left: 8px"),
            bullets=css("list-style-type: none", TEXT_BASE, f"color: {GRAY_700}"),
            bullet_item="margin-bottom: 4px",
            tech=css(TEXT_SM, f"color: {GRAY_500}", "margin-top: 8px"),
            tech_label="",
            skills=css(TEXT_BASE),
            skill_row="margin-bottom: 8px",
            skill_label=css("font-weight: 500", f"color: {GRAY_900}"),
            credential_title=css(TEXT_BASE, "font-weight: 500", f"color: {GRAY_900}"),
            credential_issuer=css(TEXT_SM, f"color: {GRAY_600}"),
            credential_date=css(TEXT_SM, f"color: {GRAY_500}", "white-space: nowrap", "margin-left: 8px"),
            columns="footer",
            section_order=(SUMMARY, EXPERIENCE, PROJECTS, SKILLS) + FOOTER_SECTIONS,
            column_gap=32,
        )
