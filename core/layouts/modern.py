"""
Modern Layout
Left accent border on the header and solid badge headings.
"""

from typing import List

from .base_layout import (
    BLUE_600,
    GRAY_600,
    GRAY_700,
    GRAY_900,
    TEXT_BASE,
    TEXT_SM,
    WHITE,
    BaseLayout,
    LayoutStyle,
    css,
    rule,
)


class ModernLayout(BaseLayout):
    """
    Modern - Single column with a blue accent

    Features:
    - Left-bordered header with the title in blue
    - Section titles as white-on-blue badges
    - Compact "Tech:" lines
    """

    name = "modern"

    @property
    def display_name(self) -> str:
        return "Modern"

    @property
    def description(self) -> str:
        return "Contemporary layout with a blue accent border and badge headings"

    @property
    def best_for(self) -> List[str]:
        return ["Tech", "Startups", "Product"]

    @property
    def style(self) -> LayoutStyle:
        return LayoutStyle(
            header=css(rule("left", 4, BLUE_600), "padding-left: 16px", "padding-bottom: 16px",
                       "margin-bottom: 24px"),
            name=css("font-size: 24px", "line-height: 32px", "font-weight: 700",
                     "margin-bottom: 4px", f"color: {GRAY_900}"),
            title=css(TEXT_BASE, f"color: {BLUE_600}", "font-weight: 500", "margin-bottom: 12px"),
            contact=css("display: flex", "flex-wrap: wrap", "column-gap: 16px", "row-gap: 4px",
                        TEXT_SM, f"color: {GRAY_600}"),
            icon_size=16,
            links=css("display: flex", "flex-wrap: wrap", "column-gap: 16px", "margin-top: 8px",
                      TEXT_SM, f"color: {BLUE_600}"),
            link=css("display: flex", "align-items: center", "column-gap: 4px", f"color: {BLUE_600}"),
            heading_kind="badge",
            heading=css(TEXT_BASE, "font-weight: 700", "display: flex", "align-items: center",
                        "margin-bottom: 8px"),
            badge=css(f"background-color: {BLUE_600}", f"color: {WHITE}", "padding-left: 12px",
                      "padding-right: 12px", "padding-top: 4px", "padding-bottom: 4px",
                      TEXT_SM, "text-transform: uppercase"),
            section="margin-bottom: 24px",
            skill_row="margin-bottom: 8px",
            entry="margin-bottom: 16px",
            entry_company=css(TEXT_SM, "font-weight: 500", f"color: {GRAY_700}"),
            company_separator=" • ",
            tech=css("font-size: 12px", "line-height: 16px", f"color: {GRAY_600}", "margin-top: 8px"),
            tech_label="Tech:",
            project_role=css("font-size: 12px", "line-height: 16px", f"color: {BLUE_600}",
                             "margin-bottom: 4px"),
            project_link=css("font-size: 12px", "line-height: 16px", f"color: {BLUE_600}",
                             "margin-left: 8px"),
        )
