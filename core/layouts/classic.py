"""
Classic Layout
Traditional centered header, uppercase headings over a thin rule.

Best for: corporate roles, conservative industries
"""

from typing import List

from .base_layout import GRAY_900, BaseLayout, LayoutStyle, css, rule


class ClassicLayout(BaseLayout):
    """
    Classic - Single column, centered header

    Features:
    - Centered uppercase name over a 2px rule
    - Contact line separated by bullets
    - Underlined section headings
    """

    name = "classic"

    @property
    def display_name(self) -> str:
        return "Classic"

    @property
    def description(self) -> str:
        return "Traditional single-column resume with a centered header"

    @property
    def best_for(self) -> List[str]:
        return ["Corporate", "Finance", "Law", "Government"]

    @property
    def style(self) -> LayoutStyle:
        return LayoutStyle(
            header=css("text-align: center", "padding-bottom: 16px", "margin-bottom: 24px",
                       rule("bottom", 2, GRAY_900)),
            name=css("font-size: 24px", "line-height: 32px", "font-weight: 700",
                     "text-transform: uppercase", "margin-bottom: 4px", f"color: {GRAY_900}"),
            contact=css("display: flex", "flex-wrap: wrap", "justify-content: center",
                        "column-gap: 12px", "row-gap: 4px", "font-size: 14px",
                        "line-height: 20px", "color: #4b5563"),
            contact_separator="•",
            links=css("display: flex", "flex-wrap: wrap", "justify-content: center",
                      "column-gap: 12px", "margin-top: 8px", "font-size: 12px",
                      "line-height: 16px"),
        )
