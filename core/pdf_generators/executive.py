"""Executive layout: heavy rule under the name, boxed summary, three-column contact."""

from core.resume.sections import EXPERIENCE, PROJECTS, SKILLS, SUMMARY

from .base_generator import (
    BLACK,
    BLUE_700,
    DEFAULT_HEADINGS,
    GRAY_50,
    GRAY_700,
    GRAY_900,
    BaseGenerator,
    PdfStyle,
)
from .builder import PT_TO_MM


class ExecutiveGenerator(BaseGenerator):

    style = PdfStyle(
        name="executive",
        primary=GRAY_900,
        secondary=GRAY_700,
        text=GRAY_700,
        accent=BLUE_700,
        headings={
            **DEFAULT_HEADINGS,
            SUMMARY: "Executive Summary",
            PROJECTS: "Key Projects",
            SKILLS: "Core Competencies",
        },
        heading_uppercase=True,
        heading_size=10,
        heading_rule_width=None,
        heading_space_after=2,
        section_order=(SUMMARY, EXPERIENCE, PROJECTS, SKILLS),
        section_gap=6,
        body_size=10.5,
        bullet="▪",
        entry_title_gap=4,
        company_separator=" | ",
        company_font="bold",
        company_size=10.5,
        company_gap=3,
        skill_label_size=10.5,
        tech_label="Technologies:",
        experience_tech_label="Key Technologies:",
        tech_inline=True,
        tech_separator=", ",
        project_link_label="View",
    )

    def draw_header(self):
        pdf = self.pdf
        style = self.style
        contact = self.document.contact

        self.text(contact.full_name, pdf.margin_left, "bold", 18, style.primary)
        pdf.add_space(3)
        pdf.add_horizontal_line(None, 3, BLACK)
        pdf.add_space(5)

        if contact.title:
            self.text(contact.title, pdf.margin_left, "bold", 12, style.secondary)
            pdf.add_space(6)

        # Contact grid: email/phone | location/linkedin | github/portfolio
        width = pdf.get_content_width()
        columns = [pdf.margin_left, pdf.margin_left + width / 3, pdf.margin_left + width * 2 / 3]
        icons = dict((icon, value) for icon, value in self.contact_icons())
        cells = [
            [("✉", icons.get("✉"), None), ("☎", icons.get("☎"), None)],
            [("⌂", icons.get("⌂"), None), ("▶", "LinkedIn Profile", contact.linkedin)],
            [("▶", "GitHub Profile", contact.github), ("▶", "Portfolio", contact.portfolio)],
        ]

        start_y = pdf.get_current_y()
        bottom = start_y
        for x, column in zip(columns, cells):
            y = start_y
            for icon, value, url in column:
                if url:
                    self.text(f"{icon} ", x, "normal", 10.5, style.secondary, y=y)
                    pdf.set_text_color(style.accent)
                    pdf.draw_link_text(value, x + 5, url, y=y)
                elif value and icon != "▶":
                    self.text(f"{icon} {value}", x, "normal", 10.5, style.secondary, y=y)
                else:
                    continue
                y += 4
            bottom = max(bottom, y)

        pdf.set_current_y(bottom)
        pdf.add_space(4)

    def draw_summary(self):
        """Gray box with a black left border."""
        pdf = self.pdf
        style = self.style
        size = style.summary_size
        line_mm = size * PT_TO_MM * style.summary_line_height
        max_width = pdf.get_content_width() - 12

        pdf.set_font("normal", size)
        lines = pdf.split_text(self.document.summary, max_width)
        box_height = len(lines) * line_mm + 10

        # A box taller than a page is drawn up to the bottom margin
        pdf.check_page_break(min(box_height, pdf.config.page_height - pdf.config.margin_top
                                 - pdf.config.margin_bottom))
        top = pdf.get_current_y() - 3
        visible = min(box_height, pdf.config.page_height - pdf.config.margin_bottom - top)
        pdf.add_filled_rect(pdf.margin_left, top, pdf.get_content_width(), visible, GRAY_50)
        pdf.add_vertical_line(pdf.margin_left, top, top + visible, 3, BLACK)

        x = pdf.margin_left + 6
        self.text(self.heading_label(SUMMARY), x, "bold", style.heading_size, style.primary)
        pdf.add_space(3)
        self.paragraph(self.document.summary, x, size, "normal", style.secondary,
                       line_height=style.summary_line_height, max_width=max_width)
        pdf.add_space(style.section_gap)
