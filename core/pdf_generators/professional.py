"""Professional layout: gray header band, two-column contact grid and competencies."""

import math

from core.resume.sections import SKILLS, SUMMARY

from .base_generator import (
    BLUE_700,
    DEFAULT_HEADINGS,
    GRAY_100,
    GRAY_700,
    GRAY_900,
    BaseGenerator,
    PdfStyle,
)

HEADER_HEIGHT = 50


class ProfessionalGenerator(BaseGenerator):

    style = PdfStyle(
        name="professional",
        primary=GRAY_900,
        secondary=GRAY_700,
        text=GRAY_700,
        accent=BLUE_700,
        headings={**DEFAULT_HEADINGS, SKILLS: "Core Competencies"},
        heading_uppercase=True,
        heading_rule_width=1.5,
        heading_rule_color=GRAY_900,
        body_size=10.5,
        entry_title_gap=4,
        company_separator=", ",
        company_size=10.5,
        company_gap=3,
        skill_label_size=10.5,
        skills_inline=False,
        tech_label="Technologies:",
        tech_inline=True,
        tech_separator=", ",
    )

    def draw_header(self):
        pdf = self.pdf
        style = self.style
        contact = self.document.contact
        left_x = pdf.margin_left
        right_x = pdf.margin_left + pdf.get_content_width() / 2

        pdf.add_filled_rect(0, 0, pdf.config.page_width, HEADER_HEIGHT, GRAY_100)

        self.text(contact.full_name, left_x, "bold", 18, style.primary, y=18)
        if contact.title:
            self.text(contact.title, left_x, "normal", 12, style.text, y=25)

        # Two-column grid: email/phone left, location/links right
        icons = self.contact_icons()
        left_items = [item for item in icons if item[0] in ("✉", "☎")]
        right_items = [item for item in icons if item[0] == "⌂"]

        y = 33
        for icon, value in left_items:
            self.text(f"{icon} {value}", left_x, "normal", 10.5, style.text, y=y)
            y += 4

        y = 33
        for icon, value in right_items:
            self.text(f"{icon} {value}", right_x, "normal", 10.5, style.text, y=y)
            y += 4
        for link in contact.social_links():
            if y > HEADER_HEIGHT - 4:
                break
            self.text("▶ ", right_x, "normal", 10.5, style.text, y=y)
            pdf.set_text_color(style.accent)
            pdf.draw_link_text(link["label"], right_x + 5, link["url"], y=y)
            y += 4

        pdf.set_current_y(HEADER_HEIGHT + 8)

    def draw_summary(self):
        super().draw_summary()
        self.pdf.add_space(1)

    def draw_skills(self):
        """Skill categories split over two columns, left column gets the extra one."""
        pdf = self.pdf
        self.draw_heading(SKILLS)

        groups = self.document.skill_groups()
        midpoint = math.ceil(len(groups) / 2)

        def left():
            for group in groups[:midpoint]:
                self.draw_skill_group(group["label"], group["skills"])

        def right():
            for group in groups[midpoint:]:
                self.draw_skill_group(group["label"], group["skills"])

        pdf.add_two_columns(left, right, self.style.column_gap)
        pdf.add_space(self.style.section_gap)
