"""Minimal layout: light name, small gray headings, skills after projects."""

from core.resume.sections import EXPERIENCE, PROJECTS, SKILLS, SUMMARY

from .base_generator import (
    DEFAULT_HEADINGS,
    GRAY_200,
    GRAY_600,
    GRAY_700,
    GRAY_900,
    BaseGenerator,
    PdfStyle,
)


class MinimalGenerator(BaseGenerator):

    style = PdfStyle(
        name="minimal",
        primary=GRAY_900,
        secondary=GRAY_600,
        text=GRAY_700,
        accent=GRAY_900,
        rule=GRAY_200,
        headings={
            **DEFAULT_HEADINGS,
            SUMMARY: "About",
            SKILLS: "Skills",
            EXPERIENCE: "Experience",
        },
        heading_uppercase=True,
        heading_size=9,
        heading_color=GRAY_600,
        heading_rule_width=None,
        heading_space_after=2,
        section_order=(SUMMARY, EXPERIENCE, PROJECTS, SKILLS),
        section_gap=8,
        body_size=10.5,
        bullet="—",
        entry_title_size=10.5,
        entry_title_font="normal",
        entry_title_gap=3,
        company_separator=", ",
        company_font="normal",
        company_size=10.5,
        company_gap=3,
        entry_gap=6,
        skill_label_size=10.5,
        tech_label="",
        tech_inline=True,
        tech_separator=" • ",
        project_link_label="Link →",
    )

    def draw_header(self):
        pdf = self.pdf
        style = self.style
        contact = self.document.contact

        self.text(contact.full_name, pdf.margin_left, "normal", 18, style.primary)
        pdf.add_space(3)
        if contact.title:
            self.text(contact.title, pdf.margin_left, "normal", 12, style.secondary)
        pdf.add_space(6)

        pdf.add_horizontal_line(None, 0.5, style.rule)
        pdf.add_space(4)

        # Contact values then social links on one line
        pdf.set_font("normal", 10.5)
        x = pdf.margin_left
        first = True
        for part in self.contact_parts():
            if not first:
                pdf.set_text_color(style.secondary)
                x += pdf.draw_text(" • ", x)
            pdf.set_text_color(style.secondary)
            x += pdf.draw_text(part, x)
            first = False
        for link in contact.social_links():
            if not first:
                pdf.set_text_color(style.secondary)
                x += pdf.draw_text(" • ", x)
            pdf.set_text_color(style.primary)
            x += pdf.draw_link_text(link["label"], x, link["url"])
            first = False

        pdf.add_space(8)
