"""Compact layout: small type, right-aligned contact stack and a 1:2 sidebar."""

from core.resume.schemas import Certification, Education
from core.resume.sections import (
    CERTIFICATIONS,
    EDUCATION,
    EXPERIENCE,
    PROJECTS,
    SKILLS,
    SUMMARY,
    present_sections,
)

from .base_generator import (
    BLUE_700,
    DEFAULT_HEADINGS,
    GRAY_600,
    GRAY_700,
    GRAY_800,
    GRAY_900,
    BaseGenerator,
    PdfStyle,
)

SIDEBAR = (SKILLS, EDUCATION, CERTIFICATIONS)
MAIN = (SUMMARY, EXPERIENCE, PROJECTS)


class CompactGenerator(BaseGenerator):

    style = PdfStyle(
        name="compact",
        primary=GRAY_900,
        secondary=GRAY_700,
        text=GRAY_600,
        accent=BLUE_700,
        rule=GRAY_800,
        headings={
            **DEFAULT_HEADINGS,
            SUMMARY: "Summary",
            SKILLS: "Skills",
            EXPERIENCE: "Experience",
        },
        heading_uppercase=True,
        heading_size=9,
        heading_space_after=2,
        footer_columns=False,
        summary_size=9,
        summary_line_height=1.4,
        body_size=9,
        bullet_indent=2,
        bullet_text_indent=6,
        entry_title_size=10,
        entry_title_gap=3,
        date_size=9,
        company_separator=" • ",
        company_size=8,
        company_gap=2,
        entry_gap=3,
        skills_inline=False,
        skill_label_size=9,
        tech_inline=True,
        tech_separator=", ",
        tech_label="Tech:",
        project_link_label="Link",
    )

    def draw_header(self):
        pdf = self.pdf
        style = self.style
        contact = self.document.contact
        top = pdf.get_current_y()

        self.text(contact.full_name, pdf.margin_left, "bold", 15, style.primary)

        # Contact stack against the right margin
        y = top - 2
        for icon, value in self.contact_icons():
            self.text_right(f"{icon} {value}", "normal", 9, style.text, y=y)
            y += 3

        pdf.set_current_y(max(top, y - 3))
        pdf.add_space(4)

        if contact.title:
            self.text(contact.title, pdf.margin_left, "bold", 10.5, style.secondary)
            pdf.add_space(4)

        if self.draw_social_links(pdf.margin_left, "    "):
            pdf.add_space(3)

        pdf.add_horizontal_line(None, 0.5, style.rule)
        pdf.add_space(5)

    def draw_body(self):
        """Skills, education and certifications in the narrow left column."""
        sidebar = present_sections(self.document, SIDEBAR)
        main = present_sections(self.document, MAIN)
        if not (sidebar or main):
            return

        def left():
            for key in sidebar:
                getattr(self, f"draw_{key}")()
                self.pdf.add_space(self.style.section_gap)

        def right():
            for key in main:
                getattr(self, f"draw_{key}")()

        self.pdf.add_two_columns(left, right, self.style.column_gap, ratio=1 / 3)

    def draw_education_entry(self, entry: Education, last: bool):
        self.draw_credential(entry.degree, entry.institution, entry.year, last, sizes=(9, 8, 8))

    def draw_certification_entry(self, entry: Certification, last: bool):
        self.draw_credential(entry.name, entry.issuer_line, entry.date, last,
                             link=entry.link, sizes=(9, 8, 8))
