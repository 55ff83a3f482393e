"""
Base class for the direct-draw PDF generators.

Each layout is a BaseGenerator subclass with a PdfStyle descriptor. The base
class owns section presence (through core.resume.sections) and the drawing
of the common entry types; subclasses draw their header and override the
heading decoration or any section that looks different in their layout.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from core.resume.schemas import Certification, Document, Education, Experience, Project
from core.resume.sections import (
    CERTIFICATIONS,
    EDUCATION,
    EXPERIENCE,
    PROJECTS,
    SKILLS,
    SUMMARY,
    present_sections,
    section_present,
)

from .builder import PT_TO_MM, PDFBuilder, RGB
from .fonts import FontManager

logger = logging.getLogger(__name__)


# Tailwind palette
GRAY_900: RGB = (17, 24, 39)
GRAY_800: RGB = (31, 41, 55)
GRAY_700: RGB = (55, 65, 81)
GRAY_600: RGB = (75, 85, 99)
GRAY_500: RGB = (107, 114, 128)
GRAY_400: RGB = (156, 163, 175)
GRAY_200: RGB = (229, 231, 235)
GRAY_100: RGB = (243, 244, 246)
GRAY_50: RGB = (249, 250, 251)
BLUE_700: RGB = (29, 78, 216)
BLUE_600: RGB = (37, 99, 235)
BLACK: RGB = (0, 0, 0)
WHITE: RGB = (255, 255, 255)

DEFAULT_HEADINGS = {
    SUMMARY: "Professional Summary",
    SKILLS: "Technical Skills",
    EXPERIENCE: "Professional Experience",
    PROJECTS: "Projects",
    EDUCATION: "Education",
    CERTIFICATIONS: "Certifications",
}

MAIN_FLOW = (SUMMARY, SKILLS, EXPERIENCE, PROJECTS)


@dataclass(frozen=True)
class PdfStyle:
    """Visual parameters of one direct-draw layout."""
    name: str
    primary: RGB = GRAY_900
    secondary: RGB = GRAY_600
    text: RGB = GRAY_700
    accent: RGB = BLUE_700
    rule: RGB = GRAY_400

    # Section headings
    headings: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADINGS))
    heading_uppercase: bool = False
    heading_size: float = 12
    heading_color: Optional[RGB] = None
    heading_rule_width: Optional[float] = 0.5
    heading_rule_color: Optional[RGB] = None
    heading_space_after: float = 3

    # Flow
    section_order: Tuple[str, ...] = MAIN_FLOW
    section_gap: float = 4
    footer_columns: bool = True
    column_gap: float = 10

    # Body text
    summary_size: float = 10.5
    summary_line_height: float = 1.5
    body_size: float = 11
    bullet: str = "•"
    bullet_color: Optional[RGB] = None
    bullet_indent: float = 2
    bullet_text_indent: float = 8
    bullet_line_height: float = 1.4

    # Entries
    entry_title_size: float = 12
    entry_title_font: str = "bold"
    entry_title_gap: float = 5
    date_color: Optional[RGB] = None
    date_size: float = 10
    company_separator: str = " • "
    company_font: str = "italic"
    company_size: float = 11
    company_gap: float = 4
    entry_gap: float = 5

    # Skills
    skills_inline: bool = True
    skill_label_size: float = 11

    # Technologies
    tech_label: str = "Technologies:"
    experience_tech_label: Optional[str] = None
    tech_inline: bool = False
    tech_separator: str = " • "
    project_link_label: str = "View Project →"


class BaseGenerator(ABC):
    """
    Draws a Document onto a PDFBuilder.

    Subclasses must set `style` and implement `draw_header`.
    """

    style: PdfStyle

    def __init__(self, document: Document, font_manager: Optional[FontManager] = None):
        self.document = document
        self.font_manager = font_manager
        self.pdf: Optional[PDFBuilder] = None

    @property
    def name(self) -> str:
        return self.style.name

    def generate(self) -> PDFBuilder:
        """Draw the whole document and return the builder."""
        self.pdf = PDFBuilder(font_manager=self.font_manager, title=self.document.contact.full_name)
        self.draw_header()
        self.draw_body()
        logger.debug(f"Generated {self.name} PDF: {self.pdf.page_count} page(s)")
        return self.pdf

    # ========================================================================
    # Hooks
    # ========================================================================

    @abstractmethod
    def draw_header(self):
        """Name, title, contact line and social links."""
        pass

    def draw_body(self):
        for key in present_sections(self.document, self.style.section_order):
            getattr(self, f"draw_{key}")()
        if self.style.footer_columns:
            self.draw_footer()

    def heading_label(self, key: str) -> str:
        label = self.style.headings[key]
        return label.upper() if self.style.heading_uppercase else label

    def draw_heading(self, key: str):
        """Bold label at the left margin, optionally followed by a rule."""
        pdf = self.pdf
        style = self.style
        pdf.check_page_break(style.heading_size * PT_TO_MM + 10)
        self.text(self.heading_label(key), pdf.margin_left, "bold", style.heading_size,
                  style.heading_color or style.primary)
        pdf.add_space(2)
        if style.heading_rule_width:
            pdf.add_horizontal_line(None, style.heading_rule_width, style.heading_rule_color or style.rule)
        pdf.add_space(style.heading_space_after)

    # ========================================================================
    # Drawing Helpers
    # ========================================================================

    def text(self, value: str, x: float, font: str, size: float, color: RGB, y: Optional[float] = None) -> float:
        """Set font and color, then draw one run. Returns its width."""
        self.pdf.set_font(font, size)
        self.pdf.set_text_color(color)
        return self.pdf.draw_text(value, x, y)

    def text_right(self, value: str, font: str, size: float, color: RGB, y: Optional[float] = None) -> float:
        self.pdf.set_font(font, size)
        self.pdf.set_text_color(color)
        return self.pdf.draw_text_right(value, y=y)

    def paragraph(self, value: str, x: Optional[float] = None, size: float = 11, font: str = "normal",
                  color: Optional[RGB] = None, line_height: Optional[float] = None,
                  max_width: Optional[float] = None):
        x = self.pdf.margin_left if x is None else x
        if max_width is None:
            max_width = self.pdf.get_content_width() - (x - self.pdf.margin_left)
        self.pdf.add_text(value, x, size, max_width=max_width, font_style=font,
                          color=color or self.style.secondary, line_height=line_height)

    def contact_parts(self) -> List[str]:
        """Email, phone and location, skipping blanks."""
        contact = self.document.contact
        return [part for part in (contact.email, contact.phone, contact.location) if part]

    def contact_icons(self) -> List[Tuple[str, str]]:
        """(icon, value) pairs for the present contact fields."""
        contact = self.document.contact
        pairs = [("✉", contact.email), ("☎", contact.phone), ("⌂", contact.location)]
        return [(icon, value) for icon, value in pairs if value]

    def draw_social_links(self, x: float, separator: str, size: float = 9,
                          color: Optional[RGB] = None, centered: bool = False) -> bool:
        """Inline link row. Returns False when there are no links."""
        links = self.document.contact.social_links()
        if not links:
            return False
        pdf = self.pdf
        pdf.set_font("normal", size)
        pdf.set_text_color(color or self.style.accent)
        if centered:
            line = separator.join(link["label"] for link in links)
            x = (pdf.config.page_width - pdf.text_width(line)) / 2
        for index, link in enumerate(links):
            x += pdf.draw_link_text(link["label"], x, link["url"])
            if index < len(links) - 1:
                x += pdf.draw_text(separator, x)
        return True

    def draw_bullets(self, items: List[str], size: Optional[float] = None, color: Optional[RGB] = None):
        pdf = self.pdf
        style = self.style
        size = size or style.body_size
        line_mm = size * PT_TO_MM * style.bullet_line_height
        pdf.set_font("normal", size)
        pdf.set_text_color(color or style.secondary)
        text_x = pdf.margin_left + style.bullet_text_indent
        max_width = pdf.get_content_width() - style.bullet_text_indent
        for item in items:
            pdf.add_wrapped_lines(
                pdf.split_text(item, max_width),
                text_x,
                line_mm,
                first_prefix=(style.bullet, pdf.margin_left + style.bullet_indent, style.bullet_color),
            )

    def draw_technologies(self, technologies: List[str], indent: float = 0, label: Optional[str] = None):
        pdf = self.pdf
        style = self.style
        label = style.tech_label if label is None else label
        x = pdf.margin_left + indent
        joined = style.tech_separator.join(technologies)
        if style.tech_inline:
            self.paragraph(f"{label} {joined}" if label else joined, x, 9, "italic", style.secondary)
            return
        pdf.check_page_break(9 * PT_TO_MM * pdf.config.line_height)
        width = self.text(label, x, "bold", 9, style.primary)
        self.paragraph(joined, x + width + 2, 9, "normal", style.secondary)

    # ========================================================================
    # Sections
    # ========================================================================

    def draw_summary(self):
        self.draw_heading(SUMMARY)
        self.paragraph(self.document.summary, size=self.style.summary_size, color=self.style.text,
                       line_height=self.style.summary_line_height)
        self.pdf.add_space(self.style.section_gap + 1)

    def draw_skills(self):
        self.draw_heading(SKILLS)
        for group in self.document.skill_groups():
            self.draw_skill_group(group["label"], group["skills"])
        self.pdf.add_space(self.style.section_gap)

    def draw_skill_group(self, label: str, skills: List[str]):
        pdf = self.pdf
        style = self.style
        size = style.skill_label_size
        pdf.check_page_break(size * PT_TO_MM * pdf.config.line_height)
        if style.skills_inline:
            width = self.text(f"{label}: ", pdf.margin_left, "bold", size, style.primary)
            self.paragraph(", ".join(skills), pdf.margin_left + width, size, "normal", style.secondary)
        else:
            self.text(f"{label}:", pdf.margin_left, "bold", size, style.primary)
            pdf.add_space(size * PT_TO_MM)
            self.paragraph(", ".join(skills), pdf.margin_left, size, "normal", style.text)
        pdf.add_space(2)

    def draw_experience(self):
        self.draw_heading(EXPERIENCE)
        for index, entry in enumerate(self.document.experience):
            if index:
                self.pdf.add_space(self.style.entry_gap)
            self.draw_experience_entry(entry)
        self.pdf.add_space(self.style.section_gap)

    def draw_experience_entry(self, entry: Experience):
        pdf = self.pdf
        style = self.style
        pdf.check_page_break(style.entry_title_gap + style.company_gap + 8)

        self.text(entry.title, pdf.margin_left, style.entry_title_font, style.entry_title_size, style.primary)
        self.text_right(f"{entry.start_date} - {entry.end_date}", "normal", style.date_size,
                        style.date_color or style.secondary)
        pdf.add_space(style.entry_title_gap)

        company = style.company_separator.join(p for p in (entry.company, entry.location) if p)
        self.text(company, pdf.margin_left, style.company_font, style.company_size, style.secondary)
        pdf.add_space(style.company_gap)

        self.draw_bullets(entry.achievements)
        if entry.technologies:
            pdf.add_space(2)
            self.draw_technologies(entry.technologies, indent=style.bullet_indent,
                                   label=style.experience_tech_label)

    def draw_projects(self):
        self.draw_heading(PROJECTS)
        for index, project in enumerate(self.document.projects):
            if index:
                self.pdf.add_space(self.style.entry_gap)
            self.draw_project_entry(project)
        self.pdf.add_space(self.style.section_gap)

    def draw_project_entry(self, project: Project):
        pdf = self.pdf
        style = self.style
        pdf.check_page_break(style.entry_title_gap + 8)

        self.text(project.name, pdf.margin_left, style.entry_title_font, style.entry_title_size, style.primary)
        if project.link:
            pdf.set_font("normal", 10)
            pdf.set_text_color(style.accent)
            label = style.project_link_label
            pdf.draw_link_text(label, pdf.right_edge - pdf.text_width(label), project.link)
        pdf.add_space(style.entry_title_gap)

        self.text(project.role, pdf.margin_left, "italic", 10, style.secondary)
        pdf.add_space(3)

        self.paragraph(project.description, size=style.body_size, color=style.secondary, line_height=1.4)
        if project.technologies:
            pdf.add_space(2)
            self.draw_technologies(project.technologies)

    def draw_footer(self):
        """Education and certifications side by side."""
        has_education = section_present(self.document, EDUCATION)
        has_certifications = section_present(self.document, CERTIFICATIONS)
        if not (has_education or has_certifications):
            return

        def left():
            if has_education:
                self.draw_education()

        def right():
            if has_certifications:
                self.draw_certifications()

        self.pdf.add_two_columns(left, right, self.style.column_gap)

    def draw_education(self):
        self.draw_heading(EDUCATION)
        entries = self.document.education
        for index, entry in enumerate(entries):
            self.draw_education_entry(entry, last=index == len(entries) - 1)

    def draw_education_entry(self, entry: Education, last: bool):
        self.draw_credential(entry.degree, entry.institution, entry.year, last)

    def draw_certifications(self):
        self.draw_heading(CERTIFICATIONS)
        entries = self.document.certifications
        for index, entry in enumerate(entries):
            self.draw_certification_entry(entry, last=index == len(entries) - 1)

    def draw_certification_entry(self, entry: Certification, last: bool):
        self.draw_credential(entry.name, entry.issuer_line, entry.date, last, link=entry.link)

    def draw_credential(self, title: str, issuer: str, when: str, last: bool,
                        link: str = "", sizes: Tuple[float, float, float] = (11, 10, 9)):
        """Three-line block used by education and certification entries."""
        pdf = self.pdf
        style = self.style
        title_size, issuer_size, when_size = sizes
        if link:
            pdf.check_page_break(title_size * PT_TO_MM * pdf.config.line_height)
            pdf.set_font("bold", title_size)
            pdf.set_text_color(style.accent)
            pdf.draw_link_text(title, pdf.margin_left, link)
            pdf.add_space(title_size * PT_TO_MM * pdf.config.line_height)
        else:
            self.paragraph(title, size=title_size, font="bold", color=style.primary)
        self.paragraph(issuer, size=issuer_size, color=style.secondary)
        pdf.check_page_break(when_size * PT_TO_MM)
        self.text(when, pdf.margin_left, "italic", when_size, style.date_color or style.secondary)
        pdf.add_space(2 if last else 5)
