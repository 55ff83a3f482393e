"""Modern layout: blue left border on the header and badge headings."""

from .base_generator import (
    BLUE_600,
    GRAY_600,
    GRAY_700,
    GRAY_900,
    WHITE,
    BaseGenerator,
    PdfStyle,
)

BADGE_HEIGHT = 6
BADGE_PADDING = 3


class ModernGenerator(BaseGenerator):

    style = PdfStyle(
        name="modern",
        primary=GRAY_900,
        secondary=GRAY_600,
        text=GRAY_700,
        accent=BLUE_600,
        heading_uppercase=True,
        heading_size=10.5,
        heading_rule_width=None,
        body_size=10.5,
        bullet="•",
        entry_title_gap=4,
        company_separator=", ",
        company_font="normal",
        company_size=10.5,
        company_gap=3,
        skill_label_size=10.5,
        tech_label="Tech:",
        tech_inline=True,
        tech_separator=", ",
        project_link_label="View Project",
    )

    def draw_header(self):
        pdf = self.pdf
        style = self.style
        contact = self.document.contact
        x = pdf.margin_left + 6
        start_y = pdf.get_current_y()

        pdf.add_vertical_line(pdf.margin_left, start_y - 5, start_y + 30, 3, style.accent)

        self.text(contact.full_name, x, "bold", 18, style.primary)
        pdf.add_space(3)
        if contact.title:
            self.text(contact.title, x, "bold", 12, style.accent)
            pdf.add_space(5)

        parts = self.contact_parts()
        if parts:
            self.text("    ".join(parts), x, "normal", 10.5, style.secondary)
            pdf.add_space(3)

        if self.draw_social_links(x, "    ", size=10.5):
            pdf.add_space(3)

        pdf.set_current_y(max(pdf.get_current_y(), start_y + 30))
        pdf.add_space(6)

    def draw_heading(self, key: str):
        """White uppercase label on a filled blue box."""
        pdf = self.pdf
        style = self.style
        label = self.heading_label(key)
        pdf.check_page_break(BADGE_HEIGHT + 10)

        pdf.set_font("bold", style.heading_size)
        width = pdf.text_width(label) + BADGE_PADDING * 2
        y = pdf.get_current_y()
        pdf.add_filled_rect(pdf.margin_left, y - 4, width, BADGE_HEIGHT, style.accent)
        self.text(label, pdf.margin_left + BADGE_PADDING, "bold", style.heading_size, WHITE)
        pdf.add_space(5)
