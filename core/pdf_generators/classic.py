"""Classic layout: centered header, underlined headings, accent dates."""

from .base_generator import BLUE_700, GRAY_400, GRAY_600, GRAY_700, GRAY_900, BaseGenerator, PdfStyle


class ClassicGenerator(BaseGenerator):

    style = PdfStyle(
        name="classic",
        primary=GRAY_900,
        secondary=GRAY_600,
        text=GRAY_700,
        accent=BLUE_700,
        rule=GRAY_400,
        bullet="▸",
        bullet_color=BLUE_700,
        date_color=BLUE_700,
        company_separator=" • ",
    )

    def draw_header(self):
        pdf = self.pdf
        style = self.style
        contact = self.document.contact

        pdf.set_font("bold", 18)
        pdf.set_text_color(style.primary)
        pdf.draw_text_centered(contact.full_name.upper())
        pdf.add_space(3)

        if contact.title:
            pdf.set_font("normal", 12)
            pdf.set_text_color(style.text)
            pdf.draw_text_centered(contact.title)
            pdf.add_space(5)

        parts = self.contact_parts()
        if parts:
            pdf.set_font("normal", 10.5)
            pdf.set_text_color(style.secondary)
            pdf.draw_text_centered(" • ".join(parts))
            pdf.add_space(3)

        if self.draw_social_links(0, "  |  ", centered=True):
            pdf.add_space(3)

        pdf.add_horizontal_line(None, 1.5, style.primary)
        pdf.add_space(6)
