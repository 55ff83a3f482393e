"""Tests for core/pdf_generators: PDFBuilder and the six direct-draw generators."""

import pytest

from core.pdf_generators import GENERATORS, generate_pdf, get_generator, list_generators
from core.pdf_generators.builder import PT_TO_MM, PDFBuilder
from core.resume.schemas import Document, LayoutType
from core.resume.sections import SECTION_KEYS

ALL_LAYOUTS = [layout.value for layout in LayoutType]


def headings_drawn(document, name):
    generator = get_generator(name)(document)
    pdf = generator.generate()
    labels = {generator.heading_label(key) for key in SECTION_KEYS}
    return [text for text in pdf.texts() if text in labels], pdf, generator


# ==================== PDFBuilder ====================


class TestPDFBuilder:
    """Cursor, pagination and output of the drawing surface."""

    def test_starts_at_top_margin(self):
        pdf = PDFBuilder()
        assert pdf.get_current_y() == pdf.config.margin_top
        assert pdf.page_count == 1

    def test_a4_geometry(self):
        pdf = PDFBuilder()
        assert round(pdf.config.page_width) == 210
        assert round(pdf.config.page_height) == 297

    def test_page_break_when_content_does_not_fit(self):
        pdf = PDFBuilder()
        pdf.set_current_y(pdf.config.page_height - pdf.config.margin_bottom - 5)
        assert pdf.check_page_break(10) is True
        assert pdf.page_count == 2
        assert pdf.get_current_y() == pdf.config.margin_top

    def test_no_page_break_when_content_fits(self):
        pdf = PDFBuilder()
        assert pdf.check_page_break(10) is False
        assert pdf.page_count == 1

    def test_split_text_respects_width(self):
        pdf = PDFBuilder()
        pdf.set_font("normal", 11)
        lines = pdf.split_text("word " * 80, 60)
        assert len(lines) > 1
        for line in lines:
            assert pdf.text_width(line) <= 60 + 0.5

    def test_two_columns_resume_below_taller_column(self):
        pdf = PDFBuilder()
        start = pdf.get_current_y()

        def left():
            pdf.add_space(30)

        def right():
            pdf.add_space(12)

        end = pdf.add_two_columns(left, right)
        assert end == pytest.approx(start + 30)
        assert pdf.get_current_y() == pytest.approx(start + 30)

    def test_two_columns_restore_margins(self):
        pdf = PDFBuilder()
        left_margin = pdf.config.margin_left
        right_margin = pdf.config.margin_right
        widths = []
        pdf.add_two_columns(lambda: widths.append(pdf.get_content_width()),
                            lambda: widths.append(pdf.get_content_width()), column_gap=10)
        assert pdf.config.margin_left == left_margin
        assert pdf.config.margin_right == right_margin
        assert widths[0] == pytest.approx(widths[1])
        assert sum(widths) == pytest.approx(pdf.get_content_width() - 10)

    def test_link_area_recorded(self):
        pdf = PDFBuilder()
        pdf.set_font("normal", 10)
        pdf.draw_link_text("GitHub", 20, "https://github.com/janedoe")
        assert pdf.links[0].url == "https://github.com/janedoe"
        assert pdf.links[0].width > 0

    def test_to_bytes_is_pdf(self):
        pdf = PDFBuilder(title="Test")
        pdf.draw_text("Hello", 20)
        data = pdf.to_bytes()
        assert data.startswith(b"%PDF")
        assert pdf.to_bytes() is data


# ==================== Registry ====================


class TestRegistry:

    def test_six_generators(self):
        assert list_generators() == ALL_LAYOUTS
        assert len(GENERATORS) == 6

    def test_unknown_layout_falls_back_to_classic(self):
        assert get_generator("nope") is GENERATORS[LayoutType.CLASSIC]

    def test_uses_document_layout(self, full_payload):
        full_payload["layout"] = "compact"
        document = Document.model_validate(full_payload)
        generator = get_generator(document.layout)
        assert generator.style.name == "compact"


# ==================== Generators ====================


class TestGenerators:

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_full_document_produces_pdf(self, full_document, name):
        data = generate_pdf(full_document, name).to_bytes()
        assert data.startswith(b"%PDF")

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_full_document_draws_every_heading(self, full_document, name):
        drawn, _, generator = headings_drawn(full_document, name)
        expected = {generator.heading_label(key) for key in SECTION_KEYS}
        assert set(drawn) == expected

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_name_is_drawn(self, full_document, name):
        texts = generate_pdf(full_document, name).texts()
        assert any("jane doe" in t.lower() for t in texts)

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_social_links_are_clickable(self, full_document, name):
        pdf = generate_pdf(full_document, name)
        urls = {link.url for link in pdf.links}
        assert "https://github.com/janedoe" in urls

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_header_only_has_no_headings(self, header_only_document, name):
        drawn, pdf, _ = headings_drawn(header_only_document, name)
        assert drawn == []
        assert pdf.page_count == 1
        assert any("john smith" in t.lower() for t in pdf.texts())

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_empty_lists_omit_sections(self, full_payload, name):
        full_payload["projects"] = []
        full_payload["certifications"] = []
        full_payload["skills"] = {"languages": []}
        document = Document.model_validate(full_payload)
        drawn, _, generator = headings_drawn(document, name)
        for key in ("projects", "certifications", "skills"):
            assert generator.heading_label(key) not in drawn
        assert generator.heading_label("experience") in drawn

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_overflow_creates_more_pages(self, long_document, name):
        pdf = generate_pdf(long_document, name)
        assert pdf.page_count > 1

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_no_line_crosses_a_page_boundary(self, full_payload, name):
        entry = full_payload["experience"][0]
        full_payload["experience"] = [
            dict(entry, title=f"Engineer {i}", achievements=[
                "Delivered a long running project with many moving parts and stakeholders " * 2
            ] * 4)
            for i in range(14)
        ]
        full_payload["education"] = [
            {"degree": f"Course {i}", "institution": "Open University", "year": str(2000 + i)}
            for i in range(25)
        ]
        pdf = generate_pdf(Document.model_validate(full_payload), name)
        config = pdf.config
        bottom = config.page_height - config.margin_bottom

        assert pdf.page_count > 2
        for run in pdf.text_log:
            line = run.size * PT_TO_MM * config.line_height
            assert run.y <= bottom, f"{run.text!r} below the bottom margin on page {run.page}"
            if run.page > 1:
                assert run.y >= config.margin_top - line, f"{run.text!r} above the top margin on page {run.page}"

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_certification_credential_id_drawn(self, full_document, name):
        texts = generate_pdf(full_document, name).texts()
        assert any("ABC-123" in t for t in texts)

    def test_empty_skill_category_not_drawn(self, full_document):
        texts = generate_pdf(full_document, "classic").texts()
        assert not any(t.startswith("Tools") for t in texts)
        assert any(t.startswith("Data Science") for t in texts)
