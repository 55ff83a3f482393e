"""Tests for core/layouts: the six HTML resume layouts."""

import re

import pytest

from core.export.render_tree import parse_html
from core.layouts import LAYOUTS, get_layout, list_layouts, render_html
from core.layouts.icons import ICONS, icon
from core.resume.schemas import Document, LayoutType

ALL_LAYOUTS = [layout.value for layout in LayoutType]


def sections_in(html: str):
    return re.findall(r'data-section="([a-z]+)"', html)


class TestRegistry:
    """get_layout() / list_layouts()."""

    def test_six_layouts_registered(self):
        assert [layout.value for layout in LAYOUTS] == ALL_LAYOUTS

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_get_layout_by_name(self, name):
        assert get_layout(name).name == name

    def test_unknown_layout_falls_back_to_classic(self):
        assert get_layout("fancy").name == "classic"
        assert get_layout(None).name == "classic"

    def test_list_layouts_metadata(self):
        layouts = list_layouts()
        assert [l["id"] for l in layouts] == ALL_LAYOUTS
        for entry in layouts:
            assert entry["name"]
            assert entry["description"]
            assert entry["columns"] in ("single", "footer", "sidebar")


class TestRenderFullDocument:
    """Every layout renders every present section."""

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_all_sections_present(self, full_document, name):
        html = render_html(full_document, name)
        assert sorted(sections_in(html)) == sorted(
            ["summary", "skills", "experience", "projects", "education", "certifications"]
        )

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_contact_and_name(self, full_document, name):
        html = render_html(full_document, name)
        assert "Jane Doe" in html
        assert "jane@example.com" in html
        assert 'href="https://github.com/janedoe"' in html

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_layout_marker(self, full_document, name):
        assert f'data-layout="{name}"' in render_html(full_document, name)

    def test_uses_document_layout_by_default(self, full_payload):
        full_payload["layout"] = "executive"
        document = Document.model_validate(full_payload)
        assert 'data-layout="executive"' in render_html(document)

    def test_empty_skill_category_skipped(self, full_document):
        html = render_html(full_document, "classic")
        assert "Tools:" not in html
        assert "Data Science:" in html

    def test_end_date_defaults_to_present(self, full_document):
        assert "2019-03 - Present" in render_html(full_document, "modern")

    def test_text_is_escaped(self, full_payload):
        full_payload["summary"] = "<script>alert(1)</script>"
        document = Document.model_validate(full_payload)
        html = render_html(document, "classic")
        assert "<script>" not in html
        assert "&lt;script&gt;" in html


class TestLayoutSpecifics:

    def test_executive_link_labels(self, full_document):
        html = render_html(full_document, "executive")
        assert "LinkedIn Profile" in html
        assert "GitHub Profile" in html
        assert "Key Technologies:" in html

    def test_professional_competencies_heading(self, full_document):
        assert "Core Competencies" in render_html(full_document, "professional")

    def test_modern_badge_headings_and_tech_label(self, full_document):
        html = render_html(full_document, "modern")
        assert "Tech:" in html
        assert re.search(r"<h2[^>]*><span", html)

    def test_minimal_has_no_icons(self, full_document):
        assert "data-icon" not in render_html(full_document, "minimal")

    def test_classic_has_icons(self, full_document):
        assert 'data-icon="mail"' in render_html(full_document, "classic")

    def test_compact_sidebar_order(self, full_document):
        html = render_html(full_document, "compact")
        assert sections_in(html)[:3] == ["skills", "education", "certifications"]
        assert "grid-column: span 2" in html

    def test_minimal_footer_columns(self, full_document):
        order = sections_in(render_html(full_document, "minimal"))
        assert order[-2:] == ["education", "certifications"]

    def test_certification_link(self, full_document):
        html = render_html(full_document, "classic")
        assert 'href="https://aws.example.com/verify/ABC-123"' in html

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_certification_credential_id(self, full_payload, name):
        assert "Amazon (ID: ABC-123)" in render_html(Document.model_validate(full_payload), name)
        full_payload["certifications"][0]["credentialId"] = ""
        html = render_html(Document.model_validate(full_payload), name)
        assert "(ID:" not in html
        assert ">Amazon<" in html


class TestSectionOmission:
    """Empty content never produces a heading."""

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_header_only_document(self, header_only_document, name):
        html = render_html(header_only_document, name)
        assert sections_in(html) == []
        assert "<h2" not in html
        assert "John Smith" in html
        assert "john@example.com" in html

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_skills_with_only_empty_categories(self, full_payload, name):
        full_payload["skills"] = {"languages": [], "tools": ["  "]}
        document = Document.model_validate(full_payload)
        assert "skills" not in sections_in(render_html(document, name))

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_blank_summary_omitted(self, full_payload, name):
        full_payload["summary"] = "   "
        document = Document.model_validate(full_payload)
        assert "summary" not in sections_in(render_html(document, name))

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_missing_projects_omitted(self, full_payload, name):
        full_payload["projects"] = []
        document = Document.model_validate(full_payload)
        sections = sections_in(render_html(document, name))
        assert "projects" not in sections
        assert "experience" in sections

    @pytest.mark.parametrize("name", ALL_LAYOUTS)
    def test_header_only_parses_to_tree(self, header_only_document, name):
        tree = parse_html(render_html(header_only_document, name))
        assert tree.find_all("h2") == []
        assert tree.find_all("h1")[0].get_text(strip=True) == "John Smith"


class TestIcons:

    def test_icon_markup(self):
        markup = str(icon("mail", 14, "#111827"))
        assert markup.startswith("<svg")
        assert 'data-icon="mail"' in markup
        assert "width: 14px" in markup

    def test_every_icon_renders(self):
        for name in ICONS:
            assert f'data-icon="{name}"' in str(icon(name))
