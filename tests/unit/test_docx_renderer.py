"""
Unit tests for the DOCX resume renderer.

Inspects the python-docx document directly: paragraph text, styles, tab
stops and heading borders.
"""

from io import BytesIO

import pytest
from docx import Document
from docx.enum.text import WD_TAB_ALIGNMENT
from docx.oxml.ns import qn
from docx.shared import Inches

from fixtures.sample_resumes import CONTACT_EMAIL_PORTFOLIO, MINIMAL_RESUME, build_resume, bullet
from resume_export.common.error_handling import RenderError
from resume_export.resume.docx_renderer import (
    BULLET_STYLE,
    ResumeDocxRenderer,
    render_resume_docx,
    render_resume_docx_bytes,
)


def texts(doc) -> list:
    return [p.text for p in doc.paragraphs]


def find_paragraph(doc, startswith: str):
    for p in doc.paragraphs:
        if p.text.startswith(startswith):
            return p
    raise AssertionError(f"No paragraph starting with {startswith!r}")


def bullet_texts(doc) -> list:
    return [p.text for p in doc.paragraphs if p.style.name == BULLET_STYLE]


class TestDocumentLayout:
    """Page setup, header and section order."""

    def test_margins_match_tab_stop_width(self, full_resume):
        doc = render_resume_docx(full_resume)
        section = doc.sections[0]
        assert section.left_margin == Inches(0.5)
        assert section.right_margin == Inches(0.5)

    def test_header_name_and_contact(self, full_resume):
        paragraphs = texts(render_resume_docx(full_resume))
        assert paragraphs[0] == "Jane Doe"
        assert paragraphs[1] == (
            "Austin, TX • 555-0100 • jane@example.com • linkedin.com/in/janedoe • janedoe.dev"
        )

    def test_contact_with_email_and_portfolio_only(self):
        data = build_resume(MINIMAL_RESUME, contactInfo=CONTACT_EMAIL_PORTFOLIO)
        assert texts(render_resume_docx(data))[1] == "pat@example.com • patkim.io"

    def test_section_order(self, full_resume):
        paragraphs = texts(render_resume_docx(full_resume))
        headings = [t for t in paragraphs if t in {
            "PROFESSIONAL SUMMARY", "PROFESSIONAL EXPERIENCE", "EDUCATION", "SKILLS"
        }]
        assert headings == ["PROFESSIONAL SUMMARY", "PROFESSIONAL EXPERIENCE", "EDUCATION", "SKILLS"]

    def test_headings_have_bottom_border(self, full_resume):
        heading = find_paragraph(render_resume_docx(full_resume), "PROFESSIONAL EXPERIENCE")
        borders = heading._p.pPr.find(qn("w:pBdr"))
        assert borders is not None
        bottom = borders.find(qn("w:bottom"))
        assert bottom.get(qn("w:val")) == "single"
        assert bottom.get(qn("w:color")) == "2563eb"
        assert heading.runs[0].bold

    def test_minimal_resume_has_no_section_headings(self, minimal_resume):
        paragraphs = texts(render_resume_docx(minimal_resume))
        assert paragraphs == ["Min Imal", "min@example.com"]


class TestExperience:
    """Company headers, role lines and bullets."""

    def test_company_header_tab_stop_and_range(self, full_resume):
        header = find_paragraph(render_resume_docx(full_resume), "Acme Corp")
        assert header.text == "Acme Corp, Remote\tJan 2019 - Present"
        tab_stop = header.paragraph_format.tab_stops[0]
        assert tab_stop.position == Inches(7.5)
        assert tab_stop.alignment == WD_TAB_ALIGNMENT.RIGHT
        assert header.runs[0].bold

    def test_multi_role_group_shows_role_dates(self, full_resume):
        paragraphs = texts(render_resume_docx(full_resume))
        assert "Senior Product Manager (March 2021 - Present)" in paragraphs
        assert "Product Manager (Jan 2019 - March 2021)" in paragraphs

    def test_single_role_group_omits_role_dates(self):
        data = build_resume(
            MINIMAL_RESUME,
            experiences=[
                {
                    "id": "a", "title": "Engineer", "company": "Pied Piper",
                    "startDate": "2020", "endDate": "2021", "roleGroupId": "g",
                    "bullets": [bullet("1", "Compressed")],
                }
            ],
        )
        paragraphs = texts(render_resume_docx(data))
        assert "Pied Piper\t2020 - 2021" in paragraphs
        assert "Engineer" in paragraphs

    def test_role_title_is_italic(self, full_resume):
        role = find_paragraph(render_resume_docx(full_resume), "Senior Product Manager")
        assert role.runs[0].italic

    def test_by_role_bullets_follow_each_role(self, full_resume):
        paragraphs = texts(render_resume_docx(full_resume))
        senior = paragraphs.index("Senior Product Manager (March 2021 - Present)")
        pm = paragraphs.index("Product Manager (Jan 2019 - March 2021)")
        assert paragraphs[senior + 1] == "Launched billing platform used by 2,000 customers"
        assert paragraphs[pm + 1] == "Built the partner API program from scratch"

    def test_grouped_mode_single_bullet_run(self, grouped_resume):
        doc = render_resume_docx(grouped_resume)
        paragraphs = texts(doc)
        assert paragraphs.count("Initrode, Seattle, WA\t2019-05 - Present") == 1
        manager = paragraphs.index("Engineering Manager (2022-01 - Present)")
        assert paragraphs[manager + 1] == "Senior Engineer (2019-05 - 2021-12)"
        assert paragraphs[manager + 2:manager + 4] == ["Led X", "Shipped Y"]
        assert bullet_texts(doc) == ["Led X", "Shipped Y"]

    def test_unselected_content_absent(self, full_resume):
        paragraphs = "\n".join(texts(render_resume_docx(full_resume)))
        assert "Unselected bullet" not in paragraphs
        assert "Initech" not in paragraphs

    def test_standalone_entry(self, full_resume):
        paragraphs = texts(render_resume_docx(full_resume))
        assert "Globex, Chicago, IL\t2017-06 - 2019-01" in paragraphs
        assert "Product Manager" in paragraphs


class TestEducationAndSkills:
    def test_achievements_render_as_bullets(self, full_resume):
        doc = render_resume_docx(full_resume)
        bullets = bullet_texts(doc)
        assert "Dean's list" in bullets
        assert "Magna cum laude" in bullets
        assert not any("object" in b or "{" in b for b in bullets)

    def test_education_lines(self, full_resume):
        paragraphs = texts(render_resume_docx(full_resume))
        assert "State University, Austin, TX\t2011 - 2015" in paragraphs
        assert "B.S. - Computer Science • GPA: 3.8" in paragraphs

    def test_skill_rows(self, full_resume):
        doc = render_resume_docx(full_resume)
        row = find_paragraph(doc, "Technical:")
        assert row.text == "Technical: SQL, Python"
        assert row.runs[0].bold
        assert "Product Management: Roadmapping" in texts(doc)
        assert not any(t.startswith("Leadership:") for t in texts(doc))


class TestSerialization:
    def test_bytes_are_a_readable_docx(self, full_resume):
        payload = render_resume_docx_bytes(full_resume)
        assert payload[:2] == b"PK"
        reopened = Document(BytesIO(payload))
        assert reopened.paragraphs[0].text == "Jane Doe"

    def test_renderer_does_not_mutate_input(self, full_resume):
        before = full_resume.model_dump()
        ResumeDocxRenderer().render(full_resume)
        assert full_resume.model_dump() == before

    def test_errors_wrapped(self, full_resume, monkeypatch):
        def boom(self, doc, model):
            raise ValueError("broken header")

        monkeypatch.setattr(ResumeDocxRenderer, "_add_header", boom)
        with pytest.raises(RenderError) as exc_info:
            render_resume_docx_bytes(full_resume)
        assert exc_info.value.issue.operation == "DOCX render"
        assert isinstance(exc_info.value.__cause__, ValueError)
