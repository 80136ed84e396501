"""
DOCX resume renderer.

Builds a python-docx Document from the shared render model. A paragraph
document has no flexbox, so the right-aligned dates on company header lines
use a right tab stop at the edge of the printable width.
"""

from io import BytesIO
from typing import List

from docx import Document
from docx.document import Document as DocumentType
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_TAB_ALIGNMENT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt

from resume_export.common.error_handling import export_operation
from resume_export.common.logger import get_logger
from resume_export.resume.render_model import (
    SECTION_TITLES,
    ExperienceEntry,
    RenderModel,
    prepare_render_model,
)
from resume_export.resume.types import Bullet, Education, Experience, ResumeData

logger = get_logger(__name__, renderer="docx")

PAGE_MARGIN_IN = 0.5
# Letter width (8.5in) minus both margins
DATE_TAB_STOP_IN = 7.5
HEADING_BORDER_COLOR = "2563eb"
BULLET_STYLE = "List Bullet"

NAME_PT = 20
HEADING_PT = 11
BODY_PT = 10
CONTACT_PT = 9


class ResumeDocxRenderer:
    """Render ResumeData to a python-docx Document."""

    def render(self, data: ResumeData) -> DocumentType:
        """
        Build the document.

        Args:
            data: Validated resume data

        Returns:
            docx Document; call .save() or use render_resume_docx_bytes()
        """
        model = prepare_render_model(data)
        doc = Document()
        self._setup_page(doc)

        self._add_header(doc, model)
        if model.has_summary:
            self._add_section_heading(doc, SECTION_TITLES["summary"])
            doc.add_paragraph(model.summary).alignment = WD_ALIGN_PARAGRAPH.JUSTIFY
        if model.has_experience:
            self._add_section_heading(doc, SECTION_TITLES["experience"])
            for entry in model.entries:
                self._add_experience_entry(doc, entry)
        if model.has_education:
            self._add_section_heading(doc, SECTION_TITLES["education"])
            for edu in model.education:
                self._add_education(doc, edu)
        if model.has_skills:
            self._add_section_heading(doc, SECTION_TITLES["skills"])
            for row in model.skill_rows:
                p = doc.add_paragraph()
                p.add_run(f"{row.label} ").bold = True
                p.add_run(row.text)

        logger.debug(f"Built document with {len(doc.paragraphs)} paragraphs")
        return doc

    def _setup_page(self, doc: DocumentType) -> None:
        for sec in doc.sections:
            sec.top_margin = Inches(PAGE_MARGIN_IN)
            sec.bottom_margin = Inches(PAGE_MARGIN_IN)
            sec.left_margin = Inches(PAGE_MARGIN_IN)
            sec.right_margin = Inches(PAGE_MARGIN_IN)
        doc.styles["Normal"].font.size = Pt(BODY_PT)

    def _add_header(self, doc: DocumentType, model: RenderModel) -> None:
        name_p = doc.add_paragraph()
        name_p.alignment = WD_ALIGN_PARAGRAPH.CENTER
        name_run = name_p.add_run(model.name)
        name_run.bold = True
        name_run.font.size = Pt(NAME_PT)

        if model.contact_items:
            contact_p = doc.add_paragraph()
            contact_p.alignment = WD_ALIGN_PARAGRAPH.CENTER
            contact_p.add_run(model.contact_line).font.size = Pt(CONTACT_PT)

    def _add_section_heading(self, doc: DocumentType, title: str) -> None:
        p = doc.add_paragraph()
        # pBdr must precede spacing inside pPr
        _add_bottom_border(p)
        run = p.add_run(title.upper())
        run.bold = True
        run.font.size = Pt(HEADING_PT)
        p.paragraph_format.space_before = Pt(8)
        p.paragraph_format.space_after = Pt(4)

    def _add_company_header(self, doc: DocumentType, company: str, location: str, date_range: str) -> None:
        p = doc.add_paragraph()
        p.paragraph_format.tab_stops.add_tab_stop(Inches(DATE_TAB_STOP_IN), WD_TAB_ALIGNMENT.RIGHT)
        p.paragraph_format.space_before = Pt(6)
        p.add_run(company).bold = True
        if location:
            p.add_run(f", {location}")
        if date_range:
            p.add_run(f"\t{date_range}")

    def _add_role_line(self, doc: DocumentType, entry: ExperienceEntry, member: Experience) -> None:
        p = doc.add_paragraph()
        p.add_run(member.title).italic = True
        role_dates = entry.role_dates(member)
        if entry.is_multi_role and role_dates:
            p.add_run(f" ({role_dates})")

    def _add_bullets(self, doc: DocumentType, bullets: List[Bullet]) -> None:
        for bullet in bullets:
            doc.add_paragraph(bullet.content, style=BULLET_STYLE)

    def _add_experience_entry(self, doc: DocumentType, entry: ExperienceEntry) -> None:
        self._add_company_header(doc, entry.company, entry.location, entry.date_range)

        if not entry.is_role_group:
            member = entry.members[0]
            self._add_role_line(doc, entry, member)
            self._add_bullets(doc, member.bullets)
        elif entry.display_mode == "grouped":
            for member in entry.members:
                self._add_role_line(doc, entry, member)
            self._add_bullets(doc, entry.all_bullets)
        else:
            for member in entry.members:
                self._add_role_line(doc, entry, member)
                self._add_bullets(doc, member.bullets)

    def _add_education(self, doc: DocumentType, edu: Education) -> None:
        dates = " - ".join(d for d in (edu.start_date.strip(), edu.end_date.strip()) if d)
        self._add_company_header(doc, edu.school, edu.location.strip(), dates)

        degree_line = " - ".join(part for part in (edu.degree.strip(), edu.field.strip()) if part)
        if edu.gpa:
            degree_line = f"{degree_line} • GPA: {edu.gpa}" if degree_line else f"GPA: {edu.gpa}"
        if degree_line:
            doc.add_paragraph().add_run(degree_line).italic = True

        # Achievements are plain strings by the time they reach the model
        for achievement in edu.achievements:
            doc.add_paragraph(achievement, style=BULLET_STYLE)


def _add_bottom_border(paragraph) -> None:
    """Draw a single rule under a paragraph (section headings)."""
    p_pr = paragraph._p.get_or_add_pPr()
    p_bdr = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), "12")
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), HEADING_BORDER_COLOR)
    p_bdr.append(bottom)
    p_pr.append(p_bdr)


@export_operation("DOCX render", renderer="docx")
def render_resume_docx(data: ResumeData) -> DocumentType:
    """Convenience wrapper around ResumeDocxRenderer().render()."""
    return ResumeDocxRenderer().render(data)


def render_resume_docx_bytes(data: ResumeData) -> bytes:
    """Render and serialize to .docx bytes."""
    doc = render_resume_docx(data)
    buffer = BytesIO()
    doc.save(buffer)
    return buffer.getvalue()
