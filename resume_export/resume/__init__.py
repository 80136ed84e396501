"""
Resume document assembly.

Turns ResumeData into export documents:

1. Types - Validated, frozen resume models (camelCase JSON in, snake_case out)
2. Render Model - Group roles, sort newest first, keep selected bullets
3. HTML Renderer - Self-contained HTML for headless-browser PDF printing
4. DOCX Renderer - python-docx document with tab-aligned date ranges
5. Storage - Persisted rows -> ResumeData, normalizing shape quirks once
"""

from resume_export.resume.types import (
    ContactInfo,
    Bullet,
    Experience,
    Education,
    Skills,
    ResumeStyles,
    ResumeData,
)
from resume_export.resume.dates import parse_resume_date
from resume_export.resume.render_model import (
    GroupedExperiences,
    ExperienceEntry,
    RenderModel,
    group_experiences,
    sort_group_members,
    combined_date_range,
    filter_selected_bullets,
    filter_role_group,
    prepare_render_model,
)
from resume_export.resume.html_renderer import ResumeHTMLRenderer, render_resume_html
from resume_export.resume.docx_renderer import (
    ResumeDocxRenderer,
    render_resume_docx,
    render_resume_docx_bytes,
)
from resume_export.resume.storage import format_version_data

__all__ = [
    # Types
    "ContactInfo",
    "Bullet",
    "Experience",
    "Education",
    "Skills",
    "ResumeStyles",
    "ResumeData",
    # Ordering and selection
    "parse_resume_date",
    "GroupedExperiences",
    "ExperienceEntry",
    "RenderModel",
    "group_experiences",
    "sort_group_members",
    "combined_date_range",
    "filter_selected_bullets",
    "filter_role_group",
    "prepare_render_model",
    # Renderers
    "ResumeHTMLRenderer",
    "render_resume_html",
    "ResumeDocxRenderer",
    "render_resume_docx",
    "render_resume_docx_bytes",
    # Storage
    "format_version_data",
]
