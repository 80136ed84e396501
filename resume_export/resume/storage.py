"""
Persisted resume rows -> ResumeData.

Storage keeps a resume version across several tables (contact info, summary,
experiences with bullets, education with achievements, skills, styles). This
module is the data-access boundary: rows come in as plain dicts with
snake_case columns, and every shape quirk is normalized here so renderers
never see it.
"""

from typing import Any, Dict, List, Optional

from resume_export.resume.types import ResumeData, ResumeStyles

SKILL_CATEGORIES = ("technical", "product", "soft")

Row = Dict[str, Any]


def _text(row: Row, column: str) -> str:
    value = row.get(column)
    return "" if value is None else str(value)


def _by_display_order(rows: Optional[List[Row]]) -> List[Row]:
    """Sort child rows by display_order; missing order counts as 0."""
    return sorted(rows or [], key=lambda r: r.get("display_order") or 0)


def format_contact(contact_row: Optional[Row]) -> Dict[str, str]:
    row = contact_row or {}
    return {
        "name": _text(row, "full_name"),
        "email": _text(row, "email"),
        "phone": _text(row, "phone"),
        "location": _text(row, "location"),
        "linkedin": _text(row, "linkedin"),
        "portfolio": _text(row, "portfolio"),
    }


def format_experience(row: Row) -> Dict[str, Any]:
    return {
        "id": _text(row, "id"),
        "title": _text(row, "title"),
        "company": _text(row, "company"),
        "location": _text(row, "location"),
        "start_date": _text(row, "start_date"),
        "end_date": _text(row, "end_date"),
        "role_group_id": row.get("role_group_id") or None,
        "bullet_mode": row.get("bullet_mode") or "per_role",
        "bullets": [
            {
                "id": _text(bullet, "id"),
                "content": _text(bullet, "content"),
                # Rows written before selection existed have no flag
                "is_selected": True if bullet.get("is_selected") is None else bool(bullet["is_selected"]),
            }
            for bullet in _by_display_order(row.get("bullets"))
        ],
    }


def format_education(row: Row) -> Dict[str, Any]:
    return {
        "id": _text(row, "id"),
        "school": _text(row, "school"),
        "degree": _text(row, "degree"),
        "field": _text(row, "field"),
        "location": _text(row, "location"),
        "start_date": _text(row, "start_date"),
        "end_date": _text(row, "end_date"),
        "gpa": row.get("gpa"),
        # Entries are {"achievement": ...} rows; ResumeData coerces them to str
        "achievements": _by_display_order(row.get("achievements")),
    }


def format_skills(skill_rows: Optional[List[Row]]) -> Dict[str, List[str]]:
    """Split skill rows into their category lists, dropping blank names."""
    skills: Dict[str, List[str]] = {category: [] for category in SKILL_CATEGORIES}
    for row in _by_display_order(skill_rows):
        category = row.get("category")
        name = (row.get("skill_name") or "").strip()
        if category in skills and name:
            skills[category].append(name)
    return skills


def format_styles(styles_row: Optional[Row]) -> Dict[str, Any]:
    """
    Styles with defaults for missing rows/columns.

    Only NULL falls back; an explicit 0 margin is kept.
    """
    row = styles_row or {}
    defaults = ResumeStyles()
    styles = {}
    for name in ResumeStyles.model_fields:
        value = row.get(name)
        styles[name] = getattr(defaults, name) if value is None or value == "" else value
    return styles


def format_version_data(
    contact_row: Optional[Row] = None,
    summary_row: Optional[Row] = None,
    experience_rows: Optional[List[Row]] = None,
    education_rows: Optional[List[Row]] = None,
    skill_rows: Optional[List[Row]] = None,
    styles_row: Optional[Row] = None,
) -> ResumeData:
    """
    Assemble one resume version from its stored rows.

    Args:
        contact_row: resume_contact_info row (or None)
        summary_row: resume_summaries row (or None)
        experience_rows: resume_experiences rows, each with nested "bullets"
        education_rows: resume_education rows, each with nested "achievements"
        skill_rows: resume_skills rows with category + skill_name
        styles_row: resume_styles row (or None)

    Returns:
        Validated ResumeData ready for either renderer
    """
    summary = (summary_row or {}).get("content") or ""
    return ResumeData.model_validate(
        {
            "contact_info": format_contact(contact_row),
            "summary": summary,
            "experiences": [format_experience(r) for r in _by_display_order(experience_rows)],
            "education": [format_education(r) for r in _by_display_order(education_rows)],
            "skills": format_skills(skill_rows),
            "styles": format_styles(styles_row),
        }
    )
