"""
HTML resume renderer.

Builds a complete, self-contained HTML document (Google Fonts link plus one
inline <style> block) from ResumeData. The PDF service prints this document
with headless Chromium; the @page rule carries the page size and margins so
the browser's own PDF margins stay at zero.
"""

from typing import List

from resume_export.common.error_handling import export_operation
from resume_export.common.logger import get_logger
from resume_export.resume.render_model import (
    SECTION_TITLES,
    ContactItem,
    ExperienceEntry,
    RenderModel,
    prepare_render_model,
)
from resume_export.resume.types import Bullet, Education, Experience, ResumeData

logger = get_logger(__name__, renderer="html")

DEFAULT_FONT = "Inter"

# Allow-listed Google Fonts families and their stylesheet URLs
FONT_URLS = {
    "Inter": "https://fonts.googleapis.com/css2?family=Inter:wght@400;600;700&display=swap",
    "Lato": "https://fonts.googleapis.com/css2?family=Lato:wght@400;700&display=swap",
    "Roboto": "https://fonts.googleapis.com/css2?family=Roboto:wght@400;500;700&display=swap",
    "Open Sans": "https://fonts.googleapis.com/css2?family=Open+Sans:wght@400;600;700&display=swap",
    "Source Sans 3": "https://fonts.googleapis.com/css2?family=Source+Sans+3:wght@400;600;700&display=swap",
    "Merriweather": "https://fonts.googleapis.com/css2?family=Merriweather:wght@400;700&display=swap",
    "PT Serif": "https://fonts.googleapis.com/css2?family=PT+Serif:wght@400;700&display=swap",
    "Crimson Text": "https://fonts.googleapis.com/css2?family=Crimson+Text:wght@400;600;700&display=swap",
}

SERIF_FONTS = {"Merriweather", "PT Serif", "Crimson Text"}

SEPARATOR_HTML = '<span class="resume-separator">•</span>'


def resolve_font(font_family: str) -> str:
    """Map a requested family onto the allow-list (unknown -> Inter)."""
    return font_family if font_family in FONT_URLS else DEFAULT_FONT


def _num(value: float) -> str:
    """Compact CSS number: 10.0 -> "10", 9.5 -> "9.5"."""
    return f"{value:g}"


class ResumeHTMLRenderer:
    """Render ResumeData to an HTML document string."""

    def render(self, data: ResumeData) -> str:
        """
        Build the full HTML document.

        Args:
            data: Validated resume data

        Returns:
            UTF-8 HTML string ready for PDF printing
        """
        model = prepare_render_model(data)
        logger.debug(
            f"Rendering {len(model.entries)} experience entries, "
            f"{len(model.education)} education, {len(model.skill_rows)} skill rows"
        )

        sections = [
            self._build_header(model),
            self._build_summary_section(model),
            self._build_experience_section(model),
            self._build_education_section(model),
            self._build_skills_section(model),
        ]
        body = "\n".join(filter(None, sections))
        return self._wrap_with_html(model, body)

    # ===== SECTIONS =====

    def _build_header(self, model: RenderModel) -> str:
        """Name plus the contact line (no separator before the first item)."""
        contact_html = SEPARATOR_HTML.join(
            self._build_contact_item(item) for item in model.contact_items
        )
        return f"""
  <header class="resume-header">
    <h1 class="resume-name">{self._escape_html(model.name)}</h1>
    <div class="resume-contact-info">{contact_html}</div>
  </header>"""

    def _build_contact_item(self, item: ContactItem) -> str:
        text = self._escape_html(item.text)
        if item.href:
            text = f'<a href="{self._escape_html(item.href)}" class="resume-link">{text}</a>'
        return f'<span class="resume-contact-item">{text}</span>'

    def _build_section(self, key: str, content: str) -> str:
        return f"""
  <section class="resume-section">
    <h2 class="resume-section-heading">{SECTION_TITLES[key]}</h2>
    <div class="resume-section-divider"></div>
    {content}
  </section>"""

    def _build_summary_section(self, model: RenderModel) -> str:
        if not model.has_summary:
            return ""
        return self._build_section(
            "summary", f'<p class="resume-summary">{self._escape_html(model.summary)}</p>'
        )

    def _build_experience_section(self, model: RenderModel) -> str:
        if not model.has_experience:
            return ""
        items = "".join(self._build_experience_entry(entry) for entry in model.entries)
        return self._build_section("experience", items)

    def _build_experience_entry(self, entry: ExperienceEntry) -> str:
        header = self._build_company_header(entry.company, entry.location, entry.date_range)

        if not entry.is_role_group:
            member = entry.members[0]
            return f"""
    <div class="resume-experience-item">
      {header}
      <div class="resume-role-title"><em>{self._escape_html(member.title)}</em></div>
      {self._build_bullet_list(member.bullets)}
    </div>"""

        if entry.display_mode == "grouped":
            titles = "".join(self._build_role_title(entry, m) for m in entry.members)
            return f"""
    <div class="resume-experience-item">
      {header}
      <div class="resume-role-titles">{titles}</div>
      {self._build_bullet_list(entry.all_bullets)}
    </div>"""

        roles = "".join(
            f"""
      <div class="resume-role">
        {self._build_role_title(entry, member)}
        {self._build_bullet_list(member.bullets, nested=True)}
      </div>"""
            for member in entry.members
        )
        return f"""
    <div class="resume-experience-item">
      {header}{roles}
    </div>"""

    def _build_company_header(self, company: str, location: str, date_range: str) -> str:
        location_html = f"<span>, {self._escape_html(location)}</span>" if location else ""
        dates_html = ""
        if date_range:
            dates_html = (
                '<div class="resume-experience-meta">'
                f'<span class="resume-experience-dates">{self._escape_html(date_range)}</span>'
                "</div>"
            )
        return f"""<div class="resume-experience-header">
        <div class="resume-experience-title-group">
          <h3 class="resume-experience-title"><strong>{self._escape_html(company)}</strong>{location_html}</h3>
        </div>
        {dates_html}
      </div>"""

    def _build_role_title(self, entry: ExperienceEntry, member: Experience) -> str:
        dates_html = ""
        role_dates = entry.role_dates(member)
        if entry.is_multi_role and role_dates:
            dates_html = f'<span class="resume-role-dates">({self._escape_html(role_dates)})</span>'
        return f'<div class="resume-role-title"><em>{self._escape_html(member.title)}</em>{dates_html}</div>'

    def _build_bullet_list(self, bullets: List[Bullet], nested: bool = False) -> str:
        if not bullets:
            return ""
        css_class = "resume-bullets resume-bullets-nested" if nested else "resume-bullets"
        items = "".join(
            f'<li class="resume-bullet">{self._escape_html(b.content)}</li>' for b in bullets
        )
        return f'<ul class="{css_class}">{items}</ul>'

    def _build_education_section(self, model: RenderModel) -> str:
        if not model.has_education:
            return ""
        items = "".join(self._build_education_item(edu) for edu in model.education)
        return self._build_section("education", items)

    def _build_education_item(self, edu: Education) -> str:
        degree_line = " - ".join(part for part in (edu.degree.strip(), edu.field.strip()) if part)
        if edu.gpa:
            degree_line = f"{degree_line} • GPA: {edu.gpa}" if degree_line else f"GPA: {edu.gpa}"

        dates = " - ".join(d for d in (edu.start_date.strip(), edu.end_date.strip()) if d)
        achievements = "".join(
            f'<li class="resume-bullet">{self._escape_html(a)}</li>' for a in edu.achievements
        )
        achievements_html = f'<ul class="resume-bullets">{achievements}</ul>' if achievements else ""

        return f"""
    <div class="resume-education-item">
      <div class="resume-experience-header">
        <div class="resume-experience-title-group">
          <h3 class="resume-experience-title">{self._escape_html(edu.school)}</h3>
          <span class="resume-experience-company">{self._escape_html(degree_line)}</span>
        </div>
        <div class="resume-experience-meta">
          <span class="resume-experience-location">{self._escape_html(edu.location)}</span>
          <span class="resume-experience-dates">{self._escape_html(dates)}</span>
        </div>
      </div>
      {achievements_html}
    </div>"""

    def _build_skills_section(self, model: RenderModel) -> str:
        if not model.has_skills:
            return ""
        rows = "".join(
            f"""
      <div class="resume-skill-group">
        <span class="resume-skill-category">{row.label}</span>
        <span class="resume-skill-list">{self._escape_html(row.text)}</span>
      </div>"""
            for row in model.skill_rows
        )
        return self._build_section("skills", f'<div class="resume-skills">{rows}\n    </div>')

    # ===== HELPERS =====

    def _escape_html(self, text: str) -> str:
        """Escape HTML special characters."""
        if not text:
            return ""
        return (
            str(text)
            .replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
            .replace('"', "&quot;")
            .replace("'", "&#39;")
        )

    def _wrap_with_html(self, model: RenderModel, body: str) -> str:
        """Wrap content in an HTML document with print styling."""
        styles = model.styles
        font = resolve_font(styles.font_family)
        fallback = "serif" if font in SERIF_FONTS else "sans-serif"
        size = styles.font_size
        title = f"{model.name} - Resume" if model.name else "Resume"

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{self._escape_html(title)}</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="{FONT_URLS[font]}" rel="stylesheet">
  <style>
    * {{
      margin: 0;
      padding: 0;
      box-sizing: border-box;
    }}

    @page {{
      size: letter;
      margin: {_num(styles.margin_top)}in {_num(styles.margin_right)}in {_num(styles.margin_bottom)}in {_num(styles.margin_left)}in;
    }}

    body {{
      font-family: "{font}", {fallback};
      font-size: {_num(size)}pt;
      line-height: {_num(styles.line_height)};
      color: {styles.text_color};
      background: white;
    }}

    .resume-header {{
      text-align: center;
      margin-bottom: 0.15in;
    }}

    .resume-name {{
      font-size: {_num(size * 2)}pt;
      font-weight: 700;
      color: {styles.heading_color};
      margin: 0 0 0.08in 0;
      letter-spacing: 0.5px;
    }}

    .resume-contact-info {{
      font-size: {_num(size * 0.9)}pt;
      display: flex;
      flex-wrap: wrap;
      justify-content: center;
      align-items: center;
    }}

    .resume-contact-item {{
      white-space: nowrap;
    }}

    .resume-link {{
      color: {styles.text_color};
      text-decoration: none;
    }}

    .resume-separator {{
      margin: 0 0.1in;
      color: #000000;
    }}

    .resume-section {{
      margin-bottom: 0.2in;
    }}

    .resume-section-heading {{
      font-size: {_num(size)}pt;
      font-weight: 700;
      color: #000000;
      margin: 0 0 0.02in 0;
      text-transform: uppercase;
      letter-spacing: 0.5px;
    }}

    .resume-section-divider {{
      height: 1px;
      background-color: {styles.accent_color};
      margin-bottom: 0.1in;
    }}

    .resume-summary {{
      text-align: justify;
    }}

    .resume-experience-item, .resume-education-item {{
      margin-bottom: 0.18in;
      page-break-inside: avoid;
    }}

    .resume-experience-item:last-child, .resume-education-item:last-child {{
      margin-bottom: 0;
    }}

    .resume-experience-header {{
      display: flex;
      justify-content: space-between;
      align-items: flex-start;
      margin-bottom: 0.03in;
    }}

    .resume-experience-title-group {{
      flex: 1;
    }}

    .resume-experience-title {{
      font-size: {_num(size * 1.05)}pt;
      font-weight: 700;
      color: {styles.heading_color};
    }}

    .resume-experience-title > span {{
      font-weight: 400;
    }}

    .resume-experience-company {{
      font-weight: 600;
      display: block;
    }}

    .resume-experience-meta {{
      text-align: right;
      flex-shrink: 0;
    }}

    .resume-experience-location {{
      display: block;
      font-size: {_num(size * 0.95)}pt;
      font-style: italic;
    }}

    .resume-experience-dates {{
      display: block;
      font-size: {_num(size * 0.95)}pt;
      font-weight: 600;
    }}

    .resume-role {{
      margin: 0.03in 0 0.1in 0;
    }}

    .resume-role-titles {{
      margin-bottom: 0.05in;
    }}

    .resume-role-title {{
      font-style: italic;
      margin-bottom: 0.03in;
    }}

    .resume-role-dates {{
      margin-left: 0.1in;
      font-size: {_num(size * 0.95)}pt;
    }}

    .resume-bullets {{
      padding-left: 0.25in;
      list-style-type: disc;
    }}

    .resume-bullets-nested {{
      margin-left: 0.15in;
    }}

    .resume-bullet {{
      margin-bottom: 0.06in;
      padding-left: 0.02in;
    }}

    .resume-bullet:last-child {{
      margin-bottom: 0;
    }}

    .resume-skills {{
      display: flex;
      flex-direction: column;
      gap: 0.08in;
    }}

    .resume-skill-group {{
      display: flex;
      gap: 0.1in;
    }}

    .resume-skill-category {{
      font-weight: 700;
      color: {styles.heading_color};
      flex-shrink: 0;
      min-width: 1.5in;
    }}

    .resume-skill-list {{
      flex: 1;
    }}
  </style>
</head>
<body>
  <div class="resume-content">
{body}
  </div>
</body>
</html>
"""


@export_operation("HTML render", renderer="html")
def render_resume_html(data: ResumeData) -> str:
    """Convenience wrapper around ResumeHTMLRenderer().render()."""
    return ResumeHTMLRenderer().render(data)
