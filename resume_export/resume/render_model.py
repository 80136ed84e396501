"""
Shared render model for the HTML and DOCX renderers.

Both renderers consume a RenderModel built by prepare_render_model(), so
grouping, ordering and bullet selection are decided in exactly one place:

1. group_experiences   - split experiences into role groups and standalone
2. sort_group_members  - newest start date first within a group (stable)
3. filter_role_group / filter_selected_bullets - keep selected bullets only

Group survival rule: a role group is rendered when at least one member has a
selected bullet. When it survives, every member is kept (roles with no
selected bullets still show their title and dates). Standalone experiences
with no selected bullets are dropped.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from resume_export.resume.dates import parse_resume_date
from resume_export.resume.types import (
    Bullet,
    ContactInfo,
    DisplayMode,
    Education,
    Experience,
    ResumeData,
    ResumeStyles,
)

CONTACT_SEPARATOR = " • "

SECTION_TITLES = {
    "summary": "PROFESSIONAL SUMMARY",
    "experience": "PROFESSIONAL EXPERIENCE",
    "education": "EDUCATION",
    "skills": "SKILLS",
}

# (Skills attribute, row label), in render order
SKILL_LABELS = [
    ("technical", "Technical:"),
    ("product", "Product Management:"),
    ("soft", "Leadership:"),
]

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


# ===== GROUPING AND ORDERING =====

@dataclass
class GroupedExperiences:
    """Experiences split by role group. Dict order is first appearance."""

    groups: Dict[str, List[Experience]] = field(default_factory=dict)
    standalone: List[Experience] = field(default_factory=list)


def group_experiences(experiences: List[Experience]) -> GroupedExperiences:
    """Bucket experiences by role_group_id, preserving input order."""
    grouped = GroupedExperiences()
    for experience in experiences:
        if experience.is_grouped:
            grouped.groups.setdefault(experience.role_group_id, []).append(experience)
        else:
            grouped.standalone.append(experience)
    return grouped


def sort_group_members(members: List[Experience]) -> List[Experience]:
    """
    Order role group members newest first by start date.

    sorted() is stable with reverse=True, so members with equal start dates
    keep their relative order and re-sorting is a no-op.
    """
    return sorted(members, key=lambda e: parse_resume_date(e.start_date), reverse=True)


def format_date_range(start: str, end: str) -> str:
    """Join the non-empty ends of a range with " - "."""
    return " - ".join(part for part in (start.strip(), end.strip()) if part)


def combined_date_range(members: List[Experience]) -> str:
    """
    Span covered by all members: earliest start to latest end.

    Dates are compared by parsed value rather than as text, so "Present"
    is always the latest end.
    """
    starts = [m.start_date.strip() for m in members if m.start_date.strip()]
    ends = [m.end_date.strip() for m in members if m.end_date.strip()]

    earliest = min(starts, key=parse_resume_date) if starts else ""
    latest = max(ends, key=parse_resume_date) if ends else ""
    return format_date_range(earliest, latest)


# ===== BULLET SELECTION =====

def filter_selected_bullets(experience: Experience) -> Optional[Experience]:
    """
    Copy of the experience holding only its selected bullets.

    Returns None for a standalone experience left with no bullets. Grouped
    experiences are always returned; filter_role_group decides their fate.
    """
    selected = experience.selected_bullets
    if not selected and not experience.is_grouped:
        return None
    return experience.model_copy(update={"bullets": selected})


def filter_role_group(members: List[Experience]) -> Optional[List[Experience]]:
    """
    Apply bullet selection to a whole role group.

    Returns None when no member kept a bullet, otherwise all filtered
    members (including empty ones) in the given order.
    """
    filtered = [f for f in (filter_selected_bullets(m) for m in members) if f is not None]
    if not any(m.bullets for m in filtered):
        return None
    return filtered


def resolve_display_mode(styles: ResumeStyles, members: List[Experience]) -> DisplayMode:
    """
    Pick by_role or grouped for one experience entry.

    An explicit styles.experience_display_mode wins. Otherwise the group's
    bullet_mode decides: per_experience merges bullets, per_role does not.
    """
    if styles.experience_display_mode:
        return styles.experience_display_mode
    for member in members:
        if member.bullet_mode:
            return "grouped" if member.bullet_mode == "per_experience" else "by_role"
    return "by_role"


# ===== RENDER MODEL =====

@dataclass
class ContactItem:
    """One piece of the contact line."""

    kind: str  # location, phone, email, linkedin, portfolio
    text: str
    href: Optional[str] = None


def ensure_scheme(url: str) -> str:
    """Prefix https:// unless the URL already carries a scheme."""
    if _SCHEME_RE.match(url):
        return url
    return f"https://{url}"


def build_contact_items(contact: ContactInfo) -> List[ContactItem]:
    """Non-empty contact fields in display order, with link targets."""
    items = []
    for kind in ("location", "phone", "email", "linkedin", "portfolio"):
        text = (getattr(contact, kind) or "").strip()
        if not text:
            continue
        href = None
        if kind == "email":
            href = f"mailto:{text}"
        elif kind in ("linkedin", "portfolio"):
            href = ensure_scheme(text)
        items.append(ContactItem(kind=kind, text=text, href=href))
    return items


@dataclass
class ExperienceEntry:
    """
    One block in the experience section.

    Either a surviving role group (members sorted newest first) or a single
    standalone experience. Members already hold only selected bullets.
    """

    members: List[Experience]
    is_role_group: bool
    display_mode: DisplayMode = "by_role"
    date_range: str = ""

    @property
    def company(self) -> str:
        return self.members[0].company

    @property
    def location(self) -> str:
        return self.members[0].location.strip()

    @property
    def is_multi_role(self) -> bool:
        """Role dates repeat under the header only when there is more than one role."""
        return len(self.members) > 1

    @property
    def all_bullets(self) -> List[Bullet]:
        """Every bullet of every member, in member order."""
        return [bullet for member in self.members for bullet in member.bullets]

    @staticmethod
    def role_dates(member: Experience) -> str:
        return format_date_range(member.start_date, member.end_date)


@dataclass
class SkillRow:
    label: str
    items: List[str]

    @property
    def text(self) -> str:
        return ", ".join(self.items)


@dataclass
class RenderModel:
    """Everything a renderer needs, already grouped, ordered and filtered."""

    name: str
    contact_items: List[ContactItem]
    summary: Optional[str]
    entries: List[ExperienceEntry]
    education: List[Education]
    skill_rows: List[SkillRow]
    styles: ResumeStyles

    @property
    def contact_line(self) -> str:
        return CONTACT_SEPARATOR.join(item.text for item in self.contact_items)

    @property
    def has_summary(self) -> bool:
        return bool(self.summary)

    @property
    def has_experience(self) -> bool:
        return bool(self.entries)

    @property
    def has_education(self) -> bool:
        return bool(self.education)

    @property
    def has_skills(self) -> bool:
        return bool(self.skill_rows)

    @property
    def section_titles(self) -> List[str]:
        """Titles of the sections that will be rendered, in order."""
        present = {
            "summary": self.has_summary,
            "experience": self.has_experience,
            "education": self.has_education,
            "skills": self.has_skills,
        }
        return [SECTION_TITLES[key] for key, shown in present.items() if shown]


def _build_entries(data: ResumeData) -> List[ExperienceEntry]:
    grouped = group_experiences(data.experiences)
    entries = []
    placed_groups = set()

    # Walk the input so each group lands where its first member appeared
    for experience in data.experiences:
        if experience.is_grouped:
            group_id = experience.role_group_id
            if group_id in placed_groups:
                continue
            placed_groups.add(group_id)
            members = filter_role_group(sort_group_members(grouped.groups[group_id]))
            if members is None:
                continue
            entries.append(
                ExperienceEntry(
                    members=members,
                    is_role_group=True,
                    display_mode=resolve_display_mode(data.styles, members),
                    date_range=combined_date_range(members),
                )
            )
        else:
            filtered = filter_selected_bullets(experience)
            if filtered is None:
                continue
            entries.append(
                ExperienceEntry(
                    members=[filtered],
                    is_role_group=False,
                    display_mode=resolve_display_mode(data.styles, [filtered]),
                    date_range=format_date_range(filtered.start_date, filtered.end_date),
                )
            )
    return entries


def prepare_render_model(data: ResumeData) -> RenderModel:
    """
    Build the render model shared by both renderers.

    Args:
        data: Validated resume data (never mutated)

    Returns:
        RenderModel with contact items, summary, ordered experience entries,
        education and the non-empty skill rows
    """
    summary = (data.summary or "").strip() or None
    skill_rows = [
        SkillRow(label=label, items=list(getattr(data.skills, attr)))
        for attr, label in SKILL_LABELS
        if getattr(data.skills, attr)
    ]

    return RenderModel(
        name=data.contact_info.name.strip(),
        contact_items=build_contact_items(data.contact_info),
        summary=summary,
        entries=_build_entries(data),
        education=list(data.education),
        skill_rows=skill_rows,
        styles=data.styles,
    )
