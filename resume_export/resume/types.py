"""
Data types for resume export.

These models are the single input contract for both renderers:
- ContactInfo: Name and contact details shown in the header
- Bullet: One selectable accomplishment line
- Experience: One role at one company, optionally part of a role group
- Education: One school entry with normalized achievements
- Skills: Technical / product / soft skill lists
- ResumeStyles: Typography, margins, colors and experience display mode
- ResumeData: The aggregate handed to the renderers

Models accept the camelCase keys sent by the web client (startDate,
roleGroupId, isSelected, ...) as well as snake_case field names. They are
frozen: renderers never mutate their input.
"""

import re
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


BulletMode = Literal["per_role", "per_experience"]
DisplayMode = Literal["by_role", "grouped"]

# CSS color tokens: hex, named colors, rgb()/hsl() - nothing that can close a rule
COLOR_PATTERN = r"^[#\w(),.%\s-]+$"

# Word line/page breaks (vertical tab, form feed) become spaces; other code
# points XML 1.0 forbids are dropped, or python-docx refuses the text
_SOFT_BREAK_RE = re.compile(r"[\x0b\x0c]")
_XML_ILLEGAL_RE = re.compile(r"[\x00-\x08\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class ResumeModel(BaseModel):
    """Shared config: camelCase aliases, snake_case access, immutable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def clean_text(cls, data: Any) -> Any:
        """Clean every string in the raw input before field validation."""
        return strip_xml_illegal(data)


class ContactInfo(ResumeModel):
    """Header contact details. Empty strings mean 'not provided'."""

    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: Optional[str] = None
    portfolio: Optional[str] = None


class Bullet(ResumeModel):
    """A single accomplishment line, individually selectable for export."""

    id: str = ""
    content: str = ""
    is_selected: bool = True  # storage default when the flag is missing


class Experience(ResumeModel):
    """
    One role held at one company.

    Experiences sharing a role_group_id are sequential titles at the same
    company and render under a single company header.
    """

    id: str = ""
    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    role_group_id: Optional[str] = None
    bullet_mode: Optional[BulletMode] = None
    bullets: List[Bullet] = Field(default_factory=list)

    @field_validator("start_date", "end_date", "title", "company", "location", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """Storage returns NULL for unset text columns."""
        return "" if v is None else v

    @field_validator("bullets", mode="before")
    @classmethod
    def none_to_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("role_group_id", mode="before")
    @classmethod
    def blank_group_to_none(cls, v: Any) -> Any:
        """An empty group id means standalone."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_grouped(self) -> bool:
        return self.role_group_id is not None

    @property
    def selected_bullets(self) -> List[Bullet]:
        return [b for b in self.bullets if b.is_selected]


class Education(ResumeModel):
    """
    One education entry.

    Achievements arrive either as plain strings or as objects carrying an
    "achievement" field (older rows). They are coerced to strings here, once,
    so renderers only ever see List[str].
    """

    id: str = ""
    school: str = ""
    degree: str = ""
    field: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: Optional[str] = None
    achievements: List[str] = Field(default_factory=list)

    @field_validator("school", "degree", "field", "location", "start_date", "end_date", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("gpa", mode="before")
    @classmethod
    def normalize_gpa(cls, v: Any) -> Any:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @field_validator("achievements", mode="before")
    @classmethod
    def coerce_achievements(cls, v: Any) -> List[str]:
        return normalize_achievements(v)


class Skills(ResumeModel):
    """Skill lists by category."""

    technical: List[str] = Field(default_factory=list)
    product: List[str] = Field(default_factory=list)
    soft: List[str] = Field(default_factory=list)

    @field_validator("technical", "product", "soft", mode="before")
    @classmethod
    def drop_blank(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return [str(s).strip() for s in v if s is not None and str(s).strip()]
        return v

    @property
    def is_empty(self) -> bool:
        return not (self.technical or self.product or self.soft)


class ResumeStyles(ResumeModel):
    """
    Typography and layout preferences.

    Defaults match what the version-data formatter applies when no styles
    row exists. Bounds reject values that would produce broken CSS.
    """

    font_family: str = "Inter"
    font_size: float = Field(default=10, gt=0, le=72)
    line_height: float = Field(default=1.4, ge=0.5, le=4)
    margin_top: float = Field(default=0.5, ge=0, le=3)
    margin_bottom: float = Field(default=0.5, ge=0, le=3)
    margin_left: float = Field(default=0.5, ge=0, le=3)
    margin_right: float = Field(default=0.5, ge=0, le=3)
    accent_color: str = Field(default="#3B82F6", pattern=COLOR_PATTERN)
    heading_color: str = Field(default="#111827", pattern=COLOR_PATTERN)
    text_color: str = Field(default="#374151", pattern=COLOR_PATTERN)
    experience_display_mode: Optional[DisplayMode] = None

    @field_validator("line_height", mode="before")
    @classmethod
    def parse_line_height(cls, v: Any) -> Any:
        """Line height is persisted as text ("1.4")."""
        if isinstance(v, str):
            try:
                return float(v.strip())
            except ValueError:
                raise ValueError(f"line_height must be numeric, got {v!r}")
        return v

    @field_validator("font_family", mode="before")
    @classmethod
    def default_font(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return "Inter"
        return v


class ResumeData(ResumeModel):
    """Everything needed to render one resume."""

    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    summary: Optional[str] = None
    experiences: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    skills: Skills = Field(default_factory=Skills)
    styles: ResumeStyles = Field(default_factory=ResumeStyles)

    @field_validator("styles", "skills", "contact_info", mode="before")
    @classmethod
    def none_to_default(cls, v: Any) -> Any:
        """A null object means 'use defaults'."""
        return {} if v is None else v

    @field_validator("experiences", "education", mode="before")
    @classmethod
    def none_to_list(cls, v: Any) -> Any:
        return [] if v is None else v


def normalize_achievement(value: Union[str, dict, None]) -> Optional[str]:
    """
    Coerce one achievement entry to text.

    Returns None for entries with no usable text.
    """
    if value is None:
        return None
    if isinstance(value, dict):
        value = value.get("achievement")
        if value is None:
            return None
    text = str(value).strip()
    return text or None


def normalize_achievements(values: Any) -> List[str]:
    """Coerce a mixed list of strings / {"achievement": ...} objects to strings."""
    if not values:
        return []
    if not isinstance(values, (list, tuple)):
        values = [values]
    normalized = []
    for value in values:
        text = normalize_achievement(value)
        if text is not None:
            normalized.append(text)
    return normalized


def strip_xml_illegal(value: Any) -> Any:
    """Remove characters a DOCX (XML 1.0) document cannot hold, recursively."""
    if isinstance(value, str):
        return _XML_ILLEGAL_RE.sub("", _SOFT_BREAK_RE.sub(" ", value))
    if isinstance(value, dict):
        return {key: strip_xml_illegal(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [strip_xml_illegal(item) for item in value]
    return value
