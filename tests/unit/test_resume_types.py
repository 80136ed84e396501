"""
Unit tests for resume data types.

Covers camelCase/snake_case input, defaults, achievement normalization and
style validation.
"""

import pytest
from pydantic import ValidationError

from resume_export.resume.types import (
    Bullet,
    Education,
    Experience,
    ResumeData,
    ResumeStyles,
    Skills,
    normalize_achievement,
    normalize_achievements,
    strip_xml_illegal,
)


class TestAliases:
    """Models accept client JSON and Python field names alike."""

    def test_camel_case_input(self):
        exp = Experience.model_validate(
            {"startDate": "2020", "endDate": "2021", "roleGroupId": "g1", "bulletMode": "per_role"}
        )
        assert exp.start_date == "2020"
        assert exp.role_group_id == "g1"
        assert exp.bullet_mode == "per_role"

    def test_snake_case_input(self):
        exp = Experience(start_date="2020", role_group_id="g1")
        assert exp.start_date == "2020"
        assert exp.is_grouped

    def test_dump_by_alias_round_trips_to_camel_case(self):
        data = ResumeData.model_validate({"contactInfo": {"name": "A"}})
        dumped = data.model_dump(by_alias=True)
        assert "contactInfo" in dumped
        assert "experienceDisplayMode" in dumped["styles"]

    def test_models_are_frozen(self):
        bullet = Bullet(id="1", content="x")
        with pytest.raises(ValidationError):
            bullet.content = "changed"


class TestDefaults:
    """Missing or null values fall back to defaults."""

    def test_bullet_selected_by_default(self):
        assert Bullet.model_validate({"id": "1", "content": "x"}).is_selected is True

    def test_null_text_columns_become_empty(self):
        exp = Experience.model_validate({"title": None, "endDate": None, "bullets": None})
        assert exp.title == ""
        assert exp.end_date == ""
        assert exp.bullets == []

    def test_blank_group_id_means_standalone(self):
        assert Experience.model_validate({"roleGroupId": "  "}).role_group_id is None
        assert not Experience.model_validate({"roleGroupId": ""}).is_grouped

    def test_numeric_ids_are_coerced_to_text(self):
        assert Bullet.model_validate({"id": 42, "content": "x"}).id == "42"

    def test_resume_data_null_sections(self):
        data = ResumeData.model_validate(
            {"contactInfo": None, "experiences": None, "skills": None, "styles": None}
        )
        assert data.contact_info.name == ""
        assert data.experiences == []
        assert data.skills.is_empty
        assert data.styles == ResumeStyles()

    def test_style_defaults(self):
        styles = ResumeStyles()
        assert styles.font_family == "Inter"
        assert styles.font_size == 10
        assert styles.line_height == 1.4
        assert styles.margin_top == styles.margin_left == 0.5
        assert styles.accent_color == "#3B82F6"
        assert styles.experience_display_mode is None


class TestAchievements:
    """Achievements are coerced to strings once, at validation time."""

    def test_mixed_shapes(self):
        edu = Education.model_validate(
            {"achievements": [{"achievement": "Dean's list"}, "Magna cum laude"]}
        )
        assert edu.achievements == ["Dean's list", "Magna cum laude"]

    def test_blank_and_missing_entries_dropped(self):
        values = ["  ", None, {"other": "x"}, {"achievement": ""}, "Kept"]
        assert normalize_achievements(values) == ["Kept"]

    def test_single_value_and_empty(self):
        assert normalize_achievements(None) == []
        assert normalize_achievements("Solo") == ["Solo"]

    def test_normalize_achievement_strips(self):
        assert normalize_achievement({"achievement": "  Award  "}) == "Award"
        assert normalize_achievement("   ") is None

    def test_gpa_normalized(self):
        assert Education.model_validate({"gpa": 3.9}).gpa == "3.9"
        assert Education.model_validate({"gpa": "  "}).gpa is None


class TestSkills:
    def test_blank_skills_dropped(self):
        skills = Skills.model_validate({"technical": ["SQL", " ", None], "product": None})
        assert skills.technical == ["SQL"]
        assert skills.product == []

    def test_is_empty(self):
        assert Skills().is_empty
        assert not Skills(soft=["Mentoring"]).is_empty


class TestStyleValidation:
    """Bad style values are rejected instead of leaking into CSS."""

    def test_line_height_accepts_numeric_string(self):
        assert ResumeStyles.model_validate({"lineHeight": "1.6"}).line_height == 1.6

    def test_line_height_rejects_text(self):
        with pytest.raises(ValidationError):
            ResumeStyles.model_validate({"lineHeight": "tall"})

    @pytest.mark.parametrize(
        "field,value",
        [
            ("fontSize", 0),
            ("fontSize", 200),
            ("lineHeight", 10),
            ("marginTop", -1),
            ("marginLeft", 5),
        ],
    )
    def test_out_of_range_values(self, field, value):
        with pytest.raises(ValidationError):
            ResumeStyles.model_validate({field: value})

    @pytest.mark.parametrize(
        "color", ["red;} body{display:none", "</style><script>", "#fff\"", "url('x')"]
    )
    def test_colors_cannot_escape_css(self, color):
        with pytest.raises(ValidationError):
            ResumeStyles.model_validate({"accentColor": color})

    @pytest.mark.parametrize("color", ["#111827", "navy", "rgb(10, 20, 30)", "hsl(210, 50%, 40%)"])
    def test_valid_colors(self, color):
        assert ResumeStyles.model_validate({"textColor": color}).text_color == color

    def test_unknown_display_mode_rejected(self):
        with pytest.raises(ValidationError):
            ResumeStyles.model_validate({"experienceDisplayMode": "timeline"})

    def test_blank_font_family_defaults(self):
        assert ResumeStyles.model_validate({"fontFamily": ""}).font_family == "Inter"


class TestControlCharacters:
    """Text pasted from word processors carries characters XML cannot hold."""

    def test_soft_breaks_become_spaces(self):
        assert strip_xml_illegal("line one\x0bline two\x0cend") == "line one line two end"

    def test_illegal_code_points_dropped(self):
        assert strip_xml_illegal("a\x00b\x07c\x1fd\ufffe") == "abcd"

    def test_tabs_and_newlines_kept(self):
        assert strip_xml_illegal("a\tb\nc\rd") == "a\tb\nc\rd"

    def test_nested_values(self):
        cleaned = strip_xml_illegal({"a": ["x\x01", {"b": "y\x0b"}], "n": 3})
        assert cleaned == {"a": ["x", {"b": "y "}], "n": 3}

    def test_cleaned_throughout_resume(self):
        data = ResumeData.model_validate({
            "contactInfo": {"name": "Jane\x08 Doe"},
            "summary": "Pasted\x0bsummary",
            "experiences": [{"id": "1", "title": "PM\x02", "bullets": [{"id": "b", "content": "Led\x0cteam"}]}],
            "education": [{"id": "e", "achievements": [{"achievement": "Dean\x1b's list"}]}],
            "skills": {"technical": ["SQL\x00"]},
        })
        assert data.contact_info.name == "Jane Doe"
        assert data.summary == "Pasted summary"
        assert data.experiences[0].title == "PM"
        assert data.experiences[0].bullets[0].content == "Led team"
        assert data.education[0].achievements == ["Dean's list"]
        assert data.skills.technical == ["SQL"]
