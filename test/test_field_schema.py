from __future__ import annotations

from feedback_app.models.survey import RetentionPeriod, SurveyConfiguration, TargetType
from feedback_app.services.field_schema import FIELD_CONSTRAINTS, check_field, check_fields


def _complete_config(**overrides) -> SurveyConfiguration:
    values = {
        "title": "Q1 Pulse",
        "first_message": "Hi",
        "themes": ["eng"],
        "consent_message": "ok",
    }
    values.update(overrides)
    return SurveyConfiguration(**values)


def test_empty_title_reports_required_message() -> None:
    error = check_field("title", "", FIELD_CONSTRAINTS["title"])

    assert error is not None
    assert error.field == "title"
    assert error.message == "Title is required"
    assert error.rule is None


def test_whitespace_only_title_counts_as_empty() -> None:
    error = check_field("title", "   \t", FIELD_CONSTRAINTS["title"])

    assert error is not None
    assert error.message == "Title is required"


def test_title_length_is_measured_in_code_points() -> None:
    assert check_field("title", "é" * 100, FIELD_CONSTRAINTS["title"]) is None

    error = check_field("title", "é" * 101, FIELD_CONSTRAINTS["title"])
    assert error is not None
    assert error.message == "Title must be less than 100 characters"


def test_optional_description_may_be_empty_but_not_too_long() -> None:
    constraint = FIELD_CONSTRAINTS["description"]

    assert check_field("description", None, constraint) is None
    assert check_field("description", "", constraint) is None
    assert check_field("description", "x" * 500, constraint) is None
    assert check_field("description", "x" * 501, constraint).message == (
        "Description must be less than 500 characters"
    )


def test_themes_must_not_be_empty() -> None:
    error = check_field("themes", [], FIELD_CONSTRAINTS["themes"])

    assert error is not None
    assert error.message == "At least one theme must be selected"


def test_reminder_frequency_must_be_positive_when_present() -> None:
    constraint = FIELD_CONSTRAINTS["reminder_frequency_days"]

    assert check_field("reminderFrequencyDays", None, constraint) is None
    assert check_field("reminderFrequencyDays", 3, constraint) is None
    assert check_field("reminderFrequencyDays", 0, constraint) is not None
    assert check_field("reminderFrequencyDays", -2, constraint) is not None


def test_enum_fields_accept_members_and_reject_other_values() -> None:
    assert check_field("dataRetentionDays", RetentionPeriod.DAYS_90, FIELD_CONSTRAINTS["data_retention_days"]) is None
    assert check_field("targetType", TargetType.MANUAL, FIELD_CONSTRAINTS["target_type"]) is None

    error = check_field("dataRetentionDays", 45, FIELD_CONSTRAINTS["data_retention_days"])
    assert error is not None
    assert error.message == "Data retention must be 30, 60 or 90 days"


def test_check_fields_reports_in_declaration_order() -> None:
    config = _complete_config(title="", first_message="", themes=[], consent_message=" ")

    errors = check_fields(config)

    assert [error.field for error in errors] == ["title", "firstMessage", "themes", "consentMessage"]


def test_check_fields_ignores_other_fields_values() -> None:
    config = _complete_config(target_type=TargetType.DEPARTMENT, target_departments=[])

    assert check_fields(config) == []
