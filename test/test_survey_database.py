from __future__ import annotations

import json
from datetime import datetime

import pytest

from feedback_app.models.analysis import Assignment, FeedbackResponse
from feedback_app.models.survey import (
    AnonymizationLevel,
    DefaultConfiguration,
    RetentionPeriod,
    SurveyConfiguration,
    TargetType,
)
from feedback_app.services.survey_database import JsonSurveyStore, SurveyStoreError


def _build_store(tmp_path) -> JsonSurveyStore:
    return JsonSurveyStore(tmp_path / "nested" / "store.json")


def test_missing_file_has_no_defaults(tmp_path) -> None:
    assert _build_store(tmp_path).fetch_defaults() is None


def test_defaults_round_trip(tmp_path) -> None:
    store = _build_store(tmp_path)
    store.save_defaults(
        DefaultConfiguration(anonymization_level=AnonymizationLevel.ANONYMOUS, data_retention_days=30)
    )

    loaded = store.fetch_defaults()

    assert loaded.anonymization_level == AnonymizationLevel.ANONYMOUS
    assert loaded.data_retention_days == RetentionPeriod.DAYS_30
    assert loaded.consent_message is None


def test_saved_configuration_uses_field_paths(tmp_path) -> None:
    store = _build_store(tmp_path)
    config = SurveyConfiguration(
        title="Pulse",
        themes=["eng"],
        target_type=TargetType.DEPARTMENT,
        target_departments=["eng-dept"],
    )

    survey_id = store.save_configuration(config)

    raw = json.loads((tmp_path / "nested" / "store.json").read_text(encoding="utf-8"))
    stored = raw["surveys"][survey_id]
    assert stored["targetType"] == "department"
    assert stored["targetDepartments"] == ["eng-dept"]
    assert stored["dataRetentionDays"] == 60
    assert store.load_configuration(survey_id) == config


def test_save_with_existing_id_overwrites(tmp_path) -> None:
    store = _build_store(tmp_path)

    store.save_configuration(SurveyConfiguration(title="One"), "fixed")
    store.save_configuration(SurveyConfiguration(title="Two"), "fixed")

    assert store.load_configuration("fixed").title == "Two"
    assert store.load_configuration("other") is None


def test_records_are_filtered_by_survey(tmp_path) -> None:
    store = _build_store(tmp_path)
    assigned_at = datetime(2026, 10, 1, 9, 0)
    store.add_assignment(Assignment(survey_id="a", employee_id="e1", assigned_at=assigned_at))
    store.add_assignment(Assignment(survey_id="b", employee_id="e2", assigned_at=assigned_at, status="completed"))
    store.add_response(FeedbackResponse(survey_id="a", sentiment="positive"))

    assert [item.employee_id for item in store.list_assignments("a")] == ["e1"]
    assert len(store.list_assignments()) == 2
    assert store.list_assignments("b")[0].status == "completed"
    assert len(store.list_responses("a")) == 1
    assert store.list_responses("b") == []


def test_corrupt_file_reads_as_empty(tmp_path) -> None:
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")

    store = JsonSurveyStore(path)

    assert store.fetch_defaults() is None
    assert store.list_responses() == []


def test_writes_refuse_to_replace_corrupt_file(tmp_path) -> None:
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonSurveyStore(path)

    with pytest.raises(SurveyStoreError):
        store.save_configuration(SurveyConfiguration(title="Pulse"))
    with pytest.raises(SurveyStoreError):
        store.save_defaults(DefaultConfiguration(data_retention_days=30))
    with pytest.raises(SurveyStoreError):
        store.add_response(FeedbackResponse(survey_id="s1", sentiment="positive"))

    assert path.read_text(encoding="utf-8") == "{not json"
