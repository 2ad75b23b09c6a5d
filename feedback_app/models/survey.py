from __future__ import annotations

from datetime import date
from enum import Enum, IntEnum
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class SurveyType(str, Enum):
    """Kind of survey being configured; selects the built-in wording."""

    EMPLOYEE_SATISFACTION = "employee_satisfaction"
    COURSE_EVALUATION = "course_evaluation"


class TargetType(str, Enum):
    """How recipients of a survey are selected."""

    ALL = "all"
    DEPARTMENT = "department"
    MANUAL = "manual"


class ScheduleType(str, Enum):
    IMMEDIATE = "immediate"
    SCHEDULED = "scheduled"


class AnonymizationLevel(str, Enum):
    """Whether responses stay linked to the respondent before HR sees them."""

    IDENTIFIED = "identified"
    ANONYMOUS = "anonymous"


class RetentionPeriod(IntEnum):
    """Days raw response data is kept before scheduled deletion."""

    DAYS_30 = 30
    DAYS_60 = 60
    DAYS_90 = 90


def _lower_choice(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _coerce_retention(value: Any) -> Any:
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return value


_CAMEL_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}


class SurveyConfiguration(BaseModel):
    """Draft configuration assembled by the survey creation wizard.

    Every field carries a default so that a partially completed draft can be
    represented; whether the draft is acceptable is decided by the validation
    report, not by construction. Field declaration order is the order in which
    field-level errors are reported.
    """

    survey_type: SurveyType = SurveyType.EMPLOYEE_SATISFACTION
    title: str = ""
    description: Optional[str] = None
    first_message: str = ""
    themes: List[str] = Field(default_factory=list)
    target_type: TargetType = TargetType.ALL
    target_departments: List[str] = Field(default_factory=list)
    target_employees: List[str] = Field(default_factory=list)
    schedule_type: ScheduleType = ScheduleType.IMMEDIATE
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reminder_frequency_days: Optional[int] = 7
    anonymization_level: AnonymizationLevel = AnonymizationLevel.IDENTIFIED
    consent_message: str = ""
    data_retention_days: RetentionPeriod = RetentionPeriod.DAYS_60
    enable_evaluation: bool = False

    model_config = {**_CAMEL_CONFIG, "extra": "forbid"}

    @field_validator("survey_type", "target_type", "schedule_type", "anonymization_level", mode="before")
    @classmethod
    def _normalise_choice(cls, value: Any) -> Any:
        return _lower_choice(value)

    @field_validator("data_retention_days", mode="before")
    @classmethod
    def _normalise_retention(cls, value: Any) -> Any:
        return _coerce_retention(value)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _blank_date_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("themes", mode="before")
    @classmethod
    def _dedupe_themes(cls, value: Iterable[Any] | None) -> Any:
        if value is None or isinstance(value, (str, bytes)):
            return value
        try:
            items = list(value)
        except TypeError:
            return value
        seen: List[Any] = []
        for item in items:
            if item not in seen:
                seen.append(item)
        return seen

    @classmethod
    def field_path(cls, name: str) -> str:
        """Return the UI binding path (camelCase alias) for an attribute name."""

        info = cls.model_fields[name]
        return info.alias or name

    @classmethod
    def attribute_for(cls, key: str) -> Optional[str]:
        """Map either an attribute name or its path back to the attribute name."""

        if key in cls.model_fields:
            return key
        for name, info in cls.model_fields.items():
            if info.alias == key:
                return name
        return None


class DefaultConfiguration(BaseModel):
    """Organization-wide seed values read from the persistence collaborator."""

    consent_message: Optional[str] = None
    anonymization_level: Optional[AnonymizationLevel] = None
    first_message: Optional[str] = None
    data_retention_days: Optional[RetentionPeriod] = None

    model_config = {**_CAMEL_CONFIG, "extra": "ignore"}

    @field_validator("anonymization_level", mode="before")
    @classmethod
    def _normalise_choice(cls, value: Any) -> Any:
        return _lower_choice(value)

    @field_validator("data_retention_days", mode="before")
    @classmethod
    def _normalise_retention(cls, value: Any) -> Any:
        return _coerce_retention(value)
