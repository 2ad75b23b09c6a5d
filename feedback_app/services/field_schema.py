from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, FrozenSet, List, Optional, Sequence

from feedback_app.models.survey import (
    AnonymizationLevel,
    RetentionPeriod,
    ScheduleType,
    SurveyConfiguration,
    SurveyType,
    TargetType,
)
from feedback_app.models.validation import FieldError


@dataclass(frozen=True)
class FieldConstraint:
    """Declared constraint for one configuration field, checked in isolation.

    ``min_length`` on text is measured after stripping surrounding whitespace,
    so whitespace-only text counts as empty. ``max_length`` is measured on the
    raw value. Lengths are code points. Sequences only honour ``min_length``.
    """

    required: bool = True
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    choices: Optional[FrozenSet[Any]] = None
    positive: bool = False
    required_message: str = "This field is required"
    too_long_message: Optional[str] = None
    choice_message: Optional[str] = None
    positive_message: Optional[str] = None


def _choices(enum_cls: type[Enum]) -> FrozenSet[Any]:
    return frozenset(member.value for member in enum_cls)


FIELD_CONSTRAINTS: dict[str, FieldConstraint] = {
    "survey_type": FieldConstraint(
        choices=_choices(SurveyType),
        choice_message="Survey type must be employee_satisfaction or course_evaluation",
    ),
    "title": FieldConstraint(
        min_length=1,
        max_length=100,
        required_message="Title is required",
        too_long_message="Title must be less than 100 characters",
    ),
    "description": FieldConstraint(
        required=False,
        max_length=500,
        too_long_message="Description must be less than 500 characters",
    ),
    "first_message": FieldConstraint(min_length=1, required_message="First message is required"),
    "themes": FieldConstraint(min_length=1, required_message="At least one theme must be selected"),
    "target_type": FieldConstraint(
        choices=_choices(TargetType),
        choice_message="Target type must be all, department or manual",
    ),
    "target_departments": FieldConstraint(required=False),
    "target_employees": FieldConstraint(required=False),
    "schedule_type": FieldConstraint(
        choices=_choices(ScheduleType),
        choice_message="Schedule type must be immediate or scheduled",
    ),
    "start_date": FieldConstraint(required=False),
    "end_date": FieldConstraint(required=False),
    "reminder_frequency_days": FieldConstraint(
        required=False,
        positive=True,
        positive_message="Reminder frequency must be a positive number of days",
    ),
    "anonymization_level": FieldConstraint(
        choices=_choices(AnonymizationLevel),
        choice_message="Anonymization level must be identified or anonymous",
    ),
    "consent_message": FieldConstraint(min_length=1, required_message="Consent message is required"),
    "data_retention_days": FieldConstraint(
        choices=_choices(RetentionPeriod),
        choice_message="Data retention must be 30, 60 or 90 days",
    ),
    "enable_evaluation": FieldConstraint(required=False),
}


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) == 0
    return False


def _measure(value: Any) -> int:
    if isinstance(value, str):
        return len(value.strip())
    return len(value)


def check_field(path: str, value: Any, constraint: FieldConstraint) -> FieldError | None:
    """Return the first violation of ``constraint`` by ``value``, if any."""

    if _is_empty(value):
        if constraint.required:
            return FieldError(field=path, message=constraint.required_message)
        return None

    if constraint.choices is not None:
        raw = value.value if isinstance(value, Enum) else value
        if raw not in constraint.choices:
            return FieldError(field=path, message=constraint.choice_message or "Invalid choice")
        return None

    if constraint.positive and isinstance(value, int) and value <= 0:
        return FieldError(field=path, message=constraint.positive_message or "Must be positive")

    if isinstance(value, (str, list, tuple)):
        if constraint.min_length is not None and _measure(value) < constraint.min_length:
            return FieldError(field=path, message=constraint.required_message)
        if isinstance(value, str) and constraint.max_length is not None and len(value) > constraint.max_length:
            return FieldError(field=path, message=constraint.too_long_message or "Too long")

    return None


def field_order() -> Sequence[str]:
    """Return attribute names in declaration order."""

    return tuple(SurveyConfiguration.model_fields)


def check_fields(config: SurveyConfiguration, *, skip: Sequence[str] = ()) -> List[FieldError]:
    """Run every field constraint in declaration order."""

    errors: List[FieldError] = []
    for name in field_order():
        if name in skip:
            continue
        constraint = FIELD_CONSTRAINTS.get(name)
        if constraint is None:
            continue
        error = check_field(SurveyConfiguration.field_path(name), getattr(config, name), constraint)
        if error is not None:
            errors.append(error)
    return errors


def describe_parse_error(name: str, pydantic_message: str) -> str:
    """Return the user-facing message for a value that could not be parsed."""

    constraint = FIELD_CONSTRAINTS.get(name)
    if constraint is not None and constraint.choice_message:
        return constraint.choice_message
    return pydantic_message
