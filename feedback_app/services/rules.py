"""Rules that span several configuration fields.

Each rule names the field the error is attached to. The blamed field is the
selector that created the requirement (``targetType``), not the dependent
list, except for the scheduling rule which points the user at the missing
start date. Rules run independently and in declaration order, so a caller
sees every violation from one pass and the order is stable.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from feedback_app.models.survey import ScheduleType, SurveyConfiguration, TargetType
from feedback_app.models.validation import FieldError


@dataclass(frozen=True)
class CrossFieldRule:
    name: str
    blame: str
    message: str
    predicate: Callable[[SurveyConfiguration], bool]

    def evaluate(self, config: SurveyConfiguration) -> FieldError | None:
        if self.predicate(config):
            return None
        return FieldError(field=self.blame, message=self.message, rule=self.name)


def _department_targets(config: SurveyConfiguration) -> bool:
    if config.target_type != TargetType.DEPARTMENT:
        return True
    return len(config.target_departments) >= 1


def _manual_targets(config: SurveyConfiguration) -> bool:
    if config.target_type != TargetType.MANUAL:
        return True
    return len(config.target_employees) >= 1


def _scheduled_start(config: SurveyConfiguration) -> bool:
    if config.schedule_type != ScheduleType.SCHEDULED:
        return True
    return config.start_date is not None


CROSS_FIELD_RULES: Tuple[CrossFieldRule, ...] = (
    CrossFieldRule(
        name="department_targets",
        blame="targetType",
        message="Please select at least one target",
        predicate=_department_targets,
    ),
    CrossFieldRule(
        name="manual_targets",
        blame="targetType",
        message="Please select at least one target",
        predicate=_manual_targets,
    ),
    CrossFieldRule(
        name="scheduled_start",
        blame="startDate",
        message="Start date is required for scheduled surveys",
        predicate=_scheduled_start,
    ),
)


def evaluate_rules(
    config: SurveyConfiguration,
    rules: Sequence[CrossFieldRule] = CROSS_FIELD_RULES,
) -> List[FieldError]:
    """Evaluate every rule without short-circuiting and collect failures."""

    errors: List[FieldError] = []
    for rule in rules:
        error = rule.evaluate(config)
        if error is not None:
            errors.append(error)
    return errors
