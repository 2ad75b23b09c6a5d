"""Starting values for a new survey draft.

Organization defaults are optional: when the store has none, or they cannot be
read, every field takes its built-in literal. Resolution never fails.
"""
from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from feedback_app.models.survey import (
    AnonymizationLevel,
    DefaultConfiguration,
    RetentionPeriod,
    ScheduleType,
    SurveyConfiguration,
    SurveyType,
    TargetType,
)
from feedback_app.services.survey_database import SurveyStoreInterface

logger = logging.getLogger(__name__)

DEFAULT_FIRST_MESSAGE = (
    "Hello! Thank you for taking the time to share your feedback with us. "
    "This conversation is confidential and will help us create a better workplace for everyone."
)
DEFAULT_CONSENT_MESSAGE = (
    "Your responses will be kept confidential and used to improve our workplace. "
    "We take your privacy seriously and follow strict data protection guidelines."
)
COURSE_FIRST_MESSAGE = (
    "Thank you for taking time to evaluate this course. Your honest feedback helps improve "
    "the learning experience for future students. This conversation is confidential and will "
    "help your instructor understand what worked well and what could be better."
)
COURSE_CONSENT_MESSAGE = (
    "Your course evaluation will be kept confidential and used to improve the learning experience. "
    "Your feedback is valuable for enhancing teaching quality and course design."
)
DEFAULT_ANONYMIZATION_LEVEL = AnonymizationLevel.IDENTIFIED
DEFAULT_RETENTION = RetentionPeriod.DAYS_60
DEFAULT_REMINDER_FREQUENCY_DAYS = 7


def _literal_messages(survey_type: SurveyType) -> tuple[str, str]:
    if survey_type == SurveyType.COURSE_EVALUATION:
        return COURSE_FIRST_MESSAGE, COURSE_CONSENT_MESSAGE
    return DEFAULT_FIRST_MESSAGE, DEFAULT_CONSENT_MESSAGE


def resolve_defaults(
    defaults: Optional[DefaultConfiguration] = None,
    survey_type: SurveyType = SurveyType.EMPLOYEE_SATISFACTION,
) -> SurveyConfiguration:
    """Return a complete starting configuration.

    Persisted values seed ``consent_message``, ``anonymization_level``,
    ``first_message`` and ``data_retention_days``; any of them left empty in
    the persisted record falls back to its literal individually.
    """

    first_message, consent_message = _literal_messages(survey_type)
    seed = defaults or DefaultConfiguration()

    return SurveyConfiguration(
        survey_type=survey_type,
        title="",
        description="",
        first_message=seed.first_message or first_message,
        themes=[],
        target_type=TargetType.ALL,
        target_departments=[],
        target_employees=[],
        schedule_type=ScheduleType.IMMEDIATE,
        start_date=None,
        end_date=None,
        reminder_frequency_days=DEFAULT_REMINDER_FREQUENCY_DAYS,
        anonymization_level=seed.anonymization_level or DEFAULT_ANONYMIZATION_LEVEL,
        consent_message=seed.consent_message or consent_message,
        data_retention_days=seed.data_retention_days or DEFAULT_RETENTION,
        enable_evaluation=False,
    )


def load_defaults(store: SurveyStoreInterface | None) -> Optional[DefaultConfiguration]:
    """Fetch organization defaults, treating any failure as "not configured"."""

    if store is None:
        return None
    try:
        return store.fetch_defaults()
    except ValidationError as exc:
        logger.warning("Ignoring malformed survey defaults: %s", exc)
    except Exception as exc:
        logger.warning("Survey defaults unavailable, using built-in values: %s", exc)
    return None
