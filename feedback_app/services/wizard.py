from __future__ import annotations

import copy
import logging
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional, Tuple

from feedback_app.models.survey import SurveyConfiguration, SurveyType
from feedback_app.models.validation import ValidationReport
from feedback_app.services.defaults import load_defaults, resolve_defaults
from feedback_app.services.survey_database import SurveyStoreInterface, get_survey_store
from feedback_app.services.validation import parse_payload, validate_payload

logger = logging.getLogger(__name__)


class WizardStep(IntEnum):
    """Pages of the survey creation wizard, in navigation order."""

    TYPE = 1
    DETAILS = 2
    THEMES = 3
    TARGETING = 4
    SCHEDULE = 5
    PRIVACY = 6
    REVIEW = 7

    @property
    def title(self) -> str:
        return STEP_TITLES[self]


STEP_TITLES: Dict[WizardStep, str] = {
    WizardStep.TYPE: "Type",
    WizardStep.DETAILS: "Details",
    WizardStep.THEMES: "Themes",
    WizardStep.TARGETING: "Targeting",
    WizardStep.SCHEDULE: "Schedule",
    WizardStep.PRIVACY: "Privacy",
    WizardStep.REVIEW: "Review & Deploy",
}

STEP_FIELDS: Dict[WizardStep, Tuple[str, ...]] = {
    WizardStep.TYPE: ("surveyType",),
    WizardStep.DETAILS: ("title", "description", "firstMessage"),
    WizardStep.THEMES: ("themes",),
    WizardStep.TARGETING: ("targetType", "targetDepartments", "targetEmployees"),
    WizardStep.SCHEDULE: ("scheduleType", "startDate", "endDate", "reminderFrequencyDays"),
    WizardStep.PRIVACY: ("anonymizationLevel", "consentMessage", "dataRetentionDays", "enableEvaluation"),
    WizardStep.REVIEW: (),
}


class ConfigurationInvalidError(ValueError):
    """Raised when an invalid draft is handed to persistence."""

    def __init__(self, report: ValidationReport) -> None:
        fields = ", ".join(report.fields)
        super().__init__(f"Survey configuration is invalid: {fields}")
        self.report = report


class SurveyWizard:
    """Owns one mutable survey draft for the duration of a wizard session.

    The draft is kept as raw values keyed by field path so that anything the
    UI binds can be stored and reported on, even values that do not parse.
    """

    def __init__(
        self,
        store: SurveyStoreInterface | None = None,
        *,
        survey_type: SurveyType = SurveyType.EMPLOYEE_SATISFACTION,
        draft: Mapping[str, Any] | None = None,
        survey_id: str | None = None,
    ) -> None:
        self._store = store or get_survey_store()
        self._survey_id = survey_id
        self._step = WizardStep.TYPE

        if draft is None:
            starting = resolve_defaults(load_defaults(self._store), survey_type)
            self._draft: Dict[str, Any] = starting.model_dump(by_alias=True)
        else:
            self._draft = {}
            self.update(draft)

    @classmethod
    def resume(cls, store: SurveyStoreInterface, survey_id: str) -> "SurveyWizard":
        """Reopen a previously saved configuration for editing."""

        config = store.load_configuration(survey_id)
        if config is None:
            raise KeyError(f"Unknown survey id: {survey_id}")
        return cls(store, draft=config.model_dump(by_alias=True), survey_id=survey_id)

    @property
    def survey_id(self) -> Optional[str]:
        return self._survey_id

    @property
    def current_step(self) -> WizardStep:
        return self._step

    @property
    def draft(self) -> Dict[str, Any]:
        """Return a copy of the current draft values keyed by path."""

        return copy.deepcopy(self._draft)

    def update(self, changes: Mapping[str, Any] | None = None, **fields: Any) -> None:
        """Apply field changes; keys may be attribute names or paths."""

        merged: Dict[str, Any] = dict(changes or {})
        merged.update(fields)
        for key, value in merged.items():
            name = SurveyConfiguration.attribute_for(key)
            path = SurveyConfiguration.field_path(name) if name else key
            self._draft[path] = copy.deepcopy(value)

    def validate(self) -> ValidationReport:
        return validate_payload(self._draft)

    def validate_step(self, step: WizardStep | None = None) -> ValidationReport:
        """Return the errors relevant to one wizard page; the review page sees all."""

        target = step or self._step
        report = self.validate()
        if target == WizardStep.REVIEW:
            return report
        return report.restricted_to(STEP_FIELDS[target])

    def can_advance(self) -> bool:
        return self._step < WizardStep.REVIEW and self.validate_step().is_valid

    def next(self) -> ValidationReport:
        """Move to the next page when the current page validates."""

        report = self.validate_step()
        if not report.is_valid:
            logger.debug("Blocked wizard step %s: %s", self._step.name, ", ".join(report.fields))
            return report
        if self._step < WizardStep.REVIEW:
            self._step = WizardStep(self._step + 1)
        return report

    def back(self) -> None:
        if self._step > WizardStep.TYPE:
            self._step = WizardStep(self._step - 1)

    def submit(self) -> str:
        """Validate the whole draft and hand it to the store; return the survey id."""

        report = self.validate()
        if not report.is_valid:
            raise ConfigurationInvalidError(report)

        config, _ = parse_payload(self._draft)
        self._survey_id = self._store.save_configuration(config, self._survey_id)
        logger.info("Submitted survey configuration %s", self._survey_id)
        return self._survey_id
