from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Tuple

from pydantic import ValidationError

from feedback_app.models.survey import SurveyConfiguration
from feedback_app.models.validation import FieldError, ValidationReport
from feedback_app.services.field_schema import check_fields, describe_parse_error, field_order
from feedback_app.services.rules import evaluate_rules

logger = logging.getLogger(__name__)


def build_report(config: SurveyConfiguration) -> ValidationReport:
    """Validate a configuration: field checks first, then cross-field rules.

    Both passes always run and their errors are concatenated as-is, so a field
    may be reported twice with different messages.
    """

    errors = check_fields(config)
    errors.extend(evaluate_rules(config))
    report = ValidationReport.from_errors(errors)
    logger.debug("Validated survey configuration: %d error(s)", len(report.errors))
    return report


def parse_payload(payload: Mapping[str, Any]) -> Tuple[SurveyConfiguration, List[FieldError]]:
    """Build a configuration from raw wizard data without raising.

    Keys may be attribute names or camelCase paths. Values that cannot be
    parsed are reported as field errors and replaced by the field default so
    the remaining checks can still run.
    """

    data: Dict[str, Any] = dict(payload)
    try:
        return SurveyConfiguration.model_validate(data), []
    except ValidationError as exc:
        failures = _collect_failures(exc)

    keep = {
        key: value
        for key, value in data.items()
        if SurveyConfiguration.attribute_for(key) not in failures
        and key not in failures
    }
    config = SurveyConfiguration.model_validate(keep)

    errors: List[FieldError] = []
    for name in field_order():
        if name in failures:
            errors.append(FieldError(field=SurveyConfiguration.field_path(name), message=failures[name]))
    for key, message in failures.items():
        if key not in SurveyConfiguration.model_fields:
            errors.append(FieldError(field=key, message=message))
    return config, errors


def validate_payload(payload: Mapping[str, Any]) -> ValidationReport:
    """Validate raw wizard data; unparseable values become field errors in place."""

    config, parse_errors = parse_payload(payload)
    if not parse_errors:
        return build_report(config)

    failed = {error.field for error in parse_errors}
    skip = [name for name in field_order() if SurveyConfiguration.field_path(name) in failed]
    field_errors = _merge_in_order(parse_errors, check_fields(config, skip=skip))
    field_errors.extend(evaluate_rules(config))
    return ValidationReport.from_errors(field_errors)


def _collect_failures(exc: ValidationError) -> Dict[str, str]:
    failures: Dict[str, str] = {}
    for error in exc.errors():
        location = error.get("loc") or ()
        if not location:
            continue
        key = str(location[0])
        name = SurveyConfiguration.attribute_for(key) or key
        if name not in failures:
            failures[name] = describe_parse_error(name, error.get("msg", "Invalid value"))
    return failures


def _merge_in_order(parse_errors: List[FieldError], field_errors: List[FieldError]) -> List[FieldError]:
    position = {SurveyConfiguration.field_path(name): index for index, name in enumerate(field_order())}
    unknown = len(position)
    combined = parse_errors + field_errors
    return sorted(combined, key=lambda error: position.get(error.field, unknown))
