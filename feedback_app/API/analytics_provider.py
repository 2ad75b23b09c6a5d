from __future__ import annotations

from datetime import datetime

from feedback_app.models.analysis import AnalyticsSnapshot
from feedback_app.services.analytics import participation_metrics, sentiment_metrics, theme_insights
from feedback_app.services.survey_database import SurveyStoreInterface, get_survey_store


class AnalyticsProvider:
    """Expose aggregated survey analytics through an interchangeable API layer."""

    def __init__(
        self,
        *,
        survey_id: str | None = None,
        store: SurveyStoreInterface | None = None,
    ) -> None:
        self._survey_id = survey_id
        self._store = store or get_survey_store()

    def get_snapshot(
        self,
        survey_id: str | None = None,
        *,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> AnalyticsSnapshot:
        """Return participation, sentiment and theme metrics for one survey or all."""

        target_id = survey_id or self._survey_id
        assignments = self._store.list_assignments(target_id)
        responses = self._store.list_responses(target_id)

        return AnalyticsSnapshot(
            survey_id=target_id,
            participation=participation_metrics(assignments, start=start, end=end),
            sentiment=sentiment_metrics(responses),
            themes=theme_insights(responses),
        )
