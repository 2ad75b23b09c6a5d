from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from feedback_app.models.analysis import (
    Assignment,
    FeedbackResponse,
    ParticipationMetrics,
    SentimentMetrics,
    ThemeInsight,
)


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def participation_metrics(
    assignments: Iterable[Assignment],
    *,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> ParticipationMetrics:
    """Count assigned and completed surveys, optionally within an assignment window."""

    lower = _as_utc(start) if start is not None else None
    upper = _as_utc(end) if end is not None else None
    selected = [
        assignment
        for assignment in assignments
        if (lower is None or _as_utc(assignment.assigned_at) >= lower)
        and (upper is None or _as_utc(assignment.assigned_at) <= upper)
    ]
    total = len(selected)
    completed = sum(1 for assignment in selected if assignment.status == "completed")
    return ParticipationMetrics(
        total_assigned=total,
        completed=completed,
        pending=total - completed,
        completion_rate=(completed / total) * 100 if total else 0.0,
    )


def sentiment_metrics(responses: Iterable[FeedbackResponse]) -> SentimentMetrics:
    positive = neutral = negative = 0
    total_score = 0.0
    mood_changes = 0
    count = 0

    for response in responses:
        count += 1
        if response.sentiment == "positive":
            positive += 1
        elif response.sentiment == "negative":
            negative += 1
        else:
            neutral += 1

        if response.sentiment_score:
            total_score += response.sentiment_score

        change = response.mood_change
        if change is not None:
            mood_changes += change

    return SentimentMetrics(
        positive=positive,
        neutral=neutral,
        negative=negative,
        avg_score=total_score / count if count else 0.0,
        mood_improvement=mood_changes,
    )


def theme_insights(responses: Iterable[FeedbackResponse]) -> List[ThemeInsight]:
    """Aggregate responses per theme in order of first appearance.

    Responses without a theme are skipped.
    """

    totals: Dict[str, dict] = {}
    for response in responses:
        if not response.theme_id or not response.theme_name:
            continue
        entry = totals.setdefault(
            response.theme_id,
            {"name": response.theme_name, "count": 0, "score": 0.0, "urgent": 0},
        )
        entry["count"] += 1
        entry["score"] += response.sentiment_score or 0.0
        if response.urgency_escalated:
            entry["urgent"] += 1

    return [
        ThemeInsight(
            id=theme_id,
            name=entry["name"],
            response_count=entry["count"],
            avg_sentiment=entry["score"] / entry["count"] if entry["count"] else 0.0,
            urgency_count=entry["urgent"],
        )
        for theme_id, entry in totals.items()
    ]


__all__ = [
    "participation_metrics",
    "sentiment_metrics",
    "theme_insights",
]
