"""CSV formatting for analytics dashboards and evaluation listings.

These helpers only build text; writing or downloading the file is left to
the caller.
"""
from __future__ import annotations

import csv
import io
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Sequence

from feedback_app.models.analysis import AnalyticsSnapshot, EvaluationRecord

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _format_timestamp(value: datetime) -> str:
    return value.strftime(_TIMESTAMP_FORMAT)


def rows_to_csv(rows: Iterable[Sequence[Any]]) -> str:
    """Render rows as CSV; cells with commas, quotes or newlines are quoted."""

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    for row in rows:
        writer.writerow(["" if cell is None else str(cell) for cell in row])
    return buffer.getvalue()


def analytics_to_csv(snapshot: AnalyticsSnapshot, *, generated_at: datetime | None = None) -> str:
    generated = generated_at or datetime.now()
    participation = snapshot.participation
    sentiment = snapshot.sentiment

    rows: List[Sequence[Any]] = [
        ["Analytics Export", ""],
        ["Generated", _format_timestamp(generated)],
        ["", ""],
        ["Participation Metrics", ""],
        ["Total Assigned", participation.total_assigned],
        ["Completed", participation.completed],
        ["Pending", participation.pending],
        ["Completion Rate", f"{participation.completion_rate:.1f}%"],
        ["", ""],
        ["Sentiment Metrics", ""],
        ["Positive", sentiment.positive],
        ["Neutral", sentiment.neutral],
        ["Negative", sentiment.negative],
        ["Average Score", f"{sentiment.avg_score:.1f}"],
        ["Mood Improvement", sentiment.mood_improvement],
        ["", ""],
        ["Theme Insights", ""],
        ["Theme", "Responses", "Avg Sentiment", "Urgent Count"],
    ]
    rows.extend(
        [theme.name, theme.response_count, f"{theme.avg_sentiment:.1f}", theme.urgency_count]
        for theme in snapshot.themes
    )
    return rows_to_csv(rows)


def evaluations_to_csv(
    evaluations: Sequence[EvaluationRecord],
    *,
    generated_at: datetime | None = None,
) -> Optional[str]:
    """Render evaluation summaries followed by their question/answer details.

    Returns ``None`` when there is nothing to export.
    """

    if not evaluations:
        return None

    generated = generated_at or datetime.now()
    rows: List[Sequence[Any]] = [
        ["Evaluations Export", ""],
        ["Generated", _format_timestamp(generated)],
        ["Total Evaluations", len(evaluations)],
        ["", ""],
        ["Evaluation Details", ""],
        ["Completed At", "Survey", "Employee", "Duration (s)", "Questions", "Sentiment", "Sentiment Score"],
    ]
    for record in evaluations:
        rows.append(
            [
                _format_timestamp(record.completed_at),
                record.survey_title or "N/A",
                record.employee_name or "Anonymous",
                record.duration_seconds or 0,
                record.total_questions or 0,
                record.overall_sentiment or "neutral",
                f"{record.sentiment_score * 100:.1f}" if record.sentiment_score else "N/A",
            ]
        )

    rows.append(["", ""])
    rows.append(["Response Details", ""])
    for record in evaluations:
        rows.append(["", ""])
        rows.append(["Survey", record.survey_title or "N/A"])
        rows.append(["Completed", _format_timestamp(record.completed_at)])
        rows.append(["Question", "Answer"])
        rows.extend([answer.question, answer.answer] for answer in record.responses)

    return rows_to_csv(rows)


def export_filename(prefix: str, day: date | None = None) -> str:
    """Return a dated download name such as ``analytics-2024-05-01.csv``."""

    cleaned = (prefix or "").strip()
    if not cleaned:
        raise ValueError("prefix must be a non-empty string")
    return f"{cleaned}-{(day or date.today()).isoformat()}.csv"
