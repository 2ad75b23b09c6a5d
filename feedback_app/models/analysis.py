from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class Assignment(BaseModel):
    """A survey handed to one employee."""

    survey_id: str
    employee_id: str
    status: Optional[str] = "pending"
    assigned_at: datetime

    model_config = {"extra": "ignore"}


class FeedbackResponse(BaseModel):
    """One analysed answer captured during a feedback conversation."""

    survey_id: str
    content: str = ""
    theme_id: Optional[str] = None
    theme_name: Optional[str] = None
    sentiment: Optional[str] = None
    sentiment_score: Optional[float] = None
    urgency_escalated: bool = False
    initial_mood: Optional[int] = None
    final_mood: Optional[int] = None

    model_config = {"extra": "ignore"}

    @property
    def mood_change(self) -> int | None:
        """Return final minus initial mood when both were recorded."""

        if not self.initial_mood or not self.final_mood:
            return None
        return self.final_mood - self.initial_mood


class ParticipationMetrics(BaseModel):
    total_assigned: int = 0
    completed: int = 0
    pending: int = 0
    completion_rate: float = 0.0
    avg_duration: float = 0.0

    model_config = {"extra": "forbid"}


class SentimentMetrics(BaseModel):
    positive: int = 0
    neutral: int = 0
    negative: int = 0
    avg_score: float = 0.0
    mood_improvement: int = 0

    model_config = {"extra": "forbid"}

    @property
    def total(self) -> int:
        return self.positive + self.neutral + self.negative


class ThemeInsight(BaseModel):
    id: str
    name: str
    response_count: int = 0
    avg_sentiment: float = 0.0
    urgency_count: int = 0

    model_config = {"extra": "forbid"}


class AnalyticsSnapshot(BaseModel):
    """Container describing aggregated survey analytics for dashboards and export."""

    survey_id: Optional[str] = None
    participation: ParticipationMetrics = Field(default_factory=ParticipationMetrics)
    sentiment: SentimentMetrics = Field(default_factory=SentimentMetrics)
    themes: List[ThemeInsight] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @property
    def has_responses(self) -> bool:
        """Return True when at least one response contributed to the metrics."""

        return self.sentiment.total > 0


class EvaluationAnswer(BaseModel):
    question: str
    answer: str = ""

    model_config = {"extra": "ignore"}


class EvaluationRecord(BaseModel):
    """A completed post-survey evaluation, as listed for CSV export."""

    completed_at: datetime
    survey_title: Optional[str] = None
    employee_name: Optional[str] = None
    duration_seconds: int = 0
    total_questions: int = 0
    overall_sentiment: Optional[str] = None
    sentiment_score: Optional[float] = None
    responses: List[EvaluationAnswer] = Field(default_factory=list)

    model_config = {"extra": "ignore"}
