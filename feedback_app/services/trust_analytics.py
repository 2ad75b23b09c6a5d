from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from feedback_app.core.config import settings

logger = logging.getLogger(__name__)

SESSION_STARTED = "session_started"
RITUAL_COMPLETED = "ritual_introduction_completed"
ANONYMIZATION_COMPLETED = "anonymization_completed"
TRUST_INDICATORS_VIEWED = "trust_indicators_viewed"

_ANONYMIZATION_CONFIDENCE = 85.0


class TrustEvent(BaseModel):
    """A single trust-building interaction recorded in the respondent flow."""

    event: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    session_id: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"extra": "ignore"}


class TrustAnalytics(BaseModel):
    ritual_completion_rate: float = 0.0
    anonymization_confidence: float = 0.0
    trust_indicators_viewed: int = 0
    sessions_started: int = 0

    model_config = {"extra": "forbid"}


class TrustEventLog:
    """Collects trust events in memory, mirrored to a JSON file when a path is given."""

    def __init__(self, storage_path: Path | None = None) -> None:
        self._path = Path(storage_path) if storage_path else None
        self._lock = threading.Lock()
        self._events: List[TrustEvent] = self._load()

    def track(self, event: str, data: Dict[str, Any] | None = None, *, session_id: str | None = None) -> TrustEvent:
        name = (event or "").strip()
        if not name:
            raise ValueError("event must be a non-empty string")

        record = TrustEvent(event=name, session_id=session_id, data=dict(data or {}))
        with self._lock:
            self._events.append(record)
            self._persist_unlocked()
        logger.debug("Trust event %s recorded", name)
        return record

    def events(self) -> List[TrustEvent]:
        with self._lock:
            return list(self._events)

    def count(self, event: str) -> int:
        with self._lock:
            return sum(1 for record in self._events if record.event == event)

    def summary(self) -> TrustAnalytics:
        """Summarise recorded events into trust indicators."""

        started = self.count(SESSION_STARTED)
        rituals = self.count(RITUAL_COMPLETED)
        anonymized = self.count(ANONYMIZATION_COMPLETED)

        return TrustAnalytics(
            ritual_completion_rate=(rituals / started) * 100 if started else 0.0,
            anonymization_confidence=_ANONYMIZATION_CONFIDENCE if anonymized else 0.0,
            trust_indicators_viewed=self.count(TRUST_INDICATORS_VIEWED),
            sessions_started=started,
        )

    def clear(self) -> None:
        with self._lock:
            self._events = []
            if self._path is not None and self._path.is_file():
                self._path.unlink()

    def _load(self) -> List[TrustEvent]:
        if self._path is None or not self._path.is_file():
            return []
        try:
            raw_events = json.loads(self._path.read_text(encoding="utf-8"))
            return [TrustEvent.model_validate(item) for item in raw_events]
        except (json.JSONDecodeError, ValidationError, TypeError) as exc:
            logger.warning("Discarding unreadable trust events at %s: %s", self._path, exc)
            return []

    def _persist_unlocked(self) -> None:
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = [record.model_dump(mode="json") for record in self._events]
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


_LOG_INSTANCE: Optional[TrustEventLog] = None
_LOG_LOCK = threading.Lock()


def get_trust_event_log() -> TrustEventLog:
    """Return the shared trust event log."""

    global _LOG_INSTANCE
    if _LOG_INSTANCE is None:
        with _LOG_LOCK:
            if _LOG_INSTANCE is None:
                _LOG_INSTANCE = TrustEventLog(settings.trust_events_path)
    return _LOG_INSTANCE


__all__ = [
    "TrustAnalytics",
    "TrustEvent",
    "TrustEventLog",
    "get_trust_event_log",
]
