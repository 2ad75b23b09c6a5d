from __future__ import annotations

import pytest

from feedback_app.services.trust_analytics import (
    ANONYMIZATION_COMPLETED,
    RITUAL_COMPLETED,
    SESSION_STARTED,
    TRUST_INDICATORS_VIEWED,
    TrustEventLog,
)


def test_empty_log_summary_is_zeroed() -> None:
    summary = TrustEventLog().summary()

    assert summary.ritual_completion_rate == 0.0
    assert summary.anonymization_confidence == 0.0
    assert summary.trust_indicators_viewed == 0
    assert summary.sessions_started == 0


def test_summary_counts_events() -> None:
    log = TrustEventLog()
    for _ in range(4):
        log.track(SESSION_STARTED)
    log.track(RITUAL_COMPLETED, {"duration": 12}, session_id="s-1")
    log.track(RITUAL_COMPLETED)
    log.track(ANONYMIZATION_COMPLETED)
    log.track(TRUST_INDICATORS_VIEWED)

    summary = log.summary()

    assert summary.ritual_completion_rate == pytest.approx(50.0)
    assert summary.anonymization_confidence == pytest.approx(85.0)
    assert summary.trust_indicators_viewed == 1
    assert summary.sessions_started == 4


def test_track_rejects_blank_event_names() -> None:
    with pytest.raises(ValueError):
        TrustEventLog().track("  ")


def test_events_persist_between_instances_and_clear(tmp_path) -> None:
    path = tmp_path / "trust" / "events.json"
    first = TrustEventLog(path)
    first.track(SESSION_STARTED, session_id="s-1")

    second = TrustEventLog(path)

    assert [event.event for event in second.events()] == [SESSION_STARTED]
    assert second.events()[0].session_id == "s-1"

    second.clear()
    assert second.events() == []
    assert not path.exists()


def test_unreadable_event_file_starts_empty(tmp_path) -> None:
    path = tmp_path / "events.json"
    path.write_text("[{]", encoding="utf-8")

    assert TrustEventLog(path).events() == []
