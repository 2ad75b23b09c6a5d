from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _strip_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


@dataclass(frozen=True)
class LoggingSettings:
    level: str
    log_file: Optional[Path] = None


class Settings:

    def __init__(self) -> None:
        store_path = _strip_or_none(os.getenv("SURVEY_STORE_PATH")) or "feedback_app/data/survey_store.json"
        self.survey_store_path = Path(store_path).expanduser().resolve()

        trust_path = _strip_or_none(os.getenv("TRUST_EVENTS_PATH"))
        self.trust_events_path = Path(trust_path).expanduser().resolve() if trust_path else None

        log_level = (_strip_or_none(os.getenv("LOG_LEVEL")) or "INFO").upper()
        log_file = _strip_or_none(os.getenv("LOG_FILE"))

        self.logging = LoggingSettings(
            level=log_level,
            log_file=Path(log_file).expanduser().resolve() if log_file else None,
        )


settings = Settings()
