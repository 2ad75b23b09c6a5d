from __future__ import annotations

import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from feedback_app.core.config import settings
from feedback_app.models.analysis import Assignment, FeedbackResponse
from feedback_app.models.survey import DefaultConfiguration, SurveyConfiguration

logger = logging.getLogger(__name__)


class SurveyStoreError(RuntimeError):
    """Raised when the persistence collaborator cannot complete a request."""


class SurveyStoreInterface(Protocol):
    """Contract of the persistence collaborator used by the wizard and analytics."""

    def fetch_defaults(self) -> Optional[DefaultConfiguration]: ...

    def save_configuration(self, config: SurveyConfiguration, survey_id: str | None = None) -> str: ...

    def load_configuration(self, survey_id: str) -> Optional[SurveyConfiguration]: ...

    def list_assignments(self, survey_id: str | None = None) -> List[Assignment]: ...

    def list_responses(self, survey_id: str | None = None) -> List[FeedbackResponse]: ...


class JsonSurveyStore(SurveyStoreInterface):
    """Simple file-backed implementation used until a real backend is wired in."""

    def __init__(self, storage_path: Path) -> None:
        self._path = Path(storage_path)
        self._lock = threading.Lock()

    def fetch_defaults(self) -> Optional[DefaultConfiguration]:
        with self._lock:
            raw_defaults = self._read_all_unlocked().get("defaults")
        if raw_defaults is None:
            return None
        return DefaultConfiguration.model_validate(raw_defaults)

    def save_defaults(self, defaults: DefaultConfiguration) -> None:
        with self._lock:
            payload = self._read_all_unlocked(strict=True)
            payload["defaults"] = defaults.model_dump(mode="json", exclude_none=True)
            self._write_all_unlocked(payload)

    def save_configuration(self, config: SurveyConfiguration, survey_id: str | None = None) -> str:
        target_id = survey_id or uuid.uuid4().hex
        with self._lock:
            payload = self._read_all_unlocked(strict=True)
            payload.setdefault("surveys", {})[target_id] = config.model_dump(mode="json", by_alias=True)
            self._write_all_unlocked(payload)
        logger.info("Saved survey configuration %s", target_id)
        return target_id

    def load_configuration(self, survey_id: str) -> Optional[SurveyConfiguration]:
        with self._lock:
            raw_config = self._read_all_unlocked().get("surveys", {}).get(survey_id)
        if raw_config is None:
            return None
        return SurveyConfiguration.model_validate(raw_config)

    def add_assignment(self, assignment: Assignment) -> None:
        self._append("assignments", assignment.model_dump(mode="json"))

    def add_response(self, response: FeedbackResponse) -> None:
        self._append("responses", response.model_dump(mode="json"))

    def list_assignments(self, survey_id: str | None = None) -> List[Assignment]:
        return [Assignment.model_validate(item) for item in self._select("assignments", survey_id)]

    def list_responses(self, survey_id: str | None = None) -> List[FeedbackResponse]:
        return [FeedbackResponse.model_validate(item) for item in self._select("responses", survey_id)]

    def _append(self, section: str, item: Dict[str, Any]) -> None:
        with self._lock:
            payload = self._read_all_unlocked(strict=True)
            payload.setdefault(section, []).append(item)
            self._write_all_unlocked(payload)

    def _select(self, section: str, survey_id: str | None) -> List[Dict[str, Any]]:
        with self._lock:
            items = list(self._read_all_unlocked().get(section, []))
        if survey_id is None:
            return items
        return [item for item in items if item.get("survey_id") == survey_id]

    def _read_all_unlocked(self, strict: bool = False) -> Dict[str, Any]:
        """Load the whole store; writers pass ``strict`` so a corrupt file is never overwritten."""

        if not self._path.is_file():
            return {}
        try:
            return json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            if strict:
                raise SurveyStoreError(f"Refusing to overwrite unreadable survey store at {self._path}: {exc}") from exc
            logger.warning("Ignoring unreadable survey store at %s", self._path)
            return {}
        except OSError as exc:
            raise SurveyStoreError(f"Unable to read survey store at {self._path}: {exc}") from exc

    def _write_all_unlocked(self, payload: Dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            raise SurveyStoreError(f"Unable to write survey store at {self._path}: {exc}") from exc


_STORE_INSTANCE: Optional[SurveyStoreInterface] = None
_STORE_LOCK = threading.Lock()


def get_survey_store() -> SurveyStoreInterface:
    """Return the shared survey store instance."""

    global _STORE_INSTANCE
    if _STORE_INSTANCE is None:
        with _STORE_LOCK:
            if _STORE_INSTANCE is None:
                _STORE_INSTANCE = JsonSurveyStore(settings.survey_store_path)
    return _STORE_INSTANCE


__all__ = [
    "SurveyStoreInterface",
    "SurveyStoreError",
    "JsonSurveyStore",
    "get_survey_store",
]
