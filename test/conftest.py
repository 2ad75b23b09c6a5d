from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

_SCRATCH_DIR = Path(tempfile.mkdtemp(prefix="feedback-app-tests-"))

os.environ.setdefault("SURVEY_STORE_PATH", str(_SCRATCH_DIR / "survey_store.json"))
os.environ.setdefault("LOG_LEVEL", "DEBUG")
