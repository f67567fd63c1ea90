"""Environment-variable-based configuration for Super7."""

from __future__ import annotations

import os
from pathlib import Path

DATA_DIR: Path = Path(os.environ.get("SUPER7_HOME", "~/.super7")).expanduser()
STORAGE_FILE: Path = DATA_DIR / "storage.json"
STORAGE_KEY_PREFIX: str = "super7:"
TICK_INTERVAL_SEC: float = float(os.environ.get("SUPER7_TICK_INTERVAL", "1.0"))
LOG_LEVEL: str = os.environ.get("SUPER7_LOG_LEVEL", "INFO").upper()

DEFAULT_DURATION_MINUTES: int = 7
MIN_DURATION_MINUTES: int = 1
MAX_DURATION_MINUTES: int = 60
