"""Namespaced JSON key-value store kept in a single local file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from super7.core import config

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Flat ``{prefixed_key: json_value}`` document on disk.

    Every write rewrites the whole file; the document is small (settings,
    last duration, a capped history list).
    """

    def __init__(self, path: Path | None = None, prefix: str = config.STORAGE_KEY_PREFIX) -> None:
        self._path = path or config.STORAGE_FILE
        self._prefix = prefix

    @property
    def path(self) -> Path:
        return self._path

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def _read_all(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.exception("Unreadable storage file %s, treating as empty", self._path)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Storage file %s is not an object, treating as empty", self._path)
            return {}
        return payload

    def _write_all(self, payload: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(payload, ensure_ascii=True, indent=2), encoding="utf-8")
        tmp.replace(self._path)

    def store_data(self, key: str, data: Any) -> None:
        payload = self._read_all()
        payload[self._key(key)] = data
        self._write_all(payload)

    def get_data(self, key: str) -> Any | None:
        return self._read_all().get(self._key(key))

    def remove_data(self, key: str) -> None:
        payload = self._read_all()
        if payload.pop(self._key(key), None) is not None:
            self._write_all(payload)

    def clear_all_data(self) -> None:
        payload = self._read_all()
        kept = {k: v for k, v in payload.items() if not k.startswith(self._prefix)}
        self._write_all(kept)
