"""User preferences with lazy loading and write-through persistence."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict, dataclass, fields, replace
from typing import Any

from super7.core.storage import KeyValueStore

logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"


@dataclass(frozen=True)
class Settings:
    sound_enabled: bool = True
    haptics_enabled: bool = True
    keep_screen_awake: bool = True
    countdown_beeps: bool = True


DEFAULT_SETTINGS = Settings()
_FIELD_NAMES = {item.name for item in fields(Settings)}


def settings_from_dict(raw: Any) -> Settings:
    """Merge a stored record over the defaults, ignoring unknown or non-bool values."""
    if not isinstance(raw, dict):
        return DEFAULT_SETTINGS
    known = {
        key: value
        for key, value in raw.items()
        if key in _FIELD_NAMES and isinstance(value, bool)
    }
    return replace(DEFAULT_SETTINGS, **known)


class SettingsProvider:
    """Holds the current settings; defaults apply until :meth:`load` finishes.

    Updates made while a load is in flight are replayed over the loaded
    record so the older stored value never wins.
    """

    def __init__(self, store: KeyValueStore | None = None) -> None:
        self._store = store or KeyValueStore()
        self._settings = DEFAULT_SETTINGS
        self._loading = True
        self._pending: dict[str, bool] = {}

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def loading(self) -> bool:
        return self._loading

    def _read(self) -> Settings:
        try:
            return settings_from_dict(self._store.get_data(SETTINGS_KEY))
        except Exception:
            logger.exception("Failed to load settings, using defaults")
            return DEFAULT_SETTINGS

    def _apply_loaded(self, loaded: Settings) -> Settings:
        pending, self._pending = self._pending, {}
        self._settings = replace(loaded, **pending)
        self._loading = False
        if pending:
            self._save()
        return self._settings

    def load_now(self) -> Settings:
        return self._apply_loaded(self._read())

    async def load(self) -> Settings:
        loaded = await asyncio.to_thread(self._read)
        return self._apply_loaded(loaded)

    def update(self, **changes: bool) -> Settings:
        unknown = set(changes) - _FIELD_NAMES
        if unknown:
            raise ValueError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        if self._loading:
            self._pending.update(changes)
        updated = replace(self._settings, **changes)
        if updated == self._settings:
            return self._settings
        self._settings = updated
        self._save()
        return self._settings

    def _save(self) -> None:
        try:
            self._store.store_data(SETTINGS_KEY, asdict(self._settings))
        except Exception:
            logger.exception("Failed to save settings")
