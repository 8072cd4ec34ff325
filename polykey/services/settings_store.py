from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Iterable

import yaml

from polykey.domain.layouts import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)


class SettingsStore:
    """YAML-backed settings store.

    Responsibilities:
      - Load/save settings.yaml atomically
      - Provide typed helpers for the selected language

    Notes:
      - Missing or malformed files read as empty settings.
    """

    def __init__(self, settings_path: str | os.PathLike[str] | None = None) -> None:
        if settings_path is None:
            # Default to project root next to main.py.
            # This resolves to: <project_root>/settings.yaml
            project_root = Path(__file__).resolve().parents[2]
            self._path = project_root / "settings.yaml"
        else:
            self._path = Path(settings_path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        try:
            p = self._path
            if not p.exists():
                return {}
            with p.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
                return data if isinstance(data, dict) else {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to load settings from %s: %s", self._path, e)
            return {}

    def save(self, data: dict[str, Any]) -> None:
        try:
            p = self._path
            p.parent.mkdir(parents=True, exist_ok=True)
            tmp = p.with_suffix(p.suffix + ".tmp")
            with tmp.open("w", encoding="utf-8") as f:
                yaml.safe_dump(data or {}, f, allow_unicode=True, sort_keys=True)
            os.replace(str(tmp), str(p))
        except OSError as e:
            # Best-effort persistence; callers should not crash on save failures.
            logger.warning("Failed to save settings atomically: %s", e)

    def get_language(self, allowed: Iterable[str] | None = None) -> str:
        """Return the stored language code, or the default if unset/unknown."""
        value = self.load().get("language")
        if not isinstance(value, str) or not value.strip():
            return DEFAULT_LANGUAGE
        code = value.strip().upper()
        if allowed is not None and code not in set(allowed):
            logger.warning("Stored language %r is not available; using %s", code, DEFAULT_LANGUAGE)
            return DEFAULT_LANGUAGE
        return code

    def set_language(self, code: str) -> None:
        s = self.load()
        s["language"] = str(code).upper()
        self.save(s)
