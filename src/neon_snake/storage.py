"""Best-score and settings persistence.

Every store is fail-soft: a failed read yields the default value and a
failed write is logged and dropped, so gameplay never blocks on storage.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from neon_snake.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".neon-snake"


class ScoreStore(Protocol):
    """Persistence gateway consumed by the engine and the server."""

    def load_best_score(self) -> int: ...

    def save_best_score(self, value: int) -> None: ...

    def load_settings(self) -> Settings: ...

    def save_settings(self, settings: Settings) -> None: ...


def _coerce_score(raw: object) -> int:
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw.isdigit():
            return 0
        raw = int(raw)
    if isinstance(raw, int) and raw >= 0:
        return raw
    return 0


class MemoryStore:
    """In-process store; nothing survives the process."""

    def __init__(self, best_score: int = 0, settings: Settings | None = None) -> None:
        self.best_score = _coerce_score(best_score)
        self.settings = settings or Settings()

    def load_best_score(self) -> int:
        return self.best_score

    def save_best_score(self, value: int) -> None:
        self.best_score = _coerce_score(value)

    def load_settings(self) -> Settings:
        return self.settings

    def save_settings(self, settings: Settings) -> None:
        self.settings = settings


class JsonFileStore:
    """Key-value state kept in a single JSON document.

    The document lives at ``directory/state.json`` and holds the keys
    ``high_score`` and ``settings``.
    """

    STATE_FILE = "state.json"

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)
        self._path = self._dir / self.STATE_FILE

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict:
        try:
            raw = json.loads(self._path.read_text())
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self._path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring malformed state file %s.", self._path)
            return {}
        return raw

    def _write(self, key: str, value: object) -> None:
        data = self._read()
        data[key] = value
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(".tmp")
            tmp.write_text(json.dumps(data, indent=2))
            tmp.replace(self._path)
        except OSError as exc:
            logger.warning("Could not persist %s to %s: %s", key, self._path, exc)

    def load_best_score(self) -> int:
        return _coerce_score(self._read().get("high_score", 0))

    def save_best_score(self, value: int) -> None:
        self._write("high_score", _coerce_score(value))

    def load_settings(self) -> Settings:
        return Settings.sanitize(self._read().get("settings"))

    def save_settings(self, settings: Settings) -> None:
        self._write("settings", settings.to_dict())
        logger.info("Settings saved to %s", self._path)
