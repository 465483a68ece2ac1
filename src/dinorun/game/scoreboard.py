"""Current score, best score and the storage contract behind it."""

from __future__ import annotations

import json
import logging
import math
import re
from pathlib import Path
from typing import Dict, Optional, Protocol

from dinorun.game.constants import HIGH_SCORE_KEY

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class KeyValueStore(Protocol):
    """Persistence contract consumed by the scoreboard.

    Either call may raise; the scoreboard treats failures as
    "no high score" on read and "save skipped" on write.
    """

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """In-process store, used when nothing should touch the disk."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """String key/value pairs kept in a small JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self.path}")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except ValueError:
            logger.warning(f"Overwriting unreadable store at {self.path}")
            data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)


def parse_stored_score(raw: Optional[str]) -> int:
    """Read the leading integer of a stored value ("42", "42.9" -> 42; junk -> 0)."""
    match = _INT_PREFIX.match(raw if raw is not None else "0")
    if match is None:
        return 0
    return int(match.group(1))


class Scoreboard:
    """Tracks the running score and the persisted best score.

    The score is continuous (points accrue from elapsed time); only the
    display and the high score use its floor.
    """

    def __init__(self, storage: Optional[KeyValueStore] = None, key: str = HIGH_SCORE_KEY):
        self.storage = storage
        self.key = key
        self.current_score = 0.0
        self.high_score = 0

    def initialize(self) -> None:
        """Load the high score and zero the current score."""
        self.high_score = self.load_high_score()
        self.set_score(0.0)
        logger.info(f"Scoreboard ready, high score {self.high_score}")

    @property
    def score(self) -> float:
        return self.current_score

    @property
    def display_score(self) -> int:
        return math.floor(self.current_score)

    def set_score(self, value: float) -> None:
        self.current_score = max(0.0, float(value))

    def add_score(self, delta: float) -> None:
        self.set_score(self.current_score + delta)

    def reset_score(self) -> None:
        self.set_score(0.0)

    def update_high_score_if_needed(self) -> bool:
        """Commit the floored score as the new best. Returns True if it was one."""
        floored = math.floor(self.current_score)
        if floored > self.high_score:
            self.set_high_score(floored)
            return True
        return False

    def set_high_score(self, value: int) -> None:
        self.high_score = int(value)
        logger.info(f"New high score: {self.high_score}")
        self.persist_high_score(self.high_score)

    def load_high_score(self) -> int:
        if self.storage is None:
            return 0
        try:
            stored = self.storage.get(self.key)
        except Exception as e:
            logger.warning(f"Unable to load high score: {e}")
            return 0
        return max(0, parse_stored_score(stored))

    def persist_high_score(self, value: int) -> None:
        if self.storage is None:
            return
        try:
            self.storage.set(self.key, str(value))
        except Exception as e:
            logger.warning(f"Unable to save high score: {e}")
