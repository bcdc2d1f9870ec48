"""Level progression: the highest unlocked tier index, persisted as JSON."""

import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

from tierchess.config import CONFIG
from tierchess.difficulty import Tier, tier_at, tier_index, tier_names

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnlockResult:
    unlocked_index: int
    newly_unlocked: Optional[Tier]
    completed_all: bool


class ProgressStore:
    """Stores `{key: unlocked_index}` in a JSON file.

    Index 0 (beginner) is always playable. Beating tier i unlocks tier i + 1.
    Other keys in the file are preserved on write.
    """

    def __init__(self, path: str = None, key: str = None):
        self.path = path or CONFIG.progress.storage_path
        self.key = key or CONFIG.progress.storage_key
        self._unlocked: Optional[int] = None

    @property
    def unlocked_index(self) -> int:
        if self._unlocked is None:
            self._unlocked = self.load()
        return self._unlocked

    def load(self) -> int:
        data = self._read()
        value = data.get(self.key, 0)
        if not isinstance(value, int):
            raise ValueError(f"{self.path}: {self.key} must be an integer, got {value!r}")
        last = len(tier_names()) - 1
        self._unlocked = max(0, min(value, last))
        return self._unlocked

    def is_unlocked(self, tier_name: str) -> bool:
        return tier_index(tier_name) <= self.unlocked_index

    def record_win(self, tier_name: str) -> UnlockResult:
        """Register a win against `tier_name` and unlock the next tier if needed."""
        beaten = tier_index(tier_name)
        next_index = beaten + 1
        completed_all = next_index >= len(tier_names())
        newly = None
        if not completed_all and next_index > self.unlocked_index:
            self._save(next_index)
            newly = tier_at(next_index)
            log.info("unlocked tier %s", newly.name)
        return UnlockResult(self.unlocked_index, newly, completed_all)

    def reset(self):
        self._save(0)
        log.info("progress reset")

    def _read(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path}: expected a JSON object")
        return data

    def _save(self, index: int):
        data = self._read()
        data[self.key] = index
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp, self.path)
        self._unlocked = index
