from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)


class ScoreStore:
    """
    Tiny key -> integer store persisted as a YAML mapping.

    Reads never raise: a missing, unreadable or malformed file reads as
    "no value". Writes are best effort.
    """

    def __init__(self, path: Path | None = None):
        if path is None:
            root = Path(__file__).resolve().parents[2] / "runtime" / "cache"
            path = root / "scores.yaml"
        self.path = Path(path)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("could not read score store %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            if data is not None:
                logger.warning("ignoring malformed score store %s", self.path)
            return {}
        return data

    def get(self, key: str) -> Optional[int]:
        value = self._load().get(key)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return None
        return value

    def set(self, key: str, value: int) -> None:
        data = self._load()
        data[key] = int(value)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False)
        except OSError as e:
            logger.warning("could not write score store %s: %s", self.path, e)
