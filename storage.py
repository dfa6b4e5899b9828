# High score persistence: one integer slot behind a load/save interface.
from __future__ import annotations

import json
import logging
import os
from typing import Protocol


logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "high_score"


class HighScoreStore(Protocol):
    def load(self) -> int: ...

    def save(self, value: int) -> None: ...


def _parse_score(raw) -> int | None:
    """Stored value as a non-negative int, or None if it is unusable."""
    if isinstance(raw, bool):
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError, OverflowError):
        # OverflowError: json accepts Infinity and 1e400.
        return None
    return value if value >= 0 else None


def _coerce_score(raw) -> int:
    """Turn a stored value into a non-negative int; anything unusable becomes 0."""
    value = _parse_score(raw)
    return 0 if value is None else value


class MemoryHighScoreStore:
    """In-process store, used for tests and when saving is disabled."""
    def __init__(self, value: int = 0) -> None:
        self.value = _coerce_score(value)
        self.saves = 0

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> None:
        self.value = int(value)
        self.saves += 1


class JsonHighScoreStore:
    """Keeps ``{"high_score": N}`` in a small JSON file."""
    def __init__(self, path: str) -> None:
        self.path = path

    def load(self) -> int:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return 0
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable high score file %s: %s", self.path, exc)
            return 0

        if isinstance(data, dict):
            data = data.get(HIGH_SCORE_KEY)
        if data is None:
            return 0
        value = _parse_score(data)
        if value is None:
            logger.warning("Ignoring invalid high score value %r in %s", data, self.path)
            return 0
        return value

    def save(self, value: int) -> None:
        directory = os.path.dirname(self.path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            tmp_path = f"{self.path}.tmp"
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump({HIGH_SCORE_KEY: int(value)}, f)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            logger.warning("High score save failed: %s", exc)
