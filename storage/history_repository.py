"""Replay-history stores: which questions, tracks and items were already used."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Dict, Iterable, List, Optional, Set

logger = logging.getLogger(__name__)

HISTORY_STORAGE_KEY = "trivia_played_tracks"


class HistoryStore(ABC):
    """Abstract interface over the persistent set of played identifiers."""

    @abstractmethod
    def get_played(self) -> Set[str]:
        """Return a snapshot of every played identifier."""

    @abstractmethod
    def mark_many(self, item_ids: Iterable[str]) -> None:
        """Record identifiers as played; already-known ids are ignored."""

    @abstractmethod
    def reset(self) -> None:
        """Forget everything."""

    def is_played(self, item_id: str) -> bool:
        return item_id in self.get_played()

    def mark_played(self, item_id: str) -> None:
        self.mark_many([item_id])


class InMemoryHistoryStore(HistoryStore):
    def __init__(self, played: Optional[Iterable[str]] = None) -> None:
        self._played: List[str] = []
        self.mark_many(played or [])

    def get_played(self) -> Set[str]:
        return set(self._played)

    def mark_many(self, item_ids: Iterable[str]) -> None:
        for item_id in item_ids:
            if item_id not in self._played:
                self._played.append(item_id)

    def reset(self) -> None:
        self._played = []

    def as_list(self) -> List[str]:
        return list(self._played)


class JsonHistoryStore(HistoryStore):
    """History persisted as a JSON array of strings under a well-known key."""

    def __init__(self, storage_path: Optional[Path] = None, lock: Optional[Lock] = None) -> None:
        default_path = Path(__file__).resolve().parent / "played_history.json"
        self.storage_path = storage_path or default_path
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = lock or Lock()

    def get_played(self) -> Set[str]:
        with self._lock:
            return set(self._load())

    def mark_many(self, item_ids: Iterable[str]) -> None:
        with self._lock:
            played = self._load()
            known = set(played)
            added = False
            for item_id in item_ids:
                if item_id not in known:
                    played.append(item_id)
                    known.add(item_id)
                    added = True
            if added:
                self._write(played)

    def reset(self) -> None:
        with self._lock:
            self._write([])

    def _load(self) -> List[str]:
        if not self.storage_path.exists():
            return []
        try:
            with self.storage_path.open("r", encoding="utf-8") as fh:
                raw = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.warning("Replay history at %s is unreadable, starting fresh: %s", self.storage_path, exc)
            return []
        payload = raw.get(HISTORY_STORAGE_KEY) if isinstance(raw, dict) else None
        if not isinstance(payload, list):
            logger.warning("Replay history at %s has an unexpected shape, starting fresh", self.storage_path)
            return []
        return [item for item in payload if isinstance(item, str)]

    def _write(self, played: List[str]) -> None:
        data: Dict[str, List[str]] = {HISTORY_STORAGE_KEY: played}
        with self.storage_path.open("w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2)
