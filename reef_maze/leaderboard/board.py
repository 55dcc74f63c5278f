"""Top-N leaderboard persisted as a JSON array in a blob store.

Every operation rebuilds a :class:`RankedRecordTree` from the stored window,
so the stored blob is always the best ``size`` records in ranking order.
Reading problems degrade to an empty leaderboard and write problems are
logged; neither is raised to the game.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Iterable, List, Optional

from reef_maze.config import LEADERBOARD_SIZE, STORAGE_KEY
from reef_maze.errors import ConfigurationError, StorageError
from reef_maze.leaderboard.records import LeaderboardRecord, utc_now_iso
from reef_maze.leaderboard.storage import BlobStorage
from reef_maze.leaderboard.tree import RankedRecordTree

logger = logging.getLogger(__name__)

UPDATED_EVENT = "updated"

Listener = Callable[[str], None]


class Leaderboard:
    """Load, extend and clear the persisted top-``size`` window."""

    def __init__(
        self,
        storage: BlobStorage,
        *,
        key: str = STORAGE_KEY,
        size: int = LEADERBOARD_SIZE,
        clock: Optional[Callable[[], str]] = None,
    ) -> None:
        if size <= 0:
            raise ConfigurationError("size must be positive")
        self.storage = storage
        self.key = key
        self.size = int(size)
        self._clock = clock or utc_now_iso
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for change events; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(UPDATED_EVENT)
            except Exception:
                logger.exception("Leaderboard listener %r failed", listener)

    # ------------------------------------------------------------------

    def _read_records(self) -> List[LeaderboardRecord]:
        try:
            raw = self.storage.get(self.key)
        except (StorageError, OSError) as exc:
            logger.warning("Failed to read leaderboard '%s': %s", self.key, exc)
            return []
        if not raw:
            return []
        try:
            payload = json.loads(raw)
            if not isinstance(payload, list):
                raise ValueError("leaderboard blob must be a JSON array")
            return [LeaderboardRecord.from_dict(item) for item in payload]
        except (ValueError, RecursionError) as exc:
            # deeply nested arrays raise RecursionError
            logger.warning("Discarding malformed leaderboard '%s': %s", self.key, exc)
            return []

    def _ranked(self, records: Iterable[LeaderboardRecord]) -> List[LeaderboardRecord]:
        tree = RankedRecordTree(record.with_date(self._clock()) for record in records)
        return tree.top(self.size)

    def load(self) -> List[LeaderboardRecord]:
        """Return the stored records, best first, capped to ``size``."""

        return self._ranked(self._read_records())

    def add(self, record: LeaderboardRecord) -> List[LeaderboardRecord]:
        """Insert ``record`` and persist the new window.

        Returns the saved window, or an empty list when the write failed.
        """

        ranked = self._ranked([*self.load(), record])
        blob = json.dumps([entry.to_dict() for entry in ranked])
        try:
            self.storage.set(self.key, blob)
        except (StorageError, OSError) as exc:
            logger.error("Failed to save leaderboard '%s': %s", self.key, exc)
            return []
        logger.debug("Saved %d leaderboard records under '%s'", len(ranked), self.key)
        self._notify()
        return ranked

    def clear(self) -> None:
        try:
            self.storage.delete(self.key)
        except (StorageError, OSError) as exc:
            logger.error("Failed to clear leaderboard '%s': %s", self.key, exc)
            return
        self._notify()


__all__ = ["Leaderboard", "UPDATED_EVENT"]
