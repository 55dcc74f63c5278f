"""Leaderboard record type and its ranking comparator."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _require_int(payload: Dict[str, Any], key: str) -> int:
    if key not in payload:
        raise ValueError(f"Leaderboard record is missing '{key}'")
    value = payload[key]
    if isinstance(value, bool):
        raise ValueError(f"Leaderboard field '{key}' must be numeric, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, int):
        raise ValueError(f"Leaderboard field '{key}' must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class LeaderboardRecord:
    """Score achieved at the end of a level."""

    score: int
    moves: int
    time: int
    level: int
    date: Optional[str] = None

    def with_date(self, date: Optional[str] = None) -> "LeaderboardRecord":
        """Return this record, or a copy carrying ``date`` (default: now) if it has none."""

        if self.date:
            return self
        return dataclasses.replace(self, date=date or utc_now_iso())

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "score": self.score,
            "moves": self.moves,
            "time": self.time,
            "level": self.level,
        }
        if self.date is not None:
            payload["date"] = self.date
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "LeaderboardRecord":
        if not isinstance(payload, dict):
            raise ValueError(f"Leaderboard record must be an object, got {type(payload).__name__}")
        date = payload.get("date")
        if date is not None and not isinstance(date, str):
            raise ValueError("Leaderboard field 'date' must be a string")
        return cls(
            score=_require_int(payload, "score"),
            moves=_require_int(payload, "moves"),
            time=_require_int(payload, "time"),
            level=_require_int(payload, "level"),
            date=date or None,
        )


def compare_records(a: LeaderboardRecord, b: LeaderboardRecord) -> int:
    """Negative when ``a`` ranks better than ``b``, positive when worse, 0 when tied.

    Higher score wins; ties go to the lower time, then to fewer moves.
    """

    if a.score != b.score:
        return -1 if a.score > b.score else 1
    if a.time != b.time:
        return -1 if a.time < b.time else 1
    if a.moves != b.moves:
        return -1 if a.moves < b.moves else 1
    return 0


__all__ = ["LeaderboardRecord", "compare_records", "utc_now_iso"]
