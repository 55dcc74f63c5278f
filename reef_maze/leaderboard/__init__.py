"""Ranked leaderboard: records, AVL tree, storage adapters and the board itself."""

__all__ = [
    "BlobStorage",
    "JsonFileStorage",
    "Leaderboard",
    "LeaderboardRecord",
    "MemoryStorage",
    "RankedRecordTree",
    "UPDATED_EVENT",
    "compare_records",
]

from .records import LeaderboardRecord, compare_records
from .tree import RankedRecordTree
from .storage import BlobStorage, JsonFileStorage, MemoryStorage
from .board import Leaderboard, UPDATED_EVENT
