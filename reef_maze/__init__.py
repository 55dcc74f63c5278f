"""Maze generation, path search and leaderboard ranking for the reef maze game."""

__all__ = [
    "Cell",
    "ConfigurationError",
    "Coordinate",
    "DeadEndMemory",
    "GameConfig",
    "GameSession",
    "JsonFileStorage",
    "Leaderboard",
    "LeaderboardRecord",
    "Maze",
    "MazeGenerator",
    "MemoryStorage",
    "RankedRecordTree",
    "ReefMazeError",
    "SOLVERS",
    "StorageError",
    "compare_records",
    "find_bidirectional_bfs_path",
    "find_dfs_path",
    "find_shortest_path",
    "find_single_bfs_path",
    "generate_maze",
    "open_leaderboard",
    "solve",
]

__version__ = "0.1.0"

from .errors import ConfigurationError, ReefMazeError, StorageError
from .config import GameConfig
from .maze import Cell, Coordinate, Maze, MazeGenerator, generate_maze
from .search import (
    SOLVERS,
    DeadEndMemory,
    find_bidirectional_bfs_path,
    find_dfs_path,
    find_shortest_path,
    find_single_bfs_path,
    solve,
)
from .leaderboard import (
    JsonFileStorage,
    Leaderboard,
    LeaderboardRecord,
    MemoryStorage,
    RankedRecordTree,
    compare_records,
)
from .game import GameSession, open_leaderboard
