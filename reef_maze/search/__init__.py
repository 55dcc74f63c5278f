"""Path search strategies and the dead-end memory they share."""

__all__ = [
    "DeadEndMemory",
    "SOLVERS",
    "find_bidirectional_bfs_path",
    "find_dfs_path",
    "find_shortest_path",
    "find_single_bfs_path",
    "is_valid_path",
    "solve",
]

from .memory import DeadEndMemory
from .solvers import (
    SOLVERS,
    find_bidirectional_bfs_path,
    find_dfs_path,
    find_shortest_path,
    find_single_bfs_path,
    is_valid_path,
    solve,
)
