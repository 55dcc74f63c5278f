"""Game-wide settings: maze sizes per level, scoring and leaderboard window."""

from __future__ import annotations

from dataclasses import dataclass

from reef_maze.errors import ConfigurationError

MIN_MAZE_SIZE = 5
BASE_MAZE_SIZE = 15
MAX_MAZE_SIZE = 31
LEADERBOARD_SIZE = 10
STORAGE_KEY = "octopus_leaderboard_v1"


def validate_dimensions(rows: object, cols: object) -> None:
    """Reject maze geometry the backtracking carver cannot handle."""

    for name, value in (("rows", rows), ("cols", cols)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if value < MIN_MAZE_SIZE:
            raise ConfigurationError(f"{name} must be at least {MIN_MAZE_SIZE}, got {value}")
        if value % 2 == 0:
            raise ConfigurationError(f"{name} must be odd, got {value}")


@dataclass(frozen=True)
class GameConfig:
    """Tunable constants for a game session."""

    base_size: int = BASE_MAZE_SIZE
    size_step: int = 4
    levels_per_step: int = 2
    max_size: int = MAX_MAZE_SIZE
    leaderboard_size: int = LEADERBOARD_SIZE
    storage_key: str = STORAGE_KEY
    base_score: int = 1000
    move_penalty: int = 10
    time_penalty: int = 5
    min_level_score: int = 100

    def __post_init__(self) -> None:
        validate_dimensions(self.base_size, self.max_size)
        if self.max_size < self.base_size:
            raise ConfigurationError("max_size must not be smaller than base_size")
        # an odd base plus an even step keeps every level size odd
        if self.size_step < 0 or self.size_step % 2 != 0:
            raise ConfigurationError("size_step must be a non-negative even integer")
        if self.levels_per_step <= 0:
            raise ConfigurationError("levels_per_step must be positive")
        if self.leaderboard_size <= 0:
            raise ConfigurationError("leaderboard_size must be positive")
        if not self.storage_key:
            raise ConfigurationError("storage_key must be a non-empty string")
        if self.min_level_score < 0 or self.base_score < self.min_level_score:
            raise ConfigurationError("base_score must be at least min_level_score, which must be non-negative")


DEFAULT_CONFIG = GameConfig()


__all__ = [
    "GameConfig",
    "DEFAULT_CONFIG",
    "validate_dimensions",
    "MIN_MAZE_SIZE",
    "BASE_MAZE_SIZE",
    "MAX_MAZE_SIZE",
    "LEADERBOARD_SIZE",
    "STORAGE_KEY",
]
