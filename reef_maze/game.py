"""Headless game session tying the maze, the solvers and the leaderboard together.

The session owns the dead-end memory for its current maze and clears it every
time a new maze is generated. Time is advanced explicitly with :meth:`tick`,
so a UI loop (or a test) decides how fast the clock runs.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Dict, Optional, Tuple

from reef_maze.config import DEFAULT_CONFIG, GameConfig
from reef_maze.errors import ConfigurationError
from reef_maze.leaderboard import BlobStorage, Leaderboard, LeaderboardRecord
from reef_maze.maze import Coordinate, Maze, MazeGenerator
from reef_maze.search import DeadEndMemory, find_single_bfs_path, solve
from reef_maze.search.solvers import Path

logger = logging.getLogger(__name__)

MOVES: Dict[str, Tuple[int, int]] = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
    "w": (-1, 0),
    "s": (1, 0),
    "a": (0, -1),
    "d": (0, 1),
}


def maze_size_for_level(level: int, config: GameConfig = DEFAULT_CONFIG) -> int:
    """Side length of the square maze used on ``level`` (1-based)."""

    if level < 1:
        raise ConfigurationError(f"level must be at least 1, got {level}")
    increment = ((level - 1) // config.levels_per_step) * config.size_step
    return min(config.base_size + increment, config.max_size)


def level_score(moves: int, time: int, config: GameConfig = DEFAULT_CONFIG) -> int:
    """Points for finishing a level; never below ``config.min_level_score``.

    ``moves`` includes the step onto the goal, so a level scores one move
    penalty less than a count taken before the winning step would give.
    """

    raw = config.base_score - moves * config.move_penalty - time * config.time_penalty
    return max(raw, config.min_level_score)


class GameSession:
    """State of one player working through successive levels."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        leaderboard: Optional[Leaderboard] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.leaderboard = leaderboard
        self.generator = MazeGenerator(seed, rng=rng)
        self.memory = DeadEndMemory()
        self.level = 1
        self.total_score = 0
        self.last_level_score: Optional[int] = None
        self.reset()

    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return maze_size_for_level(self.level, self.config)

    @property
    def goal(self) -> Coordinate:
        return self.maze.goal

    def reset(self) -> Maze:
        """Start the current level over on a freshly generated maze."""

        size = self.size
        self.maze = self.generator.generate(size, size)
        # dead ends recorded on the previous layout do not hold on this one
        self.memory.clear()
        self.player = self.maze.start
        self.moves = 0
        self.time = 0
        self.running = False
        self.has_won = False
        optimal = find_single_bfs_path(self.maze, self.maze.start, self.maze.goal)
        self.optimal_path_length: Optional[int] = len(optimal) or None
        logger.info("Level %d: %dx%d maze, optimal path %s cells", self.level, size, size, self.optimal_path_length)
        return self.maze

    def next_level(self) -> Maze:
        self.level += 1
        return self.reset()

    # ------------------------------------------------------------------

    def tick(self, seconds: int = 1) -> int:
        if self.running and not self.has_won:
            self.time += seconds
        return self.time

    def move(self, direction: str) -> bool:
        """Try to move one cell; returns False if the move is not possible."""

        try:
            dr, dc = MOVES[direction.lower()]
        except KeyError as exc:
            raise ConfigurationError(f"Unknown direction '{direction}'") from exc
        if self.has_won:
            return False
        target = self.player.step(dr, dc)
        if self.maze.is_wall(target):
            return False

        self.player = target
        self.moves += 1
        self.running = True
        if target == self.goal:
            self._finish_level()
        return True

    def _finish_level(self) -> None:
        self.has_won = True
        self.running = False
        self.last_level_score = level_score(self.moves, self.time, self.config)
        self.total_score += self.last_level_score
        logger.info(
            "Level %d complete in %d moves and %ds (+%d, total %d)",
            self.level,
            self.moves,
            self.time,
            self.last_level_score,
            self.total_score,
        )
        if self.leaderboard is not None:
            self.leaderboard.add(
                LeaderboardRecord(
                    score=self.total_score,
                    moves=self.moves,
                    time=self.time,
                    level=self.level,
                )
            )

    # ------------------------------------------------------------------

    def hint(self) -> Path:
        """Shortest path from the player to the goal."""

        return self._search(lambda: find_single_bfs_path(self.maze, self.player, self.goal, self.memory))

    def solve(self, algorithm: str = "bfs") -> Path:
        return self._search(lambda: solve(self.maze, self.player, self.goal, algorithm, self.memory))

    def _search(self, run: Callable[[], Path]) -> Path:
        path = run()
        if not path and len(self.memory):
            # the player stepped into a branch earlier searches pruned
            logger.warning(
                "No path from %s with %d dead ends recorded; retrying with a clean memory",
                self.player,
                len(self.memory),
            )
            self.memory.clear()
            path = run()
        return path


def open_leaderboard(storage: BlobStorage, config: GameConfig = DEFAULT_CONFIG) -> Leaderboard:
    """Leaderboard over ``storage`` using the key and window size from ``config``."""

    return Leaderboard(storage, key=config.storage_key, size=config.leaderboard_size)


__all__ = ["GameSession", "MOVES", "level_score", "maze_size_for_level", "open_leaderboard"]
