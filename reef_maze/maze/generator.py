"""Perfect-maze generation by randomized depth-first backtracking."""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from reef_maze.config import BASE_MAZE_SIZE, validate_dimensions
from reef_maze.maze.grid import Cell, Maze

logger = logging.getLogger(__name__)

# Offsets to the next carve cell; the cell halfway between is the wall to knock down.
CARVE_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-2, 0), (2, 0), (0, -2), (0, 2))


def _open(cell: Cell) -> None:
    cell.is_wall = False


def _carve(maze: Maze, rng: random.Random) -> None:
    rows, cols = maze.rows, maze.cols
    grid = maze.grid

    def enter(r: int, c: int) -> Tuple[int, int, List[Tuple[int, int]]]:
        cell = grid[r][c]
        _open(cell)
        cell.is_visited = True
        directions = list(CARVE_DIRECTIONS)
        rng.shuffle(directions)
        return r, c, directions

    # Each frame keeps the directions it has not tried yet.
    stack = [enter(1, 1)]
    while stack:
        r, c, directions = stack[-1]
        if not directions:
            stack.pop()
            continue
        dr, dc = directions.pop(0)
        nr, nc = r + dr, c + dc
        if 0 < nr < rows - 1 and 0 < nc < cols - 1 and not grid[nr][nc].is_visited:
            _open(grid[r + dr // 2][c + dc // 2])
            stack.append(enter(nr, nc))


class MazeGenerator:
    """Build perfect mazes with an optional seed for reproducible layouts."""

    DEFAULT_ROWS = BASE_MAZE_SIZE
    DEFAULT_COLS = BASE_MAZE_SIZE

    def __init__(self, seed: Optional[int] = None, *, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    @property
    def rng(self) -> random.Random:
        return self._rng

    def generate(self, rows: Optional[int] = None, cols: Optional[int] = None) -> Maze:
        rows = self.DEFAULT_ROWS if rows is None else rows
        cols = self.DEFAULT_COLS if cols is None else cols
        validate_dimensions(rows, cols)

        maze = Maze.filled(rows, cols)
        _carve(maze, self._rng)

        # Entrance and exit stay open even if the walk never targeted them.
        _open(maze.cell(maze.start))
        _open(maze.cell(maze.goal))
        logger.debug("Generated %dx%d maze", rows, cols)
        return maze


def generate_maze(rows: int, cols: int, *, rng: Optional[random.Random] = None) -> Maze:
    """Generate a ``rows`` x ``cols`` perfect maze (both odd and at least 5)."""

    return MazeGenerator(rng=rng).generate(rows, cols)


__all__ = ["CARVE_DIRECTIONS", "MazeGenerator", "generate_maze"]
