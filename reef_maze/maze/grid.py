"""Grid model shared by the generator, the solvers and the renderer.

A maze is a rectangular array of :class:`Cell` objects. Open cells are the
corridors the player (and the solvers) may walk through; everything else is
wall. The model carries no behaviour beyond construction and read access.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Sequence, Tuple, Union

import numpy as np

WALL = 1
PATH = 0


class Coordinate(NamedTuple):
    """A ``(row, col)`` grid position."""

    row: int
    col: int

    def step(self, dr: int, dc: int) -> "Coordinate":
        return Coordinate(self.row + dr, self.col + dc)


CoordinateLike = Union[Coordinate, Tuple[int, int]]

# up, down, left, right
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def as_coordinate(value: CoordinateLike) -> Coordinate:
    if isinstance(value, Coordinate):
        return value
    row, col = value
    return Coordinate(int(row), int(col))


@dataclass
class Cell:
    """One square of the maze."""

    row: int
    col: int
    is_wall: bool = True
    is_visited: bool = False

    @property
    def is_path(self) -> bool:
        return not self.is_wall


class Maze:
    """Rectangular grid of cells indexed as ``maze.grid[row][col]``."""

    def __init__(self, grid: List[List[Cell]]) -> None:
        if not grid or not grid[0]:
            raise ValueError("Maze grid must contain at least one cell")
        width = len(grid[0])
        if any(len(row) != width for row in grid):
            raise ValueError("Maze grid rows must all have the same length")
        self.grid = grid

    @classmethod
    def filled(cls, rows: int, cols: int) -> "Maze":
        """Create a maze where every cell is a wall."""

        return cls([[Cell(r, c) for c in range(cols)] for r in range(rows)])

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[Union[int, bool]]]) -> "Maze":
        """Build a maze from rows of wall flags (1/True = wall, 0/False = path)."""

        return cls(
            [
                [Cell(r, c, is_wall=bool(value)) for c, value in enumerate(row)]
                for r, row in enumerate(grid)
            ]
        )

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0])

    @property
    def start(self) -> Coordinate:
        return Coordinate(1, 1)

    @property
    def goal(self) -> Coordinate:
        return Coordinate(self.rows - 2, self.cols - 2)

    def in_bounds(self, pos: CoordinateLike) -> bool:
        row, col = pos
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, pos: CoordinateLike) -> Cell:
        row, col = pos
        if not self.in_bounds(pos):
            raise IndexError(f"Position {tuple(pos)} is outside a {self.rows}x{self.cols} maze")
        return self.grid[row][col]

    def is_wall(self, pos: CoordinateLike) -> bool:
        """Return True for wall cells; positions outside the grid count as walls."""

        if not self.in_bounds(pos):
            return True
        row, col = pos
        return self.grid[row][col].is_wall

    def neighbors(self, pos: CoordinateLike) -> List[Coordinate]:
        """Open 4-neighbours of ``pos`` in up, down, left, right order."""

        origin = as_coordinate(pos)
        result: List[Coordinate] = []
        for dr, dc in DIRECTIONS:
            candidate = origin.step(dr, dc)
            if not self.is_wall(candidate):
                result.append(candidate)
        return result

    def open_cells(self) -> Iterator[Coordinate]:
        for row in self.grid:
            for cell in row:
                if not cell.is_wall:
                    yield Coordinate(cell.row, cell.col)

    def to_grid(self) -> List[List[int]]:
        return [[WALL if cell.is_wall else PATH for cell in row] for row in self.grid]

    def to_array(self) -> np.ndarray:
        """Boolean wall mask with shape ``(rows, cols)``."""

        return np.array([[cell.is_wall for cell in row] for row in self.grid], dtype=bool)

    def __repr__(self) -> str:
        return f"Maze(rows={self.rows}, cols={self.cols})"

    def __str__(self) -> str:
        return "\n".join("".join("#" if cell.is_wall else "." for cell in row) for row in self.grid)


__all__ = [
    "Cell",
    "Coordinate",
    "CoordinateLike",
    "DIRECTIONS",
    "Maze",
    "PATH",
    "WALL",
    "as_coordinate",
]
