"""Maze grid model and generator."""

__all__ = [
    "Cell",
    "Coordinate",
    "Maze",
    "MazeGenerator",
    "generate_maze",
]

from .grid import Cell, Coordinate, Maze
from .generator import MazeGenerator, generate_maze
