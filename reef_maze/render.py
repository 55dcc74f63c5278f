"""Pillow snapshots of a maze, optionally with a solution path drawn on top."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from reef_maze.maze.grid import CoordinateLike, Maze, as_coordinate

WALL_COLOR = (0, 0, 0)
PATH_COLOR = (255, 255, 255)
START_COLOR = (220, 30, 30)
GOAL_COLOR = (40, 180, 80)
LINE_COLOR = (40, 90, 220)


def draw_path_line(
    image: Image.Image,
    points: List[Tuple[float, float]],
    color: Tuple[int, int, int],
    thickness: int,
) -> None:
    """Draws a polyline (or a dot for a single point) on the given image."""
    draw = ImageDraw.Draw(image)
    if len(points) >= 2:
        draw.line(points, fill=color, width=thickness, joint="curve")
    elif len(points) == 1:
        x, y = points[0]
        r = thickness / 2
        draw.ellipse((x - r, y - r, x + r, y + r), fill=color)


def cell_center(pos: CoordinateLike, cell_size: int) -> Tuple[float, float]:
    row, col = pos
    return (col * cell_size + cell_size / 2.0, row * cell_size + cell_size / 2.0)


def render_maze(
    maze: Maze,
    *,
    path: Optional[Sequence[CoordinateLike]] = None,
    cell_size: int = 24,
    start: Optional[CoordinateLike] = None,
    goal: Optional[CoordinateLike] = None,
    line_color: Tuple[int, int, int] = LINE_COLOR,
) -> Image.Image:
    if cell_size <= 0:
        raise ValueError("cell_size must be positive")
    start_pos = as_coordinate(start) if start is not None else maze.start
    goal_pos = as_coordinate(goal) if goal is not None else maze.goal

    canvas = Image.new("RGB", (maze.cols * cell_size, maze.rows * cell_size), WALL_COLOR)
    draw = ImageDraw.Draw(canvas)
    for r, row in enumerate(maze.grid):
        for c, cell in enumerate(row):
            if (r, c) == start_pos:
                fill = START_COLOR
            elif (r, c) == goal_pos:
                fill = GOAL_COLOR
            else:
                fill = WALL_COLOR if cell.is_wall else PATH_COLOR
            left = c * cell_size
            top = r * cell_size
            draw.rectangle((left, top, left + cell_size - 1, top + cell_size - 1), fill=fill)

    if path:
        thickness = max(2, cell_size // 3)
        draw_path_line(canvas, [cell_center(pos, cell_size) for pos in path], line_color, thickness)

    return canvas


__all__ = ["cell_center", "draw_path_line", "render_maze"]
