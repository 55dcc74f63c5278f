"""Path search strategies over a :class:`~reef_maze.maze.grid.Maze`.

All strategies share the signature ``(maze, start, end) -> path`` where the
path is a list of coordinates from ``start`` to ``end`` inclusive and an empty
list means no path exists. Neighbours are always generated in the order up,
down, left, right.

Depth-first and single-direction breadth-first search accept an optional
:class:`~reef_maze.search.memory.DeadEndMemory`. Cells found to have no
remaining moves are recorded there, and recorded cells are skipped by later
searches sharing the same memory. Bidirectional search never uses the memory.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Container, Deque, Dict, List, Optional, Sequence, Set, Tuple

from reef_maze.errors import ConfigurationError
from reef_maze.maze.grid import DIRECTIONS, Coordinate, CoordinateLike, Maze, as_coordinate
from reef_maze.search.memory import DeadEndMemory

logger = logging.getLogger(__name__)

Path = List[Coordinate]
Solver = Callable[..., Path]


def _valid_neighbors(
    maze: Maze,
    pos: Coordinate,
    visited: Container[Coordinate],
    memory: Optional[DeadEndMemory],
) -> List[Coordinate]:
    neighbors: List[Coordinate] = []
    for dr, dc in DIRECTIONS:
        candidate = pos.step(dr, dc)
        if maze.is_wall(candidate) or candidate in visited:
            continue
        if memory is not None and memory.is_dead_end(candidate):
            continue
        neighbors.append(candidate)
    return neighbors


def find_dfs_path(
    maze: Maze,
    start: CoordinateLike,
    end: CoordinateLike,
    memory: Optional[DeadEndMemory] = None,
) -> Path:
    """Depth-first search with an explicit stack; finds a path, not the shortest one."""

    start, end = as_coordinate(start), as_coordinate(end)
    stack: List[Tuple[Coordinate, Path]] = [(start, [start])]
    visited: Set[Coordinate] = {start}
    expanded = 0

    while stack:
        pos, path = stack.pop()
        expanded += 1
        if pos == end:
            logger.debug("DFS found a %d-cell path after %d expansions", len(path), expanded)
            return path

        neighbors = _valid_neighbors(maze, pos, visited, memory)
        if not neighbors:
            if memory is not None:
                memory.add_dead_end(pos)
            continue
        # Pushed in reverse so they pop in up, down, left, right order.
        for neighbor in reversed(neighbors):
            visited.add(neighbor)
            stack.append((neighbor, path + [neighbor]))

    logger.debug("DFS found no path from %s to %s", tuple(start), tuple(end))
    return []


def find_single_bfs_path(
    maze: Maze,
    start: CoordinateLike,
    end: CoordinateLike,
    memory: Optional[DeadEndMemory] = None,
) -> Path:
    """Breadth-first search returning a minimum-step path.

    The result is only guaranteed shortest while ``memory`` holds entries
    recorded on this same maze.
    """

    start, end = as_coordinate(start), as_coordinate(end)
    queue: Deque[Tuple[Coordinate, Path]] = deque([(start, [start])])
    visited: Set[Coordinate] = {start}
    expanded = 0

    while queue:
        pos, path = queue.popleft()
        expanded += 1
        if pos == end:
            logger.debug("BFS found a %d-cell path after %d expansions", len(path), expanded)
            return path

        neighbors = _valid_neighbors(maze, pos, visited, memory)
        if not neighbors:
            if memory is not None:
                memory.add_dead_end(pos)
            continue
        for neighbor in neighbors:
            visited.add(neighbor)
            queue.append((neighbor, path + [neighbor]))

    logger.debug("BFS found no path from %s to %s", tuple(start), tuple(end))
    return []


find_shortest_path = find_single_bfs_path


def find_bidirectional_bfs_path(
    maze: Maze,
    start: CoordinateLike,
    end: CoordinateLike,
) -> Path:
    """Run one breadth-first frontier from each end until they meet.

    Each round expands one node from the start side, then one from the end
    side. A meeting is detected when a dequeued node is already known to the
    opposite side; the path is the start-side chain to that node followed by
    the end-side chain from it. On mazes with loops the result can be longer
    than the breadth-first optimum.
    """

    start, end = as_coordinate(start), as_coordinate(end)
    queue_a: Deque[Coordinate] = deque([start])
    queue_b: Deque[Coordinate] = deque([end])
    parents_a: Dict[Coordinate, Optional[Coordinate]] = {start: None}
    parents_b: Dict[Coordinate, Optional[Coordinate]] = {end: None}

    def expand(
        queue: Deque[Coordinate],
        parents: Dict[Coordinate, Optional[Coordinate]],
        other: Dict[Coordinate, Optional[Coordinate]],
    ) -> Optional[Coordinate]:
        pos = queue.popleft()
        if pos in other:
            return pos
        for neighbor in _valid_neighbors(maze, pos, parents, None):
            parents[neighbor] = pos
            queue.append(neighbor)
        return None

    def reconstruct(meeting: Coordinate) -> Path:
        path: Path = []
        node: Optional[Coordinate] = meeting
        while node is not None:
            path.append(node)
            node = parents_a[node]
        path.reverse()
        node = parents_b[meeting]
        while node is not None:
            path.append(node)
            node = parents_b[node]
        return path

    while queue_a or queue_b:
        if queue_a:
            meeting = expand(queue_a, parents_a, parents_b)
            if meeting is not None:
                path = reconstruct(meeting)
                logger.debug("Bidirectional BFS met at %s with a %d-cell path", tuple(meeting), len(path))
                return path
        if queue_b:
            meeting = expand(queue_b, parents_b, parents_a)
            if meeting is not None:
                path = reconstruct(meeting)
                logger.debug("Bidirectional BFS met at %s with a %d-cell path", tuple(meeting), len(path))
                return path

    logger.debug("Bidirectional BFS found no path from %s to %s", tuple(start), tuple(end))
    return []


def _bidirectional(
    maze: Maze,
    start: CoordinateLike,
    end: CoordinateLike,
    memory: Optional[DeadEndMemory] = None,
) -> Path:
    return find_bidirectional_bfs_path(maze, start, end)


SOLVERS: Dict[str, Solver] = {
    "bfs": find_single_bfs_path,
    "dfs": find_dfs_path,
    "bidirectional": _bidirectional,
}


def solve(
    maze: Maze,
    start: CoordinateLike,
    end: CoordinateLike,
    algorithm: str = "bfs",
    memory: Optional[DeadEndMemory] = None,
) -> Path:
    """Dispatch to a strategy by name (``bfs``, ``dfs`` or ``bidirectional``)."""

    try:
        solver = SOLVERS[algorithm.lower()]
    except KeyError as exc:
        raise ConfigurationError(
            f"Unknown algorithm '{algorithm}', expected one of {sorted(SOLVERS)}"
        ) from exc
    return solver(maze, start, end, memory)


def is_valid_path(
    maze: Maze,
    path: Sequence[CoordinateLike],
    start: CoordinateLike,
    end: CoordinateLike,
) -> bool:
    """Check that ``path`` walks open cells in unit steps from ``start`` to ``end``."""

    if not path:
        return False
    steps = [as_coordinate(pos) for pos in path]
    if steps[0] != as_coordinate(start) or steps[-1] != as_coordinate(end):
        return False
    if any(maze.is_wall(pos) for pos in steps):
        return False
    return all(
        abs(a.row - b.row) + abs(a.col - b.col) == 1 for a, b in zip(steps, steps[1:])
    )


__all__ = [
    "Path",
    "SOLVERS",
    "find_bidirectional_bfs_path",
    "find_dfs_path",
    "find_shortest_path",
    "find_single_bfs_path",
    "is_valid_path",
    "solve",
]
