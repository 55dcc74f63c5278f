import random
import sys
import unittest
from collections import deque
from pathlib import Path
from typing import Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reef_maze import (
    ConfigurationError,
    DeadEndMemory,
    Maze,
    find_bidirectional_bfs_path,
    find_dfs_path,
    find_shortest_path,
    find_single_bfs_path,
    generate_maze,
    solve,
)
from reef_maze.search import SOLVERS, is_valid_path

ROOM = Maze.from_grid(
    [
        [1, 1, 1, 1, 1],
        [1, 0, 0, 0, 1],
        [1, 0, 0, 0, 1],
        [1, 0, 0, 0, 1],
        [1, 1, 1, 1, 1],
    ]
)

# (1,1) connects down to the goal; the branch through (1,5) ends at (3,3).
BRANCHED = Maze.from_grid(
    [
        [1, 1, 1, 1, 1, 1, 1],
        [1, 0, 0, 0, 0, 0, 1],
        [1, 0, 1, 1, 1, 0, 1],
        [1, 0, 1, 0, 0, 0, 1],
        [1, 0, 1, 1, 1, 1, 1],
        [1, 0, 0, 0, 0, 0, 1],
        [1, 1, 1, 1, 1, 1, 1],
    ]
)

# Same size, but the only route from (1,1) to (5,5) runs through (3,3).
THROUGH_CENTRE = Maze.from_grid(
    [
        [1, 1, 1, 1, 1, 1, 1],
        [1, 0, 1, 0, 0, 0, 1],
        [1, 0, 1, 0, 1, 0, 1],
        [1, 0, 0, 0, 1, 0, 1],
        [1, 1, 1, 1, 1, 0, 1],
        [1, 1, 1, 1, 1, 0, 1],
        [1, 1, 1, 1, 1, 1, 1],
    ]
)


def _reference_distance(maze: Maze, start, end) -> Optional[int]:
    """Plain BFS over the wall grid, independent of the solvers module."""
    grid = maze.to_grid()
    start, end = tuple(start), tuple(end)
    dist = {start: 0}
    queue = deque([start])
    while queue:
        r, c = queue.popleft()
        if (r, c) == end:
            return dist[(r, c)]
        for dr, dc in ((0, 1), (1, 0), (0, -1), (-1, 0)):
            nr, nc = r + dr, c + dc
            if 0 <= nr < len(grid) and 0 <= nc < len(grid[0]) and grid[nr][nc] == 0 and (nr, nc) not in dist:
                dist[(nr, nc)] = dist[(r, c)] + 1
                queue.append((nr, nc))
    return None


class GeneratedMazeSearchTests(unittest.TestCase):
    def setUp(self) -> None:
        self.maze = generate_maze(21, 21, rng=random.Random(5))
        cells = sorted(self.maze.open_cells())
        rng = random.Random(9)
        self.pairs = [(rng.choice(cells), rng.choice(cells)) for _ in range(40)]
        self.pairs.append((self.maze.start, self.maze.goal))

    def test_bfs_matches_reference_shortest_length(self) -> None:
        for start, end in self.pairs:
            path = find_single_bfs_path(self.maze, start, end, DeadEndMemory())
            self.assertTrue(is_valid_path(self.maze, path, start, end))
            self.assertEqual(len(path) - 1, _reference_distance(self.maze, start, end))

    def test_bfs_without_memory_matches_reference(self) -> None:
        for start, end in self.pairs:
            path = find_shortest_path(self.maze, start, end)
            self.assertEqual(len(path) - 1, _reference_distance(self.maze, start, end))

    def test_dfs_returns_valid_path(self) -> None:
        for start, end in self.pairs:
            path = find_dfs_path(self.maze, start, end, DeadEndMemory())
            self.assertTrue(is_valid_path(self.maze, path, start, end))
            # a perfect maze has exactly one simple path
            self.assertEqual(len(path) - 1, _reference_distance(self.maze, start, end))

    def test_bidirectional_returns_valid_simple_path(self) -> None:
        for start, end in self.pairs:
            path = find_bidirectional_bfs_path(self.maze, start, end)
            self.assertTrue(is_valid_path(self.maze, path, start, end))
            self.assertEqual(len(set(path)), len(path))
            self.assertEqual(len(path) - 1, _reference_distance(self.maze, start, end))

    def test_hint_then_solve_share_memory_on_same_maze(self) -> None:
        memory = DeadEndMemory()
        hint = find_single_bfs_path(self.maze, self.maze.start, self.maze.goal, memory)
        solution = find_single_bfs_path(self.maze, self.maze.start, self.maze.goal, memory)
        self.assertEqual(hint, solution)
        dfs = find_dfs_path(self.maze, self.maze.start, self.maze.goal, memory)
        self.assertEqual(dfs, solution)
        self.assertNotIn(self.maze.goal, memory)
        for pos in memory:
            self.assertFalse(self.maze.is_wall(pos))


class SearchBehaviourTests(unittest.TestCase):
    def test_start_equals_end(self) -> None:
        for name, solver in SOLVERS.items():
            with self.subTest(solver=name):
                self.assertEqual(solver(ROOM, (2, 2), (2, 2)), [(2, 2)])

    def test_unreachable_end_returns_empty_path(self) -> None:
        walled = Maze.from_grid(
            [
                [1, 1, 1, 1, 1],
                [1, 0, 1, 0, 1],
                [1, 1, 1, 1, 1],
            ]
        )
        self.assertEqual(find_dfs_path(walled, (1, 1), (1, 3)), [])
        self.assertEqual(find_single_bfs_path(walled, (1, 1), (1, 3)), [])
        self.assertEqual(find_bidirectional_bfs_path(walled, (1, 1), (1, 3)), [])

    def test_dfs_explores_up_down_left_right(self) -> None:
        memory = DeadEndMemory()
        path = find_dfs_path(ROOM, (2, 2), (2, 3), memory)
        self.assertEqual(path, [(2, 2), (2, 3)])
        # (1,2) and (3,2) still had moves left when they were expanded
        self.assertEqual(set(memory), {(1, 1), (1, 3), (3, 1), (3, 3), (2, 1)})

    def test_dfs_takes_first_direction_branch(self) -> None:
        path = find_dfs_path(ROOM, (3, 1), (1, 3))
        # up first: climbs the left column, then walks right along the top
        self.assertEqual(path, [(3, 1), (2, 1), (1, 1), (1, 2), (1, 3)])

    def test_bfs_records_locally_exhausted_cells(self) -> None:
        memory = DeadEndMemory()
        path = find_single_bfs_path(ROOM, (2, 2), (2, 3), memory)
        self.assertEqual(path, [(2, 2), (2, 3)])
        self.assertEqual(set(memory), {(2, 1)})

    def test_known_dead_ends_are_skipped(self) -> None:
        memory = DeadEndMemory()
        memory.add_dead_end((1, 2))
        path = find_single_bfs_path(ROOM, (1, 1), (1, 3), memory)
        self.assertTrue(is_valid_path(ROOM, path, (1, 1), (1, 3)))
        self.assertNotIn((1, 2), path)
        self.assertEqual(len(path), 5)

    def test_bidirectional_ignores_memory(self) -> None:
        memory = DeadEndMemory()
        memory.add_dead_end((1, 2))
        path = solve(ROOM, (1, 1), (1, 3), "bidirectional", memory)
        self.assertEqual(path, [(1, 1), (1, 2), (1, 3)])
        self.assertEqual(set(memory), {(1, 2)})

    def test_bidirectional_meets_in_corridor(self) -> None:
        corridor = Maze.from_grid([[1] * 9, [1, 0, 0, 0, 0, 0, 0, 0, 1], [1] * 9])
        path = find_bidirectional_bfs_path(corridor, (1, 1), (1, 7))
        self.assertEqual(path, [(1, c) for c in range(1, 8)])

    def test_bidirectional_on_adjacent_cells(self) -> None:
        # Each side enqueues the other's seed; the meeting is only seen on dequeue.
        path = find_bidirectional_bfs_path(ROOM, (1, 1), (1, 2))
        self.assertEqual(path, [(1, 1), (1, 2)])

    def test_bidirectional_on_open_room_is_valid(self) -> None:
        for start, end in [((1, 1), (3, 3)), ((3, 1), (1, 3)), ((2, 2), (1, 1))]:
            path = find_bidirectional_bfs_path(ROOM, start, end)
            self.assertTrue(is_valid_path(ROOM, path, start, end))
            self.assertGreaterEqual(len(path) - 1, _reference_distance(ROOM, start, end))
            self.assertEqual(len(set(path)), len(path))

    def test_solve_dispatch(self) -> None:
        for name in ("bfs", "DFS", "Bidirectional"):
            path = solve(BRANCHED, (1, 1), (5, 5), name)
            self.assertTrue(is_valid_path(BRANCHED, path, (1, 1), (5, 5)))
        with self.assertRaises(ConfigurationError):
            solve(BRANCHED, (1, 1), (5, 5), "astar")

    def test_is_valid_path_rejects_bad_paths(self) -> None:
        self.assertFalse(is_valid_path(ROOM, [], (1, 1), (1, 1)))
        self.assertFalse(is_valid_path(ROOM, [(1, 1), (1, 3)], (1, 1), (1, 3)))
        self.assertFalse(is_valid_path(ROOM, [(1, 1), (0, 1), (1, 1)], (1, 1), (1, 1)))
        self.assertFalse(is_valid_path(ROOM, [(1, 1), (1, 2)], (1, 1), (1, 3)))


class DeadEndMemoryTests(unittest.TestCase):
    def test_add_query_and_clear(self) -> None:
        memory = DeadEndMemory()
        self.assertFalse(memory.is_dead_end((3, 4)))
        memory.add_dead_end((3, 4))
        memory.add_dead_end((3, 4))
        self.assertTrue(memory.is_dead_end((3, 4)))
        self.assertIn((3, 4), memory)
        self.assertNotIn("3,4", memory)
        self.assertEqual(len(memory), 1)
        memory.clear()
        self.assertEqual(len(memory), 0)
        self.assertFalse(memory.is_dead_end((3, 4)))

    def test_search_records_dead_end_branch(self) -> None:
        memory = DeadEndMemory()
        path = find_single_bfs_path(BRANCHED, (1, 5), (5, 5), memory)
        self.assertEqual(len(path) - 1, _reference_distance(BRANCHED, (1, 5), (5, 5)))
        self.assertEqual(set(memory), {(3, 3)})

    def test_stale_memory_from_previous_maze_blocks_new_route(self) -> None:
        memory = DeadEndMemory()
        find_single_bfs_path(BRANCHED, (1, 5), (5, 5), memory)
        self.assertTrue(memory.is_dead_end((3, 3)))

        # Known hazard: the memory was not cleared after the maze changed, so the
        # only corridor of the new layout is pruned and no path is reported.
        stale = find_single_bfs_path(THROUGH_CENTRE, (1, 1), (5, 5), memory)
        self.assertEqual(stale, [])
        self.assertEqual(find_dfs_path(THROUGH_CENTRE, (1, 1), (5, 5), memory), [])

        memory.clear()
        fresh = find_single_bfs_path(THROUGH_CENTRE, (1, 1), (5, 5), memory)
        self.assertTrue(is_valid_path(THROUGH_CENTRE, fresh, (1, 1), (5, 5)))
        self.assertIn((3, 3), fresh)
        self.assertEqual(len(fresh), 13)

    def test_repeated_searches_grow_dead_end_branch(self) -> None:
        memory = DeadEndMemory()
        for _ in range(3):
            path = find_single_bfs_path(BRANCHED, (1, 5), (5, 5), memory)
            self.assertTrue(is_valid_path(BRANCHED, path, (1, 5), (5, 5)))
        self.assertEqual(set(memory), {(3, 3), (3, 4), (3, 5)})
        # From inside the pruned branch every exit is now marked as a dead end.
        self.assertEqual(find_single_bfs_path(BRANCHED, (3, 4), (5, 5), memory), [])
        self.assertTrue(find_single_bfs_path(BRANCHED, (3, 4), (5, 5)))


if __name__ == "__main__":
    unittest.main()
