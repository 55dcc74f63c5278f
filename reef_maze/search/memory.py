"""Dead-end memory shared between searches on the same maze.

Entries are only meaningful for the maze they were recorded on. Whoever owns
the memory must call :meth:`DeadEndMemory.clear` (or drop the instance) as
soon as that maze is regenerated or discarded; stale entries make later
searches skip cells that are open corridors in the new layout.
"""

from __future__ import annotations

from typing import Iterator, Set

from reef_maze.maze.grid import Coordinate, CoordinateLike, as_coordinate


class DeadEndMemory:
    """Set of coordinates proven to be locally exhausted during a search."""

    def __init__(self) -> None:
        self._memory: Set[Coordinate] = set()

    def add_dead_end(self, pos: CoordinateLike) -> None:
        self._memory.add(as_coordinate(pos))

    def is_dead_end(self, pos: CoordinateLike) -> bool:
        return as_coordinate(pos) in self._memory

    def clear(self) -> None:
        self._memory.clear()

    def __contains__(self, pos: object) -> bool:
        if not isinstance(pos, tuple) or len(pos) != 2:
            return False
        return self.is_dead_end(pos)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._memory)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(sorted(self._memory))

    def __repr__(self) -> str:
        return f"DeadEndMemory(size={len(self._memory)})"


__all__ = ["DeadEndMemory"]
