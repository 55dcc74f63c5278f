"""Export generated mazes and their solutions as PNG images plus JSON metadata.

Usage::

    reef-maze-export 20 --output-dir out/mazes --rows 21 --cols 21 --algorithm dfs
"""

from __future__ import annotations

import argparse
import json
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from tqdm import tqdm

from reef_maze.config import BASE_MAZE_SIZE
from reef_maze.errors import ConfigurationError
from reef_maze.leaderboard.storage import PathLike
from reef_maze.maze import MazeGenerator
from reef_maze.render import render_maze
from reef_maze.search import SOLVERS, DeadEndMemory, solve

logger = logging.getLogger(__name__)


@dataclass
class MazeExportRecord:
    """Serializable metadata for one exported maze image pair."""

    id: str
    rows: int
    cols: int
    algorithm: str
    start: Tuple[int, int]
    goal: Tuple[int, int]
    maze_grid: List[List[int]]
    solution_path: List[Tuple[int, int]]
    image: str
    solution_image_path: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "grid_size": [self.rows, self.cols],
            "algorithm": self.algorithm,
            "start": list(self.start),
            "goal": list(self.goal),
            "maze_grid": self.maze_grid,
            "solution_path": [list(pos) for pos in self.solution_path],
            "solution_length": len(self.solution_path),
            "image": self.image,
            "solution_image_path": self.solution_image_path,
        }


class MazeExporter:
    """Generate, solve and save mazes under ``output_dir``."""

    DEFAULT_OUTPUT_DIR = "data/mazes"
    DEFAULT_CELL_SIZE = 24

    def __init__(
        self,
        output_dir: Optional[PathLike] = None,
        *,
        rows: int = BASE_MAZE_SIZE,
        cols: int = BASE_MAZE_SIZE,
        cell_size: int = DEFAULT_CELL_SIZE,
        algorithm: str = "bfs",
        seed: Optional[int] = None,
    ) -> None:
        if cell_size <= 0:
            raise ConfigurationError("cell_size must be positive")
        if algorithm.lower() not in SOLVERS:
            raise ConfigurationError(f"Unknown algorithm '{algorithm}', expected one of {sorted(SOLVERS)}")
        self.output_dir = Path(output_dir if output_dir is not None else self.DEFAULT_OUTPUT_DIR)
        self.rows = rows
        self.cols = cols
        self.cell_size = int(cell_size)
        self.algorithm = algorithm.lower()
        self.generator = MazeGenerator(seed)

        self.puzzle_dir = self.output_dir / "puzzles"
        self.solution_dir = self.output_dir / "solutions"
        self.puzzle_dir.mkdir(parents=True, exist_ok=True)
        self.solution_dir.mkdir(parents=True, exist_ok=True)

    def next_id(self) -> str:
        return str(uuid.uuid4())

    def create_record(self, *, record_id: Optional[str] = None) -> MazeExportRecord:
        record_id = record_id or self.next_id()
        maze = self.generator.generate(self.rows, self.cols)
        # fresh memory per maze, entries never carry over to the next layout
        path = solve(maze, maze.start, maze.goal, self.algorithm, DeadEndMemory())
        if not path:
            raise RuntimeError("Generated maze has no path from start to goal")

        puzzle_path = self.puzzle_dir / f"{record_id}_puzzle.png"
        solution_path = self.solution_dir / f"{record_id}_solution.png"
        render_maze(maze, cell_size=self.cell_size).save(puzzle_path)
        render_maze(maze, path=path, cell_size=self.cell_size).save(solution_path)
        logger.debug("Exported maze %s with a %d-cell %s solution", record_id, len(path), self.algorithm)

        return MazeExportRecord(
            id=record_id,
            rows=maze.rows,
            cols=maze.cols,
            algorithm=self.algorithm,
            start=tuple(maze.start),
            goal=tuple(maze.goal),
            maze_grid=maze.to_grid(),
            solution_path=[tuple(pos) for pos in path],
            image=self.relativize_path(puzzle_path),
            solution_image_path=self.relativize_path(solution_path),
        )

    def generate(self, count: int) -> List[MazeExportRecord]:
        return [self.create_record() for _ in tqdm(range(count), desc="Mazes")]

    def write_metadata(
        self,
        records: Iterable[MazeExportRecord],
        metadata_path: PathLike,
        *,
        append: bool = True,
    ) -> None:
        """Serialize records to JSON, appending to an existing file if requested."""

        path = Path(metadata_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        existing: List[Dict[str, Any]] = []
        if append and path.exists():
            existing = json.loads(path.read_text(encoding="utf-8"))
        payload = [record.to_dict() for record in records]
        path.write_text(json.dumps(existing + payload, indent=2), encoding="utf-8")

    def relativize_path(self, path: Path) -> str:
        try:
            return path.relative_to(self.output_dir).as_posix()
        except ValueError:
            return path.as_posix()


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export generated mazes with their solutions")
    parser.add_argument("count", type=int, help="Number of mazes to generate")
    parser.add_argument("--output-dir", type=Path, default=None, help="Where to save images and data.json")
    parser.add_argument("--rows", type=int, default=BASE_MAZE_SIZE)
    parser.add_argument("--cols", type=int, default=BASE_MAZE_SIZE)
    parser.add_argument("--cell-size", type=int, default=MazeExporter.DEFAULT_CELL_SIZE, help="Cell size in pixels")
    parser.add_argument("--algorithm", choices=sorted(SOLVERS), default="bfs")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--overwrite", action="store_true", help="Replace data.json instead of appending")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    args = _parse_args(argv)
    exporter = MazeExporter(
        args.output_dir,
        rows=args.rows,
        cols=args.cols,
        cell_size=args.cell_size,
        algorithm=args.algorithm,
        seed=args.seed,
    )
    logging.info(f"Generating {args.count} mazes ({args.rows}x{args.cols}, {args.algorithm})...")
    records = exporter.generate(max(1, args.count))
    metadata_path = exporter.output_dir / "data.json"
    exporter.write_metadata(records, metadata_path, append=not args.overwrite)
    logging.info(f"Saved metadata to {metadata_path}")


__all__ = ["MazeExportRecord", "MazeExporter", "main"]


if __name__ == "__main__":
    main()
