"""
Maze file formats: plain text grids, quoted-token grids and JSON.

Text (one character per cell):
    #   wall
    S   start (cost 1)
    E   goal (cost 1)
    1-9 cell cost
    any other character costs 1

Token (cells separated by anything, multi-digit costs quoted):
    "12"  cell cost
    #     wall
    S     start (cost 0)
    G     goal (cost 0)

JSON: the MazeData dictionary written by save_maze_json.
"""

import json
import logging
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..domain.types import WALL, Coord, Grid, MazeProblem

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

MAZE_SUFFIXES = (".txt", ".json")
FORMAT_VERSION = "1.0"

_TOKEN_PATTERN = re.compile(r'"(\d+)"|([#SG])')


class MazeFormatError(ValueError):
    """Raised when a maze file cannot be interpreted."""


class MazeData:
    """Container for maze data with metadata."""

    def __init__(self, costs: List[List[int]], start: Coord, goal: Coord,
                 name: str = "", description: str = ""):
        self.costs = costs
        self.start = start
        self.goal = goal
        self.name = name
        self.description = description
        self.created_at = datetime.now().isoformat()

    @classmethod
    def from_problem(cls, problem: MazeProblem, description: str = "") -> "MazeData":
        return cls(problem.grid.costs.tolist(), problem.start, problem.goal,
                   name=problem.name, description=description)

    def to_problem(self) -> MazeProblem:
        """Build the validated MazeProblem this data describes."""
        try:
            return MazeProblem(Grid.from_rows(self.costs), self.start, self.goal, self.name)
        except ValueError as e:
            raise MazeFormatError(f"Invalid maze {self.name!r}: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert maze data to dictionary for serialization."""
        return {
            'version': FORMAT_VERSION,
            'name': self.name,
            'description': self.description,
            'costs': self.costs,
            'start': list(self.start),
            'goal': list(self.goal),
            'created_at': self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MazeData":
        """Create maze data from dictionary."""
        try:
            maze = cls(
                costs=data['costs'],
                start=tuple(data['start']),
                goal=tuple(data['goal']),
                name=data.get('name', ''),
                description=data.get('description', ''),
            )
        except (KeyError, TypeError) as e:
            raise MazeFormatError(f"Maze dictionary is missing or has a malformed field: {e}") from e
        maze.created_at = data.get('created_at', maze.created_at)
        return maze


def _meaningful_lines(text: str) -> List[str]:
    lines = [line.rstrip("\r\n") for line in text.splitlines()]
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def _require_single(found: List[Coord], marker: str) -> Coord:
    if not found:
        raise MazeFormatError(f"Maze has no {marker!r} cell")
    if len(found) > 1:
        raise MazeFormatError(f"Maze has {len(found)} {marker!r} cells, expected one")
    return found[0]


def parse_maze_text(text: str, name: str = "") -> MazeProblem:
    """
    Parse either text format into a MazeProblem.

    Files containing a double quote are read in the token format,
    everything else one character per cell.

    Raises:
        MazeFormatError: empty input, ragged rows, or not exactly one
            start and one goal
    """
    if '"' in text:
        return _parse_token_text(text, name)
    return _parse_char_text(text, name)


def _parse_char_text(text: str, name: str) -> MazeProblem:
    lines = _meaningful_lines(text)
    if not lines:
        raise MazeFormatError("Maze text is empty")

    width = len(lines[0])
    rows = []
    starts, goals = [], []
    for r, line in enumerate(lines):
        if len(line) != width:
            raise MazeFormatError(f"Row {r} has {len(line)} cells, expected {width}")
        row = []
        for c, char in enumerate(line):
            if char == '#':
                row.append(WALL)
            elif '1' <= char <= '9':
                row.append(int(char))
            else:
                if char == 'S':
                    starts.append((r, c))
                elif char == 'E':
                    goals.append((r, c))
                row.append(1)
        rows.append(row)

    return _build_problem(rows, _require_single(starts, 'S'), _require_single(goals, 'E'), name)


def _parse_token_text(text: str, name: str) -> MazeProblem:
    rows = []
    starts, goals = [], []
    for line in text.splitlines():
        if not line.strip():
            continue
        row = []
        for match in _TOKEN_PATTERN.finditer(line):
            number, symbol = match.groups()
            if number is not None:
                row.append(int(number))
            elif symbol == '#':
                row.append(WALL)
            else:
                (starts if symbol == 'S' else goals).append((len(rows), len(row)))
                row.append(0)
        if row:
            if rows and len(row) != len(rows[0]):
                raise MazeFormatError(f"Row {len(rows)} has {len(row)} cells, expected {len(rows[0])}")
            rows.append(row)

    if not rows:
        raise MazeFormatError("Maze text has no cells")
    return _build_problem(rows, _require_single(starts, 'S'), _require_single(goals, 'G'), name)


def _build_problem(rows: List[List[int]], start: Coord, goal: Coord, name: str) -> MazeProblem:
    try:
        return MazeProblem(Grid.from_rows(rows), start, goal, name)
    except ValueError as e:
        raise MazeFormatError(str(e)) from e


def load_maze_text(filepath: PathLike) -> MazeProblem:
    """Load a text maze file; the problem is named after the file stem."""
    path = Path(filepath)
    return parse_maze_text(path.read_text(encoding="utf-8"), name=path.stem)


def save_maze_json(problem: MazeProblem, filepath: PathLike, description: str = "") -> None:
    """Save a maze to a JSON file, creating parent directories as needed."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding="utf-8") as f:
        json.dump(MazeData.from_problem(problem, description).to_dict(), f, indent=2)
    logger.info("Saved maze %r to %s", problem.name, path)


def load_maze_json(filepath: PathLike) -> MazeProblem:
    """Load a maze saved by save_maze_json."""
    path = Path(filepath)
    try:
        with open(path, 'r', encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise MazeFormatError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MazeFormatError(f"{path} does not contain a maze object")

    maze = MazeData.from_dict(data)
    if not maze.name:
        maze.name = path.stem
    return maze.to_problem()


def load_maze(filepath: PathLike) -> MazeProblem:
    """
    Load a maze, choosing the format from the file suffix.

    Raises:
        MazeFormatError: unknown suffix or malformed content
        OSError: the file cannot be read
    """
    suffix = Path(filepath).suffix.lower()
    if suffix == ".json":
        return load_maze_json(filepath)
    if suffix == ".txt":
        return load_maze_text(filepath)
    raise MazeFormatError(f"Unsupported maze file type: {suffix or '(none)'}")


def natural_sort_key(name: str) -> Tuple:
    """Sort key that orders embedded numbers numerically (m15 before m100)."""
    return tuple(int(part) if part.isdigit() else part.lower()
                 for part in re.split(r'(\d+)', name))


def list_maze_files(directory: PathLike, suffixes=MAZE_SUFFIXES) -> List[Path]:
    """List maze files in a directory in natural order."""
    root = Path(directory)
    if not root.is_dir():
        logger.warning("Maze directory %s does not exist", root)
        return []
    files = [p for p in root.iterdir() if p.is_file() and p.suffix.lower() in suffixes]
    return sorted(files, key=lambda p: natural_sort_key(p.name))


def load_maze_directory(directory: PathLike) -> List[Tuple[Path, Optional[MazeProblem]]]:
    """
    Load every maze in a directory in natural order.

    Files that fail to load are logged and paired with None instead of
    aborting the whole listing.
    """
    loaded = []
    for path in list_maze_files(directory):
        try:
            loaded.append((path, load_maze(path)))
        except (OSError, MazeFormatError) as e:
            logger.warning("Skipping %s: %s", path.name, e)
            loaded.append((path, None))
    return loaded
