"""Unit tests for maze file loading and saving."""

import json
import tempfile
import unittest
from pathlib import Path

from mazepath.domain.types import WALL
from mazepath.utils.maze_loader import (
    MazeData, MazeFormatError, list_maze_files, load_maze, load_maze_directory,
    natural_sort_key, parse_maze_text, save_maze_json
)

from mazepath.utils.grid_factory import ensure_path_exists

from tests.maze_fixtures import weighted_detour_problem


class TestTextFormat(unittest.TestCase):
    """Test the one-character-per-cell format"""

    def test_parse(self):
        problem = parse_maze_text("S.3\n#9E\n", name="tiny")
        self.assertEqual(problem.name, "tiny")
        self.assertEqual(problem.start, (0, 0))
        self.assertEqual(problem.goal, (1, 2))
        self.assertEqual(problem.grid.costs.tolist(), [[1, 1, 3], [WALL, 9, 1]])

    def test_trailing_blank_lines_ignored(self):
        problem = parse_maze_text("SE\n\n   \n")
        self.assertEqual(problem.grid.rows, 1)

    def test_ragged_rows(self):
        with self.assertRaises(MazeFormatError):
            parse_maze_text("S..\n.E\n")

    def test_missing_or_duplicate_markers(self):
        for text in ("...\n..E", "S..\n...", "S.S\n..E", "S.E\nE.."):
            with self.subTest(text=text):
                with self.assertRaises(MazeFormatError):
                    parse_maze_text(text)

    def test_empty(self):
        with self.assertRaises(MazeFormatError):
            parse_maze_text("\n\n")

    def test_error_is_value_error(self):
        self.assertTrue(issubclass(MazeFormatError, ValueError))


class TestTokenFormat(unittest.TestCase):
    """Test the quoted-token format"""

    def test_parse(self):
        text = '#  #  #  #\n#  S "12" #\n# "3"  G  #\n#  #  #  #\n'
        problem = parse_maze_text(text)
        self.assertEqual(problem.start, (1, 1))
        self.assertEqual(problem.goal, (2, 2))
        self.assertEqual(problem.grid.cost_of(1, 2), 12)
        self.assertEqual(problem.grid.cost_of(2, 1), 3)
        self.assertEqual(problem.grid.cost_of(1, 1), 0)
        self.assertEqual(problem.grid.cost_of(2, 2), 0)
        self.assertTrue(problem.grid.is_wall(0, 0))

    def test_ragged_rows(self):
        with self.assertRaises(MazeFormatError):
            parse_maze_text('S "1" "1"\n"1" G\n')


class TestFiles(unittest.TestCase):
    """Test loading, saving and listing maze files"""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = Path(self.tmpdir.name)

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_json_round_trip(self):
        problem = weighted_detour_problem()
        target = self.root / "saved" / "detour.json"
        save_maze_json(problem, target, description="test maze")

        with open(target) as f:
            data = json.load(f)
        for key in ("version", "name", "description", "costs", "start", "goal", "created_at"):
            self.assertIn(key, data)

        loaded = load_maze(target)
        self.assertEqual(loaded.start, problem.start)
        self.assertEqual(loaded.goal, problem.goal)
        self.assertEqual(loaded.name, problem.name)
        self.assertEqual(loaded.grid.costs.tolist(), problem.grid.costs.tolist())

    def test_load_text_file_uses_stem_as_name(self):
        path = self.root / "m15_15.txt"
        path.write_text("S1\n#E\n")
        problem = load_maze(path)
        self.assertEqual(problem.name, "m15_15")

    def test_bad_json(self):
        path = self.root / "broken.json"
        path.write_text("{not json")
        with self.assertRaises(MazeFormatError):
            load_maze(path)
        path.write_text(json.dumps({"name": "x"}))
        with self.assertRaises(MazeFormatError):
            load_maze(path)

    def test_invalid_json_maze(self):
        data = MazeData([[1, WALL]], (0, 0), (0, 1), name="walled").to_dict()
        path = self.root / "walled.json"
        path.write_text(json.dumps(data))
        with self.assertRaises(MazeFormatError):
            load_maze(path)

    def test_unknown_suffix(self):
        with self.assertRaises(MazeFormatError):
            load_maze(self.root / "maze.csv")

    def test_natural_listing(self):
        for name in ("m100_100.txt", "m15_15.txt", "m33_35.json", "notes.md"):
            (self.root / name).write_text("SE\n")
        names = [p.name for p in list_maze_files(self.root)]
        self.assertEqual(names, ["m15_15.txt", "m33_35.json", "m100_100.txt"])

    def test_missing_directory(self):
        self.assertEqual(list_maze_files(self.root / "nope"), [])

    def test_directory_load_skips_bad_files(self):
        (self.root / "a1.txt").write_text("SE\n")
        (self.root / "a2.txt").write_text("no markers\n")
        loaded = load_maze_directory(self.root)
        self.assertEqual([p.name for p, _ in loaded], ["a1.txt", "a2.txt"])
        self.assertIsNotNone(loaded[0][1])
        self.assertIsNone(loaded[1][1])

    def test_natural_sort_key(self):
        self.assertLess(natural_sort_key("m9"), natural_sort_key("m10"))


class TestSampleMazes(unittest.TestCase):
    """Test the mazes shipped in data/ load and are solvable"""

    DATA_DIR = Path(__file__).resolve().parent.parent / "data"

    def test_samples_load(self):
        loaded = load_maze_directory(self.DATA_DIR)
        self.assertEqual([p.name for p, _ in loaded], ["m5_6.txt", "m9_9.txt"])
        for path, problem in loaded:
            with self.subTest(maze=path.name):
                self.assertIsNotNone(problem)
                self.assertTrue(ensure_path_exists(problem.grid, problem.start, problem.goal))


if __name__ == '__main__':
    unittest.main()
