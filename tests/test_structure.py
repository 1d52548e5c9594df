import unittest
import random
import threading
import sys
import os
from unittest import mock

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from perfect_maze.algo.base import Generator
from perfect_maze.core import structure
from perfect_maze.core.complexity import MazeAnalyzer
from perfect_maze.core.cell import Cell
from perfect_maze.core.config import MazeConfig
from perfect_maze.core.errors import ConcurrentGenerationRequested, MazeNotReady
from perfect_maze.core.events import CompletedEvent, ProgressEvent
from perfect_maze.core.grid import Rect
from perfect_maze.core.structure import MazeStructure, State

class BlockingCarver(Generator):
    """Holds the worker thread until the test releases it."""
    release = None

    def run(self):
        self.origin = 0
        yield 0
        BlockingCarver.release.wait(5)
        yield 100

class FailingCarver(Generator):
    def run(self):
        self.grid.cells[0].demolish_wall_between(self.grid.cells, 1)
        yield 10
        raise RuntimeError("carving exploded")

class OriginlessCarver(Generator):
    """Finishes carving without ever choosing an origin."""

    def run(self):
        yield 100

class TestMazeStructure(unittest.TestCase):
    def test_generate(self):
        maze = MazeStructure(MazeConfig(width=10, height=6, seed=1))
        self.assertEqual(maze.state, State.IDLE)

        handle = maze.generate()
        events = list(handle.stream_events(timeout=10))

        progress = [e.percent for e in events if isinstance(e, ProgressEvent)]
        self.assertEqual(progress, sorted(progress))
        self.assertEqual(progress[-1], 100)
        self.assertEqual(events[-1], CompletedEvent(True))
        self.assertEqual(sum(isinstance(e, CompletedEvent) for e in events), 1)

        handle.thread.join(5)
        self.assertTrue(handle.done)
        self.assertEqual(maze.state, State.COMPLETED)
        self.assertTrue(MazeAnalyzer.is_perfect(maze.grid))
        self.assertTrue(maze.origin().is_origin)
        self.assertTrue(maze.terminus().is_exit)
        self.assertEqual(maze.distance(maze.origin()), 0)

    def test_single_cell(self):
        maze = MazeStructure(MazeConfig(width=1, height=1, seed=3))
        result = maze.generate().wait(timeout=5)

        self.assertTrue(result.success)
        self.assertIs(maze.origin(), maze.terminus())
        self.assertEqual(maze.distance(maze.origin()), 0)
        self.assertEqual(maze.wall_flags(maze.origin()), (True, True, True, True))

    def test_two_by_two(self):
        maze = MazeStructure(MazeConfig(width=2, height=2, seed=9))
        self.assertTrue(maze.generate_blocking().success)

        self.assertEqual(MazeAnalyzer.open_wall_count(maze.grid), 3)
        dist = MazeAnalyzer.shortest_distances(maze.grid, maze.origin())
        self.assertNotIn(-1, dist)

    def test_overrides_and_prim(self):
        maze = MazeStructure(MazeConfig(seed=4))
        result = maze.generate(width=5, height=3, algo="prim").wait(timeout=5)

        self.assertTrue(result.success)
        self.assertEqual(len(maze.cells()), 15)
        self.assertEqual(maze.cell_at(2, 4).coordinates, (2, 4))
        self.assertIsNone(maze.terminus())
        self.assertTrue(MazeAnalyzer.is_perfect(maze.grid))
        self.assertEqual(maze.config.algo, "prim")

    def test_same_seed_same_maze(self):
        walls = []
        for _ in range(2):
            maze = MazeStructure(MazeConfig(width=8, height=8), rng=random.Random(77))
            maze.generate_blocking()
            walls.append([c.walls for c in maze.cells()])
        self.assertEqual(walls[0], walls[1])

    def test_accessors_before_completion(self):
        maze = MazeStructure()
        with self.assertRaises(MazeNotReady):
            maze.origin()
        with self.assertRaises(MazeNotReady):
            maze.cell_at(0, 0)
        with self.assertRaises(MazeNotReady):
            maze.distance(Cell(0, 0, 0))
        with self.assertRaises(MazeNotReady):
            maze.grid

    def test_concurrent_request_rejected(self):
        BlockingCarver.release = threading.Event()
        with mock.patch.dict(structure.GENERATORS, {"dfs": BlockingCarver}):
            maze = MazeStructure(MazeConfig(width=4, height=4))
            handle = maze.generate()
            self.assertEqual(maze.state, State.RUNNING)

            with self.assertRaises(ConcurrentGenerationRequested):
                maze.generate(width=9, height=9)
            with self.assertRaises(MazeNotReady):
                maze.origin()
            with self.assertRaises(MazeNotReady):
                maze.grid

            BlockingCarver.release.set()
            result = handle.wait(timeout=5)

        self.assertTrue(result.success)
        self.assertEqual(maze.state, State.COMPLETED)
        self.assertEqual(len(maze.cells()), 16)

        # A new run is accepted once the previous one has finished
        handle.thread.join(5)
        self.assertTrue(maze.generate(width=3, height=3).wait(timeout=5).success)
        self.assertEqual(len(maze.cells()), 9)

    def test_failed_run_hides_partial_maze(self):
        with mock.patch.dict(structure.GENERATORS, {"dfs": FailingCarver}):
            maze = MazeStructure(MazeConfig(width=3, height=3))
            with self.assertLogs('perfect_maze.core.structure', level='ERROR'):
                result = maze.generate().wait(timeout=5)

        self.assertFalse(result.success)
        self.assertIsInstance(result.error, RuntimeError)
        self.assertEqual(maze.state, State.IDLE)
        with self.assertRaises(MazeNotReady):
            maze.cells()
        with self.assertRaises(MazeNotReady):
            maze.grid

    def test_failed_finalisation_reports_completion(self):
        with mock.patch.dict(structure.GENERATORS, {"dfs": OriginlessCarver}):
            maze = MazeStructure(MazeConfig(width=3, height=3))
            with self.assertLogs('perfect_maze.core.structure', level='ERROR'):
                result = maze.generate().wait(timeout=5)

        self.assertFalse(result.success)
        self.assertIsInstance(result.error, TypeError)
        self.assertEqual(maze.state, State.IDLE)
        with self.assertRaises(MazeNotReady):
            maze.origin()

        # The structure is free for another run
        self.assertTrue(maze.generate().wait(timeout=5).success)
        self.assertEqual(maze.state, State.COMPLETED)

    def test_invalid_request(self):
        maze = MazeStructure()
        with self.assertRaises(ValueError):
            maze.generate(algo="kruskal")
        with self.assertRaises(ValueError):
            maze.generate(width=0)
        self.assertEqual(maze.state, State.IDLE)

    def test_bounds_and_selection(self):
        maze = MazeStructure(MazeConfig(width=4, height=4, cell_size=16, seed=5))
        maze.generate_blocking()

        cell = maze.cell_at(3, 1)
        self.assertEqual(maze.bounds_of(cell), Rect(16, 48, 16, 16))
        self.assertEqual(maze.bounds_of(cell, 10), Rect(10, 30, 10, 10))

        self.assertIsNone(maze.selected_cell)
        maze.selected_cell_index = cell.index
        self.assertIs(maze.selected_cell, cell)

if __name__ == '__main__':
    unittest.main()
