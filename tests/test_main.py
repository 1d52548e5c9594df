import unittest
import io
import sys
import os
import shutil
from contextlib import redirect_stdout

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from perfect_maze.core.config import MazeConfig
from perfect_maze.main import main

class TestConfig(unittest.TestCase):
    def test_defaults(self):
        config = MazeConfig()
        self.assertEqual((config.width, config.height, config.cell_size), (8, 8, 32))
        self.assertEqual(config.algo, "dfs")
        self.assertIs(config.validate(), config)

    def test_validation(self):
        for bad in (MazeConfig(width=0), MazeConfig(height=-2), MazeConfig(cell_size=0), MazeConfig(algo="wilson")):
            with self.assertRaises(ValueError):
                bad.validate()

    def test_merged(self):
        config = MazeConfig(width=5, seed=3)
        merged = config.merged(width=None, height=12, algo="prim")
        self.assertEqual(merged.as_dict(), {"width": 5, "height": 12, "cell_size": 32, "algo": "prim", "seed": 3})
        self.assertEqual(config.height, 8)

class TestCli(unittest.TestCase):
    def setUp(self):
        os.makedirs("test_out", exist_ok=True)

    def tearDown(self):
        shutil.rmtree("test_out", ignore_errors=True)

    def test_generate_with_image(self):
        path = "test_out/cli.png"
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(["generate", "--width", "5", "--height", "4", "--cell-size", "8",
                         "--seed", "1", "--out", path])
        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(path))
        self.assertIn("100%", buf.getvalue())

    def test_stats(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(["stats", "--width", "6", "--height", "6", "--seed", "2", "--algo", "prim"])
        out = buf.getvalue()
        self.assertEqual(code, 0)
        self.assertIn("open_walls", out)
        self.assertIn("35", out)
        self.assertIn("True", out)

    def test_rejects_bad_size(self):
        with self.assertRaises(SystemExit):
            with redirect_stdout(io.StringIO()):
                main(["generate", "--width", "0"])

if __name__ == '__main__':
    unittest.main()
