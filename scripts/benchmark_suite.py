import sys
import os
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from perfect_maze.core.grid import Grid
from perfect_maze.algo.dfs import DepthFirstCarver
from perfect_maze.algo.prim import FrontierCarver
from perfect_maze.core.complexity import MazeAnalyzer

def benchmark_size(width: int, height: int):
    print(f"\n--- Benchmarking {width}x{height} ({width*height:,} cells) ---")

    # 1. Grid construction
    start_time = time.time()
    grid = Grid(width, height)
    print(f"Grid Init: {time.time() - start_time:.4f}s")

    # 2. Generation
    for name, cls in [("DFS", DepthFirstCarver), ("Prim (FIFO)", FrontierCarver)]:
        algo = cls(grid, seed=42)

        gen_start = time.time()
        algo.run_all()
        gen_time = time.time() - gen_start

        stats = MazeAnalyzer.calculate_stats(grid)
        print(f"{name:<12} | {gen_time:.4f}s | {(width*height)/gen_time:,.0f} cells/sec | "
              f"dead ends {stats['dead_end_percent']:.1f}%")

def run_suite():
    sizes = [
        (16, 16),
        (100, 100),
        (300, 300),
    ]

    for w, h in sizes:
        benchmark_size(w, h)

if __name__ == "__main__":
    run_suite()
