import random
from abc import ABC, abstractmethod
from typing import Iterator, Optional

from perfect_maze.core.grid import Grid


class Generator(ABC):
    def __init__(self, grid: Grid, rng: random.Random = None, seed: int = None):
        self.grid = grid
        self.rng = rng if rng is not None else random.Random(seed)
        self.step_count = 0
        self.origin: Optional[int] = None
        self.terminus: Optional[int] = None

    @abstractmethod
    def run(self) -> Iterator[int]:
        """
        Yields progress percentages (0-100, non-decreasing).
        The actual grid modifications happen in-place on self.grid.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass

    def choose_origin(self) -> int:
        return self.rng.randrange(len(self.grid.cells))

    def progress(self, done: int) -> int:
        return (100 * done) // len(self.grid.cells)
