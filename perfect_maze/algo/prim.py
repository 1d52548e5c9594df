import logging
from collections import deque
from typing import Deque, Iterator, Optional, Set, Tuple

from perfect_maze.algo.base import Generator
from perfect_maze.core.cell import DIRECTIONS

logger = logging.getLogger(__name__)


class FrontierCarver(Generator):
    """
    Prim's-style frontier expansion over a FIFO queue.

    The frontier is consumed in insertion order rather than at random, so
    the tree grows breadth-first from the origin and is not a uniformly
    random spanning tree. No terminus or distances are assigned.
    """

    def run(self) -> Iterator[int]:
        self.grid.build()
        self.step_count = 0
        cells = self.grid.cells
        total = len(cells)

        self.origin = self.choose_origin()
        cells[self.origin].is_origin = True
        cells[self.origin].distance = 0

        # Frontier: (cell, closed cell whose expansion enqueued it)
        frontier: Deque[Tuple[int, Optional[int]]] = deque([(self.origin, None)])
        closed: Set[int] = set()

        while len(closed) < total:
            current, previous = frontier.popleft()
            self.step_count += 1

            if current in closed:
                # Enqueued by more than one neighbour; it is already part of
                # the tree, so any extra opening would close a cycle.
                logger.debug("Skipping duplicate %s", cells[current].coordinates)
            else:
                if previous is not None:
                    cells[current].demolish_wall_between(cells, previous)
                closed.add(current)

                for dir_bit in DIRECTIONS:
                    n_idx = cells[current].neighbors[dir_bit]
                    if n_idx is not None and n_idx not in closed:
                        frontier.append((n_idx, current))

                logger.debug("Closed %s, frontier %d", cells[current].coordinates, len(frontier))

            yield self.progress(len(closed))
