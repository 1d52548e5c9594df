import logging
from typing import Iterator, List

from perfect_maze.algo.base import Generator
from perfect_maze.core.cell import DISTANCE_UNINITIALISED

logger = logging.getLogger(__name__)


class DepthFirstCarver(Generator):
    """
    Randomised depth-first carving (recursive backtracker).

    Each cell's distance is its carve-order distance: the distance of the
    cell it was carved from, plus one. Backtracking never revisits a
    distance. A shortest-path distance needs a separate BFS pass
    (see MazeAnalyzer.shortest_distances).
    """

    def run(self) -> Iterator[int]:
        self.grid.build()
        self.step_count = 0
        cells = self.grid.cells
        total = len(cells)

        current = self.choose_origin()
        self.origin = current
        cells[current].distance = 0

        stack: List[int] = [current]
        visited = 1
        logger.debug("Origin at %s", cells[current].coordinates)

        while visited < total:
            current = stack[-1]
            cell = cells[current]

            if cell.openable_neighbors(cells):
                nxt = cell.demolish_random_wall(cells, self.rng)
                stack.append(nxt)
                visited += 1
                if cells[nxt].distance == DISTANCE_UNINITIALISED:
                    cells[nxt].distance = cell.distance + 1
                current = nxt
                logger.debug("Carved into %s, visited %d/%d, distance %d",
                             cells[nxt].coordinates, visited, total, cells[nxt].distance)
            else:
                # Backtrack
                stack.pop()
                current = stack[-1]
                logger.debug("Backtracked to %s", cells[current].coordinates)

            self.step_count += 1
            yield self.progress(visited)

        self.terminus = current
        cells[self.origin].is_origin = True
        cells[self.terminus].is_exit = True
        logger.debug("Terminus at %s", cells[current].coordinates)
