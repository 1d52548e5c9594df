import random
from typing import Dict, List, Optional, Sequence

from perfect_maze.core.errors import NoOpenableWalls

# Bitmask Constants
NORTH = 0b0001
EAST  = 0b0010
SOUTH = 0b0100
WEST  = 0b1000

# All walls present by default (N|E|S|W) = 15
ALL_WALLS = NORTH | EAST | SOUTH | WEST

# Fixed evaluation order. Randomness is applied by the caller.
DIRECTIONS = (NORTH, EAST, SOUTH, WEST)
OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}

DISTANCE_UNINITIALISED = -1


class Cell:
    """
    One grid unit. Neighbours are stored as indices into the owning grid's
    flat cell list, so cells never hold references to each other.
    """

    __slots__ = ('index', 'row', 'col', 'walls', 'neighbors',
                 'distance', 'is_origin', 'is_exit')

    def __init__(self, index: int, row: int, col: int):
        self.index = index
        self.row = row
        self.col = col
        self.walls = ALL_WALLS
        # direction bit -> neighbour index (None at the grid boundary)
        self.neighbors: Dict[int, Optional[int]] = {d: None for d in DIRECTIONS}
        self.distance = DISTANCE_UNINITIALISED
        self.is_origin = False
        self.is_exit = False

    def __repr__(self):
        return f"Cell(row={self.row}, col={self.col}, walls={self.walls:04b})"

    @property
    def coordinates(self):
        return self.row, self.col

    def has_wall(self, dir_bit: int) -> bool:
        return (self.walls & dir_bit) != 0

    @property
    def north_wall(self) -> bool:
        return self.has_wall(NORTH)

    @property
    def south_wall(self) -> bool:
        return self.has_wall(SOUTH)

    @property
    def east_wall(self) -> bool:
        return self.has_wall(EAST)

    @property
    def west_wall(self) -> bool:
        return self.has_wall(WEST)

    @property
    def is_intact(self) -> bool:
        """True while no wall of this cell has been demolished."""
        return self.walls == ALL_WALLS

    @property
    def open_wall_count(self) -> int:
        return sum(1 for d in DIRECTIONS if not self.walls & d)

    def direction_to(self, other_index: int) -> Optional[int]:
        for dir_bit in DIRECTIONS:
            if self.neighbors[dir_bit] == other_index:
                return dir_bit
        return None

    def openable_neighbors(self, cells: Sequence["Cell"]) -> List[int]:
        """
        Returns the indices of neighbours that can still be carved into,
        in N, E, S, W order.

        A neighbour qualifies when the shared wall is closed on both sides
        and the neighbour itself has never been carved into.
        """
        result = []
        for dir_bit in DIRECTIONS:
            n_idx = self.neighbors[dir_bit]
            if n_idx is None:
                continue
            other = cells[n_idx]
            if self.has_wall(dir_bit) and other.has_wall(OPPOSITE[dir_bit]) and other.is_intact:
                result.append(n_idx)
        return result

    def demolish_random_wall(self, cells: Sequence["Cell"], rng: random.Random) -> int:
        """
        Opens the wall towards one randomly chosen openable neighbour and
        returns that neighbour's index.
        """
        candidates = self.openable_neighbors(cells)
        if not candidates:
            raise NoOpenableWalls(f"Cell ({self.row}, {self.col}) has no openable walls")
        chosen = rng.choice(candidates)
        self.demolish_wall_between(cells, chosen)
        return chosen

    def demolish_wall_between(self, cells: Sequence["Cell"], other_index: int):
        """Removes the wall shared with an adjacent cell, on both sides."""
        dir_bit = self.direction_to(other_index)
        if dir_bit is None:
            raise ValueError(f"Cell {other_index} is not adjacent to ({self.row}, {self.col})")

        # Remove wall from this cell
        self.walls &= ~dir_bit
        # Remove opposite wall from the neighbour
        cells[other_index].walls &= ~OPPOSITE[dir_bit]
