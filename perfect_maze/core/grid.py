import logging
import numbers
from collections import namedtuple
from typing import Iterator, List, Tuple, Union

from perfect_maze.core.cell import (
    Cell, NORTH, EAST, SOUTH, WEST, DIRECTIONS, OPPOSITE,
)
from perfect_maze.core.errors import OutOfRangeCoordinate

logger = logging.getLogger(__name__)

INVALID_INDEX = -1

WallFlags = namedtuple('WallFlags', ['north', 'south', 'east', 'west'])
Rect = namedtuple('Rect', ['x', 'y', 'width', 'height'])


class Grid:
    __slots__ = ('width', 'height', 'cells')

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cells: List[Cell] = []
        self.build()

    def __len__(self):
        return len(self.cells)

    def build(self, width: int = None, height: int = None):
        """
        Discards every existing cell and allocates a fresh width x height
        arena with all walls closed, then links each cell to its neighbours.
        """
        if width is not None:
            self.width = width
        if height is not None:
            self.height = height
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {self.width}x{self.height}")

        self.cells = [Cell(i, i // self.width, i % self.width)
                      for i in range(self.width * self.height)]

        for cell in self.cells:
            row, col = cell.row, cell.col
            if row > 0:
                cell.neighbors[NORTH] = self.coordinate_to_index(row - 1, col)
            if row < self.height - 1:
                cell.neighbors[SOUTH] = self.coordinate_to_index(row + 1, col)
            if col < self.width - 1:
                cell.neighbors[EAST] = self.coordinate_to_index(row, col + 1)
            if col > 0:
                cell.neighbors[WEST] = self.coordinate_to_index(row, col - 1)

        logger.debug("Built %dx%d grid (%d cells)", self.width, self.height, len(self.cells))

    def index_to_coordinate(self, index: int) -> Tuple[int, int]:
        if not 0 <= index < self.width * self.height:
            raise OutOfRangeCoordinate(f"Index {index} out of range (maximum {self.width * self.height - 1})")
        return index // self.width, index % self.width

    def coordinate_to_index(self, row: int, col: int) -> int:
        """
        Converts (row, col) to a flat index. Out-of-range input is logged
        and answered with INVALID_INDEX instead of raising.
        """
        if not 0 <= row < self.height:
            logger.warning("Row %d out of range (maximum %d)", row, self.height - 1)
            return INVALID_INDEX
        if not 0 <= col < self.width:
            logger.warning("Col %d out of range (maximum %d)", col, self.width - 1)
            return INVALID_INDEX
        return row * self.width + col

    def cell_at(self, row: int, col: int) -> Cell:
        idx = self.coordinate_to_index(row, col)
        if idx == INVALID_INDEX:
            raise OutOfRangeCoordinate(f"Coordinate ({row}, {col}) out of bounds")
        return self.cells[idx]

    @staticmethod
    def wall_flags(cell: Cell) -> WallFlags:
        return WallFlags(cell.north_wall, cell.south_wall, cell.east_wall, cell.west_wall)

    @staticmethod
    def bounds_of(cell: Cell, cell_size: Union[int, Tuple[int, int]]) -> Rect:
        """Pixel rectangle covered by a cell for a given cell size."""
        if isinstance(cell_size, numbers.Integral):
            cw = ch = cell_size
        else:
            cw, ch = cell_size
        return Rect(cell.col * cw, cell.row * ch, cw, ch)

    def neighbors(self, cell: Cell) -> Iterator[Tuple[Cell, int]]:
        """
        Yields (neighbour, direction_to_neighbour) for all valid grid neighbours.
        Does NOT check walls.
        """
        for dir_bit in DIRECTIONS:
            n_idx = cell.neighbors[dir_bit]
            if n_idx is not None:
                yield self.cells[n_idx], dir_bit

    def open_neighbors(self, cell: Cell) -> Iterator[Cell]:
        """Yields neighbours that are NOT blocked by a wall."""
        for other, dir_bit in self.neighbors(cell):
            if not cell.has_wall(dir_bit):
                yield other

    def is_symmetric(self) -> bool:
        """Checks that every shared wall has the same state on both sides."""
        for cell in self.cells:
            for other, dir_bit in self.neighbors(cell):
                if cell.has_wall(dir_bit) != other.has_wall(OPPOSITE[dir_bit]):
                    return False
        return True
