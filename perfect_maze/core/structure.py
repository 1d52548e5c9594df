import enum
import logging
import random
import threading
from typing import Iterator, List, Optional, Tuple, Union

from perfect_maze.algo.base import Generator
from perfect_maze.algo.dfs import DepthFirstCarver
from perfect_maze.algo.prim import FrontierCarver
from perfect_maze.core.cell import Cell
from perfect_maze.core.config import MazeConfig
from perfect_maze.core.errors import ConcurrentGenerationRequested, MazeNotReady
from perfect_maze.core.events import CompletedEvent, Event, EventChannel
from perfect_maze.core.grid import Grid, Rect, WallFlags

logger = logging.getLogger(__name__)

GENERATORS = {
    "dfs": DepthFirstCarver,
    "prim": FrontierCarver,
}


class State(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


class GenerationHandle:
    """Returned by MazeStructure.generate(); the caller's end of one run."""

    def __init__(self, channel: EventChannel, thread: threading.Thread):
        self.events = channel
        self.thread = thread

    @property
    def done(self) -> bool:
        return not self.thread.is_alive()

    def stream_events(self, timeout: float = None) -> Iterator[Event]:
        return self.events.stream_events(timeout=timeout)

    def wait(self, timeout: float = None) -> CompletedEvent:
        return self.events.wait(timeout=timeout)


class MazeStructure:
    """
    Holds a grid of cells and generates a maze over it on a background
    thread. Progress and completion arrive through the handle returned by
    generate(); the read accessors refuse to answer until a run has
    completed successfully.
    """

    def __init__(self, config: MazeConfig = None, rng: random.Random = None):
        self.config = (config or MazeConfig()).validate()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self._grid = Grid(self.config.width, self.config.height)
        self.generator: Optional[Generator] = None
        self.selected_cell_index = -1

        self._state = State.IDLE
        self._lock = threading.Lock()
        self._origin: Optional[Cell] = None
        self._terminus: Optional[Cell] = None

    @property
    def state(self) -> State:
        return self._state

    def generate(self, width: int = None, height: int = None,
                 cell_size: int = None, algo: str = None) -> GenerationHandle:
        """
        Starts one asynchronous run and returns immediately.
        Raises ConcurrentGenerationRequested if a run is already in flight.
        """
        with self._lock:
            if self._state is State.RUNNING:
                raise ConcurrentGenerationRequested("A maze generation run is already in progress")
            config = self.config.merged(width=width, height=height,
                                        cell_size=cell_size, algo=algo).validate()
            self.config = config
            self._state = State.RUNNING
            self._origin = None
            self._terminus = None
            self.selected_cell_index = -1

        channel = EventChannel()
        thread = threading.Thread(target=self._do_work, args=(config, channel),
                                  name="maze-generation", daemon=True)
        thread.start()
        return GenerationHandle(channel, thread)

    def generate_blocking(self, **kwargs) -> CompletedEvent:
        return self.generate(**kwargs).wait()

    def _do_work(self, config: MazeConfig, channel: EventChannel):
        logger.info("Generating %dx%d maze with %s", config.width, config.height, config.algo)
        try:
            grid = Grid(config.width, config.height)
            self._grid = grid
            self.generator = GENERATORS[config.algo](grid, rng=self.rng)
            for percent in self.generator.run():
                channel.publish_progress(percent)

            origin = grid.cells[self.generator.origin]
            terminus = None
            if self.generator.terminus is not None:
                terminus = grid.cells[self.generator.terminus]
            logger.info("Maze complete after %d steps (origin %s, terminus %s)",
                        self.generator.step_count, origin.coordinates,
                        terminus.coordinates if terminus else None)
        except Exception as exc:
            logger.exception("Maze generation failed")
            with self._lock:
                self._state = State.IDLE
            channel.publish_completed(False, exc)
            return

        with self._lock:
            self._origin = origin
            self._terminus = terminus
            self._state = State.COMPLETED
        channel.publish_completed(True)

    def _require_completed(self):
        if self._state is not State.COMPLETED:
            raise MazeNotReady(f"Maze is not available (state: {self._state.value})")

    # Read accessors, valid once a run has completed

    @property
    def grid(self) -> Grid:
        self._require_completed()
        return self._grid

    def origin(self) -> Cell:
        self._require_completed()
        return self._origin

    def terminus(self) -> Optional[Cell]:
        """The exit cell; None for algorithms that do not choose one."""
        self._require_completed()
        return self._terminus

    def cell_at(self, row: int, col: int) -> Cell:
        self._require_completed()
        return self._grid.cell_at(row, col)

    def cells(self) -> List[Cell]:
        self._require_completed()
        return list(self._grid.cells)

    def wall_flags(self, cell: Cell) -> WallFlags:
        self._require_completed()
        return Grid.wall_flags(cell)

    def distance(self, cell: Cell) -> int:
        """Carve-order distance from the origin (-1 if never assigned)."""
        self._require_completed()
        return cell.distance

    @property
    def selected_cell(self) -> Optional[Cell]:
        self._require_completed()
        if self.selected_cell_index < 0:
            return None
        return self._grid.cells[self.selected_cell_index]

    def bounds_of(self, cell: Cell, cell_size: Union[int, Tuple[int, int]] = None) -> Rect:
        return Grid.bounds_of(cell, cell_size if cell_size is not None else self.config.cell_size)
