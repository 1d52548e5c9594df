class MazeError(Exception):
    """Base class for everything the maze core raises."""


class OutOfRangeCoordinate(MazeError, IndexError):
    pass


class NoOpenableWalls(MazeError, RuntimeError):
    """demolish_random_wall() was called on a cell with no closed neighbours."""


class ConcurrentGenerationRequested(MazeError, RuntimeError):
    """A new run was requested while another one is still in flight."""


class MazeNotReady(MazeError, RuntimeError):
    """The maze was read before a generation run completed successfully."""
