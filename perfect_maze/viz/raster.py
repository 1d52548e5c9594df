import cv2
import numpy as np

from perfect_maze.core.structure import MazeStructure

# RGB
COLOR_BG = (255, 255, 255)
COLOR_WALL = (0, 0, 255)          # Blue
COLOR_ORIGIN = (173, 216, 230)    # Light blue
COLOR_TERMINUS = (255, 165, 0)    # Orange
COLOR_SELECTED = (255, 255, 0)    # Yellow


def rasterize(maze: MazeStructure, cell_size: int = None) -> np.ndarray:
    """
    Draws the completed maze into an (H, W, 3) uint8 RGB image.
    Each cell draws its own walls one pixel thick along the inside of its
    bounding box, in a colour picked from its role.
    """
    cell_size = cell_size if cell_size is not None else maze.config.cell_size
    grid = maze.grid
    image = np.empty((grid.height * cell_size, grid.width * cell_size, 3), dtype=np.uint8)
    image[:] = COLOR_BG

    origin = maze.origin()
    terminus = maze.terminus()
    selected = maze.selected_cell

    for cell in maze.cells():
        if cell is origin:
            color = COLOR_ORIGIN
        elif cell is terminus:
            color = COLOR_TERMINUS
        elif cell is selected:
            color = COLOR_SELECTED
        else:
            color = COLOR_WALL

        x, y, w, h = maze.bounds_of(cell, cell_size)
        walls = maze.wall_flags(cell)
        if walls.north:
            image[y, x:x + w] = color
        if walls.south:
            image[y + h - 1, x:x + w] = color
        if walls.west:
            image[y:y + h, x] = color
        if walls.east:
            image[y:y + h, x + w - 1] = color

    return image


def save_image(image: np.ndarray, path: str):
    # OpenCV expects BGR
    if not cv2.imwrite(path, cv2.cvtColor(image, cv2.COLOR_RGB2BGR)):
        raise IOError(f"Could not write image to {path}")
