import cv2
import numpy as np
from typing import Optional
from maze_carver.core.grid import Grid, Location, EAST, NORTH, SOUTH, WEST

class RasterRenderer:
    """
    Static image of a Grid. The maze is laid out on a (2h+1) x (2w+1) block
    lattice: odd/odd blocks are cells, blocks between them are walls that
    turn to floor where a side is open. North is at the top of the image.
    """
    COLOR_WALL = (10, 10, 10)
    COLOR_UNVISITED = (60, 60, 60)
    COLOR_FLOOR = (200, 200, 200)
    COLOR_START = (0, 255, 127)
    COLOR_END = (255, 69, 0)

    def __init__(self, grid: Grid, start: Optional[Location] = None, end: Optional[Location] = None, cell_px: int = 8):
        if cell_px <= 0:
            raise ValueError(f"cell_px must be positive, got {cell_px}")
        self.grid = grid
        self.start = start
        self.end = end
        self.cell_px = cell_px

    def block_of(self, x: int, y: int):
        """(row, col) of a cell's block; rows are flipped so y grows upwards."""
        return 2 * (self.grid.height - 1 - y) + 1, 2 * x + 1

    def render(self) -> np.ndarray:
        grid = self.grid
        rows, cols = 2 * grid.height + 1, 2 * grid.width + 1
        img = np.empty((rows, cols, 3), dtype=np.uint8)
        img[:] = self.COLOR_WALL

        for y in range(grid.height):
            for x in range(grid.width):
                r, c = self.block_of(x, y)
                if not grid.is_in_maze(x, y):
                    img[r, c] = self.COLOR_UNVISITED
                    continue
                img[r, c] = self.COLOR_FLOOR
                if grid.is_open(x, y, EAST.index): img[r, c + 1] = self.COLOR_FLOOR
                if grid.is_open(x, y, WEST.index): img[r, c - 1] = self.COLOR_FLOOR
                # Image rows run southwards
                if grid.is_open(x, y, NORTH.index): img[r - 1, c] = self.COLOR_FLOOR
                if grid.is_open(x, y, SOUTH.index): img[r + 1, c] = self.COLOR_FLOOR

        if self.start is not None:
            img[self.block_of(*self.start)] = self.COLOR_START
        if self.end is not None:
            img[self.block_of(*self.end)] = self.COLOR_END

        # Scale each block up to cell_px x cell_px pixels
        return np.repeat(np.repeat(img, self.cell_px, axis=0), self.cell_px, axis=1)

    def save(self, path: str) -> np.ndarray:
        frame = self.render()
        # OpenCV expects BGR
        if not cv2.imwrite(path, cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)):
            raise IOError(f"Could not write image to {path}")
        return frame
