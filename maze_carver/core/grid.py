import operator
from array import array
from collections import namedtuple
from typing import Iterator, Tuple

Location = Tuple[int, int]

# (dx, dy, index). Index order is significant: opposite(i) == 3 - i.
Direction = namedtuple("Direction", ["dx", "dy", "index"])

EAST = Direction(1, 0, 0)
NORTH = Direction(0, 1, 1)
SOUTH = Direction(0, -1, 2)
WEST = Direction(-1, 0, 3)

DIRECTIONS = (EAST, NORTH, SOUTH, WEST)

# Read-only snapshot handed to renderers
Cell = namedtuple("Cell", ["in_maze", "open_sides"])


def opposite(index: int) -> int:
    return 3 - index


class InvalidDimensions(ValueError):
    """Raised when a grid is requested with a non-positive width or height."""


class Grid:
    # Side bits are 1 << direction index; set means the side is open
    OPEN_SOUTH = 1 << SOUTH.index

    # Flags
    IN_MAZE = 0b00010000

    __slots__ = ('width', 'height', 'cells', 'event_writer')

    def __init__(self, width: int, height: int, event_writer=None):
        if isinstance(width, bool) or isinstance(height, bool):
            raise InvalidDimensions(f"Grid size must be integral, got {width!r}x{height!r}")
        try:
            width, height = operator.index(width), operator.index(height)
        except TypeError:
            raise InvalidDimensions(f"Grid size must be integral, got {width!r}x{height!r}") from None
        if width <= 0 or height <= 0:
            raise InvalidDimensions(f"Grid size must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.event_writer = event_writer
        # Every cell starts outside the maze with all sides closed (value 0)
        # using 'B' (unsigned char) -> 1 byte per cell
        self.cells = array('B', [0] * (width * height))

        if self.event_writer:
            self.event_writer.write_header(width, height)

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_openable(self, x: int, y: int, direction: int) -> bool:
        """
        True if (x, y) can join the maze through its side 'direction':
        in bounds, not yet in the maze, and that side still closed.
        """
        if not self.in_bounds(x, y):
            return False
        val = self.cells[y * self.width + x]
        return not (val & self.IN_MAZE) and not (val & (1 << direction))

    def carve_passage(self, from_loc: Location, to_loc: Location, direction: int):
        """
        Opens 'direction' on from_loc and the opposite side on to_loc, then
        pulls to_loc into the maze. No bounds checks: callers must have
        tested is_openable first.
        """
        fx, fy = from_loc
        tx, ty = to_loc
        to_idx = ty * self.width + tx

        self.cells[to_idx] |= 1 << opposite(direction)
        self.cells[fy * self.width + fx] |= 1 << direction
        self.cells[to_idx] |= self.IN_MAZE

        if self.event_writer:
            self.event_writer.log_carve(fx, fy, direction)

    def mark_boundary_exit(self, loc: Location, direction: int):
        """Opens a single side of loc. Used for the exit, which faces outside the grid."""
        x, y = loc
        self.cells[y * self.width + x] |= 1 << direction

        if self.event_writer:
            self.event_writer.log_exit(x, y, direction)

    def seed_start(self, loc: Location):
        # The start is always entered from below
        x, y = loc
        idx = self.get_index(x, y)
        self.cells[idx] = self.IN_MAZE | self.OPEN_SOUTH

        if self.event_writer:
            self.event_writer.log_seed(x, y)

    def is_in_maze(self, x: int, y: int) -> bool:
        return (self.cells[y * self.width + x] & self.IN_MAZE) != 0

    def is_open(self, x: int, y: int, direction: int) -> bool:
        return (self.cells[y * self.width + x] & (1 << direction)) != 0

    def cell_at(self, x: int, y: int) -> Cell:
        val = self.cells[self.get_index(x, y)]
        return Cell(
            in_maze=bool(val & self.IN_MAZE),
            open_sides=tuple(bool(val & (1 << d.index)) for d in DIRECTIONS),
        )

    def neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int, Direction]]:
        """
        Yields (nx, ny, direction_to_neighbor) for all in-bounds neighbors.
        Does NOT check sides.
        """
        for d in DIRECTIONS:
            nx, ny = x + d.dx, y + d.dy
            if self.in_bounds(nx, ny):
                yield (nx, ny, d)

    def open_neighbors(self, x: int, y: int) -> Iterator[Location]:
        """
        Yields (nx, ny) for neighbors joined to (x, y) by a passage open on both sides.
        Boundary openings (start, exit) lead nowhere and are skipped.
        """
        val = self.cells[y * self.width + x]
        for nx, ny, d in self.neighbors(x, y):
            if val & (1 << d.index) and self.is_open(nx, ny, opposite(d.index)):
                yield (nx, ny)
