import logging
from typing import List, Optional
from maze_carver.core.grid import Grid, Location, EAST, NORTH, SOUTH, WEST, opposite
from maze_carver.core.shuffle import NeighborShuffler
from maze_carver.algo.base import Generator

logger = logging.getLogger(__name__)

class GenerationState:
    """Backtracking stack plus start/end bookkeeping. Last stack entry is the frontier."""

    __slots__ = ('stack', 'start', 'end', 'found_end')

    def __init__(self, start: Location):
        self.stack: List[Location] = [start]
        self.start = start
        self.end: Optional[Location] = None
        self.found_end = False

class RecursiveBacktracker(Generator):
    """
    Randomized depth-first backtracking.

    Each step either carves into exactly one new cell (push) or retires a
    dead end (pop), so a w x h grid completes in at most 2*w*h steps.
    The exit is the first dead end, in carving order, found on the boundary.
    """

    def __init__(self, grid: Grid, start: Location, shuffler: NeighborShuffler):
        super().__init__(grid)
        self.shuffler = shuffler
        self.state = GenerationState(start)

    @property
    def is_complete(self) -> bool:
        return not self.state.stack

    def make_connection(self, loc: Location) -> Optional[Location]:
        """Carves to the first openable neighbor in shuffled order, or returns None."""
        cx, cy = loc
        for d in self.shuffler.shuffle():
            nx, ny = cx + d.dx, cy + d.dy
            if self.grid.is_openable(nx, ny, opposite(d.index)):
                self.grid.carve_passage(loc, (nx, ny), d.index)
                return (nx, ny)
        return None

    def try_mark_exit(self, loc: Location) -> bool:
        """
        Opens the boundary-facing side of loc if it sits on an edge.
        Edge precedence is fixed: west, east, south, north. Corners use the
        first match only.
        """
        x, y = loc
        if x == 0:
            side = WEST
        elif x == self.grid.width - 1:
            side = EAST
        elif y == 0:
            side = SOUTH
        elif y == self.grid.height - 1:
            side = NORTH
        else:
            return False

        self.grid.mark_boundary_exit(loc, side.index)
        self.state.end = loc
        return True

    def step(self) -> bool:
        stack = self.state.stack
        if not stack:
            return False

        top = stack[-1]
        nxt = self.make_connection(top)
        if nxt is not None:
            stack.append(nxt)
        else:
            # Dead end
            if not self.state.found_end:
                self.state.found_end = self.try_mark_exit(top)
                if self.state.found_end:
                    logger.debug("Exit marked at %s after %d steps", top, self.step_count + 1)
            stack.pop()
            if self.grid.event_writer:
                self.grid.event_writer.log_backtrack(*top)

        self.step_count += 1
        return True

    def run_to_completion(self):
        self.run_all()
        logger.debug("Maze complete in %d steps, exit at %s", self.step_count, self.state.end)
