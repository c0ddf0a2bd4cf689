import logging
import random
from typing import List, Optional
from maze_carver.core.grid import Grid, Location
from maze_carver.core.shuffle import NeighborShuffler
from maze_carver.algo.backtracker import RecursiveBacktracker

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 10
DEFAULT_HEIGHT = 10

class MazeSession:
    """
    Owns the active Grid and its generation progress.

    One random source lives for the whole session: it picks every start
    cell and drives every shuffle, so a seeded session is reproducible
    across steps, re-inits and restarts.
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 seed: Optional[int] = None, rng: Optional[random.Random] = None,
                 event_writer=None):
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.event_writer = event_writer
        self.generator: Optional[RecursiveBacktracker] = None
        self.init(width, height)

    def init(self, width: int, height: int):
        # Grid validates dimensions before anything is replaced
        grid = Grid(width, height, event_writer=self.event_writer)
        start = (self.rng.randrange(width), 0)
        grid.seed_start(start)

        self.generator = RecursiveBacktracker(grid, start, NeighborShuffler(self.rng))
        logger.debug("Initialized %dx%d maze, start at %s", width, height, start)

    def restart(self, width: Optional[int] = None, height: Optional[int] = None):
        self.init(self.width if width is None else width,
                  self.height if height is None else height)

    def run_to_completion(self) -> Grid:
        self.generator.run_to_completion()
        return self.grid

    def step(self) -> Grid:
        """Advances one step. An exhausted maze is replaced by a fresh one of the same size first."""
        if self.generator.is_complete:
            logger.debug("Maze exhausted, starting a new one")
            self.init(self.width, self.height)
        self.generator.step()
        return self.grid

    @property
    def grid(self) -> Grid:
        return self.generator.grid

    @property
    def width(self) -> int:
        return self.generator.grid.width

    @property
    def height(self) -> int:
        return self.generator.grid.height

    @property
    def start(self) -> Location:
        return self.generator.state.start

    @property
    def end(self) -> Optional[Location]:
        return self.generator.state.end

    @property
    def found_end(self) -> bool:
        return self.generator.state.found_end

    @property
    def stack(self) -> List[Location]:
        return list(self.generator.state.stack)

    @property
    def is_complete(self) -> bool:
        return self.generator.is_complete

    @property
    def steps(self) -> int:
        return self.generator.step_count
