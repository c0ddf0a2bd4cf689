from abc import ABC, abstractmethod
from typing import Iterator
from maze_carver.core.grid import Grid

PROGRESS_INTERVAL = 100

class Generator(ABC):
    def __init__(self, grid: Grid):
        self.grid = grid
        self.step_count = 0

    @property
    @abstractmethod
    def is_complete(self) -> bool:
        pass

    @abstractmethod
    def step(self) -> bool:
        """
        Applies one unit of work in-place on self.grid.
        Returns False if there was nothing left to do.
        """
        pass

    def run(self) -> Iterator[str]:
        """
        Steps until complete, yielding a status string every PROGRESS_INTERVAL
        steps so a caller can interleave its own work.
        """
        while self.step():
            if self.step_count % PROGRESS_INTERVAL == 0:
                yield f"Step {self.step_count}"
        yield "Done"

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
