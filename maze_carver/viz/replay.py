from typing import Iterator, Optional
from maze_carver.core.grid import Grid, Location, DIRECTIONS
from maze_carver.core.events import EventReader, EVT_SEED, EVT_CARVE, EVT_EXIT, EVT_BACKTRACK, EVT_RESET

class EventAdapter:
    """
    Adapts an EventReader stream to look like a Generator for a renderer.
    Applies changes to the Grid as it iterates. A reset event swaps in a
    fresh Grid, so self.grid always holds the maze currently being replayed.
    """
    def __init__(self, grid: Grid, reader: EventReader):
        self.grid = grid
        self.reader = reader

        self.start: Optional[Location] = None
        self.end: Optional[Location] = None
        self.step_count = 0

    def run(self) -> Iterator[str]:
        count = 0
        for type_code, data in self.reader.stream_events():
            count += 1

            if type_code == EVT_RESET:
                w, h = data
                self.grid = Grid(w, h)
                self.start = None
                self.end = None
                self.step_count = 0

            elif type_code == EVT_SEED:
                self.start = data
                self.grid.seed_start(data)

            elif type_code == EVT_CARVE:
                x, y, d = data
                direction = DIRECTIONS[d]
                self.grid.carve_passage((x, y), (x + direction.dx, y + direction.dy), d)
                self.step_count += 1

            elif type_code == EVT_EXIT:
                x, y, d = data
                self.grid.mark_boundary_exit((x, y), d)
                self.end = (x, y)

            elif type_code == EVT_BACKTRACK:
                self.step_count += 1

            # Yield every N events
            if count % 50 == 0:
                yield "Replay"

        yield "Done"

    def run_all(self):
        for _ in self.run():
            pass
