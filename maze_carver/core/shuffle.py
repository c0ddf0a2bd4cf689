import random
from typing import List, Sequence
from maze_carver.core.grid import Direction, DIRECTIONS


def shuffle_directions(directions: Sequence[Direction], rng: random.Random) -> List[Direction]:
    """
    Fisher-Yates over a copy of 'directions'.
    For count = n .. 2, swap a uniform pick from [0, count) into slot count-1.
    """
    shuffled = list(directions)
    count = len(shuffled)
    while count > 1:
        i = rng.randrange(count)
        count -= 1
        shuffled[i], shuffled[count] = shuffled[count], shuffled[i]
    return shuffled


class NeighborShuffler:
    """Binds one long-lived random source so a seeded session replays exactly."""

    def __init__(self, rng: random.Random):
        self.rng = rng

    def shuffle(self, directions: Sequence[Direction] = DIRECTIONS) -> List[Direction]:
        return shuffle_directions(directions, self.rng)
