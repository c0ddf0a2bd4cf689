from collections import deque
from typing import Set
from maze_carver.core.grid import Grid, Location, EAST, NORTH, opposite

class MazeStats:
    @staticmethod
    def count_passages(grid: Grid) -> int:
        """Number of interior edges open on both sides. Boundary openings are not passages."""
        passages = 0
        for y in range(grid.height):
            for x in range(grid.width):
                # Only look East and North so every edge is counted once
                if x + 1 < grid.width and grid.is_open(x, y, EAST.index) \
                        and grid.is_open(x + 1, y, opposite(EAST.index)):
                    passages += 1
                if y + 1 < grid.height and grid.is_open(x, y, NORTH.index) \
                        and grid.is_open(x, y + 1, opposite(NORTH.index)):
                    passages += 1
        return passages

    @staticmethod
    def reachable_from(grid: Grid, start: Location) -> Set[Location]:
        """Flood fill over mutually open sides."""
        seen = {start}
        queue = deque([start])
        while queue:
            x, y = queue.popleft()
            for nxt in grid.open_neighbors(x, y):
                if nxt not in seen:
                    seen.add(nxt)
                    queue.append(nxt)
        return seen

    @staticmethod
    def is_perfect(grid: Grid, start: Location) -> bool:
        """Connected from start, and a tree: passages == in_maze - 1."""
        in_maze = {
            (x, y)
            for y in range(grid.height)
            for x in range(grid.width)
            if grid.is_in_maze(x, y)
        }
        if start not in in_maze:
            return False
        if MazeStats.reachable_from(grid, start) != in_maze:
            return False
        return MazeStats.count_passages(grid) == len(in_maze) - 1

    @staticmethod
    def calculate_stats(grid: Grid):
        in_maze = 0
        dead_ends = 0
        corridors = 0  # 2 passages
        junctions = 0  # 3+ passages

        for y in range(grid.height):
            for x in range(grid.width):
                if not grid.is_in_maze(x, y):
                    continue
                in_maze += 1
                degree = sum(1 for _ in grid.open_neighbors(x, y))
                if degree <= 1: dead_ends += 1
                elif degree == 2: corridors += 1
                else: junctions += 1

        total = grid.width * grid.height
        return {
            "in_maze": in_maze,
            "passages": MazeStats.count_passages(grid),
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
        }
