import sys
import os
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.session import MazeSession
from maze_carver.core.stats import MazeStats

def benchmark_size(width: int, height: int):
    print(f"\n--- Benchmarking {width}x{height} ({width*height/1e6:.2f}M cells) ---")

    # 1. Init
    start_time = time.time()
    session = MazeSession(width, height, seed=42)
    print(f"Grid Init: {time.time() - start_time:.4f}s")
    print(f"Memory (Grid Data): ~{(width * height) / (1024 * 1024):.2f} MB")

    # 2. Generation
    print("Generating...")
    gen_start = time.time()
    session.run_to_completion()
    gen_time = time.time() - gen_start
    print(f"Generation Time: {gen_time:.4f}s ({session.steps} steps)")
    print(f"Speed: {(width*height)/gen_time:,.0f} cells/sec")
    print(f"Start {session.start} -> End {session.end}")

    # 3. Stats
    stats_start = time.time()
    stats = MazeStats.calculate_stats(session.grid)
    print(f"Stats Time: {time.time() - stats_start:.4f}s")
    print(f"Dead ends: {stats['dead_ends']} ({stats['dead_end_percent']:.1f}%)")

def run_suite():
    sizes = [
        (10, 10),
        (100, 100),
        (500, 500),
        (1000, 1000),
    ]

    for w, h in sizes:
        benchmark_size(w, h)

if __name__ == "__main__":
    run_suite()
