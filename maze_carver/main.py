import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'maze_carver' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.session import DEFAULT_WIDTH, DEFAULT_HEIGHT

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Carver: randomized depth-first backtracking mazes")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Maze Width")
    gen_parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Maze Height")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--steps", type=int, default=None, help="Advance only this many steps instead of finishing the maze")
    gen_parser.add_argument("--out", type=str, help="Output maze file path (optional)")
    gen_parser.add_argument("--compress", action="store_true", help="zlib-compress the saved cell data")
    gen_parser.add_argument("--image", type=str, help="Write a PNG of the maze")
    gen_parser.add_argument("--cell-px", type=int, default=8, help="Pixels per lattice block in the image")
    gen_parser.add_argument("--record-events", type=str, help="Save generation events to binary file")

    # Info Command
    info_parser = subparsers.add_parser("info", help="Print statistics for a saved maze")
    info_parser.add_argument("input_file", help="Path to maze file")
    info_parser.add_argument("--image", type=str, help="Write a PNG of the maze")
    info_parser.add_argument("--cell-px", type=int, default=8, help="Pixels per lattice block in the image")

    # Replay Command
    replay_parser = subparsers.add_parser("replay", help="Rebuild a maze from an event log")
    replay_parser.add_argument("event_file", help="Path to event log file")
    replay_parser.add_argument("--out", type=str, help="Output maze file path (optional)")
    replay_parser.add_argument("--image", type=str, help="Write a PNG of the replayed maze")
    replay_parser.add_argument("--cell-px", type=int, default=8, help="Pixels per lattice block in the image")

    return parser

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_carver")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        from maze_carver.core.events import EventWriter
        from maze_carver.core.grid import InvalidDimensions
        from maze_carver.session import MazeSession

        evt_writer = None
        if args.record_events:
            evt_writer = EventWriter(args.record_events)
            logger.info(f"Recording events to {args.record_events}...")

        try:
            try:
                session = MazeSession(args.width, args.height, seed=args.seed, event_writer=evt_writer)
            except InvalidDimensions as e:
                parser.error(str(e))

            logger.info(f"Generating {args.width}x{args.height} maze (seed={args.seed})...")
            if args.steps is None:
                session.run_to_completion()
            else:
                for _ in range(args.steps):
                    session.step()
        finally:
            if evt_writer:
                evt_writer.close()

        logger.info(f"Start {session.start}, end {session.end}, {session.steps} steps, complete={session.is_complete}")
        _report(session.grid, logger)

        if args.out:
            logger.info(f"Saving maze to {args.out}...")
            from maze_carver.io.serializer import MazeSerializer
            meta = {"seed": args.seed, "start": session.start, "end": session.end}
            MazeSerializer.save(session.grid, args.out, meta=meta, compress=args.compress)
            logger.info("Save complete.")

        if args.image:
            _write_image(session.grid, session.start, session.end, args, logger)

    elif args.command == "info":
        logger.info(f"Loading {args.input_file}...")
        from maze_carver.io.serializer import MazeSerializer
        grid, meta = MazeSerializer.load(args.input_file)
        logger.info(f"Loaded {grid.width}x{grid.height} maze. Meta: {meta}")
        _report(grid, logger, meta.get("start"))

        if args.image:
            _write_image(grid, meta.get("start"), meta.get("end"), args, logger)

    elif args.command == "replay":
        logger.info(f"Replaying {args.event_file}...")
        from maze_carver.core.events import EventReader
        from maze_carver.core.grid import Grid
        from maze_carver.viz.replay import EventAdapter

        with EventReader(args.event_file) as reader:
            w, h = reader.read_header()
            logger.info(f"Log Header: {w}x{h}")
            adapter = EventAdapter(Grid(w, h), reader)
            adapter.run_all()

        grid = adapter.grid
        logger.info(f"Replayed {adapter.step_count} steps, start {adapter.start}, end {adapter.end}")
        _report(grid, logger, adapter.start)

        if args.out:
            from maze_carver.io.serializer import MazeSerializer
            meta = {"start": adapter.start, "end": adapter.end}
            MazeSerializer.save(grid, args.out, meta=meta)
            logger.info(f"Saved replayed maze to {args.out}")

        if args.image:
            _write_image(grid, adapter.start, adapter.end, args, logger)

    return 0

def _report(grid, logger, start=None):
    from maze_carver.core.stats import MazeStats
    stats = MazeStats.calculate_stats(grid)
    logger.info(f"Stats: {stats}")
    if start is not None:
        logger.debug(f"Perfect maze: {MazeStats.is_perfect(grid, tuple(start))}")

def _write_image(grid, start, end, args, logger):
    from maze_carver.viz.raster import RasterRenderer
    RasterRenderer(grid, start=start, end=end, cell_px=args.cell_px).save(args.image)
    logger.info(f"Wrote image to {args.image}")

if __name__ == "__main__":
    sys.exit(main())
