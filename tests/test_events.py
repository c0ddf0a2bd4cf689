import unittest
import sys
import os
import shutil
import tempfile

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.core.events import EventWriter, EventReader, MAX_COORD, EVT_SEED, EVT_CARVE, EVT_EXIT, EVT_BACKTRACK, EVT_RESET
from maze_carver.core.grid import Grid
from maze_carver.session import MazeSession
from maze_carver.viz.replay import EventAdapter

class TestEvents(unittest.TestCase):
    def setUp(self):
        self.out_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.out_dir, "gen.events")

    def tearDown(self):
        shutil.rmtree(self.out_dir, ignore_errors=True)

    def test_event_stream(self):
        with EventWriter(self.path) as writer:
            session = MazeSession(4, 3, seed=8, event_writer=writer)
            session.run_to_completion()

        with EventReader(self.path) as reader:
            self.assertEqual(reader.read_header(), (4, 3))
            events = list(reader.stream_events())

        types = [t for t, _ in events]
        self.assertEqual(events[0], (EVT_SEED, session.start))
        self.assertEqual(types.count(EVT_CARVE), 4 * 3 - 1)
        self.assertEqual(types.count(EVT_BACKTRACK), 4 * 3)
        self.assertEqual(types.count(EVT_EXIT), 1)
        exit_event = events[types.index(EVT_EXIT)]
        self.assertEqual(exit_event[1][:2], session.end)

    def test_replay_matches_generation(self):
        with EventWriter(self.path) as writer:
            session = MazeSession(9, 7, seed=21, event_writer=writer)
            session.run_to_completion()

        with EventReader(self.path) as reader:
            w, h = reader.read_header()
            adapter = EventAdapter(Grid(w, h), reader)
            statuses = list(adapter.run())

        self.assertEqual(statuses[-1], "Done")
        self.assertEqual(adapter.grid.cells.tobytes(), session.grid.cells.tobytes())
        self.assertEqual(adapter.start, session.start)
        self.assertEqual(adapter.end, session.end)
        self.assertEqual(adapter.step_count, session.steps)

    def test_reinit_writes_reset(self):
        with EventWriter(self.path) as writer:
            session = MazeSession(2, 2, seed=2, event_writer=writer)
            session.run_to_completion()
            session.step()  # exhausted: starts a new maze
            session.restart(3, 2)
            session.run_to_completion()

        with EventReader(self.path) as reader:
            w, h = reader.read_header()
            events = list(reader.stream_events())
        resets = [data for t, data in events if t == EVT_RESET]
        self.assertEqual(resets, [(2, 2), (3, 2)])

        with EventReader(self.path) as reader:
            w, h = reader.read_header()
            adapter = EventAdapter(Grid(w, h), reader)
            adapter.run_all()
        self.assertEqual(adapter.grid.cells.tobytes(), session.grid.cells.tobytes())
        self.assertEqual(adapter.start, session.start)

    def test_oversized_grid_rejected_before_writing(self):
        with EventWriter(self.path) as writer:
            with self.assertRaises(ValueError):
                Grid(MAX_COORD + 2, 1, event_writer=writer)
        self.assertEqual(os.path.getsize(self.path), 0)

        # The largest loggable width still works
        with EventWriter(self.path) as writer:
            grid = Grid(MAX_COORD + 1, 1, event_writer=writer)
            grid.seed_start((MAX_COORD, 0))
        with EventReader(self.path) as reader:
            self.assertEqual(reader.read_header(), (MAX_COORD + 1, 1))
            self.assertEqual(list(reader.stream_events()), [(EVT_SEED, (MAX_COORD, 0))])

    def test_invalid_header(self):
        with open(self.path, "wb") as f:
            f.write(b"NOTALOG" + b"\x00" * 8)
        with EventReader(self.path) as reader:
            with self.assertRaises(ValueError):
                reader.read_header()

    def test_unknown_event(self):
        with EventWriter(self.path) as writer:
            writer.write_header(2, 2)
            writer.file.write(b"\x7f")
        with EventReader(self.path) as reader:
            reader.read_header()
            with self.assertRaises(ValueError):
                list(reader.stream_events())

if __name__ == '__main__':
    unittest.main()
