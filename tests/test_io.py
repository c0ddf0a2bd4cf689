import unittest
import sys
import os
import shutil
import struct
import tempfile

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.io.serializer import MazeSerializer
from maze_carver.session import MazeSession

class TestIO(unittest.TestCase):
    def setUp(self):
        self.out_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.out_dir, ignore_errors=True)

    def test_save_load_with_meta(self):
        session = MazeSession(10, 8, seed=3)
        session.run_to_completion()

        path = os.path.join(self.out_dir, "raw.maze")
        MazeSerializer.save(session.grid, path, meta={"seed": 3, "start": session.start, "end": session.end})

        grid2, meta = MazeSerializer.load(path)
        self.assertEqual(session.grid.cells.tobytes(), grid2.cells.tobytes())
        self.assertEqual((grid2.width, grid2.height), (10, 8))
        self.assertEqual(meta["seed"], 3)
        self.assertEqual(meta["start"], session.start)
        self.assertEqual(meta["end"], session.end)

    def test_compressed_is_smaller(self):
        session = MazeSession(100, 100, seed=1)
        session.run_to_completion()
        raw = os.path.join(self.out_dir, "raw.maze")
        comp = os.path.join(self.out_dir, "comp.maze")
        MazeSerializer.save(session.grid, raw)
        MazeSerializer.save(session.grid, comp, compress=True)

        self.assertLess(os.path.getsize(comp), os.path.getsize(raw))
        grid2, meta = MazeSerializer.load(comp)
        self.assertEqual(session.grid.cells.tobytes(), grid2.cells.tobytes())
        self.assertEqual(meta, {})

    def test_bad_magic(self):
        path = os.path.join(self.out_dir, "bad.maze")
        with open(path, "wb") as f:
            f.write(b"NOPE" + b"\x00" * 20)
        with self.assertRaises(ValueError):
            MazeSerializer.load(path)

    def test_corrupt_compressed(self):
        path = os.path.join(self.out_dir, "corrupt.maze")
        payload = b"notzlibdata"
        with open(path, "wb") as f:
            f.write(MazeSerializer.MAGIC)
            f.write(struct.pack("<BB", MazeSerializer.VERSION, MazeSerializer.FLAG_COMPRESSED))
            f.write(struct.pack("<II", 2, 2))
            f.write(struct.pack("<H", 2))
            f.write(b"{}")
            f.write(struct.pack("<I", len(payload)))
            f.write(payload)
        with self.assertRaises(ValueError):
            MazeSerializer.load(path)

    def test_truncated(self):
        session = MazeSession(5, 5, seed=0)
        path = os.path.join(self.out_dir, "cut.maze")
        MazeSerializer.save(session.grid, path)
        with open(path, "rb") as f:
            data = f.read()
        with open(path, "wb") as f:
            f.write(data[:-3])
        with self.assertRaises(ValueError):
            MazeSerializer.load(path)

if __name__ == '__main__':
    unittest.main()
