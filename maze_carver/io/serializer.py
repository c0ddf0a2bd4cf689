import struct
import json
import zlib
from typing import Dict, Any, Tuple
from array import array
from maze_carver.core.grid import Grid

class MazeSerializer:
    MAGIC = b"MZCV"
    VERSION = 1

    # Flags
    FLAG_COMPRESSED = 1

    @staticmethod
    def save(grid: Grid, filepath: str, meta: Dict[str, Any] = None, compress=False):
        """
        Saves the maze to a binary file.
        Format:
        - MAGIC (4 bytes)
        - VERSION (1 byte)
        - FLAGS (1 byte)
        - WIDTH (4 bytes)
        - HEIGHT (4 bytes)
        - META_LEN (2 bytes)
        - META_JSON (META_LEN bytes)
        - DATA_LEN (4 bytes)
        - DATA (compressed or raw)
        """
        if meta is None:
            meta = {}

        flags = 0
        if compress:
            flags |= MazeSerializer.FLAG_COMPRESSED

        meta_bytes = json.dumps(meta).encode('utf-8')

        data = grid.cells.tobytes()
        if compress:
            data = zlib.compress(data)

        with open(filepath, "wb") as f:
            f.write(MazeSerializer.MAGIC)
            f.write(struct.pack("<BB", MazeSerializer.VERSION, flags))
            f.write(struct.pack("<II", grid.width, grid.height))
            f.write(struct.pack("<H", len(meta_bytes)))
            f.write(meta_bytes)
            f.write(struct.pack("<I", len(data)))
            f.write(data)

    @staticmethod
    def load(filepath: str) -> Tuple[Grid, Dict[str, Any]]:
        with open(filepath, "rb") as f:
            if f.read(4) != MazeSerializer.MAGIC:
                raise ValueError("Invalid file format")

            version, flags = MazeSerializer._unpack(f, "<BB")
            if version != MazeSerializer.VERSION:
                raise ValueError(f"Unsupported maze file version {version}")

            width, height = MazeSerializer._unpack(f, "<II")
            (meta_len,) = MazeSerializer._unpack(f, "<H")
            meta_bytes = f.read(meta_len)
            if len(meta_bytes) != meta_len:
                raise ValueError("Truncated maze metadata")
            meta = json.loads(meta_bytes.decode('utf-8'))

            # JSON has no tuples; hand locations back as (x, y)
            for key in ("start", "end"):
                if meta.get(key) is not None:
                    meta[key] = tuple(meta[key])

            grid = Grid(width, height)

            (data_len,) = MazeSerializer._unpack(f, "<I")
            data = f.read(data_len)
            if len(data) != data_len:
                raise ValueError("Truncated maze data")
            if flags & MazeSerializer.FLAG_COMPRESSED:
                try:
                    data = zlib.decompress(data)
                except zlib.error as e:
                    raise ValueError(f"Corrupt compressed maze data: {e}") from e
            if len(data) != width * height:
                raise ValueError(f"Cell data size {len(data)} does not match {width}x{height}")

            # Replace cells completely
            grid.cells = array('B', data)

            return grid, meta

    @staticmethod
    def _unpack(f, fmt: str):
        size = struct.calcsize(fmt)
        raw = f.read(size)
        if len(raw) != size:
            raise ValueError("Truncated maze file")
        return struct.unpack(fmt, raw)
