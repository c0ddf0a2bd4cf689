import struct
from typing import Iterator, Tuple

MAGIC = b"CARVLOG"
MAX_COORD = 0xFFFF

# Event Types
EVT_SEED = 0x01
EVT_CARVE = 0x03
EVT_EXIT = 0x04
EVT_BACKTRACK = 0x05
# A repeated header inside the stream: the session started a new maze
EVT_RESET = MAGIC[0]

class EventWriter:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "wb")

    def write_header(self, width: int, height: int):
        # Records pack coordinates as 'H'; refuse before anything hits the file
        if width - 1 > MAX_COORD or height - 1 > MAX_COORD:
            raise ValueError(f"Event log coordinates are capped at {MAX_COORD}, got a {width}x{height} grid")
        # Header: Magic "CARVLOG" + Width (4b) + Height (4b)
        self.file.write(MAGIC)
        self.file.write(struct.pack(">II", width, height))

    def log_seed(self, x: int, y: int):
        # 1 byte type + 2b X + 2b Y. 'H' caps coordinates at 65535.
        self.file.write(struct.pack(">BHH", EVT_SEED, x, y))

    def log_carve(self, x: int, y: int, direction: int):
        # 1 byte type + 2b X + 2b Y + 1b Dir
        self.file.write(struct.pack(">BHHB", EVT_CARVE, x, y, direction))

    def log_exit(self, x: int, y: int, direction: int):
        self.file.write(struct.pack(">BHHB", EVT_EXIT, x, y, direction))

    def log_backtrack(self, x: int, y: int):
        self.file.write(struct.pack(">BHH", EVT_BACKTRACK, x, y))

    def close(self):
        if self.file:
            self.file.close()
            self.file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

class EventReader:
    # Payload layout per event type
    PAYLOADS = {
        EVT_SEED: ">HH",
        EVT_CARVE: ">HHB",
        EVT_EXIT: ">HHB",
        EVT_BACKTRACK: ">HH",
    }

    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "rb")
        self.width = 0
        self.height = 0

    def read_header(self) -> Tuple[int, int]:
        magic = self.file.read(len(MAGIC))
        if magic != MAGIC:
            raise ValueError("Invalid event log file")
        return self._read_dims()

    def _read_dims(self) -> Tuple[int, int]:
        data = self.file.read(8)
        if len(data) != 8:
            raise ValueError("Truncated event log header")
        self.width, self.height = struct.unpack(">II", data)
        return self.width, self.height

    def stream_events(self) -> Iterator[Tuple[int, Tuple]]:
        while True:
            type_byte = self.file.read(1)
            if not type_byte:
                break

            type_code = ord(type_byte)

            if type_code == EVT_RESET:
                if self.file.read(len(MAGIC) - 1) != MAGIC[1:]:
                    raise ValueError("Corrupt header inside event stream")
                yield (type_code, self._read_dims())
                continue

            fmt = self.PAYLOADS.get(type_code)
            if fmt is None:
                raise ValueError(f"Unknown event type 0x{type_code:02x}")

            size = struct.calcsize(fmt)
            data = self.file.read(size)
            if len(data) != size:
                raise ValueError("Truncated event record")
            yield (type_code, struct.unpack(fmt, data))

    def close(self):
        if self.file:
            self.file.close()
            self.file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
