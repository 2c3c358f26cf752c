from __future__ import annotations

import struct

from pybuild.map.errors import TruncatedInput

_INT_FORMATS = {
    (1, True): "<b",
    (1, False): "<B",
    (2, True): "<h",
    (2, False): "<H",
    (4, True): "<i",
    (4, False): "<I",
}


class ByteCursor:
    """Little-endian reader over an in-memory buffer.

    Every read either returns the whole value and advances the position by
    exactly its width, or raises :class:`TruncatedInput` and leaves the
    position untouched.
    """

    def __init__(self, data: bytes, position: int = 0) -> None:
        self.data = memoryview(bytes(data))
        self.position = position

    def __len__(self) -> int:
        return len(self.data)

    def tell(self) -> int:
        return self.position

    def remaining(self) -> int:
        return len(self.data) - self.position

    def seek(self, position: int) -> int:
        if position < 0 or position > len(self.data):
            raise ValueError("Attempting to seek outside buffer bounds")
        self.position = position
        return self.position

    def read_bytes(self, size: int, what: str | None = None) -> bytes:
        if size < 0:
            raise ValueError("size must not be negative")
        available = self.remaining()
        if available < size:
            raise TruncatedInput(self.position, size, available, what)
        start = self.position
        self.position += size
        return bytes(self.data[start:self.position])

    def unpack(self, fmt: str, what: str | None = None) -> tuple:
        """Read one ``struct`` format worth of values."""
        size = struct.calcsize(fmt)
        available = self.remaining()
        if available < size:
            raise TruncatedInput(self.position, size, available, what)
        values = struct.unpack_from(fmt, self.data, self.position)
        self.position += size
        return values

    def read_int(self, width: int, signed: bool, what: str | None = None) -> int:
        try:
            fmt = _INT_FORMATS[(width, signed)]
        except KeyError:
            raise ValueError(f"Unsupported integer width: {width}") from None
        value, = self.unpack(fmt, what)
        return value

    def read_i8(self, what=None):
        return self.read_int(1, True, what)

    def read_u8(self, what=None):
        return self.read_int(1, False, what)

    def read_i16(self, what=None):
        return self.read_int(2, True, what)

    def read_u16(self, what=None):
        return self.read_int(2, False, what)

    def read_i32(self, what=None):
        return self.read_int(4, True, what)

    def read_u32(self, what=None):
        return self.read_int(4, False, what)
