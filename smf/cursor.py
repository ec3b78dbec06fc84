from __future__ import annotations

import struct

from .errors import OutOfBounds


class ByteCursor:
    """Sequential big-endian reader over an immutable byte buffer.

    Every read advances the position by exactly the width it consumed. A read
    that would cross the end of the buffer raises ``OutOfBounds`` and leaves
    the position where it was.
    """

    def __init__(self, data: bytes, position: int = 0) -> None:
        self._data = bytes(data)
        self._pos = position

    @property
    def position(self) -> int:
        return self._pos

    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _claim(self, width: int) -> int:
        if width < 0:
            raise ValueError(f"negative width {width}")
        if self._pos + width > len(self._data):
            raise OutOfBounds(
                f"read of {width} bytes at offset 0x{self._pos:X} crosses end "
                f"of buffer ({len(self._data)} bytes)"
            )
        start = self._pos
        self._pos += width
        return start

    def read_u8(self) -> int:
        return self._data[self._claim(1)]

    def read_u16_be(self) -> int:
        return struct.unpack_from(">H", self._data, self._claim(2))[0]

    def read_u24_be(self) -> int:
        start = self._claim(3)
        return int.from_bytes(self._data[start : start + 3], "big")

    def read_u32_be(self) -> int:
        return struct.unpack_from(">I", self._data, self._claim(4))[0]

    def read_bytes(self, count: int) -> bytes:
        start = self._claim(count)
        return self._data[start : start + count]

    def read_vlq(self) -> int:
        """Read a MIDI variable-length quantity (base-128, top bit = more)."""

        start = self._pos
        value = 0
        try:
            while True:
                byte = self.read_u8()
                value = (value << 7) | (byte & 0x7F)
                if not byte & 0x80:
                    return value
        except OutOfBounds:
            self._pos = start
            raise

    def skip(self, count: int) -> None:
        self._claim(count)
