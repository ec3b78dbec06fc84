from __future__ import annotations

from dataclasses import dataclass

from .chunks import CHUNK_PREFIX_SIZE
from .cursor import ByteCursor


@dataclass(frozen=True)
class Header:
    format: int
    track_count: int
    division: int  # ticks per quarter note

    @classmethod
    def from_bytes(cls, chunk: bytes) -> "Header":
        """Decode an `MThd` chunk (8-byte prefix included).

        The declared header length is not checked; the three big-endian u16
        fields are read from offsets 8, 10 and 12.
        """

        cursor = ByteCursor(chunk)
        cursor.skip(CHUNK_PREFIX_SIZE)
        format_ = cursor.read_u16_be()
        track_count = cursor.read_u16_be()
        division = cursor.read_u16_be()
        return cls(format=format_, track_count=track_count, division=division)


def decode_header(chunk: bytes) -> Header:
    return Header.from_bytes(chunk)
