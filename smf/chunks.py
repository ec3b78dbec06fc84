from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .errors import MissingHeaderChunk, MissingTrackChunk


logger = logging.getLogger(__name__)

HEADER_SIGNATURE = b"MThd"  # 4D 54 68 64
TRACK_SIGNATURE = b"MTrk"  # 4D 54 72 6B
CHUNK_PREFIX_SIZE = 8  # signature + u32 BE length
TRACK_COUNT_OFFSET = 10  # within the header chunk


def chunk_extent(data: bytes, offset: int) -> Optional[int]:
    """Return the end offset of the chunk whose signature starts at `offset`.

    The chunk's self-declared length is authoritative. Returns None when the
    length field or the declared payload runs past the end of `data`.
    """

    length_end = offset + CHUNK_PREFIX_SIZE
    if length_end > len(data):
        return None
    length = int.from_bytes(data[offset + 4 : length_end], "big")
    end = length_end + length
    if end > len(data):
        return None
    return end


def find_track_chunks(data: bytes, start: int = 0) -> List[int]:
    """Return the offsets of every `MTrk` chunk at or after `start`.

    Scanning resumes after the end of each chunk found, so signature bytes
    inside a track's payload are never reported.
    """

    offsets: List[int] = []
    while True:
        idx = data.find(TRACK_SIGNATURE, start)
        if idx == -1:
            break
        end = chunk_extent(data, idx)
        if end is None:
            raise MissingTrackChunk(
                f"track chunk at offset 0x{idx:X} declares a length past the "
                f"end of the buffer ({len(data)} bytes)"
            )
        offsets.append(idx)
        start = end
    return offsets


@dataclass(frozen=True)
class SmfChunks:
    """A file buffer split into its exact header and track chunk byte ranges."""

    header: bytes  # MThd chunk including its 8-byte prefix
    tracks: List[bytes]  # MTrk chunks in file order, each including its prefix

    @property
    def declared_track_count(self) -> int:
        return int.from_bytes(
            self.header[TRACK_COUNT_OFFSET : TRACK_COUNT_OFFSET + 2], "big"
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "SmfChunks":
        data = bytes(data)

        header_at = data.find(HEADER_SIGNATURE)
        if header_at == -1:
            raise MissingHeaderChunk("no MThd signature in buffer")
        header_end = chunk_extent(data, header_at)
        if header_end is None:
            raise MissingHeaderChunk(
                f"header chunk at offset 0x{header_at:X} declares a length past "
                f"the end of the buffer ({len(data)} bytes)"
            )
        header = data[header_at:header_end]
        if len(header) < TRACK_COUNT_OFFSET + 2:
            raise MissingHeaderChunk(
                f"header chunk at offset 0x{header_at:X} is too short "
                f"({len(header)} bytes)"
            )

        track_offsets = find_track_chunks(data, header_end)
        tracks = [data[off : chunk_extent(data, off)] for off in track_offsets]
        chunks = cls(header=header, tracks=tracks)

        expected = chunks.declared_track_count
        if len(tracks) < expected:
            raise MissingTrackChunk(
                f"header declares {expected} tracks, found {len(tracks)}"
            )

        logger.debug(
            "MThd at 0x%X, %d MTrk chunks at %s",
            header_at,
            len(track_offsets),
            ", ".join(f"0x{off:X}" for off in track_offsets),
        )
        return chunks
