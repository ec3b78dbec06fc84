from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .chunks import SmfChunks
from .header import Header
from .model import CHANNEL_COUNT, Note, Tempo, TimeSignature
from .track import decode_track


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Score:
    """A fully decoded file: header, tempo map, meter changes, notes per channel."""

    header: Header
    tempos: Tuple[Tempo, ...]
    time_signatures: Tuple[TimeSignature, ...]
    notes: Tuple[Tuple[Note, ...], ...]  # CHANNEL_COUNT tuples, indexed by channel

    @property
    def note_count(self) -> int:
        return sum(len(channel) for channel in self.notes)

    def channel_notes(self, channel: int) -> Tuple[Note, ...]:
        if not 0 <= channel < CHANNEL_COUNT:
            raise ValueError(f"channel must be in [0, {CHANNEL_COUNT}), got {channel}")
        return self.notes[channel]

    def iter_notes(self) -> Iterable[Note]:
        """Yield every note, channel by channel, in decode order."""

        for channel in self.notes:
            yield from channel

    @property
    def end_tick(self) -> int:
        return max((note.end for note in self.iter_notes()), default=0)


def aggregate(header_chunk: bytes, track_chunks: Iterable[bytes]) -> Score:
    """Decode already-sliced chunks and merge them into one score.

    Tempos and time signatures are concatenated in track order. Each
    channel's notes are appended track by track, keeping within-track order.
    The first failing track aborts the whole decode.
    """

    header = Header.from_bytes(header_chunk)
    tempos: List[Tempo] = []
    time_signatures: List[TimeSignature] = []
    notes: List[List[Note]] = [[] for _ in range(CHANNEL_COUNT)]

    for index, chunk in enumerate(track_chunks):
        events = decode_track(chunk)
        tempos.extend(events.tempos)
        time_signatures.extend(events.time_signatures)
        for channel, channel_notes in enumerate(events.notes):
            notes[channel].extend(channel_notes)
        logger.debug(
            "track %d: %d tempos, %d time signatures, %d notes",
            index,
            len(events.tempos),
            len(events.time_signatures),
            events.note_count,
        )

    return Score(
        header=header,
        tempos=tuple(tempos),
        time_signatures=tuple(time_signatures),
        notes=tuple(tuple(channel) for channel in notes),
    )


def decode(data: bytes) -> Score:
    """Decode a complete Standard MIDI File buffer into a ``Score``."""

    chunks = SmfChunks.from_bytes(data)
    return aggregate(chunks.header, chunks.tracks)
