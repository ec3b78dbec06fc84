"""Decode one `MTrk` chunk's event stream.

Each iteration of the decode loop reads a VLQ delta-time, adds it to the
running tick, reads a status byte and dispatches:

  0xFF         meta event: tag, VLQ length, payload
  0xF0 / 0xF7  system exclusive: VLQ length, payload
  0x80-0xEF    channel voice: top nibble = event type, low nibble = channel

Every event consumes its full declared (meta, sysex) or fixed (channel voice)
payload width even when the decoder ignores its content; one short read
shifts every following event of the track.

Note-ons open a note; note-offs (or note-ons with velocity 0) close the
earliest-opened note with the same channel, pitch class and octave. Notes
still open at end-of-track are dropped.

Running status (a data byte where a status byte is expected) is not
supported and raises ``UnsupportedStatus``.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Dict, List

from .chunks import CHUNK_PREFIX_SIZE
from .cursor import ByteCursor
from .errors import SmfError, TruncatedTrack, UnsupportedStatus
from .events import (
    CHANNEL_PAYLOAD_WIDTHS,
    META,
    SYSEX,
    SYSEX_ESCAPE,
    TEMPO_PAYLOAD_SIZE,
    TIME_SIGNATURE_PAYLOAD_SIZE,
    ChannelEvent,
    MetaTag,
    describe_status,
)
from .model import (
    CHANNEL_COUNT,
    Note,
    OpenNote,
    Tempo,
    TimeSignature,
    split_note_number,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackEvents:
    """Everything one track contributes to a score."""

    tempos: List[Tempo]
    time_signatures: List[TimeSignature]
    notes: List[List[Note]]  # indexed by channel, always CHANNEL_COUNT lists

    @property
    def note_count(self) -> int:
        return sum(len(channel) for channel in self.notes)


class TrackDecoder:
    """Single-use decoder over one exactly sliced track chunk."""

    def __init__(self, chunk: bytes) -> None:
        self._cursor = ByteCursor(chunk)
        self._tick = 0
        self._open: List[OpenNote] = []
        self._tempos: List[Tempo] = []
        self._time_signatures: List[TimeSignature] = []
        self._notes: List[List[Note]] = [[] for _ in range(CHANNEL_COUNT)]
        self._counts: Counter[str] = Counter()

        self._meta_handlers: Dict[int, Callable[[bytes], None]] = {
            MetaTag.TEMPO: self._tempo,
            MetaTag.TIME_SIGNATURE: self._time_signature,
        }
        self._channel_handlers: Dict[int, Callable[[int, bytes], None]] = {
            ChannelEvent.NOTE_OFF: self._note_off,
            ChannelEvent.NOTE_ON: self._note_on,
        }

    @property
    def tick(self) -> int:
        return self._tick

    def decode(self) -> TrackEvents:
        cursor = self._cursor
        if cursor.position != 0:
            raise RuntimeError("TrackDecoder instances decode exactly once")
        cursor.skip(CHUNK_PREFIX_SIZE)

        while cursor.remaining():
            self._tick += cursor.read_vlq()
            event_at = cursor.position
            status = cursor.read_u8()
            self._counts[describe_status(status)] += 1

            if status == META:
                if self._meta():
                    return self._finish()
            elif status in (SYSEX, SYSEX_ESCAPE):
                cursor.skip(cursor.read_vlq())
            elif 0x80 <= status < 0xF0:
                self._channel_event(status)
            else:
                raise UnsupportedStatus(
                    f"status byte 0x{status:02X} at offset 0x{event_at:X} "
                    "(running status and system common events are not supported)"
                )

        raise TruncatedTrack(
            f"track ended at offset 0x{cursor.position:X} without an "
            "end-of-track meta event"
        )

    # -- dispatch -----------------------------------------------------------

    def _meta(self) -> bool:
        """Consume one meta event; return True on end-of-track."""

        tag = self._cursor.read_u8()
        if tag == MetaTag.END_OF_TRACK:
            return True
        length = self._cursor.read_vlq()
        payload = self._cursor.read_bytes(length)
        handler = self._meta_handlers.get(tag)
        if handler is not None:
            handler(payload)
        return False

    def _channel_event(self, status: int) -> None:
        kind = ChannelEvent(status >> 4)
        channel = status & 0x0F
        data = self._cursor.read_bytes(CHANNEL_PAYLOAD_WIDTHS[kind])
        handler = self._channel_handlers.get(kind)
        if handler is not None:
            handler(channel, data)

    # -- meta handlers ------------------------------------------------------

    def _tempo(self, payload: bytes) -> None:
        reader = ByteCursor(payload)
        microseconds = reader.read_u24_be()
        reader.skip(len(payload) - TEMPO_PAYLOAD_SIZE)
        if microseconds == 0:
            raise SmfError(f"zero tempo at tick {self._tick}")
        self._tempos.append(Tempo.from_microseconds(microseconds, self._tick))

    def _time_signature(self, payload: bytes) -> None:
        # numerator, denominator exponent, clocks per click, 32nds per quarter
        reader = ByteCursor(payload)
        numerator = reader.read_u8()
        exponent = reader.read_u8()
        reader.skip(TIME_SIGNATURE_PAYLOAD_SIZE - 2)
        self._time_signatures.append(
            TimeSignature(
                numerator=numerator,
                denominator=2**exponent,
                timing=self._tick,
            )
        )

    # -- channel handlers ---------------------------------------------------

    def _note_on(self, channel: int, data: bytes) -> None:
        note, velocity = data
        if velocity == 0:
            self._note_off(channel, data)
            return
        pitch_class, octave = split_note_number(note)
        self._open.append(
            OpenNote(
                pitch_class=pitch_class,
                octave=octave,
                timing=self._tick,
                velocity=velocity,
                channel=channel,
            )
        )

    def _note_off(self, channel: int, data: bytes) -> None:
        pitch_class, octave = split_note_number(data[0])
        for idx, open_note in enumerate(self._open):
            if open_note.matches(channel, pitch_class, octave):
                del self._open[idx]
                self._notes[channel].append(open_note.close(self._tick))
                return
        logger.debug(
            "unmatched note-off %s%d ch%d at tick %d",
            pitch_class,
            octave,
            channel,
            self._tick,
        )

    def _finish(self) -> TrackEvents:
        if self._open:
            logger.debug(
                "discarding %d note(s) still open at end-of-track (tick %d)",
                len(self._open),
                self._tick,
            )
            self._open.clear()
        logger.debug(
            "track decoded: %d bytes, final tick %d, events %s",
            self._cursor.position,
            self._tick,
            dict(self._counts),
        )
        return TrackEvents(
            tempos=self._tempos,
            time_signatures=self._time_signatures,
            notes=self._notes,
        )


def decode_track(chunk: bytes) -> TrackEvents:
    """Decode one `MTrk` chunk (8-byte prefix included).

    Parameters
    ----------
    chunk : bytes
        The track chunk exactly as sliced by ``SmfChunks.from_bytes``.

    Returns
    -------
    TrackEvents
        Tempos, time signatures and closed notes per channel.

    Raises
    ------
    OutOfBounds
        A read crossed the end of the chunk.
    TruncatedTrack
        The chunk ended between events without end-of-track.
    UnsupportedStatus
        A running-status data byte or system common status was met.
    """

    return TrackDecoder(chunk).decode()
