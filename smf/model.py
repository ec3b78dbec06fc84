"""Value types produced by the track decoder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


PITCH_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
CHANNEL_COUNT = 16


def split_note_number(note: int) -> Tuple[str, int]:
    """Return ``(pitch_class, octave)`` for a MIDI note number (60 -> C4)."""

    return PITCH_NAMES[note % 12], note // 12 - 1


@dataclass(frozen=True)
class Tempo:
    bpm: float
    timing: int  # absolute ticks

    @classmethod
    def from_microseconds(cls, microseconds: int, timing: int) -> "Tempo":
        # 60 / (us * 1e-6), without the inexact 1e-6 factor
        return cls(bpm=60_000_000 / microseconds, timing=timing)


@dataclass(frozen=True)
class TimeSignature:
    numerator: int
    denominator: int  # 2 ** exponent as stored in the file
    timing: int


@dataclass(frozen=True)
class Note:
    """A closed note: a note-on matched by a later note-off."""

    pitch_class: str
    octave: int
    timing: int
    duration: int
    velocity: int
    channel: int

    @property
    def name(self) -> str:
        return f"{self.pitch_class}{self.octave}"

    @property
    def end(self) -> int:
        return self.timing + self.duration


@dataclass(frozen=True)
class OpenNote:
    """A note-on still waiting for its note-off."""

    pitch_class: str
    octave: int
    timing: int
    velocity: int
    channel: int

    def matches(self, channel: int, pitch_class: str, octave: int) -> bool:
        return (
            self.channel == channel
            and self.pitch_class == pitch_class
            and self.octave == octave
        )

    def close(self, tick: int) -> Note:
        return Note(
            pitch_class=self.pitch_class,
            octave=self.octave,
            timing=self.timing,
            duration=tick - self.timing,
            velocity=self.velocity,
            channel=self.channel,
        )
