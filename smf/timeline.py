"""Tick/time/frequency helpers for playback and visualisation layers.

Nothing here synthesises audio; ``schedule`` turns a decoded score into
start/end times in seconds with a frequency and gain per note, which is what
an oscillator-based player needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .config import DEFAULT_PLAYBACK, PlaybackConfig
from .model import PITCH_NAMES, Tempo
from .score import Score


OCTAVE_RANGE = range(-1, 10)  # MIDI notes 0-127 span octaves -1..9


def _frequency(index: int, octave: int, a4_frequency: float) -> float:
    semitones_from_a4 = (octave - 4) * 12 + index - 9
    return a4_frequency * 2 ** (semitones_from_a4 / 12)


def build_frequency_table(a4_frequency: float = 440.0) -> Dict[str, float]:
    """Return ``{"C4": 261.62..., ...}`` in equal temperament."""

    return {
        f"{name}{octave}": _frequency(index, octave, a4_frequency)
        for octave in OCTAVE_RANGE
        for index, name in enumerate(PITCH_NAMES)
    }


PITCH_FREQUENCIES = build_frequency_table()


def note_frequency(
    pitch_class: str, octave: int, config: Optional[PlaybackConfig] = None
) -> float:
    config = config or DEFAULT_PLAYBACK
    try:
        index = PITCH_NAMES.index(pitch_class)
    except ValueError:
        raise ValueError(f"unknown pitch class {pitch_class!r}") from None
    return _frequency(index, octave, config.a4_frequency)


def _sorted_tempos(tempos: Sequence[Tempo]) -> List[Tempo]:
    # stable: tempos sharing a tick keep list order, the last one wins
    return sorted(tempos, key=lambda tempo: tempo.timing)


def tempo_at(
    tempos: Sequence[Tempo], tick: int, config: Optional[PlaybackConfig] = None
) -> float:
    """Return the bpm in effect at `tick`.

    That is the latest tempo whose timing is <= `tick`, or the configured
    default when no tempo event precedes it.
    """

    config = config or DEFAULT_PLAYBACK
    bpm = config.default_bpm
    for tempo in _sorted_tempos(tempos):
        if tempo.timing > tick:
            break
        bpm = tempo.bpm
    return bpm


def ticks_to_seconds(
    tick: int,
    tempos: Sequence[Tempo],
    division: int,
    config: Optional[PlaybackConfig] = None,
) -> float:
    """Convert an absolute tick to seconds, honouring every tempo change before it."""

    if division <= 0:
        raise ValueError(f"division must be positive, got {division}")
    config = config or DEFAULT_PLAYBACK
    return _seconds_at(tick, _sorted_tempos(tempos), division, config.default_bpm)


def _seconds_at(
    tick: int, sorted_tempos: Sequence[Tempo], division: int, default_bpm: float
) -> float:
    seconds = 0.0
    segment_start = 0
    bpm = default_bpm
    for tempo in sorted_tempos:
        if tempo.timing > tick:
            break
        seconds += (tempo.timing - segment_start) * 60.0 / (bpm * division)
        segment_start = tempo.timing
        bpm = tempo.bpm
    return seconds + (tick - segment_start) * 60.0 / (bpm * division)


@dataclass(frozen=True)
class ScheduledNote:
    start: float  # seconds
    end: float
    frequency: float
    gain: float
    channel: int
    name: str


def schedule(score: Score, config: Optional[PlaybackConfig] = None) -> List[ScheduledNote]:
    """Place every note of `score` on a wall-clock timeline.

    Returned notes are ordered by start time, then channel.
    """

    config = config or DEFAULT_PLAYBACK
    division = score.header.division
    if division <= 0:
        raise ValueError(f"division must be positive, got {division}")
    tempos = _sorted_tempos(score.tempos)
    scheduled: List[ScheduledNote] = []
    for note in score.iter_notes():
        scheduled.append(
            ScheduledNote(
                start=_seconds_at(note.timing, tempos, division, config.default_bpm),
                end=_seconds_at(note.end, tempos, division, config.default_bpm),
                frequency=note_frequency(note.pitch_class, note.octave, config),
                gain=note.velocity / 127 * config.max_gain,
                channel=note.channel,
                name=note.name,
            )
        )
    scheduled.sort(key=lambda item: (item.start, item.channel))
    return scheduled
