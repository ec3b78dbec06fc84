from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlaybackConfig:
    default_bpm: float = 120.0  # used before the first tempo event
    a4_frequency: float = 440.0
    max_gain: float = 0.3  # gain at velocity 127


DEFAULT_PLAYBACK = PlaybackConfig()
