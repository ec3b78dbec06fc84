"""Decode Standard MIDI Files into tempos, time signatures and notes."""

from .chunks import (  # noqa: F401
    HEADER_SIGNATURE,
    TRACK_SIGNATURE,
    SmfChunks,
    find_track_chunks,
)
from .config import DEFAULT_PLAYBACK, PlaybackConfig  # noqa: F401
from .cursor import ByteCursor  # noqa: F401
from .errors import (  # noqa: F401
    MissingHeaderChunk,
    MissingTrackChunk,
    OutOfBounds,
    SmfError,
    TruncatedTrack,
    UnsupportedStatus,
)
from .header import Header, decode_header  # noqa: F401
from .model import (  # noqa: F401
    CHANNEL_COUNT,
    PITCH_NAMES,
    Note,
    OpenNote,
    Tempo,
    TimeSignature,
)
from .score import Score, aggregate, decode  # noqa: F401
from .timeline import (  # noqa: F401
    PITCH_FREQUENCIES,
    ScheduledNote,
    note_frequency,
    schedule,
    tempo_at,
    ticks_to_seconds,
)
from .track import TrackDecoder, TrackEvents, decode_track  # noqa: F401
