from __future__ import annotations


class SmfError(ValueError):
    """Base class for every decode failure."""


class MissingHeaderChunk(SmfError):
    pass


class MissingTrackChunk(SmfError):
    pass


class OutOfBounds(SmfError):
    """A read would cross the end of the buffer it was issued against."""


class TruncatedTrack(SmfError):
    """A track ran out of bytes before its end-of-track meta event."""


class UnsupportedStatus(SmfError):
    """A status byte the decoder does not dispatch on (e.g. running status)."""
