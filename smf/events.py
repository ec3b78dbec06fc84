"""Status bytes, meta tags and payload widths of SMF track events."""

from __future__ import annotations

from enum import IntEnum


META = 0xFF
SYSEX = 0xF0
SYSEX_ESCAPE = 0xF7


class MetaTag(IntEnum):
    SEQUENCE_NUMBER = 0x00
    TEXT = 0x01
    COPYRIGHT = 0x02
    TRACK_NAME = 0x03
    INSTRUMENT_NAME = 0x04
    LYRIC = 0x05
    MARKER = 0x06
    CUE_POINT = 0x07
    CHANNEL_PREFIX = 0x20
    PORT = 0x21
    END_OF_TRACK = 0x2F
    TEMPO = 0x51
    SMPTE_OFFSET = 0x54
    TIME_SIGNATURE = 0x58
    KEY_SIGNATURE = 0x59
    SEQUENCER_SPECIFIC = 0x7F


class ChannelEvent(IntEnum):
    """Top nibble of a channel-voice status byte."""

    NOTE_OFF = 0x8
    NOTE_ON = 0x9
    POLY_KEY_PRESSURE = 0xA
    CONTROL_CHANGE = 0xB
    PROGRAM_CHANGE = 0xC
    CHANNEL_PRESSURE = 0xD
    PITCH_BEND = 0xE


# Data bytes following the status byte; consumed whether or not the event is used.
CHANNEL_PAYLOAD_WIDTHS = {
    ChannelEvent.NOTE_OFF: 2,
    ChannelEvent.NOTE_ON: 2,
    ChannelEvent.POLY_KEY_PRESSURE: 2,
    ChannelEvent.CONTROL_CHANGE: 2,
    ChannelEvent.PROGRAM_CHANGE: 1,
    ChannelEvent.CHANNEL_PRESSURE: 1,
    ChannelEvent.PITCH_BEND: 2,
}

TEMPO_PAYLOAD_SIZE = 3
TIME_SIGNATURE_PAYLOAD_SIZE = 4


def describe_status(status: int) -> str:
    if status == META:
        return "meta"
    if status in (SYSEX, SYSEX_ESCAPE):
        return "sysex"
    try:
        return ChannelEvent(status >> 4).name.lower()
    except ValueError:
        return f"0x{status:02X}"
