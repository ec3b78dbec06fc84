"""Tests for the big-endian byte cursor."""

import pytest

from smf.cursor import ByteCursor
from smf.errors import OutOfBounds


def test_fixed_width_reads_advance_by_width() -> None:
    cursor = ByteCursor(bytes.fromhex("01 0203 040506 0708090A"))
    assert cursor.read_u8() == 0x01
    assert cursor.position == 1
    assert cursor.read_u16_be() == 0x0203
    assert cursor.position == 3
    assert cursor.read_u24_be() == 0x040506
    assert cursor.position == 6
    assert cursor.read_u32_be() == 0x0708090A
    assert cursor.position == 10
    assert cursor.remaining() == 0


def test_read_bytes_and_skip() -> None:
    cursor = ByteCursor(b"MTrk\x00\x00\x00\x04")
    assert cursor.read_bytes(4) == b"MTrk"
    cursor.skip(3)
    assert cursor.remaining() == 1
    assert cursor.read_u8() == 0x04


@pytest.mark.parametrize(
    "encoded, value",
    [
        ("00", 0),
        ("40", 0x40),
        ("7F", 0x7F),
        ("81 00", 0x80),
        ("83 60", 480),
        ("C0 00", 0x2000),
        ("FF 7F", 0x3FFF),
        ("81 80 00", 0x4000),
        ("FF FF FF 7F", 0x0FFFFFFF),
    ],
)
def test_read_vlq(encoded: str, value: int) -> None:
    data = bytes.fromhex(encoded)
    cursor = ByteCursor(data + b"\xAA")
    assert cursor.read_vlq() == value
    assert cursor.position == len(data)


@pytest.mark.parametrize(
    "method, size",
    [
        ("read_u8", 0),
        ("read_u16_be", 1),
        ("read_u24_be", 2),
        ("read_u32_be", 3),
    ],
)
def test_read_past_end_raises_and_keeps_position(method: str, size: int) -> None:
    cursor = ByteCursor(b"\x00" * size)
    with pytest.raises(OutOfBounds):
        getattr(cursor, method)()
    assert cursor.position == 0


def test_skip_past_end_raises() -> None:
    cursor = ByteCursor(b"\x00\x00")
    cursor.skip(1)
    with pytest.raises(OutOfBounds):
        cursor.skip(2)
    assert cursor.position == 1


def test_unterminated_vlq_raises_and_rewinds() -> None:
    cursor = ByteCursor(b"\x81\x82")
    with pytest.raises(OutOfBounds):
        cursor.read_vlq()
    assert cursor.position == 0


def test_out_of_bounds_is_value_error() -> None:
    with pytest.raises(ValueError, match="crosses end of buffer"):
        ByteCursor(b"").read_u8()
