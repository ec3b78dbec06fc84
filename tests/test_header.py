import pytest

from smf.header import Header, decode_header
from smf.errors import OutOfBounds


def test_decode_header_example() -> None:
    chunk = bytes.fromhex("4D 54 68 64 00 00 00 06 00 01 00 02 01 E0")
    assert decode_header(chunk) == Header(format=1, track_count=2, division=480)


@pytest.mark.parametrize(
    "fmt, tracks, division",
    [(0, 1, 96), (1, 16, 960), (2, 0xFFFF, 0x7FFF)],
)
def test_fields_read_big_endian_at_fixed_offsets(fmt: int, tracks: int, division: int) -> None:
    chunk = (
        b"MThd\x00\x00\x00\x06"
        + fmt.to_bytes(2, "big")
        + tracks.to_bytes(2, "big")
        + division.to_bytes(2, "big")
    )
    header = Header.from_bytes(chunk)
    assert (header.format, header.track_count, header.division) == (fmt, tracks, division)


def test_header_length_field_not_validated() -> None:
    chunk = bytes.fromhex("4D 54 68 64 00 00 00 09 00 00 00 01 00 60 00 00 00")
    assert decode_header(chunk) == Header(format=0, track_count=1, division=96)


def test_short_header_chunk() -> None:
    with pytest.raises(OutOfBounds):
        decode_header(bytes.fromhex("4D 54 68 64 00 00 00 06 00 01"))
