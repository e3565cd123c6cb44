"""
Tests for APP1 segment reassembly.
"""
import io

import pytest

from flir_thermal_reader.errors import FormatError
from flir_thermal_reader.segments import extract_flir_app1, extract_flir_app1_from_bytes

from builders import app1_segment, jpeg, split_into_segments


def test_single_chunk_returns_payload():
    """A single chunk yields its payload with the 12-byte header stripped."""
    payload = bytes(range(256)) * 3
    data = jpeg(app1_segment(payload))
    assert extract_flir_app1_from_bytes(data) == payload


def test_chunks_concatenated_in_index_order():
    """Chunks stored out of order are joined by index."""
    payload = b"".join(bytes([i]) * 50 for i in range(1, 5))
    segments = split_into_segments(payload, 4)
    data = jpeg(segments[2], segments[0], segments[1], segments[3])
    assert extract_flir_app1(io.BytesIO(data)) == payload


def test_not_a_jpeg():
    """Missing SOI marker raises FormatError."""
    with pytest.raises(FormatError, match="not a valid JPEG"):
        extract_flir_app1_from_bytes(b"\x89PNG" + app1_segment(b"abc"))


def test_duplicate_chunk():
    """Two chunks with the same index raise FormatError."""
    data = jpeg(app1_segment(b"aaaa", 0, 1), app1_segment(b"bbbb", 0, 1), app1_segment(b"cccc", 1, 1))
    with pytest.raises(FormatError, match="Duplicate"):
        extract_flir_app1_from_bytes(data)


def test_inconsistent_chunk_count():
    """A chunk count that changes between chunks raises FormatError."""
    data = jpeg(app1_segment(b"aaaa", 0, 2), app1_segment(b"bbbb", 1, 3))
    with pytest.raises(FormatError, match="Inconsistent"):
        extract_flir_app1_from_bytes(data)


def test_chunk_index_beyond_count():
    """A chunk index above the chunk count raises FormatError."""
    data = jpeg(app1_segment(b"aaaa", 3, 1))
    with pytest.raises(FormatError, match="Inconsistent"):
        extract_flir_app1_from_bytes(data)


def test_no_flir_segment():
    """A plain JPEG has no FLIR data."""
    with pytest.raises(FormatError, match="No FLIR"):
        extract_flir_app1_from_bytes(jpeg())


def test_missing_terminal_chunk():
    """The stream ending before the last chunk raises FormatError."""
    data = jpeg(app1_segment(b"aaaa", 0, 2), app1_segment(b"bbbb", 1, 2))
    with pytest.raises(FormatError, match="terminal"):
        extract_flir_app1_from_bytes(data)


def test_other_app1_magic_skipped():
    """APP1 segments with another signature are ignored."""
    data = jpeg(app1_segment(b"xxxx", 0, 0, magic=b"XMP\x00\x00"), app1_segment(b"flir", 0, 0))
    assert extract_flir_app1_from_bytes(data) == b"flir"


def test_scanning_stops_at_terminal_chunk():
    """Data after the terminal chunk is not read."""
    data = jpeg(app1_segment(b"last", 0, 0), app1_segment(b"more", 0, 0))
    assert extract_flir_app1_from_bytes(data) == b"last"


def test_missing_intermediate_chunk_is_skipped(caplog):
    """A missing middle chunk is logged and left out of the blob."""
    data = jpeg(app1_segment(b"aaaa", 0, 2), app1_segment(b"cccc", 2, 2))
    with caplog.at_level("WARNING"):
        assert extract_flir_app1_from_bytes(data) == b"aaaacccc"
    assert "missing" in caplog.text
