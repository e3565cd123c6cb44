"""Reassemble the FLIR metadata blob from the APP1 segments of a JPEG stream."""

import io
import logging
import struct
from typing import BinaryIO, Dict, Optional, Tuple

from .errors import FormatError

logger = logging.getLogger(__name__)

JPEG_SOI = b"\xff\xd8"
SEGMENT_SEP = b"\xff"
APP1_MARKER = b"\xe1"
MAGIC_FLIR = b"FLIR\x00"
FLIR_HEADER_SIZE = 12


def extract_flir_app1(stream: BinaryIO) -> bytes:
    """Return the FLIR blob spread over the APP1 segments of a seekable JPEG stream.

    Chunks are concatenated in index order 0..total. Raises FormatError when the
    stream is not a JPEG, when chunk metadata is inconsistent or duplicated, and
    when no FLIR segment or no terminal chunk is found.
    """
    stream.seek(0)
    if stream.read(2) != JPEG_SOI:
        raise FormatError("File is not a valid JPEG (missing SOI marker)")

    chunks: Dict[int, bytes] = {}
    chunks_count: Optional[int] = None
    complete = False

    while True:
        b = stream.read(1)
        if not b:
            break
        if b != SEGMENT_SEP:
            continue

        parsed = _parse_flir_chunk(stream, chunks_count)
        if parsed is None:
            continue

        chunks_count, chunk_num, chunk = parsed
        if chunk_num in chunks:
            raise FormatError(f"Duplicate FLIR chunk {chunk_num}")
        chunks[chunk_num] = chunk

        if chunk_num == chunks_count:
            complete = True
            break

    if chunks_count is None:
        raise FormatError("No FLIR APP1 segment found")
    if not complete:
        raise FormatError(f"Stream ended before terminal FLIR chunk {chunks_count}")

    missing = [i for i in range(chunks_count + 1) if i not in chunks]
    if missing:
        logger.warning("FLIR chunks %s missing, blob may be incomplete", missing)

    return b"".join(chunks[i] for i in range(chunks_count + 1) if i in chunks)


def extract_flir_app1_from_bytes(data: bytes) -> bytes:
    """Same as extract_flir_app1 for an in-memory JPEG."""
    return extract_flir_app1(io.BytesIO(data))


def _parse_flir_chunk(stream: BinaryIO, chunks_count: Optional[int]) -> Optional[Tuple[int, int, bytes]]:
    """Parse one APP1 segment after its 0xFF; return (count, index, payload) or None if not FLIR."""
    start = stream.tell()

    marker = stream.read(1)
    if marker != APP1_MARKER:
        stream.seek(start)
        return None

    length_bytes = stream.read(2)
    magic = stream.read(5)
    if len(length_bytes) != 2 or magic != MAGIC_FLIR:
        stream.seek(start)
        return None
    length = struct.unpack(">H", length_bytes)[0] - FLIR_HEADER_SIZE

    header = stream.read(3)
    if len(header) != 3:
        raise FormatError("Truncated FLIR chunk header")
    chunk_num, chunks_tot = header[1], header[2]

    if chunks_count is None:
        chunks_count = chunks_tot
    if chunk_num > chunks_tot or chunks_tot != chunks_count:
        raise FormatError(
            f"Inconsistent FLIR chunk metadata: chunk {chunk_num} of {chunks_tot}, expected total {chunks_count}"
        )

    # declared length is one byte short of the real payload
    chunk = stream.read(max(length + 1, 0))
    return chunks_tot, chunk_num, chunk
