"""
Record directory of the FLIR metadata blob.

The blob starts with a fixed header that points at a directory of 32-byte
entries. Each entry maps a record type code to a byte range of the blob.
Record ranges are not checked here; the decoders that read them do that.
"""
import logging
import struct
from enum import IntEnum
from typing import Dict, NamedTuple, Optional

from .errors import FormatError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Blob header (big-endian): format id (4), creator (16), version (4),
# directory offset (4), directory entry count (4)
# -----------------------------------------------------------------------------
HEADER_FORMAT = ">4s16sIII"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)

# -----------------------------------------------------------------------------
# Directory entry (big-endian): type (2), subtype (2), version (4), index id (4),
# offset (4), length (4); entries are RECORD_ENTRY_SIZE bytes apart
# -----------------------------------------------------------------------------
ENTRY_FORMAT = ">HHIIII"
ENTRY_SIZE = struct.calcsize(ENTRY_FORMAT)
RECORD_ENTRY_SIZE = 32


class RecordIndex(IntEnum):
    """Record type codes used by this package."""

    RAW_DATA = 1
    EMBEDDED_IMAGE = 14
    CAMERA_INFO = 32
    MEASUREMENT_INFO = 33
    PALETTE_INFO = 34
    PICTURE_IN_PICTURE_INFO = 42


class RecordMetadata(NamedTuple):
    """Location of one record inside the blob."""

    entry: int
    type: int
    offset: int
    length: int


def parse_record_directory(blob: bytes) -> Dict[int, RecordMetadata]:
    """Return {record type: RecordMetadata} for every used slot of the directory."""
    if len(blob) < HEADER_SIZE:
        raise FormatError(f"FLIR blob too short for header: {len(blob)} bytes")
    file_format_id, _creator, version, dir_offset, dir_count = struct.unpack_from(HEADER_FORMAT, blob, 0)
    logger.debug(
        "FLIR blob format %r version %d: %d directory entries at %d",
        file_format_id, version, dir_count, dir_offset,
    )

    records: Dict[int, RecordMetadata] = {}
    for i in range(dir_count):
        entry = dir_offset + i * RECORD_ENTRY_SIZE
        if entry + ENTRY_SIZE > len(blob):
            logger.warning(
                "Record directory declares %d entries but only %d fit in the blob",
                dir_count, i,
            )
            break
        metadata = _parse_record_metadata(blob, entry)
        if metadata is not None:
            records[metadata.type] = metadata
    logger.debug("FLIR records: %s", {k: (v.offset, v.length) for k, v in records.items()})
    return records


def _parse_record_metadata(blob: bytes, entry: int) -> Optional[RecordMetadata]:
    (record_type,) = struct.unpack_from(">H", blob, entry)
    if record_type < 1:
        return None
    _, _subtype, _version, _index_id, offset, length = struct.unpack_from(ENTRY_FORMAT, blob, entry)
    return RecordMetadata(entry, record_type, offset, length)
