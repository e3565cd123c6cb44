"""Decode the MEASUREMENT_INFO record into Measurement annotations."""

import struct
from typing import List, Optional

from .models import Measurement, Tool
from .records import RecordMetadata

MIN_RECORD_BYTES = 11
MIN_MEASUREMENT_BYTES = 10
PARAMS_OFFSET = 34
# Y offset the camera drops from every annotation after the first
Y_CORRECTION = 256

_Y_CORRECTED_TOOLS = (Tool.SPOT, Tool.AREA, Tool.ELLIPSE, Tool.LINE)
_SECOND_POINT_TOOLS = (Tool.ELLIPSE, Tool.LINE)
_TOOL_CODES = {t.value for t in Tool}


def parse_measurements(blob: bytes, metadata: RecordMetadata) -> List[Measurement]:
    """Return the annotations of the record, in file order.

    A truncated trailing sub-record is dropped, as are sub-records with an
    unknown tool code.
    """
    raw = blob[metadata.offset : metadata.offset + metadata.length]
    measurements: List[Measurement] = []
    if len(raw) < MIN_RECORD_BYTES:
        return measurements

    length = raw[10] - 1
    pos = MIN_RECORD_BYTES
    while length > 0 and pos < len(raw):
        if pos + length > len(raw):
            break
        measurement = parse_measurement(raw[pos : pos + length], len(measurements))
        pos += length
        if measurement is not None:
            measurements.append(measurement)
        if pos >= len(raw):
            break
        length = raw[pos] - 1
        pos += 1
    return measurements


def parse_measurement(data: bytes, index: int) -> Optional[Measurement]:
    """Decode one sub-record; index is the number of annotations accepted before it."""
    if len(data) < MIN_MEASUREMENT_BYTES:
        return None

    num_bytes_params = data[3]
    num_bytes_label = struct.unpack_from(">H", data, 4)[0]
    tool = data[9]

    pos = PARAMS_OFFSET
    params = []
    while len(params) < num_bytes_params // 2 and pos + 2 <= len(data):
        params.append(struct.unpack_from(">h", data, pos)[0])
        pos += 2

    if tool not in _TOOL_CODES:
        return None
    tool = Tool(tool)

    if index > 0 and tool in _Y_CORRECTED_TOOLS and len(params) >= 2:
        params[1] += Y_CORRECTION
        if tool in _SECOND_POINT_TOOLS and len(params) >= 4:
            params[3] += Y_CORRECTION

    label = ""
    if num_bytes_label > 0:
        label_bytes = data[pos : pos + num_bytes_label]
        label = label_bytes.decode("utf-16-be", errors="replace").rstrip("\x00")

    return Measurement(tool=tool, params=tuple(params), label=label)
