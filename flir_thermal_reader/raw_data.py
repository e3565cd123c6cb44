"""Decode the RAW_DATA record: raw little-endian samples or an embedded 16-bit PNG."""

import io
import logging
import struct
from typing import Optional, Protocol, Tuple

import numpy as np
import PIL.Image

from .errors import FormatError, UnsupportedFormatError
from .records import RecordMetadata

logger = logging.getLogger(__name__)

RAW_DATA_HEADER_SIZE = 32
COMPRESSION_PROBE_SIZE = 100

PNG_MAGIC = b"\x89PNG"
# Some cameras embed the PNG with its first two signature bytes cut off
PNG_MAGIC_TRUNCATED = b"NG"
PNG_IHDR = b"IHDR"


class ImageCodec(Protocol):
    """Decoder for compressed thermal payloads."""

    def decode(self, payload: bytes, width: int, height: int) -> np.ndarray:
        ...


class PngCodec:
    """Decode a 16-bit grayscale PNG payload with Pillow."""

    def decode(self, payload: bytes, width: int, height: int) -> np.ndarray:
        if not payload.startswith(PNG_MAGIC) and payload.startswith(PNG_MAGIC_TRUNCATED):
            payload = PNG_MAGIC[:2] + payload
        try:
            with PIL.Image.open(io.BytesIO(payload)) as img:
                img.load()
                return np.asarray(img, dtype=np.uint16)
        except Exception as e:
            raise UnsupportedFormatError(f"Failed to decode compressed thermal image: {e}") from e


def is_compressed(window: bytes) -> bool:
    """True if the probe window carries a PNG signature (full or truncated) or an IHDR tag."""
    return PNG_MAGIC in window or PNG_MAGIC_TRUNCATED in window or PNG_IHDR in window


def _png_dimensions(window: bytes) -> Tuple[int, int]:
    i = window.find(PNG_IHDR)
    if i < 0 or i + 12 > len(window):
        return 0, 0
    return struct.unpack_from(">II", window, i + 4)


def _raw_dimensions(blob: bytes, offset: int) -> Tuple[int, int]:
    try:
        return struct.unpack_from("<HH", blob, offset + 2)
    except struct.error as e:
        raise FormatError(f"RAW_DATA record at {offset} lies outside the blob") from e


def byteswap16(arr: np.ndarray) -> np.ndarray:
    """(v >> 8) | ((v & 0xFF) << 8) for every sample."""
    arr = arr.astype(np.uint16)
    return ((arr >> 8) | ((arr & 0xFF) << 8)).astype(np.uint16)


def parse_raw_data(
    blob: bytes, metadata: RecordMetadata, codec: Optional[ImageCodec] = None
) -> Tuple[int, int, np.ndarray]:
    """Return (width, height, uint16 array of shape (height, width)) for the RAW_DATA record."""
    start = metadata.offset + RAW_DATA_HEADER_SIZE
    window = blob[start : start + COMPRESSION_PROBE_SIZE]
    compressed = is_compressed(window)

    if compressed:
        width, height = _png_dimensions(window)
    else:
        width, height = _raw_dimensions(blob, metadata.offset)
    logger.debug("RAW_DATA %dx%d (%s)", width, height, "png" if compressed else "raw")

    if width == 0 or height == 0:
        raise FormatError("Could not determine thermal image dimensions from metadata")

    payload = blob[start : metadata.offset + metadata.length]

    if compressed:
        if codec is None:
            raise UnsupportedFormatError("Thermal data is PNG-compressed and no image codec is available.")
        decoded = np.asarray(codec.decode(payload, width, height))
        if decoded.shape != (height, width):
            raise FormatError(
                f"Decoded thermal image has shape {decoded.shape}, expected {(height, width)}"
            )
        # the camera stores samples byte-swapped inside the PNG
        return width, height, byteswap16(decoded)

    thermal = np.zeros(width * height, dtype=np.uint16)
    n = min(len(payload) // 2, width * height)
    if n:
        thermal[:n] = np.frombuffer(payload, dtype="<u2", count=n)
    return width, height, thermal.reshape(height, width)
