"""
Camera parameter sources for the CAMERA_INFO record (type 32).

A source turns the camera-info record into a {name: float} mapping with at
least the five Planck coefficients (see utilities.PLANCK_KEYS) and, when
available, the object parameters below. The byte layout of the FLIR record is
not documented, so no built-in layout is shipped: callers either supply the
values directly (FixedCameraParameters) or describe the layout of their camera
(LayoutCameraParameterSource).
"""
import struct
from typing import Dict, Mapping, Optional, Protocol, Tuple

from .errors import UnsupportedFormatError
from .records import RecordMetadata

# -----------------------------------------------------------------------------
# Standard keys of the camera parameter mapping
# -----------------------------------------------------------------------------
KEY_EMISSIVITY = "emissivity"
KEY_OBJECT_DISTANCE = "object_distance"
KEY_REFLECTED_TEMP = "reflected_temp"
KEY_ATMOSPHERIC_TEMP = "atmospheric_temp"
KEY_RELATIVE_HUMIDITY = "relative_humidity"

OBJECT_PARAMETER_KEYS = (
    KEY_EMISSIVITY,
    KEY_OBJECT_DISTANCE,
    KEY_REFLECTED_TEMP,
    KEY_ATMOSPHERIC_TEMP,
    KEY_RELATIVE_HUMIDITY,
)

# Layout: {key: (start, end)} byte range of a 4-byte float inside the record
CameraInfoLayout = Mapping[str, Tuple[int, int]]


class CameraParameterSource(Protocol):
    """Anything that can read camera parameters from the blob."""

    def read(self, blob: bytes, metadata: Optional[RecordMetadata]) -> Dict[str, float]:
        """Return camera parameters; metadata is None when the blob has no CAMERA_INFO record."""
        ...


class FixedCameraParameters:
    """Source that ignores the record and returns known values."""

    def __init__(self, params: Mapping[str, float]):
        self.params = {k: float(v) for k, v in params.items()}

    def read(self, blob: bytes, metadata: Optional[RecordMetadata] = None) -> Dict[str, float]:
        return dict(self.params)

    def __repr__(self):
        return f"FixedCameraParameters({self.params!r})"


class LayoutCameraParameterSource:
    """Read 4-byte floats at caller-supplied byte ranges of the camera-info record."""

    def __init__(self, layout: Optional[CameraInfoLayout], byte_order: str = "<"):
        if byte_order not in ("<", ">"):
            raise ValueError(f"byte_order must be '<' or '>', got {byte_order!r}")
        self.layout = dict(layout or {})
        self.byte_order = byte_order

    @property
    def min_bytes(self) -> int:
        return max((end for _, end in self.layout.values()), default=0)

    def read(self, blob: bytes, metadata: Optional[RecordMetadata]) -> Dict[str, float]:
        if not self.layout:
            raise UnsupportedFormatError("No camera info layout configured for this camera.")
        if metadata is None:
            raise UnsupportedFormatError("File has no CAMERA_INFO record.")
        raw = blob[metadata.offset : metadata.offset + metadata.length]
        if len(raw) < self.min_bytes:
            raise UnsupportedFormatError(
                f"Camera info record has {len(raw)} bytes, layout needs {self.min_bytes}."
            )
        out = {}
        for key, (start, end) in self.layout.items():
            if end - start != 4:
                raise UnsupportedFormatError(f"Layout field {key!r} must span 4 bytes, got {start}:{end}.")
            out[key] = struct.unpack(self.byte_order + "f", raw[start:end])[0]
        return out
