"""Parse FLIR radiometric JPEG files (APP1 FLIR blob with raw data, camera info, measurements)."""

import io
import logging
import os
from typing import BinaryIO, Optional

import numpy as np

from .camera_info import CameraParameterSource
from .measurements import parse_measurements
from .models import Thermogram
from .raw_data import ImageCodec, PngCodec, parse_raw_data
from .records import RecordIndex, parse_record_directory
from .segments import extract_flir_app1

logger = logging.getLogger(__name__)


class FlirParser:
    """Reassemble the FLIR blob, read its records and build a Thermogram.

    camera_parameters reads the CAMERA_INFO record; without one the
    Thermogram has no calibration and temperatures are unavailable.
    codec decodes PNG-compressed thermal data; pass None to disable it.
    """

    def __init__(
        self,
        camera_parameters: Optional[CameraParameterSource] = None,
        codec: Optional[ImageCodec] = PngCodec(),
    ):
        self.camera_parameters = camera_parameters
        self.codec = codec

    def parse(self, file_path: str) -> Thermogram:
        """Read a FLIR JPEG from disk."""
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"File not found: {file_path}")
        with open(file_path, "rb") as f:
            return self.parse_stream(f, path=str(file_path))

    def parse_bytes(self, data: bytes, path: str = "<bytes>") -> Thermogram:
        """Read a FLIR JPEG held in memory."""
        return self.parse_stream(io.BytesIO(data), path=path)

    def parse_stream(self, stream: BinaryIO, path: str = "") -> Thermogram:
        """Read a FLIR JPEG from a seekable binary stream."""
        blob = extract_flir_app1(stream)
        records = parse_record_directory(blob)

        width, height = 0, 0
        thermal = np.zeros((0, 0), dtype=np.uint16)
        if RecordIndex.RAW_DATA in records:
            width, height, thermal = parse_raw_data(blob, records[RecordIndex.RAW_DATA], self.codec)
        else:
            logger.debug("%s: no RAW_DATA record", path)

        camera_info = {}
        if self.camera_parameters is not None:
            camera_info = self.camera_parameters.read(blob, records.get(RecordIndex.CAMERA_INFO))
        else:
            logger.debug("%s: no camera parameter source configured, temperatures unavailable", path)

        measurements = []
        if RecordIndex.MEASUREMENT_INFO in records:
            measurements = parse_measurements(blob, records[RecordIndex.MEASUREMENT_INFO])

        return Thermogram(
            path=path,
            width=width,
            height=height,
            raw_data=thermal,
            camera_info=camera_info,
            measurements=measurements,
        )
