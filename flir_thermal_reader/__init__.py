"""
flir_thermal_reader - Python library for reading FLIR radiometric JPEG files

Extracts the raw thermal image, the measurement annotations and (given the
camera's Planck coefficients) the temperature grid embedded in the APP1
segments of a FLIR .jpg.

Main usage:
    from flir_thermal_reader import read_flir, FixedCameraParameters

    thermogram = read_flir(
        "FLIR0001.jpg",
        camera_parameters=FixedCameraParameters({
            "planck_r1": 21106.77, "planck_r2": 0.012545258,
            "planck_b": 1501.0, "planck_f": 1.0, "planck_o": -7340.0,
        }),
    )
    print(thermogram.raw_data.shape)
    print(f"Average temperature: {thermogram.get_average_temperature():.2f}°C")
"""

__version__ = "0.1.0"

from .reader import read_flir, FlirReader
from .parsers import FlirParser
from .models import Thermogram, Measurement, Tool
from .camera_info import CameraParameterSource, FixedCameraParameters, LayoutCameraParameterSource
from .raw_data import ImageCodec, PngCodec
from .records import RecordIndex, RecordMetadata
from .errors import FlirError, FormatError, UnsupportedFormatError, MissingCalibrationError

__all__ = [
    "read_flir",
    "FlirReader",
    "FlirParser",
    "Thermogram",
    "Measurement",
    "Tool",
    "CameraParameterSource",
    "FixedCameraParameters",
    "LayoutCameraParameterSource",
    "ImageCodec",
    "PngCodec",
    "RecordIndex",
    "RecordMetadata",
    "FlirError",
    "FormatError",
    "UnsupportedFormatError",
    "MissingCalibrationError",
]
