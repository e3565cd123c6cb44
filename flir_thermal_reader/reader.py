"""Read FLIR radiometric JPEG files; returns Thermogram (raw counts, °C on demand, measurements)."""

import logging
from typing import Union, List, Optional
from pathlib import Path

from .camera_info import CameraParameterSource
from .models import Thermogram
from .parsers import FlirParser
from .raw_data import ImageCodec, PngCodec

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = [".jpg", ".jpeg"]


def read_flir(
    file_path: Union[str, Path],
    camera_parameters: Optional[CameraParameterSource] = None,
    codec: Optional[ImageCodec] = PngCodec(),
) -> Thermogram:
    """Read a FLIR .jpg file; camera_parameters supplies the Planck coefficients for .celsius."""
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    file_extension = file_path.suffix.lower()
    if file_extension not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported file format: {file_extension}. Supported formats: {', '.join(SUPPORTED_FORMATS)}"
        )

    parser = FlirParser(camera_parameters=camera_parameters, codec=codec)
    return parser.parse(str(file_path))


class FlirReader:
    """Read FLIR radiometric JPEG files, one at a time or a whole directory."""

    def __init__(
        self,
        camera_parameters: Optional[CameraParameterSource] = None,
        codec: Optional[ImageCodec] = PngCodec(),
    ):
        self.camera_parameters = camera_parameters
        self.codec = codec

    def read_file(self, file_path: Union[str, Path]) -> Thermogram:
        """Read one file and return its Thermogram."""
        return read_flir(file_path, camera_parameters=self.camera_parameters, codec=self.codec)

    def read_directory(self, directory_path: Union[str, Path], recursive: bool = False) -> List[Thermogram]:
        """Return Thermograms for the .jpg/.jpeg files in directory; unreadable files are logged and skipped."""
        directory_path = Path(directory_path)
        if not directory_path.is_dir():
            raise NotADirectoryError(f"Not a directory: {directory_path}")
        out = []
        pattern = "**/*" if recursive else "*"
        for file_path in sorted(directory_path.glob(pattern)):
            if file_path.is_file() and file_path.suffix.lower() in SUPPORTED_FORMATS:
                try:
                    out.append(self.read_file(file_path))
                except Exception as e:
                    logger.warning("Error reading %s: %s", file_path, e)
        return out

    def get_supported_formats(self) -> List[str]:
        return list(SUPPORTED_FORMATS)

    def validate_file(self, file_path: Union[str, Path]) -> bool:
        """Return True if file can be read without error."""
        try:
            self.read_file(file_path)
            return True
        except Exception:
            return False
