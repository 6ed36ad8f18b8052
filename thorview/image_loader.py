"""Loading of raw binary image sequences from disk."""

from __future__ import annotations

import math
import os
import sys
from array import array
from pathlib import Path
from typing import Union

from thorview.image_sequence import DataFormatError, ImageDataType, ImageSequence

__all__ = [
    "ImageLoader",
    "calculate_frame_size",
    "calculate_frame_count",
]

PathLike = Union[str, "os.PathLike[str]"]

# Largest finite float32; the running min/max start from these bounds.
_FLOAT32_MAX = 3.4028234663852886e38


def calculate_frame_size(
    width: int, height: int, channels: int, pixel_type: ImageDataType
) -> int:
    """Return the size in bytes of one frame with the given layout."""
    try:
        item_size = ImageDataType(pixel_type).item_size
    except ValueError as exc:
        raise DataFormatError("Unsupported pixel type") from exc
    return width * height * channels * item_size


def calculate_frame_count(
    file_path: PathLike,
    width: int,
    height: int,
    channels: int,
    pixel_type: ImageDataType,
) -> int:
    """Return how many whole frames the file at *file_path* holds.

    Raises DataFormatError if the file is missing or its size is not a
    whole number of frames.
    """
    path = Path(file_path)
    if not path.exists():
        raise DataFormatError(f"File does not exist: {path}")
    file_size = path.stat().st_size
    frame_size = calculate_frame_size(width, height, channels, pixel_type)
    if frame_size == 0 or file_size % frame_size != 0:
        raise DataFormatError("File size is not a multiple of frame size")
    return file_size // frame_size


def _validate_file_path(file_path: PathLike) -> Path:
    if os.fspath(file_path) == "":
        raise DataFormatError("File path cannot be empty")
    path = Path(file_path)
    if not path.exists():
        raise DataFormatError(f"File does not exist: {path}")
    if not path.is_file():
        raise DataFormatError(f"Path is not a regular file: {path}")
    if path.stat().st_size == 0:
        raise DataFormatError(f"File is empty: {path}")
    return path


def _validate_dimensions(width: int, height: int, channels: int) -> None:
    if width <= 0 or height <= 0:
        raise DataFormatError("Image dimensions must be non-zero")
    if channels <= 0 or channels > 4:
        raise DataFormatError("Channel count must be between 1 and 4")


def _read_binary_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise DataFormatError(f"Failed to read file: {path}") from exc


def _little_endian_floats(raw: bytes) -> array:
    values = array("f")
    values.frombytes(raw)
    if sys.byteorder == "big":
        values.byteswap()
    return values


class ImageLoader:
    """Reads headerless binary files of fixed-size frames into sequences.

    Frames are stored back to back; float32 values are little-endian.
    """

    def load_image_sequence(
        self,
        file_path: PathLike,
        width: int,
        height: int,
        pixel_type: ImageDataType,
        channels: int = 3,
        fps: float = 30.0,
    ) -> ImageSequence:
        """Load every frame of the file into a new ImageSequence."""
        path = _validate_file_path(file_path)
        _validate_dimensions(width, height, channels)
        pixel_type = ImageDataType(pixel_type)

        frame_count = calculate_frame_count(path, width, height, channels, pixel_type)
        if frame_count == 0:
            raise DataFormatError("File is too small to contain any complete frames")

        file_data = _read_binary_file(path)
        sequence = ImageSequence(width, height, channels, pixel_type, fps)
        sequence.reserve_frames(frame_count)

        if pixel_type is ImageDataType.UINT8:
            self._load_uint8_frames(file_data, sequence, frame_count)
        else:
            self._load_float32_frames(file_data, sequence, frame_count)
        return sequence

    def load_image_sequence_128(
        self,
        file_path: PathLike,
        pixel_type: ImageDataType,
        channels: int = 3,
        fps: float = 30.0,
    ) -> ImageSequence:
        """Load a sequence of 128x128 frames."""
        return self.load_image_sequence(file_path, 128, 128, pixel_type, channels, fps)

    def load_image_sequence_224(
        self,
        file_path: PathLike,
        pixel_type: ImageDataType,
        channels: int = 3,
        fps: float = 30.0,
    ) -> ImageSequence:
        """Load a sequence of 224x224 frames."""
        return self.load_image_sequence(file_path, 224, 224, pixel_type, channels, fps)

    @staticmethod
    def _frame_chunks(file_data: bytes, frame_size: int, frame_count: int):
        view = memoryview(file_data)
        for frame_index in range(frame_count):
            offset = frame_index * frame_size
            if offset + frame_size > len(view):
                raise DataFormatError(f"Insufficient data for frame {frame_index}")
            yield view[offset : offset + frame_size]

    def _load_uint8_frames(
        self, file_data: bytes, sequence: ImageSequence, frame_count: int
    ) -> None:
        for chunk in self._frame_chunks(file_data, sequence.frame_size_bytes, frame_count):
            sequence.add_frame(chunk)

    def _load_float32_frames(
        self, file_data: bytes, sequence: ImageSequence, frame_count: int
    ) -> None:
        global_min = _FLOAT32_MAX
        global_max = -_FLOAT32_MAX

        for chunk in self._frame_chunks(file_data, sequence.frame_size_bytes, frame_count):
            values = _little_endian_floats(chunk.tobytes())
            finite = [value for value in values if math.isfinite(value)]
            if finite:
                global_min = min(global_min, min(finite))
                global_max = max(global_max, max(finite))
            sequence.add_frame(values)

        if math.isfinite(global_min) and math.isfinite(global_max):
            sequence.set_data_range(global_min, global_max)