"""In-memory image sequences and lightweight views onto their frames."""

from __future__ import annotations

import enum
from array import array
from collections.abc import Sequence
from typing import Union

__all__ = ["DataFormatError", "ImageDataType", "ImageView", "ImageSequence"]

_FLOAT_SIZE = array("f").itemsize
_MAX_CHANNELS = 4

PixelData = Union[bytes, bytearray, memoryview, array, Sequence]


class DataFormatError(ValueError):
    """Raised when image data or its description is malformed."""


class ImageDataType(enum.Enum):
    """Storage type of a single pixel channel."""

    UINT8 = "uint8"
    FLOAT32 = "float32"

    @property
    def item_size(self) -> int:
        """Size in bytes of one channel value."""
        return 1 if self is ImageDataType.UINT8 else _FLOAT_SIZE


def _check_dimensions(kind: str, width: int, height: int, channels: int) -> None:
    if width <= 0 or height <= 0 or channels <= 0:
        raise DataFormatError(f"{kind} dimensions must be non-zero")
    if channels > _MAX_CHANNELS:
        raise DataFormatError(f"{kind} supports maximum {_MAX_CHANNELS} channels")


def _as_typed_view(data: PixelData) -> tuple[memoryview, ImageDataType]:
    """Wrap *data* in a flat memoryview and report its pixel type."""
    if isinstance(data, (list, tuple)):
        data = array("f", data)
    try:
        view = memoryview(data)
    except TypeError:
        view = memoryview(array("f", data))
    if view.format in ("B", "b", "c"):
        return view.cast("B"), ImageDataType.UINT8
    if view.format == "f":
        return view.cast("B").cast("f"), ImageDataType.FLOAT32
    raise DataFormatError(f"Unsupported pixel buffer format: {view.format!r}")


class ImageView:
    """A non-owning view onto one frame of uint8 or float32 pixels.

    Bytes-like data gives a uint8 view; float32 arrays and sequences of
    numbers give a float32 view.
    """

    def __init__(
        self,
        data: PixelData,
        width: int,
        height: int,
        channels: int,
        stride: int = 0,
    ) -> None:
        self._data, self.pixel_type = _as_typed_view(data)
        self.width = width
        self.height = height
        self.channels = channels
        _check_dimensions("ImageView", width, height, channels)

        if self.pixel_type is ImageDataType.UINT8:
            self.stride = stride or width * channels
            if len(self._data) < height * self.stride:
                raise DataFormatError(
                    "ImageView data size too small for specified dimensions"
                )
        else:
            self.stride = stride or width * channels * _FLOAT_SIZE
            if len(self._data) < width * height * channels:
                raise DataFormatError(
                    "ImageView data size too small for specified dimensions"
                )

    @property
    def data_size_bytes(self) -> int:
        """Number of bytes covered by the view."""
        return len(self._data) * self.pixel_type.item_size

    def as_uint8(self) -> memoryview:
        """Return the pixel data as uint8 values."""
        if self.pixel_type is not ImageDataType.UINT8:
            raise DataFormatError("ImageView contains float32 data, not uint8")
        return self._data

    def as_float32(self) -> memoryview:
        """Return the pixel data as float32 values."""
        if self.pixel_type is not ImageDataType.FLOAT32:
            raise DataFormatError("ImageView contains uint8 data, not float32")
        return self._data

    def pixel(self, x: int, y: int) -> tuple:
        """Return the channel values of the pixel at column *x*, row *y*."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise DataFormatError("ImageView pixel coordinates out of bounds")
        if self.pixel_type is ImageDataType.UINT8:
            offset = y * self.stride + x * self.channels
        else:
            offset = (y * self.width + x) * self.channels
        return tuple(self._data[offset : offset + self.channels])


class ImageSequence:
    """Owns the frames of a fixed-size image sequence and its metadata."""

    def __init__(
        self,
        width: int,
        height: int,
        channels: int,
        pixel_type: ImageDataType,
        fps: float = 30.0,
    ) -> None:
        _check_dimensions("ImageSequence", width, height, channels)
        if fps <= 0.0:
            raise DataFormatError("ImageSequence FPS must be positive")
        self._width = width
        self._height = height
        self._channels = channels
        self._pixel_type = ImageDataType(pixel_type)
        self.fps = fps
        self._frames: list[bytes | array] = []
        self._reserved_frames = 0
        self._data_range: tuple[float, float] | None = None

    width = property(lambda self: self._width, doc="Frame width in pixels.")
    height = property(lambda self: self._height, doc="Frame height in pixels.")
    channels = property(lambda self: self._channels, doc="Channels per pixel.")
    pixel_type = property(lambda self: self._pixel_type, doc="Pixel storage type.")

    @property
    def frame_count(self) -> int:
        """Number of frames held."""
        return len(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    @property
    def pixels_per_frame(self) -> int:
        """Number of channel values in one frame."""
        return self._width * self._height * self._channels

    @property
    def frame_size_bytes(self) -> int:
        """Size of one frame in bytes."""
        return self.pixels_per_frame * self._pixel_type.item_size

    @property
    def total_size_bytes(self) -> int:
        """Size of all frames in bytes."""
        return self.frame_count * self.frame_size_bytes

    @property
    def reserved_frames(self) -> int:
        """Capacity hint given by the last call to reserve_frames."""
        return self._reserved_frames

    def add_frame(self, frame_data: PixelData) -> None:
        """Append one frame.

        Bytes-like data must be exactly one frame of raw bytes; for a float32
        sequence those bytes are read as native float32 values.  A float32
        array or a sequence of numbers may only be added to a float32
        sequence and must hold exactly one frame's values.
        """
        if frame_data is None:
            raise DataFormatError("Frame data cannot be null")
        view, data_type = _as_typed_view(frame_data)

        if data_type is ImageDataType.UINT8:
            if len(view) != self.frame_size_bytes:
                raise DataFormatError("Frame data size does not match expected size")
            if self._pixel_type is ImageDataType.UINT8:
                self._frames.append(view.tobytes())
            else:
                if len(view) % _FLOAT_SIZE != 0:
                    raise DataFormatError(
                        "Float32 frame data size must be multiple of sizeof(float)"
                    )
                frame = array("f")
                frame.frombytes(view.tobytes())
                self._frames.append(frame)
            return

        if self._pixel_type is not ImageDataType.FLOAT32:
            raise DataFormatError("Cannot add float32 frame to uint8 ImageSequence")
        if len(view) != self.pixels_per_frame:
            raise DataFormatError("Frame data size does not match expected pixel count")
        self._frames.append(array("f", view))

    def reserve_frames(self, frame_count: int) -> None:
        """Record how many frames are expected to be added."""
        if frame_count < 0:
            raise DataFormatError("Frame count cannot be negative")
        self._reserved_frames = frame_count

    def clear(self) -> None:
        """Drop all frames, keeping the metadata."""
        self._frames.clear()

    def image_view(self, frame_index: int) -> ImageView:
        """Return a view onto the frame at *frame_index* without copying it."""
        if not 0 <= frame_index < self.frame_count:
            raise DataFormatError("Frame index out of bounds")
        return ImageView(
            self._frames[frame_index], self._width, self._height, self._channels
        )

    @property
    def has_data_range(self) -> bool:
        """Whether a data range has been recorded."""
        return self._data_range is not None

    @property
    def data_min_value(self) -> float:
        """Smallest recorded data value, 0.0 when none is recorded."""
        return self._data_range[0] if self._data_range else 0.0

    @property
    def data_max_value(self) -> float:
        """Largest recorded data value, 0.0 when none is recorded."""
        return self._data_range[1] if self._data_range else 0.0

    def set_data_range(self, min_value: float, max_value: float) -> None:
        """Record the range of values found in the data."""
        self._data_range = (min_value, max_value)