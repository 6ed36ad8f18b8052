from array import array

import pytest

from thorview.image_sequence import (
    DataFormatError,
    ImageDataType,
    ImageSequence,
    ImageView,
)


def _uint8_rgb():
    seq = ImageSequence(4, 4, 3, ImageDataType.UINT8)
    data = bytes((i * 50) % 256 for i in range(4 * 4 * 3))
    seq.add_frame(data)
    return seq, data


def _float_rgb():
    seq = ImageSequence(4, 4, 3, ImageDataType.FLOAT32)
    data = [i * 0.1 for i in range(4 * 4 * 3)]
    seq.add_frame(data)
    return seq, data


def test_uint8_view_dimensions():
    seq, data = _uint8_rgb()
    view = seq.image_view(0)
    assert (view.width, view.height, view.channels) == (4, 4, 3)
    assert view.pixel_type is ImageDataType.UINT8
    assert bytes(view.as_uint8()) == data
    assert view.data_size_bytes == len(data)


def test_float_view_dimensions():
    seq, data = _float_rgb()
    view = seq.image_view(0)
    assert (view.width, view.height, view.channels) == (4, 4, 3)
    assert view.pixel_type is ImageDataType.FLOAT32
    assert list(view.as_float32()) == pytest.approx(data, rel=1e-6)
    assert view.data_size_bytes == len(data) * 4


def test_grayscale_sequence():
    seq = ImageSequence(4, 4, 1, ImageDataType.UINT8)
    seq.add_frame(bytes(i * 16 for i in range(16)))
    view = seq.image_view(0)
    assert view.channels == 1
    assert view.pixel(1, 0) == (16,)


def test_wide_and_tall_sequences():
    wide = ImageSequence(8, 4, 3, ImageDataType.UINT8)
    wide.add_frame(bytes((i * 30) % 256 for i in range(8 * 4 * 3)))
    tall = ImageSequence(4, 8, 3, ImageDataType.UINT8)
    tall.add_frame(bytes((i * 40) % 256 for i in range(4 * 8 * 3)))
    assert (wide.image_view(0).width, wide.image_view(0).height) == (8, 4)
    assert (tall.image_view(0).width, tall.image_view(0).height) == (4, 8)


def test_pixel_access_uint8():
    seq, data = _uint8_rgb()
    view = seq.image_view(0)
    assert view.pixel(0, 0) == tuple(data[0:3])
    assert view.pixel(3, 3) == tuple(data[45:48])


def test_pixel_access_float():
    seq, data = _float_rgb()
    view = seq.image_view(0)
    assert view.pixel(2, 1) == pytest.approx(tuple(data[18:21]), rel=1e-6)


@pytest.mark.parametrize("x,y", [(4, 0), (0, 4), (-1, 0)])
def test_pixel_out_of_bounds(x, y):
    seq, _ = _uint8_rgb()
    with pytest.raises(DataFormatError):
        seq.image_view(0).pixel(x, y)


def test_view_type_mismatch():
    useq, _ = _uint8_rgb()
    fseq, _ = _float_rgb()
    with pytest.raises(DataFormatError):
        useq.image_view(0).as_float32()
    with pytest.raises(DataFormatError):
        fseq.image_view(0).as_uint8()


def test_default_strides():
    useq, _ = _uint8_rgb()
    fseq, _ = _float_rgb()
    assert useq.image_view(0).stride == 4 * 3
    assert fseq.image_view(0).stride == 4 * 3 * 4


def test_view_custom_stride():
    data = bytes(range(2 * 10))
    view = ImageView(data, 2, 2, 3, stride=10)
    assert view.stride == 10
    assert view.pixel(1, 1) == (13, 14, 15)


def test_view_too_small():
    with pytest.raises(DataFormatError):
        ImageView(bytes(11), 2, 2, 3)
    with pytest.raises(DataFormatError):
        ImageView(array("f", [0.0] * 11), 2, 2, 3)


@pytest.mark.parametrize("w,h,c", [(0, 4, 3), (4, 0, 3), (4, 4, 0), (4, 4, 5)])
def test_view_bad_dimensions(w, h, c):
    with pytest.raises(DataFormatError):
        ImageView(bytes(1000), w, h, c)


@pytest.mark.parametrize("w,h,c", [(0, 4, 3), (4, 0, 3), (4, 4, 0), (4, 4, 5)])
def test_sequence_bad_dimensions(w, h, c):
    with pytest.raises(DataFormatError):
        ImageSequence(w, h, c, ImageDataType.UINT8)


@pytest.mark.parametrize("fps", [0.0, -1.0])
def test_sequence_bad_fps(fps):
    with pytest.raises(DataFormatError):
        ImageSequence(4, 4, 3, ImageDataType.UINT8, fps)


def test_defaults():
    seq = ImageSequence(4, 4, 3, ImageDataType.FLOAT32)
    assert seq.fps == 30.0
    assert seq.frame_count == 0
    assert not seq.has_data_range
    assert seq.data_min_value == 0.0 and seq.data_max_value == 0.0


def test_sizes_scale_with_frames():
    seq = ImageSequence(4, 4, 3, ImageDataType.FLOAT32)
    assert seq.frame_size_bytes == seq.pixels_per_frame * 4
    for _ in range(3):
        seq.add_frame([0.0] * seq.pixels_per_frame)
    assert seq.frame_count == 3
    assert len(seq) == 3
    assert seq.total_size_bytes == 3 * seq.frame_size_bytes


def test_frames_are_kept_separate():
    seq = ImageSequence(2, 1, 1, ImageDataType.UINT8)
    seq.add_frame(b"\x01\x02")
    view0 = seq.image_view(0)
    seq.add_frame(b"\x03\x04")
    assert bytes(view0.as_uint8()) == b"\x01\x02"
    assert bytes(seq.image_view(1).as_uint8()) == b"\x03\x04"


def test_frame_index_out_of_bounds():
    seq, _ = _uint8_rgb()
    with pytest.raises(DataFormatError):
        seq.image_view(1)
    with pytest.raises(DataFormatError):
        seq.image_view(-1)


def test_wrong_frame_size():
    seq = ImageSequence(4, 4, 3, ImageDataType.UINT8)
    with pytest.raises(DataFormatError):
        seq.add_frame(bytes(47))
    fseq = ImageSequence(4, 4, 3, ImageDataType.FLOAT32)
    with pytest.raises(DataFormatError):
        fseq.add_frame([0.0] * 47)


def test_float_frame_into_uint8_sequence():
    seq = ImageSequence(2, 2, 1, ImageDataType.UINT8)
    with pytest.raises(DataFormatError):
        seq.add_frame(array("f", [0.0] * 4))


def test_none_frame():
    seq = ImageSequence(2, 2, 1, ImageDataType.UINT8)
    with pytest.raises(DataFormatError):
        seq.add_frame(None)


def test_raw_bytes_into_float_sequence_round_trip():
    values = array("f", [0.5, -1.25, 3.0, 42.0])
    seq = ImageSequence(2, 2, 1, ImageDataType.FLOAT32)
    seq.add_frame(values.tobytes())
    assert list(seq.image_view(0).as_float32()) == list(values)


def test_clear_keeps_metadata():
    seq, _ = _uint8_rgb()
    seq.clear()
    assert seq.frame_count == 0
    assert seq.total_size_bytes == 0
    assert (seq.width, seq.height, seq.channels) == (4, 4, 3)
    with pytest.raises(DataFormatError):
        seq.image_view(0)


def test_reserve_frames():
    seq = ImageSequence(2, 2, 1, ImageDataType.UINT8)
    seq.reserve_frames(5)
    assert seq.reserved_frames == 5
    assert seq.frame_count == 0
    with pytest.raises(DataFormatError):
        seq.reserve_frames(-1)


def test_data_range_and_fps():
    seq = ImageSequence(2, 2, 1, ImageDataType.FLOAT32)
    seq.set_data_range(-1.0, 1.0)
    seq.fps = 12.0
    assert seq.has_data_range
    assert (seq.data_min_value, seq.data_max_value) == (-1.0, 1.0)
    assert seq.fps == 12.0


@pytest.mark.parametrize(
    "pixel_type,expected",
    [(ImageDataType.UINT8, 4), (ImageDataType.FLOAT32, 16)],
)
def test_frame_size_follows_pixel_type(pixel_type, expected):
    seq = ImageSequence(2, 2, 1, pixel_type)
    assert seq.frame_size_bytes == expected