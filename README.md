# thorview

thorview loads raw, headerless binary image sequences and lets you inspect them frame by frame. Such files are often tensors that an ML pipeline has dumped to disk.

## File format

- A file holds frames stored back to back.
- Every frame has the same width, height and channel count. The channel count is 1 to 4.
- Pixels are either `uint8` or little-endian `float32`.
- The file size must be a whole multiple of the frame size.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Loading a sequence

```python
from thorview.image_loader import ImageLoader, calculate_frame_count
from thorview.image_sequence import ImageDataType

loader = ImageLoader()
seq = loader.load_image_sequence_224("frames.bin", ImageDataType.FLOAT32, 1, 30.0)

print(seq.frame_count, seq.width, seq.height, seq.channels)
if seq.has_data_range:
    print("values range from", seq.data_min_value, "to", seq.data_max_value)

view = seq.image_view(0)
print(view.pixel(10, 20))
```

### Which loader to use

- `ImageLoader.load_image_sequence(file_path, width, height, pixel_type, channels=3, fps=30.0)` accepts any frame size.
- `load_image_sequence_128` and `load_image_sequence_224` are shortcuts for square 128×128 and 224×224 frames.

### Data range for float32

For `float32` data, the loader records the smallest and largest finite values across all frames. NaN and infinite values are ignored. For `uint8` data, no range is recorded. In that case `has_data_range` is `False`, and `data_min_value` and `data_max_value` are `0.0`.

### Helper functions

`calculate_frame_count(file_path, width, height, channels, pixel_type)` tells you how many whole frames a file holds. It does this without reading the file.

`calculate_frame_size(width, height, channels, pixel_type)` gives the size of one frame in bytes.

## Building a sequence in memory

```python
from thorview.image_sequence import ImageSequence, ImageDataType

seq = ImageSequence(4, 4, 3, ImageDataType.UINT8, 30.0)
seq.add_frame(bytes(range(48)))
view = seq.image_view(0)
data = view.as_uint8()
```

### Adding frames with `add_frame`

It accepts one frame of data in either of these forms:

- **Raw bytes**, which must be exactly `frame_size_bytes` long. In a `float32` sequence, the bytes are read as native `float32` values.
- **A `float32` array or a sequence of numbers**, which must hold exactly `pixels_per_frame` values. This form is allowed only in a `float32` sequence.

### Other members of `ImageSequence`

- `frame_count` and `len(seq)` give the number of frames.
- `frame_size_bytes` and `total_size_bytes` give sizes in bytes.
- `fps` holds the frame rate and can be assigned.
- `clear()` drops all frames.
- `reserve_frames(n)` records an expected frame count. You can read it back as `reserved_frames`.
- `set_data_range(min, max)` records a value range.

### Views with `ImageView`

`image_view(i)` returns an `ImageView` of frame `i` without copying the data. An `ImageView` has these members:

- `width`, `height`, `channels`, `stride`, `pixel_type` and `data_size_bytes`.
- `as_uint8()` and `as_float32()` return the data as a `memoryview`. Each one raises an error if the pixel type does not match.
- `pixel(x, y)` returns the pixel's channel values as a tuple.

## Errors

Invalid input raises `thorview.image_sequence.DataFormatError`, which is a subclass of `ValueError`. This covers:

- dimensions that are zero;
- more than 4 channels;
- a frame rate that is not positive;
- a frame of the wrong size or type;
- a frame index or pixel coordinate out of range;
- a file that is missing, empty, not a regular file, or not a whole number of frames.

## What this package does not do

thorview reads and holds image data only. It does not do any of the following:

- open a window or draw frames on screen;
- play sequences back over time;
- map values to colours;
- provide a command-line tool.

The `fps` value is stored with a sequence, but nothing in the package acts on it.