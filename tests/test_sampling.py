# tests/test_sampling.py
import numpy as np
import pytest
from pal.sampling import as_pixel_array, sample_colors


def test_stride_one_reads_every_pixel_and_drops_alpha(make_rgba_buffer):
    buf = make_rgba_buffer([(1, 2, 3), (4, 5, 6), (7, 8, 9)], alpha=0)
    sampled = sample_colors(buf, 1)
    assert sampled.dtype == np.uint8
    assert sampled.tolist() == [[1, 2, 3], [4, 5, 6], [7, 8, 9]]


def test_stride_reads_pixel_zero_s_2s(make_rgba_buffer):
    colors = [(i, i, i) for i in range(11)]
    sampled = sample_colors(make_rgba_buffer(colors), 5)
    assert sampled.tolist() == [[0, 0, 0], [5, 5, 5], [10, 10, 10]]


def test_alpha_is_not_used_for_filtering():
    buf = bytes([10, 20, 30, 0, 40, 50, 60, 255])
    assert sample_colors(buf, 1).tolist() == [[10, 20, 30], [40, 50, 60]]


def test_empty_buffer_gives_empty_sample():
    sampled = sample_colors(b"", 5)
    assert sampled.shape == (0, 3)


def test_stride_larger_than_buffer_still_reads_first_pixel(make_rgba_buffer):
    sampled = sample_colors(make_rgba_buffer([(9, 8, 7), (1, 1, 1)]), 100)
    assert sampled.tolist() == [[9, 8, 7]]


def test_trailing_partial_pixel_is_ignored():
    buf = bytes([1, 2, 3, 255, 4, 5])
    assert sample_colors(buf, 1).tolist() == [[1, 2, 3]]


def test_accepts_int_sequences_and_image_arrays():
    assert sample_colors([1, 2, 3, 4, 5, 6, 7, 8], 1).tolist() == [[1, 2, 3], [5, 6, 7]]
    image = np.zeros((2, 2, 4), dtype=np.uint8)
    image[1, 1] = (200, 100, 50, 255)
    assert sample_colors(image, 1).tolist()[-1] == [200, 100, 50]


def test_stride_below_one_raises(make_rgba_buffer):
    with pytest.raises(ValueError):
        sample_colors(make_rgba_buffer([(1, 1, 1)]), 0)


def test_as_pixel_array_shapes():
    assert as_pixel_array([]).shape == (0, 3)
    assert as_pixel_array([(1, 2, 3)]).shape == (1, 3)
    with pytest.raises(ValueError):
        as_pixel_array([(1, 2)])


def test_empty_sequence_gives_uint8_sample():
    sampled = sample_colors([], 1)
    assert sampled.shape == (0, 3)
    assert sampled.dtype == np.uint8


def test_int_sequence_gives_uint8_sample():
    assert sample_colors([1, 2, 3, 4], 1).dtype == np.uint8


@pytest.mark.parametrize("buffer", [
    [256, 0, 0, 0],
    [-1, 0, 0, 0],
    [0.5, 0, 0, 0],
    np.array([10.0, 20.0, np.nan, 0.0]),
])
def test_out_of_range_values_raise_instead_of_wrapping(buffer):
    with pytest.raises(ValueError):
        sample_colors(buffer, 1)


def test_whole_float_values_are_accepted():
    assert sample_colors(np.array([10.0, 20.0, 30.0, 255.0]), 1).tolist() == [[10, 20, 30]]
