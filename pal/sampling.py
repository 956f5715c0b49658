import logging
from typing import Sequence, Union

import numpy as np

log = logging.getLogger(__name__)

DEFAULT_SAMPLING_RATE = 5  # read every 5th source pixel
CHANNELS_PER_PIXEL = 4  # r, g, b, a

PixelBufferLike = Union[bytes, bytearray, memoryview, Sequence[int], np.ndarray]


def sample_colors(buffer: PixelBufferLike, stride: int = DEFAULT_SAMPLING_RATE) -> np.ndarray:
    """
    Subsample a flat, interleaved RGBA pixel buffer into an array of RGB colors.

    Source pixels 0, stride, 2*stride, ... are read until the buffer runs out.
    The alpha channel is dropped; nothing is filtered by alpha or luminance.

    Args:
        buffer: Flat buffer of 8-bit samples laid out as r, g, b, a, r, g, b, a, ...
                (row-major, no padding). A trailing partial pixel is ignored.
        stride (int): Sampling stride in source pixels. Must be >= 1.

    Returns:
        np.ndarray: Sampled colors, shape (N, 3), dtype uint8. N may be 0.

    Raises:
        ValueError: If stride < 1, or if a non-byte buffer holds values that are
                    not whole numbers in [0, 255].
    """
    if stride < 1:
        raise ValueError(f"Sampling stride must be >= 1, got {stride}")

    if isinstance(buffer, (bytes, bytearray, memoryview)):
        flat = np.frombuffer(buffer, dtype=np.uint8)
    else:
        flat = np.asarray(buffer).ravel()
        if flat.size and flat.dtype != np.uint8:
            if not np.issubdtype(flat.dtype, np.number) or np.issubdtype(flat.dtype, np.complexfloating):
                raise ValueError(f"Pixel buffer must hold numbers, got dtype {flat.dtype}")
            if flat.min() < 0 or flat.max() > 255:
                raise ValueError("Pixel buffer values must be in [0, 255]")
            if np.issubdtype(flat.dtype, np.floating) and np.any(flat != np.floor(flat)):
                raise ValueError("Pixel buffer values must be whole numbers")
        flat = flat.astype(np.uint8)

    num_source_pixels = flat.size // CHANNELS_PER_PIXEL
    rgba = flat[: num_source_pixels * CHANNELS_PER_PIXEL].reshape(-1, CHANNELS_PER_PIXEL)
    sampled = np.ascontiguousarray(rgba[::stride, :3])

    log.info("Sampled %d pixels from %d source pixels (stride %d).",
             sampled.shape[0], num_source_pixels, stride)
    return sampled


def as_pixel_array(pixels, dtype=np.float64) -> np.ndarray:
    """Normalise a sequence of colors (tuples, Colors or an (N, 3) array) to an (N, 3) array."""
    arr = np.array(pixels, dtype=dtype)
    if arr.size == 0:
        return arr.reshape(0, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Expected pixels of shape (N, 3), got {arr.shape}")
    return arr
