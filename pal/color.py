import math
from typing import NamedTuple, Sequence, Union

import numpy as np

Number = Union[int, float]


class Color(NamedTuple):
    r: int
    g: int
    b: int


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves going up (127.5 -> 128).

    Python's round() uses banker's rounding, which would turn the mean of
    black and white into 127 instead of 128.
    """
    return int(math.floor(value + 0.5))


def color_distance(color1, color2):
    """
    Squared Euclidean distance between RGB triples (no square root).

    Either argument may be an (N, 3) array; the distance broadcasts over
    the leading axes, so an (N, 3) array against one triple gives N distances.
    """
    diff = np.asarray(color1, dtype=np.float64) - np.asarray(color2, dtype=np.float64)
    return (diff * diff).sum(axis=-1)


def mean_color(pixels) -> np.ndarray:
    """Unrounded elementwise mean of a non-empty collection of RGB triples."""
    arr = np.asarray(pixels, dtype=np.float64).reshape(-1, 3)
    if arr.shape[0] == 0:
        raise ValueError("mean_color needs at least one pixel")
    # Sum in full precision, divide once.
    return arr.sum(axis=0) / arr.shape[0]


def average_color(pixels) -> Color:
    """
    Rounded elementwise mean of a non-empty collection of RGB triples.

    Args:
        pixels: (N, 3) array or sequence of triples. Must not be empty.

    Returns:
        Color: the mean color, each channel rounded half-up.
    """
    return Color(*(round_half_up(channel) for channel in mean_color(pixels)))


def to_hex(color: Sequence[int]) -> str:
    r, g, b = [int(c) for c in color]
    return "#{:02X}{:02X}{:02X}".format(r, g, b)


def luminance(color: Sequence[Number]) -> float:
    # Rec. 601 luma, normalised to [0, 1]
    r, g, b = color[0], color[1], color[2]
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255
