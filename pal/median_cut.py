import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from pal.color import Color, average_color, mean_color
from pal.palette import clamp_k, finalize_palette
from pal.sampling import as_pixel_array

log = logging.getLogger(__name__)

RED, GREEN, BLUE = 0, 1, 2


class Box:
    """A group of sampled pixels. Each Box owns its own pixel array."""

    __slots__ = ("pixels",)

    def __init__(self, pixels: np.ndarray):
        self.pixels = pixels

    @property
    def count(self) -> int:
        return int(self.pixels.shape[0])

    def mean(self) -> np.ndarray:
        return mean_color(self.pixels)

    def __repr__(self):
        return f"Box(count={self.count})"


def longest_dimension(pixels: np.ndarray) -> int:
    """
    Channel (RED, GREEN or BLUE) with the widest max - min range.

    Ties go to red, then green. An empty pixel array yields RED.
    """
    if pixels.shape[0] == 0:
        return RED
    range_r, range_g, range_b = pixels.max(axis=0) - pixels.min(axis=0)
    if range_r >= range_g and range_r >= range_b:
        return RED
    if range_g >= range_b:
        return GREEN
    return BLUE


def split_box(box: Box) -> Tuple[Box, Box]:
    """
    Sort a box along its longest channel and cut it at floor(count / 2).

    The first half is the lower box; the upper box holds the median element
    and everything above it. Children get their own copies of the pixels.
    """
    dim = longest_dimension(box.pixels)
    ordered = box.pixels[np.argsort(box.pixels[:, dim], kind="stable")]
    median_index = box.count // 2
    return Box(ordered[:median_index].copy()), Box(ordered[median_index:].copy())


def select_box_to_split(boxes: Sequence[Box]) -> Optional[int]:
    # largest splittable box, first one wins ties
    best_index = None
    max_pixels = -1
    for i, box in enumerate(boxes):
        if box.count > 1 and box.count > max_pixels:
            max_pixels = box.count
            best_index = i
    return best_index


def median_cut_boxes(pixels: np.ndarray, k: int) -> List[Box]:
    """
    Split boxes until there are at least k of them or none can be split.

    Every split replaces one box by two, so the loop lands on k unless it
    runs out of multi-pixel boxes first. Nothing is merged back if the
    count ends above k.
    """
    boxes = [Box(np.array(pixels, copy=True))]
    while len(boxes) < k:
        split_index = select_box_to_split(boxes)
        if split_index is None:
            log.info("Median Cut: no box left to split, stopping at %d box(es).", len(boxes))
            break
        box = boxes.pop(split_index)
        for child in split_box(box):
            if child.count > 0:
                boxes.append(child)

    if len(boxes) > k:
        log.warning("Median Cut: finished with %d boxes, more than the requested %d.", len(boxes), k)
    else:
        log.info("Median Cut: finished with %d box(es) (target %d).", len(boxes), k)
    return boxes


def median_cut_candidates(pixels, k: int) -> np.ndarray:
    """Raw (unrounded) box means for a Median Cut run, edge cases included."""
    pixels = as_pixel_array(pixels)
    k = clamp_k(k, pixels.shape[0], "Median Cut")
    if k == 0:
        return np.empty((0, 3), dtype=np.float64)
    if k == 1:
        return np.array([average_color(pixels)], dtype=np.float64)
    boxes = median_cut_boxes(pixels, k)
    return np.array([box.mean() for box in boxes if box.count > 0], dtype=np.float64).reshape(-1, 3)


def compute_median_cut(pixels, k: int) -> List[Color]:
    """Median Cut palette: one rounded mean color per final box."""
    return finalize_palette(median_cut_candidates(pixels, k)).colors
