import logging
import numbers
import time
from enum import Enum
from typing import Union

from pal.kmeans import DEFAULT_MAX_ITERATIONS, kmeans_centroids
from pal.median_cut import median_cut_candidates
from pal.palette import PaletteResult, finalize_palette
from pal.sampling import DEFAULT_SAMPLING_RATE, PixelBufferLike, sample_colors

log = logging.getLogger(__name__)

DEFAULT_NUM_COLORS = 8


class Algorithm(Enum):
    KMEANS = "kmeans"
    MEDIAN_CUT = "mediancut"


class UnknownAlgorithmError(ValueError):
    """Raised when a palette algorithm identifier is not recognised."""


def resolve_algorithm(algorithm: Union[Algorithm, str]) -> Algorithm:
    if isinstance(algorithm, Algorithm):
        return algorithm
    try:
        return Algorithm(str(algorithm).strip().lower())
    except ValueError:
        known = ", ".join(a.value for a in Algorithm)
        raise UnknownAlgorithmError(f"Unknown algorithm '{algorithm}'. Expected one of: {known}.") from None


def extract_palette(
    buffer: PixelBufferLike,
    k: int = DEFAULT_NUM_COLORS,
    algorithm: Union[Algorithm, str] = Algorithm.KMEANS,
    sampling_rate: int = DEFAULT_SAMPLING_RATE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    rng=None,
) -> PaletteResult:
    """
    Extract a palette of up to k colors from a raw RGBA pixel buffer.

    Args:
        buffer: Flat RGBA buffer (4 samples per pixel, row-major).
        k (int): Number of colors wanted, >= 1.
        algorithm: Algorithm member or its identifier ("kmeans", "mediancut").
        sampling_rate (int): Read every n-th source pixel.
        max_iterations (int): K-Means iteration cap. Ignored by Median Cut.
        rng: Random source for K-Means seeding. Ignored by Median Cut.

    Returns:
        PaletteResult: the palette, any rejected colors, and run metadata.

    Raises:
        UnknownAlgorithmError: If `algorithm` is not a known identifier.
        ValueError: If k is not an integer >= 1 or sampling_rate < 1.
    """
    selected = resolve_algorithm(algorithm)
    if isinstance(k, bool) or not isinstance(k, numbers.Integral) or k < 1:
        raise ValueError(f"Number of colors must be an integer >= 1, got {k!r}")

    start = time.perf_counter()
    pixels = sample_colors(buffer, sampling_rate)

    if selected is Algorithm.KMEANS:
        candidates = kmeans_centroids(pixels, k, max_iterations=max_iterations, rng=rng)
    else:
        candidates = median_cut_candidates(pixels, k)

    result = finalize_palette(candidates)
    result.algorithm = selected.value
    result.requested_k = int(k)
    result.sampled_count = int(pixels.shape[0])
    result.elapsed = time.perf_counter() - start

    log.info("Extracted %d color(s) with %s in %.3fs.",
             len(result.colors), selected.value.upper(), result.elapsed)
    return result
