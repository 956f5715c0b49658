import logging
from typing import List

import numpy as np

from pal.color import Color, average_color, color_distance
from pal.palette import clamp_k, finalize_palette
from pal.sampling import as_pixel_array

log = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 20


def _resolve_rng(rng):
    return rng if rng is not None else np.random.default_rng()


def initialize_centroids(pixels: np.ndarray, k: int, rng) -> np.ndarray:
    """
    Pick k starting centroids from the sampled pixels.

    With fewer than k+1 pixels there are not enough distinct indexes to draw
    from, so every color-distinct pixel becomes a centroid (first-seen order)
    and randomly chosen centroids are duplicated until there are exactly k.
    Otherwise k distinct indexes are drawn uniformly without replacement.
    """
    n = pixels.shape[0]
    if k >= n:
        _, first_seen = np.unique(pixels, axis=0, return_index=True)
        centroids = [pixels[i].copy() for i in np.sort(first_seen)]
        log.debug("K-Means init: k >= sampled pixels, using %d unique pixel(s).", len(centroids))
        while 0 < len(centroids) < k:
            centroids.append(centroids[int(rng.integers(len(centroids)))].copy())
        return np.array(centroids, dtype=np.float64).reshape(-1, 3)

    indices = np.asarray(rng.choice(n, size=k, replace=False), dtype=np.intp)
    return pixels[indices].astype(np.float64)


def assign_pixels(pixels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Index of the nearest centroid for every pixel (squared distance, lowest index wins ties)."""
    n = pixels.shape[0]
    best = np.zeros(n, dtype=np.intp)
    best_dist = np.full(n, np.inf)
    for j, centroid in enumerate(centroids):
        dist = color_distance(pixels, centroid)
        # strict < keeps the earlier centroid on ties
        closer = dist < best_dist
        best[closer] = j
        best_dist[closer] = dist[closer]
    return best


def update_centroids(pixels: np.ndarray, assignments: np.ndarray, k: int, rng) -> np.ndarray:
    """
    Move every centroid to the mean of its members.

    Means are kept at full precision. A centroid that lost all its members
    is re-seeded with the color of a uniformly random sampled pixel.
    """
    counts = np.bincount(assignments, minlength=k)
    sums = np.stack(
        [np.bincount(assignments, weights=pixels[:, c], minlength=k) for c in range(3)],
        axis=1,
    )
    centroids = np.empty((k, 3), dtype=np.float64)
    for j in range(k):
        if counts[j] > 0:
            centroids[j] = sums[j] / counts[j]
        else:
            random_index = int(rng.integers(pixels.shape[0]))
            log.debug("K-Means: centroid %d is empty, re-seeding from pixel %d.", j, random_index)
            centroids[j] = pixels[random_index]
    return centroids


def kmeans_centroids(
    pixels,
    k: int,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    rng=None,
) -> np.ndarray:
    """
    Run K-Means over sampled colors and return the raw (unrounded) centroids.

    Args:
        pixels: Sampled colors, (N, 3) array or sequence of RGB triples.
        k (int): Requested number of clusters. Clamped to N.
        max_iterations (int): Upper bound on assignment/update rounds.
        rng: numpy.random.Generator (or compatible object) used for seeding
             and re-seeding. A fresh default_rng() if None.

    Returns:
        np.ndarray: (M, 3) float centroids, M == effective k (0 for empty input).
    """
    pixels = as_pixel_array(pixels)
    k = clamp_k(k, pixels.shape[0], "K-Means")
    if k == 0:
        return np.empty((0, 3), dtype=np.float64)
    if k == 1:
        return np.array([average_color(pixels)], dtype=np.float64)

    rng = _resolve_rng(rng)
    centroids = initialize_centroids(pixels, k, rng)
    assignments = np.full(pixels.shape[0], -1, dtype=np.intp)

    converged = False
    for iteration in range(max_iterations):
        new_assignments = assign_pixels(pixels, centroids)
        if np.array_equal(new_assignments, assignments):
            converged = True
            log.info("K-Means: converged at iteration %d.", iteration + 1)
            break
        assignments = new_assignments
        centroids = update_centroids(pixels, assignments, k, rng)

    if not converged:
        log.info("K-Means: reached the maximum of %d iterations.", max_iterations)
    return centroids


def compute_kmeans(
    pixels,
    k: int,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    rng=None,
) -> List[Color]:
    """K-Means palette: at most k colors, rounded and validated."""
    return finalize_palette(kmeans_centroids(pixels, k, max_iterations, rng)).colors
