# noteshrink/kmeans.py
from __future__ import annotations

"""
K-means over RGB colour rows with deterministic hue-wheel seeding.

Exports:
  seed_centres(k)                    -> float32 [k,3]
  closest(points, centres)           -> intp [N]
  update_centres(data, labels, k)    -> float32 [k,3]
  kmeans_step(data, labels, k)       -> (centres, labels, changes)
  kmeans(data, k, max_iter)          -> KMeansResult

Notes:
  - Seeds sit on the full-saturation, full-value hue wheel at i/(k-1), so
    runs are reproducible and common ink hues start in separate clusters.
    The last seed (hue 1.0) falls outside the six sectors and is white.
  - Empty clusters keep a zero-vector centre instead of dividing by zero.
"""

from typing import NamedTuple, Tuple

import numpy as np

from .colour_convert import hsv_to_rgb
from .core_types import RGBF, Labels, as_colour_rows


class KMeansResult(NamedTuple):
    centres: RGBF
    labels: Labels
    iterations: int
    converged: bool


def seed_centres(k: int) -> RGBF:
    """k evenly spaced hue-wheel colours (s=1, v=1). k == 1 gives pure red."""
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")
    if k == 1:
        hues = np.zeros(1, dtype=np.float32)
    else:
        hues = np.arange(k, dtype=np.float32) / np.float32(k - 1)
    return hsv_to_rgb(hues, 1.0, 1.0)


def closest(points: np.ndarray, centres: np.ndarray) -> Labels:
    """Index of the nearest centre per point by squared RGB distance; ties go to the lower index."""
    pts = as_colour_rows(points)
    ctr = as_colour_rows(centres)
    diff = pts[:, None, :] - ctr[None, :, :]
    dist2 = np.sum(diff * diff, axis=2)
    return np.argmin(dist2, axis=1).astype(np.intp, copy=False)


def update_centres(data: RGBF, labels: Labels, k: int) -> RGBF:
    """Mean of each cluster's members; members of an empty cluster count as 1."""
    counts = np.bincount(labels, minlength=k)
    sums = np.stack(
        [np.bincount(labels, weights=data[:, c], minlength=k) for c in range(3)],
        axis=1,
    )
    counts = np.maximum(counts, 1)
    return (sums / counts[:, None]).astype(np.float32)


def kmeans_step(data: RGBF, labels: Labels, k: int) -> Tuple[RGBF, Labels, int]:
    """One update + reassignment round. Returns (centres, new_labels, changes)."""
    centres = update_centres(data, labels, k)
    new_labels = closest(data, centres)
    changes = int(np.count_nonzero(new_labels != labels))
    return centres, new_labels, changes


def kmeans(data: np.ndarray, k: int, max_iter: int) -> KMeansResult:
    """
    Cluster colour rows into k groups.

    Stops when a round changes no memberships or after max_iter rounds.
    With max_iter == 0 the seeds are returned unchanged.
    """
    rows = as_colour_rows(data)
    centres = seed_centres(k)
    labels = closest(rows, centres)

    iterations = 0
    converged = False
    for _ in range(int(max_iter)):
        centres, labels, changes = kmeans_step(rows, labels, k)
        iterations += 1
        if changes == 0:
            converged = True
            break
    return KMeansResult(centres, labels, iterations, converged)


__all__ = [
    "KMeansResult",
    "seed_centres",
    "closest",
    "update_centres",
    "kmeans_step",
    "kmeans",
]
