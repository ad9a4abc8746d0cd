"""
Image feature prints.

A feature print is a compact float vector describing an image's structure
and colour, compared by Euclidean distance instead of exact pixels:

- structure: grayscale thumbnail resized to ``size x size``, zero-mean and
  unit-norm, so it tolerates scale and brightness offsets
- colour: 8x4x4 HSV histogram, unit-norm, so it tolerates small shifts

Flat images (blank frames, solid fills) have no structure and yield no print.
"""
from __future__ import annotations

from typing import Optional

import cv2  # type: ignore
import numpy as np

from ...core.config import settings
from .utils import ImageLike, load_image, to_gray

_FLAT_EPSILON = 1e-3
_HIST_BINS = [8, 4, 4]
_HIST_RANGES = [0, 180, 0, 256, 0, 256]


class UnableToFeaturePrint(ValueError):
    """The reference image could not be turned into a feature print."""


def compute_feature_print(
    image: ImageLike,
    *,
    size: Optional[int] = None,
) -> Optional[np.ndarray]:
    """Compute the feature print of ``image``.

    Returns None when the image is empty or flat.
    """
    side = int(size or settings.feature_print_size)
    bgr = load_image(image)
    if bgr.size == 0 or bgr.shape[0] < 2 or bgr.shape[1] < 2:
        return None
    if bgr.ndim == 2:
        bgr = cv2.cvtColor(bgr, cv2.COLOR_GRAY2BGR)

    thumb = cv2.resize(to_gray(bgr), (side, side), interpolation=cv2.INTER_AREA)
    thumb = thumb.astype(np.float32).ravel()
    thumb -= thumb.mean()
    norm = float(np.linalg.norm(thumb))
    if norm < _FLAT_EPSILON:
        return None
    thumb /= norm

    hsv = cv2.cvtColor(bgr, cv2.COLOR_BGR2HSV)
    hist = cv2.calcHist([hsv], [0, 1, 2], None, _HIST_BINS, _HIST_RANGES).ravel()
    hist = hist.astype(np.float32)
    hist /= max(float(np.linalg.norm(hist)), _FLAT_EPSILON)

    return np.concatenate([thumb, hist])


def feature_distance(lhs: np.ndarray, rhs: np.ndarray) -> float:
    """Euclidean distance between two feature prints of the same size."""
    if lhs.shape != rhs.shape:
        raise ValueError(f"Feature print shapes differ: {lhs.shape} vs {rhs.shape}")
    return float(np.linalg.norm(lhs - rhs))


def reference_print(image: ImageLike, *, size: Optional[int] = None) -> np.ndarray:
    """Feature print for a reference image; raises UnableToFeaturePrint on failure."""
    try:
        fp = compute_feature_print(image, size=size)
    except (ValueError, TypeError, FileNotFoundError, cv2.error) as e:
        raise UnableToFeaturePrint(f"Failed to load reference image: {e}") from e
    if fp is None:
        raise UnableToFeaturePrint("Reference image is empty or has no detail")
    return fp


__all__ = [
    "UnableToFeaturePrint",
    "compute_feature_print",
    "feature_distance",
    "reference_print",
]
