"""
Vision utilities: image loading/decoding and region helpers.
"""
from __future__ import annotations

import os
from typing import Optional, Tuple, Union

import cv2  # type: ignore
import numpy as np
from PIL import Image

from ..display.frame import Frame

ImageLike = Union[str, bytes, np.ndarray, Frame, Image.Image]
# (x, y, w, h), top-left origin, pixels
Region = Tuple[int, int, int, int]
Point = Tuple[int, int]

_IMAGE_PATH_CACHE: dict[str, np.ndarray] = {}


def load_image(img: ImageLike) -> np.ndarray:
    """Load an image into a BGR numpy array.

    - str: treated as a file path and loaded via cv2.imread (cached)
    - bytes: decoded via cv2.imdecode
    - Frame: BGRA buffer, alpha dropped
    - PIL.Image: converted from RGB
    - np.ndarray: BGRA is reduced to BGR, anything else returned as-is
    """
    if isinstance(img, Frame):
        return img.to_bgr()
    if isinstance(img, Image.Image):
        rgb = np.asarray(img.convert("RGB"))
        return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)
    if isinstance(img, np.ndarray):
        if img.ndim == 3 and img.shape[2] == 4:
            return cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)
        return img
    if isinstance(img, (bytes, bytearray)):
        arr = np.frombuffer(img, dtype=np.uint8)
        mat = cv2.imdecode(arr, cv2.IMREAD_COLOR)
        if mat is None:
            raise ValueError("Failed to decode image bytes")
        return mat
    if isinstance(img, str):
        if not os.path.isfile(img):
            raise FileNotFoundError(f"Image file not found: {img}")
        if img in _IMAGE_PATH_CACHE:
            return _IMAGE_PATH_CACHE[img]
        mat = cv2.imread(img, cv2.IMREAD_COLOR)
        if mat is None:
            raise ValueError(f"Failed to load image from path: {img}")
        _IMAGE_PATH_CACHE[img] = mat
        return mat
    raise TypeError(f"Unsupported image type: {type(img)}")


def to_gray(img: np.ndarray) -> np.ndarray:
    """Convert BGR image to grayscale (no-op if already single-channel)."""
    if img.ndim == 2:
        return img
    return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)


def image_size(img: ImageLike) -> Tuple[int, int]:
    """Return (width, height) of an image."""
    if isinstance(img, Frame):
        return img.size
    if isinstance(img, Image.Image):
        return img.size
    mat = load_image(img)
    h, w = mat.shape[:2]
    return w, h


def crop(img: np.ndarray, region: Optional[Region]) -> Optional[np.ndarray]:
    """Crop ``img`` to ``region``.

    Returns None when the region is empty or falls outside the image.
    """
    if region is None:
        return img
    x, y, w, h = (int(v) for v in region)
    ih, iw = img.shape[:2]
    if w <= 0 or h <= 0 or x < 0 or y < 0 or x + w > iw or y + h > ih:
        return None
    return img[y : y + h, x : x + w]


def region_at(point: Point, size: Tuple[int, int]) -> Region:
    """Region with top-left ``point`` and the given (width, height)."""
    x, y = point
    w, h = size
    return (int(x), int(y), int(w), int(h))


__all__ = [
    "ImageLike",
    "Region",
    "Point",
    "load_image",
    "to_gray",
    "image_size",
    "crop",
    "region_at",
]
