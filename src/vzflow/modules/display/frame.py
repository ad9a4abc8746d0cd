"""
Frame snapshots and the frame source the automation core reads from.

A ``Frame`` is one immutable BGRA bitmap of the target's display. Frame
sources hand out the latest frame only while a read lock is held, so a
perception adapter never samples a buffer the producer is rewriting.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol

import numpy as np

BYTES_PER_PIXEL = 4


@dataclass(frozen=True)
class Frame:
    width: int
    height: int
    # raw BGRA bytes, row-major
    bgra: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid frame size: {self.width}x{self.height}")
        if not isinstance(self.bgra, bytes):
            # bytearray / memoryview: copy so the caller cannot mutate the frame
            object.__setattr__(self, "bgra", bytes(self.bgra))
        expected = self.width * self.height * BYTES_PER_PIXEL
        if len(self.bgra) != expected:
            raise ValueError(
                f"Frame buffer has {len(self.bgra)} bytes, expected {expected}"
            )

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def to_ndarray(self) -> np.ndarray:
        """Read-only HxWx4 uint8 view over the frame buffer."""
        arr = np.frombuffer(self.bgra, dtype=np.uint8)
        return arr.reshape(self.height, self.width, BYTES_PER_PIXEL)

    def to_bgr(self) -> np.ndarray:
        """Copy of the frame as a 3-channel BGR array (OpenCV layout)."""
        return np.ascontiguousarray(self.to_ndarray()[:, :, :3])

    @classmethod
    def from_ndarray(cls, image: np.ndarray) -> "Frame":
        """Build a frame from a BGR / BGRA / grayscale uint8 array."""
        img = np.asarray(image, dtype=np.uint8)
        if img.ndim == 2:
            img = np.stack([img, img, img], axis=-1)
        if img.shape[2] == 3:
            alpha = np.full(img.shape[:2] + (1,), 255, dtype=np.uint8)
            img = np.concatenate([img, alpha], axis=-1)
        h, w = img.shape[:2]
        return cls(width=w, height=h, bgra=np.ascontiguousarray(img).tobytes())


class FrameSource(Protocol):
    def current_frame(self) -> Optional[Frame]:
        """Latest rendered frame, or None before the target produced output."""
        ...

    def acquire(self):
        """Context manager holding the read lock; yields the current frame or None."""
        ...


class BufferFrameSource:
    """In-process frame source fed by a display producer.

    The producer calls ``publish`` on every refresh; readers wrap each sample
    in ``acquire()``. Only the latest frame is kept.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._frame: Optional[Frame] = None
        self._seq = 0

    @property
    def sequence(self) -> int:
        """Number of frames published so far."""
        return self._seq

    def publish(self, frame: Optional[Frame]) -> None:
        with self._lock:
            self._frame = frame
            if frame is not None:
                self._seq += 1

    def clear(self) -> None:
        self.publish(None)

    def current_frame(self) -> Optional[Frame]:
        with self._lock:
            return self._frame

    @contextmanager
    def acquire(self) -> Iterator[Optional[Frame]]:
        self._lock.acquire()
        try:
            yield self._frame
        finally:
            self._lock.release()


__all__ = [
    "BYTES_PER_PIXEL",
    "Frame",
    "FrameSource",
    "BufferFrameSource",
]
