from .frame import BYTES_PER_PIXEL, Frame, FrameSource, BufferFrameSource
from .screenshot import Region, Screenshotter, FrameScreenshotter

__all__ = [
    "BYTES_PER_PIXEL",
    "Frame",
    "FrameSource",
    "BufferFrameSource",
    "Region",
    "Screenshotter",
    "FrameScreenshotter",
]
