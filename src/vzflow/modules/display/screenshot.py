"""
截图模块

从 FrameSource 读取当前帧并转为 PIL 图像，供工作流审计日志使用。
截图失败返回 None，不抛出异常。
"""
from __future__ import annotations

from typing import Optional, Protocol, Tuple

from PIL import Image

from ...core.logger import logger
from .frame import FrameSource

Region = Tuple[int, int, int, int]


class Screenshotter(Protocol):
    def capture(self, region: Optional[Region] = None) -> Optional[Image.Image]:
        ...


class FrameScreenshotter:
    """基于 FrameSource 的截图实现"""

    def __init__(self, source: FrameSource) -> None:
        self.source = source

    def capture(self, region: Optional[Region] = None) -> Optional[Image.Image]:
        """
        截取当前帧

        Args:
            region: 可选区域 (x, y, width, height)

        Returns:
            RGB 图像；尚无画面或裁剪失败时返回 None
        """
        try:
            with self.source.acquire() as frame:
                if frame is None:
                    return None
                # BGRA -> RGBA，复制出锁外可用的数据
                img = Image.frombytes("RGBA", frame.size, frame.bgra, "raw", "BGRA")
        except Exception as e:
            logger.warning("截图失败: {}", e)
            return None

        if region:
            x, y, w, h = region
            if w <= 0 or h <= 0 or x < 0 or y < 0 or x + w > img.width or y + h > img.height:
                logger.warning("截图区域越界: region={} frame={}x{}", region, img.width, img.height)
                return None
            img = img.crop((x, y, x + w, y + h))

        return img.convert("RGB")


__all__ = ["Region", "Screenshotter", "FrameScreenshotter"]
