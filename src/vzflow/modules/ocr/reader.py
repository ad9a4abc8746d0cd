"""文字感知适配器。

将同步 OCR 推理 offload 到计算线程池，避免阻塞事件循环。
"""
from __future__ import annotations

import functools
import threading
from typing import List, Optional, Union

from ...core.config import settings
from ...core.thread_pool import run_in_compute
from ..vision.utils import ImageLike, Region
from .recognize import ocr
from .types import TextBlock, TextCondition, join_text


class TextReader:
    """读取帧中的文字并判断文字条件。

    engine 为空时使用共享的 PaddleOCR 单例；传入自定义引擎（需提供 predict()）
    时以独立推理锁串行调用。
    """

    def __init__(
        self,
        engine: Optional[object] = None,
        *,
        min_confidence: Optional[float] = None,
    ) -> None:
        self.engine = engine
        self._lock = threading.Lock() if engine is not None else None
        self.min_confidence = (
            settings.ocr_min_confidence if min_confidence is None else float(min_confidence)
        )

    def read_text_sync(self, frame: ImageLike, region: Optional[Region] = None) -> List[TextBlock]:
        return ocr(
            frame,
            roi=region,
            min_confidence=self.min_confidence,
            engine=self.engine,
            lock=self._lock,
        )

    async def read_text(self, frame: ImageLike, region: Optional[Region] = None) -> List[TextBlock]:
        """异步识别文字，在计算线程池中执行。"""
        return await run_in_compute(functools.partial(self.read_text_sync, frame, region))

    async def has_text(
        self,
        frame: ImageLike,
        condition: Union[str, TextCondition],
        region: Optional[Region] = None,
    ) -> bool:
        blocks = await self.read_text(frame, region)
        return TextCondition.coerce(condition).evaluate(join_text(blocks))


__all__ = ["TextReader"]
