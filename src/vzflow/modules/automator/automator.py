"""
虚拟机自动化门面

组合帧源、文字/图像感知、条件等待与键盘合成，供工作流步骤脚本调用。
每次感知都在 frame_source.acquire() 内取样，取样完成立即释放读锁。
"""
from __future__ import annotations

import asyncio
import inspect
from typing import Awaitable, Iterable, List, Optional, Protocol, Union

import numpy as np
from PIL import Image

from ...core.constants import MachineState
from ...core.thread_pool import run_in_io
from ..display.frame import FrameSource
from ..display.screenshot import FrameScreenshotter, Region, Screenshotter
from ..keyboard.keys import Key
from ..keyboard.sink import InputSink, RecordingSink
from ..keyboard.synthesizer import InputSynthesizer
from ..ocr.reader import TextReader
from ..ocr.types import TextBlock, TextCondition
from ..vision.matcher import ImageMatcher
from ..vision.utils import ImageLike, Point
from .waiter import ConditionWaiter

TextLike = Union[str, TextCondition]


class MachineStateSource(Protocol):
    def state(self) -> Union[str, MachineState, Awaitable[Union[str, MachineState]]]:
        ...


class Automator:
    def __init__(
        self,
        frame_source: FrameSource,
        *,
        sink: Optional[InputSink] = None,
        synthesizer: Optional[InputSynthesizer] = None,
        text_reader: Optional[TextReader] = None,
        image_matcher: Optional[ImageMatcher] = None,
        waiter: Optional[ConditionWaiter] = None,
        screenshotter: Optional[Screenshotter] = None,
        machine: Optional[MachineStateSource] = None,
    ) -> None:
        self.frame_source = frame_source
        self.synthesizer = synthesizer or InputSynthesizer(sink if sink is not None else RecordingSink())
        self.text_reader = text_reader or TextReader()
        self.image_matcher = image_matcher or ImageMatcher()
        self.waiter = waiter or ConditionWaiter()
        self.screenshotter = screenshotter or FrameScreenshotter(frame_source)
        self.machine = machine

    # ── 取样 ──

    def _sample(self) -> Optional[np.ndarray]:
        """在读锁内复制当前帧（BGR），无画面时返回 None。"""
        with self.frame_source.acquire() as frame:
            if frame is None:
                return None
            return frame.to_bgr()

    # ── 文字 ──

    async def read_text(self, region: Optional[Region] = None) -> List[TextBlock]:
        image = self._sample()
        if image is None:
            return []
        return await self.text_reader.read_text(image, region)

    async def has_text(self, cond: TextLike, region: Optional[Region] = None) -> bool:
        image = self._sample()
        if image is None:
            return False
        return await self.text_reader.has_text(image, cond, region)

    async def wait_for_text(
        self,
        cond: TextLike,
        region: Optional[Region] = None,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> None:
        condition = TextCondition.coerce(cond)
        await self.waiter.wait(
            lambda: self.has_text(condition, region),
            timeout=timeout,
            cancel=cancel,
            label=f"text {condition}",
        )

    # ── 图像 ──

    def _region(self, image: ImageLike, region: Optional[Region], at: Optional[Point]) -> Region:
        if region is not None:
            return region
        if at is not None:
            return self.image_matcher.region_for(image, at)
        raise ValueError("detect_image 需要 region 或 at 参数")

    async def detect_image(
        self,
        image: ImageLike,
        *,
        region: Optional[Region] = None,
        at: Optional[Point] = None,
        threshold: Optional[float] = None,
    ) -> bool:
        # 参考图无法计算特征时直接抛出 UnableToFeaturePrint
        ref_print = self.image_matcher.reference(image)
        rect = self._region(image, region, at)
        return await self._detect(image, rect, ref_print, threshold)

    async def _detect(
        self,
        image: ImageLike,
        rect: Region,
        ref_print: np.ndarray,
        threshold: Optional[float],
    ) -> bool:
        frame = self._sample()
        if frame is None:
            return False
        return await self.image_matcher.async_matches(
            frame, rect, image, threshold, ref_print=ref_print
        )

    async def wait_for_image(
        self,
        image: ImageLike,
        *,
        region: Optional[Region] = None,
        at: Optional[Point] = None,
        threshold: Optional[float] = None,
        timeout: Optional[float] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> None:
        # 参考特征每次等待只计算一次
        ref_print = self.image_matcher.reference(image)
        rect = self._region(image, region, at)
        await self.waiter.wait(
            lambda: self._detect(image, rect, ref_print, threshold),
            timeout=timeout,
            cancel=cancel,
            label=f"image at {rect}",
        )

    # ── 显示与虚拟机状态 ──

    def has_display(self) -> bool:
        return self.frame_source.current_frame() is not None

    async def wait_for_display(
        self,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> None:
        await self.waiter.wait(self.has_display, timeout=timeout, cancel=cancel, label="display")

    async def _raw_state(self) -> str:
        state = self.machine.state()
        if inspect.isawaitable(state):
            state = await state
        return state.value if isinstance(state, MachineState) else str(state)

    async def machine_state(self) -> Optional[Union[MachineState, str]]:
        """当前虚拟机状态；未知状态字符串原样返回"""
        if self.machine is None:
            return None
        raw = await self._raw_state()
        try:
            return MachineState(raw)
        except ValueError:
            return raw

    async def wait_for_state(
        self,
        state: Union[str, MachineState],
        *,
        timeout: Optional[float] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> None:
        if self.machine is None:
            raise RuntimeError("未配置虚拟机状态源，无法等待状态")
        target = MachineState(state)

        # 只比较状态值，过渡状态（stopping / saving ...）继续轮询
        async def _reached() -> bool:
            return await self._raw_state() == target.value

        await self.waiter.wait(_reached, timeout=timeout, cancel=cancel, label=f"state {target.value}")

    # ── 截图 ──

    async def screenshot(self, region: Optional[Region] = None) -> Optional[Image.Image]:
        if inspect.iscoroutinefunction(self.screenshotter.capture):
            return await self.screenshotter.capture(region)
        result = await run_in_io(self.screenshotter.capture, region)
        if inspect.isawaitable(result):
            result = await result
        return result

    # ── 键盘 ──

    async def press(self, key: Key, times: int = 1) -> None:
        await self.synthesizer.press(key, times)

    async def press_keys(self, keys: Iterable[Key]) -> None:
        await self.synthesizer.press_keys(keys)

    async def hold(self, key: Key) -> None:
        await self.synthesizer.hold(key)

    async def release(self, key: Key) -> None:
        await self.synthesizer.release(key)

    async def type(self, text: str) -> None:
        await self.synthesizer.type(text)


__all__ = ["TextLike", "MachineStateSource", "Automator"]
