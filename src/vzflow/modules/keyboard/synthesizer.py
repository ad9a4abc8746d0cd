"""
键盘输入合成

将逻辑按键（press / hold / release / type）转换为底层事件序列并逐个投递。
"""
from __future__ import annotations

from typing import Iterable

from ...core.logger import logger
from .events import KeyEvent, hold_events, release_events
from .keys import Key
from .mapper import keys_for_text
from .sink import InputSink, deliver_event


class InputSynthesizer:
    def __init__(self, sink: InputSink) -> None:
        self.sink = sink

    async def _deliver(self, event: KeyEvent) -> None:
        await deliver_event(self.sink, event)

    async def hold(self, key: Key) -> None:
        for event in hold_events(key):
            await self._deliver(event)

    async def release(self, key: Key) -> None:
        for event in release_events(key):
            await self._deliver(event)

    async def press(self, key: Key, times: int = 1) -> None:
        for _ in range(times):
            await self.hold(key)
            await self.release(key)

    async def press_keys(self, keys: Iterable[Key]) -> None:
        for key in keys:
            await self.press(key)

    async def type(self, text: str) -> None:
        keys = keys_for_text(text)
        logger.debug("输入文本: {} 个字符 -> {} 个按键", len(text), len(keys))
        await self.press_keys(keys)


__all__ = ["InputSynthesizer"]
