"""
输入投递接口

InputSink 负责把底层键盘事件送入目标（同步或异步均可）。
EventLog 记录已投递事件，供展示层查看。
"""
from __future__ import annotations

import inspect
from collections import deque
from typing import Awaitable, Deque, List, Optional, Protocol, Union

from ...core.config import settings
from ...core.logger import logger
from ...core.thread_pool import run_in_io
from .events import KeyEvent


class InputSink(Protocol):
    def deliver(self, event: KeyEvent) -> Union[None, Awaitable[None]]:
        """接收一个事件；返回时表示目标已接受（不保证已处理）。"""
        ...


async def deliver_event(sink: InputSink, event: KeyEvent) -> None:
    """投递单个事件：异步 sink 直接 await，同步 sink 放到 I/O 线程池执行。"""
    if inspect.iscoroutinefunction(sink.deliver):
        await sink.deliver(event)
        return
    result = await run_in_io(sink.deliver, event)
    if inspect.isawaitable(result):
        await result


class RecordingSink:
    """内存记录型 InputSink（无真实目标时使用）"""

    def __init__(self) -> None:
        self.events: List[KeyEvent] = []

    def deliver(self, event: KeyEvent) -> None:
        self.events.append(event)

    def clear(self) -> None:
        self.events.clear()


class EventLog:
    """包装另一个 InputSink，记录最近投递的事件"""

    def __init__(self, sink: Optional[InputSink] = None, maxlen: Optional[int] = None) -> None:
        self.sink = sink
        self._events: Deque[KeyEvent] = deque(maxlen=maxlen or settings.event_log_size)

    @property
    def events(self) -> List[KeyEvent]:
        return list(self._events)

    async def deliver(self, event: KeyEvent) -> None:
        if self.sink is not None:
            await deliver_event(self.sink, event)
        self._events.append(event)
        logger.trace("键盘事件: {} code={}", event.type.value, event.code)

    def clear(self) -> None:
        self._events.clear()


__all__ = ["InputSink", "deliver_event", "RecordingSink", "EventLog"]
