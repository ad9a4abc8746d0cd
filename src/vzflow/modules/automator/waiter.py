"""
条件轮询等待

固定节奏：评估谓词 → 为真则返回 → 否则休眠 interval → 重复。
谓词自身耗时不计入 interval。默认无超时（无限等待），超时与取消需显式开启。
"""
from __future__ import annotations

import asyncio
import inspect
import time
from typing import Awaitable, Callable, Optional, Union

from ...core.config import settings
from ...core.logger import logger

Predicate = Callable[[], Union[bool, Awaitable[bool]]]


class WaitError(Exception):
    """等待异常基类"""


class WaitTimeout(WaitError):
    """超过显式设置的等待期限"""


class WaitCancelled(WaitError):
    """取消令牌被触发"""


class ConditionWaiter:
    def __init__(
        self,
        interval: Optional[float] = None,
        *,
        timeout: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.interval = settings.wait_interval if interval is None else float(interval)
        self.timeout = settings.wait_timeout_s if timeout is None else timeout
        self._sleep = sleep
        self._clock = clock

    async def wait(
        self,
        predicate: Predicate,
        interval: Optional[float] = None,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[asyncio.Event] = None,
        label: str = "",
    ) -> int:
        """
        轮询 predicate 直到返回真值

        Args:
            predicate: 同步或异步谓词
            interval: 两次评估之间的休眠秒数，默认取实例配置
            timeout: 可选期限（秒）；为 None 时使用实例配置（默认无限）
            cancel: 可选取消令牌
            label: 日志标识

        Returns:
            评估次数

        Raises:
            WaitTimeout: 期限已到仍未满足
            WaitCancelled: 取消令牌被触发
        """
        step = self.interval if interval is None else float(interval)
        limit = self.timeout if timeout is None else timeout
        deadline = None if limit is None else self._clock() + float(limit)

        attempts = 0
        while True:
            if cancel is not None and cancel.is_set():
                raise WaitCancelled(f"等待已取消: {label or predicate!r}")

            attempts += 1
            result = predicate()
            if inspect.isawaitable(result):
                result = await result
            if result:
                logger.debug("条件满足: {} (评估 {} 次)", label or "predicate", attempts)
                return attempts

            if deadline is not None and self._clock() >= deadline:
                raise WaitTimeout(
                    f"等待超时: {label or 'predicate'} ({limit}s, 评估 {attempts} 次)"
                )

            await self._sleep(step)


__all__ = ["Predicate", "WaitError", "WaitTimeout", "WaitCancelled", "ConditionWaiter"]
