"""
工作流引擎

按声明顺序逐个执行步骤脚本：
- 步骤开始 → running；脚本正常结束 → done，随后尽力截图写入审计日志
- 脚本抛出异常 → error，异常原样抛给调用方，后续步骤保持 idle
- 工作流只能运行一次；重新运行需要新的步骤列表和新的目标
"""
from __future__ import annotations

import asyncio
import inspect
import uuid
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Union

from ...core.constants import StepState
from ...core.logger import get_workflow_logger, logger, release_workflow_logger
from .step import Step

StepBody = Callable[[Any], Awaitable[None]]
StepObserver = Callable[[Step, StepState, StepState], Union[None, Awaitable[None]]]


class WorkflowError(Exception):
    """工作流异常基类"""


class WorkflowAlreadyStarted(WorkflowError):
    """工作流已运行过"""


class MissingStepBody(WorkflowError):
    """步骤缺少脚本"""


class UnknownStep(WorkflowError):
    """步骤 ID 不存在"""


class Workflow:
    def __init__(
        self,
        steps: Iterable[Step],
        bodies: Optional[Mapping[str, StepBody]] = None,
        *,
        run_id: Optional[str] = None,
    ) -> None:
        self._steps: List[Step] = list(steps)
        ids = [s.id for s in self._steps]
        if len(set(ids)) != len(ids):
            raise ValueError(f"步骤 ID 重复: {ids}")
        self._bodies: Dict[str, StepBody] = {}
        self._observers: List[StepObserver] = []
        self._screenshots: List[Any] = []
        self._started = False
        self.run_id = run_id or uuid.uuid4().hex[:8]
        for step_id, body in (bodies or {}).items():
            self.define(step_id, body)

    # ── 只读视图 ──

    @property
    def steps(self) -> List[Step]:
        return list(self._steps)

    @property
    def screenshots(self) -> List[Any]:
        return list(self._screenshots)

    @property
    def started(self) -> bool:
        return self._started

    @property
    def current(self) -> Optional[Step]:
        """当前 running 的步骤"""
        for step in self._steps:
            if step.state == StepState.RUNNING:
                return step
        return None

    def get(self, step_id: str) -> Step:
        for step in self._steps:
            if step.id == step_id:
                return step
        raise UnknownStep(step_id)

    # ── 定义 ──

    def define(self, step_id: str, body: StepBody) -> None:
        if self._started:
            raise WorkflowAlreadyStarted(f"工作流已开始，无法修改步骤: {step_id}")
        self.get(step_id)
        self._bodies[step_id] = body

    def step(self, step_id: str) -> Callable[[StepBody], StepBody]:
        """装饰器形式的 define()"""

        def decorator(body: StepBody) -> StepBody:
            self.define(step_id, body)
            return body

        return decorator

    def subscribe(self, observer: StepObserver) -> Callable[[], None]:
        """注册状态变更观察者，返回取消订阅函数"""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # ── 运行 ──

    async def _notify(self, step: Step, old: StepState, new: StepState) -> None:
        for observer in list(self._observers):
            try:
                result = observer(step, old, new)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("步骤状态观察者异常: step={}", step.id)

    async def _move(self, step: Step, state: StepState) -> None:
        old = step.state
        step.state = state
        await self._notify(step, old, state)

    async def _capture(self, automator: Any, step: Step, log) -> None:
        """尽力截图；失败只记录日志"""
        try:
            image = await automator.screenshot()
        except Exception as e:
            log.warning("[{}] 截图失败: {}", step.id, e)
            return
        if image is None:
            log.warning("[{}] 截图为空，跳过", step.id)
            return
        self._screenshots.append(image)

    async def run(self, automator: Any) -> None:
        """
        执行全部步骤

        Raises:
            WorkflowAlreadyStarted: 工作流已运行过
            MissingStepBody: 有步骤未定义脚本
            Exception: 第一个失败步骤抛出的异常
        """
        if self._started:
            raise WorkflowAlreadyStarted(f"工作流只能运行一次: run_id={self.run_id}")
        missing = [s.id for s in self._steps if s.id not in self._bodies]
        if missing:
            raise MissingStepBody(f"步骤缺少脚本: {missing}")
        self._started = True

        log = get_workflow_logger(self.run_id)
        log.info("工作流开始: {} 个步骤", len(self._steps))
        try:
            await self._run_steps(automator, log)
        finally:
            release_workflow_logger(self.run_id)

    async def _run_steps(self, automator: Any, log) -> None:
        for index, step in enumerate(self._steps, start=1):
            await self._move(step, StepState.RUNNING)
            step_log = log.bind(step=step.id)
            step_log.info("[{}/{}] 开始步骤: {}", index, len(self._steps), step.name)
            try:
                await self._bodies[step.id](automator)
            except (Exception, asyncio.CancelledError) as e:
                await self._move(step, StepState.ERROR)
                step_log.error("[{}] 步骤失败: {!r}", step.id, e)
                raise
            await self._move(step, StepState.DONE)
            step_log.info("[{}] 步骤完成", step.id)
            await self._capture(automator, step, step_log)

        log.info("工作流完成: 截图 {} 张", len(self._screenshots))


__all__ = [
    "StepBody",
    "StepObserver",
    "WorkflowError",
    "WorkflowAlreadyStarted",
    "MissingStepBody",
    "UnknownStep",
    "Workflow",
]
