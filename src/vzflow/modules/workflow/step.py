"""
工作流步骤
"""
from __future__ import annotations

from dataclasses import dataclass

from ...core.constants import StepState


@dataclass(eq=False)
class Step:
    """可被展示层实时观察的单个步骤（状态只由工作流引擎修改）"""

    id: str
    name: str
    state: StepState = StepState.IDLE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Step):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def finished(self) -> bool:
        return self.state in (StepState.DONE, StepState.ERROR)


__all__ = ["Step"]
