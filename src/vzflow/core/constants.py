"""
常量和枚举定义
"""
from enum import Enum


class StepState(str, Enum):
    """步骤状态"""
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"
    ERROR = "error"


class Modifier(str, Enum):
    """修饰键"""
    SHIFT = "shift"
    CONTROL = "control"
    ALT = "alt"
    COMMAND = "command"
    FN = "fn"


# 修饰键按下/抬起的固定顺序
MODIFIER_ORDER = (
    Modifier.SHIFT,
    Modifier.CONTROL,
    Modifier.ALT,
    Modifier.COMMAND,
    Modifier.FN,
)


class KeyEventType(str, Enum):
    """键盘事件类型"""
    DOWN = "down"
    UP = "up"


class MachineState(str, Enum):
    """虚拟机状态（与宿主侧状态字符串一致）"""
    STOPPED = "stopped"
    STARTING = "starting"
    RUNNING = "running"
    PAUSED = "paused"
    ERROR = "error"
    PAUSING = "pausing"
    RESUMING = "resuming"
    STOPPING = "stopping"
    SAVING = "saving"
    RESTORING = "restoring"
