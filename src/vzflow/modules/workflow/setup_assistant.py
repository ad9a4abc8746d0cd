"""
系统安装向导自动化脚本

每个步骤遵循「等待识别 → 键盘操作 → 确认画面已切换」的模式，
避免在画面尚未刷新时抢先输入。
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ...core.config import settings
from ...core.constants import MachineState
from ..keyboard.keys import RETURN, SPACE, TAB
from ..ocr.types import TextCondition
from .step import Step
from .workflow import StepBody, Workflow, WorkflowError


class SetupFlowError(WorkflowError):
    """安装向导出现无法自动处理的画面"""


# (id, 展示名称)
SETUP_STEPS: List[Tuple[str, str]] = [
    ("booting", "Booting"),
    ("hello", "Hello"),
    ("language", "Language"),
    ("country", "Country"),
    ("localization", "Localization"),
    ("accessibility", "Accessibility"),
    ("privacy", "Data"),
    ("migration", "Migration"),
    ("appleid", "Apple"),
    ("terms", "Terms"),
    ("account", "Account"),
]


async def booting(automator: Any) -> None:
    if automator.machine is not None:
        await automator.wait_for_state(MachineState.RUNNING)
    await automator.wait_for_display()


async def hello(automator: Any) -> None:
    await automator.wait_for_text("get started")
    await automator.press(RETURN)


def language(globe: str, anchor: Tuple[int, int]) -> StepBody:
    async def body(automator: Any) -> None:
        # 语言选择页以地球图标识别（无稳定文字）
        await automator.wait_for_image(globe, at=anchor)
        await automator.press(TAB)
        await automator.press(RETURN)
        await automator.wait_for_text(TextCondition.none(["language", "english", "english (uk)"]))

    return body


async def country(automator: Any) -> None:
    await automator.wait_for_text("select your country or region")
    await automator.press(TAB, times=3)
    await automator.press(SPACE)


async def localization(automator: Any) -> None:
    await automator.wait_for_text("written and spoken languages")
    await automator.press(TAB, times=3)
    await automator.press(SPACE)


async def accessibility(automator: Any) -> None:
    await automator.wait_for_text("accessibility")
    await automator.press(TAB, times=6)
    await automator.press(SPACE)
    await automator.wait_for_text(TextCondition.none(["accessibility"]))


async def privacy(automator: Any) -> None:
    await automator.wait_for_text("data & privacy")
    await automator.press(TAB, times=3)
    await automator.press(SPACE)


async def migration(automator: Any) -> None:
    await automator.wait_for_text("migration assistant")
    await automator.press(TAB, times=3)
    await automator.press(SPACE)


async def appleid(automator: Any) -> None:
    await automator.wait_for_text("create new apple id")
    # "Set Up Later" 位于焦点之前
    await automator.press(TAB.shift, times=2)
    await automator.press(SPACE)

    # 确认跳过
    await automator.wait_for_text("are you sure you want to skip")
    await automator.press(RETURN)


async def terms(automator: Any) -> None:
    await automator.wait_for_text("terms and conditions")
    await automator.press(TAB, times=2)
    await automator.press(SPACE)

    # "Agree" 确认弹窗
    await automator.wait_for_text(TextCondition.all(["i have read", "disagree", "agree"]))
    await automator.press(TAB)
    await automator.press(SPACE)


def account(username: str, password: str) -> StepBody:
    async def body(automator: Any) -> None:
        await automator.wait_for_text("create a computer account")

        await automator.type(username)
        # 账户名自动生成
        await automator.press(TAB)

        await automator.press(TAB)
        await automator.type(password)

        await automator.press(TAB)
        if await automator.has_text("keyboard requirements"):
            raise SetupFlowError("密码不满足安装程序的键盘要求")
        await automator.type(password)

        # 密码提示（可选，留空）
        await automator.press(TAB)

        # 焦点移至 "Continue"
        await automator.press(TAB, times=2)

    return body


def build_setup_workflow(
    *,
    username: Optional[str] = None,
    password: Optional[str] = None,
    globe: Optional[str] = None,
    globe_anchor: Optional[Tuple[int, int]] = None,
    run_id: Optional[str] = None,
) -> Workflow:
    """构建完整的安装向导工作流（全新的步骤列表）"""
    bodies: Dict[str, StepBody] = {
        "booting": booting,
        "hello": hello,
        "language": language(
            globe or settings.globe_template_path,
            tuple(globe_anchor or settings.globe_anchor),
        ),
        "country": country,
        "localization": localization,
        "accessibility": accessibility,
        "privacy": privacy,
        "migration": migration,
        "appleid": appleid,
        "terms": terms,
        "account": account(
            username or settings.account_username,
            password or settings.account_password,
        ),
    }
    steps = [Step(id=step_id, name=name) for step_id, name in SETUP_STEPS]
    return Workflow(steps, bodies, run_id=run_id)


__all__ = [
    "SetupFlowError",
    "SETUP_STEPS",
    "build_setup_workflow",
]
