"""OCR 识别结果与文字条件数据结构。"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple, Union

# 归一化矩形 (x, y, w, h)，取值 0..1，原点在左上角
Bounds = Tuple[float, float, float, float]


@dataclass(frozen=True)
class TextBlock:
    """单个文字块（文本已转小写）。"""

    string: str
    bounds: Bounds

    @property
    def center(self) -> Tuple[float, float]:
        x, y, w, h = self.bounds
        return (x + w / 2, y + h / 2)


class TextMatchMode(str, Enum):
    NONE = "none"
    ANY = "any"
    ALL = "all"


@dataclass(frozen=True)
class TextCondition:
    """屏幕文字条件：不区分大小写的子串包含判断。"""

    mode: TextMatchMode
    strings: Tuple[str, ...]

    @classmethod
    def none(cls, strings: Iterable[str]) -> "TextCondition":
        return cls(TextMatchMode.NONE, tuple(strings))

    @classmethod
    def any(cls, strings: Iterable[str]) -> "TextCondition":
        return cls(TextMatchMode.ANY, tuple(strings))

    @classmethod
    def all(cls, strings: Iterable[str]) -> "TextCondition":
        return cls(TextMatchMode.ALL, tuple(strings))

    @classmethod
    def coerce(cls, cond: "Union[str, TextCondition]") -> "TextCondition":
        """单个字符串等价于 any([s])。"""
        if isinstance(cond, TextCondition):
            return cond
        return cls.any([cond])

    def evaluate(self, haystack: str) -> bool:
        text = haystack.lower()
        needles = [s.lower() for s in self.strings]
        if self.mode == TextMatchMode.NONE:
            return not any(n in text for n in needles)
        if self.mode == TextMatchMode.ANY:
            return any(n in text for n in needles)
        return all(n in text for n in needles)

    def __str__(self) -> str:
        return f"{self.mode.value}({', '.join(self.strings)})"


def join_text(blocks: List[TextBlock]) -> str:
    """所有文字块按换行拼接（小写）。"""
    return "\n".join(b.string for b in blocks).lower()


__all__ = ["Bounds", "TextBlock", "TextMatchMode", "TextCondition", "join_text"]
