"""
Keys: a raw key code plus the modifiers held while it is pressed.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Union

from ...core.constants import MODIFIER_ORDER, Modifier
from .keycodes import KeyCode, key_code

ModifierLike = Union[Modifier, str]


@dataclass(frozen=True)
class Key:
    code: int
    modifiers: FrozenSet[Modifier] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        code = int(self.code)
        if not 0 <= code <= 0xFFFF:
            raise ValueError(f"Key code out of range: {code}")
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "modifiers", frozenset(Modifier(m) for m in self.modifiers))

    @classmethod
    def named(cls, name: str) -> "Key":
        return cls(key_code(name))

    def with_modifiers(self, *modifiers: ModifierLike) -> "Key":
        """New key with ``modifiers`` added to the existing ones."""
        added = frozenset(Modifier(m) for m in modifiers)
        return Key(self.code, self.modifiers | added)

    @property
    def shift(self) -> "Key":
        return self.with_modifiers(Modifier.SHIFT)

    @property
    def control(self) -> "Key":
        return self.with_modifiers(Modifier.CONTROL)

    @property
    def alt(self) -> "Key":
        return self.with_modifiers(Modifier.ALT)

    @property
    def command(self) -> "Key":
        return self.with_modifiers(Modifier.COMMAND)

    @property
    def fn(self) -> "Key":
        return self.with_modifiers(Modifier.FN)

    def ordered_modifiers(self) -> tuple[Modifier, ...]:
        """Modifiers in canonical order: shift, control, alt, command, fn."""
        return tuple(m for m in MODIFIER_ORDER if m in self.modifiers)

    def __str__(self) -> str:
        try:
            name = KeyCode(self.code).name.lower()
        except ValueError:
            name = f"0x{self.code:02x}"
        mods = "+".join(m.value for m in self.ordered_modifiers())
        return f"{mods}+{name}" if mods else name


# Common keys used by workflow scripts
RETURN = Key(KeyCode.RETURN)
TAB = Key(KeyCode.TAB)
SPACE = Key(KeyCode.SPACEBAR)
ESCAPE = Key(KeyCode.ESCAPE)


__all__ = ["Key", "ModifierLike", "RETURN", "TAB", "SPACE", "ESCAPE"]
