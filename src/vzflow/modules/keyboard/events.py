"""
Low-level key events and the ordering rules for chorded input.

Modifiers travel as their own key events around the main key, the way a
physical keyboard reports them; the main event carries no flags.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List

from ...core.constants import KeyEventType, Modifier
from .keycodes import KeyCode
from .keys import Key

MODIFIER_KEY_CODES: Dict[Modifier, KeyCode] = {
    Modifier.SHIFT: KeyCode.LEFT_SHIFT,
    Modifier.CONTROL: KeyCode.LEFT_CONTROL,
    Modifier.ALT: KeyCode.LEFT_ALT,
    Modifier.COMMAND: KeyCode.LEFT_COMMAND,
    Modifier.FN: KeyCode.FUNCTION,
}


@dataclass(frozen=True)
class KeyEvent:
    type: KeyEventType
    code: int
    flags: FrozenSet[Modifier] = field(default_factory=frozenset)

    @property
    def is_down(self) -> bool:
        return self.type == KeyEventType.DOWN


def _modifier_events(type_: KeyEventType, key: Key) -> List[KeyEvent]:
    return [KeyEvent(type_, int(MODIFIER_KEY_CODES[m])) for m in key.ordered_modifiers()]


def hold_events(key: Key) -> List[KeyEvent]:
    """Modifier downs (canonical order) followed by the main key down."""
    return _modifier_events(KeyEventType.DOWN, key) + [KeyEvent(KeyEventType.DOWN, key.code)]


def release_events(key: Key) -> List[KeyEvent]:
    """Main key up followed by modifier ups (canonical order)."""
    return [KeyEvent(KeyEventType.UP, key.code)] + _modifier_events(KeyEventType.UP, key)


__all__ = ["MODIFIER_KEY_CODES", "KeyEvent", "hold_events", "release_events"]
