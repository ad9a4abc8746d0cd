"""
Character to key-press mapping for a US (ANSI) Mac keyboard layout.

The table is plain data built once at import. Characters the layout cannot
produce map to an empty sequence and are dropped when typing.
"""
from __future__ import annotations

from typing import Dict, List, Tuple

from ...core.logger import logger
from .keycodes import DIGITS, KeyCode
from .keys import Key

# digit row symbols, indexed by digit 0..9
_SHIFT_DIGITS = ")!@#$%^&*("
_ALT_DIGITS = "º¡™£¢∞§¶•ª"
_SHIFT_ALT_DIGITS = "‚⁄€‹›ﬁﬂ‡°·"

# (plain, shifted, key)
_PUNCTUATION: Tuple[Tuple[str, str, KeyCode], ...] = (
    ("-", "_", KeyCode.HYPHEN),
    ("=", "+", KeyCode.EQUAL_SIGN),
    ("[", "{", KeyCode.OPEN_BRACKET),
    ("]", "}", KeyCode.CLOSE_BRACKET),
    ("\\", "|", KeyCode.BACKSLASH),
    (";", ":", KeyCode.SEMICOLON),
    ("'", '"', KeyCode.QUOTE),
    (",", "<", KeyCode.COMMA),
    (".", ">", KeyCode.PERIOD),
    ("/", "?", KeyCode.SLASH),
    ("`", "~", KeyCode.GRAVE),
)


def _build_table() -> Dict[str, Tuple[Key, ...]]:
    table: Dict[str, Tuple[Key, ...]] = {
        " ": (Key(KeyCode.SPACEBAR),),
        "\u00a0": (Key(KeyCode.SPACEBAR).alt,),
        "\t": (Key(KeyCode.TAB),),
        "\n": (Key(KeyCode.RETURN),),
    }

    for digit, code in enumerate(DIGITS):
        key = Key(code)
        table[str(digit)] = (key,)
        table[_SHIFT_DIGITS[digit]] = (key.shift,)
        table[_ALT_DIGITS[digit]] = (key.alt,)
        table[_SHIFT_ALT_DIGITS[digit]] = (key.shift.alt,)

    for letter in "abcdefghijklmnopqrstuvwxyz":
        key = Key(KeyCode[letter.upper()])
        table[letter] = (key,)
        table[letter.upper()] = (key.shift,)

    for plain, shifted, code in _PUNCTUATION:
        key = Key(code)
        table[plain] = (key,)
        table[shifted] = (key.shift,)

    return table


CHARACTER_TABLE: Dict[str, Tuple[Key, ...]] = _build_table()


def keys_for(char: str) -> List[Key]:
    """Keys that produce a single character; empty when unmapped."""
    if len(char) != 1:
        raise ValueError(f"Expected a single character, got {char!r}")
    keys = CHARACTER_TABLE.get(char)
    if keys is None:
        logger.debug("未映射的字符将被忽略: {!r}", char)
        return []
    return list(keys)


def keys_for_text(text: str) -> List[Key]:
    """Concatenated key sequence for ``text``, in order."""
    result: List[Key] = []
    for char in text:
        result.extend(keys_for(char))
    return result


__all__ = ["CHARACTER_TABLE", "keys_for", "keys_for_text"]
