"""
Raw virtual key codes for the target's keyboard.

Values are the macOS virtual key codes (``kVK_*``) of an ANSI keyboard. A code
identifies a physical key position; which glyph it produces depends on the
modifiers held and is resolved by the target.
"""
from __future__ import annotations

from enum import IntEnum


class KeyCode(IntEnum):
    # Modifiers
    LEFT_CONTROL = 0x3B
    LEFT_SHIFT = 0x38
    LEFT_ALT = 0x3A
    LEFT_COMMAND = 0x37
    RIGHT_CONTROL = 0x3E
    RIGHT_SHIFT = 0x3C
    RIGHT_ALT = 0x3D
    RIGHT_COMMAND = 0x36
    FUNCTION = 0x3F
    CAPS_LOCK = 0x39

    # Media keys
    VOLUME_MUTE = 0x4A
    VOLUME_UP = 0x48
    VOLUME_DOWN = 0x49

    # Navigation keys
    PAGE_UP = 0x74
    PAGE_DOWN = 0x79
    HOME = 0x73
    END = 0x77
    UP_ARROW = 0x7E
    DOWN_ARROW = 0x7D
    LEFT_ARROW = 0x7B
    RIGHT_ARROW = 0x7C

    # Function keys
    ESCAPE = 0x35
    F1 = 0x7A
    F2 = 0x78
    F3 = 0x63
    F4 = 0x76
    F5 = 0x60
    F6 = 0x61
    F7 = 0x62
    F8 = 0x64
    F9 = 0x65
    F10 = 0x6D
    F11 = 0x67
    F12 = 0x6F
    F13 = 0x69
    F14 = 0x6B
    F15 = 0x71
    F16 = 0x6A
    F17 = 0x40
    F18 = 0x4F
    F19 = 0x50
    F20 = 0x5A

    # Alphanumeric keys
    A = 0x00
    B = 0x0B
    C = 0x08
    D = 0x02
    E = 0x0E
    F = 0x03
    G = 0x05
    H = 0x04
    I = 0x22  # noqa: E741
    J = 0x26
    K = 0x28
    L = 0x25
    M = 0x2E
    N = 0x2D
    O = 0x1F  # noqa: E741
    P = 0x23
    Q = 0x0C
    R = 0x0F
    S = 0x01
    T = 0x11
    U = 0x20
    V = 0x09
    W = 0x0D
    X = 0x07
    Y = 0x10
    Z = 0x06
    DIGIT_1 = 0x12
    DIGIT_2 = 0x13
    DIGIT_3 = 0x14
    DIGIT_4 = 0x15
    DIGIT_5 = 0x17
    DIGIT_6 = 0x16
    DIGIT_7 = 0x1A
    DIGIT_8 = 0x1C
    DIGIT_9 = 0x19
    DIGIT_0 = 0x1D

    # Numeric keypad
    KEYPAD_SLASH = 0x4B
    KEYPAD_ASTERISK = 0x43
    KEYPAD_HYPHEN = 0x4E
    KEYPAD_PLUS = 0x45
    KEYPAD_ENTER = 0x4C
    KEYPAD_EQUALS = 0x51
    KEYPAD_PERIOD = 0x41
    KEYPAD_CLEAR = 0x47
    KEYPAD_0 = 0x52
    KEYPAD_1 = 0x53
    KEYPAD_2 = 0x54
    KEYPAD_3 = 0x55
    KEYPAD_4 = 0x56
    KEYPAD_5 = 0x57
    KEYPAD_6 = 0x58
    KEYPAD_7 = 0x59
    KEYPAD_8 = 0x5B
    KEYPAD_9 = 0x5C

    # Special keys
    TAB = 0x30
    OPEN_BRACKET = 0x21
    CLOSE_BRACKET = 0x1E
    BACKSLASH = 0x2A
    SEMICOLON = 0x29
    QUOTE = 0x27
    RETURN = 0x24
    COMMA = 0x2B
    PERIOD = 0x2F
    SLASH = 0x2C
    GRAVE = 0x32
    HYPHEN = 0x1B
    EQUAL_SIGN = 0x18
    DELETE = 0x33
    DELETE_FORWARD = 0x75
    SPACEBAR = 0x31


DIGITS = (
    KeyCode.DIGIT_0,
    KeyCode.DIGIT_1,
    KeyCode.DIGIT_2,
    KeyCode.DIGIT_3,
    KeyCode.DIGIT_4,
    KeyCode.DIGIT_5,
    KeyCode.DIGIT_6,
    KeyCode.DIGIT_7,
    KeyCode.DIGIT_8,
    KeyCode.DIGIT_9,
)


def key_code(name: str) -> KeyCode:
    """Look up a named key ("return", "left_shift", "f5", ...).

    Raises:
        KeyError: unknown key name
    """
    normalized = name.strip().upper().replace("-", "_").replace(" ", "_")
    try:
        return KeyCode[normalized]
    except KeyError:
        raise KeyError(f"Unknown key name: {name}") from None


__all__ = ["KeyCode", "DIGITS", "key_code"]
