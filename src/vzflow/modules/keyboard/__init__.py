from .keycodes import KeyCode, DIGITS, key_code
from .keys import Key, RETURN, TAB, SPACE, ESCAPE
from .mapper import CHARACTER_TABLE, keys_for, keys_for_text
from .events import MODIFIER_KEY_CODES, KeyEvent, hold_events, release_events
from .sink import InputSink, deliver_event, RecordingSink, EventLog
from .synthesizer import InputSynthesizer

__all__ = [
    "KeyCode",
    "DIGITS",
    "key_code",
    "Key",
    "RETURN",
    "TAB",
    "SPACE",
    "ESCAPE",
    "CHARACTER_TABLE",
    "keys_for",
    "keys_for_text",
    "MODIFIER_KEY_CODES",
    "KeyEvent",
    "hold_events",
    "release_events",
    "InputSink",
    "deliver_event",
    "RecordingSink",
    "EventLog",
    "InputSynthesizer",
]
