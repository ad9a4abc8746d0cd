import itertools
import threading

import pytest

from vzflow.core.constants import KeyEventType, Modifier
from vzflow.modules.keyboard import (
    EventLog,
    InputSynthesizer,
    Key,
    KeyCode,
    KeyEvent,
    RecordingSink,
    hold_events,
    release_events,
)

DOWN = KeyEventType.DOWN
UP = KeyEventType.UP


def _pairs(events):
    return [(e.type, e.code) for e in events]


def test_hold_and_release_order():
    key = Key(KeyCode.A).control.shift

    assert _pairs(hold_events(key)) == [(DOWN, 0x38), (DOWN, 0x3B), (DOWN, 0x00)]
    assert _pairs(release_events(key)) == [(UP, 0x00), (UP, 0x38), (UP, 0x3B)]


@pytest.mark.parametrize("count", range(len(Modifier) + 1))
def test_release_mirrors_hold_for_every_modifier_set(count):
    for mods in itertools.combinations(list(Modifier), count):
        key = Key(KeyCode.Z, frozenset(mods))
        held = hold_events(key)
        released = release_events(key)

        assert len(held) == len(released) == count + 1
        assert sorted(e.code for e in held) == sorted(e.code for e in released)
        assert all(e.is_down for e in held)
        assert not any(e.is_down for e in released)
        assert held[-1].code == released[0].code == key.code


@pytest.mark.asyncio
async def test_press_delivers_down_then_up():
    sink = RecordingSink()
    synth = InputSynthesizer(sink)

    await synth.press(Key(KeyCode.RETURN), times=2)

    assert _pairs(sink.events) == [(DOWN, 0x24), (UP, 0x24)] * 2


@pytest.mark.asyncio
async def test_type_uses_character_mapping():
    sink = RecordingSink()

    await InputSynthesizer(sink).type("Hi")

    assert _pairs(sink.events) == [
        (DOWN, 0x38), (DOWN, 0x04), (UP, 0x04), (UP, 0x38),
        (DOWN, 0x22), (UP, 0x22),
    ]


@pytest.mark.asyncio
async def test_async_sink_is_awaited():
    received = []

    class _AsyncSink:
        async def deliver(self, event):
            received.append(event)

    await InputSynthesizer(_AsyncSink()).press(Key(KeyCode.TAB))

    assert _pairs(received) == [(DOWN, 0x30), (UP, 0x30)]


@pytest.mark.asyncio
async def test_event_log_forwards_and_bounds_history():
    inner = RecordingSink()
    log = EventLog(inner, maxlen=3)

    await InputSynthesizer(log).press_keys([Key(KeyCode.A), Key(KeyCode.B)])

    assert len(inner.events) == 4
    assert _pairs(log.events) == [(UP, 0x00), (DOWN, 0x0B), (UP, 0x0B)]

    log.clear()
    assert log.events == []


@pytest.mark.asyncio
async def test_event_log_without_sink_only_records():
    log = EventLog(maxlen=10)

    await log.deliver(KeyEvent(DOWN, 1))

    assert _pairs(log.events) == [(DOWN, 1)]


@pytest.mark.asyncio
async def test_sync_sink_runs_on_io_pool_in_order():
    class _ThreadSink(RecordingSink):
        def __init__(self):
            super().__init__()
            self.threads = []

        def deliver(self, event):
            self.threads.append(threading.current_thread().name)
            super().deliver(event)

    sink = _ThreadSink()

    await InputSynthesizer(sink).type("ab")

    assert _pairs(sink.events) == [(DOWN, 0x00), (UP, 0x00), (DOWN, 0x0B), (UP, 0x0B)]
    assert all(name.startswith("vz-io") for name in sink.threads)
