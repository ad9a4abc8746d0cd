import threading
from types import SimpleNamespace

import numpy as np
import pytest

from vzflow.core.constants import KeyEventType, MachineState
from vzflow.modules.automator import Automator, ConditionWaiter, WaitTimeout
from vzflow.modules.display import BufferFrameSource, Frame
from vzflow.modules.keyboard import Key, KeyCode, RecordingSink
from vzflow.modules.ocr import TextCondition, TextReader
import vzflow.modules.vision.matcher as matcher_module
from vzflow.modules.vision import ImageMatcher, UnableToFeaturePrint


class _ScriptedEngine:
    """每次 predict() 依次返回脚本中的文字，脚本耗尽后重复最后一项"""

    def __init__(self, *screens):
        self.screens = list(screens)
        self.calls = 0

    def predict(self, img):
        texts = self.screens[min(self.calls, len(self.screens) - 1)]
        self.calls += 1
        return [{
            "rec_texts": list(texts),
            "rec_scores": [0.99] * len(texts),
            "rec_polys": [np.array([[0, 0], [4, 0], [4, 4], [0, 4]])] * len(texts),
        }]


def _stripes():
    img = np.zeros((32, 32, 3), dtype=np.uint8)
    img[:, 8:16] = 255
    img[:, 24:] = 255
    return img


def _frame_with_stripes():
    img = np.zeros((64, 64, 3), dtype=np.uint8)
    img[16:48, 16:48] = _stripes()
    return Frame.from_ndarray(img)


def _automator(engine=None, *, source=None, machine=None, timeout=None):
    source = source or BufferFrameSource()
    sink = RecordingSink()
    auto = Automator(
        source,
        sink=sink,
        text_reader=TextReader(engine=engine or _ScriptedEngine(())),
        image_matcher=ImageMatcher(threshold=0.5),
        waiter=ConditionWaiter(0, timeout=timeout),
        machine=machine,
    )
    return auto, source, sink


@pytest.mark.asyncio
async def test_has_text_false_without_frame():
    engine = _ScriptedEngine(("Hello",))
    auto, _, _ = _automator(engine)

    assert not await auto.has_text("hello")
    assert await auto.read_text() == []
    assert engine.calls == 0


@pytest.mark.asyncio
async def test_wait_for_text_polls_until_visible():
    engine = _ScriptedEngine(("Loading",), ("Loading",), ("Select Your Country",))
    auto, source, _ = _automator(engine)
    source.publish(_frame_with_stripes())

    await auto.wait_for_text(TextCondition.any(["country"]))

    assert engine.calls == 3


@pytest.mark.asyncio
async def test_wait_for_text_honours_timeout():
    auto, source, _ = _automator(_ScriptedEngine(("Loading",)))
    source.publish(_frame_with_stripes())

    with pytest.raises(WaitTimeout):
        await auto.wait_for_text("never", timeout=0.05)


@pytest.mark.asyncio
async def test_detect_image_at_point():
    auto, source, _ = _automator()
    source.publish(_frame_with_stripes())

    assert await auto.detect_image(_stripes(), at=(16, 16))
    assert not await auto.detect_image(_stripes(), region=(0, 0, 16, 16))


@pytest.mark.asyncio
async def test_detect_image_without_frame_is_false():
    auto, _, _ = _automator()

    assert not await auto.detect_image(_stripes(), at=(16, 16))


@pytest.mark.asyncio
async def test_detect_image_bad_reference_raises_even_without_frame():
    auto, _, _ = _automator()

    with pytest.raises(UnableToFeaturePrint):
        await auto.detect_image(np.zeros((8, 8, 3), dtype=np.uint8), at=(0, 0))


@pytest.mark.asyncio
async def test_detect_image_requires_region_or_point():
    auto, _, _ = _automator()

    with pytest.raises(ValueError):
        await auto.detect_image(_stripes())


@pytest.mark.asyncio
async def test_wait_for_image_and_display():
    auto, source, _ = _automator(timeout=0.05)

    with pytest.raises(WaitTimeout):
        await auto.wait_for_display()

    source.publish(_frame_with_stripes())
    await auto.wait_for_display()
    await auto.wait_for_image(_stripes(), at=(16, 16))


@pytest.mark.asyncio
async def test_wait_for_state_tracks_machine():
    states = iter(["stopped", "starting", "running"])
    machine = SimpleNamespace(state=lambda: next(states))
    auto, _, _ = _automator(machine=machine)

    await auto.wait_for_state(MachineState.RUNNING)


@pytest.mark.asyncio
async def test_wait_for_state_without_machine_raises():
    auto, _, _ = _automator()

    assert await auto.machine_state() is None
    with pytest.raises(RuntimeError):
        await auto.wait_for_state("running")


@pytest.mark.asyncio
async def test_keyboard_calls_reach_sink():
    auto, _, sink = _automator()

    await auto.press(Key(KeyCode.TAB))
    await auto.type("a")
    await auto.hold(Key(KeyCode.A).command)
    await auto.release(Key(KeyCode.A).command)

    codes = [(e.type, e.code) for e in sink.events]
    assert codes[:4] == [
        (KeyEventType.DOWN, 0x30),
        (KeyEventType.UP, 0x30),
        (KeyEventType.DOWN, 0x00),
        (KeyEventType.UP, 0x00),
    ]
    assert len(codes) == 8


@pytest.mark.asyncio
async def test_screenshot_reads_current_frame():
    auto, source, _ = _automator()

    assert await auto.screenshot() is None

    source.publish(_frame_with_stripes())
    image = await auto.screenshot((0, 0, 10, 20))
    assert image.size == (10, 20)


@pytest.mark.asyncio
async def test_wait_for_state_passes_through_transitional_states():
    states = iter(["starting", "stopping", "migrating", MachineState.RESTORING, "running"])
    machine = SimpleNamespace(state=lambda: next(states))
    auto, _, _ = _automator(machine=machine)

    await auto.wait_for_state(MachineState.RUNNING)


@pytest.mark.asyncio
async def test_machine_state_keeps_unknown_values():
    async def _state():
        return "migrating"

    auto, _, _ = _automator(machine=SimpleNamespace(state=_state))

    assert await auto.machine_state() == "migrating"


@pytest.mark.asyncio
async def test_wait_for_image_computes_reference_once(monkeypatch):
    calls = []
    original = matcher_module.reference_print

    def _counting(image, **kwargs):
        calls.append(1)
        return original(image, **kwargs)

    monkeypatch.setattr(matcher_module, "reference_print", _counting)

    source = BufferFrameSource()
    source.publish(Frame.from_ndarray(np.zeros((64, 64, 3), dtype=np.uint8)))
    sleeps = []

    async def _sleep(seconds):
        sleeps.append(seconds)
        if len(sleeps) == 2:
            source.publish(_frame_with_stripes())

    auto = Automator(
        source,
        text_reader=TextReader(engine=_ScriptedEngine(())),
        image_matcher=ImageMatcher(threshold=0.5),
        waiter=ConditionWaiter(0, sleep=_sleep),
    )

    await auto.wait_for_image(_stripes(), at=(16, 16))

    assert len(sleeps) == 2
    assert calls == [1]


@pytest.mark.asyncio
async def test_frame_lock_held_while_sampling_and_released_before_ocr(monkeypatch):
    source = BufferFrameSource()
    source.publish(_frame_with_stripes())
    replacement = Frame.from_ndarray(np.zeros((64, 64, 3), dtype=np.uint8))
    producers = []
    blocked_during_sample = []
    released_during_ocr = []

    original_to_bgr = Frame.to_bgr

    def _to_bgr(self):
        # 取样期间生产者的 publish() 必须被读锁挡住
        producer = threading.Thread(target=source.publish, args=(replacement,), daemon=True)
        producer.start()
        producer.join(0.1)
        blocked_during_sample.append(producer.is_alive())
        producers.append(producer)
        return original_to_bgr(self)

    monkeypatch.setattr(Frame, "to_bgr", _to_bgr)

    class _LockCheckingEngine(_ScriptedEngine):
        def predict(self, img):
            producers[0].join(1.0)
            released_during_ocr.append(not producers[0].is_alive())
            return super().predict(img)

    auto, _, _ = _automator(_LockCheckingEngine(("Hello",)), source=source)

    assert await auto.has_text("hello")
    assert blocked_during_sample == [True]
    assert released_during_ocr == [True]
    assert source.current_frame() is replacement


@pytest.mark.asyncio
async def test_screenshot_capture_runs_on_io_pool():
    class _ThreadScreenshotter:
        def __init__(self):
            self.threads = []

        def capture(self, region=None):
            self.threads.append(threading.current_thread().name)
            return "image"

    shooter = _ThreadScreenshotter()
    auto = Automator(
        BufferFrameSource(),
        text_reader=TextReader(engine=_ScriptedEngine(())),
        screenshotter=shooter,
    )

    assert await auto.screenshot() == "image"
    assert shooter.threads[0].startswith("vz-io")
