import asyncio
import time

import pytest

from vzflow.modules.automator import ConditionWaiter, WaitCancelled, WaitTimeout


class _Recorder:
    def __init__(self):
        self.sleeps = []

    async def sleep(self, seconds):
        self.sleeps.append(seconds)


def _true_on(n):
    calls = {"count": 0}

    def _predicate():
        calls["count"] += 1
        return calls["count"] >= n

    return _predicate, calls


@pytest.mark.asyncio
async def test_evaluates_until_true_and_sleeps_between():
    rec = _Recorder()
    waiter = ConditionWaiter(0.05, sleep=rec.sleep)
    predicate, calls = _true_on(3)

    attempts = await waiter.wait(predicate)

    assert attempts == 3
    assert calls["count"] == 3
    assert rec.sleeps == [0.05, 0.05]


@pytest.mark.asyncio
async def test_true_immediately_does_not_sleep():
    rec = _Recorder()
    waiter = ConditionWaiter(0.05, sleep=rec.sleep)

    assert await waiter.wait(lambda: True) == 1
    assert rec.sleeps == []


@pytest.mark.asyncio
async def test_async_predicate_is_awaited():
    rec = _Recorder()
    waiter = ConditionWaiter(0.01, sleep=rec.sleep)
    predicate, _ = _true_on(2)

    async def _async_predicate():
        return predicate()

    assert await waiter.wait(_async_predicate, interval=0.2) == 2
    assert rec.sleeps == [0.2]


@pytest.mark.asyncio
async def test_timeout_with_fake_clock():
    now = {"t": 0.0}

    async def _sleep(seconds):
        now["t"] += seconds

    waiter = ConditionWaiter(0.5, timeout=1.0, sleep=_sleep, clock=lambda: now["t"])

    with pytest.raises(WaitTimeout):
        await waiter.wait(lambda: False, label="never")

    assert now["t"] == pytest.approx(1.0)


@pytest.mark.asyncio
async def test_per_call_timeout_overrides_default():
    now = {"t": 0.0}

    async def _sleep(seconds):
        now["t"] += seconds

    waiter = ConditionWaiter(1.0, sleep=_sleep, clock=lambda: now["t"])

    with pytest.raises(WaitTimeout):
        await waiter.wait(lambda: False, timeout=3.0)

    assert now["t"] == pytest.approx(3.0)


@pytest.mark.asyncio
async def test_cancel_event_stops_wait():
    cancel = asyncio.Event()
    rec = _Recorder()
    count = {"n": 0}

    def _predicate():
        count["n"] += 1
        if count["n"] == 2:
            cancel.set()
        return False

    waiter = ConditionWaiter(0.01, sleep=rec.sleep)

    with pytest.raises(WaitCancelled):
        await waiter.wait(_predicate, cancel=cancel)

    assert count["n"] == 2


@pytest.mark.asyncio
async def test_predicate_errors_propagate():
    waiter = ConditionWaiter(0.01)

    def _boom():
        raise RuntimeError("sensor failure")

    with pytest.raises(RuntimeError, match="sensor failure"):
        await waiter.wait(_boom)


@pytest.mark.asyncio
async def test_real_sleep_respects_interval():
    waiter = ConditionWaiter(0.02)
    predicate, _ = _true_on(3)

    start = time.monotonic()
    await waiter.wait(predicate)

    assert time.monotonic() - start >= 0.035
