import asyncio

import pytest

from runtracker.client.scheduler import IntervalTicker


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        IntervalTicker(0)


@pytest.mark.asyncio
async def test_fire_calls_sync_and_async_subscribers():
    calls = []

    async def async_cb():
        calls.append("async")

    ticker = IntervalTicker(1)
    ticker.subscribe(lambda: calls.append("sync"))
    ticker.subscribe(async_cb)
    await ticker.fire()
    assert calls == ["sync", "async"]


@pytest.mark.asyncio
async def test_failing_subscriber_does_not_stop_others():
    calls = []

    def boom():
        raise RuntimeError("boom")

    ticker = IntervalTicker(1)
    ticker.subscribe(boom)
    ticker.subscribe(lambda: calls.append("ok"))
    await ticker.fire()
    assert calls == ["ok"]


@pytest.mark.asyncio
async def test_start_ticks_until_stopped():
    ticks = []
    ticker = IntervalTicker(0.01, name="test ticker")
    ticker.subscribe(lambda: ticks.append(1))

    ticker.start()
    assert ticker.running
    await asyncio.sleep(0.1)
    await ticker.stop()

    assert not ticker.running
    count = len(ticks)
    assert count >= 1
    await asyncio.sleep(0.05)
    assert len(ticks) == count
