import asyncio

import pytest

from srtf_scheduler.clock import Clock


def test_tick_advances_by_increment():
    clock = Clock(period=1, increment=0.5)
    assert clock.now == 0
    clock.tick()
    clock.tick()
    clock.tick()
    assert clock.now == 1.5


def test_timers_fire_in_deadline_then_registration_order():
    clock = Clock(period=1, increment=1)
    fired = []
    clock.call_at(2, lambda: fired.append("b"))
    clock.call_at(1, lambda: fired.append("a"))
    clock.call_at(2, lambda: fired.append("c"))

    clock.tick()
    assert fired == ["a"]
    clock.tick()
    assert fired == ["a", "b", "c"]


def test_cancelled_timer_does_not_fire():
    clock = Clock(period=1, increment=1)
    fired = []
    timer = clock.call_at(1, lambda: fired.append("x"))
    timer.cancel()
    clock.tick()
    assert fired == []
    assert timer.cancelled


def test_timer_fires_once_when_tick_overshoots():
    clock = Clock(period=1, increment=2)
    fired = []
    clock.call_at(1, lambda: fired.append(clock.now))
    clock.tick()
    clock.tick()
    assert fired == [2]


def test_past_deadline_fires_immediately():
    clock = Clock(period=1, increment=1)
    fired = []
    clock.call_at(0, lambda: fired.append("now"))
    assert fired == ["now"]


def test_invalid_period_rejected():
    with pytest.raises(ValueError):
        Clock(period=0, increment=1)


def test_ticker_advances_in_real_time():
    async def scenario():
        clock = Clock(period=0.001, increment=1)
        clock.start()
        assert clock.running
        await clock.wait_until(3)
        clock.stop()
        reached = clock.now
        await asyncio.sleep(0.01)
        return reached, clock.now, clock.running

    reached, later, running = asyncio.run(scenario())
    assert reached >= 3
    assert later == reached
    assert not running
