"""Tests for the real and fake clocks."""

import asyncio

from screenflow.clock import Clock, FakeClock


def test_clock_is_monotonic():
    clock = Clock()
    first = clock.now()
    second = clock.now()
    assert second >= first


def test_clock_sleep_ignores_non_positive():
    clock = Clock()
    start = clock.now()
    clock.sleep(0)
    clock.sleep(-1.0)
    assert clock.now() - start < 0.5


def test_fake_clock_starts_at_given_time():
    assert FakeClock().now() == 0.0
    assert FakeClock(start=5.0).now() == 5.0


def test_fake_clock_advance():
    clock = FakeClock()
    assert clock.advance(0.25) == 0.25
    assert clock.advance(0.25) == 0.5
    assert clock.now() == 0.5


def test_fake_clock_never_goes_back():
    clock = FakeClock(start=1.0)
    clock.advance(-0.5)
    assert clock.now() == 1.0


def test_fake_clock_sleep_advances_and_records():
    clock = FakeClock()
    clock.sleep(0.1)
    clock.sleep(0.2)
    assert abs(clock.now() - 0.3) < 1e-9
    assert clock.sleeps == [0.1, 0.2]


def test_fake_clock_sleep_async():
    clock = FakeClock()
    asyncio.run(clock.sleep_async(0.5))
    assert clock.now() == 0.5
