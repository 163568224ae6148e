"""Shared fixtures: a hand-cranked clock and scheduler for engine tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from neon_snake.engine import GameEngine
from neon_snake.settings import Settings
from neon_snake.storage import MemoryStore


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class FakeScheduler:
    """Records schedules instead of arming real timers."""

    def __init__(self) -> None:
        self._interval_ms: int | None = None
        self._callback: Callable[[], object] | None = None
        self.history: list[int] = []

    @property
    def interval_ms(self) -> int | None:
        return self._interval_ms

    @property
    def active(self) -> bool:
        return self._callback is not None

    def schedule(self, interval_ms: int, callback: Callable[[], object]) -> None:
        self.cancel()
        self._interval_ms = interval_ms
        self._callback = callback
        self.history.append(interval_ms)

    def cancel(self) -> None:
        self._interval_ms = None
        self._callback = None

    def fire(self) -> None:
        assert self._callback is not None, "nothing scheduled"
        self._callback()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def make_engine(clock, scheduler, store):
    """Build an engine wired to the fake clock/scheduler; no power-ups by default."""

    def _make(
        settings: Settings | None = None,
        *,
        seed: int = 0,
        power_up_chance: float = 0.0,
    ) -> GameEngine:
        return GameEngine(
            settings,
            store=store,
            scheduler=scheduler,
            clock=clock,
            seed=seed,
            power_up_chance=power_up_chance,
        )

    return _make
