"""Recurring tick timers.

A scheduler owns at most one live callback. ``schedule`` always cancels the
previous one before arming the next, so changing the tick period can never
leave two timers advancing the same game.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    @property
    def interval_ms(self) -> int | None: ...

    @property
    def active(self) -> bool: ...

    def schedule(self, interval_ms: int, callback: Callable[[], object]) -> None: ...

    def cancel(self) -> None: ...


class AsyncioScheduler:
    """Recurring timer built on ``loop.call_later``.

    The next firing is armed before the callback runs, so a callback that
    reschedules or cancels replaces that firing instead of racing it.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._callback: Callable[[], object] | None = None
        self._interval_ms: int | None = None

    @property
    def interval_ms(self) -> int | None:
        """Period of the live schedule, or ``None`` when idle."""
        return self._interval_ms if self._handle is not None else None

    @property
    def active(self) -> bool:
        return self._handle is not None

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def schedule(self, interval_ms: int, callback: Callable[[], object]) -> None:
        """Fire *callback* every *interval_ms*, replacing any prior schedule."""
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive.")
        self.cancel()
        self._callback = callback
        self._interval_ms = interval_ms
        self._arm()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._callback = None

    def _arm(self) -> None:
        assert self._interval_ms is not None  # noqa: S101
        self._handle = self._get_loop().call_later(
            self._interval_ms / 1000.0, self._fire,
        )

    def _fire(self) -> None:
        callback = self._callback
        if callback is None:
            return
        self._arm()
        try:
            callback()
        except Exception:
            logger.exception("Tick callback failed; stopping schedule.")
            self.cancel()
