"""Timer-driven single-player engine: snake, food, power-ups, run state."""

from __future__ import annotations

import enum
import logging
import time
from collections.abc import Callable

import numpy as np

from neon_snake.effects import EffectKind, EffectTimers
from neon_snake.grid import Cell, Grid
from neon_snake.scheduler import AsyncioScheduler, Scheduler
from neon_snake.settings import Settings
from neon_snake.snake import Direction, Snake, is_reverse, step
from neon_snake.spawner import POWER_UP_SPAWN_CHANCE, PowerUp, Spawner
from neon_snake.storage import MemoryStore, ScoreStore
from neon_snake.themes import get_theme

logger = logging.getLogger(__name__)

SCORE_INCREMENT = 10
SPEED_STEP_MS = 4
MIN_INTERVAL_MS = 60
POWER_UP_DURATION_MS = 5000
SLOW_MULTIPLIER = 1.6

Listener = Callable[[dict], None]


class RunState(str, enum.Enum):
    """Lifecycle of a session.

    ``READY`` and ``GAME_OVER`` are only left through an explicit
    start/reset from outside.
    """

    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: dict[RunState, str] = {
    RunState.READY: "Ready",
    RunState.RUNNING: "Running",
    RunState.PAUSED: "Paused",
    RunState.GAME_OVER: "Game Over",
}


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class GameEngine:
    """One snake session driven by a recurring scheduler.

    The engine owns every entity of the session. Input handlers
    (:meth:`set_direction`, :meth:`toggle_pause`) and :meth:`tick` run on
    the same cooperative thread, so each tick is atomic with respect to
    input. Listeners receive the state snapshot after every tick and every
    run-state transition.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        store: ScoreStore | None = None,
        scheduler: Scheduler | None = None,
        clock: Callable[[], float] = monotonic_ms,
        seed: int | None = None,
        power_up_chance: float = POWER_UP_SPAWN_CHANCE,
    ) -> None:
        self.store: ScoreStore = store if store is not None else MemoryStore()
        self.scheduler: Scheduler = (
            scheduler if scheduler is not None else AsyncioScheduler()
        )
        self.rng = np.random.default_rng(seed)
        self.power_up_chance = power_up_chance
        self._clock = clock
        self._listeners: list[Listener] = []

        self.settings = settings if settings is not None else Settings()
        self.effects = EffectTimers()
        self.reset()

    # --- listeners ---

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> dict:
        state = self.get_state()
        for listener in list(self._listeners):
            listener(state)
        return state

    # --- run-state transitions ---

    @property
    def status(self) -> str:
        return self.state.label

    def reset(self, settings: Settings | None = None) -> dict:
        """Return to ``READY`` with fresh entities built from the settings."""
        self.scheduler.cancel()
        if settings is not None:
            self.settings = settings

        self.grid = Grid(self.settings.grid_size)
        self.spawner = Spawner(
            self.grid, rng=self.rng, power_up_chance=self.power_up_chance,
        )
        self.snake = Snake.spawn(self.grid.size)
        self.direction = Direction.RIGHT
        self.pending_direction = Direction.RIGHT
        self.power_up: PowerUp | None = None
        self.food: Cell | None = self.spawner.spawn_food(self.snake, None)
        self.score = 0
        self.best_score = self.store.load_best_score()
        self.base_interval_ms = self.settings.base_interval_ms
        self.effects.clear()

        self.state = RunState.READY
        self.has_started = False
        self.paused_at: float | None = None
        self.final_score: int | None = None
        self.won = False
        self.tick_count = 0
        return self._notify()

    def start(self) -> bool:
        """``READY`` → ``RUNNING``. Returns False if the game is not ready."""
        if self.state is not RunState.READY:
            logger.debug("Ignoring start while %s.", self.state.value)
            return False
        self.scheduler.cancel()
        self.has_started = True
        self.state = RunState.RUNNING
        self.paused_at = None
        self.scheduler.schedule(self.effective_interval_ms(), self.tick)
        logger.info(
            "Game started: grid=%d speed=%s interval=%dms.",
            self.grid.size, self.settings.speed, self.base_interval_ms,
        )
        self._notify()
        return True

    def restart(self, settings: Settings | None = None) -> dict:
        """Reset with *settings* and start immediately."""
        self.reset(settings)
        self.start()
        return self.get_state()

    def pause(self) -> bool:
        if self.state is not RunState.RUNNING:
            return False
        self.scheduler.cancel()
        self.paused_at = self._clock()
        self.state = RunState.PAUSED
        self._notify()
        return True

    def resume(self) -> bool:
        if self.state is not RunState.PAUSED:
            return False
        now = self._clock()
        if self.paused_at is not None:
            self.effects.shift_after_pause(self.paused_at, now)
        self.paused_at = None
        self.state = RunState.RUNNING
        self.scheduler.schedule(self.effective_interval_ms(now), self.tick)
        self._notify()
        return True

    def toggle_pause(self) -> bool:
        """Pause a running game or resume a paused one."""
        if self.state is RunState.RUNNING:
            return self.pause()
        if self.state is RunState.PAUSED:
            return self.resume()
        return False

    # --- input ---

    def set_direction(self, direction: Direction) -> bool:
        """Queue *direction* for the next tick; last accepted write wins.

        Reversals are judged against the pending direction, so two quick
        presses cannot fold the snake back onto itself within one tick.
        """
        if self.state is not RunState.RUNNING:
            return False
        if is_reverse(direction, self.pending_direction):
            return False
        self.pending_direction = direction
        return True

    # --- simulation ---

    def effective_interval_ms(self, now: float | None = None) -> int:
        """Tick period after applying the slow effect to the base interval."""
        if now is None:
            now = self._clock()
        if self.effects.is_active(EffectKind.SLOW, now):
            return round(self.base_interval_ms * SLOW_MULTIPLIER)
        return self.base_interval_ms

    def tick(self) -> dict:
        """Advance the game by one step.

        Returns the full game state as a serializable dict.
        """
        if self.state is not RunState.RUNNING:
            return self.get_state()

        now = self._clock()
        self.direction = self.pending_direction
        next_head = step(self.snake.head, self.direction)
        will_grow = next_head == self.food
        picked = (
            self.power_up
            if self.power_up is not None and next_head == self.power_up.cell
            else None
        )

        if self._collides(next_head, will_grow, now):
            self._finish(won=False)
            return self._notify()

        self.snake.advance(next_head, grew=will_grow)
        self.tick_count += 1

        if will_grow:
            self._consume_food()

        if picked is not None:
            self.effects.activate(picked.kind, now, POWER_UP_DURATION_MS)
            self.power_up = None
            logger.debug("Picked up %s power-up.", picked.kind.value)

        if self.state is RunState.RUNNING:
            interval = self.effective_interval_ms(now)
            if self.scheduler.interval_ms != interval:
                self.scheduler.schedule(interval, self.tick)

        return self._notify()

    def _collides(self, cell: Cell, growing: bool, now: float) -> bool:
        # Walls are lethal even for a ghost.
        if not self.grid.in_bounds(cell):
            return True
        if self.effects.is_active(EffectKind.GHOST, now):
            return False
        return self.snake.hits_body(cell, growing)

    def _consume_food(self) -> None:
        self.score += SCORE_INCREMENT
        # Other engines may share the store and have raised the record.
        self.best_score = max(self.best_score, self.store.load_best_score())
        if self.score > self.best_score:
            self.best_score = self.score
            self.store.save_best_score(self.best_score)

        self.food = self.spawner.spawn_food(self.snake, self.power_up)
        if self.food is None:
            self._finish(won=True)
            return
        self.power_up = self.spawner.maybe_spawn_power_up(
            self.snake, self.food, self.power_up,
        )
        self.base_interval_ms = max(
            MIN_INTERVAL_MS, self.base_interval_ms - SPEED_STEP_MS,
        )

    def _finish(self, won: bool) -> None:
        self.scheduler.cancel()
        self.state = RunState.GAME_OVER
        self.paused_at = None
        self.final_score = self.score
        self.won = won
        logger.info(
            "Game over at tick %d with score %d (best %d, won=%s).",
            self.tick_count, self.score, self.best_score, won,
        )

    # --- snapshot ---

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        now = self._clock() if self.paused_at is None else self.paused_at
        theme = get_theme(self.settings.theme)
        return {
            "status": self.status,
            "state": self.state.value,
            "tick": self.tick_count,
            "grid_size": self.grid.size,
            "cell_size": self.settings.cell_size,
            "snake": self.snake.to_dict(),
            "direction": list(self.direction.value),
            "food": list(self.food) if self.food is not None else None,
            "power_up": (
                self.power_up.to_dict() if self.power_up is not None else None
            ),
            "score": self.score,
            "best_score": self.best_score,
            "final_score": self.final_score,
            "won": self.won,
            "base_interval_ms": self.base_interval_ms,
            "effective_interval_ms": self.effective_interval_ms(now),
            "effects": self.effects.to_dict(now),
            "effect_labels": self.effects.labels(now),
            "effect_status": self.effects.status_text(now),
            "settings": self.settings.to_dict(),
            "theme": theme.to_dict(),
        }
