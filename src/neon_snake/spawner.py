"""Food and power-up placement."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from neon_snake.effects import EffectKind
from neon_snake.grid import Cell, Grid

if TYPE_CHECKING:
    from neon_snake.snake import Snake

logger = logging.getLogger(__name__)

POWER_UP_SPAWN_CHANCE = 0.2


@dataclass(frozen=True)
class PowerUp:
    """A power-up lying on the board."""

    cell: Cell
    kind: EffectKind

    def to_dict(self) -> dict:
        return {"cell": list(self.cell), "kind": self.kind.value}


class Spawner:
    """Places food and power-ups on unoccupied cells.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Cells are drawn uniformly and rejected while occupied; after
    ``max_attempts`` rejections the draw falls back to a uniform choice among
    the remaining free cells, so a crowded board still terminates. A board
    with no free cell yields ``None``.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        power_up_chance: float = POWER_UP_SPAWN_CHANCE,
        max_attempts: int | None = None,
    ) -> None:
        if not 0.0 <= power_up_chance <= 1.0:
            raise ValueError("power_up_chance must be between 0 and 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.power_up_chance = power_up_chance
        self.max_attempts = (
            max_attempts if max_attempts is not None else grid.cell_count * 4
        )

    def _sample(self, occupied: set[Cell]) -> Cell | None:
        if len(occupied) < self.grid.cell_count:
            for _ in range(self.max_attempts):
                x, y = self.rng.integers(0, self.grid.size, size=2).tolist()
                if (x, y) not in occupied:
                    return x, y

        free = self.grid.free_cells(occupied)
        if not free:
            logger.info(
                "No free cells left on a %dx%d grid.",
                self.grid.size, self.grid.size,
            )
            return None
        return free[int(self.rng.integers(len(free)))]

    def spawn_food(self, snake: Snake, power_up: PowerUp | None = None) -> Cell | None:
        """Pick a food cell clear of the snake and the active power-up."""
        occupied = set(snake.body)
        if power_up is not None:
            occupied.add(power_up.cell)
        return self._sample(occupied)

    def spawn_power_up(self, snake: Snake, food: Cell | None) -> PowerUp | None:
        """Pick a power-up cell clear of the snake and the food."""
        kind = EffectKind.SLOW if self.rng.random() < 0.5 else EffectKind.GHOST
        occupied = set(snake.body)
        if food is not None:
            occupied.add(food)
        cell = self._sample(occupied)
        if cell is None:
            return None
        return PowerUp(cell=cell, kind=kind)

    def maybe_spawn_power_up(
        self,
        snake: Snake,
        food: Cell | None,
        current: PowerUp | None,
    ) -> PowerUp | None:
        """Roll once for a new power-up; an existing one is kept as is."""
        if current is not None:
            return current
        if self.rng.random() >= self.power_up_chance:
            return None
        power_up = self.spawn_power_up(snake, food)
        if power_up is not None:
            logger.debug(
                "Spawned %s power-up at %s.", power_up.kind.value, power_up.cell,
            )
        return power_up
