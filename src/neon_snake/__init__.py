"""Neon Snake: timer-driven snake game engine."""

from neon_snake.effects import EffectKind, EffectTimers
from neon_snake.engine import GameEngine, RunState
from neon_snake.grid import Grid
from neon_snake.scheduler import AsyncioScheduler
from neon_snake.settings import Settings
from neon_snake.snake import Direction, Snake
from neon_snake.spawner import PowerUp, Spawner
from neon_snake.storage import JsonFileStore, MemoryStore

__all__ = [
    "AsyncioScheduler",
    "Direction",
    "EffectKind",
    "EffectTimers",
    "GameEngine",
    "Grid",
    "JsonFileStore",
    "MemoryStore",
    "PowerUp",
    "RunState",
    "Settings",
    "Snake",
    "Spawner",
]
