"""Player-facing game settings and their sanitization."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

from neon_snake.themes import DEFAULT_THEME, THEMES

CANVAS_SIZE = 600
GRID_SIZES: tuple[int, ...] = (10, 15, 20)

# Initial tick interval in milliseconds per speed tier.
SPEED_PRESETS: dict[str, int] = {
    "slow": 180,
    "normal": 140,
    "fast": 100,
}


@dataclass(frozen=True)
class Settings:
    """Options applied at (re)start: board size, speed tier, theme."""

    grid_size: int = 15
    speed: str = "normal"
    theme: str = DEFAULT_THEME

    def __post_init__(self) -> None:
        if self.grid_size not in GRID_SIZES:
            raise ValueError(f"grid_size must be one of {GRID_SIZES}.")
        if self.speed not in SPEED_PRESETS:
            raise ValueError(f"speed must be one of {sorted(SPEED_PRESETS)}.")
        if self.theme not in THEMES:
            raise ValueError(f"theme must be one of {sorted(THEMES)}.")

    @property
    def base_interval_ms(self) -> int:
        return SPEED_PRESETS[self.speed]

    @property
    def cell_size(self) -> float:
        """Pixel size of one cell on the reference canvas."""
        return CANVAS_SIZE / self.grid_size

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def sanitize(cls, raw: Mapping[str, Any] | None) -> Settings:
        """Build settings from untrusted input, defaulting each bad field."""
        defaults = cls()
        if not isinstance(raw, Mapping):
            return defaults

        grid_size = raw.get("grid_size", raw.get("gridSize"))
        if isinstance(grid_size, str) and grid_size.strip().isdigit():
            grid_size = int(grid_size)
        if isinstance(grid_size, bool) or grid_size not in GRID_SIZES:
            grid_size = defaults.grid_size

        speed = raw.get("speed")
        if not isinstance(speed, str) or speed not in SPEED_PRESETS:
            speed = defaults.speed

        theme = raw.get("theme")
        if not isinstance(theme, str) or theme not in THEMES:
            theme = defaults.theme

        return cls(grid_size=int(grid_size), speed=speed, theme=theme)
