"""Color token tables handed to the renderer."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from neon_snake.effects import EffectKind

DEFAULT_THEME = "neon"


@dataclass(frozen=True)
class Theme:
    """Semantic color names mapped to CSS color values."""

    background: str
    background_2: str
    panel: str
    text: str
    accent: str
    accent_2: str
    snake_head: str
    snake_body: str
    food: str
    grid: str
    canvas_bg: str
    snake_head_glow: str
    snake_body_glow: str
    food_glow: str
    button_grad_1: str
    button_grad_2: str

    def power_up_color(self, kind: EffectKind) -> str:
        """Slow power-ups use the primary accent, ghost ones the secondary."""
        return self.accent if kind is EffectKind.SLOW else self.accent_2

    def to_dict(self) -> dict:
        tokens = asdict(self)
        tokens["power_up"] = {
            kind.value: self.power_up_color(kind) for kind in EffectKind
        }
        return tokens


THEMES: dict[str, Theme] = {
    "neon": Theme(
        background="#090e29",
        background_2="#1a1145",
        panel="rgba(8, 12, 34, 0.7)",
        text="#e6ecff",
        accent="#5df2ff",
        accent_2="#ff5de1",
        snake_head="#9aff2e",
        snake_body="#40f9a2",
        food="#ff6b9b",
        grid="rgba(93, 242, 255, 0.08)",
        canvas_bg="rgba(2, 6, 24, 0.95)",
        snake_head_glow="rgba(154, 255, 46, 0.95)",
        snake_body_glow="rgba(64, 249, 162, 0.85)",
        food_glow="rgba(255, 107, 155, 0.95)",
        button_grad_1="rgba(93, 242, 255, 0.15)",
        button_grad_2="rgba(255, 93, 225, 0.15)",
    ),
    "retro": Theme(
        background="#20140f",
        background_2="#5b2c15",
        panel="rgba(43, 22, 11, 0.78)",
        text="#ffe7bc",
        accent="#ffd166",
        accent_2="#ff8c42",
        snake_head="#f4ff5d",
        snake_body="#ffb347",
        food="#ff4f6f",
        grid="rgba(255, 209, 102, 0.11)",
        canvas_bg="rgba(30, 15, 7, 0.95)",
        snake_head_glow="rgba(244, 255, 93, 0.92)",
        snake_body_glow="rgba(255, 179, 71, 0.85)",
        food_glow="rgba(255, 79, 111, 0.9)",
        button_grad_1="rgba(255, 209, 102, 0.15)",
        button_grad_2="rgba(255, 140, 66, 0.2)",
    ),
    "ocean": Theme(
        background="#031524",
        background_2="#09355c",
        panel="rgba(4, 29, 51, 0.74)",
        text="#d7f4ff",
        accent="#62e4ff",
        accent_2="#4ab0ff",
        snake_head="#66ffd6",
        snake_body="#47d5ff",
        food="#ffd166",
        grid="rgba(98, 228, 255, 0.1)",
        canvas_bg="rgba(2, 22, 38, 0.95)",
        snake_head_glow="rgba(102, 255, 214, 0.92)",
        snake_body_glow="rgba(71, 213, 255, 0.85)",
        food_glow="rgba(255, 209, 102, 0.9)",
        button_grad_1="rgba(98, 228, 255, 0.15)",
        button_grad_2="rgba(74, 176, 255, 0.2)",
    ),
}


def get_theme(name: str) -> Theme:
    """Return the named theme, falling back to the default."""
    return THEMES.get(name, THEMES[DEFAULT_THEME])
