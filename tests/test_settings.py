"""Tests for settings sanitization and the theme tables."""

import pytest

from neon_snake.effects import EffectKind
from neon_snake.settings import SPEED_PRESETS, Settings
from neon_snake.themes import DEFAULT_THEME, THEMES, get_theme


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.grid_size == 15
        assert settings.speed == "normal"
        assert settings.theme == "neon"
        assert settings.base_interval_ms == 140
        assert settings.cell_size == 40.0

    def test_speed_presets(self):
        assert SPEED_PRESETS == {"slow": 180, "normal": 140, "fast": 100}
        assert Settings(speed="fast").base_interval_ms == 100

    def test_invalid_values_rejected_on_construction(self):
        with pytest.raises(ValueError, match="grid_size"):
            Settings(grid_size=12)
        with pytest.raises(ValueError, match="speed"):
            Settings(speed="ludicrous")
        with pytest.raises(ValueError, match="theme"):
            Settings(theme="pastel")

    def test_to_dict(self):
        assert Settings(grid_size=20).to_dict() == {
            "grid_size": 20, "speed": "normal", "theme": "neon",
        }


class TestSanitize:
    def test_valid_passthrough(self):
        raw = {"grid_size": 10, "speed": "slow", "theme": "retro"}
        assert Settings.sanitize(raw) == Settings(10, "slow", "retro")

    def test_each_field_defaults_independently(self):
        raw = {"grid_size": 13, "speed": "slow", "theme": 7}
        assert Settings.sanitize(raw) == Settings(15, "slow", "neon")

    def test_numeric_string_grid_size(self):
        assert Settings.sanitize({"grid_size": "20"}).grid_size == 20

    def test_camel_case_key(self):
        assert Settings.sanitize({"gridSize": 10}).grid_size == 10

    def test_boolean_grid_size_rejected(self):
        assert Settings.sanitize({"grid_size": True}).grid_size == 15

    @pytest.mark.parametrize("raw", [None, [], "neon", 42])
    def test_non_mapping_gives_defaults(self, raw):
        assert Settings.sanitize(raw) == Settings()


class TestThemes:
    def test_known_themes(self):
        assert set(THEMES) == {"neon", "retro", "ocean"}
        assert DEFAULT_THEME == "neon"

    def test_unknown_falls_back_to_default(self):
        assert get_theme("pastel") is THEMES["neon"]

    def test_power_up_colors(self):
        theme = THEMES["retro"]
        assert theme.power_up_color(EffectKind.SLOW) == theme.accent
        assert theme.power_up_color(EffectKind.GHOST) == theme.accent_2

    def test_to_dict_tokens(self):
        tokens = THEMES["ocean"].to_dict()
        assert tokens["canvas_bg"] == "rgba(2, 22, 38, 0.95)"
        assert tokens["power_up"] == {"slow": "#62e4ff", "ghost": "#4ab0ff"}
