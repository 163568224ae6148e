"""Tests for the EffectTimers module."""

from neon_snake.effects import EffectKind, EffectTimers


class TestActivation:
    def test_inactive_by_default(self):
        effects = EffectTimers()
        assert not effects.is_active(EffectKind.SLOW, 0.0)
        assert not effects.is_active(EffectKind.GHOST, 1e9)

    def test_activate(self):
        effects = EffectTimers()
        effects.activate(EffectKind.SLOW, 1000.0, 5000)
        assert effects.slow_until == 6000.0
        assert effects.is_active(EffectKind.SLOW, 5999.0)
        assert not effects.is_active(EffectKind.SLOW, 6000.0)
        assert not effects.is_active(EffectKind.GHOST, 2000.0)

    def test_activation_overwrites_without_stacking(self):
        effects = EffectTimers()
        effects.activate(EffectKind.GHOST, 0.0, 5000)
        effects.activate(EffectKind.GHOST, 1000.0, 5000)
        assert effects.ghost_until == 6000.0

    def test_clear(self):
        effects = EffectTimers()
        effects.activate(EffectKind.GHOST, 0.0, 5000)
        effects.clear()
        assert not effects.is_active(EffectKind.GHOST, 0.0)


class TestPauseShift:
    def test_active_effect_shifted(self):
        effects = EffectTimers()
        effects.activate(EffectKind.SLOW, 0.0, 5000)
        effects.shift_after_pause(2000.0, 12_000.0)
        assert effects.slow_until == 15_000.0
        assert effects.remaining_ms(EffectKind.SLOW, 12_000.0) == 3000.0

    def test_expired_effect_not_shifted(self):
        effects = EffectTimers()
        effects.activate(EffectKind.GHOST, 0.0, 5000)
        effects.shift_after_pause(7000.0, 9000.0)
        assert effects.ghost_until == 5000.0

    def test_only_pending_effects_shifted(self):
        effects = EffectTimers()
        effects.activate(EffectKind.SLOW, 0.0, 1000)
        effects.activate(EffectKind.GHOST, 0.0, 5000)
        effects.shift_after_pause(2000.0, 3000.0)
        assert effects.slow_until == 1000.0
        assert effects.ghost_until == 6000.0


class TestLabels:
    def test_none_active(self):
        effects = EffectTimers()
        assert effects.labels(0.0) == []
        assert effects.status_text(0.0) == "Power-up: none"

    def test_seconds_rounded_up(self):
        effects = EffectTimers()
        effects.activate(EffectKind.SLOW, 0.0, 5000)
        effects.activate(EffectKind.GHOST, 0.0, 1500)
        assert effects.labels(100.0) == ["SLOW 5s", "GHOST 2s"]
        assert effects.status_text(100.0) == "SLOW 5s | GHOST 2s"

    def test_to_dict(self):
        effects = EffectTimers()
        effects.activate(EffectKind.GHOST, 0.0, 5000)
        assert effects.to_dict(1000.0) == {"slow": 0.0, "ghost": 4000.0}
