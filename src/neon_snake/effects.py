"""Timed power-up effects with pause-aware expiry."""

from __future__ import annotations

import enum
import math


class EffectKind(str, enum.Enum):
    """Power-up kinds and the effect each one grants."""

    SLOW = "slow"
    GHOST = "ghost"


class EffectTimers:
    """Absolute expiry timestamps (milliseconds) for every effect kind.

    An effect is active while ``now < expiry``. Activation overwrites any
    remaining duration; effects do not stack.
    """

    def __init__(self) -> None:
        self._until: dict[EffectKind, float] = {kind: 0.0 for kind in EffectKind}

    @property
    def slow_until(self) -> float:
        return self._until[EffectKind.SLOW]

    @property
    def ghost_until(self) -> float:
        return self._until[EffectKind.GHOST]

    def clear(self) -> None:
        """Expire every effect."""
        for kind in self._until:
            self._until[kind] = 0.0

    def activate(self, kind: EffectKind, now: float, duration_ms: float) -> None:
        """Start *kind* at *now*, replacing whatever was left of it."""
        self._until[kind] = now + duration_ms

    def is_active(self, kind: EffectKind, now: float) -> bool:
        return now < self._until[kind]

    def remaining_ms(self, kind: EffectKind, now: float) -> float:
        return max(0.0, self._until[kind] - now)

    def shift_after_pause(self, pause_start: float, pause_end: float) -> None:
        """Push out every expiry still pending at *pause_start*.

        Effects that had already expired before the pause stay expired.
        """
        delta = pause_end - pause_start
        for kind, until in self._until.items():
            if until > pause_start:
                self._until[kind] = until + delta

    def labels(self, now: float) -> list[str]:
        """Return ``"SLOW 3s"``-style labels for every active effect."""
        labels: list[str] = []
        for kind in EffectKind:
            seconds = math.ceil((self._until[kind] - now) / 1000)
            if seconds > 0:
                labels.append(f"{kind.value.upper()} {seconds}s")
        return labels

    def status_text(self, now: float) -> str:
        labels = self.labels(now)
        return " | ".join(labels) if labels else "Power-up: none"

    def to_dict(self, now: float) -> dict:
        return {
            kind.value: self.remaining_ms(kind, now) for kind in EffectKind
        }
