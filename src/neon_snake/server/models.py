"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from neon_snake.settings import Settings


class SettingsPayload(BaseModel):
    """Untrusted settings; unknown or invalid values fall back to defaults."""

    model_config = ConfigDict(extra="ignore")

    grid_size: Any = None
    speed: Any = None
    theme: Any = None

    def sanitized(self) -> Settings:
        return Settings.sanitize(self.model_dump())


class SettingsResponse(BaseModel):
    grid_size: int
    speed: str
    theme: str
    base_interval_ms: int

    @classmethod
    def from_settings(cls, settings: Settings) -> SettingsResponse:
        return cls(
            grid_size=settings.grid_size,
            speed=settings.speed,
            theme=settings.theme,
            base_interval_ms=settings.base_interval_ms,
        )


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    settings: SettingsPayload | None = None


class StartRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/start.

    Settings sent here are persisted as the last-used settings.
    """

    settings: SettingsPayload | None = None


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: str = Field(min_length=1, max_length=16)


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: str
    score: int
    best_score: int
    grid_size: int


class BestScoreResponse(BaseModel):
    best_score: int

