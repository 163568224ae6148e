"""REST API route handlers for sessions, settings, themes and scores."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from neon_snake.server.models import (
    BestScoreResponse,
    CreateSessionRequest,
    DirectionRequest,
    SessionSummary,
    SettingsPayload,
    SettingsResponse,
    StartRequest,
)
from neon_snake.server.session_manager import SessionManager
from neon_snake.snake import Direction
from neon_snake.themes import THEMES

router = APIRouter(prefix="/sessions", tags=["sessions"])
config_router = APIRouter(tags=["config"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _get_state(manager: SessionManager, session_id: str) -> dict:
    session = manager.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    return session.engine.get_state()


@config_router.get("/settings")
async def get_settings(request: Request) -> SettingsResponse:
    """Return the last-used settings."""
    settings = _get_manager(request).store.load_settings()
    return SettingsResponse.from_settings(settings)


@config_router.put("/settings")
async def put_settings(body: SettingsPayload, request: Request) -> SettingsResponse:
    """Sanitize and persist settings; they apply at the next (re)start."""
    settings = body.sanitized()
    _get_manager(request).store.save_settings(settings)
    return SettingsResponse.from_settings(settings)


@config_router.get("/themes")
async def list_themes() -> dict:
    return {name: theme.to_dict() for name, theme in THEMES.items()}


@config_router.get("/scores/best")
async def get_best_score(request: Request) -> BestScoreResponse:
    return BestScoreResponse(
        best_score=_get_manager(request).store.load_best_score(),
    )


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new session in the ``Ready`` state."""
    manager = _get_manager(request)
    settings = body.settings.sanitized() if body.settings is not None else None
    try:
        session = manager.create_session(settings)
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get the full render snapshot of a session."""
    return _get_state(_get_manager(request), session_id)


@router.post("/{session_id}/start")
async def start_session(
    session_id: str, request: Request, body: StartRequest | None = None,
) -> dict:
    """Start or restart the session, applying settings."""
    manager = _get_manager(request)
    settings = (
        body.settings.sanitized()
        if body is not None and body.settings is not None
        else None
    )
    try:
        return manager.start_session(session_id, settings)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("/{session_id}/pause")
async def toggle_pause(session_id: str, request: Request) -> dict:
    try:
        return _get_manager(request).toggle_pause(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("/{session_id}/reset")
async def reset_session(session_id: str, request: Request) -> dict:
    try:
        return _get_manager(request).reset_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("/{session_id}/direction")
async def set_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> dict:
    """Queue a direction change for the next tick."""
    direction = Direction.from_name(body.direction)
    if direction is None:
        raise HTTPException(status_code=422, detail="Unknown direction.")
    try:
        accepted = _get_manager(request).set_direction(session_id, direction)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"accepted": accepted, "direction": direction.name.lower()}


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> Response:
    try:
        await _get_manager(request).remove_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=204)
