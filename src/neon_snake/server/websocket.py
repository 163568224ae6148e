"""WebSocket handler: keyboard input in, render snapshots out."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from neon_snake.server.session_manager import Session, SessionManager
from neon_snake.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def _handle_message(manager: SessionManager, session: Session, msg: dict) -> None:
    direction_str = msg.get("direction")
    if isinstance(direction_str, str):
        direction = Direction.from_name(direction_str)
        if direction is not None:
            session.engine.set_direction(direction)
        return

    command = msg.get("command")
    if command == "pause":
        session.engine.toggle_pause()
    elif command == "start":
        try:
            manager.start_session(session.session_id)
        except KeyError:
            logger.debug(
                "Start ignored; session %s was removed.", session.session_id,
            )
    elif command == "reset":
        session.engine.reset()


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send directions/commands, receive state each tick."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    # The current state goes out first so the client can draw immediately.
    manager.attach(session, websocket)
    logger.info("Player connected to session %s.", session_id)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue
            _handle_message(manager, session, msg)
    except WebSocketDisconnect:
        logger.info("Player disconnected from session %s.", session_id)
    finally:
        manager.detach(session, websocket)
