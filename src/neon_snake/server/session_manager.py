"""In-memory session registry and snapshot fan-out to connected sockets."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any

from starlette.websockets import WebSocket, WebSocketState

from neon_snake.engine import GameEngine, RunState
from neon_snake.scheduler import AsyncioScheduler
from neon_snake.server.models import SessionSummary
from neon_snake.settings import Settings
from neon_snake.snake import Direction
from neon_snake.storage import MemoryStore, ScoreStore

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100
_OUTBOX_SIZE = 32


@dataclass
class Session:
    """One single-player game plus the sockets watching it.

    Snapshots are queued on ``outbox`` and sent by a single ``sender`` task,
    so every socket sees them in tick order. A slow client makes the oldest
    queued snapshots drop once the outbox is full.
    """

    session_id: str
    engine: GameEngine
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    outbox: asyncio.Queue[str] | None = None
    sender: asyncio.Task | None = None

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            status=self.engine.status,
            score=self.engine.score,
            best_score=self.engine.best_score,
            grid_size=self.engine.grid.size,
        )


class SessionManager:
    """Central registry managing all sessions.

    Every engine runs its ticks as ``call_later`` callbacks on the event
    loop that also serves HTTP and WebSocket input, so engine state is never
    touched concurrently.
    """

    def __init__(
        self,
        store: ScoreStore | None = None,
        max_sessions: int = _MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self.store: ScoreStore = store if store is not None else MemoryStore()
        self._sessions: dict[str, Session] = {}
        self._max_sessions = max_sessions
        self._tasks: set[asyncio.Task] = set()

    def create_session(self, settings: Settings | None = None) -> Session:
        """Create a ``READY`` session, defaulting to the persisted settings."""
        if len(self._sessions) >= self._max_sessions:
            self._prune_finished_sessions()
        if len(self._sessions) >= self._max_sessions:
            raise ValueError("Session limit reached. Try again later.")

        engine = GameEngine(
            settings if settings is not None else self.store.load_settings(),
            store=self.store,
            scheduler=AsyncioScheduler(),
        )
        session = Session(session_id=uuid.uuid4().hex[:12], engine=engine)
        engine.add_listener(lambda state: self._on_update(session, state))
        self._sessions[session.session_id] = session
        logger.info(
            "Session %s created (grid=%d).", session.session_id, engine.grid.size,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    def start_session(
        self, session_id: str, settings: Settings | None = None,
    ) -> dict:
        """(Re)start a session, applying and persisting *settings*."""
        session = self.require_session(session_id)
        if settings is None:
            settings = self.store.load_settings()
        else:
            self.store.save_settings(settings)
        return session.engine.restart(settings)

    def toggle_pause(self, session_id: str) -> dict:
        session = self.require_session(session_id)
        session.engine.toggle_pause()
        return session.engine.get_state()

    def reset_session(self, session_id: str) -> dict:
        return self.require_session(session_id).engine.reset()

    def set_direction(self, session_id: str, direction: Direction) -> bool:
        return self.require_session(session_id).engine.set_direction(direction)

    async def remove_session(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        session.engine.scheduler.cancel()
        await self._close_connections(session)
        logger.info("Session %s removed.", session_id)

    def _prune_finished_sessions(self) -> None:
        """Drop finished sessions nobody is watching, oldest first."""
        stale = sorted(
            (
                s for s in self._sessions.values()
                if s.engine.state is RunState.GAME_OVER and not s.sockets
            ),
            key=lambda s: s.created_at,
        )
        for session in stale:
            self._sessions.pop(session.session_id, None)
        if stale:
            logger.info("Pruned %d finished sessions.", len(stale))

    def attach(self, session: Session, ws: WebSocket) -> None:
        """Register *ws* and queue the current state for it."""
        session.sockets.append(ws)
        if session.sender is None or session.sender.done():
            session.outbox = asyncio.Queue(maxsize=_OUTBOX_SIZE)
            session.sender = self._spawn(self._drain(session, session.outbox))
        self._on_update(session, session.engine.get_state())

    def detach(self, session: Session, ws: WebSocket) -> None:
        if ws in session.sockets:
            session.sockets.remove(ws)
        if not session.sockets:
            self._stop_sender(session)

    def _stop_sender(self, session: Session) -> None:
        if session.sender is not None:
            session.sender.cancel()
        session.sender = None
        session.outbox = None

    def _on_update(self, session: Session, state: dict) -> None:
        outbox = session.outbox
        if not session.sockets or outbox is None:
            return
        if outbox.full():
            outbox.get_nowait()
            logger.debug(
                "Session %s outbox full; dropped oldest snapshot.",
                session.session_id,
            )
        outbox.put_nowait(json.dumps(state, separators=(",", ":")))

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _drain(self, session: Session, outbox: asyncio.Queue[str]) -> None:
        while True:
            payload = await outbox.get()
            await self._broadcast(session, payload)

    async def _broadcast(self, session: Session, payload: str) -> None:
        """Send a serialized snapshot to every socket attached to the session."""
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the
        # live list without affecting this send loop.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def _close_connections(self, session: Session) -> None:
        self._stop_sender(session)
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session closed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.sockets.clear()

    async def cleanup(self) -> None:
        """Stop every timer and close every socket."""
        for session in self._sessions.values():
            session.engine.scheduler.cancel()
            await self._close_connections(session)
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
