"""In-memory session registry and async frame loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from grace_snake.config import GameConfig
from grace_snake.engine import GameEngine
from grace_snake.presentation import Key
from grace_snake.server.models import SessionStatus, SessionSummary

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 64


@dataclass
class Session:
    """A hosted game: engine, pending input, and connected sockets."""

    session_id: str
    engine: GameEngine
    frame_rate: int
    status: SessionStatus = SessionStatus.RUNNING
    pending_keys: set[Key] = field(default_factory=set)
    sockets: list[WebSocket] = field(default_factory=list)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    def press(self, keys: set[Key]) -> None:
        """Record keys pressed since the last frame."""
        self.pending_keys |= keys

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            status=self.status,
            score=self.engine.score,
            phase=self.engine.state.phase.value,
            frame_rate=self.frame_rate,
            connected=bool(self.sockets),
        )


class SessionManager:
    """Central registry managing all hosted sessions."""

    def __init__(self, max_sessions: int = _MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self._sessions: dict[str, Session] = {}
        self._max_sessions = max_sessions

    def create_session(
        self, config: GameConfig, frame_rate: int = 60,
    ) -> Session:
        """Create a session and start its frame loop."""
        if len(self._sessions) >= self._max_sessions:
            raise ValueError("Session limit reached. Try again later.")

        session_id = uuid.uuid4().hex[:12]
        session = Session(
            session_id=session_id,
            engine=GameEngine(config),
            frame_rate=frame_rate,
        )
        self._sessions[session_id] = session
        session._task = asyncio.create_task(self._frame_loop(session))
        logger.info("Session %s created (board=%d).", session_id, config.board_size)
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    async def close_session(self, session_id: str) -> None:
        """Stop a session's frame loop and drop it from the registry."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        session.status = SessionStatus.CLOSED
        if session._task and not session._task.done():
            session._task.cancel()
            await asyncio.gather(session._task, return_exceptions=True)
        await self._close_connections(session)
        logger.info("Session %s closed.", session_id)

    async def _frame_loop(self, session: Session) -> None:
        """Drive the engine at the session frame rate."""
        frame_interval = 1.0 / session.frame_rate
        last = time.monotonic()
        try:
            while session.status == SessionStatus.RUNNING:
                await asyncio.sleep(frame_interval)
                now = time.monotonic()
                delta, last = now - last, now
                async with session.lock:
                    keys, session.pending_keys = session.pending_keys, set()
                    was_paused = session.engine.state.is_paused
                    stepped = session.engine.update(keys, delta)
                    changed = (
                        stepped or was_paused != session.engine.state.is_paused
                    )
                    state = session.engine.get_state() if changed else None
                if state is not None:
                    await self._broadcast(session, state)
        except asyncio.CancelledError:
            logger.info("Frame loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Frame loop error in session %s.", session.session_id)
            session.status = SessionStatus.CLOSED
        finally:
            if session.status == SessionStatus.CLOSED:
                await self._close_connections(session)
                self._sessions.pop(session.session_id, None)

    async def _close_connections(self, session: Session) -> None:
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session closed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.sockets.clear()

    async def _broadcast(self, session: Session, state: dict) -> None:
        """Send game state to every connected socket."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running frame loops."""
        for session in self._sessions.values():
            session.status = SessionStatus.CLOSED
            if session._task and not session._task.done():
                session._task.cancel()
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._sessions.clear()
        logger.info("SessionManager cleanup complete.")
