"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from grace_snake.presentation import Key, parse_key
from grace_snake.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def _keys_from_message(msg: object) -> set[Key]:
    """Extract key presses from ``{"keys": [...]}`` or ``{"key": "..."}``."""
    if not isinstance(msg, dict):
        return set()
    names = msg.get("keys")
    if names is None and "key" in msg:
        names = [msg["key"]]
    if not isinstance(names, list):
        return set()
    keys: set[Key] = set()
    for name in names:
        if not isinstance(name, str):
            continue
        key = parse_key(name)
        if key is not None:
            keys.add(key)
    return keys


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send key presses, receive state on every step."""
    session = _get_manager(websocket).get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session.sockets.append(websocket)
    logger.info("Player connected to session %s.", session_id)

    # Send an initial snapshot so the client can draw immediately.
    async with session.lock:
        state = session.engine.get_state()
    await websocket.send_text(json.dumps(state, separators=(",", ":")))

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            keys = _keys_from_message(msg)
            if not keys:
                continue
            async with session.lock:
                session.press(keys)
    except WebSocketDisconnect:
        logger.info("Player disconnected from session %s.", session_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
