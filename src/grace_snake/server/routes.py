"""REST API route handlers for session lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from grace_snake.config import GameConfig
from grace_snake.server.models import (
    CreateSessionRequest,
    ErrorResponse,
    SessionSummary,
)
from grace_snake.server.session_manager import SessionManager

router = APIRouter(prefix="/sessions", tags=["sessions"])

_NOT_FOUND = {404: {"model": ErrorResponse}}


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a session and start hosting it."""
    manager = _get_manager(request)
    try:
        config = GameConfig(
            board_size=body.board_size,
            init_length=body.init_length,
            speed_ms=body.speed_ms,
            death_time_ms=body.death_time_ms,
            food_break_ms=body.food_break_ms,
            forgiveness_break_ms=body.forgiveness_break_ms,
            seed=body.seed,
        )
        session = manager.create_session(config, frame_rate=body.frame_rate)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List hosted sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}", responses=_NOT_FOUND)
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the full game state."""
    session = _get_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    async with session.lock:
        state = session.engine.get_state()
    result = session.summary().model_dump(mode="json")
    result["config"] = session.engine.config.to_dict()
    result["state"] = state
    return result


@router.delete("/{session_id}", status_code=204, responses=_NOT_FOUND)
async def delete_session(session_id: str, request: Request) -> None:
    """Stop a session and release it."""
    try:
        await _get_manager(request).close_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc
