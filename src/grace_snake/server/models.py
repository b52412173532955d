"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class SessionStatus(str, enum.Enum):
    """Lifecycle states for a hosted game session."""

    RUNNING = "running"
    CLOSED = "closed"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    board_size: int = Field(default=16, ge=4, le=64)
    init_length: int = Field(default=4, ge=1)
    speed_ms: int = Field(default=150, ge=20, le=2000)
    death_time_ms: int = Field(default=600, ge=20, le=5000)
    food_break_ms: int = Field(default=100, ge=20, le=2000)
    forgiveness_break_ms: int = Field(default=100, ge=20, le=2000)
    frame_rate: int = Field(default=60, ge=10, le=120)
    seed: int | None = None


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: SessionStatus
    score: int
    phase: str
    frame_rate: int
    connected: bool


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
