"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import json

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from grace_snake.presentation import Key
from grace_snake.server.app import create_app
from grace_snake.server.websocket import _keys_from_message


@pytest.fixture()
def tc():
    """Starlette TestClient running the app lifespan on one event loop."""
    with TestClient(create_app()) as client:
        yield client


def _create_session(tc, **overrides):
    body = {"death_time_ms": 5000, "frame_rate": 60}
    body.update(overrides)
    resp = tc.post("/sessions", json=body)
    assert resp.status_code == 201
    return resp.json()["session_id"]


def _receive_until_phase(ws, phase, limit=20):
    for _ in range(limit):
        state = json.loads(ws.receive_text())
        if state["state"]["phase"] == phase:
            return state
    raise AssertionError(f"phase {phase!r} never observed")


class TestKeysFromMessage:
    def test_keys_list(self):
        assert _keys_from_message({"keys": ["w", "Space"]}) == {Key.W, Key.SPACE}

    def test_single_key(self):
        assert _keys_from_message({"key": "left"}) == {Key.LEFT}

    def test_invalid_messages(self):
        assert _keys_from_message([]) == set()
        assert _keys_from_message(123) == set()
        assert _keys_from_message({"keys": "w"}) == set()
        assert _keys_from_message({"keys": [1, None, "bogus"]}) == set()
        assert _keys_from_message({"other": True}) == set()


class TestPlayWebSocket:
    def test_connect_and_receive_initial_state(self, tc):
        session_id = _create_session(tc)
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            state = json.loads(ws.receive_text())
            assert state["head"] == [4, 8]
            assert state["state"]["phase"] == "dead"
            assert "scene" in state

    def test_pause_and_resume(self, tc):
        session_id = _create_session(tc)
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"keys": ["space"]}))
            paused = _receive_until_phase(ws, "paused")
            assert paused["state"]["previous"] == "dead"
            ws.send_text(json.dumps({"key": "space"}))
            _receive_until_phase(ws, "dead")

    def test_invalid_messages_ignored(self, tc):
        session_id = _create_session(tc)
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text("not-json")
            ws.send_text("[]")
            ws.send_text(json.dumps({"keys": ["escape"]}))
            ws.send_text(json.dumps({"keys": ["space"]}))
            _receive_until_phase(ws, "paused")

    def test_steps_are_broadcast(self, tc):
        session_id = _create_session(
            tc, death_time_ms=50, speed_ms=50, frame_rate=120,
        )
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            state = _receive_until_phase(ws, "alive")
            assert state["tick"] >= 1

    def test_connected_flag(self, tc):
        session_id = _create_session(tc)
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            assert tc.get(f"/sessions/{session_id}").json()["connected"] is True

    def test_nonexistent_session_rejected(self, tc):
        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            "/sessions/nonexistent/play",
        ):
            pass
