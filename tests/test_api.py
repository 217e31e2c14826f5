"""Tests for the FastAPI tic-tac-toe interface."""

from __future__ import annotations

from fastapi.testclient import TestClient

from tictactoe import api
from tictactoe.api import app


client = TestClient(app)
api.AI_THINK_DELAY = (0.0, 0.0)


def _new_game(**body):
    response = client.post("/api/game", json=body)
    assert response.status_code == 200
    return response.json()


def test_health():
    assert client.get("/health").json() == {"status": "ok"}


def test_create_game_and_first_move():
    payload = _new_game()
    assert payload["currentPlayer"] == "O"
    assert payload["status"] == "in_progress"
    assert payload["cells"] == [""] * 9
    assert payload["moveLog"] == []

    game_id = payload["id"]
    move_response = client.post(f"/api/game/{game_id}/move", json={"x": 1, "y": 1})
    assert move_response.status_code == 200
    state = move_response.json()
    assert state["cells"][4] == "O"
    assert state["moveLog"][0] == {"player": "O", "position": 4, "x": 1, "y": 1}
    assert state["currentPlayer"] == "X"
    assert state["aiPending"] is True

    follow_up = client.get(f"/api/game/{game_id}")
    assert follow_up.status_code == 200
    final_state = follow_up.json()
    assert final_state["aiPending"] is False
    assert final_state["currentPlayer"] == "O"
    assert final_state["moveLog"][-1]["player"] == "X"
    assert final_state["lastMove"] == final_state["moveLog"][-1]
    assert len(final_state["emptyPositions"]) == 7


def test_occupied_cell_rejected():
    game_id = _new_game()["id"]
    assert client.post(f"/api/game/{game_id}/move", json={"position": 0}).status_code == 200

    duplicate = client.post(f"/api/game/{game_id}/move", json={"position": 0})
    assert duplicate.status_code == 400
    assert "taken" in duplicate.json()["detail"]


def test_off_grid_move_rejected():
    game_id = _new_game()["id"]
    response = client.post(f"/api/game/{game_id}/move", json={"x": 3, "y": 0})
    assert response.status_code == 400
    assert client.get(f"/api/game/{game_id}").json()["cells"] == [""] * 9


def test_move_needs_exactly_one_target():
    game_id = _new_game()["id"]
    assert client.post(f"/api/game/{game_id}/move", json={}).status_code == 422
    both = {"x": 0, "y": 0, "position": 0}
    assert client.post(f"/api/game/{game_id}/move", json=both).status_code == 422


def test_rejects_unsupported_size():
    response = client.post("/api/game", json={"size": 4})
    assert response.status_code == 422


def test_missing_game_returns_404():
    assert client.get("/api/game/missing").status_code == 404


def test_ai_first_opens_the_game():
    payload = _new_game(aiFirst=True)
    assert payload["currentPlayer"] == "O"
    assert payload["cells"].count("X") == 1
    assert payload["moveLog"][0]["player"] == "X"


def test_full_game_human_never_wins():
    game_id = _new_game()["id"]
    state = client.get(f"/api/game/{game_id}").json()
    while state["status"] == "in_progress":
        position = state["emptyPositions"][0]
        client.post(f"/api/game/{game_id}/move", json={"position": position})
        state = client.get(f"/api/game/{game_id}").json()
    assert state["winner"] != "O"

    finished = client.post(
        f"/api/game/{game_id}/move", json={"position": 0}
    )
    assert finished.status_code == 400
    assert finished.json()["detail"] == "Game already finished"


def test_reset_clears_board():
    game_id = _new_game()["id"]
    client.post(f"/api/game/{game_id}/move", json={"position": 4})
    response = client.post(f"/api/game/{game_id}/reset")
    assert response.status_code == 200
    state = response.json()
    assert state["cells"] == [""] * 9
    assert state["moveLog"] == []
    assert state["currentPlayer"] == "O"


def test_move_rejects_lone_coordinate():
    game_id = _new_game()["id"]
    for body in ({"x": 1, "position": 0}, {"y": 1}, {"x": 1}):
        response = client.post(f"/api/game/{game_id}/move", json=body)
        assert response.status_code == 422
    assert client.get(f"/api/game/{game_id}").json()["cells"] == [""] * 9


def test_idle_games_expire():
    stale_id = _new_game()["id"]
    api.SESSIONS[stale_id].updated_at -= api.SESSION_TTL_SECONDS + 1
    fresh_id = _new_game()["id"]

    assert client.get(f"/api/game/{stale_id}").status_code == 404
    assert client.get(f"/api/game/{fresh_id}").status_code == 200
