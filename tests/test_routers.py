"""
Tests de los endpoints y de cómo se renderizan los errores del repositorio
"""
import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.crud import chat as chat_crud
from app.database import get_db
from app.errors import DatabaseQueryError
from app.main import app
from app.routers.chats import add_message
from app.routers.games import create_game, delete_game
from app.routers.players import update_player
from app.schemas.game import GameCreate
from app.schemas.player import PlayerUpdate

from factories import BASE_TIME, make_message


@pytest.fixture
def client(override_get_db):
    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_create_game_creates_empty_chat(db: Session):
    game = create_game(GameCreate(id="game-2", started_at=BASE_TIME), db=db)

    assert game.chat is not None
    assert game.chat.game_id == "game-2"
    assert game.chat.number_of_messages == 0
    assert game.players == []
    assert game.claims == []


def test_delete_game_removes_children(db: Session, sample_player):
    chat_crud.add_new_message_to_chat(db, "chat-1", make_message("m1"))

    result = delete_game("game-1", db=db)

    assert result == {"message": "Game deleted successfully"}
    with pytest.raises(DatabaseQueryError):
        chat_crud.get_chat(db, chat_id="chat-1")


def test_update_player_rejects_id_mismatch(db: Session, sample_player):
    with pytest.raises(HTTPException) as exc_info:
        update_player("p1", PlayerUpdate(id="p2", score=1), db=db)

    assert exc_info.value.status_code == 400


def test_add_message_rejects_other_chat(db: Session, sample_player):
    with pytest.raises(HTTPException) as exc_info:
        add_message("chat-1", make_message("m1", chat_id="chat-2"), db=db)

    assert exc_info.value.status_code == 400


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to Lue Lue API"}


def test_get_missing_game_renders_query_error(client, sample_game):
    response = client.get("/api/game/missing")

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "DatabaseQueryError"
    assert body["message"] == "Game not found"
    assert body["received_data"] is None


def test_remove_message_from_empty_chat_renders_process_error(client, sample_game):
    response = client.delete("/api/chats/chat-1/messages/m1")

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "ProcessError"
    assert body["origin"] == "chat.remove_message_from_chat"
    assert body["context"] == {"chat_id": "chat-1", "message_id": "m1"}


def test_update_game_endpoint(client, sample_player):
    payload = {
        "id": "game-1",
        "state": 1,
        "players": [
            {
                "id": "p1",
                "name": "P1",
                "game_id": "game-1",
                "joined_at": BASE_TIME.isoformat(),
            },
            {
                "id": "p2",
                "name": "P2",
                "game_id": "game-1",
                "joined_at": BASE_TIME.isoformat(),
            },
        ],
        "claims": [],
        "chat": {"id": "chat-1", "game_id": "game-1", "number_of_messages": 0, "messages": []},
    }

    response = client.put("/api/game/update", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["state"] == 1
    assert sorted(p["id"] for p in body["players"]) == ["p1", "p2"]
    assert body["claims"] == []
    assert body["chat"]["id"] == "chat-1"


def test_update_game_with_empty_players_is_bad_request(client, sample_player):
    payload = {
        "id": "game-1",
        "players": [],
        "claims": [],
        "chat": {"id": "chat-1", "game_id": "game-1", "number_of_messages": 0},
    }

    response = client.put("/api/game/update", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "DatabaseQueryError"


def test_list_players_of_game(client, sample_player):
    response = client.get("/api/players/", params={"game_id": "game-1"})

    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == ["p1"]
