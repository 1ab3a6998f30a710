"""
Tests de lectura y borrado del agregado Game
"""
from unittest.mock import patch

import pytest
from sqlalchemy.orm import Session

from app.crud import card as card_crud
from app.crud import chat as chat_crud
from app.crud import chat_message as chat_message_crud
from app.crud import claim as claim_crud
from app.crud import game as game_crud
from app.crud import player as player_crud
from app.enums.game_state import GameState
from app.errors import DatabaseQueryError
from app.schemas.game import GameCreate

from factories import BASE_TIME, make_claim, make_message


def test_get_game_by_id_hydrates_aggregate(db: Session, sample_cards):
    claim_crud.create_claim(db, make_claim("claim-1", cards=[sample_cards[0]]))
    chat_crud.add_new_message_to_chat(db, "chat-1", make_message("m1"))

    game = game_crud.get_game_by_id(db, "game-1")

    assert game.state == GameState.WAITING_FOR_PLAYERS
    assert [p.id for p in game.players] == ["p1"]
    assert sorted(c.id for c in game.players[0].assigned_cards) == ["card-1", "card-2"]
    assert [c.id for c in game.claims] == ["claim-1"]
    assert [c.id for c in game.claims[0].cards] == ["card-0"]
    assert game.chat.id == "chat-1"
    assert [m.id for m in game.chat.messages] == ["m1"]


def test_get_game_by_id_not_found(db: Session, sample_game):
    with pytest.raises(DatabaseQueryError) as exc_info:
        game_crud.get_game_by_id(db, "missing")

    assert exc_info.value.status_code == 404


def test_get_game_without_chat(db: Session):
    game_crud.create_game(db, GameCreate(id="lonely", started_at=BASE_TIME))

    game = game_crud.get_game_by_id(db, "lonely")

    assert game.chat is None
    assert game.players == []


def test_get_all_games_of_empty_table(db: Session):
    assert game_crud.get_all_games(db) == []


def test_get_all_games_groups_children_by_game(db: Session, sample_player, second_game):
    chat_crud.add_new_message_to_chat(db, "chat-1", make_message("m1"))

    games = game_crud.get_all_games(db)

    assert [g.id for g in games] == ["game-1", "game-2"]
    assert [p.id for p in games[0].players] == ["p1"]
    assert [p.id for p in games[1].players] == ["q1"]
    assert [m.id for m in games[0].chat.messages] == ["m1"]
    assert games[1].chat.messages == []


def test_get_all_games_queries_once_per_collection(db: Session, sample_player, second_game):
    with patch.object(
        player_crud, "get_players_by_games", wraps=player_crud.get_players_by_games
    ) as players, patch.object(
        chat_crud, "get_chats_by_games", wraps=chat_crud.get_chats_by_games
    ) as chats, patch.object(
        claim_crud, "get_claims_by_games", wraps=claim_crud.get_claims_by_games
    ) as claims, patch.object(player_crud, "get_players", wraps=player_crud.get_players) as single:
        game_crud.get_all_games(db)

    assert players.call_count == 1
    assert chats.call_count == 1
    assert claims.call_count == 1
    assert single.call_count == 0


def test_delete_game_cascades(db: Session, sample_cards, second_game):
    claim_crud.create_claim(db, make_claim("claim-1", cards=[sample_cards[0]]))
    chat_crud.add_new_message_to_chat(db, "chat-1", make_message("m1"))

    game_crud.delete_game(db, "game-1")

    with pytest.raises(DatabaseQueryError):
        game_crud.get_game_by_id(db, "game-1")
    assert chat_message_crud.get_messages(db, chat_id="chat-1") == []
    assert claim_crud.get_claims(db, game_id="game-1") == []
    assert player_crud.get_players(db, game_id="game-1") == []
    assert card_crud.get_card(db, "card-0").claim_id is None
    # la otra partida no se toca
    assert [p.id for p in game_crud.get_game_by_id(db, "game-2").players] == ["q1"]
