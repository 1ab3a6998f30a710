"""
Tests de lectura y borrado del chat y sus mensajes
"""
import pytest
from sqlalchemy.orm import Session

from app.crud import chat as chat_crud
from app.crud import chat_message as chat_message_crud
from app.errors import DatabaseQueryError
from app.schemas.chat import ChatMessageUpdate

from factories import make_message


def test_get_chat_hydrates_messages_in_send_order(db: Session, sample_game):
    chat_crud.add_new_message_to_chat(db, "chat-1", make_message("late", minutes=10))
    chat_crud.add_new_message_to_chat(db, "chat-1", make_message("early", minutes=1))

    chat = chat_crud.get_chat(db, chat_id="chat-1")

    assert chat.number_of_messages == 2
    assert [m.id for m in chat.messages] == ["early", "late"]


def test_get_chat_prefers_game_id(db: Session, sample_game):
    chat = chat_crud.get_chat(db, chat_id="not-used", game_id="game-1")

    assert chat.id == "chat-1"


def test_get_chat_without_filters_is_bad_request(db: Session, sample_game):
    with pytest.raises(DatabaseQueryError) as exc_info:
        chat_crud.get_chat(db)

    assert exc_info.value.status_code == 400


def test_get_chat_not_found(db: Session, sample_game):
    with pytest.raises(DatabaseQueryError) as exc_info:
        chat_crud.get_chat(db, game_id="missing-game")

    assert exc_info.value.status_code == 404


def test_get_chats_by_games_groups_messages(db: Session, sample_game):
    chat_crud.add_new_message_to_chat(db, "chat-1", make_message("m1"))

    chats = chat_crud.get_chats_by_games(db, ["game-1", "missing-game"])

    assert list(chats) == ["game-1"]
    assert [m.id for m in chats["game-1"].messages] == ["m1"]


def test_delete_chat_requires_a_filter(db: Session, sample_game):
    with pytest.raises(DatabaseQueryError) as exc_info:
        chat_crud.delete_chat(db)

    assert exc_info.value.status_code == 400


def test_delete_chat_by_game_id(db: Session, sample_game):
    chat_crud.delete_chat(db, game_id="game-1")

    with pytest.raises(DatabaseQueryError):
        chat_crud.get_chat(db, chat_id="chat-1")


def test_messages_filter_prefers_chat_id(db: Session, sample_game):
    chat_message_crud.save_message(db, make_message("m1", player_id="p1"))
    chat_message_crud.save_message(db, make_message("m2", player_id="p2", minutes=1))

    assert [m.id for m in chat_message_crud.get_messages(db, player_id="p2")] == ["m2"]
    assert [m.id for m in chat_message_crud.get_messages(db, chat_id="chat-1", player_id="p2")] == ["m1", "m2"]


def test_update_message_content(db: Session, sample_game):
    chat_message_crud.save_message(db, make_message("m1", content="hola"))

    updated = chat_message_crud.update_message(db, ChatMessageUpdate(id="m1", content="chau"))

    assert updated.content == "chau"
    assert chat_message_crud.get_message_by_id(db, "m1").content == "chau"


def test_update_message_without_fields_is_bad_request(db: Session, sample_game):
    with pytest.raises(DatabaseQueryError) as exc_info:
        chat_message_crud.update_message(db, ChatMessageUpdate(id="m1"))

    assert exc_info.value.status_code == 400


def test_update_missing_message_is_internal_error(db: Session, sample_game):
    with pytest.raises(DatabaseQueryError) as exc_info:
        chat_message_crud.update_message(db, ChatMessageUpdate(id="missing", content="x"))

    assert exc_info.value.status_code == 500


def test_delete_all_messages(db: Session, sample_game):
    chat_message_crud.save_message(db, make_message("m1"))
    chat_message_crud.save_message(db, make_message("m2", minutes=1))

    chat_message_crud.delete_all_messages(db)

    assert chat_message_crud.get_messages(db) == []
