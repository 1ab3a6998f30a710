"""Constructores de datos de prueba"""
from datetime import datetime, timedelta

from app.schemas.chat import ChatMessageCreate, ChatUpdate
from app.schemas.claim import ClaimCreate
from app.schemas.player import PlayerCreate

BASE_TIME = datetime(2026, 1, 10, 18, 0, 0)


def make_player(player_id, game_id="game-1", name=None, minutes=0):
    return PlayerCreate(
        id=player_id,
        name=name or player_id.upper(),
        game_id=game_id,
        joined_at=BASE_TIME + timedelta(minutes=minutes),
    )


def make_message(message_id, chat_id="chat-1", player_id="p1", content=None, minutes=0):
    return ChatMessageCreate(
        id=message_id,
        player_id=player_id,
        content=content or f"mensaje {message_id}",
        sent_at=BASE_TIME + timedelta(minutes=minutes),
        chat_id=chat_id,
    )


def make_claim(claim_id, game_id="game-1", created_by="p1", cards=None):
    cards = cards or []
    return ClaimCreate(
        id=claim_id,
        created_by=created_by,
        game_id=game_id,
        number_of_cards=len(cards),
        cards=cards,
    )


def make_chat(messages, chat_id="chat-1", game_id="game-1", number_of_messages=None):
    return ChatUpdate(
        id=chat_id,
        game_id=game_id,
        number_of_messages=len(messages) if number_of_messages is None else number_of_messages,
        messages=messages,
    )
