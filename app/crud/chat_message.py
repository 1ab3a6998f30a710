"""CRUD para los mensajes del chat de una partida.

No mantiene el contador ``chats.number_of_messages``; eso lo hace
``app.crud.chat``, que es quien debe usarse para agregar o quitar mensajes de
un chat existente.
"""
from collections import defaultdict
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import update, delete

from app.errors import DatabaseQueryError, database_errors
from app.models.chat_message import ChatMessage
from app.schemas.chat import ChatMessageCreate, ChatMessageUpdate, ChatMessageResponse


def save_message(db: Session, message: ChatMessageCreate) -> ChatMessageResponse:
    db_message = ChatMessage(**message.model_dump())
    with database_errors(db, message):
        db.add(db_message)
        db.commit()
        db.refresh(db_message)
    return ChatMessageResponse.model_validate(db_message)


def get_message_by_id(db: Session, message_id: str) -> ChatMessageResponse:
    with database_errors(db):
        db_message = db.query(ChatMessage).filter(ChatMessage.id == message_id).first()
    if db_message is None:
        raise DatabaseQueryError(
            f"The chat message with the id ['{message_id}'] couldn't be found!",
            None,
            404,
        )
    return ChatMessageResponse.model_validate(db_message)


def get_messages(
    db: Session, chat_id: Optional[str] = None, player_id: Optional[str] = None
) -> List[ChatMessageResponse]:
    """Lista mensajes en orden ascendente por sent_at. El chat_id tiene prioridad."""
    query = db.query(ChatMessage)
    if chat_id is not None:
        query = query.filter(ChatMessage.chat_id == chat_id)
    elif player_id is not None:
        query = query.filter(ChatMessage.player_id == player_id)

    with database_errors(db):
        messages = query.order_by(ChatMessage.sent_at.asc()).all()
    return [ChatMessageResponse.model_validate(m) for m in messages]


def get_all_messages_in_chat(db: Session, chat_id: str) -> List[ChatMessageResponse]:
    return get_messages(db, chat_id=chat_id)


def get_messages_by_chats(
    db: Session, chat_ids: List[str]
) -> Dict[str, List[ChatMessageResponse]]:
    if not chat_ids:
        return {}
    with database_errors(db):
        messages = (
            db.query(ChatMessage)
            .filter(ChatMessage.chat_id.in_(chat_ids))
            .order_by(ChatMessage.sent_at.asc())
            .all()
        )

    grouped: Dict[str, List[ChatMessageResponse]] = defaultdict(list)
    for message in messages:
        grouped[message.chat_id].append(ChatMessageResponse.model_validate(message))
    return grouped


def update_message(db: Session, message: ChatMessageUpdate) -> ChatMessageResponse:
    update_data = message.model_dump(exclude_unset=True, exclude_none=True)
    update_data.pop("id", None)
    if not update_data:
        raise DatabaseQueryError("No message field to update was provided", message, 400)

    stmt = (
        update(ChatMessage)
        .where(ChatMessage.id == message.id)
        .values(**update_data)
        .returning(ChatMessage)
    )
    with database_errors(db, message):
        db_message = db.scalars(stmt).first()
        if db_message is None:
            db.rollback()
            raise DatabaseQueryError("Failed to update chat message in the database", message)
        result = ChatMessageResponse.model_validate(db_message)
        db.commit()
    return result


def delete_message_by_id(
    db: Session, message_id: str, chat_id: Optional[str] = None
) -> ChatMessageResponse:
    """Borra el mensaje (solo si es de ``chat_id``, cuando se indica) y
    devuelve la fila eliminada."""
    stmt = delete(ChatMessage).where(ChatMessage.id == message_id)
    if chat_id is not None:
        stmt = stmt.where(ChatMessage.chat_id == chat_id)
    stmt = stmt.returning(ChatMessage)
    with database_errors(db):
        db_message = db.scalars(stmt).first()
        if db_message is None:
            db.rollback()
            raise DatabaseQueryError("Message not found", None, 404)
        result = ChatMessageResponse.model_validate(db_message)
        db.commit()
    return result


def delete_all_messages_in_chat(db: Session, chat_id: str) -> None:
    with database_errors(db):
        db.execute(delete(ChatMessage).where(ChatMessage.chat_id == chat_id))
        db.commit()


def delete_all_messages(db: Session) -> None:
    with database_errors(db):
        db.execute(delete(ChatMessage))
        db.commit()
