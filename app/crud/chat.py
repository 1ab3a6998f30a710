"""CRUD para el chat de una partida.

El chat guarda ``number_of_messages`` en su propia tabla, separado de las filas
de ``chat_messages``. Toda operación que agrega o quita mensajes actualiza
primero el contador y después los mensajes; si el segundo paso falla, el
contador se vuelve a escribir con su valor anterior.
"""
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import update, delete
import logging

from app.crud import chat_message as chat_message_crud
from app.errors import DatabaseQueryError, ProcessError, RepositoryError, database_errors
from app.models.chat import Chat
from app.schemas.chat import ChatCreate, ChatMessageCreate, ChatMessageResponse, ChatResponse

logger = logging.getLogger(__name__)


def create_chat(db: Session, chat: ChatCreate) -> ChatResponse:
    db_chat = Chat(**chat.model_dump())
    with database_errors(db, chat):
        db.add(db_chat)
        db.commit()
        db.refresh(db_chat)
    return ChatResponse.model_validate(db_chat)


def get_chat(
    db: Session, chat_id: Optional[str] = None, game_id: Optional[str] = None
) -> ChatResponse:
    """Chat con sus mensajes. Si llegan ambos ids se busca por game_id."""
    query = db.query(Chat)
    if game_id is not None:
        query = query.filter(Chat.game_id == game_id)
    elif chat_id is not None:
        query = query.filter(Chat.id == chat_id)
    else:
        raise DatabaseQueryError(
            "Either pass the 'chat_id' or 'game_id' argument to fetch a chat!", None, 400
        )

    with database_errors(db):
        db_chat = query.first()
    if db_chat is None:
        raise DatabaseQueryError(
            f"Couldn't find a chat with a game id {game_id!r} or id {chat_id!r}!",
            None,
            404,
        )

    chat = ChatResponse.model_validate(db_chat)
    chat.messages = chat_message_crud.get_all_messages_in_chat(db, chat.id)
    return chat


def get_chats_by_games(db: Session, game_ids: List[str]) -> Dict[str, ChatResponse]:
    if not game_ids:
        return {}
    with database_errors(db):
        db_chats = db.query(Chat).filter(Chat.game_id.in_(game_ids)).all()

    chats = [ChatResponse.model_validate(c) for c in db_chats]
    messages = chat_message_crud.get_messages_by_chats(db, [c.id for c in chats])
    for chat in chats:
        chat.messages = messages.get(chat.id, [])
    return {chat.game_id: chat for chat in chats}


def delete_chat(
    db: Session, chat_id: Optional[str] = None, game_id: Optional[str] = None
) -> None:
    if game_id is not None:
        stmt = delete(Chat).where(Chat.game_id == game_id)
    elif chat_id is not None:
        stmt = delete(Chat).where(Chat.id == chat_id)
    else:
        raise DatabaseQueryError(
            "An invalid function input was passed to 'delete_chat'! Either pass the "
            "'chat_id' or 'game_id' argument after which a chat will be deleted!",
            None,
            400,
        )

    with database_errors(db):
        db.execute(stmt)
        db.commit()


def get_number_of_messages_of_chat(
    db: Session, game_id: Optional[str] = None, chat_id: Optional[str] = None
) -> int:
    query = db.query(Chat.number_of_messages)
    if game_id is not None:
        query = query.filter(Chat.game_id == game_id)
    elif chat_id is not None:
        query = query.filter(Chat.id == chat_id)
    else:
        raise ProcessError(
            "Invalid data input! At least provide one argument like 'game_id' or 'chat_id'!",
            "chat.get_number_of_messages_of_chat",
        )

    with database_errors(db):
        row = query.first()
    if row is None:
        raise DatabaseQueryError(
            f"The chat with the id {chat_id!r} / game id {game_id!r} couldn't be found!",
            None,
            404,
        )
    return row[0]


def update_number_of_messages_of_chat(
    db: Session,
    number_of_messages: int,
    chat_id: Optional[str] = None,
    game_id: Optional[str] = None,
) -> int:
    """Escribe el contador y devuelve el valor que retorna la base."""
    stmt = update(Chat).values(number_of_messages=number_of_messages)
    if game_id is not None:
        stmt = stmt.where(Chat.game_id == game_id)
    elif chat_id is not None:
        stmt = stmt.where(Chat.id == chat_id)
    else:
        raise ProcessError(
            "An invalid data input was passed! At least pass either 'chat_id' or 'game_id'!",
            "chat.update_number_of_messages_of_chat",
        )

    with database_errors(db):
        new_number = db.scalars(stmt.returning(Chat.number_of_messages)).first()
        if new_number is None:
            db.rollback()
            raise ProcessError(
                f"The chat (id {chat_id!r}, game id {game_id!r}) couldn't be found, "
                "therefore the 'number_of_messages' couldn't be updated!",
                "chat.update_number_of_messages_of_chat",
            )
        db.commit()
    return new_number


def _restore_counter(db: Session, chat_id: str, previous: int) -> None:
    try:
        update_number_of_messages_of_chat(db, previous, chat_id=chat_id)
    except RepositoryError as e:
        logger.error(
            f"No se pudo restaurar number_of_messages={previous} del chat {chat_id}: {e}"
        )


def resync_number_of_messages(db: Session, chat_id: str) -> None:
    """Reescribe el contador con la cantidad real de filas del chat.

    Se usa cuando una operación de varios pasos falló a mitad de camino y ya no
    se sabe qué valor anterior restaurar.
    """
    try:
        rows = len(chat_message_crud.get_all_messages_in_chat(db, chat_id))
        update_number_of_messages_of_chat(db, rows, chat_id=chat_id)
    except RepositoryError as e:
        logger.error(f"No se pudo resincronizar number_of_messages del chat {chat_id}: {e}")


def add_new_message_to_chat(
    db: Session, chat_id: str, chat_message: ChatMessageCreate
) -> ChatMessageResponse:
    if chat_message.chat_id != chat_id:
        raise DatabaseQueryError(
            f"The message belongs to the chat ['{chat_message.chat_id}'], not to ['{chat_id}']!",
            chat_message,
            400,
        )

    current = get_number_of_messages_of_chat(db, chat_id=chat_id)

    # contador primero: si falla no se inserta nada
    update_number_of_messages_of_chat(db, current + 1, chat_id=chat_id)

    try:
        return chat_message_crud.save_message(db, chat_message)
    except RepositoryError:
        logger.warning(
            f"Fallo al guardar el mensaje {chat_message.id}, se restaura el contador del chat {chat_id}"
        )
        _restore_counter(db, chat_id, current)
        raise


def remove_message_from_chat(
    db: Session, chat_id: str, message_id: str
) -> ChatMessageResponse:
    current = get_number_of_messages_of_chat(db, chat_id=chat_id)
    if current == 0:
        raise ProcessError(
            f"The number of messages of the chat with the id ['{chat_id}'] can't be negative!",
            "chat.remove_message_from_chat",
            {"chat_id": chat_id, "message_id": message_id},
        )

    message = chat_message_crud.get_message_by_id(db, message_id)
    if message.chat_id != chat_id:
        raise DatabaseQueryError(
            f"The chat ['{chat_id}'] has no message with the id ['{message_id}']!",
            None,
            404,
        )

    expected = current - 1
    new_number = update_number_of_messages_of_chat(db, expected, chat_id=chat_id)
    if new_number != expected:
        raise ProcessError(
            "The 'number_of_messages' property hasn't changed after a successful operation!",
            "chat.remove_message_from_chat",
            {"expected": expected, "returned": new_number},
        )

    try:
        return chat_message_crud.delete_message_by_id(db, message_id, chat_id=chat_id)
    except RepositoryError:
        logger.warning(
            f"Fallo al borrar el mensaje {message_id}, se restaura el contador del chat {chat_id}"
        )
        _restore_counter(db, chat_id, current)
        raise
