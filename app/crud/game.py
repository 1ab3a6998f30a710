"""CRUD del agregado Game.

Una partida se guarda en ``games`` y sus colecciones (jugadores, claims y chat)
viven en sus propias tablas. Las lecturas arman el agregado consultando cada
repositorio; ``update_game`` reconcilia cada colección con el estado deseado
que trae el ``GameUpdate``.

No hay transacción que abarque los pasos: cada sentencia hace commit por su
cuenta, así que un error a mitad de camino deja aplicados los pasos previos.
"""
from sqlalchemy.orm import Session
from sqlalchemy import update, delete
from typing import List, Optional
import logging

from app import config
from app.crud import chat as chat_crud
from app.crud import chat_message as chat_message_crud
from app.crud import claim as claim_crud
from app.crud import player as player_crud
from app.errors import DatabaseQueryError, ProcessError, RepositoryError, database_errors
from app.models.game import Game
from app.schemas.chat import ChatResponse
from app.schemas.claim import ClaimResponse
from app.schemas.game import GameCreate, GameUpdate, GameResponse
from app.schemas.player import PlayerResponse

logger = logging.getLogger(__name__)

# Columnas de ``games`` que se pueden modificar con un GameUpdate
SCALAR_FIELDS = ("state", "round_number", "card_to_play", "which_player_turn")


def create_game(db: Session, game: GameCreate) -> GameResponse:
    db_game = Game(**game.model_dump())
    with database_errors(db, game):
        db.add(db_game)
        db.commit()
        db.refresh(db_game)
    logger.info(f"Partida {db_game.id} creada")
    return GameResponse.model_validate(db_game)


def _chat_or_none(db: Session, game_id: str) -> Optional[ChatResponse]:
    try:
        return chat_crud.get_chat(db, game_id=game_id)
    except DatabaseQueryError as e:
        if e.status_code != 404:
            raise
        return None


def get_game_by_id(db: Session, game_id: str) -> GameResponse:
    with database_errors(db):
        db_game = db.query(Game).filter(Game.id == game_id).first()
    if db_game is None:
        raise DatabaseQueryError("Game not found", None, 404)

    game = GameResponse.model_validate(db_game)
    game.chat = _chat_or_none(db, game.id)
    game.players = player_crud.get_players(db, game_id=game.id)
    game.claims = claim_crud.get_claims(db, game_id=game.id)
    return game


def get_all_games(db: Session) -> List[GameResponse]:
    """Todas las partidas con sus colecciones, una consulta por tipo de hijo."""
    with database_errors(db):
        db_games = db.query(Game).order_by(Game.started_at.asc()).all()

    games = [GameResponse.model_validate(g) for g in db_games]
    game_ids = [g.id for g in games]

    chats = chat_crud.get_chats_by_games(db, game_ids)
    players = player_crud.get_players_by_games(db, game_ids)
    claims = claim_crud.get_claims_by_games(db, game_ids)

    for game in games:
        game.chat = chats.get(game.id)
        game.players = players.get(game.id, [])
        game.claims = claims.get(game.id, [])
    return games


def delete_game(db: Session, game_id: str) -> None:
    """Borra la partida y, antes, todo lo que cuelga de ella."""
    chat = _chat_or_none(db, game_id)
    if chat is not None:
        chat_message_crud.delete_all_messages_in_chat(db, chat.id)
        chat_crud.delete_chat(db, game_id=game_id)

    claim_crud.delete_all_claims_of_game(db, game_id)
    player_crud.delete_all_players_of_game(db, game_id)

    with database_errors(db):
        db.execute(delete(Game).where(Game.id == game_id))
        db.commit()
    logger.info(f"Partida {game_id} eliminada")


def _update_game_row(db: Session, game_data: GameUpdate) -> GameResponse:
    update_data = {
        field: value
        for field, value in game_data.model_dump(include=set(SCALAR_FIELDS)).items()
        if value is not None
    }

    with database_errors(db, game_data):
        if update_data:
            stmt = (
                update(Game)
                .where(Game.id == game_data.id)
                .values(**update_data)
                .returning(Game)
            )
            db_game = db.scalars(stmt).first()
        else:
            db_game = db.query(Game).filter(Game.id == game_data.id).first()

        if db_game is None:
            db.rollback()
            raise DatabaseQueryError("Failed to update game in the database", game_data)
        result = GameResponse.model_validate(db_game)
        db.commit()
    return result


def update_game(
    db: Session,
    game_data: GameUpdate,
    legacy_claim_slot: Optional[bool] = None,
    return_player_snapshot: Optional[bool] = None,
) -> GameResponse:
    """
    Actualiza la partida y reconcilia jugadores, claims y chat, en ese orden.

    Args:
        db: Sesión de base de datos
        game_data: Campos escalares a cambiar y estado deseado de cada colección
        legacy_claim_slot: Ver ``update_claims_of_game`` (default: config)
        return_player_snapshot: Ver ``update_players_in_game`` (default: config)

    Returns:
        GameResponse: La partida con las tres colecciones reconciliadas
    """
    updated_game = _update_game_row(db, game_data)

    updated_game.players = update_players_in_game(
        db, game_data, return_snapshot=return_player_snapshot
    )
    updated_game.claims = update_claims_of_game(
        db, game_data, legacy_second_slot=legacy_claim_slot
    )
    updated_game.chat = update_chat_of_game(db, game_data)

    logger.info(f"Partida {game_data.id} actualizada")
    return updated_game


def update_players_in_game(
    db: Session, game_data: GameUpdate, return_snapshot: Optional[bool] = None
) -> List[PlayerResponse]:
    """
    Borra los jugadores que ya no están en la lista deseada y agrega los nuevos.
    Los que están en ambas listas no se modifican.

    Con ``return_snapshot`` devuelve la lista leída antes de borrar; si no,
    vuelve a leer los jugadores de la partida.
    """
    if return_snapshot is None:
        return_snapshot = config.PLAYERS_RETURN_SNAPSHOT

    if game_data.players is None:
        raise ProcessError(
            "Function was called with invalid data passed to it! A new list of players is mandatory!",
            "game.update_players_in_game",
        )
    if len(game_data.players) == 0:
        raise DatabaseQueryError(
            "An empty list of players was provided! That's an invalid data input!",
            None,
            400,
        )
    foreign_ids = [p.id for p in game_data.players if p.game_id != game_data.id]
    if foreign_ids:
        raise DatabaseQueryError(
            f"The players {foreign_ids} don't belong to the game ['{game_data.id}']!",
            game_data.players,
            400,
        )

    current_players = player_crud.get_players(db, game_id=game_data.id)
    current_ids = {p.id for p in current_players}
    desired_ids = {p.id for p in game_data.players}

    for player in current_players:
        if player.id not in desired_ids:
            player_crud.delete_player(db, player.id)

    for player in game_data.players:
        if player.id not in current_ids:
            player_crud.add_player(db, player)

    logger.debug(
        f"Partida {game_data.id}: jugadores eliminados={sorted(current_ids - desired_ids)} "
        f"agregados={sorted(desired_ids - current_ids)}"
    )

    if return_snapshot:
        return current_players
    return player_crud.get_players(db, game_id=game_data.id)


def update_claims_of_game(
    db: Session, game_data: GameUpdate, legacy_second_slot: Optional[bool] = None
) -> List[ClaimResponse]:
    """
    Lista vacía: se borran todos los claims de la partida.
    Lista con elementos: se inserta un solo claim. En modo compatible
    (``legacy_second_slot``) es el de la posición 1, como lo envía el frontend
    actual; si no, el último. El resto de la lista no se sincroniza.

    Siempre devuelve los claims guardados de la partida.
    """
    if legacy_second_slot is None:
        legacy_second_slot = config.CLAIMS_LEGACY_SECOND_SLOT

    if game_data.claims is None:
        raise ProcessError(
            "Function was called with invalid data passed to it! A new list of claims is mandatory!",
            "game.update_claims_of_game",
        )

    if len(game_data.claims) == 0:
        claim_crud.delete_all_claims_of_game(db, game_data.id)
    else:
        if legacy_second_slot:
            # TODO: confirmar con producto si debe ser el último claim agregado
            if len(game_data.claims) < 2:
                raise ProcessError(
                    f"Claim index 1 is out of bounds for a list of {len(game_data.claims)} claim(s)!",
                    "game.update_claims_of_game",
                    game_data.claims,
                )
            new_claim = game_data.claims[1]
        else:
            new_claim = game_data.claims[-1]
        if new_claim.game_id != game_data.id:
            raise DatabaseQueryError(
                f"The claim ['{new_claim.id}'] doesn't belong to the game ['{game_data.id}']!",
                new_claim,
                400,
            )
        claim_crud.create_claim(db, new_claim)

    return claim_crud.get_claims(db, game_id=game_data.id)


def update_chat_of_game(db: Session, game_data: GameUpdate) -> ChatResponse:
    """
    Reconcilia los mensajes del chat con la lista deseada (por id): borra los
    que sobran y guarda los nuevos. Devuelve el chat tal como llegó.

    El chat tiene que ser el de la partida y todos los mensajes deseados tienen
    que pertenecer a ese chat; si no, no se toca nada. Si un paso falla a mitad
    de camino, el contador se reescribe con la cantidad real de filas.
    """
    if game_data.chat is None:
        raise ProcessError(
            "Function was called with invalid data passed to it! A new chat object is mandatory!",
            "game.update_chat_of_game",
        )

    chat = game_data.chat
    if chat.game_id != game_data.id:
        raise DatabaseQueryError(
            f"The chat ['{chat.id}'] belongs to the game ['{chat.game_id}'], not to ['{game_data.id}']!",
            chat,
            400,
        )
    foreign_ids = [m.id for m in chat.messages if m.chat_id != chat.id]
    if foreign_ids:
        raise DatabaseQueryError(
            f"The messages {foreign_ids} don't belong to the chat ['{chat.id}']!",
            chat,
            400,
        )

    stored_chat = chat_crud.get_chat(db, game_id=game_data.id)
    if stored_chat.id != chat.id:
        raise DatabaseQueryError(
            f"The game ['{game_data.id}'] has the chat ['{stored_chat.id}'], not ['{chat.id}']!",
            chat,
            400,
        )

    result = ChatResponse.model_validate(chat.model_dump())

    try:
        if chat.number_of_messages == 0:
            chat_message_crud.delete_all_messages_in_chat(db, chat.id)
            chat_crud.update_number_of_messages_of_chat(db, 0, chat_id=chat.id)
            return result

        current_ids = {m.id for m in stored_chat.messages}
        desired_ids = {m.id for m in chat.messages}

        removed_ids = [m.id for m in stored_chat.messages if m.id not in desired_ids]
        new_messages = [m for m in chat.messages if m.id not in current_ids]

        for message_id in removed_ids:
            chat_message_crud.delete_message_by_id(db, message_id, chat_id=chat.id)
        for message in new_messages:
            chat_message_crud.save_message(db, message)

        if removed_ids or new_messages:
            chat_crud.update_number_of_messages_of_chat(db, len(chat.messages), chat_id=chat.id)
    except RepositoryError:
        logger.warning(
            f"Falló la reconciliación del chat {chat.id}, se resincroniza el contador"
        )
        chat_crud.resync_number_of_messages(db, chat.id)
        raise

    return result
