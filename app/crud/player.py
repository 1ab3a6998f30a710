from sqlalchemy.orm import Session
from sqlalchemy import update, delete
from typing import Dict, List, Optional
import logging

from app.crud import card as card_crud
from app.errors import DatabaseQueryError, database_errors
from app.models.player import Player
from app.schemas.player import PlayerCreate, PlayerUpdate, PlayerResponse

logger = logging.getLogger(__name__)


def add_player(db: Session, player: PlayerCreate) -> PlayerResponse:
    db_player = Player(**player.model_dump())
    with database_errors(db, player):
        db.add(db_player)
        db.commit()
        db.refresh(db_player)
    return PlayerResponse.model_validate(db_player)


def get_player(db: Session, player_id: str) -> PlayerResponse:
    with database_errors(db):
        db_player = db.query(Player).filter(Player.id == player_id).first()
    if db_player is None:
        raise DatabaseQueryError("Player not found", None, 404)

    player = PlayerResponse.model_validate(db_player)
    player.assigned_cards = card_crud.get_cards(db, player_id=player.id)
    return player


def _with_cards(db: Session, db_players: List[Player]) -> List[PlayerResponse]:
    players = [PlayerResponse.model_validate(p) for p in db_players]
    cards = card_crud.get_cards_by_players(db, [p.id for p in players])
    for player in players:
        player.assigned_cards = cards.get(player.id, [])
    return players


def get_players(db: Session, game_id: Optional[str] = None) -> List[PlayerResponse]:
    """Jugadores (de una partida si se indica game_id) con sus cartas asignadas."""
    query = db.query(Player)
    if game_id is not None:
        query = query.filter(Player.game_id == game_id)

    with database_errors(db):
        db_players = query.order_by(Player.joined_at.asc()).all()
    return _with_cards(db, db_players)


def get_players_by_games(
    db: Session, game_ids: List[str]
) -> Dict[str, List[PlayerResponse]]:
    if not game_ids:
        return {}
    with database_errors(db):
        db_players = (
            db.query(Player)
            .filter(Player.game_id.in_(game_ids))
            .order_by(Player.joined_at.asc())
            .all()
        )

    grouped: Dict[str, List[PlayerResponse]] = {}
    for player in _with_cards(db, db_players):
        grouped.setdefault(player.game_id, []).append(player)
    return grouped


def update_player(db: Session, player: PlayerUpdate) -> PlayerResponse:
    update_data = player.model_dump(exclude_unset=True, exclude_none=True)
    update_data.pop("id", None)
    if not update_data:
        raise DatabaseQueryError("No player field to update was provided", player, 400)

    stmt = (
        update(Player)
        .where(Player.id == player.id)
        .values(**update_data)
        .returning(Player)
    )
    with database_errors(db, player):
        db_player = db.scalars(stmt).first()
        if db_player is None:
            db.rollback()
            raise DatabaseQueryError("Failed to update player in the database", player)
        result = PlayerResponse.model_validate(db_player)
        db.commit()

    result.assigned_cards = card_crud.get_cards(db, player_id=result.id)
    return result


def delete_player(db: Session, player_id: str) -> None:
    # las cartas del jugador quedan sin dueño antes de borrarlo
    card_crud.release_cards(db, player_id=player_id)
    with database_errors(db):
        db.execute(delete(Player).where(Player.id == player_id))
        db.commit()
    logger.debug(f"Jugador {player_id} eliminado")


def delete_all_players_of_game(db: Session, game_id: str) -> None:
    for player in get_players(db, game_id=game_id):
        delete_player(db, player.id)
