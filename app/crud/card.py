from collections import defaultdict
from sqlalchemy.orm import Session
from sqlalchemy import update, delete
from typing import Dict, Iterable, List, Optional

from app.errors import DatabaseQueryError, database_errors
from app.models.card import Card
from app.schemas.card import CardCreate, CardUpdate, CardResponse


def create_card(db: Session, card: CardCreate) -> CardResponse:
    db_card = Card(**card.model_dump())
    with database_errors(db, card):
        db.add(db_card)
        db.commit()
        db.refresh(db_card)
    return CardResponse.model_validate(db_card)


def get_card(db: Session, card_id: str) -> CardResponse:
    with database_errors(db):
        db_card = db.query(Card).filter(Card.id == card_id).first()
    if db_card is None:
        raise DatabaseQueryError(
            f"The card with the id ['{card_id}'] couldn't be found!", None, 404
        )
    return CardResponse.model_validate(db_card)


def get_cards(
    db: Session, claim_id: Optional[str] = None, player_id: Optional[str] = None
) -> List[CardResponse]:
    """Cartas de un claim o de un jugador. Si llegan ambos filtros gana el claim."""
    query = db.query(Card)
    if claim_id is not None:
        query = query.filter(Card.claim_id == claim_id)
    elif player_id is not None:
        query = query.filter(Card.player_id == player_id)

    with database_errors(db):
        cards = query.all()
    return [CardResponse.model_validate(card) for card in cards]


def _group_by(cards: Iterable[Card], attribute: str) -> Dict[str, List[CardResponse]]:
    grouped: Dict[str, List[CardResponse]] = defaultdict(list)
    for card in cards:
        grouped[getattr(card, attribute)].append(CardResponse.model_validate(card))
    return grouped


def get_cards_by_ids(db: Session, card_ids: List[str]) -> List[CardResponse]:
    if not card_ids:
        return []
    with database_errors(db):
        cards = db.query(Card).filter(Card.id.in_(card_ids)).all()
    return [CardResponse.model_validate(card) for card in cards]


def get_cards_by_players(
    db: Session, player_ids: List[str]
) -> Dict[str, List[CardResponse]]:
    """Una sola consulta para todas las cartas de varios jugadores."""
    if not player_ids:
        return {}
    with database_errors(db):
        cards = db.query(Card).filter(Card.player_id.in_(player_ids)).all()
    return _group_by(cards, "player_id")


def get_cards_by_claims(
    db: Session, claim_ids: List[str]
) -> Dict[str, List[CardResponse]]:
    if not claim_ids:
        return {}
    with database_errors(db):
        cards = db.query(Card).filter(Card.claim_id.in_(claim_ids)).all()
    return _group_by(cards, "claim_id")


def update_card(db: Session, card: CardUpdate) -> CardResponse:
    """Reasigna el dueño de la carta. El dueño que no se indica queda en NULL."""
    stmt = (
        update(Card)
        .where(Card.id == card.id)
        .values(player_id=card.player_id, claim_id=card.claim_id)
        .returning(Card)
    )
    with database_errors(db, card):
        db_card = db.scalars(stmt).first()
        if db_card is None:
            db.rollback()
            raise DatabaseQueryError("Failed to update card in the database", card)
        result = CardResponse.model_validate(db_card)
        db.commit()
    return result


def release_cards(
    db: Session, claim_id: Optional[str] = None, player_id: Optional[str] = None
) -> None:
    """Deja sin dueño las cartas de un claim o jugador (borrado en cascada manual)."""
    if claim_id is not None:
        stmt = update(Card).where(Card.claim_id == claim_id).values(claim_id=None)
    elif player_id is not None:
        stmt = update(Card).where(Card.player_id == player_id).values(player_id=None)
    else:
        raise DatabaseQueryError(
            "Either 'claim_id' or 'player_id' is needed to release cards!", None, 400
        )

    with database_errors(db):
        db.execute(stmt)
        db.commit()


def delete_card(db: Session, card_id: str) -> None:
    with database_errors(db):
        db.execute(delete(Card).where(Card.id == card_id))
        db.commit()
