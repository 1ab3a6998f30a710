from collections import defaultdict
from sqlalchemy.orm import Session
from sqlalchemy import update, delete
from typing import Dict, List, Optional

from app.crud import card as card_crud
from app.errors import DatabaseQueryError, database_errors
from app.models.claim import Claim
from app.schemas.card import CardUpdate
from app.schemas.claim import ClaimCreate, ClaimUpdate, ClaimResponse


def _with_cards(db: Session, db_claims: List[Claim]) -> List[ClaimResponse]:
    claims = [ClaimResponse.model_validate(c) for c in db_claims]
    cards = card_crud.get_cards_by_claims(db, [c.id for c in claims])
    for claim in claims:
        claim.cards = cards.get(claim.id, [])
    return claims


def get_claim_by_id(db: Session, claim_id: str) -> ClaimResponse:
    with database_errors(db):
        db_claim = db.query(Claim).filter(Claim.id == claim_id).first()
    if db_claim is None:
        raise DatabaseQueryError(
            f"The claim with the id {claim_id} couldn't be found!", None, 404
        )
    return _with_cards(db, [db_claim])[0]


def get_claims(
    db: Session, game_id: Optional[str] = None, player_id: Optional[str] = None
) -> List[ClaimResponse]:
    """Claims de una partida o creados por un jugador. Gana game_id."""
    query = db.query(Claim)
    if game_id is not None:
        query = query.filter(Claim.game_id == game_id)
    elif player_id is not None:
        query = query.filter(Claim.created_by == player_id)

    with database_errors(db):
        db_claims = query.all()
    return _with_cards(db, db_claims)


def get_claims_by_games(
    db: Session, game_ids: List[str]
) -> Dict[str, List[ClaimResponse]]:
    if not game_ids:
        return {}
    with database_errors(db):
        db_claims = db.query(Claim).filter(Claim.game_id.in_(game_ids)).all()

    grouped: Dict[str, List[ClaimResponse]] = defaultdict(list)
    for claim in _with_cards(db, db_claims):
        grouped[claim.game_id].append(claim)
    return grouped


def create_claim(db: Session, claim: ClaimCreate) -> ClaimResponse:
    """Guarda el claim y le reasigna las cartas que trae (dejan de ser del jugador).

    Las cartas se validan antes de insertar: si alguna no existe no se guarda nada.
    """
    card_ids = [card.id for card in claim.cards]
    found_ids = {card.id for card in card_crud.get_cards_by_ids(db, card_ids)}
    missing_ids = [card_id for card_id in card_ids if card_id not in found_ids]
    if missing_ids:
        raise DatabaseQueryError(
            f"The cards {missing_ids} of the claim ['{claim.id}'] couldn't be found!",
            claim,
            404,
        )

    db_claim = Claim(**claim.model_dump(exclude={"cards"}))
    with database_errors(db, claim):
        db.add(db_claim)
        db.commit()
        db.refresh(db_claim)

    result = ClaimResponse.model_validate(db_claim)
    for card in claim.cards:
        result.cards.append(
            card_crud.update_card(db, CardUpdate(id=card.id, claim_id=claim.id))
        )
    return result


def update_claim(db: Session, claim: ClaimUpdate) -> ClaimResponse:
    update_data = claim.model_dump(exclude_unset=True, exclude_none=True)
    update_data.pop("id", None)
    if not update_data:
        raise DatabaseQueryError("No claim field to update was provided", claim, 400)

    stmt = (
        update(Claim)
        .where(Claim.id == claim.id)
        .values(**update_data)
        .returning(Claim)
    )
    with database_errors(db, claim):
        db_claim = db.scalars(stmt).first()
        if db_claim is None:
            db.rollback()
            raise DatabaseQueryError("Failed to update claim in the database", claim)
        result = ClaimResponse.model_validate(db_claim)
        db.commit()

    result.cards = card_crud.get_cards(db, claim_id=result.id)
    return result


def delete_claim(db: Session, claim_id: str) -> None:
    card_crud.release_cards(db, claim_id=claim_id)
    with database_errors(db):
        db.execute(delete(Claim).where(Claim.id == claim_id))
        db.commit()


def delete_all_claims_of_game(db: Session, game_id: str) -> None:
    with database_errors(db):
        claim_ids = [row[0] for row in db.query(Claim.id).filter(Claim.game_id == game_id)]
    for claim_id in claim_ids:
        card_crud.release_cards(db, claim_id=claim_id)

    with database_errors(db):
        db.execute(delete(Claim).where(Claim.game_id == game_id))
        db.commit()
