from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.crud import claim as crud
from app.schemas.claim import ClaimResponse, ClaimCreate

router = APIRouter(tags=["claims"])


@router.post("/", response_model=ClaimResponse)
def create_claim(claim: ClaimCreate, db: Session = Depends(get_db)):
    return crud.create_claim(db=db, claim=claim)


@router.get("/", response_model=List[ClaimResponse])
def read_claims(
    game_id: Optional[str] = None,
    player_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return crud.get_claims(db, game_id=game_id, player_id=player_id)


@router.get("/{claim_id}", response_model=ClaimResponse)
def read_claim(claim_id: str, db: Session = Depends(get_db)):
    return crud.get_claim_by_id(db, claim_id=claim_id)


@router.delete("/{claim_id}")
def delete_claim(claim_id: str, db: Session = Depends(get_db)):
    crud.get_claim_by_id(db, claim_id=claim_id)
    crud.delete_claim(db=db, claim_id=claim_id)
    return {"message": "Claim deleted successfully"}
