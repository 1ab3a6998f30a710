from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.crud import player as crud
from app.schemas.player import PlayerResponse, PlayerCreate, PlayerUpdate

router = APIRouter(tags=["players"])


@router.post("/", response_model=PlayerResponse)
def create_player(player: PlayerCreate, db: Session = Depends(get_db)):
    return crud.add_player(db=db, player=player)


@router.get("/", response_model=List[PlayerResponse])
def read_players(game_id: Optional[str] = None, db: Session = Depends(get_db)):
    return crud.get_players(db, game_id=game_id)


@router.get("/{player_id}", response_model=PlayerResponse)
def read_player(player_id: str, db: Session = Depends(get_db)):
    return crud.get_player(db, player_id=player_id)


@router.put("/{player_id}", response_model=PlayerResponse)
def update_player(player_id: str, player: PlayerUpdate, db: Session = Depends(get_db)):
    if player.id != player_id:
        raise HTTPException(status_code=400, detail="Player id mismatch")
    return crud.update_player(db=db, player=player)


@router.delete("/{player_id}")
def delete_player(player_id: str, db: Session = Depends(get_db)):
    crud.get_player(db, player_id=player_id)
    crud.delete_player(db=db, player_id=player_id)
    return {"message": "Player deleted successfully"}
