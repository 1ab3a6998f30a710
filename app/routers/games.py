from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
import uuid

from app.database import get_db
from app.crud import chat as chat_crud
from app.crud import game as crud
from app.schemas.chat import ChatCreate
from app.schemas.game import GameResponse, GameCreate, GameUpdate

router = APIRouter()


@router.post("/", response_model=GameResponse)
def create_game(game: GameCreate, db: Session = Depends(get_db)):
    db_game = crud.create_game(db=db, game=game)
    # toda partida nace con su chat vacío
    chat_crud.create_chat(
        db, ChatCreate(id=str(uuid.uuid4()), game_id=db_game.id, number_of_messages=0)
    )
    return crud.get_game_by_id(db, db_game.id)


@router.get("/", response_model=List[GameResponse])
def read_games(db: Session = Depends(get_db)):
    return crud.get_all_games(db)


@router.get("/{game_id}", response_model=GameResponse)
def read_game(game_id: str, db: Session = Depends(get_db)):
    return crud.get_game_by_id(db, game_id=game_id)


@router.put("/update", response_model=GameResponse)
def update_game(game: GameUpdate, db: Session = Depends(get_db)):
    """
    Actualiza una partida y reconcilia sus jugadores, claims y chat con el
    estado enviado.
    """
    return crud.update_game(db=db, game_data=game)


@router.delete("/{game_id}")
def delete_game(game_id: str, db: Session = Depends(get_db)):
    crud.get_game_by_id(db, game_id=game_id)
    crud.delete_game(db=db, game_id=game_id)
    return {"message": "Game deleted successfully"}
