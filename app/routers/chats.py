from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.crud import chat as crud
from app.schemas.chat import ChatResponse, ChatMessageCreate, ChatMessageResponse

router = APIRouter(tags=["chats"])


@router.get("/", response_model=ChatResponse)
def read_chat(
    chat_id: Optional[str] = None,
    game_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return crud.get_chat(db, chat_id=chat_id, game_id=game_id)


@router.post("/{chat_id}/messages", response_model=ChatMessageResponse)
def add_message(chat_id: str, message: ChatMessageCreate, db: Session = Depends(get_db)):
    if message.chat_id != chat_id:
        raise HTTPException(status_code=400, detail="Message belongs to another chat")
    return crud.add_new_message_to_chat(db, chat_id=chat_id, chat_message=message)


@router.delete("/{chat_id}/messages/{message_id}", response_model=ChatMessageResponse)
def remove_message(chat_id: str, message_id: str, db: Session = Depends(get_db)):
    return crud.remove_message_from_chat(db, chat_id=chat_id, message_id=message_id)
