from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from app.schemas.card import CardResponse


class PlayerBase(BaseModel):
    name: str
    game_id: str


class PlayerCreate(PlayerBase):
    id: str
    joined_at: datetime
    score: int = 0
    last_time_update_requested: Optional[datetime] = None


class PlayerUpdate(BaseModel):
    id: str
    name: Optional[str] = None
    score: Optional[int] = None
    last_time_update_requested: Optional[datetime] = None


class PlayerResponse(PlayerCreate):
    assigned_cards: List[CardResponse] = []

    class Config:
        from_attributes = True
