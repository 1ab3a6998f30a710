from pydantic import BaseModel
from typing import Optional, List

from app.schemas.card import CardResponse


class ClaimBase(BaseModel):
    id: str
    created_by: str
    game_id: str
    number_of_cards: int = 0


class ClaimCreate(ClaimBase):
    cards: List[CardResponse] = []


class ClaimUpdate(BaseModel):
    id: str
    created_by: Optional[str] = None
    number_of_cards: Optional[int] = None


class ClaimResponse(ClaimBase):
    cards: List[CardResponse] = []

    class Config:
        from_attributes = True
