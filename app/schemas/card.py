from pydantic import BaseModel, validator
from typing import Optional

from app.enums.card_rank import CardRank


class CardBase(BaseModel):
    id: str
    suit: str
    rank: CardRank
    claim_id: Optional[str] = None
    player_id: Optional[str] = None


class CardCreate(CardBase):
    pass


class CardUpdate(BaseModel):
    """Reasigna el dueño de una carta. Un claim y un jugador se excluyen."""

    id: str
    player_id: Optional[str] = None
    claim_id: Optional[str] = None

    @validator("claim_id")
    def validate_single_owner(cls, v, values):
        if v is not None and values.get("player_id") is not None:
            raise ValueError("A card is owned either by a claim or by a player")
        return v


class CardResponse(CardBase):
    class Config:
        from_attributes = True
