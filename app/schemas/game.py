from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from app.enums.card_rank import CardRank
from app.enums.game_state import GameState
from app.schemas.chat import ChatResponse, ChatUpdate
from app.schemas.claim import ClaimCreate, ClaimResponse
from app.schemas.player import PlayerCreate, PlayerResponse


class GameBase(BaseModel):
    id: str
    started_at: datetime
    round_number: int = 0
    state: GameState = GameState.WAITING_FOR_PLAYERS
    which_player_turn: Optional[str] = None
    card_to_play: CardRank = CardRank.ACE


class GameCreate(GameBase):
    pass


class GameUpdate(BaseModel):
    """Actualización parcial de una partida.

    Los campos escalares ausentes no se tocan. ``players``, ``claims`` y
    ``chat`` describen el estado final deseado de cada colección.
    """

    id: str
    state: Optional[GameState] = None
    round_number: Optional[int] = None
    card_to_play: Optional[CardRank] = None
    which_player_turn: Optional[str] = None
    players: Optional[List[PlayerCreate]] = None
    claims: Optional[List[ClaimCreate]] = None
    chat: Optional[ChatUpdate] = None


class GameResponse(GameBase):
    players: List[PlayerResponse] = []
    claims: List[ClaimResponse] = []
    chat: Optional[ChatResponse] = None

    class Config:
        from_attributes = True
