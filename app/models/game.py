from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime

from app.database import Base


class Game(Base):
    __tablename__ = "games"

    id = Column(String, primary_key=True, index=True)
    started_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    round_number = Column(Integer, default=0, nullable=False)
    state = Column(Integer, default=0, nullable=False)  # índice de GameState
    which_player_turn = Column(String, nullable=True)  # id del jugador
    card_to_play = Column(Integer, default=0, nullable=False)  # índice de CardRank

    # players, claims y chat se arman al leer (app.crud.game)
