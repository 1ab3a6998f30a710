from sqlalchemy import Column, Integer, String, ForeignKey

from app.database import Base


class Card(Base):
    __tablename__ = "cards"

    id = Column(String, primary_key=True, index=True)
    suit = Column(String, nullable=False)
    rank = Column(Integer, nullable=False)  # índice de CardRank

    # Dueño exclusivo: o un claim o un jugador
    claim_id = Column(String, ForeignKey("claims.id"), nullable=True, index=True)
    player_id = Column(String, ForeignKey("players.id"), nullable=True, index=True)
