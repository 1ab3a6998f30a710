from sqlalchemy import Column, Integer, String, ForeignKey

from app.database import Base


class Claim(Base):
    __tablename__ = "claims"

    id = Column(String, primary_key=True, index=True)
    created_by = Column(String, nullable=False)  # id del jugador
    game_id = Column(String, ForeignKey("games.id"), nullable=False, index=True)
    number_of_cards = Column(Integer, default=0, nullable=False)

    # Las cartas se enlazan con cards.claim_id
