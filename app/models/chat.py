from sqlalchemy import Column, Integer, String, ForeignKey

from app.database import Base


class Chat(Base):
    __tablename__ = "chats"

    id = Column(String, primary_key=True, index=True)
    # Contador desnormalizado: debe coincidir con las filas de chat_messages
    number_of_messages = Column(Integer, default=0, nullable=False)
    game_id = Column(String, ForeignKey("games.id"), nullable=False, unique=True)
