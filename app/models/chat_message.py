"""Mensajes del chat de una partida."""
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from datetime import datetime

from app.database import Base


class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id = Column(String, primary_key=True, index=True)
    player_id = Column(String, nullable=False, index=True)
    content = Column(Text, nullable=False)
    sent_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    chat_id = Column(String, ForeignKey("chats.id"), nullable=False, index=True)
