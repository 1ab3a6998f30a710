from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class ChatMessageBase(BaseModel):
    id: str
    player_id: str
    content: str
    sent_at: datetime
    chat_id: str


class ChatMessageCreate(ChatMessageBase):
    pass


class ChatMessageUpdate(BaseModel):
    id: str
    content: Optional[str] = None


class ChatMessageResponse(ChatMessageBase):
    class Config:
        from_attributes = True


class ChatBase(BaseModel):
    id: str
    game_id: str
    number_of_messages: int = 0


class ChatCreate(ChatBase):
    pass


class ChatUpdate(ChatBase):
    """Estado deseado del chat dentro de una actualización de partida."""

    messages: List[ChatMessageCreate] = []


class ChatResponse(ChatBase):
    messages: List[ChatMessageResponse] = []

    class Config:
        from_attributes = True
