from app.models.game import Game
from app.models.player import Player
from app.models.chat import Chat
from app.models.chat_message import ChatMessage
from app.models.claim import Claim
from app.models.card import Card

# This makes the models directory a Python package and ensures all models are loaded
