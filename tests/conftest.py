"""
Configuración compartida para tests pytest
"""
import os
from datetime import timedelta

# Base de datos en memoria también para la app (app.main crea las tablas al importarse)
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db

# Importar todos los modelos para que queden registrados en Base
from app.models.game import Game
from app.models.player import Player
from app.models.chat import Chat
from app.models.chat_message import ChatMessage
from app.models.claim import Claim
from app.models.card import Card

from app.enums.card_rank import CardRank
from app.schemas.card import CardCreate
from app.schemas.chat import ChatCreate
from app.schemas.game import GameCreate

from factories import BASE_TIME, make_player


# Base de datos en memoria para tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    """Crear base de datos de test y limpiarla después"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def override_get_db(db):
    """Override de get_db para tests"""
    def _get_db():
        try:
            yield db
        finally:
            pass
    return _get_db


@pytest.fixture
def sample_game(db):
    """Partida de prueba con su chat vacío"""
    from app.crud import chat as chat_crud
    from app.crud import game as game_crud

    game = game_crud.create_game(
        db, GameCreate(id="game-1", started_at=BASE_TIME, round_number=1)
    )
    chat_crud.create_chat(db, ChatCreate(id="chat-1", game_id=game.id))
    return game


@pytest.fixture
def sample_player(db, sample_game):
    """Jugador P1 de la partida de prueba"""
    from app.crud import player as player_crud

    return player_crud.add_player(db, make_player("p1", game_id=sample_game.id))


@pytest.fixture
def sample_cards(db, sample_player):
    """Tres cartas en la mano de P1"""
    from app.crud import card as card_crud

    return [
        card_crud.create_card(
            db,
            CardCreate(id=f"card-{i}", suit="hearts", rank=rank, player_id=sample_player.id),
        )
        for i, rank in enumerate([CardRank.ACE, CardRank.SEVEN, CardRank.KING])
    ]


@pytest.fixture
def second_game(db, sample_game):
    """Otra partida con su chat (chat-2) y el jugador Q1"""
    from app.crud import chat as chat_crud
    from app.crud import game as game_crud
    from app.crud import player as player_crud

    game = game_crud.create_game(
        db, GameCreate(id="game-2", started_at=BASE_TIME + timedelta(hours=1))
    )
    chat_crud.create_chat(db, ChatCreate(id="chat-2", game_id=game.id))
    player_crud.add_player(db, make_player("q1", game_id=game.id))
    return game
