from enum import IntEnum


class GameState(IntEnum):
    """Fases de una partida. Se guarda el índice entero (mapeo v1)."""

    WAITING_FOR_PLAYERS = 0
    STARTED = 1
    ROUND_FINISHED = 2
    FINISHED = 3
