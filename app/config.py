import os

from dotenv import load_dotenv

# Load .env variables
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./lue_lue.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Inserta el elemento en la posición 1 de la lista de claims (comportamiento
# histórico del frontend). Desactivado -> se inserta el último elemento.
CLAIMS_LEGACY_SECOND_SLOT = _env_flag("CLAIMS_LEGACY_SECOND_SLOT", "true")

# Devuelve la lista de jugadores leída antes de borrar en vez de la lista
# reconciliada.
PLAYERS_RETURN_SNAPSHOT = _env_flag("PLAYERS_RETURN_SNAPSHOT", "false")
