"""Errores de la capa de persistencia.

Solo existen dos tipos concretos: ``DatabaseQueryError`` (fallo o resultado
vacío de una consulta) y ``ProcessError`` (una operación violó sus propias
invariantes). Ambos heredan de ``RepositoryError`` y llevan el código HTTP con
el que se renderizan.
"""
import logging
from contextlib import contextmanager
from typing import Any, Optional

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def _serialize(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, list):
        return [_serialize(item) for item in data]
    return data


class RepositoryError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        raise NotImplementedError


class DatabaseQueryError(RepositoryError):
    """Fallo de una consulta.

    Args:
        message: Descripción del error
        received_data: Eco opcional del payload que causó el error
        status_code: 404 si la fila no existe, 400 si los filtros son
            inválidos, 500 si falló el motor
    """

    def __init__(
        self,
        message: str,
        received_data: Any = None,
        status_code: int = 500,
    ):
        super().__init__(message)
        self.received_data = received_data
        self.status_code = status_code

    def __str__(self) -> str:
        return f"Database query failed! Error: {self.message}"

    def to_dict(self) -> dict:
        return {
            "error": "DatabaseQueryError",
            "message": self.message,
            "received_data": _serialize(self.received_data),
            "status_code": self.status_code,
        }


class ProcessError(RepositoryError):
    """Una operación detectó una inconsistencia (contador negativo, campo
    obligatorio ausente, etc.)."""

    status_code = 500

    def __init__(self, message: str, origin: str, context: Any = None):
        super().__init__(message)
        self.origin = origin
        self.context = context

    def __str__(self) -> str:
        return f"Process '{self.origin}' failed! Error: {self.message}"

    def to_dict(self) -> dict:
        return {
            "error": "ProcessError",
            "message": self.message,
            "origin": self.origin,
            "context": _serialize(self.context),
            "status_code": self.status_code,
        }


@contextmanager
def database_errors(db: Session, received_data: Any = None):
    """Convierte cualquier SQLAlchemyError en DatabaseQueryError (500)."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error ejecutando consulta: {e}")
        raise DatabaseQueryError(str(e), received_data) from e
