"""
Excepciones de la capa de persistencia (MongoDB).

El core no reintenta: estas excepciones se propagan hasta el handler HTTP.
"""
from typing import Optional

from sync_middleware.shared.exceptions.base import AppException


class PersistenceException(AppException):
    """Excepción base para fallos del document store."""

    def __init__(self, message: str, error_code: str = "PERSISTENCE_ERROR", collection: Optional[str] = None):
        details = {"collection": collection} if collection else None
        super().__init__(
            message=message,
            status_code=500,
            error_code=error_code,
            details=details
        )


class StoreConnectionException(PersistenceException):
    """El store no es alcanzable o no está configurado."""

    def __init__(self, message: str, collection: Optional[str] = None):
        super().__init__(message, error_code="STORE_CONNECTION_ERROR", collection=collection)


class StoreWriteException(PersistenceException):
    """
    Una operación de escritura falló en el store.

    No distingue "nada aplicado" de "aplicado parcialmente": el cliente no
    puede asumir semántica todo-o-nada.
    """

    def __init__(self, message: str, collection: Optional[str] = None):
        super().__init__(message, error_code="STORE_WRITE_ERROR", collection=collection)
