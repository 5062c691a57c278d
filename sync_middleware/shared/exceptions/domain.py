"""
Excepciones relacionadas con la validación de lotes de sincronización.

Se levantan antes de cualquier llamada al store: nunca hay efectos parciales.
"""
from sync_middleware.shared.exceptions.base import AppException


class DomainException(AppException):
    """Excepción base para errores de dominio (errores del cliente)."""

    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details
        )


class EmptyPayloadException(DomainException):
    """El lote recibido está vacío o no es un arreglo."""

    def __init__(self, message: str = "Empty payload"):
        super().__init__(
            message=message,
            error_code="EMPTY_PAYLOAD"
        )


class MissingIdentityException(DomainException):
    """Ningún registro del lote tiene una identidad resoluble."""

    def __init__(self, field: str):
        super().__init__(
            message=f"No valid {field} found in payload",
            error_code="MISSING_IDENTITY",
            details={"field": field}
        )
