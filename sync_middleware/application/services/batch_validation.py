"""
Validación de presencia de los lotes entrantes.

No se valida esquema: solo que el lote sea un arreglo no vacío.
"""
from typing import Any, List

from sync_middleware.shared.exceptions.domain import EmptyPayloadException


def require_non_empty_batch(payload: Any, message: str = "Empty payload") -> List[Any]:
    """
    Verifica que el lote sea una lista con al menos un elemento.

    Raises:
        EmptyPayloadException: si el lote está vacío o no es una lista
    """
    if not isinstance(payload, list) or not payload:
        raise EmptyPayloadException(message)
    return payload
