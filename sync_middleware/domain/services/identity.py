"""
Extracción de identidades de los registros entrantes.

Funciones puras, sin I/O. Una identidad ausente, nula o vacía se reporta
como None: el registro queda fuera del conjunto de operaciones, pero no
hace fallar al lote completo.
"""
from __future__ import annotations

from typing import Any, Optional

from sync_middleware.domain.entities.records import (
    DEPENDENCY_ID_FIELD,
    PARENT_FIELD,
    PARENT_ID_FIELD,
    Identity,
)


def normalize_identity(value: Any) -> Optional[Identity]:
    """
    Retorna el valor si es una identidad utilizable, o None.

    Se aceptan strings no vacíos (tal cual, sin recortar) y enteros
    distintos de 0 (bool excluido).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, int):
        return value or None
    return None


def extract_identity(record: Any, field: str) -> Optional[Identity]:
    """Identidad de un registro plano leída desde `field`."""
    if not isinstance(record, dict):
        return None
    return normalize_identity(record.get(field))


def extract_version_id(record: Any, field: str = "promptVersionId") -> Optional[Identity]:
    return extract_identity(record, field)


def extract_parent_id(record: Any) -> Optional[Identity]:
    """Identidad de un snapshot jerárquico: parentMember.parentMemberId."""
    if not isinstance(record, dict):
        return None
    return extract_identity(record.get(PARENT_FIELD), PARENT_ID_FIELD)


def extract_dependency_id(dependent: Any) -> Optional[Identity]:
    return extract_identity(dependent, DEPENDENCY_ID_FIELD)
