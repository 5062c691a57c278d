"""
Normalización de colecciones anidadas (dependientes de un snapshot).

Orden de salida: cada id conserva la posición de su PRIMERA aparición
(semántica de inserción de dict) con el contenido de su ÚLTIMA aparición.
Las entradas sin id se mantienen en su posición original, sin deduplicar.
Solo se procesa un nivel: el contenido de cada entrada se guarda tal cual.
"""
from __future__ import annotations

from typing import Any

from loguru import logger

from sync_middleware.domain.entities.records import Identity
from sync_middleware.domain.services.identity import extract_dependency_id


def deduplicate_dependents(dependents: Any) -> list[Any]:
    """
    Colapsa los dependientes a una entrada por memberDependencyId.

    Args:
        dependents: Secuencia de sub-registros (cualquier otra cosa -> [])

    Returns:
        list: Dependientes sin duplicados, last-write-wins
    """
    if not isinstance(dependents, list):
        return []

    slots: list[Any] = []
    position_by_id: dict[Identity, int] = {}

    for dependent in dependents:
        dependency_id = extract_dependency_id(dependent)
        if dependency_id is None:
            slots.append(dependent)
            continue

        position = position_by_id.get(dependency_id)
        if position is None:
            position_by_id[dependency_id] = len(slots)
            slots.append(dependent)
        else:
            slots[position] = dependent

    dropped = len(dependents) - len(slots)
    if dropped:
        logger.debug(f"Dependientes duplicados descartados: {dropped}")

    return slots
