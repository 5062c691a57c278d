"""
Entidades de dominio: registros sincronizados desde el sistema origen.

Cada registro se modela como un sobre tipado {identidad, payload opaco}:
la lógica de identidad (dedup, diff) trabaja sobre la identidad, mientras
que los campos arbitrarios del caller viajan sin validar hasta el store.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

Identity = Union[str, int]

# Campos del documento de snapshot de dependencias (formato de cable original)
PARENT_ID_FIELD = "parentMemberId"
PARENT_FIELD = "parentMember"
DEPENDENTS_FIELD = "dependentMembers"
DEPENDENCY_ID_FIELD = "memberDependencyId"
LAST_SYNCED_AT_FIELD = "lastSyncedAt"


@dataclass(frozen=True)
class VersionedRecord:
    """
    Registro versionado (sync plano).

    El documento se almacena tal cual; solo se retira `_id` porque es
    inmutable en MongoDB y el slot lo decide la identidad.
    """

    identity: Identity
    payload: Dict[str, Any]

    def to_document(self) -> Dict[str, Any]:
        return {k: v for k, v in self.payload.items() if k != "_id"}


@dataclass(frozen=True)
class DependencySnapshot:
    """
    Snapshot jerárquico de un miembro padre y sus dependientes.

    `dependents` ya debe venir normalizado (sin duplicados por id).
    """

    parent_id: Identity
    parent: Any
    dependents: List[Any] = field(default_factory=list)
    last_synced_at: Optional[datetime] = None

    def to_document(self) -> Dict[str, Any]:
        """Documento completo que reemplaza al almacenado para `parent_id`."""
        return {
            PARENT_ID_FIELD: self.parent_id,
            PARENT_FIELD: self.parent,
            DEPENDENTS_FIELD: list(self.dependents),
            LAST_SYNCED_AT_FIELD: self.last_synced_at,
        }
