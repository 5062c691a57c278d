"""
Caso de uso: reconciliación de snapshots de dependencias de miembros.

Cada llamada redefine la membresía completa de la colección: al terminar,
el conjunto de parentMemberId almacenados es exactamente el del lote.

Protocolo en dos pasos, NO atómico:
1. _upsert_phase: un replace-por-parentMemberId por registro, en un batch.
2. _delete_phase: borra todo documento cuyo parentMemberId no esté en el lote.

Si el paso 1 falla, el paso 2 no se ejecuta y el error se propaga.
Dos reconciliaciones concurrentes sobre la misma colección pueden
intercalar sus pasos; el caller debe serializarlas si necesita el snapshot exacto.
"""
from datetime import datetime
from typing import Any, Callable, List, Optional, Sequence, Tuple

from loguru import logger

from sync_middleware.application.dto.sync_dto import SnapshotSyncResultDTO
from sync_middleware.application.services.batch_validation import require_non_empty_batch
from sync_middleware.core.config import settings
from sync_middleware.domain.entities import DependencySnapshot, Identity, KeyFilter, UpsertOperation
from sync_middleware.domain.entities.records import DEPENDENTS_FIELD, PARENT_FIELD, PARENT_ID_FIELD
from sync_middleware.domain.repositories.document_store import IDocumentStore
from sync_middleware.domain.services.deduplication import deduplicate_dependents
from sync_middleware.domain.services.identity import extract_parent_id
from sync_middleware.shared.exceptions.domain import MissingIdentityException
from sync_middleware.shared.utils.datetime_utils import DateTimeUtils

EMPTY_SNAPSHOT_MESSAGE = "Payload must be a non-empty array"


def collect_parent_ids(payload: Sequence[Any]) -> Tuple[Identity, ...]:
    """Identidades padre presentes en el lote, sin repetir y en orden."""
    ids = (extract_parent_id(record) for record in payload)
    return tuple(dict.fromkeys(i for i in ids if i is not None))


def build_snapshots(payload: Sequence[Any], synced_at: datetime) -> List[DependencySnapshot]:
    """Snapshots normalizados; los registros sin parentMemberId se omiten."""
    snapshots = []
    for record in payload:
        parent_id = extract_parent_id(record)
        if parent_id is None:
            continue
        snapshots.append(
            DependencySnapshot(
                parent_id=parent_id,
                parent=record[PARENT_FIELD],
                dependents=deduplicate_dependents(record.get(DEPENDENTS_FIELD)),
                last_synced_at=synced_at,
            )
        )
    return snapshots


class DependencySnapshotUseCases:
    """
    Reconciliador de snapshots jerárquicos.

    Uso:
        use_cases = DependencySnapshotUseCases(store)
        result = await use_cases.reconcile(payload)
    """

    def __init__(
        self,
        store: IDocumentStore,
        collection: Optional[str] = None,
        clock: Callable[[], datetime] = DateTimeUtils.now_utc,
    ):
        self.store = store
        self.collection = collection or settings.MEMBER_DEPENDENCIES_COLLECTION
        self.clock = clock

    async def reconcile(self, payload: Any) -> SnapshotSyncResultDTO:
        """
        Sincroniza la colección para que refleje exactamente el lote.

        Raises:
            EmptyPayloadException: lote vacío o no-lista (sin llamadas al store)
            MissingIdentityException: ningún parentMemberId resoluble (sin llamadas al store)
        """
        batch = require_non_empty_batch(payload, EMPTY_SNAPSHOT_MESSAGE)

        parent_ids = collect_parent_ids(batch)
        if not parent_ids:
            raise MissingIdentityException(PARENT_ID_FIELD)

        snapshots = build_snapshots(batch, synced_at=self.clock())
        skipped = len(batch) - len(snapshots)
        if skipped:
            logger.warning(f"[{self.collection}] {skipped} registro(s) sin {PARENT_ID_FIELD}; se omiten del upsert")

        upserted = await self._upsert_phase(snapshots)
        deleted = await self._delete_phase(parent_ids)

        logger.info(f"[{self.collection}] Snapshot sync: upserted={upserted}, deleted={deleted}")
        return SnapshotSyncResultDTO(
            message="Member dependency snapshot sync completed",
            upserted=upserted,
            deleted=deleted,
        )

    async def _upsert_phase(self, snapshots: Sequence[DependencySnapshot]) -> int:
        operations = [
            UpsertOperation(key_field=PARENT_ID_FIELD, key=snapshot.parent_id, document=snapshot.to_document())
            for snapshot in snapshots
        ]
        if operations:
            await self.store.batch_write(self.collection, operations)
        return len(operations)

    async def _delete_phase(self, parent_ids: Tuple[Identity, ...]) -> int:
        """Elimina los documentos cuyo parentMemberId no vino en el lote."""
        key_filter = KeyFilter(field=PARENT_ID_FIELD, keys=parent_ids, exclude=True)
        deleted = await self.store.delete_many(self.collection, key_filter)
        logger.info(f"[{self.collection}] Documentos fuera del snapshot eliminados: {deleted}")
        return deleted
