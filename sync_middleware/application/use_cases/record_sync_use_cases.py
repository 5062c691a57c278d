"""
Casos de uso para la sincronización plana de registros versionados.

- UPSERT: un insert-or-replace por identidad, enviado como un único batch.
  Es aditivo: nunca borra.
- DELETE: elimina los documentos cuyas identidades llegan en el lote.
"""
from typing import Any, List, Optional, Sequence

from loguru import logger

from sync_middleware.application.dto.sync_dto import RecordSyncResultDTO
from sync_middleware.application.services.batch_validation import require_non_empty_batch
from sync_middleware.core.config import settings
from sync_middleware.domain.entities import KeyFilter, UpsertOperation, VersionedRecord
from sync_middleware.domain.repositories.document_store import IDocumentStore
from sync_middleware.domain.services.identity import extract_version_id


def collect_versioned_records(payload: Sequence[Any], identity_field: str) -> List[VersionedRecord]:
    """Envuelve los registros con identidad válida; el resto se descarta."""
    records = []
    for raw in payload:
        identity = extract_version_id(raw, identity_field)
        if identity is None:
            continue
        records.append(VersionedRecord(identity=identity, payload=raw))
    return records


def build_upsert_operations(records: Sequence[VersionedRecord], identity_field: str) -> List[UpsertOperation]:
    return [
        UpsertOperation(key_field=identity_field, key=record.identity, document=record.to_document())
        for record in records
    ]


class RecordSyncUseCases:
    """
    Casos de uso de sincronización plana.
    La colección destino (dominio) la decide el caller.
    """

    def __init__(self, store: IDocumentStore, identity_field: Optional[str] = None):
        self.store = store
        self.identity_field = identity_field or settings.VERSION_ID_FIELD

    async def upsert_records(self, payload: Any, domain: str) -> RecordSyncResultDTO:
        """
        Upsert idempotente de un lote de registros.

        Args:
            payload: Lote recibido (debe ser una lista no vacía)
            domain: Colección destino

        Returns:
            RecordSyncResultDTO: count = operaciones enviadas al store
        """
        batch = require_non_empty_batch(payload)

        records = collect_versioned_records(batch, self.identity_field)
        skipped = len(batch) - len(records)
        if skipped:
            logger.warning(f"[{domain}] {skipped} registro(s) sin {self.identity_field}; se omiten")

        operations = build_upsert_operations(records, self.identity_field)
        if operations:
            await self.store.batch_write(domain, operations)

        logger.info(f"[{domain}] UPSERT completado: {len(operations)} registro(s)")
        return RecordSyncResultDTO(message="UPSERT completed", domain=domain, count=len(operations))

    async def delete_records(self, payload: Any, domain: str) -> RecordSyncResultDTO:
        """
        Elimina los documentos cuyas identidades vienen en el lote.

        Returns:
            RecordSyncResultDTO: count = identidades solicitadas para borrar
        """
        batch = require_non_empty_batch(payload)

        ids = [record.identity for record in collect_versioned_records(batch, self.identity_field)]
        if ids:
            key_filter = KeyFilter(field=self.identity_field, keys=tuple(ids), exclude=False)
            deleted = await self.store.delete_many(domain, key_filter)
            logger.info(f"[{domain}] DELETE: {deleted} documento(s) eliminados de {len(ids)} solicitados")

        return RecordSyncResultDTO(message="DELETE completed", domain=domain, count=len(ids))
