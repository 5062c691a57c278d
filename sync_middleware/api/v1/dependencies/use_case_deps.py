"""
Dependencias para inyeccion de casos de uso.
"""
from fastapi import Depends

from sync_middleware.application.use_cases.record_sync_use_cases import RecordSyncUseCases
from sync_middleware.application.use_cases.snapshot_sync_use_cases import DependencySnapshotUseCases
from sync_middleware.domain.repositories.document_store import IDocumentStore
from sync_middleware.infrastructure.database.session import get_document_store


def get_record_sync_use_cases(
    store: IDocumentStore = Depends(get_document_store)
) -> RecordSyncUseCases:
    """
    Dependencia para obtener los casos de uso de sync plano.

    Args:
        store: Document store del lease del request

    Returns:
        RecordSyncUseCases: Instancia de casos de uso
    """
    return RecordSyncUseCases(store)


def get_snapshot_sync_use_cases(
    store: IDocumentStore = Depends(get_document_store)
) -> DependencySnapshotUseCases:
    """Dependencia para obtener el reconciliador de snapshots."""
    return DependencySnapshotUseCases(store)
