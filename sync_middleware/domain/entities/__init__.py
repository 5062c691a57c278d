"""
Entidades del dominio.
"""
from sync_middleware.domain.entities.records import (
    Identity,
    VersionedRecord,
    DependencySnapshot,
)
from sync_middleware.domain.entities.store_operations import (
    UpsertOperation,
    KeyFilter,
    BulkWriteSummary,
)

__all__ = [
    "Identity",
    "VersionedRecord",
    "DependencySnapshot",
    "UpsertOperation",
    "KeyFilter",
    "BulkWriteSummary",
]
