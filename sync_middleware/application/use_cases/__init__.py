"""
Casos de uso de la aplicacion.
"""
from .record_sync_use_cases import RecordSyncUseCases
from .snapshot_sync_use_cases import DependencySnapshotUseCases

__all__ = ["RecordSyncUseCases", "DependencySnapshotUseCases"]
