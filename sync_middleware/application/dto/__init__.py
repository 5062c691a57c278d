"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .sync_dto import (
    RecordSyncResultDTO,
    SnapshotSyncResultDTO,
    ErrorResponseDTO,
    HealthResponseDTO,
)

__all__ = [
    "RecordSyncResultDTO",
    "SnapshotSyncResultDTO",
    "ErrorResponseDTO",
    "HealthResponseDTO",
]
