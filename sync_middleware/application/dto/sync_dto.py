"""
DTOs de respuesta de los endpoints de sincronización.

Los nombres de campo replican el contrato que ya consumen los flujos de
Salesforce, por eso no siguen snake_case en todos los casos.
"""
from pydantic import BaseModel, Field


class RecordSyncResultDTO(BaseModel):
    """Resultado de un UPSERT o DELETE plano sobre una colección."""

    message: str
    domain: str
    count: int = Field(..., ge=0, description="Registros con identidad válida enviados al store")


class SnapshotSyncResultDTO(BaseModel):
    """Resultado de una reconciliación de snapshot."""

    message: str
    upserted: int = Field(..., ge=0, description="Operaciones de upsert enviadas")
    deleted: int = Field(..., ge=0, description="Documentos eliminados por no estar en el lote")


class ErrorResponseDTO(BaseModel):
    """Cuerpo de cualquier respuesta de error."""

    error: str


class HealthResponseDTO(BaseModel):
    status: str = "ok"
